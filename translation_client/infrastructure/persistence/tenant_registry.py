"""Tenant registry backed by the host application's database.

Reads the oldest row of the tenants table. The table and columns are
configurable because host schemas differ; a missing table or any other
database error resolves to None.
"""

from __future__ import annotations

from sqlalchemy import Engine, column, create_engine, select, table
from sqlalchemy.exc import SQLAlchemyError

from translation_client.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class SqlTenantRegistry:
    """First-tenant lookup via SQLAlchemy Core."""

    def __init__(
        self,
        engine: Engine,
        table_name: str = "tenants",
        id_column: str = "uuid",
        order_column: str = "created_at",
    ) -> None:
        self.engine = engine
        self.table_name = table_name
        self.id_column = id_column
        self.order_column = order_column

    @classmethod
    def from_url(cls, database_url: str, **kwargs: str) -> SqlTenantRegistry:
        return cls(create_engine(database_url, pool_pre_ping=True), **kwargs)

    def first_tenant_id(self) -> str | None:
        """Return the id of the first tenant by creation order, or None."""
        tenants = table(self.table_name, column(self.id_column), column(self.order_column))
        stmt = (
            select(tenants.c[self.id_column])
            .order_by(tenants.c[self.order_column])
            .limit(1)
        )
        try:
            with self.engine.connect() as conn:
                value = conn.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning("Tenant registry lookup failed: %s", e)
            return None
        return str(value) if value is not None else None
