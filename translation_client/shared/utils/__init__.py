"""Small shared helpers (datetime, nested dict manipulation)."""

from translation_client.shared.utils.datetime import utc_now
from translation_client.shared.utils.nested import set_nested_value

__all__ = ["set_nested_value", "utc_now"]
