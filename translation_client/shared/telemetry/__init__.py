"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from translation_client.shared.telemetry.logging import (
    ChannelLogger,
    get_channel_logger,
    get_logger,
    setup_logging,
)
from translation_client.shared.telemetry.telemetry import (
    TelemetryConfig,
    setup_from_settings,
)
from translation_client.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "ChannelLogger",
    "TelemetryConfig",
    "add_span_attributes",
    "add_span_event",
    "get_channel_logger",
    "get_logger",
    "setup_from_settings",
    "setup_logging",
    "traced",
]
