from __future__ import annotations

from dataclasses import dataclass, field

from ..logging_utils import get_logger

_LOGGER = get_logger(__name__)

SOURCE_SETTINGS = "settings"


@dataclass(frozen=True)
class TelemetryEvent:
    name: str
    extras: dict[str, str] = field(default_factory=dict)


def dark_theme_selected(source: str = SOURCE_SETTINGS) -> TelemetryEvent:
    return TelemetryEvent("dark_theme_selected", {"source": source})


def toolbar_position_changed(position: str) -> TelemetryEvent:
    return TelemetryEvent("toolbar_position_changed", {"position": position})


class TelemetrySink:
    """Fire-and-forget event sink. Delivery failures are logged, never raised."""

    def track(self, event: TelemetryEvent) -> None:
        try:
            self._deliver(event)
        except Exception:
            _LOGGER.warning("Telemetry delivery failed event=%s", event.name, exc_info=True)

    def _deliver(self, event: TelemetryEvent) -> None:
        raise NotImplementedError


class LoggingTelemetry(TelemetrySink):
    def _deliver(self, event: TelemetryEvent) -> None:
        _LOGGER.info("telemetry %s %s", event.name, event.extras)


class RecordingTelemetry(TelemetrySink):
    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def _deliver(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.name for event in self.events]
