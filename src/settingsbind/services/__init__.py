"""External collaborators of the customization surface."""

from .appearance import ProcessAppearance, default_appearance, follow_system_supported
from .capabilities import Capabilities
from .engine import EngineSettings, preferred_color_scheme
from .telemetry import LoggingTelemetry, RecordingTelemetry, TelemetryEvent, TelemetrySink

__all__ = [
    "Capabilities",
    "EngineSettings",
    "LoggingTelemetry",
    "ProcessAppearance",
    "RecordingTelemetry",
    "TelemetryEvent",
    "TelemetrySink",
    "default_appearance",
    "follow_system_supported",
    "preferred_color_scheme",
]
