"""Settings binding and exclusive option groups for a browser customization surface."""

from .errors import AppearanceError, NotAMemberError, NotAvailableError, PersistenceError, SettingsBindError

__all__ = [
    "AppearanceError",
    "NotAMemberError",
    "NotAvailableError",
    "PersistenceError",
    "SettingsBindError",
]
