"""Stored customization settings: keys, defaults, coercion and stores."""

from .coercion import coerce_bool, coerce_enum, migrate_settings
from .defaults import build_default_settings, default_theme
from .keys import NewTabControl, PreferredColorScheme, TabTrayLayout, Theme, ToolbarPosition
from .paths import get_qsettings_file_path, get_settings_file_path
from .store import JsonSettingsStore, MemorySettingsStore, QSettingsStore, SettingsStore

__all__ = [
    "build_default_settings",
    "coerce_bool",
    "coerce_enum",
    "default_theme",
    "get_qsettings_file_path",
    "get_settings_file_path",
    "migrate_settings",
    "JsonSettingsStore",
    "MemorySettingsStore",
    "NewTabControl",
    "PreferredColorScheme",
    "QSettingsStore",
    "SettingsStore",
    "TabTrayLayout",
    "Theme",
    "ToolbarPosition",
]
