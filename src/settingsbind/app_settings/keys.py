"""Stored keys and the enumerated values of the customization surface."""

from __future__ import annotations

from enum import Enum


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    FOLLOW_SYSTEM = "follow_system"
    AUTO_BATTERY = "auto_battery"


class ToolbarPosition(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


class TabTrayLayout(str, Enum):
    ALWAYS_TOP = "always_top"
    ALWAYS_BOTTOM = "always_bottom"
    SAME_DIRECTION = "same_direction"
    OPPOSITE_DIRECTION = "opposite_direction"


class NewTabControl(str, Enum):
    FAB = "fab"
    BAR = "bar"


class PreferredColorScheme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


KEY_THEME = "theme"
KEY_TOOLBAR_POSITION = "toolbar_position"
KEY_TAB_TRAY_LAYOUT = "tab_tray_layout"
KEY_NEW_TAB_CONTROL = "new_tab_control"
KEY_STRIP_URL = "strip_url"
KEY_SHOW_TOP_FRECENT_SITES = "show_top_frecent_sites"
KEY_CUSTOM_ADDONS_ACCOUNT = "custom_addons_account"
KEY_CUSTOM_ADDONS_COLLECTION = "custom_addons_collection"
KEY_SCHEMA_VERSION = "settings_schema_version"

CURRENT_SCHEMA_VERSION = 2

# Older builds stored one boolean per radio button. Order matches the
# declaration order of each group.
LEGACY_THEME_KEYS: tuple[tuple[str, Theme], ...] = (
    ("light_theme", Theme.LIGHT),
    ("dark_theme", Theme.DARK),
    ("follow_device_theme", Theme.FOLLOW_SYSTEM),
    ("auto_battery_theme", Theme.AUTO_BATTERY),
)
LEGACY_TAB_TRAY_KEYS: tuple[tuple[str, TabTrayLayout], ...] = (
    ("tab_tray_same_direction", TabTrayLayout.SAME_DIRECTION),
    ("tab_tray_opposite_direction", TabTrayLayout.OPPOSITE_DIRECTION),
    ("tab_tray_always_top", TabTrayLayout.ALWAYS_TOP),
    ("tab_tray_always_bottom", TabTrayLayout.ALWAYS_BOTTOM),
)
LEGACY_NEW_TAB_KEYS: tuple[tuple[str, NewTabControl], ...] = (
    ("tab_tray_new_tab_fab", NewTabControl.FAB),
    ("tab_tray_new_tab_bar", NewTabControl.BAR),
)
