from __future__ import annotations

from typing import Any

from .keys import (
    CURRENT_SCHEMA_VERSION,
    KEY_CUSTOM_ADDONS_ACCOUNT,
    KEY_CUSTOM_ADDONS_COLLECTION,
    KEY_NEW_TAB_CONTROL,
    KEY_SCHEMA_VERSION,
    KEY_SHOW_TOP_FRECENT_SITES,
    KEY_STRIP_URL,
    KEY_TAB_TRAY_LAYOUT,
    KEY_THEME,
    KEY_TOOLBAR_POSITION,
    NewTabControl,
    TabTrayLayout,
    Theme,
    ToolbarPosition,
)


def default_theme(follow_system_supported: bool = True) -> Theme:
    return Theme.FOLLOW_SYSTEM if follow_system_supported else Theme.AUTO_BATTERY


def build_default_settings(follow_system_supported: bool = True) -> dict[str, Any]:
    return {
        KEY_THEME: default_theme(follow_system_supported).value,
        KEY_TOOLBAR_POSITION: ToolbarPosition.BOTTOM.value,
        KEY_TAB_TRAY_LAYOUT: TabTrayLayout.SAME_DIRECTION.value,
        KEY_NEW_TAB_CONTROL: NewTabControl.FAB.value,
        KEY_STRIP_URL: True,
        KEY_SHOW_TOP_FRECENT_SITES: False,
        KEY_CUSTOM_ADDONS_ACCOUNT: "",
        KEY_CUSTOM_ADDONS_COLLECTION: "",
        KEY_SCHEMA_VERSION: CURRENT_SCHEMA_VERSION,
    }
