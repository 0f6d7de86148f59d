from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from .defaults import build_default_settings
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
    LEGACY_NEW_TAB_KEYS,
    LEGACY_TAB_TRAY_KEYS,
    LEGACY_THEME_KEYS,
    NewTabControl,
    TabTrayLayout,
    Theme,
    ToolbarPosition,
)

E = TypeVar("E", bound=Enum)


def coerce_bool(value, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off", ""}:
            return False
    return default


def coerce_enum(value: object, enum_type: type[E], default: E | None = None) -> E | None:
    if isinstance(value, enum_type):
        return value
    text = str(value or "").strip().lower()
    try:
        return enum_type(text)
    except ValueError:
        return default


def _coerce_int_clamped(value: object, default: int, min_value: int, max_value: int) -> int:
    try:
        num = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        num = default
    return max(min_value, min(max_value, num))


def _coerce_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _first_legacy_choice(settings: dict[str, Any], legacy_keys) -> Enum | None:
    chosen = None
    for key, member in legacy_keys:
        if key not in settings:
            continue
        flagged = coerce_bool(settings.pop(key), False)
        if flagged and chosen is None:
            chosen = member
    return chosen


def migrate_settings(settings: dict, *, follow_system_supported: bool = True) -> dict:
    current = dict(settings)
    defaults = build_default_settings(follow_system_supported=follow_system_supported)
    schema = _coerce_int_clamped(current.get(KEY_SCHEMA_VERSION, 1), 1, 1, 999)

    if schema < CURRENT_SCHEMA_VERSION:
        for key, legacy_keys in (
            (KEY_THEME, LEGACY_THEME_KEYS),
            (KEY_TAB_TRAY_LAYOUT, LEGACY_TAB_TRAY_KEYS),
            (KEY_NEW_TAB_CONTROL, LEGACY_NEW_TAB_KEYS),
        ):
            chosen = _first_legacy_choice(current, legacy_keys)
            if chosen is not None and key not in current:
                current[key] = chosen.value

    for key, value in defaults.items():
        current.setdefault(key, value)

    current[KEY_THEME] = coerce_enum(current.get(KEY_THEME), Theme, Theme(defaults[KEY_THEME])).value
    current[KEY_TOOLBAR_POSITION] = coerce_enum(
        current.get(KEY_TOOLBAR_POSITION), ToolbarPosition, ToolbarPosition(defaults[KEY_TOOLBAR_POSITION])
    ).value
    current[KEY_TAB_TRAY_LAYOUT] = coerce_enum(
        current.get(KEY_TAB_TRAY_LAYOUT), TabTrayLayout, TabTrayLayout(defaults[KEY_TAB_TRAY_LAYOUT])
    ).value
    current[KEY_NEW_TAB_CONTROL] = coerce_enum(
        current.get(KEY_NEW_TAB_CONTROL), NewTabControl, NewTabControl(defaults[KEY_NEW_TAB_CONTROL])
    ).value
    current[KEY_STRIP_URL] = coerce_bool(current.get(KEY_STRIP_URL, True), True)
    current[KEY_SHOW_TOP_FRECENT_SITES] = coerce_bool(current.get(KEY_SHOW_TOP_FRECENT_SITES, False), False)
    current[KEY_CUSTOM_ADDONS_ACCOUNT] = _coerce_text(current.get(KEY_CUSTOM_ADDONS_ACCOUNT))
    current[KEY_CUSTOM_ADDONS_COLLECTION] = _coerce_text(current.get(KEY_CUSTOM_ADDONS_COLLECTION))
    current[KEY_SCHEMA_VERSION] = max(schema, CURRENT_SCHEMA_VERSION)
    return current
