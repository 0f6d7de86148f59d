"""Process-wide appearance mode, the counterpart of a platform night-mode delegate."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QGuiApplication, QStyleHints

from ..app_settings.keys import Theme
from ..errors import AppearanceError
from ..logging_utils import get_logger

_LOGGER = get_logger(__name__)


def follow_system_supported(hints_type: type = QStyleHints) -> bool:
    # Resetting to the system scheme needs QStyleHints.setColorScheme (Qt 6.8+).
    return hasattr(hints_type, "setColorScheme")


def _gui_style_hints() -> QStyleHints | None:
    app = QGuiApplication.instance()
    if not isinstance(app, QGuiApplication):
        return None
    return QGuiApplication.styleHints()


class ProcessAppearance:
    def __init__(self, initial: Theme | None = None, *, system_dark: bool | None = None) -> None:
        self._mode = initial
        self._system_dark = system_dark

    def get_default_mode(self) -> Theme | None:
        return self._mode

    def set_default_mode(self, mode: Theme | None) -> None:
        _LOGGER.debug("ProcessAppearance.set_default_mode %s -> %s", self._mode, mode)
        self._apply_to_qt(mode)
        self._mode = mode

    def system_is_dark(self) -> bool:
        if self._system_dark is not None:
            return self._system_dark
        hints = _gui_style_hints()
        if hints is None or not hasattr(hints, "colorScheme"):
            return False
        color_scheme = getattr(Qt, "ColorScheme", None)
        if color_scheme is None:
            return False
        return hints.colorScheme() == color_scheme.Dark

    def _apply_to_qt(self, mode: Theme | None) -> None:
        hints = _gui_style_hints()
        setter = getattr(hints, "setColorScheme", None) if hints is not None else None
        color_scheme = getattr(Qt, "ColorScheme", None)
        if setter is None or color_scheme is None:
            return
        if mode is Theme.DARK:
            scheme = color_scheme.Dark
        elif mode is Theme.LIGHT:
            scheme = color_scheme.Light
        else:
            scheme = color_scheme.Unknown
        try:
            setter(scheme)
        except (RuntimeError, TypeError) as exc:
            raise AppearanceError(f"Could not apply appearance mode {mode}: {exc}") from exc


_PROCESS_APPEARANCE: ProcessAppearance | None = None


def default_appearance() -> ProcessAppearance:
    global _PROCESS_APPEARANCE
    if _PROCESS_APPEARANCE is None:
        _PROCESS_APPEARANCE = ProcessAppearance()
    return _PROCESS_APPEARANCE
