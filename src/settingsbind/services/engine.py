from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from ..app_settings.keys import PreferredColorScheme, Theme
from ..logging_utils import get_logger

_LOGGER = get_logger(__name__)


def preferred_color_scheme(mode: Theme | None, *, system_dark: bool) -> PreferredColorScheme:
    if mode is Theme.DARK:
        return PreferredColorScheme.DARK
    if mode is Theme.LIGHT:
        return PreferredColorScheme.LIGHT
    return PreferredColorScheme.DARK if system_dark else PreferredColorScheme.LIGHT


class EngineSettings(QObject):
    """Rendering engine configuration the customization surface writes into.

    The hosting browser connects ``color_scheme_changed`` and
    ``reload_requested`` to its engine and session use cases.
    """

    color_scheme_changed = Signal(str)
    reload_requested = Signal()

    def __init__(self, preferred: PreferredColorScheme = PreferredColorScheme.LIGHT) -> None:
        super().__init__()
        self._preferred = preferred
        self.reload_count = 0

    @property
    def preferred_color_scheme(self) -> PreferredColorScheme:
        return self._preferred

    @preferred_color_scheme.setter
    def preferred_color_scheme(self, value: PreferredColorScheme) -> None:
        self._preferred = value
        _LOGGER.debug("EngineSettings preferred_color_scheme=%s", value.value)
        self.color_scheme_changed.emit(value.value)

    def reload(self) -> None:
        self.reload_count += 1
        _LOGGER.debug("EngineSettings reload requested count=%d", self.reload_count)
        self.reload_requested.emit()
