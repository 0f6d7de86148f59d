from __future__ import annotations

from typing import Optional

from ..app_settings.keys import KEY_THEME, Theme
from ..app_settings.store import SettingsStore
from ..errors import AppearanceError, PersistenceError
from ..logging_utils import get_logger
from ..services.appearance import ProcessAppearance
from ..services.engine import EngineSettings, preferred_color_scheme
from ..services.telemetry import SOURCE_SETTINGS, TelemetrySink, dark_theme_selected
from .exclusive_group import ExclusiveGroup, Member
from .option_binding import EnumChoice, OnChange, OptionBinding

_LOGGER = get_logger(__name__)


def theme_slots(follow_system_supported: bool) -> tuple[Theme, Theme, Theme]:
    """Group members in declaration order; the third slot depends on the platform."""
    third = Theme.FOLLOW_SYSTEM if follow_system_supported else Theme.AUTO_BATTERY
    return Theme.LIGHT, Theme.DARK, third


class ThemeSelector(ExclusiveGroup):
    """Exclusive theme group that also drives the global appearance mode.

    A successful change commits the appearance mode, asks the surface to
    recreate itself, pushes the derived color scheme to the engine and
    reloads the displayed content. Re-selecting the mode that is already
    active is a no-op.
    """

    def __init__(
        self,
        store: SettingsStore,
        appearance: ProcessAppearance,
        engine: EngineSettings,
        telemetry: TelemetrySink,
        *,
        follow_system_supported: bool,
        surface=None,
        on_change: Optional[OnChange] = None,
    ) -> None:
        super().__init__(
            "theme",
            [
                OptionBinding(store, theme.value, EnumChoice(KEY_THEME, theme), on_change=on_change)
                for theme in theme_slots(follow_system_supported)
            ],
        )
        self.appearance = appearance
        self.engine = engine
        self.telemetry = telemetry
        self.surface = surface
        self.follow_system_supported = follow_system_supported

    @property
    def selected_theme(self) -> Optional[Theme]:
        option_id = self.selected_id
        return Theme(option_id) if option_id is not None else None

    def initialize(self, bindings=None) -> Optional[OptionBinding]:
        winner = super().initialize(bindings)
        if winner is not None:
            return winner
        first = self._bindings[0] if self._bindings else None
        if first is not None and first.store.contains(first.value.key):
            # Stored theme is not offered on this platform; leave nothing selected.
            return None
        current = self.appearance.get_default_mode()
        fallback = self.get(current.value) if current is not None else None
        if fallback is not None:
            fallback.option.selected = True
            _LOGGER.debug("ThemeSelector no stored theme; showing active mode=%s", current.value)
        return fallback

    def select(self, member: Member) -> bool:
        binding = self.resolve(member)
        theme = Theme(binding.option_id)
        previous_mode = self.appearance.get_default_mode()
        if previous_mode == theme:
            _LOGGER.debug("ThemeSelector select no-op mode=%s", theme.value)
            return False

        self.appearance.set_default_mode(theme)
        try:
            super().select(binding)
        except PersistenceError:
            _LOGGER.warning("ThemeSelector persisting %s failed; restoring mode=%s", theme.value, previous_mode)
            try:
                self.appearance.set_default_mode(previous_mode)
            except AppearanceError:
                _LOGGER.exception("ThemeSelector could not restore mode=%s", previous_mode)
            raise

        self._recreate_surface()
        self.engine.preferred_color_scheme = preferred_color_scheme(
            theme, system_dark=self.appearance.system_is_dark()
        )
        self._reload_content()
        if theme is Theme.DARK:
            self.telemetry.track(dark_theme_selected(SOURCE_SETTINGS))
        _LOGGER.info("Theme changed %s -> %s", previous_mode.value if previous_mode else None, theme.value)
        return True

    def _recreate_surface(self) -> None:
        recreate = getattr(self.surface, "recreate", None)
        if recreate is None:
            return
        try:
            recreate()
        except Exception:
            _LOGGER.exception("ThemeSelector surface recreate failed")

    def _reload_content(self) -> None:
        try:
            self.engine.reload()
        except Exception:
            _LOGGER.exception("ThemeSelector content reload failed")
