from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Optional, Union

from PySide6.QtCore import QObject, Signal

from ..app_settings.coercion import coerce_bool
from ..app_settings.keys import (
    KEY_CUSTOM_ADDONS_ACCOUNT,
    KEY_CUSTOM_ADDONS_COLLECTION,
    KEY_NEW_TAB_CONTROL,
    KEY_SHOW_TOP_FRECENT_SITES,
    KEY_STRIP_URL,
    KEY_TAB_TRAY_LAYOUT,
    KEY_TOOLBAR_POSITION,
    NewTabControl,
    TabTrayLayout,
    Theme,
    ToolbarPosition,
)
from ..app_settings.store import SettingsStore
from ..errors import AppearanceError, NotAMemberError, NotAvailableError, PersistenceError
from ..logging_utils import get_logger
from ..services.appearance import ProcessAppearance, default_appearance
from ..services.capabilities import Capabilities
from ..services.engine import EngineSettings
from ..services.telemetry import LoggingTelemetry, TelemetrySink, toolbar_position_changed
from .exclusive_group import ExclusiveGroup
from .option_binding import EnumChoice, OptionBinding, SwitchBinding, TextBinding
from .theme_selector import ThemeSelector, theme_slots

_LOGGER = get_logger(__name__)

Target = Union[ExclusiveGroup, SwitchBinding, TextBinding]

CATEGORY_GENERAL = "general"
CATEGORY_THEME = "theme"
CATEGORY_TOOLBAR = "toolbar"
CATEGORY_HOME = "home"
CATEGORY_ADDONS = "addons"
CATEGORY_TAB_TRAY = "tab_tray"
CATEGORY_NEW_TAB = "new_tab"


@dataclass(frozen=True)
class ChangeRequest:
    option_id: str
    value: Any = True


@dataclass(frozen=True)
class ApplyResult:
    option_id: str
    changed: bool = False
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CustomizationController(QObject):
    """Owns every group and binding of the customization surface.

    The UI layer calls ``initialize_all()`` each time the surface becomes
    active and routes every user action through ``apply()``.
    """

    ready = Signal()
    setting_committed = Signal(str, object)

    def __init__(
        self,
        store: SettingsStore,
        capabilities: Capabilities | None = None,
        *,
        appearance: ProcessAppearance | None = None,
        engine: EngineSettings | None = None,
        telemetry: TelemetrySink | None = None,
        surface=None,
    ) -> None:
        super().__init__()
        self.store = store
        self.capabilities = capabilities if capabilities is not None else Capabilities.detect()
        self.appearance = appearance if appearance is not None else default_appearance()
        self.engine = engine if engine is not None else EngineSettings()
        self.telemetry = telemetry if telemetry is not None else LoggingTelemetry()
        self._ready = False

        self.theme = ThemeSelector(
            store,
            self.appearance,
            self.engine,
            self.telemetry,
            follow_system_supported=self.capabilities.follow_system_supported,
            surface=surface,
        )
        self.toolbar = ExclusiveGroup(
            "toolbar",
            [
                OptionBinding(
                    store,
                    f"toolbar_{position.value}",
                    EnumChoice(KEY_TOOLBAR_POSITION, position),
                    side_effect=partial(self._track_toolbar_position, position),
                )
                for position in (ToolbarPosition.TOP, ToolbarPosition.BOTTOM)
            ],
        )
        self.tab_tray = ExclusiveGroup(
            "tab_tray",
            [
                OptionBinding(store, f"tab_tray_{layout.value}", EnumChoice(KEY_TAB_TRAY_LAYOUT, layout))
                for layout in (
                    TabTrayLayout.SAME_DIRECTION,
                    TabTrayLayout.OPPOSITE_DIRECTION,
                    TabTrayLayout.ALWAYS_TOP,
                    TabTrayLayout.ALWAYS_BOTTOM,
                )
            ],
        )
        self.new_tab = ExclusiveGroup(
            "new_tab",
            [
                OptionBinding(store, f"new_tab_{control.value}", EnumChoice(KEY_NEW_TAB_CONTROL, control))
                for control in (NewTabControl.FAB, NewTabControl.BAR)
            ],
        )
        self.strip_url = SwitchBinding(store, "strip_url", KEY_STRIP_URL, default=True)
        self.show_top_frecent_sites = SwitchBinding(store, "show_top_frecent_sites", KEY_SHOW_TOP_FRECENT_SITES)
        self.custom_addons_account = TextBinding(store, "custom_addons_account", KEY_CUSTOM_ADDONS_ACCOUNT)
        self.custom_addons_collection = TextBinding(store, "custom_addons_collection", KEY_CUSTOM_ADDONS_COLLECTION)

        self._categories: dict[str, list[Target]] = {
            CATEGORY_GENERAL: [self.strip_url],
            CATEGORY_THEME: [self.theme],
            CATEGORY_TOOLBAR: [self.toolbar],
            CATEGORY_HOME: [self.show_top_frecent_sites],
            CATEGORY_ADDONS: [self.custom_addons_account, self.custom_addons_collection],
            CATEGORY_TAB_TRAY: [self.tab_tray],
            CATEGORY_NEW_TAB: [self.new_tab],
        }
        self._hidden_categories: set[str] = set()
        if not self.capabilities.top_frecent_sites_enabled:
            self._hidden_categories.add(CATEGORY_HOME)
        offered = {theme.value for theme in theme_slots(self.capabilities.follow_system_supported)}
        self._substituted_ids = {theme.value for theme in Theme} - offered

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def hidden_categories(self) -> frozenset[str]:
        return frozenset(self._hidden_categories)

    @property
    def groups(self) -> dict[str, ExclusiveGroup]:
        return {
            target.name: target
            for targets in self._categories.values()
            for target in targets
            if isinstance(target, ExclusiveGroup)
        }

    def initialize_all(self) -> None:
        self._ready = False
        for category, targets in self._categories.items():
            if category in self._hidden_categories:
                _LOGGER.debug("CustomizationController skipping hidden category=%s", category)
                continue
            for target in targets:
                target.initialize()
        self._ready = True
        _LOGGER.debug("CustomizationController ready snapshot=%s", self.snapshot())
        self.ready.emit()

    def apply(self, request: ChangeRequest) -> ApplyResult:
        if not self._ready:
            raise RuntimeError("initialize_all() must complete before apply().")
        option_id = request.option_id
        if not self.is_available(option_id):
            # Unknown ids raise here instead of being reported as unavailable.
            self._lookup(option_id)
            _LOGGER.debug("CustomizationController option not available option=%s", option_id)
            return ApplyResult(option_id, False, NotAvailableError(f"Option '{option_id}' is not available."))
        _category, target = self._lookup(option_id)
        try:
            if isinstance(target, ExclusiveGroup):
                if not coerce_bool(request.value, True):
                    # Group members are only ever activated; a cleared radio is not a request.
                    _LOGGER.debug("CustomizationController ignoring deactivation option=%s", option_id)
                    return ApplyResult(option_id, False)
                changed = target.select(option_id)
            elif isinstance(target, SwitchBinding):
                changed = target.set_value(coerce_bool(request.value, bool(target.value)))
            else:
                changed = target.set_value(request.value)
        except (PersistenceError, AppearanceError) as exc:
            _LOGGER.warning("CustomizationController apply failed option=%s: %s", option_id, exc)
            return ApplyResult(option_id, False, exc)
        if changed:
            self.setting_committed.emit(option_id, self.value(option_id))
        return ApplyResult(option_id, changed)

    def is_available(self, option_id: str) -> bool:
        if option_id in self._substituted_ids:
            return False
        try:
            category, _target = self._lookup(option_id)
        except NotAMemberError:
            return False
        return category not in self._hidden_categories

    def selected(self, group_name: str) -> Optional[str]:
        group = self.groups.get(group_name)
        if group is None:
            raise NotAMemberError(f"Unknown group '{group_name}'.")
        return group.selected_id

    def value(self, option_id: str) -> Any:
        _category, target = self._lookup(option_id)
        if isinstance(target, ExclusiveGroup):
            binding = target.get(option_id)
            return bool(binding is not None and binding.selected)
        return target.value

    def snapshot(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for category, targets in self._categories.items():
            if category in self._hidden_categories:
                continue
            for target in targets:
                if isinstance(target, ExclusiveGroup):
                    out[target.name] = target.selected_id
                else:
                    out[target.option_id] = target.value
        return out

    def _lookup(self, option_id: str) -> tuple[str, Target]:
        for category, targets in self._categories.items():
            for target in targets:
                if isinstance(target, ExclusiveGroup):
                    if option_id in target:
                        return category, target
                elif target.option_id == option_id:
                    return category, target
        if option_id in self._substituted_ids:
            return CATEGORY_THEME, self.theme
        _LOGGER.error("CustomizationController unknown option=%s", option_id)
        raise NotAMemberError(f"Unknown option '{option_id}'.")

    def _track_toolbar_position(self, position: ToolbarPosition) -> None:
        self.telemetry.track(toolbar_position_changed(position.value))
