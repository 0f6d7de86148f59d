"""Bindings between one user-facing control and one stored setting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from ..app_settings.store import SettingsStore
from ..logging_utils import get_logger

_LOGGER = get_logger(__name__)


@dataclass
class Option:
    option_id: str
    selected: bool = False


class StoredValue:
    """How one option maps onto the settings store."""

    key: str

    def read_selected(self, store: SettingsStore) -> bool:
        raise NotImplementedError

    def write_selected(self, store: SettingsStore) -> None:
        raise NotImplementedError

    def write_cleared(self, store: SettingsStore) -> None:
        return


@dataclass(frozen=True)
class EnumChoice(StoredValue):
    """One value of an enum key shared by the whole group."""

    key: str
    value: Enum

    def read_selected(self, store: SettingsStore) -> bool:
        return store.get_enum(self.key, type(self.value), None) == self.value

    def write_selected(self, store: SettingsStore) -> None:
        store.set_enum(self.key, self.value)


@dataclass(frozen=True)
class BoolFlag(StoredValue):
    """Legacy schema: one boolean key per option."""

    key: str

    def read_selected(self, store: SettingsStore) -> bool:
        return store.get_bool(self.key, False)

    def write_selected(self, store: SettingsStore) -> None:
        store.set_bool(self.key, True)

    def write_cleared(self, store: SettingsStore) -> None:
        store.set_bool(self.key, False)


OnChange = Callable[["OptionBinding"], None]
SideEffect = Callable[[], None]


class OptionBinding:
    def __init__(
        self,
        store: SettingsStore,
        option_id: str,
        value: StoredValue,
        *,
        on_change: Optional[OnChange] = None,
        side_effect: Optional[SideEffect] = None,
    ) -> None:
        self.store = store
        self.option = Option(option_id)
        self.value = value
        self.on_change = on_change
        self.side_effect = side_effect

    @property
    def option_id(self) -> str:
        return self.option.option_id

    @property
    def selected(self) -> bool:
        return self.option.selected

    def initialize(self) -> bool:
        self.option.selected = self.value.read_selected(self.store)
        return self.option.selected

    def on_select(self) -> bool:
        """Persist this option as the active one and mark it selected.

        Raises ``PersistenceError`` from the store; the selected flag is only
        set once the write succeeded. Returns True so the owning group knows
        to deselect siblings. Listeners are notified by the group through
        ``notify_change()`` once the siblings are demoted.
        """
        self.value.write_selected(self.store)
        self.option.selected = True
        _LOGGER.debug("OptionBinding.on_select committed option=%s key=%s", self.option_id, self.value.key)
        return True

    def notify_change(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self)
        except Exception:
            _LOGGER.exception("OptionBinding on_change listener failed option=%s", self.option_id)

    def deselect(self, *, persist: bool = False) -> None:
        self.option.selected = False
        if persist and self.value.read_selected(self.store):
            self.value.write_cleared(self.store)

    def run_side_effect(self) -> None:
        if self.side_effect is not None:
            self.side_effect()

    def __repr__(self) -> str:
        return f"OptionBinding({self.option_id!r}, selected={self.option.selected})"


class _ValueBinding:
    def __init__(self, store: SettingsStore, option_id: str, key: str, *, on_change=None) -> None:
        self.store = store
        self.option_id = option_id
        self.key = key
        self.on_change = on_change
        self._value: Any = None

    @property
    def value(self) -> Any:
        return self._value

    def initialize(self) -> Any:
        self._value = self._read()
        return self._value

    def set_value(self, value: Any) -> bool:
        if value == self._value:
            return False
        self._write(value)
        self._value = value
        _LOGGER.debug("%s committed option=%s key=%s", type(self).__name__, self.option_id, self.key)
        if self.on_change is not None:
            self.on_change(self)
        return True

    def _read(self) -> Any:
        raise NotImplementedError

    def _write(self, value: Any) -> None:
        raise NotImplementedError


class SwitchBinding(_ValueBinding):
    def __init__(self, store: SettingsStore, option_id: str, key: str, *, default: bool = False, on_change=None) -> None:
        super().__init__(store, option_id, key, on_change=on_change)
        self.default = default

    def set_value(self, value: Any) -> bool:
        return super().set_value(bool(value))

    def _read(self) -> bool:
        return self.store.get_bool(self.key, self.default)

    def _write(self, value: bool) -> None:
        self.store.set_bool(self.key, value)


class TextBinding(_ValueBinding):
    def __init__(self, store: SettingsStore, option_id: str, key: str, *, default: str = "", on_change=None) -> None:
        super().__init__(store, option_id, key, on_change=on_change)
        self.default = default

    def set_value(self, value: Any) -> bool:
        return super().set_value(str(value if value is not None else "").strip())

    def _read(self) -> str:
        return self.store.get_string(self.key, self.default)

    def _write(self, value: str) -> None:
        self.store.set_string(self.key, value)
