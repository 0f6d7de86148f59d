from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from PySide6.QtCore import QSettings

from ..errors import PersistenceError
from ..logging_utils import get_logger
from .coercion import coerce_bool, coerce_enum, migrate_settings
from .paths import get_qsettings_file_path, get_settings_file_path

_LOGGER = get_logger(__name__)

E = TypeVar("E", bound=Enum)


def _atomic_write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)
    except OSError:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            _LOGGER.warning("Could not remove temporary settings file %s", tmp)
        raise


class SettingsStore:
    """Typed access to a flat key-value settings backend.

    Subclasses provide ``contains``, ``_read``, ``_write`` and ``snapshot``.
    ``_write`` must either persist the value durably or raise
    ``PersistenceError`` and leave the previously stored value in place.
    """

    def contains(self, key: str) -> bool:
        raise NotImplementedError

    def snapshot(self) -> dict[str, Any]:
        raise NotImplementedError

    def _read(self, key: str) -> Any:
        raise NotImplementedError

    def _write(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def get_bool(self, key: str, default: bool = False) -> bool:
        if not self.contains(key):
            return default
        return coerce_bool(self._read(key), default)

    def set_bool(self, key: str, value: bool) -> None:
        self._write(key, bool(value))

    def get_string(self, key: str, default: str = "") -> str:
        if not self.contains(key):
            return default
        raw = self._read(key)
        return default if raw is None else str(raw)

    def set_string(self, key: str, value: str) -> None:
        self._write(key, str(value))

    def get_enum(self, key: str, enum_type: type[E], default: E | None = None) -> E | None:
        if not self.contains(key):
            return default
        return coerce_enum(self._read(key), enum_type, default)

    def set_enum(self, key: str, value: Enum) -> None:
        self._write(key, value.value)


class MemorySettingsStore(SettingsStore):
    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self.write_count = 0

    def contains(self, key: str) -> bool:
        return key in self._values

    def snapshot(self) -> dict[str, Any]:
        return dict(self._values)

    def _read(self, key: str) -> Any:
        return self._values.get(key)

    def _write(self, key: str, value: Any) -> None:
        self._values[key] = value
        self.write_count += 1


class JsonSettingsStore(SettingsStore):
    """Settings persisted as one JSON document, rewritten atomically per change."""

    def __init__(self, path: Path | None = None, *, follow_system_supported: bool = True) -> None:
        self.path = Path(path) if path is not None else get_settings_file_path()
        self.follow_system_supported = follow_system_supported
        self._values: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        _LOGGER.debug("JsonSettingsStore.load start path=%s", self.path)
        raw: dict[str, Any] = {}
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                _LOGGER.exception("JsonSettingsStore.load failed to parse path=%s", self.path)
                data = {}
            if isinstance(data, dict):
                raw = data
            else:
                _LOGGER.warning("JsonSettingsStore.load ignoring non-object payload path=%s", self.path)
        self._values = migrate_settings(raw, follow_system_supported=self.follow_system_supported)
        _LOGGER.debug("JsonSettingsStore.load complete keys=%d", len(self._values))

    def contains(self, key: str) -> bool:
        return key in self._values

    def snapshot(self) -> dict[str, Any]:
        return dict(self._values)

    def _read(self, key: str) -> Any:
        return self._values.get(key)

    def _write(self, key: str, value: Any) -> None:
        candidate = dict(self._values)
        candidate[key] = value
        try:
            _atomic_write_json(self.path, candidate)
        except OSError as exc:
            _LOGGER.error("JsonSettingsStore write failed key=%s path=%s: %s", key, self.path, exc)
            raise PersistenceError(f"Could not save setting '{key}': {exc}") from exc
        self._values = candidate
        _LOGGER.debug("JsonSettingsStore wrote key=%s path=%s", key, self.path)


class QSettingsStore(SettingsStore):
    """Settings kept in a Qt ``QSettings`` backend (INI file by default)."""

    def __init__(self, settings: QSettings | None = None, *, path: Path | None = None) -> None:
        if settings is None:
            target = Path(path) if path is not None else get_qsettings_file_path()
            settings = QSettings(str(target), QSettings.Format.IniFormat)
        self._settings = settings

    @property
    def qsettings(self) -> QSettings:
        return self._settings

    def contains(self, key: str) -> bool:
        return bool(self._settings.contains(key))

    def snapshot(self) -> dict[str, Any]:
        return {key: self._settings.value(key) for key in self._settings.allKeys()}

    def _read(self, key: str) -> Any:
        return self._settings.value(key)

    def _write(self, key: str, value: Any) -> None:
        had_value = self._settings.contains(key)
        previous = self._settings.value(key) if had_value else None
        self._settings.setValue(key, value)
        self._settings.sync()
        status = self._settings.status()
        if status == QSettings.Status.NoError:
            _LOGGER.debug("QSettingsStore wrote key=%s file=%s", key, self._settings.fileName())
            return
        if had_value:
            self._settings.setValue(key, previous)
        else:
            self._settings.remove(key)
        _LOGGER.error("QSettingsStore write failed key=%s status=%s", key, status)
        raise PersistenceError(f"Could not save setting '{key}' (status={status})")
