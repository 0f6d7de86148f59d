import json
import shutil
import sys
import time
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from PySide6.QtCore import QCoreApplication

from settingsbind.app_settings import JsonSettingsStore, MemorySettingsStore, QSettingsStore
from settingsbind.app_settings.keys import ToolbarPosition, Theme
from settingsbind.errors import PersistenceError


def _tmp_dir(prefix: str) -> Path:
    tmp = ROOT / "tests_tmp" / f"{prefix}_{time.time_ns()}"
    tmp.mkdir(parents=True, exist_ok=True)
    return tmp


class MemorySettingsStoreTests(unittest.TestCase):
    def test_typed_getters_use_defaults_for_missing_keys(self) -> None:
        store = MemorySettingsStore()
        self.assertTrue(store.get_bool("strip_url", True))
        self.assertEqual(store.get_string("custom_addons_account", "x"), "x")
        self.assertIsNone(store.get_enum("theme", Theme))

    def test_enum_values_are_stored_as_text(self) -> None:
        store = MemorySettingsStore()
        store.set_enum("toolbar_position", ToolbarPosition.TOP)
        self.assertEqual(store.snapshot()["toolbar_position"], "top")
        self.assertIs(store.get_enum("toolbar_position", ToolbarPosition), ToolbarPosition.TOP)
        self.assertEqual(store.write_count, 1)

    def test_invalid_stored_enum_reads_as_default(self) -> None:
        store = MemorySettingsStore({"theme": "sepia"})
        self.assertIs(store.get_enum("theme", Theme, Theme.LIGHT), Theme.LIGHT)


class JsonSettingsStoreTests(unittest.TestCase):
    def test_fresh_store_has_defaults_and_persists_writes(self) -> None:
        tmp = _tmp_dir("json_store")
        try:
            path = tmp / "customization.json"
            store = JsonSettingsStore(path)
            self.assertIs(store.get_enum("theme", Theme), Theme.FOLLOW_SYSTEM)
            self.assertFalse(path.exists())
            store.set_enum("theme", Theme.DARK)
            payload = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(payload["theme"], "dark")
            reloaded = JsonSettingsStore(path)
            self.assertIs(reloaded.get_enum("theme", Theme), Theme.DARK)
        finally:
            shutil.rmtree(tmp, ignore_errors=True)

    def test_corrupt_file_falls_back_to_defaults(self) -> None:
        tmp = _tmp_dir("json_store")
        try:
            path = tmp / "customization.json"
            path.write_text("{not json", encoding="utf-8")
            store = JsonSettingsStore(path, follow_system_supported=False)
            self.assertIs(store.get_enum("theme", Theme), Theme.AUTO_BATTERY)
        finally:
            shutil.rmtree(tmp, ignore_errors=True)

    def test_failed_write_raises_and_keeps_previous_value(self) -> None:
        tmp = _tmp_dir("json_store")
        try:
            blocker = tmp / "blocker"
            blocker.write_text("x", encoding="utf-8")
            store = JsonSettingsStore(blocker / "customization.json")
            with self.assertRaises(PersistenceError):
                store.set_bool("strip_url", False)
            self.assertTrue(store.get_bool("strip_url"))
        finally:
            shutil.rmtree(tmp, ignore_errors=True)

    def test_failed_replace_removes_temporary_file(self) -> None:
        tmp = _tmp_dir("json_store")
        try:
            target = tmp / "customization.json"
            target.mkdir()
            (target / "occupied.txt").write_text("x", encoding="utf-8")
            store = JsonSettingsStore(target)
            with self.assertRaises(PersistenceError):
                store.set_bool("strip_url", False)
            self.assertFalse((tmp / "customization.json.tmp").exists())
            self.assertTrue(store.get_bool("strip_url"))
        finally:
            shutil.rmtree(tmp, ignore_errors=True)


class QSettingsStoreTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def test_values_survive_a_new_qsettings_instance(self) -> None:
        tmp = _tmp_dir("qsettings_store")
        try:
            path = tmp / "customization.ini"
            store = QSettingsStore(path=path)
            store.set_bool("strip_url", False)
            store.set_enum("theme", Theme.LIGHT)
            store.set_string("custom_addons_collection", "Extensions")
            del store
            reloaded = QSettingsStore(path=path)
            self.assertFalse(reloaded.get_bool("strip_url", True))
            self.assertIs(reloaded.get_enum("theme", Theme), Theme.LIGHT)
            self.assertEqual(reloaded.get_string("custom_addons_collection"), "Extensions")
            self.assertIn("theme", reloaded.snapshot())
        finally:
            shutil.rmtree(tmp, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
