import shutil
import sys
import time
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
if str(ROOT / "tests") not in sys.path:
    sys.path.insert(0, str(ROOT / "tests"))

from PySide6.QtCore import QCoreApplication

from _support import FailingStore, SurfaceStub

from settingsbind.app_settings import JsonSettingsStore, MemorySettingsStore, build_default_settings
from settingsbind.app_settings.keys import PreferredColorScheme, Theme
from settingsbind.errors import NotAMemberError, NotAvailableError, PersistenceError
from settingsbind.services.appearance import ProcessAppearance
from settingsbind.services.capabilities import Capabilities
from settingsbind.services.engine import EngineSettings
from settingsbind.services.telemetry import RecordingTelemetry, TelemetryEvent
from settingsbind.ui.customization_controller import ChangeRequest, CustomizationController


class CustomizationControllerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def _controller(self, store=None, *, follow_system=True, top_sites=False, appearance=None):
        self.store = store if store is not None else MemorySettingsStore(build_default_settings(follow_system))
        self.appearance = appearance or ProcessAppearance()
        self.engine = EngineSettings()
        self.telemetry = RecordingTelemetry()
        self.surface = SurfaceStub()
        return CustomizationController(
            self.store,
            Capabilities(follow_system_supported=follow_system, top_frecent_sites_enabled=top_sites),
            appearance=self.appearance,
            engine=self.engine,
            telemetry=self.telemetry,
            surface=self.surface,
        )

    def test_initialize_all_reports_ready_with_stored_values(self) -> None:
        values = build_default_settings()
        values.update({"theme": "dark", "toolbar_position": "top", "custom_addons_account": "alice"})
        controller = self._controller(MemorySettingsStore(values))
        ready_calls: list[bool] = []
        controller.ready.connect(lambda: ready_calls.append(True))
        self.assertFalse(controller.is_ready)
        controller.initialize_all()
        self.assertTrue(controller.is_ready)
        self.assertEqual(ready_calls, [True])
        self.assertEqual(controller.selected("theme"), "dark")
        self.assertEqual(controller.selected("toolbar"), "toolbar_top")
        self.assertEqual(controller.selected("tab_tray"), "tab_tray_same_direction")
        self.assertEqual(controller.selected("new_tab"), "new_tab_fab")
        self.assertTrue(controller.value("strip_url"))
        self.assertEqual(controller.value("custom_addons_account"), "alice")
        self.assertEqual(self.telemetry.events, [])
        self.assertEqual(self.engine.reload_count, 0)

    def test_apply_before_initialize_is_a_wiring_error(self) -> None:
        controller = self._controller()
        with self.assertRaises(RuntimeError):
            controller.apply(ChangeRequest("dark"))

    def test_unknown_option_raises(self) -> None:
        controller = self._controller()
        controller.initialize_all()
        with self.assertRaises(NotAMemberError):
            controller.apply(ChangeRequest("toolbar_left"))

    def test_hidden_binding_is_not_available_and_store_untouched(self) -> None:
        controller = self._controller(top_sites=False)
        controller.initialize_all()
        before = self.store.snapshot()
        writes = self.store.write_count
        result = controller.apply(ChangeRequest("show_top_frecent_sites", True))
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, NotAvailableError)
        self.assertEqual(self.store.snapshot(), before)
        self.assertEqual(self.store.write_count, writes)
        self.assertNotIn("show_top_frecent_sites", controller.snapshot())
        self.assertIsNone(controller.show_top_frecent_sites.value)

    def test_visible_home_category_when_flag_enabled(self) -> None:
        controller = self._controller(top_sites=True)
        controller.initialize_all()
        self.assertTrue(controller.is_available("show_top_frecent_sites"))
        result = controller.apply(ChangeRequest("show_top_frecent_sites", "yes"))
        self.assertTrue(result.ok)
        self.assertTrue(result.changed)
        self.assertTrue(self.store.get_bool("show_top_frecent_sites"))

    def test_substituted_theme_is_not_available(self) -> None:
        controller = self._controller(follow_system=False)
        controller.initialize_all()
        result = controller.apply(ChangeRequest("follow_system"))
        self.assertIsInstance(result.error, NotAvailableError)
        self.assertIsNone(self.appearance.get_default_mode())

    def test_toolbar_change_tracks_position_once(self) -> None:
        controller = self._controller()
        controller.initialize_all()
        committed: list[tuple] = []
        controller.setting_committed.connect(lambda option_id, value: committed.append((option_id, value)))
        self.assertTrue(controller.apply(ChangeRequest("toolbar_top")).changed)
        self.assertFalse(controller.apply(ChangeRequest("toolbar_top")).changed)
        self.assertEqual(
            self.telemetry.events,
            [TelemetryEvent("toolbar_position_changed", {"position": "top"})],
        )
        self.assertEqual(committed, [("toolbar_top", True)])
        self.assertEqual(self.store.get_string("toolbar_position"), "top")

    def test_persistence_failure_is_returned_not_raised(self) -> None:
        store = FailingStore(build_default_settings(), fail_keys={"new_tab_control", "custom_addons_collection"})
        controller = self._controller(store)
        controller.initialize_all()
        result = controller.apply(ChangeRequest("new_tab_bar"))
        self.assertIsInstance(result.error, PersistenceError)
        self.assertEqual(controller.selected("new_tab"), "new_tab_fab")
        text_result = controller.apply(ChangeRequest("custom_addons_collection", "Privacy"))
        self.assertFalse(text_result.ok)
        self.assertEqual(controller.value("custom_addons_collection"), "")

    def test_theme_end_to_end_without_follow_system(self) -> None:
        controller = self._controller(follow_system=False, appearance=ProcessAppearance(Theme.LIGHT))
        controller.initialize_all()
        self.assertEqual(controller.selected("theme"), "auto_battery")

        result = controller.apply(ChangeRequest("auto_battery"))
        self.assertTrue(result.ok)
        self.assertTrue(result.changed)
        self.assertIs(self.appearance.get_default_mode(), Theme.AUTO_BATTERY)
        self.assertIs(self.engine.preferred_color_scheme, PreferredColorScheme.LIGHT)
        self.assertEqual(self.engine.reload_count, 1)
        self.assertEqual(self.telemetry.events, [])

        result = controller.apply(ChangeRequest("dark"))
        self.assertTrue(result.changed)
        self.assertIs(self.appearance.get_default_mode(), Theme.DARK)
        self.assertEqual(
            self.telemetry.events,
            [TelemetryEvent("dark_theme_selected", {"source": "settings"})],
        )
        self.assertEqual(controller.selected("theme"), "dark")
        self.assertEqual(self.store.get_string("theme"), "dark")

    def test_deactivating_a_group_member_changes_nothing(self) -> None:
        controller = self._controller()
        controller.initialize_all()
        writes = self.store.write_count
        result = controller.apply(ChangeRequest("toolbar_top", False))
        self.assertTrue(result.ok)
        self.assertFalse(result.changed)
        self.assertEqual(controller.selected("toolbar"), "toolbar_bottom")
        self.assertEqual(self.store.write_count, writes)
        self.assertEqual(self.telemetry.events, [])

    def test_tab_tray_selection_is_exclusive(self) -> None:
        controller = self._controller()
        controller.initialize_all()
        controller.apply(ChangeRequest("tab_tray_always_bottom"))
        flags = [
            controller.value(option_id)
            for option_id in (
                "tab_tray_same_direction",
                "tab_tray_opposite_direction",
                "tab_tray_always_top",
                "tab_tray_always_bottom",
            )
        ]
        self.assertEqual(flags, [False, False, False, True])

    def test_reinitialize_reads_json_store_again(self) -> None:
        tmp = ROOT / "tests_tmp" / f"controller_{time.time_ns()}"
        tmp.mkdir(parents=True, exist_ok=True)
        try:
            store = JsonSettingsStore(tmp / "customization.json")
            controller = self._controller(store)
            controller.initialize_all()
            self.assertTrue(controller.apply(ChangeRequest("strip_url", False)).changed)
            other = self._controller(JsonSettingsStore(tmp / "customization.json"))
            other.initialize_all()
            self.assertFalse(other.value("strip_url"))
            self.assertEqual(other.snapshot()["theme"], "follow_system")
        finally:
            shutil.rmtree(tmp, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
