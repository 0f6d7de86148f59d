from __future__ import annotations

import os
from pathlib import Path


def _app_config_dir() -> Path:
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata) / "settingsbind"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base_dir = Path(xdg) if xdg else (Path.home() / ".config")
    return base_dir / "settingsbind"


def get_settings_file_path() -> Path:
    return _app_config_dir() / "customization.json"


def get_qsettings_file_path() -> Path:
    return _app_config_dir() / "customization.ini"
