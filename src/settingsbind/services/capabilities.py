from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from ..app_settings.coercion import coerce_bool
from .appearance import follow_system_supported

TOP_FRECENT_SITES_ENV_VAR = "SETTINGSBIND_TOP_FRECENT_SITES"


@dataclass(frozen=True, slots=True)
class Capabilities:
    follow_system_supported: bool = True
    top_frecent_sites_enabled: bool = False

    @classmethod
    def detect(cls, environ: Mapping[str, str] | None = None) -> "Capabilities":
        env = os.environ if environ is None else environ
        return cls(
            follow_system_supported=follow_system_supported(),
            top_frecent_sites_enabled=coerce_bool(env.get(TOP_FRECENT_SITES_ENV_VAR, ""), False),
        )
