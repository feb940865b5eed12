from .settings import (
    CONSISTENCY_MODES,
    SETTINGS_ENV_VAR,
    ReconstructionSettings,
    load_settings,
    resolve_settings_path,
)

__all__ = [
    "CONSISTENCY_MODES",
    "SETTINGS_ENV_VAR",
    "ReconstructionSettings",
    "load_settings",
    "resolve_settings_path",
]
