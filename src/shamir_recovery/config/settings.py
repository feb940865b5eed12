"""Reconstruction settings and their file/environment loading."""

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..arith import is_prime
from ..errors import InvalidFieldPrimeError

SETTINGS_ENV_VAR = "SHAMIR_RECOVERY_CONFIG"
CONSISTENCY_MODES = ("alternative", "exhaustive", "off")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ReconstructionSettings:
    metadata_key: str = "keys"
    consistency_check: str = "alternative"
    max_consistency_subsets: int = 64
    field_prime: Optional[int] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.metadata_key:
            raise ValueError("metadata_key cannot be empty")
        if self.consistency_check not in CONSISTENCY_MODES:
            raise ValueError(
                f"Unknown consistency_check '{self.consistency_check}', "
                f"expected one of {', '.join(CONSISTENCY_MODES)}"
            )
        if self.max_consistency_subsets <= 0:
            raise ValueError("max_consistency_subsets must be positive")
        if self.field_prime is not None and not is_prime(self.field_prime):
            raise InvalidFieldPrimeError(self.field_prime)
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level '{self.log_level}'")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ReconstructionSettings":
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ValueError(f"Unknown settings key '{key}'")
        kwargs: Dict[str, Any] = {}
        if "metadata_key" in data:
            kwargs["metadata_key"] = str(data["metadata_key"]).strip()
        if "consistency_check" in data:
            kwargs["consistency_check"] = str(data["consistency_check"]).strip().lower()
        if "max_consistency_subsets" in data:
            kwargs["max_consistency_subsets"] = int(data["max_consistency_subsets"])
        if data.get("field_prime") is not None:
            kwargs["field_prime"] = int(data["field_prime"])
        if "log_level" in data:
            kwargs["log_level"] = str(data["log_level"]).upper()
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ReconstructionSettings":
        path = Path(path)
        text = path.read_text()
        if path.suffix.lower() in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid settings YAML at {path}: {exc}") from exc
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid settings JSON at {path}: {exc}") from exc
        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain an object")
        return cls.from_dict(data)


def resolve_settings_path(path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Explicit path first, then the SHAMIR_RECOVERY_CONFIG environment variable."""
    if path:
        return Path(path)
    env_value = os.getenv(SETTINGS_ENV_VAR)
    if env_value:
        candidate = Path(env_value)
        if not candidate.is_absolute():
            candidate = (Path.cwd() / candidate).resolve()
        return candidate
    return None


def load_settings(path: Optional[Union[str, Path]] = None) -> ReconstructionSettings:
    """
    Load reconstruction settings.

    Returns defaults when no path is given and the environment variable is unset.

    Raises:
        FileNotFoundError: if the resolved file does not exist.
        ValueError: if the file is malformed or holds invalid values.
    """
    resolved = resolve_settings_path(path)
    if resolved is None:
        return ReconstructionSettings()
    if not resolved.exists():
        raise FileNotFoundError(f"Settings file not found: {resolved}")
    return ReconstructionSettings.from_file(resolved)
