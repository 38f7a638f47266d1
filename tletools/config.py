"""Application configuration loader for tletools."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .core import DEFAULT_STRATEGY, Strategy

__all__ = [
    "FeatureFlags",
    "AppConfig",
    "load_config",
]


@dataclass(frozen=True)
class FeatureFlags:
    """Feature toggles used throughout the application."""

    sgp4_compare: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Container for derived application configuration."""

    data_dir: Path
    decoder: Strategy
    log_level: str
    feature_flags: FeatureFlags

    @property
    def compare_enabled(self) -> bool:
        return self.feature_flags.sgp4_compare


_TRUE_SET = {"1", "true", "yes", "on"}
_FALSE_SET = {"0", "false", "no", "off"}


def _to_bool(value: Optional[str], default: Optional[bool] = None) -> Optional[bool]:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_SET:
        return True
    if lowered in _FALSE_SET:
        return False
    return default


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load configuration from environment variables."""

    env_map: Mapping[str, str]
    if env is None:
        env_map = os.environ
    else:
        env_map = env

    data_dir = Path(env_map.get("TLETOOLS_DATA_DIR", "data")).expanduser()
    decoder = Strategy.from_string(env_map.get("TLETOOLS_DECODER", DEFAULT_STRATEGY.value))
    log_level = env_map.get("TLETOOLS_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    compare = _to_bool(env_map.get("TLETOOLS_FEATURE_SGP4_COMPARE"), default=False)

    return AppConfig(
        data_dir=data_dir,
        decoder=decoder,
        log_level=log_level,
        feature_flags=FeatureFlags(sgp4_compare=bool(compare)),
    )
