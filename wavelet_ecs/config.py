"""Engine configuration loaded from TOML.

The configuration file is optional. It is looked up from the
``WAVELET_ECS_CONFIG`` environment variable, an explicit path, then
``wavelet_ecs.toml`` in the current directory or the home directory.
Settings live in the ``[engine]`` table:

    [engine]
    strategy = "auto"        # "auto", "naive" or "fast"
    naive_size_factor = 3
"""

from __future__ import annotations

import os
from typing import Any, Literal, cast

from pydantic import BaseModel, ConfigDict, Field

# TOML loading for Python 3.11+ and older
try:
    import tomllib  # type: ignore[import-not-found, unused-ignore]
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef, unused-ignore]

CONFIG_ENV_VAR = "WAVELET_ECS_CONFIG"
CONFIG_FILENAME = "wavelet_ecs.toml"


class EngineConfig(BaseModel):
    """Settings that steer the transform orchestrator.

    Attributes:
        strategy: 'auto' picks Naive or Inner+Border by image size,
            'naive' always uses the reference kernels, 'fast' always uses
            Inner+Border
        naive_size_factor: Images whose width or height is at most this
            multiple of the longest tap sequence use the Naive kernels
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy: Literal["auto", "naive", "fast"] = "auto"
    naive_size_factor: int = Field(default=3, ge=1)


DEFAULT_CONFIG = EngineConfig()


def resolve_config_path(config_path: str | None = None) -> str | None:
    """Resolve configuration path from env, explicit path, or defaults.

    Returns:
        Path to use, or None when no explicit path was given and no default
        file exists
    """
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return env_config
    if config_path:
        return config_path
    candidates = [
        CONFIG_FILENAME,
        os.path.expanduser(f"~/{CONFIG_FILENAME}"),
    ]
    for candidate in candidates:
        if os.path.exists(candidate):
            return candidate
    return None


def load_config(config_path: str | None = None) -> EngineConfig:
    """Load the engine configuration.

    Args:
        config_path: Path to a TOML file (overridden by WAVELET_ECS_CONFIG)

    Returns:
        Parsed configuration, or the defaults when no file is found

    Raises:
        FileNotFoundError: If an explicitly named file does not exist
        ValueError: If the [engine] table holds invalid settings
    """
    resolved_path = resolve_config_path(config_path)
    if resolved_path is None:
        return DEFAULT_CONFIG
    if not os.path.exists(resolved_path):
        raise FileNotFoundError(
            f"Config file not found at {resolved_path}. "
            f"Set {CONFIG_ENV_VAR} or create {CONFIG_FILENAME}"
        )
    with open(resolved_path, "rb") as f:
        config = cast(dict[str, Any], tomllib.load(f))
    engine_cfg = cast(dict[str, Any], config.get("engine", {}))
    return EngineConfig(**engine_cfg)
