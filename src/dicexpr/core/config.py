"""
Configuration for dicexpr tooling.

Settings come from an optional dicexpr.toml, then the environment, then
command-line flags (applied by the CLI):

    [roll]
    seed = 42
    times = 1

    [variables]
    "strength.mod" = 3
    level = 4

The DICEXPR_SEED environment variable overrides the file's seed.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dicexpr.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "dicexpr.toml"

# Environment variable name
DICEXPR_SEED_VAR = "DICEXPR_SEED"


@dataclass
class RollConfig:
    """Effective settings for rolling expressions."""

    seed: int | None = None
    times: int = 1
    variables: dict[str, int] = field(default_factory=dict)


def load_config(path: Path) -> RollConfig:
    """Load a RollConfig from a TOML file.

    Raises:
        ConfigError: If the file is not valid TOML or holds bad values.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e

    roll_data = data.get("roll", {})
    variables_data = data.get("variables", {})

    seed = roll_data.get("seed")
    if seed is not None and not _is_int(seed):
        raise ConfigError(f"{path}: [roll] seed must be an integer, got {seed!r}")

    times = roll_data.get("times", 1)
    if not _is_int(times) or times < 1:
        raise ConfigError(f"{path}: [roll] times must be a positive integer, got {times!r}")

    variables: dict[str, int] = {}
    for name, value in variables_data.items():
        if not _is_int(value):
            raise ConfigError(f"{path}: variable {name!r} must be an integer, got {value!r}")
        variables[name] = value

    logger.debug("Loaded %s: seed=%s times=%d variables=%d", path, seed, times, len(variables))
    return RollConfig(seed=seed, times=times, variables=variables)


def find_config(start: Path | None = None) -> Path | None:
    """Return dicexpr.toml in ``start`` (default: cwd) if it exists."""
    candidate = (start or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def get_env_seed() -> int | None:
    """Read DICEXPR_SEED.

    Returns:
        The seed, or None when unset. Non-integer values are ignored with a
        warning.
    """
    raw = os.environ.get(DICEXPR_SEED_VAR, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s value '%s'", DICEXPR_SEED_VAR, raw)
        return None


def resolve_config(path: Path | None = None) -> RollConfig:
    """Load the file config (explicit path or discovered) and apply the environment."""
    config_path = path or find_config()
    config = load_config(config_path) if config_path else RollConfig()

    env_seed = get_env_seed()
    if env_seed is not None:
        logger.debug("Seed %d taken from %s", env_seed, DICEXPR_SEED_VAR)
        config.seed = env_seed
    return config


def _is_int(value: Any) -> bool:
    # TOML booleans are Python bools, which are ints
    return isinstance(value, int) and not isinstance(value, bool)
