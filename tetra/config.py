"""
Configuration - Environment settings and logging setup.

Environment:
    TETRA_ENV                   development / production
    TETRA_RANDOM_SEED           seed for session random generators
    TETRA_SIMULATED_ROLL_STEPS  tumble length for freshly created dice
    TETRA_DICE_PER_PLAYER       dice handed to each player
    TETRA_LOG_LEVEL             logging level name
    ALLOWED_ORIGINS             comma separated CORS origins
"""

from __future__ import annotations
import logging
import os
import sys
from dataclasses import dataclass, field


def _int_env(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class Settings:
    """Runtime settings, read from the environment by `load_settings`."""
    env: str = "development"
    random_seed: int | None = None
    simulated_roll_steps: int = 12
    dice_per_player: int = 4
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])


def load_settings() -> Settings:
    return Settings(
        env=os.getenv("TETRA_ENV", "development"),
        random_seed=_int_env("TETRA_RANDOM_SEED", None),
        simulated_roll_steps=_int_env("TETRA_SIMULATED_ROLL_STEPS", 12),
        dice_per_player=_int_env("TETRA_DICE_PER_PLAYER", 4),
        log_level=os.getenv("TETRA_LOG_LEVEL", "INFO").upper(),
        allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
    )


def configure_logging(level: str | None = None) -> None:
    """
    Install a single stream handler on the `tetra` logger.

    Safe to call multiple times.
    """
    logger = logging.getLogger("tetra")
    logger.setLevel(level or load_settings().log_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
