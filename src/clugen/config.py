"""
Configuration management for clugen.

Loads configuration from environment variables (typically from a .env file).
Uses python-dotenv to load .env automatically.

Recognized variables:
    CLUGEN_SEED       Default seed used by clugen() when no rng is given.
    CLUGEN_LOG_LEVEL  Default level for setup_logging() (WARNING if unset).

Usage:
    from clugen.config import config

    rng = config.generator.make_rng()
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
from dotenv import load_dotenv

# Look for .env in project root (parent of src/)
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


@dataclass
class GeneratorConfig:
    """Defaults for random number generation."""
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate the seed."""
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, (int, np.integer))
        ):
            raise ValueError(f"Seed must be an integer, got {self.seed!r}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"Seed must be non-negative, got {self.seed}")

    def make_rng(self) -> np.random.Generator:
        """Create a generator from the configured seed, or from system entropy."""
        return np.random.default_rng(self.seed)


@dataclass
class LoggingConfig:
    """Logging defaults."""
    level: str = "WARNING"

    def __post_init__(self):
        """Normalize and validate the level name."""
        self.level = self.level.upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown logging level: {self.level}")


class Config:
    """
    Configuration loaded from environment variables.

    Environment variables can be set:
    1. In a .env file in the project root
    2. In the system environment
    """

    def __init__(self):
        """Load configuration from environment."""
        self.generator = GeneratorConfig(seed=_read_optional_int_env("CLUGEN_SEED"))
        self.logging = LoggingConfig(level=os.getenv("CLUGEN_LOG_LEVEL", "WARNING"))


def _read_optional_int_env(key: str) -> Optional[int]:
    raw_value = os.getenv(key)
    if raw_value is None or raw_value.strip() == "":
        return None
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer.") from exc


# Global config instance
config = Config()
