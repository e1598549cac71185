"""
Runtime configuration for DrawPoker.

Values come from defaults, then DRAWPOKER_* environment variables, then
command-line flags (applied by the CLI through `override`).
"""

from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from drawpoker.core.rules import DEFAULT_STARTING_COINS


ENV_PREFIX = "DRAWPOKER_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_MAX_SESSIONS = 1000


@dataclass(frozen=True)
class GameConfig:
    """Settings shared by the terminal game and the server."""
    starting_coins: int = DEFAULT_STARTING_COINS
    seed: Optional[int] = None
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: Optional[str] = None
    max_sessions: int = DEFAULT_MAX_SESSIONS

    def __post_init__(self) -> None:
        if self.starting_coins <= 0:
            raise ValueError(f"starting_coins must be positive, got {self.starting_coins}")
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")
        if self.max_sessions <= 0:
            raise ValueError(f"max_sessions must be positive, got {self.max_sessions}")
        if self.log_level is not None:
            if self.log_level.upper() not in LOG_LEVELS:
                raise ValueError(f"Invalid log level: {self.log_level}")
            object.__setattr__(self, "log_level", self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> GameConfig:
        """Build a config from DRAWPOKER_* environment variables."""
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value if value not in (None, "") else None

        kwargs = {}
        if get("STARTING_COINS") is not None:
            kwargs["starting_coins"] = _to_int("STARTING_COINS", get("STARTING_COINS"))
        if get("SEED") is not None:
            kwargs["seed"] = _to_int("SEED", get("SEED"))
        if get("HOST") is not None:
            kwargs["host"] = get("HOST")
        if get("PORT") is not None:
            kwargs["port"] = _to_int("PORT", get("PORT"))
        if get("LOG_LEVEL") is not None:
            kwargs["log_level"] = get("LOG_LEVEL")
        if get("MAX_SESSIONS") is not None:
            kwargs["max_sessions"] = _to_int("MAX_SESSIONS", get("MAX_SESSIONS"))
        return cls(**kwargs)

    def override(self, **changes) -> GameConfig:
        """Return a copy with every non-None change applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _to_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}") from None
