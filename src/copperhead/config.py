"""Startup configuration for the game server and CLI."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class GameConfig:
    """Settings read once at startup.

    Supports JSON serialization so a server setup can be reproduced.
    """

    # Simulation clock: 100 ms per tick is the reference 10 Hz rate.
    tick_rate_ms: int = 100
    seed: int | None = None

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 10 <= self.tick_rate_ms <= 2000:
            raise ValueError("tick_rate_ms must be between 10 and 2000.")
        if not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535.")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
