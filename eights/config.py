"""Runtime configuration and logging setup for Crazy Eights hosts."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"


class GameConfig(BaseModel):
    opponent_delay: float = Field(1.0, ge=0, description="Seconds the computer waits before moving.")
    seed: Optional[int] = Field(None, description="Seed for shuffles; random when unset.")
    log_level: str = Field("INFO", description="Standard logging level name.")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GameConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(**payload)


def configure_logging(level: str = "INFO") -> None:
    """Call once at host start-up."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
