"""Runtime configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping
import logging
import os

from .utils import FPS, MAX_FIREWORKS

LOG_PATH_VAR = "SPARKLER_LOG"
LOG_LEVEL_VAR = "SPARKLER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(slots=True, frozen=True)
class ShowSettings:
    """Fixed parameters of a show."""

    fps: int = FPS
    max_fireworks: int = MAX_FIREWORKS
    seed: int | None = None

    @property
    def frame_interval_ms(self) -> int:
        """Milliseconds between two ticks."""
        return 1000 // self.fps


@dataclass(slots=True, frozen=True)
class LogSettings:
    """Where log records go; the terminal itself is reserved for the show."""

    path: Path | None = None
    level: int = logging.INFO

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LogSettings:
        """Read logging options from the environment."""
        environ = os.environ if environ is None else environ
        raw_path = environ.get(LOG_PATH_VAR, "").strip()
        level = getattr(logging, environ.get(LOG_LEVEL_VAR, "INFO").strip().upper(), None)
        if not isinstance(level, int):
            level = logging.INFO
        return cls(path=Path(raw_path) if raw_path else None, level=level)


def configure_logging(settings: LogSettings) -> logging.Logger:
    """Attach a handler to the package logger."""
    logger = logging.getLogger("sparkler")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if settings.path is None:
        logger.addHandler(logging.NullHandler())
    else:
        settings.path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(settings.path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(settings.level)
    logger.propagate = False
    return logger
