"""Executable entrypoint for Sparkler."""

from __future__ import annotations

from typing import Any
import curses
import logging
import random
import sys

from .errors import SparklerError
from .events import events
from .render import CursesTarget, Renderer, Viewport, terminal_size
from .settings import LogSettings, ShowSettings, configure_logging
from .show import FireworkShow

logger = logging.getLogger(__name__)


def run_show(window: Any, settings: ShowSettings | None = None) -> int:
    """Run a show on an initialised curses window."""
    settings = ShowSettings() if settings is None else settings
    width, height = terminal_size(window)
    renderer = Renderer(CursesTarget(window))
    viewport = Viewport(width, height)
    show = FireworkShow(settings, random.Random(settings.seed), lambda: terminal_size(window))
    return show.run(events(settings.fps, window), viewport, renderer)


def main() -> int:
    """Launch the show."""
    try:
        configure_logging(LogSettings.from_env())
    except OSError as exc:
        print(f"sparkler: cannot open log file: {exc}", file=sys.stderr)
        return 1

    if not sys.stdout.isatty():
        print("sparkler: stdout is not a terminal", file=sys.stderr)
        return 1

    try:
        return curses.wrapper(run_show)
    except KeyboardInterrupt:
        return 130
    except (SparklerError, curses.error) as exc:
        logger.critical("Fatal: %s", exc, exc_info=True)
        print(f"sparkler: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
