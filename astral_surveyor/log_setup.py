"""Logging configuration for the explorer."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logging(level: int | str = logging.INFO, log_file: Path | None = None) -> None:
    """Configure the root logger for the explorer.

    - One line per record with time, level and source location.
    - Always logs to stdout; also to ``log_file`` when given.
    - Our own package logs at ``level``; chatty libraries are dimmed.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,  # drop handlers left by an earlier call
    )

    logging.getLogger("astral_surveyor").setLevel(level)
    logging.getLogger("pygame").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
