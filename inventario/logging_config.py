"""Utilities for centralised logging configuration."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ENGINE_LOGGER = "inventario.analytics"


def _level_from_name(level_name: str | int | None) -> int:
    if isinstance(level_name, int):
        return level_name
    if not level_name:
        return logging.INFO
    return getattr(logging, str(level_name).upper(), logging.INFO)


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    return any(
        isinstance(handler, logging.FileHandler)
        and getattr(handler, "baseFilename", None) == str(path.resolve())
        for handler in logger.handlers
    )


def configure_logging(
    level: str | int = "INFO",
    log_file: Optional[str] = None,
    *,
    engine_level: str | int | None = None,
) -> None:
    """Configure root handlers and, optionally, a separate level for the engine.

    The analytics modules only emit DEBUG records (dataset sizes, alert
    counts); ``engine_level`` lets the web layer surface them without making
    every other logger verbose.
    """

    numeric_level = _level_from_name(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    if not root_logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root_logger.addHandler(stream_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not _has_file_handler(root_logger, path):
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            root_logger.addHandler(file_handler)

    engine_logger = logging.getLogger(ENGINE_LOGGER)
    if engine_level is None:
        engine_logger.setLevel(logging.NOTSET)
    else:
        engine_logger.setLevel(_level_from_name(engine_level))
