"""Logging for the ``edgemotion`` package namespace.

The package logger always writes to stderr, through rich unless disabled,
and can mirror records into a plain-text file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from omegaconf import DictConfig
from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "edgemotion"
_PLAIN = logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", "%H:%M:%S")


def _stderr_handler(rich: bool) -> logging.Handler:
    if not rich:
        handler = logging.StreamHandler()
        handler.setFormatter(_PLAIN)
        return handler
    return RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)


def _file_handler(path: str | Path) -> logging.Handler:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(_PLAIN)
    return handler


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    rich: bool = True,
) -> logging.Logger:
    """Reset the package logger to a stderr handler plus an optional file.

    Handlers carry no level of their own; ``level`` applies to the logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.setLevel(level)
    logger.addHandler(_stderr_handler(rich))
    if log_file is not None:
        logger.addHandler(_file_handler(log_file))
    return logger


def setup_logging_from_config(config: DictConfig) -> logging.Logger:
    """Apply the ``logging`` section (level, file, rich) of an adapter config."""
    section = config.get("logging") or {}
    return setup_logging(section.get("level", "INFO"), section.get("file"), section.get("rich", True))


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``edgemotion`` or one of its children, e.g. ``get_logger("models.adapter")``."""
    return logging.getLogger(ROOT_LOGGER if not name else f"{ROOT_LOGGER}.{name}")


class ContextLogger(logging.LoggerAdapter):
    """Tag every message with fixed ``[key=value]`` context."""

    def __init__(self, logger: logging.Logger, context: Mapping[str, Any]):
        super().__init__(logger, dict(context))
        self._tag = " ".join(f"[{k}={v}]" for k, v in context.items())

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return (f"{self._tag} {msg}" if self._tag else msg), kwargs


def log_dict(
    logger: logging.Logger | logging.LoggerAdapter,
    data: Mapping[str, Any],
    title: str | None = None,
    level: int = logging.INFO,
) -> None:
    """Emit ``data`` as indented ``key: value`` lines under an optional title."""
    if not logger.isEnabledFor(level):
        return
    lines = [f"  {key}: {value}" for key, value in data.items()]
    if title:
        lines.insert(0, title)
    for line in lines:
        logger.log(level, line)
