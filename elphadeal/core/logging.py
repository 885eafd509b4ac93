from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from elphadeal.core.paths import LOG_FILENAME


def get_logger(name: str = "elphadeal") -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(
    *,
    level: str = "info",
    format_name: str = "json",
    stream=None,
    log_dir: Path | None = None,
    filename: str = LOG_FILENAME,
) -> None:
    """Attach a single root handler.

    Nothing is written to the terminal unless a stream is passed explicitly:
    stdout and stderr belong to the guest script and the package tool.
    """
    normalized = level.strip().upper()
    level_value = getattr(logging, normalized, logging.INFO)
    if format_name == "json":
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter("%(levelname)s %(name)s %(message)s")
    root = logging.getLogger()
    root.setLevel(level_value)
    if root.handlers:
        return
    if stream is None:
        if log_dir is None:
            root.addHandler(logging.NullHandler())
            return
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(
            log_dir / filename, encoding="utf-8"
        )
    else:
        handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def log_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.info(json.dumps(payload, sort_keys=True, default=str))
