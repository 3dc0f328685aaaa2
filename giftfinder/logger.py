"""Logging for the gift finder.

Events go through structlog into the stdlib root logger, which prints them
with rich.  Set ``GIFTFINDER_LOG_DIR`` to also keep a rotating JSON log.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler

from .config import LOG_DIR, LOG_LEVEL

_configured = False

_PRE_CHAIN = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _console_handler() -> logging.Handler:
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=_PRE_CHAIN,
        )
    )
    return handler


def _file_handler(log_dir: str) -> logging.Handler:
    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path / "giftfinder.log", maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_PRE_CHAIN,
        )
    )
    return handler


def setup_logging(log_level: str = LOG_LEVEL, log_dir: Optional[str] = None) -> None:
    """Attach the handlers and configure structlog. Later calls do nothing."""
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.addHandler(_console_handler())
    target = LOG_DIR if log_dir is None else log_dir
    if target:
        root.addHandler(_file_handler(target))

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str, **binds: Any) -> structlog.stdlib.BoundLogger:
    setup_logging()
    return structlog.get_logger(name).bind(**binds)
