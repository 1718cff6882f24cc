"""Configuración centralizada de logging para la CLI y el servidor."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging"]

_MANAGED_HANDLER_FLAG = "_colorsense_managed_handler"


def _remove_managed_handlers(logger: logging.Logger) -> None:
    """Detach any handlers previously installed by :func:`configure_logging`."""

    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()


def configure_logging(
    level: int | str = logging.INFO,
    *,
    log_file: Path | None = None,
    console: Console | None = None,
) -> None:
    """Configure root logging with a Rich console handler and an optional file."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    _remove_managed_handlers(root_logger)

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    setattr(console_handler, _MANAGED_HANDLER_FLAG, True)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        setattr(file_handler, _MANAGED_HANDLER_FLAG, True)
        root_logger.addHandler(file_handler)

    # The SDK and httpx are chatty at INFO; keep them at WARNING unless debugging.
    noisy_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in ("httpx", "openai"):
        logging.getLogger(name).setLevel(noisy_level)

    logging.captureWarnings(True)
