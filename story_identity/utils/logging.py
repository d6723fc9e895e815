"""Logging configuration using loguru.

Records from ``story_identity`` are disabled when the package is imported, as
loguru recommends for libraries. :func:`setup_logging` turns them back on.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

from story_identity.models.config import LoggingConfig

PACKAGE_NAME = "story_identity"

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>{extra[context]}"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function} | {message}{extra[context]}"


def _add_context(record: dict[str, Any]) -> None:
    """Render keyword context (``slug=...``) after the message."""
    extra = record["extra"]
    extra.setdefault("name", record["name"])
    pairs = [f"{key}={value}" for key, value in extra.items() if key not in ("name", "context")]
    extra["context"] = f" | {' '.join(pairs)}" if pairs else ""


def setup_logging(config: LoggingConfig, *, sink: Any = None) -> None:
    """
    Configure loguru for story_identity records.

    Replaces existing handlers with a console handler (stderr unless ``sink``
    is given) and, when ``config.file_path`` is set, a rotating file handler.

    Args:
        config: Logging configuration
        sink: Console destination, any loguru sink
    """
    logger.remove()
    logger.enable(PACKAGE_NAME)
    logger.configure(patcher=_add_context)

    logger.add(
        sink if sink is not None else sys.stderr,
        level=config.level,
        format=_CONSOLE_FORMAT,
        colorize=config.colorize,
        serialize=False,
    )

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.file_path,
            level=config.level,
            format=_FILE_FORMAT,
            rotation=config.rotation,
            retention=config.retention,
            compression=config.compression,
            serialize=config.serialize,
            enqueue=True,
        )

    get_logger(__name__).debug("Logging configured", level=config.level, file=config.file_path)


def get_logger(name: str) -> "Logger":
    """
    Get a logger instance with a specific name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)
