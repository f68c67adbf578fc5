"""
Loguru setup for the server and CLI.

Console output always; a file sink when a log directory is configured.
Modules log through ``from loguru import logger`` directly.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    level: str = "INFO",
    log_dir: Path | None = None,
    extra_provenance: dict | None = None,
) -> Path | None:
    """
    Configure loguru sinks and log a provenance header.

    Args:
        level: Minimum level for the console sink
        log_dir: Directory for ``resume_studio.log`` (no file sink when None)
        extra_provenance: Additional key-value pairs for the header

    Returns:
        Path to the log file, or None when logging to console only
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(exist_ok=True, parents=True)
        log_file = log_dir / "resume_studio.log"
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{line} | {message}",
            level="DEBUG",
        )

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: dict | None = None) -> None:
    logger.info("=" * 60)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")
    if extra_context:
        for key, value in extra_context.items():
            logger.info(f"{key}: {value}")
    logger.info("=" * 60)
