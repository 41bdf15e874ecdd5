from __future__ import annotations

import os
from pathlib import Path
from loguru import logger


def setup_logging(logs_dir: str | os.PathLike[str] | None = None, level: str = "INFO") -> None:
    """Configure loguru logging sinks.

    Progress goes to stdout in a readable console format. A rotating
    `challengebot.log` is written only when `logs_dir` is given.
    """
    logger.remove()
    if logs_dir:
        logs_path = Path(logs_dir)
        logs_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            logs_path / "challengebot.log",
            rotation="5 MB",
            retention=10,
            compression="zip",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}",
        )
    logger.add(
        lambda msg: print(msg, end=""),
        level=level,
        colorize=True,
        format="<green>{time:HH:mm:ss}</green> | <level>{level:<8}</level> | <cyan>{message}</cyan>",
    )
