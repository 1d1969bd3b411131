"""Logging setup shared by the server, the agent and the CLI."""

import logging
import os
import sys

from pydantic import BaseModel, Field

# Client libraries that log every request at INFO
QUIET_LOGGERS = ("openai", "httpx", "httpcore", "pymongo", "azure", "uvicorn.access")


class LogConfig(BaseModel):
    """Root logger configuration."""

    level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    quiet_loggers: tuple[str, ...] = QUIET_LOGGERS


def setup_logging(config: LogConfig | None = None) -> None:
    """Configure the root logger to write to stdout and raise client loggers to WARNING."""
    config = config or LogConfig()

    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
        datefmt=config.date_format,
        stream=sys.stdout,
        force=True,
    )

    for name in config.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Module logger honoring LOG_LEVEL.

    Args:
        name: Module name (typically __name__)
        level: Optional level override

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    return logger
