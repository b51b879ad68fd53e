import logging
import sys

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogConfig(BaseSettings):
    """Logging configuration, read from LOG_* environment variables"""

    # Logging level
    LEVEL: str = "INFO"

    # Logging format
    FORMAT: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    # Whether to serialize the log message to JSON
    JSON_LOGS: bool = False

    # Optional rotating log file, disabled when empty
    FILE: str = ""

    model_config = SettingsConfigDict(env_prefix="LOG_")


class InterceptHandler(logging.Handler):
    """
    Intercept handler to route standard logging to loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def get_logger(name: str):
    """Get a logger instance with the specified name.

    Args:
        name: The name of the logger, typically the module name.

    Returns:
        A logger instance bound with the specified name.
    """
    return logger.bind(name=name)


def setup_logging() -> None:
    """Configure logging with loguru."""
    log_config = LogConfig()

    # Remove default configuration
    logger.remove()

    logger.add(
        sys.stdout,
        enqueue=True,
        backtrace=True,
        level=log_config.LEVEL,
        format=log_config.FORMAT,
        serialize=log_config.JSON_LOGS,
    )

    if log_config.FILE:
        logger.add(
            log_config.FILE,
            rotation="10 MB",
            retention="1 week",
            enqueue=True,
            backtrace=True,
            level=log_config.LEVEL,
            format=log_config.FORMAT,
            serialize=log_config.JSON_LOGS,
        )

    # Intercept standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Replace logging handlers for commonly used libraries
    for logger_name in [
        "uvicorn",
        "uvicorn.error",
        "uvicorn.access",
        "fastapi",
    ]:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]

    logger.info("Logging configuration completed")
