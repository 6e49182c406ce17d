"""Application logger configuration."""
import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)


def configure_logging(level: str = "INFO") -> None:
    """Apply the configured level to the root logger."""
    logging.getLogger().setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
