import logging
import logging.config
from logging.handlers import RotatingFileHandler
from pathlib import Path

from mentorme.config import config


def setup_logger(log_file: str = "logs/mentorme.log", max_bytes: int = 10_000_000, backup_count: int = 5):
    Path(log_file).parent.mkdir(exist_ok=True, parents=True)
    logger = logging.getLogger("mentorme")
    logger.setLevel(config.logging.level.value)
    handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    formatter = logging.Formatter(config.logging.log_format)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def configure_logging():
    if config.logging.to_file:
        config.logging.log_dir.mkdir(exist_ok=True, parents=True)
    logging.config.dictConfig(config.get_logging_config())
    return logging.getLogger("mentorme")
