#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Configuration
Environment-driven configuration with validation

Version: 3.0.0
Date: 2026-10-18
"""

import os
import sys
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass
from enum import Enum

import pytz


class Environment(Enum):
    """Runtime environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: LogLevel = LogLevel.INFO
    to_file: bool = False
    log_dir: Path = Path("logs")
    log_format: str = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    max_bytes: int = 10_485_760  # 10MB
    backup_count: int = 5


@dataclass
class ModelDefaults:
    """Defaults applied when records are created without explicit values"""
    timezone: Optional[str] = None  # None = system local time
    habit_days_to_formation: int = 66
    hydration_daily_goal: int = 8


class AppConfig:
    """Main configuration class"""

    def __init__(self):
        self._load_errors = []
        self.environment = self._env_enum('ENVIRONMENT', Environment, Environment.DEVELOPMENT)
        self._load_config()
        self._validate_config()

    def _env_enum(self, name: str, enum_class, default):
        raw = os.getenv(name)
        if raw is None:
            return default
        try:
            return enum_class(raw.lower() if enum_class is Environment else raw.upper())
        except ValueError:
            choices = ", ".join(e.value for e in enum_class)
            self._load_errors.append(f"{name} '{raw}' must be one of: {choices}")
            return default

    def _env_int(self, name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            self._load_errors.append(f"{name} '{raw}' must be a whole number")
            return default

    def _load_config(self):
        """Load configuration from environment variables"""
        self.logging = LoggingConfig(
            level=self._env_enum('LOG_LEVEL', LogLevel, LogLevel.INFO),
            to_file=os.getenv('LOG_TO_FILE', 'false').lower() == 'true',
            log_dir=Path(os.getenv('LOG_DIR', 'logs')),
            log_format=os.getenv(
                'LOG_FORMAT',
                '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            ),
        )

        self.defaults = ModelDefaults(
            timezone=os.getenv('APP_TIMEZONE') or None,
            habit_days_to_formation=self._env_int('HABIT_DAYS_TO_FORMATION', 66),
            hydration_daily_goal=self._env_int('HYDRATION_DAILY_GOAL', 8),
        )

    def _validate_config(self):
        """Validate configuration"""
        errors = list(self._load_errors)

        if self.defaults.timezone and self.defaults.timezone not in pytz.all_timezones_set:
            errors.append(f"APP_TIMEZONE '{self.defaults.timezone}' is not a known timezone")

        if self.defaults.habit_days_to_formation <= 0:
            errors.append("HABIT_DAYS_TO_FORMATION must be a positive number")

        if self.defaults.hydration_daily_goal <= 0:
            errors.append("HYDRATION_DAILY_GOAL must be a positive number")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"• {error}" for error in errors))

    @property
    def tzinfo(self):
        """pytz timezone for 'now', or None for system local time"""
        if not self.defaults.timezone:
            return None
        return pytz.timezone(self.defaults.timezone)

    def get_logging_config(self) -> Dict[str, Any]:
        """Build a logging.config.dictConfig dictionary"""
        handlers = ['console']
        if self.logging.to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.logging.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.logging.level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                },
            },
            'loggers': {
                'mentorme': {
                    'level': self.logging.level.value,
                    'handlers': handlers,
                    'propagate': False
                },
            }
        }

        if self.logging.to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.logging.level.value,
                'formatter': 'default',
                'filename': str(self.logging.log_dir / f"mentorme_{self.environment.value}.log"),
                'maxBytes': self.logging.max_bytes,
                'backupCount': self.logging.backup_count,
                'encoding': 'utf-8'
            }

        return logging_config

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to a dictionary"""
        return {
            'environment': self.environment.value,
            'log_level': self.logging.level.value,
            'log_to_file': self.logging.to_file,
            'log_dir': str(self.logging.log_dir),
            'timezone': self.defaults.timezone,
            'habit_days_to_formation': self.defaults.habit_days_to_formation,
            'hydration_daily_goal': self.defaults.hydration_daily_goal,
        }


# Global configuration instance
config = AppConfig()

logging.getLogger(__name__).debug(f"Configuration loaded for {config.environment.value}")

__all__ = [
    'config',
    'AppConfig',
    'Environment',
    'LogLevel',
    'LoggingConfig',
    'ModelDefaults',
]
