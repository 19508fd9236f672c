import logging

import pytest

from mentorme.config import AppConfig, Environment, LogLevel
from mentorme.utils import logger as logger_utils


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("ENVIRONMENT", "LOG_LEVEL", "LOG_TO_FILE", "LOG_DIR", "APP_TIMEZONE",
                 "HABIT_DAYS_TO_FORMATION", "HYDRATION_DAILY_GOAL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_mentorme_logger():
    log = logging.getLogger("mentorme")
    saved = (log.level, log.propagate, list(log.handlers))
    yield log
    for handler in log.handlers:
        if handler not in saved[2]:
            handler.close()
    log.setLevel(saved[0])
    log.propagate = saved[1]
    log.handlers = saved[2]


def test_defaults(clean_env):
    cfg = AppConfig()
    assert cfg.environment == Environment.DEVELOPMENT
    assert cfg.is_development()
    assert cfg.logging.level == LogLevel.INFO
    assert cfg.defaults.habit_days_to_formation == 66
    assert cfg.defaults.hydration_daily_goal == 8
    assert cfg.tzinfo is None


def test_environment_overrides(clean_env):
    clean_env.setenv("ENVIRONMENT", "production")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("APP_TIMEZONE", "Europe/London")
    clean_env.setenv("HABIT_DAYS_TO_FORMATION", "30")
    cfg = AppConfig()
    assert cfg.is_production()
    assert cfg.logging.level == LogLevel.DEBUG
    assert cfg.tzinfo.zone == "Europe/London"
    assert cfg.to_dict()["habit_days_to_formation"] == 30


def test_invalid_values_reported_together(clean_env):
    clean_env.setenv("APP_TIMEZONE", "Mars/Olympus")
    clean_env.setenv("HYDRATION_DAILY_GOAL", "0")
    with pytest.raises(ValueError) as exc:
        AppConfig()
    assert "APP_TIMEZONE" in str(exc.value)
    assert "HYDRATION_DAILY_GOAL" in str(exc.value)


def test_unparseable_values_reported_together(clean_env):
    clean_env.setenv("ENVIRONMENT", "qa")
    clean_env.setenv("LOG_LEVEL", "loud")
    clean_env.setenv("HABIT_DAYS_TO_FORMATION", "sixty")
    clean_env.setenv("HYDRATION_DAILY_GOAL", "8.5")
    clean_env.setenv("APP_TIMEZONE", "Mars/Olympus")
    with pytest.raises(ValueError) as exc:
        AppConfig()
    message = str(exc.value)
    assert message.startswith("Configuration errors:")
    for name in ("ENVIRONMENT 'qa'", "LOG_LEVEL 'loud'", "HABIT_DAYS_TO_FORMATION 'sixty'",
                 "HYDRATION_DAILY_GOAL '8.5'", "APP_TIMEZONE"):
        assert name in message


def test_logging_config_with_file(clean_env, tmp_path):
    clean_env.setenv("LOG_TO_FILE", "true")
    clean_env.setenv("LOG_DIR", str(tmp_path))
    cfg = AppConfig()
    logging_config = cfg.get_logging_config()
    assert logging_config["loggers"]["mentorme"]["handlers"] == ["console", "file"]
    assert logging_config["handlers"]["file"]["filename"].endswith("mentorme_development.log")


def test_configure_logging(restore_mentorme_logger):
    log = logger_utils.configure_logging()
    assert log.name == "mentorme"
    assert log.propagate is False


def test_setup_logger_writes_to_file(tmp_path, restore_mentorme_logger):
    log_file = tmp_path / "logs" / "app.log"
    log = logger_utils.setup_logger(str(log_file))
    log.warning("habit graduated")
    for handler in log.handlers:
        handler.flush()
    assert "habit graduated" in log_file.read_text(encoding="utf-8")


def test_logging_config_console_only(clean_env):
    logging_config = AppConfig().get_logging_config()
    assert logging_config["loggers"]["mentorme"]["handlers"] == ["console"]
    assert "file" not in logging_config["handlers"]
