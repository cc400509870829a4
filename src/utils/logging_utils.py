"""
Logging — фабрика логгеров проекта

Уровень и файл берутся из окружения (.env читается в src.utils.config):
- LOG_LEVEL (default INFO), тот же разбор, что и Settings.log_level
- LOG_FILE (optional; без него пишем только в консоль)
"""

import logging
import os

from src.utils.config import env_log_level

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "luggage"

_formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)


def _build_handlers() -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_formatter)
    handlers.append(console_handler)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_formatter)
        handlers.append(file_handler)

    return handlers


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Сконфигурированный логгер.

    Handlers вешаются один раз на корневой логгер проекта; дочерние логгеры
    ("luggage.resolution", "luggage.analytics") наследуют их через propagate.

    Args:
        name: Имя логгера (модуль), префикс "luggage." добавляется автоматически

    Returns:
        logging.Logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        root.setLevel(env_log_level())
        for handler in _build_handlers():
            root.addHandler(handler)

    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
