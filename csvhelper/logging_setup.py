from __future__ import annotations

import logging
import sys
from typing import TextIO

from csvhelper.config import Settings

LOGGER_NAME = "csvhelper"

_FORMAT = "%(asctime)s %(levelname)s comp=%(component)s msg=%(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


class EnsureFieldsFilter(logging.Filter):
    """
    Назначение:
        Гарантирует наличие поля component в LogRecord,
        чтобы форматтер не падал KeyError.

    Входные данные:
        defaultComponent: str
            Компонент по умолчанию, если не задан.
    """

    def __init__(self, defaultComponent: str = "core"):
        super().__init__()
        self.defaultComponent = defaultComponent

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = self.defaultComponent
        return True


def mapLogLevel(levelName: str) -> int:
    """
    Назначение:
        Преобразует строковый уровень логирования в logging level.

    Входные данные:
        levelName: str
            ERROR|WARN|INFO|DEBUG

    Выходные данные:
        int
    """
    value = (levelName or "").strip().upper()
    if value == "ERROR":
        return logging.ERROR
    if value in ("WARN", "WARNING"):
        return logging.WARNING
    if value == "INFO":
        return logging.INFO
    if value == "DEBUG":
        return logging.DEBUG
    raise ValueError(f"Unsupported log level: {levelName}")


def getLogger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configureLogging(logLevel: str, stream: TextIO | None = None) -> logging.Logger:
    """
    Назначение:
        Подключает к логгеру библиотеки единственный stream-handler.

    Входные данные:
        logLevel: str
        stream: TextIO | None
            По умолчанию sys.stderr.

    Выходные данные:
        logging.Logger

    Алгоритм:
        - Повторный вызов заменяет ранее установленный handler, а не добавляет второй.
    """
    logger = getLogger()
    level = mapLogLevel(logLevel)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_csvhelper_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler.addFilter(EnsureFieldsFilter())
    handler._csvhelper_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


def configureFromSettings(settings: Settings, stream: TextIO | None = None) -> logging.Logger:
    """
    Назначение:
        Применяет settings.log_level (config/ENV/overrides) к логгеру библиотеки.
    """
    return configureLogging(settings.log_level, stream=stream)


def logEvent(logger: logging.Logger, level: int, component: str, message: str) -> None:
    """
    Назначение:
        Унифицированная запись событий с component.
    """
    logger.log(level, message, extra={"component": component})


getLogger().addHandler(logging.NullHandler())
