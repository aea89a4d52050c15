from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar

from csvhelper.binder import bind_rows
from csvhelper.config import MarshalConfig, Settings, ValidationConfig
from csvhelper.errors import CsvHelperError
from csvhelper.logging_setup import getLogger, logEvent
from csvhelper.reader import RowSource, read_records
from csvhelper.resolver import resolve_header
from csvhelper.schema import ModelSchema, get_schema
from csvhelper.validator import validate

T = TypeVar("T")

logger = getLogger()


@dataclass(frozen=True)
class CsvHelper(Generic[T]):
    """
    Назначение/ответственность:
        Неизменяемый дескриптор состояния: последние прочитанные строки и ошибка чтения.
        Связывает reader -> validator -> resolver -> binder.

    Инварианты/гарантии:
        - read_all() возвращает НОВЫЙ CsvHelper; исходный объект не меняется.
        - Остальные операции состояние не меняют.
        - Ошибка чтения "липкая": возвращается всеми операциями до следующего read_all().
    """

    model: type[T]
    settings: Settings = field(default_factory=Settings)
    rows: tuple[tuple[str, ...], ...] = field(default=(), repr=False)
    read_error: CsvHelperError | None = None

    def __post_init__(self) -> None:
        # ранняя ошибка на не-dataclass модели
        get_schema(self.model)

    @property
    def schema(self) -> ModelSchema[T]:
        return get_schema(self.model)

    def read_all(self, source: RowSource) -> "CsvHelper[T]":
        result = read_records(
            source,
            delimiter=self.settings.delimiter,
            strict_field_count=self.settings.strict_field_count,
        )
        return replace(self, rows=result.records, read_error=result.error)

    def _validate(self, skip_validation: bool = False) -> CsvHelperError | None:
        cfg: ValidationConfig = self.settings.validation_config(skip_validation=skip_validation)
        return validate(self.schema, self.rows, self.read_error, cfg)

    def validate(self) -> tuple[bool, CsvHelperError | None]:
        err = self._validate()
        if err is not None:
            return False, err
        return True, None

    def records(self) -> list[list[str]]:
        err = self._validate()
        if err is not None:
            raise err.with_traceback(None)
        return [list(row) for row in self.rows]

    def error(self) -> CsvHelperError | None:
        return self._validate()

    def marshal(self, cfg: MarshalConfig | None = None) -> list[T]:
        """
        Назначение:
            Валидация (схема пропускается при cfg.skip_validation) -> сопоставление заголовка -> биндинг строк.

        Выходные данные:
            list[T] по одному экземпляру на строку данных.

        Ошибки:
            Первая ошибка валидации пробрасывается до попытки биндинга.
        """
        cfg = cfg or self.settings.marshal_config()
        err = self._validate(skip_validation=cfg.skip_validation)
        if err is not None:
            logEvent(logger, logging.WARNING, "helper", f"marshal failed model={self.model.__name__} error={err}")
            raise err.with_traceback(None)

        header_map = resolve_header(self.schema, self.rows[0])
        return bind_rows(self.schema, self.rows, header_map)


def new(model: type[T], settings: Settings | None = None) -> CsvHelper[T]:
    return CsvHelper(model=model, settings=settings or Settings())
