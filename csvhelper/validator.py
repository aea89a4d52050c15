from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from csvhelper.config import ValidationConfig
from csvhelper.errors import (
    CsvHelperError,
    DuplicatedTagError,
    InvalidHeaderSizeError,
    InvalidHeaderValuesError,
    MissingRequiredTagError,
    UninitializedRecordsError,
)
from csvhelper.logging_setup import getLogger, logEvent
from csvhelper.schema import ModelSchema

logger = getLogger()


def validate_integrity(
    records: Sequence[Sequence[str]],
    error: CsvHelperError | None,
) -> CsvHelperError | None:
    """
    Назначение:
        Проверка целостности: сохранённая ошибка чтения имеет приоритет,
        затем наличие хотя бы одной строки.
    """
    if error is not None:
        return error
    if len(records) == 0:
        return UninitializedRecordsError()
    return None


def validate_model_tags(schema: ModelSchema) -> CsvHelperError | None:
    """
    Назначение:
        Каждое поле обязано иметь тег; теги попарно различны.
    """
    model_name = schema.model.__name__
    for f in schema.fields:
        if not f.column:
            return MissingRequiredTagError(f.name, model_name)

    counts = Counter(schema.columns)
    duplicated = [tag for tag, n in counts.items() if n > 1]
    if duplicated:
        return DuplicatedTagError(duplicated, model_name)
    return None


def validate_header(
    schema: ModelSchema,
    header: Sequence[str],
    cfg: ValidationConfig,
) -> CsvHelperError | None:
    if len(header) != schema.size:
        return InvalidHeaderSizeError(expected=schema.size, got=len(header))

    if cfg.require_header_values:
        present = {cell.casefold() for cell in header}
        missing = [tag for tag in schema.columns if tag is not None and tag.casefold() not in present]
        if missing:
            return InvalidHeaderValuesError(missing)
    return None


def validate(
    schema: ModelSchema,
    records: Sequence[Sequence[str]],
    error: CsvHelperError | None,
    cfg: ValidationConfig | None = None,
) -> CsvHelperError | None:
    """
    Назначение:
        Полная валидация в фиксированном порядке:
        integrity -> (если не skip) теги -> дубликаты -> размер заголовка -> [значения заголовка].

    Выходные данные:
        Первая найденная ошибка или None. Состояние не изменяется.
    """
    cfg = cfg or ValidationConfig()

    err = validate_integrity(records, error)
    if err is None and not cfg.skip_validation:
        err = validate_model_tags(schema)
        if err is None:
            err = validate_header(schema, records[0], cfg)

    if err is not None:
        logEvent(
            logger,
            logging.DEBUG,
            "validator",
            f"validation failed model={schema.model.__name__} code={err.code.value}",
        )
    return err
