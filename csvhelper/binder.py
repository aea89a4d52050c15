from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from csvhelper.logging_setup import getLogger, logEvent
from csvhelper.resolver import HeaderMap
from csvhelper.schema import ModelSchema

T = TypeVar("T")

HEADER_LINE = 0

logger = getLogger()


def bind_row(schema: ModelSchema[T], row: Sequence[str], header_map: HeaderMap) -> T:
    values: dict[str, str] = {}
    for index, cell in enumerate(row):
        name = header_map.field_at(index)
        if name is not None:
            values[name] = cell
    return schema.build(values)


def bind_rows(
    schema: ModelSchema[T],
    records: Sequence[Sequence[str]],
    header_map: HeaderMap,
) -> list[T]:
    """
    Назначение:
        Превращает каждую строку данных (после заголовка) в экземпляр модели.

    Поведение:
        - Значения присваиваются как есть, без приведения типов.
        - Ячейки за пределами заголовка игнорируются; поля без колонки остаются нулевыми.
        - Длина результата = len(records) - 1.
    """
    output = [bind_row(schema, row, header_map) for row in records[HEADER_LINE + 1:]]
    logEvent(logger, logging.DEBUG, "binder", f"bound model={schema.model.__name__} rows={len(output)}")
    return output
