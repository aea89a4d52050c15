from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from csvhelper.logging_setup import getLogger, logEvent
from csvhelper.schema import ModelSchema

logger = getLogger()


@dataclass(frozen=True)
class HeaderMap:
    """
    Назначение:
        Плотное отображение "индекс колонки заголовка -> имя поля модели".
        Длина равна ширине заголовка; None означает несопоставленную колонку.
    """

    slots: tuple[str | None, ...]

    def __len__(self) -> int:
        return len(self.slots)

    def field_at(self, index: int) -> str | None:
        if index < 0 or index >= len(self.slots):
            return None
        return self.slots[index]


def resolve_header(schema: ModelSchema, header: Sequence[str]) -> HeaderMap:
    """
    Назначение:
        Сопоставляет колонки заголовка полям модели без учёта порядка и регистра.

    Алгоритм:
        - Поля перебираются в порядке объявления, для каждого сканируется заголовок.
        - При совпадении тега (casefold) в слот колонки пишется имя поля;
          более позднее поле перезаписывает слот.
        - Поля без тега не участвуют.
    """
    slots: list[str | None] = [None] * len(header)
    folded = [cell.casefold() for cell in header]
    for f in schema.fields:
        if not f.column:
            continue
        tag = f.column.casefold()
        for index, cell in enumerate(folded):
            if cell == tag:
                slots[index] = f.name

    result = HeaderMap(slots=tuple(slots))
    unmapped = len(slots) - sum(1 for s in slots if s is not None)
    logEvent(logger, logging.DEBUG, "resolver", f"resolved columns={len(slots)} unmapped={unmapped}")
    return result
