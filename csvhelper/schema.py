from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Generic, Mapping, TypeVar

COLUMN_TAG = "csv_column_name"

T = TypeVar("T")


def column(name: str, *, default: Any = "") -> Any:
    """
    Назначение:
        Объявляет поле dataclass, привязанное к колонке CSV с именем name.

    Пример:
        @dataclass
        class Person:
            name: str = column("name")
            last_name: str = column("lastname")
    """
    return field(default=default, metadata={COLUMN_TAG: name})


@dataclass(frozen=True)
class ColumnField:
    """
    Назначение:
        Описание одного поля модели: имя атрибута и тег колонки (None, если тег не задан).
    """

    name: str
    column: str | None
    zero_factory: Callable[[], Any] = field(default=str, compare=False, repr=False)

    def zero(self) -> Any:
        return self.zero_factory()


@dataclass(frozen=True)
class ModelSchema(Generic[T]):
    """
    Назначение/ответственность:
        Упорядоченная (в порядке объявления) схема модели.
        Строится один раз на тип через get_schema().
    """

    model: type[T]
    fields: tuple[ColumnField, ...]

    @property
    def size(self) -> int:
        return len(self.fields)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def columns(self) -> tuple[str | None, ...]:
        return tuple(f.column for f in self.fields)

    def zero_values(self) -> dict[str, Any]:
        return {f.name: f.zero() for f in self.fields}

    def build(self, values: Mapping[str, Any]) -> T:
        """
        Назначение:
            Создаёт экземпляр модели: нулевые значения, поверх них values.
            Работает и для frozen dataclass, т.к. значения идут через конструктор.
        """
        kwargs = self.zero_values()
        kwargs.update(values)
        return self.model(**kwargs)


def _zero_factory(f: dataclasses.Field) -> Callable[[], Any]:
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory
    if f.default is not dataclasses.MISSING:
        default = f.default
        return lambda: default
    return str


@lru_cache(maxsize=None)
def get_schema(model: type[T]) -> ModelSchema[T]:
    """
    Назначение:
        Извлекает из dataclass упорядоченный список (поле, тег колонки).

    Поведение:
        - Поля с init=False в схему не попадают.
        - Отсутствующий или пустой тег -> column=None; это вопрос валидации, а не ошибка здесь.
        - Не-dataclass тип -> TypeError.
    """
    if not (isinstance(model, type) and dataclasses.is_dataclass(model)):
        raise TypeError(f"Model must be a dataclass type, got {model!r}")

    items: list[ColumnField] = []
    for f in dataclasses.fields(model):
        if not f.init:
            continue
        tag = f.metadata.get(COLUMN_TAG)
        items.append(
            ColumnField(
                name=f.name,
                column=str(tag) if tag else None,
                zero_factory=_zero_factory(f),
            )
        )
    return ModelSchema(model=model, fields=tuple(items))
