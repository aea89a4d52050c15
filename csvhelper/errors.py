from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    """
    Назначение:
        Единая таксономия кодов ошибок чтения и валидации CSV.
    """

    UNINITIALIZED_RECORDS = "UNINITIALIZED_RECORDS"
    MISSING_REQUIRED_TAG = "MISSING_REQUIRED_TAG"
    DUPLICATED_TAG = "DUPLICATED_TAG"
    INVALID_HEADER_SIZE = "INVALID_HEADER_SIZE"
    INVALID_HEADER_VALUES = "INVALID_HEADER_VALUES"
    FIELD_COUNT = "FIELD_COUNT"
    MALFORMED_CSV = "MALFORMED_CSV"
    ENCODING = "ENCODING"


@dataclass
class CsvHelperError(Exception):
    """
    Назначение:
        Базовая ошибка csvhelper.

    Инварианты/гарантии:
        - str(err) совпадает с message.
        - details содержит контекст (поля, теги, размеры, номер строки).
    """

    code: ErrorCode
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details or {},
        }


class UninitializedRecordsError(CsvHelperError):
    """Записи ещё не были прочитаны (или чтение не вернуло ни одной строки)."""

    def __init__(self) -> None:
        super().__init__(ErrorCode.UNINITIALIZED_RECORDS, "uninitialized records")


class MissingRequiredTagError(CsvHelperError):
    def __init__(self, field_name: str, model: str) -> None:
        super().__init__(
            ErrorCode.MISSING_REQUIRED_TAG,
            "missing required tag",
            {"field": field_name, "model": model},
        )


class DuplicatedTagError(CsvHelperError):
    def __init__(self, tags: list[str], model: str) -> None:
        super().__init__(
            ErrorCode.DUPLICATED_TAG,
            "duplicated tag",
            {"tags": tags, "model": model},
        )


class InvalidHeaderSizeError(CsvHelperError):
    def __init__(self, expected: int, got: int) -> None:
        super().__init__(
            ErrorCode.INVALID_HEADER_SIZE,
            "invalid header size",
            {"expected": expected, "got": got},
        )


class InvalidHeaderValuesError(CsvHelperError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            ErrorCode.INVALID_HEADER_VALUES,
            "invalid header values",
            {"missing": missing},
        )


class CsvFormatError(CsvHelperError):
    """
    Назначение:
        Ошибка критического формата CSV (количество колонок, кавычки и т.п.).
    """

    def __init__(self, code: ErrorCode, message: str, line_no: int | None = None) -> None:
        super().__init__(code, message, {"line_no": line_no})

    @property
    def line_no(self) -> int | None:
        return self.details.get("line_no")


__all__ = [
    "CsvFormatError",
    "CsvHelperError",
    "DuplicatedTagError",
    "ErrorCode",
    "InvalidHeaderSizeError",
    "InvalidHeaderValuesError",
    "MissingRequiredTagError",
    "UninitializedRecordsError",
]
