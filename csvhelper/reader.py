from __future__ import annotations

import codecs
import csv
import io
import logging
from dataclasses import dataclass
from typing import Iterable, Union

from csvhelper.errors import CsvFormatError, ErrorCode
from csvhelper.logging_setup import getLogger, logEvent

RowSource = Union[str, bytes, Iterable[str]]

logger = getLogger()


@dataclass(frozen=True)
class ReadResult:
    """
    Назначение:
        Результат чтения: либо набор строк, либо структурная ошибка.
        При ошибке records пуст.
    """

    records: tuple[tuple[str, ...], ...]
    error: CsvFormatError | None = None


def _encoding_error(exc: UnicodeDecodeError, line_no: int) -> CsvFormatError:
    return CsvFormatError(
        ErrorCode.ENCODING,
        f"Invalid UTF-8 at line {line_no}: {exc.reason}",
        line_no=line_no,
    )


def _open_source(source: RowSource) -> Iterable[str]:
    if isinstance(source, bytes):
        if source.startswith(codecs.BOM_UTF8):
            source = source[len(codecs.BOM_UTF8):]
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _encoding_error(exc, source[:exc.start].count(b"\n") + 1) from exc
    if isinstance(source, str):
        return io.StringIO(source, newline="")
    return source


def iter_rows(
    source: RowSource,
    *,
    delimiter: str = ",",
    strict_field_count: bool = True,
) -> Iterable[tuple[int, list[str]]]:
    """
    Назначение:
        Читает CSV построчно и валидирует число колонок по первой строке.

    Выходные данные:
        (csv_line_no, row) — номер физической строки, с которой начинается запись.

    Поведение:
        - Пустые строки пропускаются.
        - strict_field_count=True: строка другой ширины -> CsvFormatError(FIELD_COUNT).
        - Ошибки кавычек csv -> CsvFormatError(MALFORMED_CSV).
        - Не-UTF-8 вход (bytes или декодирующий поток) -> CsvFormatError(ENCODING).
    """
    reader = csv.reader(_open_source(source), delimiter=delimiter, strict=True)
    expected_len: int | None = None
    csv_line_no = 1
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except UnicodeDecodeError as exc:
            raise _encoding_error(exc, reader.line_num + 1) from exc
        except csv.Error as exc:
            raise CsvFormatError(
                ErrorCode.MALFORMED_CSV,
                f"Malformed CSV at line {reader.line_num}: {exc}",
                line_no=reader.line_num,
            ) from exc
        start_line_no = csv_line_no
        csv_line_no = reader.line_num + 1
        if not row:
            continue
        if expected_len is None:
            expected_len = len(row)
        elif strict_field_count and len(row) != expected_len:
            raise CsvFormatError(
                ErrorCode.FIELD_COUNT,
                f"Invalid column count at line {start_line_no}: expected {expected_len}, got {len(row)}",
                line_no=start_line_no,
            )
        yield start_line_no, row


def read_records(
    source: RowSource,
    *,
    delimiter: str = ",",
    strict_field_count: bool = True,
) -> ReadResult:
    """
    Назначение:
        Читает таблицу целиком. Ошибки формата не пробрасываются, а возвращаются в ReadResult.
    """
    try:
        rows = iter_rows(source, delimiter=delimiter, strict_field_count=strict_field_count)
        records = tuple(tuple(row) for _, row in rows)
    except CsvFormatError as exc:
        logEvent(logger, logging.WARNING, "reader", f"read failed code={exc.code.value} line={exc.line_no}")
        return ReadResult(records=(), error=exc)
    logEvent(logger, logging.DEBUG, "reader", f"read rows={len(records)}")
    return ReadResult(records=records)
