from csvhelper.config import LoadedSettings, MarshalConfig, Settings, ValidationConfig, load_settings
from csvhelper.errors import (
    CsvFormatError,
    CsvHelperError,
    DuplicatedTagError,
    ErrorCode,
    InvalidHeaderSizeError,
    InvalidHeaderValuesError,
    MissingRequiredTagError,
    UninitializedRecordsError,
)
from csvhelper.helper import CsvHelper, new
from csvhelper.logging_setup import configureFromSettings, configureLogging
from csvhelper.schema import COLUMN_TAG, ColumnField, ModelSchema, column, get_schema

__all__ = [
    "COLUMN_TAG",
    "ColumnField",
    "CsvFormatError",
    "CsvHelper",
    "CsvHelperError",
    "DuplicatedTagError",
    "ErrorCode",
    "InvalidHeaderSizeError",
    "InvalidHeaderValuesError",
    "LoadedSettings",
    "MarshalConfig",
    "MissingRequiredTagError",
    "ModelSchema",
    "Settings",
    "UninitializedRecordsError",
    "ValidationConfig",
    "column",
    "configureFromSettings",
    "configureLogging",
    "get_schema",
    "load_settings",
    "new",
]
