"""Domain types: constants, errors, run schemas and the item field registry."""

from .errors import (
    ErrorCodes,
    TranslationAborted,
    TranslationError,
    TranslatorTestError,
    UnsupportedTestError,
    ValidationError,
)
from .item_schema import ItemSchema, default_schema
from .schemas import RunOutcome, RunResult, RunStatus

__all__ = [
    "ErrorCodes",
    "ItemSchema",
    "RunOutcome",
    "RunResult",
    "RunStatus",
    "TranslationAborted",
    "TranslationError",
    "TranslatorTestError",
    "UnsupportedTestError",
    "ValidationError",
    "default_schema",
]
