"""
Error definitions for the translator tester.

- Construction errors (bad test-case fields) → ValidationError, never coerced
- Run-time failures are reported as RunOutcome failures by the runner;
  the exceptions below only travel between the engine and the runner
"""

from typing import Any


class TranslatorTestError(Exception):
    """
    Base error carrying a stable code plus keyword context.

    Usage:
        raise ValidationError(ErrorCodes.INVALID_DEFER, "Invalid defer", defer="soon")
    """

    def __init__(self, code: str, message: str = "", **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"[{self.code}]"]
        if self.message:
            parts.append(self.message)
        if self.context:
            parts.append("(" + ", ".join(f"{k}={v!r}" for k, v in self.context.items()) + ")")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """For logs / JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class ValidationError(TranslatorTestError, ValueError):
    """A test-case field does not have the representation its type requires."""


class UnsupportedTestError(TranslatorTestError):
    """The test kind cannot be run by this tester."""


class TranslationError(TranslatorTestError):
    """Translator code failed, or no translator could be run."""


class TranslationAborted(TranslationError):
    """The run's cancellation signal fired while translator code was working."""


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """Error code constants."""

    # === Test case validation ===
    INVALID_TEST_TYPE = "INVALID_TEST_TYPE"
    INVALID_TEST_INPUT = "INVALID_TEST_INPUT"
    INVALID_DEFER = "INVALID_DEFER"
    INVALID_DETECTED_ITEM_TYPE = "INVALID_DETECTED_ITEM_TYPE"
    INVALID_ITEMS = "INVALID_ITEMS"
    NO_URL = "NO_URL"

    # === Run ===
    EXPORT_UNSUPPORTED = "EXPORT_UNSUPPORTED"
    UNKNOWN_TEST_TYPE = "UNKNOWN_TEST_TYPE"

    # === Engine ===
    TRANSLATOR_ERROR = "TRANSLATOR_ERROR"
    NO_TRANSLATOR = "NO_TRANSLATOR"
    TRANSLATOR_LOAD_FAILED = "TRANSLATOR_LOAD_FAILED"
    ABORTED = "ABORTED"


def describe(error: BaseException) -> str:
    """
    Human-readable reason for a run failure.

    Tester errors report their message without the code prefix; anything
    else falls back to ``str()`` (or the class name when that is empty).
    """
    if isinstance(error, TranslatorTestError) and error.message:
        return error.message
    return str(error) or type(error).__name__
