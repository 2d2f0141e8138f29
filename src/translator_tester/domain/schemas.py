"""
Data schemas for test runs.

- RunResult: what one execution attempt produced (transient)
- RunOutcome: what the runner hands back to the caller per test
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from translator_tester.testing.test_case import TestCase


class RunStatus(str, Enum):
    """Final status of one test run."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class RunResult:
    """
    Raw result of one execution attempt.

    items is None when nothing was produced, "multiple" when the translator
    went through a selection, otherwise the list of extracted records.
    """
    detected_item_type: str | bool | None = None
    items: list[dict[str, Any]] | str | None = None
    reason: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """
    Result of TranslatorTester.run().

    reason is always set on failure. updated_test is set whenever the run
    produced concrete items, including some failures (for diffing).
    """
    status: RunStatus
    reason: str | None = None
    updated_test: "TestCase | None" = None

    @classmethod
    def success(cls, updated_test: "TestCase | None" = None) -> "RunOutcome":
        return cls(status=RunStatus.SUCCESS, updated_test=updated_test)

    @classmethod
    def failure(
        cls,
        reason: str | None,
        updated_test: "TestCase | None" = None,
    ) -> "RunOutcome":
        return cls(
            status=RunStatus.FAILURE,
            reason=reason or "Unknown failure",
            updated_test=updated_test,
        )

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """JSON serialization."""
        data: dict[str, Any] = {"status": self.status.value}
        if self.reason is not None:
            data["reason"] = self.reason
        if self.updated_test is not None:
            data["updatedTest"] = self.updated_test.to_dict()
        return data
