"""
Translator test execution and verification.

- TestCase: validated, immutable test scenario
- ItemNormalizer: canonical records for comparison
- deep_equal / diff: pass/fail equality and readable diffs
- TranslatorTester: runs a test and classifies the outcome
"""

from .compare import deep_equal, diff, trim_internal
from .fixtures import parse_test_cases, replace_test_cases, serialize_test_cases
from .normalize import ItemNormalizer, NormalizationStats, normalize_item
from .runner import TranslatorTester
from .test_case import TestCase

__all__ = [
    # Model
    "TestCase",
    # Normalization
    "ItemNormalizer",
    "NormalizationStats",
    "normalize_item",
    # Comparison
    "deep_equal",
    "diff",
    "trim_internal",
    # Fixtures
    "parse_test_cases",
    "replace_test_cases",
    "serialize_test_cases",
    # Runner
    "TranslatorTester",
]
