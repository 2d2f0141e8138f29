"""
Embedded test fixtures.

Translators carry their tests in their own source, between two markers:

    /** BEGIN TEST CASES **/
    var testCases = [
        {"type": "web", "url": "...", "items": [...]}
    ];
    /** END TEST CASES **/

A missing block or unparseable JSON means "no tests", never an error.
"""

import json
import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from translator_tester.domain.constants import TEST_CASES_BEGIN_MARKER, TEST_CASES_END_MARKER

if TYPE_CHECKING:
    from .test_case import TestCase

logger = logging.getLogger(__name__)

_ASSIGNMENT_PREFIX = re.compile(r"^\s*(?:(?:var|let|const)\s+)?testCases\s*=\s*")
_STATEMENT_END = re.compile(r";\s*$")


def parse_test_cases(code: str) -> list[Any]:
    """
    Extract the raw test-case configurations from translator source.

    Args:
        code: Translator source code

    Returns:
        List of raw test configurations (empty if none could be read)
    """
    start = code.find(TEST_CASES_BEGIN_MARKER)
    end = code.find(TEST_CASES_END_MARKER)
    if start == -1 or end == -1 or end < start:
        return []

    body = code[start + len(TEST_CASES_BEGIN_MARKER):end]
    body = _ASSIGNMENT_PREFIX.sub("", body, count=1)
    body = _STATEMENT_END.sub("", body, count=1)

    try:
        tests = json.loads(body)
    except json.JSONDecodeError as e:
        logger.debug(f"Discarding unparseable test cases: {e}")
        return []

    if not isinstance(tests, list):
        logger.debug("Discarding non-array testCases object")
        return []

    return tests


def serialize_test_cases(tests: Iterable["TestCase"]) -> str:
    """
    Render tests as a fixture block, markers included.

    Args:
        tests: Test cases to write

    Returns:
        Block suitable for replacing the existing one in translator source
    """
    payload = json.dumps([test.to_dict() for test in tests], indent="\t", ensure_ascii=False)
    return f"{TEST_CASES_BEGIN_MARKER}\nvar testCases = {payload}\n;\n{TEST_CASES_END_MARKER}"


def replace_test_cases(code: str, tests: Iterable["TestCase"]) -> str:
    """
    Replace (or append) the fixture block in translator source.

    Args:
        code: Translator source code
        tests: Test cases to write

    Returns:
        Updated source code
    """
    block = serialize_test_cases(tests)
    start = code.find(TEST_CASES_BEGIN_MARKER)
    end = code.find(TEST_CASES_END_MARKER)

    if start == -1 or end == -1 or end < start:
        return code.rstrip("\n") + "\n\n" + block + "\n"

    return code[:start] + block + code[end + len(TEST_CASES_END_MARKER):]
