"""
Pytest fixtures for the translator tester tests.

- Sample records (raw and normalized)
- Translator factory (detect/extract given as plain functions)
- FakeWebEnvironment: scripted page environment for runner tests
"""

from collections.abc import Awaitable, Callable
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from translator_tester.core.config import TesterConfig
from translator_tester.domain.constants import TRANSLATOR_TYPE_IMPORT, TRANSLATOR_TYPE_WEB
from translator_tester.domain.schemas import RunResult
from translator_tester.engine.cancellation import AbortSignal
from translator_tester.engine.translator import Translator
from translator_tester.environment.base import WebTranslationEnvironment

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Project root."""
    return Path(__file__).parent.parent


@pytest.fixture
def translators_dir() -> Path:
    """Example translator files."""
    return Path(__file__).parent / "fixtures" / "translators"


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def raw_article() -> dict:
    """Journal article as a translator emits it."""
    return {
        "itemType": "journalArticle",
        "title": "  Estuarine   sediment transport ",
        "publicationTitle": "Journal of Coastal Research",
        "volume": "12",
        "issue": "",
        "date": "2021-03-04",
        "accessDate": "2026-10-18T09:30:00Z",
        "websiteTitle": "not valid for articles",
        "bogusField": "unknown to the registry",
        "creators": [
            {"firstName": "Ana", "lastName": "Souza", "creatorType": "author"},
        ],
        "tags": ["sediment", {"tag": "estuary"}, {"tag": "  coast "}],
        "attachments": [
            {
                "title": "Full Text Snapshot",
                "document": object(),
                "url": "https://journal.example.org/article/1",
            },
            {"title": "PDF", "mimeType": "application/pdf", "complete": True},
        ],
        "notes": [],
        "seeAlso": [],
    }


@pytest.fixture
def normalized_article() -> dict:
    """raw_article after normalization."""
    return {
        "itemType": "journalArticle",
        "title": "  Estuarine   sediment transport ",
        "publicationTitle": "Journal of Coastal Research",
        "volume": "12",
        "date": "2021-03-04",
        "creators": [
            {"firstName": "Ana", "lastName": "Souza", "creatorType": "author"},
        ],
        "tags": [{"tag": "coast"}, {"tag": "estuary"}, {"tag": "sediment"}],
        "attachments": [
            {"title": "Full Text Snapshot", "mimeType": "text/html"},
            {"title": "PDF", "mimeType": "application/pdf"},
        ],
        "notes": [],
        "seeAlso": [],
    }


# =============================================================================
# Translator Fixtures
# =============================================================================

def make_translator(
    detect: Callable[[Any], Any] | None = None,
    extract: Callable[[Any], Any] | None = None,
    translator_type: int = TRANSLATOR_TYPE_WEB,
    target: str | None = None,
    code: str = "",
) -> Translator:
    """Translator whose behaviour is the given functions."""
    behavior = SimpleNamespace(
        detect=detect or (lambda caps: "journalArticle"),
        extract=extract or (lambda caps: []),
    )
    return Translator(
        translator_id="test-translator",
        label="Test Translator",
        behavior=behavior,
        target=target,
        translator_type=translator_type,
        code=code,
    )


@pytest.fixture
def translator_factory() -> Callable[..., Translator]:
    return make_translator


@pytest.fixture
def import_translator() -> Translator:
    """Import translator that turns 'TI  - title' lines into records."""

    def detect(caps: Any) -> bool:
        return caps.string.startswith("TY  - ")

    def extract(caps: Any) -> list[dict]:
        items = []
        for block in caps.string.split("ER  -"):
            lines = [line for line in block.splitlines() if line.strip()]
            if not lines:
                continue
            item = {"itemType": "journalArticle"}
            for line in lines:
                tag, _, value = line.partition("  - ")
                if tag == "TI":
                    item["title"] = value.strip()
                elif tag == "JO":
                    item["publicationTitle"] = value.strip()
            items.append(item)
        return items

    return make_translator(detect, extract, translator_type=TRANSLATOR_TYPE_IMPORT)


@pytest.fixture
def fast_config() -> TesterConfig:
    """Short limits so timeout and defer tests finish quickly."""
    return TesterConfig(run_timeout=0.5, default_defer_delay=0.01)


# =============================================================================
# Web Environment Fixtures
# =============================================================================

Scenario = Callable[[dict[str, Callable[..., Any]], AbortSignal], Awaitable[RunResult]]


class FakeWebEnvironment(WebTranslationEnvironment):
    """
    Scripted environment.

    scenario(handlers, signal) plays the part of translator code and
    returns the RunResult.
    """

    def __init__(self, scenario: Scenario, loaded: bool = True, fail_fetch: bool = False):
        self.scenario = scenario
        self.loaded = loaded
        self.fail_fetch = fail_fetch
        self.fetched: list[str] = []
        self.destroyed: list[Any] = []
        self.wait_calls = 0

    async def fetch_page(self, url: str, *, tester: Any) -> Any:
        if self.fail_fetch:
            raise ConnectionError(f"Cannot reach {url}")
        self.fetched.append(url)
        return {"url": url}

    async def wait_for_load(self, page: Any, *, tester: Any) -> bool:
        self.wait_calls += 1
        return self.loaded

    async def run_translation(self, page: Any, *, tester: Any, handlers: dict, signal: AbortSignal) -> RunResult:
        return await self.scenario(handlers, signal)

    async def destroy(self, page: Any) -> None:
        self.destroyed.append(page)


@pytest.fixture
def fake_environment_factory() -> Callable[..., FakeWebEnvironment]:
    return FakeWebEnvironment
