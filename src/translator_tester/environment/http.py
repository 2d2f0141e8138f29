"""
HTTP-backed web translation environment.

Fetches the page with httpx using the tester's cookie jar, parses it with
BeautifulSoup and runs the engine's detect-then-translate pipeline on the
static document.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx
from bs4 import BeautifulSoup

from translator_tester.domain.constants import TEST_TYPE_WEB
from translator_tester.domain.schemas import RunResult
from translator_tester.engine.cancellation import AbortSignal
from translator_tester.engine.translate import Translate

from .base import WebTranslationEnvironment

if TYPE_CHECKING:
    from translator_tester.testing.runner import TranslatorTester

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """A fetched, parsed page."""
    url: str
    document: BeautifulSoup
    status_code: int


class HTTPWebTranslationEnvironment(WebTranslationEnvironment):
    """
    Static-document environment.

    Usage:
        env = HTTPWebTranslationEnvironment()
        tester = TranslatorTester(translator, web_environment=env)
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        parser: str = "html.parser",
    ):
        """
        Args:
            transport: httpx transport override (e.g. httpx.MockTransport in tests)
            parser: BeautifulSoup parser name
        """
        self.transport = transport
        self.parser = parser

    async def fetch_page(self, url: str, *, tester: "TranslatorTester") -> Page:
        config = tester.config
        async with httpx.AsyncClient(
            cookies=tester.cookie_jar,
            headers={"User-Agent": config.user_agent},
            timeout=config.http_timeout,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            tester.cookie_jar.update(client.cookies)

        final_url = str(response.url)
        if final_url != url:
            logger.debug(f"{url} redirected to {final_url}")

        return Page(
            url=final_url,
            document=BeautifulSoup(response.text, self.parser),
            status_code=response.status_code,
        )

    async def wait_for_load(self, page: Page, *, tester: "TranslatorTester") -> bool:
        # static document, nothing left to load
        return True

    async def run_translation(
        self,
        page: Page,
        *,
        tester: "TranslatorTester",
        handlers: dict[str, Callable[..., Any]],
        signal: AbortSignal,
    ) -> RunResult:
        config = tester.config
        translate = Translate(
            TEST_TYPE_WEB,
            signal=signal,
            cookies=tester.cookie_jar,
            user_agent=config.user_agent,
            http_timeout=config.http_timeout,
            transport=self.transport,
        )
        translate.set_document(page.document, page.url)
        translate.set_translator_provider(tester.translator_provider)
        translate.set_translator(tester.translator)
        for name, handler in handlers.items():
            translate.set_handler(name, handler)

        detected = await translate.get_translators(check_set_translator=True)
        if not detected:
            return RunResult(items=None, reason="Detection failed")

        detected_item_type = detected[0].item_type
        items = await translate.translate()
        return RunResult(detected_item_type=detected_item_type, items=items)

    async def destroy(self, page: Page) -> None:
        page.document.decompose()
