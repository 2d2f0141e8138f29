"""
Web translation environment interface.

The runner never loads pages itself. It asks an environment to:
1. fetch_page()      acquire a page handle for a URL
2. wait_for_load()   say whether the page is known to be fully loaded
3. run_translation() run detection + extraction on the page
4. destroy()         release everything tied to the page handle

Browser-backed, headless or mocked environments all implement these four
operations; HTTPWebTranslationEnvironment is the default.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from translator_tester.domain.schemas import RunResult
from translator_tester.engine.cancellation import AbortSignal

if TYPE_CHECKING:
    from translator_tester.testing.runner import TranslatorTester


class WebTranslationEnvironment(ABC):
    """Abstract page environment for web tests."""

    @abstractmethod
    async def fetch_page(self, url: str, *, tester: "TranslatorTester") -> Any:
        """
        Acquire a page handle.

        Args:
            url: Page URL
            tester: Calling tester (cookie jar, config, translator)

        Returns:
            Opaque page handle, passed back to the other operations
        """

    @abstractmethod
    async def wait_for_load(self, page: Any, *, tester: "TranslatorTester") -> bool:
        """
        Returns:
            True if the page is fully loaded, False if unknown (caller may wait)
        """

    @abstractmethod
    async def run_translation(
        self,
        page: Any,
        *,
        tester: "TranslatorTester",
        handlers: dict[str, Callable[..., Any]],
        signal: AbortSignal,
    ) -> RunResult:
        """
        Run the tester's translator on the page.

        Args:
            page: Handle returned by fetch_page()
            tester: Calling tester
            handlers: "debug", "error" and "select" handlers for the engine
            signal: Abort signal for the run

        Returns:
            RunResult(detected_item_type, items, reason)
        """

    async def destroy(self, page: Any) -> None:
        """Release the page handle (no-op by default)."""
        return None


@asynccontextmanager
async def open_page(
    environment: WebTranslationEnvironment,
    url: str,
    tester: "TranslatorTester",
) -> AsyncIterator[Any]:
    """
    fetch_page() / destroy() pair.

    Usage:
        async with open_page(env, url, tester) as page:
            ...
    """
    page = await environment.fetch_page(url, tester=tester)
    try:
        yield page
    finally:
        await environment.destroy(page)
