"""
Minimal in-process extraction engine.

Runs a translator's detect()/extract() against a document, string or
search query. Translator code receives an explicit Capabilities object;
its side-channel emissions (debug, error, selection requests, finished
items) go to handlers registered with set_handler().

Synchronous translator functions run in a worker thread so the event loop
(and the caller's timeout) stays responsive. They observe cancellation
through the AbortSignal on every capability call.
"""

import asyncio
import concurrent.futures
import inspect
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx
from bs4 import BeautifulSoup

from translator_tester.domain.constants import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_USER_AGENT,
    TEST_TYPE_IMPORT,
    TEST_TYPE_SEARCH,
    TEST_TYPE_WEB,
)
from translator_tester.domain.errors import ErrorCodes, TranslationError

from .cancellation import AbortSignal
from .translator import Translator, TranslatorProvider

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]

HANDLER_NAMES = ("debug", "error", "select", "itemDone")


@dataclass
class Capabilities:
    """
    Everything translator code may use.

    kind: "web", "import" or "search"
    document / url: parsed page (web)
    string: raw input (import)
    search: structured query (search)
    """
    kind: str
    translate: "Translate" = field(repr=False)
    document: Any = None
    url: str | None = None
    string: str | None = None
    search: Any = None

    def debug(self, message: Any) -> None:
        self.translate.signal.raise_if_aborted()
        self.translate.emit("debug", message)

    def select_items(
        self,
        items: dict[str, Any],
        callback: Callable[[dict[str, Any]], Any] | None = None,
    ) -> Any:
        """
        Ask the caller to choose among candidates.

        Returns the chosen subset; ``callback`` (if given) is also invoked
        with it. A select handler given a callback must invoke it, since
        translate() does not finish until the callback has run.
        """
        self.translate.signal.raise_if_aborted()
        if callback is not None:
            callback = self.translate.track_callback(callback)
        handler = self.translate.handlers.get("select")
        if handler is None:
            if callback is not None:
                callback(items)
            return items
        return handler(self.translate, items, callback)

    def item_done(self, item: dict[str, Any]) -> None:
        """Report one finished record."""
        self.translate.signal.raise_if_aborted()
        self.translate.add_item(item)

    async def request_document(self, url: str) -> BeautifulSoup:
        """Fetch and parse another page with the caller's cookies."""
        self.translate.signal.raise_if_aborted()
        text = await self.translate.request_text(url)
        self.translate.signal.raise_if_aborted()
        return BeautifulSoup(text, "html.parser")


@dataclass(frozen=True)
class DetectedTranslator:
    """A translator whose detect() matched, with the type it reported."""
    translator: Translator
    item_type: Any


class Translate:
    """
    One translation job.

    Usage:
        translate = Translate("web", signal=signal)
        translate.set_document(soup, url)
        translate.set_translator(translator)
        found = await translate.get_translators(check_set_translator=True)
        items = await translate.translate()
    """

    def __init__(
        self,
        kind: str,
        signal: AbortSignal | None = None,
        cookies: httpx.Cookies | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if kind not in (TEST_TYPE_WEB, TEST_TYPE_IMPORT, TEST_TYPE_SEARCH):
            raise ValueError(f"Unsupported translation kind: {kind}")

        self.kind = kind
        self.signal = signal or AbortSignal()
        self.cookies = cookies if cookies is not None else httpx.Cookies()
        self.user_agent = user_agent
        self.http_timeout = http_timeout
        self.transport = transport

        self.handlers: dict[str, Handler] = {}
        self.translator: Translator | None = None
        self.provider: TranslatorProvider | None = None

        self._document: Any = None
        self._url: str | None = None
        self._string: str | None = None
        self._search: Any = None
        self._items: list[dict[str, Any]] = []
        self._pending: list[concurrent.futures.Future] = []
        self._detected: list[DetectedTranslator] = []

    # =========================================================================
    # Setup
    # =========================================================================

    def set_document(self, document: Any, url: str) -> None:
        self._document = document
        self._url = url

    def set_string(self, text: str) -> None:
        self._string = text

    def set_search(self, query: Any) -> None:
        self._search = query

    def set_translator(self, translator: Translator) -> None:
        self.translator = translator

    def set_translator_provider(self, provider: TranslatorProvider) -> None:
        self.provider = provider

    def set_handler(self, name: str, handler: Handler) -> None:
        if name not in HANDLER_NAMES:
            raise ValueError(f"Unknown handler: {name}")
        self.handlers[name] = handler

    def emit(self, name: str, *args: Any) -> Any:
        handler = self.handlers.get(name)
        if handler is None:
            if name == "debug":
                logger.debug(*args)
            return None
        return handler(self, *args)

    def add_item(self, item: dict[str, Any]) -> None:
        self._items.append(item)
        self.emit("itemDone", item)

    def track_callback(self, callback: Callable[..., Any]) -> Callable[..., None]:
        """
        Wrap a selection callback so translate() waits for it.

        The wrapper may be invoked from any thread (handlers usually answer
        through loop.call_soon_threadsafe). Its return value, awaited if it
        is awaitable, and any exception surface in translate().
        """
        answered: concurrent.futures.Future = concurrent.futures.Future()
        self._pending.append(answered)

        def deliver(*args: Any) -> None:
            if answered.done():
                return
            try:
                answered.set_result(callback(*args))
            except Exception as e:
                answered.set_exception(e)

        return deliver

    def capabilities(self) -> Capabilities:
        return Capabilities(
            kind=self.kind,
            translate=self,
            document=self._document,
            url=self._url,
            string=self._string,
            search=self._search,
        )

    # =========================================================================
    # Detection / Translation
    # =========================================================================

    def _candidates(self, check_set_translator: bool) -> list[Translator]:
        if check_set_translator and self.translator is not None:
            return [self.translator]
        if self.provider is None:
            if self.translator is not None:
                return [self.translator]
            raise TranslationError(ErrorCodes.NO_TRANSLATOR, "No translator set")
        return [t for t in self.provider.all() if t.supports(self.kind)]

    async def get_translators(self, check_set_translator: bool = True) -> list[DetectedTranslator]:
        """
        Run detection.

        Args:
            check_set_translator: Only try the translator given to set_translator()

        Returns:
            Translators whose detect() returned a truthy value, in try order
        """
        return await self.detect_with(self._candidates(check_set_translator))

    async def detect_with(self, translators: Iterable[Translator]) -> list[DetectedTranslator]:
        """Run detect() on exactly ``translators``."""
        found: list[DetectedTranslator] = []

        for translator in translators:
            if self.kind == TEST_TYPE_WEB and self._url and not translator.matches_url(self._url):
                logger.debug(f"{translator.label}: target does not match {self._url}")
                continue

            item_type = await self._call(translator, "detect")
            if item_type:
                found.append(DetectedTranslator(translator=translator, item_type=item_type))

        self._detected = found
        return found

    async def detect(self) -> Any:
        """Detected item type of the first matching translator (None if none)."""
        found = await self.get_translators(check_set_translator=True)
        return found[0].item_type if found else None

    async def translate(self) -> list[dict[str, Any]]:
        """
        Run extract() on the set translator (or the first detected one).

        Returns:
            Records in the order they were produced

        Raises:
            TranslationError: If no translator is available or extract() fails
        """
        translator = self.translator
        if translator is None and self._detected:
            translator = self._detected[0].translator
        if translator is None:
            raise TranslationError(ErrorCodes.NO_TRANSLATOR, "No translator available")

        self._items = []
        self._pending = []
        returned = await self._call(translator, "extract")
        if returned is not None:
            if isinstance(returned, dict):
                returned = [returned]
            for item in returned:
                self.add_item(item)

        await self._wait_for_callbacks(translator)
        self.signal.raise_if_aborted()
        return list(self._items)

    async def _wait_for_callbacks(self, translator: Translator) -> None:
        # callbacks may select again, which appends to _pending
        while self._pending:
            answered = self._pending.pop(0)
            try:
                result = await asyncio.wrap_future(answered)
                if inspect.isawaitable(result):
                    await result
            except TranslationError:
                raise
            except Exception as e:
                raise self._translator_error(translator, "select", e) from e
            self.signal.raise_if_aborted()

    async def _call(self, translator: Translator, name: str) -> Any:
        self.signal.raise_if_aborted()
        fn = getattr(translator.behavior, name)
        caps = self.capabilities()

        try:
            if inspect.iscoroutinefunction(fn):
                result = await fn(caps)
            else:
                result = await asyncio.to_thread(fn, caps)
                if inspect.isawaitable(result):
                    result = await result
        except TranslationError:
            raise
        except Exception as e:
            raise self._translator_error(translator, name, e) from e

        self.signal.raise_if_aborted()
        return result

    def _translator_error(self, translator: Translator, step: str, error: Exception) -> TranslationError:
        self.emit("error", error)
        return TranslationError(
            ErrorCodes.TRANSLATOR_ERROR,
            f"{type(error).__name__}: {error}",
            translator=translator.label,
            step=step,
        )

    # =========================================================================
    # HTTP
    # =========================================================================

    async def request_text(self, url: str) -> str:
        """GET a URL with this job's cookies and return the body text."""
        async with httpx.AsyncClient(
            cookies=self.cookies,
            headers={"User-Agent": self.user_agent},
            timeout=self.http_timeout,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            self.cookies.update(client.cookies)
            return response.text
