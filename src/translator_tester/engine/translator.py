"""
Translator definitions and loading.

A translator is a Python module that exposes two functions and a metadata
mapping:

    TRANSLATOR_INFO = {
        "translatorID": "...",
        "label": "Example Journal",
        "target": r"^https?://journal\\.example\\.org/",
        "translatorType": 4,
    }

    def detect(caps): ...        # item type, "multiple", True, or a falsy value
    def extract(caps): ...       # list of records (or caps.item_done(record))

Both functions may be plain or ``async def``. They only see the
Capabilities object they are given.
"""

import importlib.util
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from translator_tester.domain.constants import TRANSLATOR_TYPE_FLAGS
from translator_tester.domain.errors import ErrorCodes, TranslationError

logger = logging.getLogger(__name__)


class TranslatorBehavior(Protocol):
    """What translator code must implement."""

    def detect(self, caps: Any) -> Any: ...

    def extract(self, caps: Any) -> Any: ...


@dataclass
class Translator:
    """A loaded translator: metadata, source code and behaviour."""
    translator_id: str
    label: str
    behavior: TranslatorBehavior
    target: str | None = None
    translator_type: int = 0
    code: str = ""
    path: Path | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def supports(self, kind: str) -> bool:
        """Whether the translatorType bitmask covers a test kind."""
        flag = TRANSLATOR_TYPE_FLAGS.get(kind, 0)
        return bool(self.translator_type & flag)

    def matches_url(self, url: str) -> bool:
        """Target pattern check (no target = matches everything)."""
        if not self.target:
            return True
        try:
            return re.search(self.target, url) is not None
        except re.error as e:
            logger.warning(f"Invalid target pattern in {self.label}: {e}")
            return False


def load_translator(path: Path) -> Translator:
    """
    Import a translator file.

    Args:
        path: Path to the translator's .py file

    Returns:
        Translator

    Raises:
        TranslationError: If the file cannot be imported or lacks detect/extract
    """
    path = Path(path)
    try:
        code = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TranslationError(
            ErrorCodes.TRANSLATOR_LOAD_FAILED, f"Cannot read translator: {e}", path=str(path)
        ) from e

    module_name = f"translator_{re.sub(r'[^0-9A-Za-z_]', '_', path.stem)}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise TranslationError(
            ErrorCodes.TRANSLATOR_LOAD_FAILED, "Not an importable file", path=str(path)
        )

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise TranslationError(
            ErrorCodes.TRANSLATOR_LOAD_FAILED, f"Translator failed to load: {e}", path=str(path)
        ) from e

    for name in ("detect", "extract"):
        if not callable(getattr(module, name, None)):
            raise TranslationError(
                ErrorCodes.TRANSLATOR_LOAD_FAILED, f"Translator has no {name}()", path=str(path)
            )

    info: dict[str, Any] = dict(getattr(module, "TRANSLATOR_INFO", None) or {})
    return Translator(
        translator_id=str(info.get("translatorID") or path.stem),
        label=str(info.get("label") or path.stem),
        behavior=module,
        target=info.get("target") or None,
        translator_type=int(info.get("translatorType") or 0),
        code=code,
        path=path,
        metadata=info,
    )


class TranslatorProvider:
    """
    In-memory translator registry.

    Usage:
        provider = TranslatorProvider([translator])
        code = provider.get_code_for_translator(translator)
    """

    def __init__(self, translators: list[Translator] | None = None):
        self._translators: dict[str, Translator] = {}
        for translator in translators or []:
            self.add(translator)

    def add(self, translator: Translator) -> None:
        self._translators[translator.translator_id] = translator

    def get(self, translator_id: str) -> Translator | None:
        return self._translators.get(translator_id)

    def all(self) -> list[Translator]:
        return list(self._translators.values())

    def get_code_for_translator(self, translator: Translator) -> str:
        """Source code of a translator (registered copy wins)."""
        registered = self._translators.get(translator.translator_id, translator)
        if registered.code:
            return registered.code
        if registered.path is not None:
            return registered.path.read_text(encoding="utf-8")
        return ""
