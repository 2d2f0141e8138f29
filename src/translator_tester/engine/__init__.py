"""In-process extraction engine: translators, capabilities and translation jobs."""

from .cancellation import AbortSignal
from .translate import Capabilities, DetectedTranslator, Translate
from .translator import Translator, TranslatorProvider, load_translator

__all__ = [
    "AbortSignal",
    "Capabilities",
    "DetectedTranslator",
    "Translate",
    "Translator",
    "TranslatorProvider",
    "load_translator",
]
