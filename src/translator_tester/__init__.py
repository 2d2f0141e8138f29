"""Run and verify the recorded test cases of bibliographic translators."""

from translator_tester.core.config import TesterConfig, load_config
from translator_tester.domain.schemas import RunOutcome, RunResult, RunStatus
from translator_tester.engine.translator import Translator, TranslatorProvider, load_translator
from translator_tester.environment.base import WebTranslationEnvironment
from translator_tester.environment.http import HTTPWebTranslationEnvironment
from translator_tester.testing.runner import TranslatorTester
from translator_tester.testing.test_case import TestCase

__version__ = "0.1.0"

__all__ = [
    "HTTPWebTranslationEnvironment",
    "RunOutcome",
    "RunResult",
    "RunStatus",
    "TestCase",
    "TesterConfig",
    "Translator",
    "TranslatorProvider",
    "TranslatorTester",
    "WebTranslationEnvironment",
    "load_config",
    "load_translator",
]
