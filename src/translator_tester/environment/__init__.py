"""Web translation environments."""

from .base import WebTranslationEnvironment, open_page
from .http import HTTPWebTranslationEnvironment, Page

__all__ = [
    "HTTPWebTranslationEnvironment",
    "Page",
    "WebTranslationEnvironment",
    "open_page",
]
