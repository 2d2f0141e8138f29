"""
Tester configuration.

Defaults come from domain.constants; a YAML file (``tester:`` section)
can override them:

    tester:
      run_timeout: 15
      default_defer_delay: 5
      max_select_items: 3
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, ClassVar

import yaml

from translator_tester.domain.constants import (
    DEFAULT_DEFER_DELAY,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_USER_AGENT,
    MAX_SELECT_ITEMS,
    TEST_RUN_TIMEOUT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TesterConfig:
    """Run limits and HTTP settings for a TranslatorTester."""
    __test__: ClassVar[bool] = False

    run_timeout: float = TEST_RUN_TIMEOUT
    default_defer_delay: float = DEFAULT_DEFER_DELAY
    max_select_items: int = MAX_SELECT_ITEMS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TesterConfig":
        """Build from a mapping, ignoring unknown keys."""
        known = {f.name: f for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown tester config key: {key}")
                continue
            default = known[key].default
            values[key] = type(default)(value)
        return cls(**values)


def load_config(path: Path | None = None) -> TesterConfig:
    """
    Load TesterConfig from a YAML file.

    Args:
        path: YAML path (None or missing file = defaults)

    Returns:
        TesterConfig
    """
    if path is None or not path.exists():
        if path is not None:
            logger.info(f"Config file {path} not found, using defaults")
        return TesterConfig()

    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    return TesterConfig.from_dict(data.get("tester") or {})
