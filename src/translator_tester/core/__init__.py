"""
Core layer: tester configuration.
"""

from .config import TesterConfig, load_config

__all__ = ["TesterConfig", "load_config"]
