"""Utility functions for the falling blocks game."""
from .config import load_config, merge_config, DEFAULT_CONFIG
from .logger import Logger, MetricsTracker

__all__ = [
    "load_config",
    "merge_config",
    "DEFAULT_CONFIG",
    "Logger",
    "MetricsTracker",
]
