"""
Core primitives shared across tokenbox.
"""

from .logging import LogFormat, LogLevel, setup_logging

__all__ = [
    "LogFormat",
    "LogLevel",
    "setup_logging",
]
