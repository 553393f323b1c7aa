"""
Instrumentation Module
======================

Opt-in logging wrappers for container-managed objects.
"""

from .proxy import LoggingProxy, instrument, instrumented_provider

__all__ = [
    "LoggingProxy",
    "instrument",
    "instrumented_provider",
]
