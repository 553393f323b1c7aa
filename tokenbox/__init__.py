"""
tokenbox
========

A small dependency injection container: register providers under tokens,
resolve them into instances with declared dependencies, cache singletons,
and fail loudly on missing, circular, or malformed registrations.
"""

__version__ = "1.0.0"

from tokenbox.di import (
    CircularDependencyError,
    ClassProvider,
    Container,
    ContainerError,
    DependencyArityError,
    DependencyNotFoundError,
    FactoryProvider,
    InvalidProviderError,
    Symbol,
    ValueProvider,
    get_container,
    injectable,
)

__all__ = [
    "__version__",
    "Container",
    "get_container",
    "ClassProvider",
    "ValueProvider",
    "FactoryProvider",
    "Symbol",
    "injectable",
    "ContainerError",
    "DependencyNotFoundError",
    "CircularDependencyError",
    "InvalidProviderError",
    "DependencyArityError",
]
