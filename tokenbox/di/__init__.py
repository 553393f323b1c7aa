"""
Dependency Injection Module
===========================

Usage:
    from tokenbox.di import Container, Symbol

    container = Container()

    # Register providers
    container.register(Engine, Engine, singleton=True)
    container.register(Car, Car, deps=[Engine])
    container.register_value(Symbol("config"), {"port": 3000})

    # Resolve
    car = container.resolve(Car)
"""

from .container import Container, get_container, reset_container
from .errors import (
    CircularDependencyError,
    ContainerError,
    DependencyArityError,
    DependencyNotFoundError,
    InvalidProviderError,
)
from .metadata import (
    class_dependencies,
    class_singleton,
    declare_dependencies,
    forget,
    injectable,
)
from .providers import (
    ClassProvider,
    FactoryProvider,
    Provider,
    ProviderKind,
    ValueProvider,
)
from .tokens import Symbol, Token, format_path, format_token

__all__ = [
    "Container",
    "get_container",
    "reset_container",
    "ContainerError",
    "DependencyNotFoundError",
    "CircularDependencyError",
    "InvalidProviderError",
    "DependencyArityError",
    "ClassProvider",
    "ValueProvider",
    "FactoryProvider",
    "Provider",
    "ProviderKind",
    "Symbol",
    "Token",
    "format_token",
    "format_path",
    "injectable",
    "declare_dependencies",
    "forget",
    "class_dependencies",
    "class_singleton",
]
