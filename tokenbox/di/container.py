"""
Dependency Injection Container
==============================

A lightweight dependency injection container mapping tokens to providers
and resolving them into instances on demand.

Features:
    - Class, value, and factory providers
    - Transient and singleton lifetimes
    - Explicit dependency declaration (registration options or class metadata)
    - Circular dependency detection with the full resolution path
    - Constructor arity validation

Usage:
    container = Container()
    container.register(Engine, Engine)
    container.register(Car, Car, deps=[Engine])
    container.register_value("config", {"port": 3000})
    container.register_factory("db", lambda c: connect(c.resolve("config")), singleton=True)

    car = container.resolve(Car)

The container is not thread-safe. Registry mutation while a resolution is in
progress is undefined; confine a container to one thread or serialize
registration externally.
"""

from __future__ import annotations

import inspect
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

import structlog

from tokenbox.config import Settings, get_settings

from .errors import (
    CircularDependencyError,
    ContainerError,
    DependencyArityError,
    DependencyNotFoundError,
    InvalidProviderError,
)
from .metadata import class_dependencies
from .providers import (
    ClassProvider,
    FactoryProvider,
    ProviderKind,
    Registration,
    ValueProvider,
    is_provider,
    is_singleton,
    normalize_provider,
)
from .tokens import format_token

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ResolutionPath = Tuple[Hashable, ...]


def _describe_arity(signature: inspect.Signature) -> str:
    required = optional = 0
    variadic = False
    for param in signature.parameters.values():
        if param.kind == param.VAR_POSITIONAL:
            variadic = True
        elif param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            if param.default is param.empty:
                required += 1
            else:
                optional += 1

    if variadic:
        return f"at least {required}"
    if optional:
        return f"{required} to {required + optional}"
    return str(required)


class Container:
    """Dependency injection container.

    Holds one registration per token. Re-registering a token replaces the
    previous registration together with any cached singleton.

    Example:
        container = Container()

        container.register_class(UserRepository, deps=["db"], singleton=True)
        container.register_factory("db", lambda c: Database(c.resolve("dsn")))
        container.register_value("dsn", "postgresql://localhost/app")

        repo = container.resolve("UserRepository")
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize empty container.

        Args:
            settings: Container settings; defaults to the environment settings
        """
        self._settings = settings if settings is not None else get_settings()
        self._registry: Dict[Hashable, Registration] = {}
        self._active_resolutions = 0

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(
        self,
        token: Hashable,
        provider: Any,
        *,
        singleton: Optional[bool] = None,
        deps: Optional[Sequence[Hashable]] = None,
    ) -> "Container":
        """Register a provider for ``token``.

        ``provider`` may be a ``ClassProvider``/``ValueProvider``/
        ``FactoryProvider``, a mapping with one ``use_class``/``use_value``/
        ``use_factory`` key, or a class. Options apply to the class form only.

        Args:
            token: Registry key (class, string, or Symbol)
            provider: Provider or class
            singleton: Cache the first constructed instance
            deps: Dependency tokens passed to the constructor, in order

        Returns:
            Self for method chaining
        """
        normalized = normalize_provider(provider, singleton=singleton, deps=deps)
        self._registry[token] = Registration(normalized)

        logger.debug(
            "dependency_registered",
            token=format_token(token),
            kind=normalized.kind.value if is_provider(normalized) else None,
            singleton=is_singleton(normalized),
        )
        return self

    def register_class(
        self,
        cls: Type[T],
        *,
        token: Optional[Hashable] = None,
        singleton: bool = False,
        deps: Optional[Sequence[Hashable]] = None,
    ) -> "Container":
        """Register a class, keyed by its ``__name__`` unless ``token`` is given."""
        if token is None:
            token = cls.__name__
        return self.register(token, cls, singleton=singleton, deps=deps)

    def register_value(self, token: Hashable, value: Any) -> "Container":
        """Register a pre-built value."""
        return self.register(token, ValueProvider(value))

    def register_factory(
        self,
        token: Hashable,
        factory: Callable[["Container"], T],
        *,
        singleton: bool = False,
    ) -> "Container":
        """Register a factory called with the container on resolution."""
        return self.register(token, FactoryProvider(factory, singleton=singleton))

    def unregister(self, token: Hashable) -> bool:
        """Remove the registration for ``token``.

        Returns:
            True if a registration was removed
        """
        removed = self._registry.pop(token, None) is not None
        if removed:
            logger.debug("dependency_unregistered", token=format_token(token))
        return removed

    def clear(self) -> None:
        """Remove every registration and cached singleton."""
        count = len(self._registry)
        self._registry.clear()
        logger.debug("container_cleared", registrations=count)

    def has(self, token: Hashable) -> bool:
        return token in self._registry

    def __contains__(self, token: Hashable) -> bool:
        return self.has(token)

    def __len__(self) -> int:
        return len(self._registry)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, token: Hashable) -> Any:
        """Resolve a token into a value.

        Args:
            token: The token to resolve

        Returns:
            The provided value

        Raises:
            DependencyNotFoundError: If a token on the way is not registered
            CircularDependencyError: If a token depends on itself
            InvalidProviderError: If a registration has an unknown provider
        """
        self._active_resolutions += 1
        try:
            return self._resolve_internal(token, ())
        except ContainerError as e:
            # Factories call back into resolve; only the outermost call logs
            if self._active_resolutions == 1:
                logger.warning(
                    "resolution_failed",
                    requested=format_token(token),
                    **e.to_dict(),
                )
            raise
        finally:
            self._active_resolutions -= 1

    def _resolve_internal(self, token: Hashable, path: ResolutionPath) -> Any:
        """Depth-first resolution tracking the tokens on the current path.

        Args:
            token: Token to resolve
            path: Tokens currently being resolved, outermost first

        Returns:
            Resolved value
        """
        if token in path:
            raise CircularDependencyError(path + (token,))

        registration = self._registry.get(token)
        if registration is None:
            raise DependencyNotFoundError(token)

        provider = registration.provider
        if not is_provider(provider):
            raise InvalidProviderError(token)

        if provider.kind == ProviderKind.VALUE:
            return provider.use_value

        if is_singleton(provider) and registration.has_instance:
            return registration.instance

        if provider.kind == ProviderKind.CLASS:
            instance = self._construct(token, provider, path + (token,))
        else:
            instance = provider.use_factory(self)

        if is_singleton(provider):
            registration.cache(instance)
            logger.debug("singleton_cached", token=format_token(token))

        logger.debug(
            "dependency_resolved",
            token=format_token(token),
            kind=provider.kind.value,
            depth=len(path),
        )
        return instance

    def _construct(
        self,
        token: Hashable,
        provider: ClassProvider[T],
        path: ResolutionPath,
    ) -> T:
        """Resolve a class provider's dependencies in order and instantiate it."""
        deps = self._dependencies_for(provider)

        if self._settings.strict_arity:
            self._check_arity(token, provider.use_class, deps)

        args = [self._resolve_internal(dep, path) for dep in deps]
        if provider.construct is not None:
            return provider.construct(provider.use_class, deps, args)
        return provider.use_class(*args)

    @staticmethod
    def _dependencies_for(provider: ClassProvider[Any]) -> Tuple[Hashable, ...]:
        if provider.deps is not None:
            return provider.deps
        return class_dependencies(provider.use_class) or ()

    @staticmethod
    def _check_arity(token: Hashable, cls: Type[Any], deps: Tuple[Hashable, ...]) -> None:
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            # Builtins and some extension types expose no signature
            return

        try:
            signature.bind(*([None] * len(deps)))
        except TypeError:
            raise DependencyArityError(token, _describe_arity(signature), len(deps)) from None


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get the global container instance.

    Returns:
        The global Container instance
    """
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Drop the global container (tests only)."""
    global _container
    _container = None


__all__ = [
    "Container",
    "get_container",
    "reset_container",
]
