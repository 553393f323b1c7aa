"""
Provider Definitions
====================

A provider tells the container how to produce the value for a token. The
three kinds form a tagged union discriminated by ``kind``:

    - ClassProvider: instantiate a class with resolved dependency tokens
    - ValueProvider: return a pre-built value
    - FactoryProvider: call a function with the container

``normalize_provider`` turns the registration shorthands (a bare class, a
``use_*`` mapping) into one of these. Anything it cannot classify is kept
as-is and rejected when resolved.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Generic,
    Hashable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
)

if TYPE_CHECKING:
    from .container import Container

T = TypeVar("T")

Constructor = Callable[[Type[Any], Tuple[Hashable, ...], List[Any]], Any]


class ProviderKind(str, Enum):
    """Provider discriminants."""

    CLASS = "class"
    VALUE = "value"
    FACTORY = "factory"


@dataclass(frozen=True)
class ClassProvider(Generic[T]):
    """Instantiate ``use_class`` with the resolved ``deps`` as positional args.

    ``deps=None`` means no dependencies were supplied at registration, in
    which case the class metadata is consulted at resolution time.

    ``construct``, when set, is called as ``construct(use_class, deps, args)``
    in place of ``use_class(*args)``; dependencies are still resolved by the
    container.
    """

    kind: ClassVar[ProviderKind] = ProviderKind.CLASS

    use_class: Type[T]
    deps: Optional[Tuple[Hashable, ...]] = None
    singleton: bool = False
    construct: Optional[Constructor] = None

    def __post_init__(self):
        if not inspect.isclass(self.use_class):
            raise TypeError(f"use_class must be a class, got {self.use_class!r}")
        if self.deps is not None:
            object.__setattr__(self, "deps", tuple(self.deps))


@dataclass(frozen=True)
class ValueProvider(Generic[T]):
    """Return ``use_value`` unchanged on every resolution."""

    kind: ClassVar[ProviderKind] = ProviderKind.VALUE

    use_value: T


@dataclass(frozen=True)
class FactoryProvider(Generic[T]):
    """Call ``use_factory(container)`` to produce the value."""

    kind: ClassVar[ProviderKind] = ProviderKind.FACTORY

    use_factory: Callable[["Container"], T]
    singleton: bool = False

    def __post_init__(self):
        if not callable(self.use_factory):
            raise TypeError(f"use_factory must be callable, got {self.use_factory!r}")


Provider = Union[ClassProvider[Any], ValueProvider[Any], FactoryProvider[Any]]

PROVIDER_TYPES = (ClassProvider, ValueProvider, FactoryProvider)

_DISCRIMINANTS = ("use_class", "use_value", "use_factory")

_MISSING = object()


@dataclass
class Registration:
    """Registry entry: a provider plus the cached singleton, once built."""

    provider: Any
    instance: Any = field(default=_MISSING, repr=False)

    @property
    def has_instance(self) -> bool:
        return self.instance is not _MISSING

    def cache(self, instance: Any) -> None:
        self.instance = instance


def is_provider(candidate: Any) -> bool:
    return isinstance(candidate, PROVIDER_TYPES)


def is_singleton(provider: Any) -> bool:
    """Whether resolved values of ``provider`` are cached."""
    return isinstance(provider, (ClassProvider, FactoryProvider)) and provider.singleton


def _from_mapping(mapping: Mapping[str, Any]) -> Any:
    keys = [key for key in _DISCRIMINANTS if key in mapping]
    if len(keys) != 1:
        return mapping

    key = keys[0]
    if key == "use_value":
        return ValueProvider(mapping["use_value"])
    if key == "use_class":
        if not inspect.isclass(mapping["use_class"]):
            return mapping
        deps = mapping.get("deps")
        return ClassProvider(
            mapping["use_class"],
            deps=tuple(deps) if deps is not None else None,
            singleton=bool(mapping.get("singleton", False)),
        )
    if not callable(mapping["use_factory"]):
        return mapping
    return FactoryProvider(mapping["use_factory"], singleton=bool(mapping.get("singleton", False)))


def normalize_provider(
    target: Any,
    singleton: Optional[bool] = None,
    deps: Optional[Sequence[Hashable]] = None,
) -> Any:
    """Turn a registration target into a provider.

    Args:
        target: A provider, a class, or a mapping with one ``use_*`` key
        singleton: Class shorthand only; cache the instance
        deps: Class shorthand only; dependency tokens in argument order

    Returns:
        A provider, or ``target`` unchanged when it cannot be classified

    Raises:
        TypeError: If options are passed with a target that is not a class
    """
    has_options = singleton is not None or deps is not None

    if inspect.isclass(target):
        return ClassProvider(
            target,
            deps=tuple(deps) if deps is not None else None,
            singleton=bool(singleton),
        )

    if has_options:
        raise TypeError(
            "singleton/deps options only apply when registering a class, "
            f"got {type(target).__name__}"
        )

    if is_provider(target):
        return target

    if isinstance(target, Mapping):
        return _from_mapping(target)

    return target


__all__ = [
    "ProviderKind",
    "ClassProvider",
    "ValueProvider",
    "FactoryProvider",
    "Provider",
    "Registration",
    "is_provider",
    "is_singleton",
    "normalize_provider",
]
