"""
Class Dependency Metadata
=========================

Side table for dependency declarations attached to classes. A class
registered without explicit ``deps`` has its dependency tokens looked up
here, so it can be declared once next to the class definition:

    @injectable(deps=[Engine])
    class Car:
        def __init__(self, engine):
            self.engine = engine

    container.register(Car, Car)

Plain ``deps`` / ``dependencies`` class attributes are honoured as well;
the side table wins when both exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional, Sequence, Tuple, Type, TypeVar
from weakref import WeakKeyDictionary

C = TypeVar("C", bound=type)

_CLASS_ATTRIBUTES = ("deps", "dependencies")


@dataclass(frozen=True)
class ClassMetadata:
    """Dependency declaration for one class."""

    deps: Tuple[Hashable, ...] = ()
    singleton: bool = False


_metadata: "WeakKeyDictionary[type, ClassMetadata]" = WeakKeyDictionary()


def declare_dependencies(
    cls: Type[Any],
    deps: Sequence[Hashable] = (),
    singleton: bool = False,
) -> None:
    """Record dependency tokens for ``cls``, replacing any earlier entry."""
    _metadata[cls] = ClassMetadata(deps=tuple(deps), singleton=singleton)


def injectable(
    deps: Sequence[Hashable] = (),
    singleton: bool = False,
) -> Callable[[C], C]:
    """Class decorator form of ``declare_dependencies``."""

    def decorator(cls: C) -> C:
        declare_dependencies(cls, deps, singleton)
        return cls

    return decorator


def forget(cls: Type[Any]) -> None:
    _metadata.pop(cls, None)


def class_dependencies(cls: Type[Any]) -> Optional[Tuple[Hashable, ...]]:
    """Declared dependency tokens for ``cls``, or None if nothing is declared."""
    entry = _metadata.get(cls)
    if entry is not None:
        return entry.deps

    for name in _CLASS_ATTRIBUTES:
        declared = getattr(cls, name, None)
        if isinstance(declared, (list, tuple)):
            return tuple(declared)
    return None


def class_singleton(cls: Type[Any]) -> bool:
    """Declared singleton flag, used for display only."""
    entry = _metadata.get(cls)
    if entry is not None:
        return entry.singleton
    return getattr(cls, "singleton", False) is True


__all__ = [
    "ClassMetadata",
    "declare_dependencies",
    "injectable",
    "forget",
    "class_dependencies",
    "class_singleton",
]
