"""
Logging Proxy
=============

Explicit instrumentation for container-managed objects. Instead of patching
a class, the caller wraps an instance:

    service = instrument(container.resolve(PaymentService))
    service.charge(10)   # logs method_called

or registers a class provider that logs construction and wraps the result:

    container.register(
        PaymentService,
        instrumented_provider(PaymentService, deps=[Gateway], singleton=True),
    )

The instrumented provider is an ordinary ``ClassProvider``: dependencies go
through the container's resolver, so cycle detection, arity validation, and
singleton caching behave exactly as for an uninstrumented class.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple, Type, TypeVar

import structlog

from tokenbox.di.metadata import class_singleton
from tokenbox.di.providers import ClassProvider
from tokenbox.di.tokens import format_token

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _unwrap(value: Any) -> Any:
    if type(value) is LoggingProxy:
        return object.__getattribute__(value, "_target")
    return value


class LoggingProxy:
    """Forward attribute access to ``target``, logging public method calls.

    Protocol methods (``len``, iteration, comparison, hashing, calling,
    context management, item access) are forwarded to the target so the
    proxy can stand in wherever the target is used. Only named public
    methods and direct calls are logged.
    """

    __slots__ = ("_target", "_logger")

    def __init__(self, target: Any, *, logger: Optional[Any] = None):
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_logger", logger or structlog.get_logger(__name__))

    @property
    def __wrapped__(self) -> Any:
        return self._target

    @property  # type: ignore[misc]
    def __class__(self) -> type:
        return type(self._target)

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._target, name)
        if name.startswith("_") or not callable(attr):
            return attr
        return self._wrap(name, attr)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._target, name, value)

    def __delattr__(self, name: str) -> None:
        delattr(self._target, name)

    def __repr__(self) -> str:
        return f"<LoggingProxy {self._target!r}>"

    def __str__(self) -> str:
        return str(self._target)

    # Containers and iteration

    def __len__(self) -> int:
        return len(self._target)

    def __iter__(self):
        return iter(self._target)

    def __contains__(self, item: Any) -> bool:
        return item in self._target

    def __getitem__(self, key: Any) -> Any:
        return self._target[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._target[key] = value

    def __delitem__(self, key: Any) -> None:
        del self._target[key]

    def __bool__(self) -> bool:
        return bool(self._target)

    # Comparison and hashing

    def __eq__(self, other: Any) -> bool:
        return self._target == _unwrap(other)

    def __ne__(self, other: Any) -> bool:
        return self._target != _unwrap(other)

    def __lt__(self, other: Any) -> bool:
        return self._target < _unwrap(other)

    def __le__(self, other: Any) -> bool:
        return self._target <= _unwrap(other)

    def __gt__(self, other: Any) -> bool:
        return self._target > _unwrap(other)

    def __ge__(self, other: Any) -> bool:
        return self._target >= _unwrap(other)

    def __hash__(self) -> int:
        return hash(self._target)

    # Calling and context management

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._wrap("__call__", self._target)(*args, **kwargs)

    def __enter__(self) -> Any:
        return self._target.__enter__()

    def __exit__(self, exc_type, exc_val, exc_tb) -> Any:
        return self._target.__exit__(exc_type, exc_val, exc_tb)

    def _wrap(self, name: str, method: Callable[..., Any]) -> Callable[..., Any]:
        class_name = type(self._target).__name__
        log = self._logger

        def logged(*args: Any, **kwargs: Any) -> Any:
            log.info(
                "method_called",
                cls=class_name,
                method=name,
                args=args,
                kwargs=kwargs,
            )
            return method(*args, **kwargs)

        logged.__name__ = name
        logged.__doc__ = getattr(method, "__doc__", None)
        return logged


def instrument(instance: T, *, logger: Optional[Any] = None) -> T:
    """Wrap ``instance`` in a ``LoggingProxy``."""
    return LoggingProxy(instance, logger=logger)  # type: ignore[return-value]


def instrumented_provider(
    cls: Type[T],
    *,
    deps: Optional[Sequence[Hashable]] = None,
    singleton: bool = False,
    logger: Optional[Any] = None,
) -> ClassProvider[T]:
    """Build a class provider that logs construction of ``cls`` and returns a proxy.

    Args:
        cls: Class to construct
        deps: Dependency tokens; omitted means the class metadata is used
        singleton: Cache the constructed proxy
        logger: structlog logger; defaults to this module's logger

    Returns:
        ClassProvider to pass to ``Container.register``
    """
    log = logger or structlog.get_logger(__name__)

    def construct(use_class: Type[T], tokens: Tuple[Hashable, ...], args: List[Any]) -> T:
        log.info(
            "instance_constructing",
            cls=use_class.__name__,
            deps=[format_token(token) for token in tokens],
            singleton=singleton,
            declared_singleton=class_singleton(use_class),
            args=args,
        )
        return instrument(use_class(*args), logger=log)

    return ClassProvider(
        cls,
        deps=tuple(deps) if deps is not None else None,
        singleton=singleton,
        construct=construct,
    )


__all__ = [
    "LoggingProxy",
    "instrument",
    "instrumented_provider",
]
