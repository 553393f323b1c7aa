"""
Registry Tokens
===============

A token identifies a registration in the container. Three kinds are
supported:

    - a class, compared by identity
    - a string, compared by value
    - a ``Symbol``, a unique marker compared by identity

Two distinct classes sharing a ``__name__`` are different tokens, and so
are two symbols sharing a description.
"""

from __future__ import annotations

import inspect
from typing import Any, Hashable, Iterable, Optional, Type, Union

UNKNOWN_TOKEN = "UnknownToken"


class Symbol:
    """Unique, identity-compared token.

    Usage:
        DATABASE = Symbol("database")
        container.register_value(DATABASE, engine)
    """

    __slots__ = ("description",)

    def __init__(self, description: Optional[str] = None):
        self.description = description

    def __str__(self) -> str:
        return f"Symbol({self.description or ''})"

    def __repr__(self) -> str:
        return f"<Symbol {self.description!r} at {id(self):#x}>"


Token = Union[Type[Any], str, Symbol]


def format_token(token: Hashable) -> str:
    """Render a token for diagnostics."""
    if isinstance(token, str):
        return token
    if isinstance(token, Symbol):
        return str(token)
    if inspect.isclass(token):
        return token.__name__
    return UNKNOWN_TOKEN


def format_path(path: Iterable[Hashable]) -> str:
    """Render a resolution path as ``A -> B -> C``."""
    return " -> ".join(format_token(token) for token in path)


__all__ = [
    "Symbol",
    "Token",
    "UNKNOWN_TOKEN",
    "format_token",
    "format_path",
]
