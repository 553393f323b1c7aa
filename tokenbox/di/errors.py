"""
Container Errors
================

Every failure raised by the container derives from ``ContainerError`` and
carries the offending token (or resolution path) as structured data, so
callers can render their own messages or log them as context.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterable, Tuple

from .tokens import format_path, format_token


class ContainerError(Exception):
    """Base exception for container errors."""

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.__class__.__name__, "message": str(self)}


class DependencyNotFoundError(ContainerError):
    """Token has no registration in the container."""

    def __init__(self, token: Hashable):
        super().__init__(f"Dependency not registered: {format_token(token)}")
        self.token = token

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["token"] = format_token(self.token)
        return data


class CircularDependencyError(ContainerError):
    """A token reappeared on the active resolution path.

    ``path`` lists the tokens in traversal order and ends with the repeated
    token, e.g. ``(A, B, A)``.
    """

    def __init__(self, path: Iterable[Hashable]):
        self.path: Tuple[Hashable, ...] = tuple(path)
        super().__init__(f"Circular dependency detected: {format_path(self.path)}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["path"] = [format_token(token) for token in self.path]
        return data


class InvalidProviderError(ContainerError):
    """Registered provider matches none of the known provider kinds."""

    def __init__(self, token: Hashable, message: str = ""):
        super().__init__(message or f"Invalid provider for token: {format_token(token)}")
        self.token = token

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["token"] = format_token(self.token)
        return data


class DependencyArityError(InvalidProviderError):
    """Declared dependency count does not fit the class constructor."""

    def __init__(self, token: Hashable, expected: str, declared: int):
        super().__init__(
            token,
            f"Constructor for {format_token(token)} expects {expected} "
            f"argument(s) but {declared} dependenc{'y' if declared == 1 else 'ies'} "
            "declared",
        )
        self.expected = expected
        self.declared = declared

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["expected"] = self.expected
        data["declared"] = self.declared
        return data


__all__ = [
    "ContainerError",
    "DependencyNotFoundError",
    "CircularDependencyError",
    "InvalidProviderError",
    "DependencyArityError",
]
