"""Qwexpr Exceptions

Custom exceptions for the expression builder.
"""

from __future__ import annotations


class QwexprError(Exception):
    """Base exception for all qwexpr errors."""

    pass


class InvalidArgumentError(QwexprError, TypeError):
    """Raised when a value cannot be used as an item, wrapper or separator."""

    def __init__(self, message: str, value: object = None):
        self.value = value
        super().__init__(message)


class RenderError(QwexprError):
    """Raised when rendering an expression fails.

    The original exception (usually from a user-supplied decorator) is
    chained as ``__cause__``.
    """

    pass


class CyclicExpressionError(RenderError):
    """Raised when an expression contains itself, directly or transitively."""

    def __init__(self, expression: object):
        self.expression = expression
        super().__init__(f"Cyclic expression detected: {expression!r}")


class DocumentError(QwexprError, ValueError):
    """Raised when an expression document cannot be decoded."""

    pass


class ConfigError(QwexprError, ValueError):
    """Raised when a qwexpr config file is invalid."""

    def __init__(self, path: object, reason: str):
        self.path = path
        super().__init__(f"Invalid config {path}: {reason}")
