"""Decorator factories - reusable wrap and join callables."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from qwexpr.exceptions import InvalidArgumentError
from qwexpr.item import describe, is_item, stringify

ItemDecorator = Callable[[str], str]
JoinDecorator = Callable[[Sequence[str]], str]
ExpressionDecorator = Callable[[str], str]


def wrapper(left: Any, right: Optional[Any] = None) -> Callable[[str], str]:
    """Create a decorator that surrounds a string with ``left`` and ``right``.

    When ``right`` is omitted, ``left`` is used on both sides. Expressions are
    accepted as delimiters and are rendered each time the decorator runs.

    Args:
        left: Opening delimiter (scalar or Expression).
        right: Closing delimiter (scalar or Expression), defaults to ``left``.

    Returns:
        A ``str -> str`` callable.

    Raises:
        InvalidArgumentError: If a delimiter is not a scalar or Expression.

    Example:
        >>> wrapper("(", ")")("value")
        '(value)'
    """
    if not is_item(left):
        raise InvalidArgumentError(
            f"Invalid left wrapper of type {describe(left)}. "
            "Must be a scalar or Expression.",
            left,
        )
    if right is not None and not is_item(right):
        raise InvalidArgumentError(
            f"Invalid right wrapper of type {describe(right)}. "
            "Must be a scalar or Expression.",
            right,
        )

    closing = left if right is None else right

    def wrap(value: str) -> str:
        return f"{stringify(left)}{value}{stringify(closing)}"

    return wrap


def joiner(separator: Any) -> JoinDecorator:
    """Create a join decorator that concatenates items with ``separator``.

    Raises:
        InvalidArgumentError: If the separator is not a scalar or Expression.

    Example:
        >>> joiner(", ")(["a", "b"])
        'a, b'
    """
    if not is_item(separator):
        raise InvalidArgumentError(
            f"Invalid separator of type {describe(separator)}. "
            "Must be a scalar or Expression.",
            separator,
        )

    def join(values: Sequence[str]) -> str:
        return stringify(separator).join(values)

    return join
