"""Item variants - what an Expression may hold.

An item is either a scalar (str, int, float, bool) or another Expression.
Every place that consumes items goes through the helpers below so the two
variants are matched the same way everywhere.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

from qwexpr.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from qwexpr.expression import Expression

Scalar = Union[str, int, float, bool]
Item = Union[Scalar, "Expression"]

SCALAR_TYPES = (str, int, float, bool)


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def is_expression(value: Any) -> bool:
    from qwexpr.expression import Expression

    return isinstance(value, Expression)


def is_item(value: Any) -> bool:
    """Check that a value is a legal item (scalar or expression)."""
    return is_scalar(value) or is_expression(value)


def is_empty(value: Any) -> bool:
    """Empty values are skipped on insertion: None, "" and empty expressions.

    Falsy scalars such as 0 and False are kept.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if is_expression(value):
        return value.is_empty()
    return False


def stringify(value: Any) -> str:
    """Return the textual form of an item.

    Raises:
        InvalidArgumentError: If the value is neither scalar nor expression.
    """
    if is_scalar(value):
        return str(value)
    if is_expression(value):
        return value.render()
    raise InvalidArgumentError(
        f"Cannot stringify value of type {type(value).__name__}", value
    )


def describe(value: Any) -> str:
    """Type name used in error messages."""
    return type(value).__name__
