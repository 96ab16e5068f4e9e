"""Decoration pipeline - factories and the decorator manager."""

from qwexpr.decorator.decorator import (
    ExpressionDecorator,
    ItemDecorator,
    JoinDecorator,
    joiner,
    wrapper,
)
from qwexpr.decorator.manager import DecoratorManager

__all__ = [
    "DecoratorManager",
    "ExpressionDecorator",
    "ItemDecorator",
    "JoinDecorator",
    "joiner",
    "wrapper",
]
