"""Qwexpr - composable text expressions with a decoration pipeline"""

from qwexpr._version import __version__
from qwexpr.config import RenderConfig
from qwexpr.decorator import DecoratorManager, joiner, wrapper
from qwexpr.exceptions import (
    ConfigError,
    CyclicExpressionError,
    DocumentError,
    InvalidArgumentError,
    QwexprError,
    RenderError,
)
from qwexpr.expression import Expression
from qwexpr.interpolate import interpolate


def new_expression(manager: DecoratorManager | None = None) -> Expression:
    """Create an empty expression, optionally from a prototype manager."""
    return Expression(manager)


__all__ = [
    "__version__",
    # core
    "Expression",
    "DecoratorManager",
    "RenderConfig",
    "interpolate",
    "joiner",
    "new_expression",
    "wrapper",
    # errors
    "ConfigError",
    "CyclicExpressionError",
    "DocumentError",
    "InvalidArgumentError",
    "QwexprError",
    "RenderError",
]
