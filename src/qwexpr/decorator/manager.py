"""DecoratorManager - ordered item, join and expression decorators."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional

from qwexpr.config import DEFAULT_CONFIG, RenderConfig
from qwexpr.decorator.decorator import (
    ExpressionDecorator,
    ItemDecorator,
    JoinDecorator,
    joiner,
    wrapper,
)
from qwexpr.exceptions import InvalidArgumentError, RenderError
from qwexpr.item import stringify

if TYPE_CHECKING:
    from qwexpr.expression import Expression

log = logging.getLogger(__name__)


class DecoratorManager:
    """Owns the decoration pipeline of an expression.

    Rendering runs in three stages regardless of registration order:

    1. every item decorator, in addition order, on each item's string form
    2. the join decorator (default: join with ``config.separator``)
    3. every expression decorator, in addition order, on the joined string
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._decorators: List[ExpressionDecorator] = []
        self._item_decorators: List[ItemDecorator] = []
        self._join_decorator: Optional[JoinDecorator] = None

    def __copy__(self) -> "DecoratorManager":
        return self.clone()

    def __repr__(self) -> str:
        return (
            f"DecoratorManager(items={len(self._item_decorators)}, "
            f"join={'custom' if self._join_decorator else 'default'}, "
            f"expression={len(self._decorators)})"
        )

    def clone(self) -> "DecoratorManager":
        """Independent copy keeping the current decorators."""
        twin = DecoratorManager(self.config)
        twin._decorators = list(self._decorators)
        twin._item_decorators = list(self._item_decorators)
        twin._join_decorator = self._join_decorator
        return twin

    def prototype(self) -> "DecoratorManager":
        """Independent copy with no decorators."""
        return self.clone().reset()

    def reset(self) -> "DecoratorManager":
        self._decorators = []
        self._item_decorators = []
        self._join_decorator = None
        log.debug("Reset decorators of %r", self)
        return self

    # -- registration -------------------------------------------------------

    def add_decorator(self, *decorators: ExpressionDecorator) -> "DecoratorManager":
        _require_callables(decorators)
        self._decorators.extend(decorators)
        return self

    def add_item_decorator(self, *decorators: ItemDecorator) -> "DecoratorManager":
        _require_callables(decorators)
        self._item_decorators.extend(decorators)
        return self

    def set_join_decorator(self, decorator: JoinDecorator) -> "DecoratorManager":
        _require_callables((decorator,))
        self._join_decorator = decorator
        return self

    # -- shortcuts ----------------------------------------------------------

    def join(self, separator: Any) -> "DecoratorManager":
        return self.set_join_decorator(joiner(separator))

    def wrap(self, left: Any, right: Optional[Any] = None) -> "DecoratorManager":
        return self.add_decorator(wrapper(left, right))

    def wrap_item(self, left: Any, right: Optional[Any] = None) -> "DecoratorManager":
        return self.add_item_decorator(wrapper(left, right))

    # -- accessors ----------------------------------------------------------

    def get_decorators(self) -> Iterator[ExpressionDecorator]:
        yield from self._decorators

    def get_item_decorators(self) -> Iterator[ItemDecorator]:
        yield from self._item_decorators

    def get_join_decorator(self) -> JoinDecorator:
        """The effective join decorator, including the default."""
        if self._join_decorator is not None:
            return self._join_decorator
        return joiner(self.config.separator)

    # -- rendering ----------------------------------------------------------

    def apply_decorations(self, expression: "Expression") -> str:
        """Turn the items of an expression into a single decorated string.

        The expression itself is never modified.

        Raises:
            RenderError: If a decorator or a nested expression fails.
        """
        items = self.decorate_items(expression)
        string = _call("join", self.get_join_decorator(), items)
        for decorator in self.get_decorators():
            string = _call("expression", decorator, string)
        return string

    def decorate_items(self, expression: "Expression") -> List[str]:
        decorated: List[str] = []
        for item in expression:
            item_string = stringify(item)
            for decorator in self.get_item_decorators():
                item_string = _call("item", decorator, item_string)
            decorated.append(item_string)
        return decorated


def _require_callables(decorators: tuple) -> None:
    for decorator in decorators:
        if not callable(decorator):
            raise InvalidArgumentError(
                f"Decorator must be callable, got {type(decorator).__name__}",
                decorator,
            )


def _call(stage: str, decorator: Callable[[Any], str], value: Any) -> str:
    try:
        return decorator(value)
    except RenderError:
        raise
    except RecursionError as e:
        raise RenderError("expression nesting too deep") from e
    except Exception as e:
        name = getattr(decorator, "__qualname__", repr(decorator))
        raise RenderError(f"{stage} decorator {name} failed: {e}") from e
