"""Expression - ordered container of items rendered through decorators.

An Expression is a fluent builder:

    columns = Expression().push("id", "name").wrap_item("`").join(", ")
    query = Expression().push("SELECT", columns, "FROM", "{table}")
    str(query.with_context({"table": "users"}))
    # 'SELECT `id`, `name` FROM users'

Sub-expressions are held by reference, so one instance may appear in several
parents and a later mutation shows up in all of them. Use ``clone()`` when an
independent copy is needed. Reference cycles are reported at render time.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from qwexpr.config import DEFAULT_CONFIG, RenderConfig
from qwexpr.decorator.decorator import ExpressionDecorator, ItemDecorator, JoinDecorator
from qwexpr.decorator.manager import DecoratorManager
from qwexpr.exceptions import CyclicExpressionError, InvalidArgumentError, RenderError
from qwexpr.interpolate import interpolate
from qwexpr.item import Item, describe, is_empty, is_item

log = logging.getLogger(__name__)


class Expression:
    """Ordered items plus a decoration pipeline and an interpolation context."""

    def __init__(
        self,
        manager: Optional[DecoratorManager] = None,
        config: Optional[RenderConfig] = None,
        *,
        type_tag: Optional[str] = None,
    ):
        """Create an empty expression.

        Args:
            manager: Prototype decorator manager. Each expression works on its
                own copy, created the first time it is needed.
            config: Render defaults. Falls back to the manager's config.
            type_tag: Optional label shown by ``get_debug_string()``.
        """
        self.config = config or (manager.config if manager else DEFAULT_CONFIG)
        self.type_tag = type_tag
        self._manager_prototype = manager
        self._manager: Optional[DecoratorManager] = None
        self._items: List[Item] = []
        self._context: Dict[str, Any] = {}
        self._rendering = False

    # -- decorator manager --------------------------------------------------

    def _get_manager(self) -> DecoratorManager:
        if self._manager is None:
            if self._manager_prototype is not None:
                self._manager = self._manager_prototype.clone()
            else:
                self._manager = DecoratorManager(self.config)
        return self._manager

    # -- python protocols ---------------------------------------------------

    def __str__(self) -> str:
        return self._render_with_policy()

    def __repr__(self) -> str:
        tag = self.type_tag or self.config.untyped_tag
        return f"Expression(type={tag!r}, items={len(self._items)})"

    def __iter__(self) -> Iterator[Item]:
        yield from tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __copy__(self) -> "Expression":
        return self.clone()

    # -- items --------------------------------------------------------------

    def push(self, *items: Any) -> "Expression":
        """Append items, skipping None, "" and empty expressions.

        Raises:
            InvalidArgumentError: If an item is neither scalar nor Expression.
                Nothing is appended in that case.
        """
        self._items.extend(self._accept(items))
        return self

    def unshift(self, *items: Any) -> "Expression":
        """Prepend items in the given order, filtered and validated like push."""
        self._items[:0] = self._accept(items)
        return self

    def _accept(self, items: tuple) -> List[Item]:
        accepted: List[Item] = []
        for item in items:
            if is_empty(item):
                continue
            if not is_item(item):
                raise InvalidArgumentError(
                    f"Invalid expression of type {describe(item)}. "
                    "Must be a scalar or Expression.",
                    item,
                )
            accepted.append(item)
        return accepted

    def is_empty(self) -> bool:
        return not self._items

    def get_items(self) -> List[Item]:
        return list(self._items)

    def get_context(self) -> Dict[str, Any]:
        return dict(self._context)

    def reset(self) -> "Expression":
        """Clear items, context and type tag. Decorators are kept."""
        self._items = []
        self._context = {}
        self.type_tag = None
        return self

    def type(self, tag: Optional[str]) -> "Expression":
        self.type_tag = tag
        return self

    # -- decorators ---------------------------------------------------------

    def decorate(self, *decorators: ExpressionDecorator) -> "Expression":
        self._get_manager().add_decorator(*decorators)
        return self

    def decorate_item(self, *decorators: ItemDecorator) -> "Expression":
        self._get_manager().add_item_decorator(*decorators)
        return self

    def decorate_join(self, decorator: JoinDecorator) -> "Expression":
        self._get_manager().set_join_decorator(decorator)
        return self

    def join(self, separator: Any) -> "Expression":
        self._get_manager().join(separator)
        return self

    def wrap(self, left: Any, right: Optional[Any] = None) -> "Expression":
        """Wrap the whole rendered string. The latest wrap is the outermost."""
        self._get_manager().wrap(left, right)
        return self

    def wrap_item(self, left: Any, right: Optional[Any] = None) -> "Expression":
        self._get_manager().wrap_item(left, right)
        return self

    # -- copies -------------------------------------------------------------

    def clone(self) -> "Expression":
        """Independent copy that keeps the current decorators."""
        manager = self._manager.clone() if self._manager is not None else None
        return self._copy(manager)

    def prototype(self) -> "Expression":
        """Independent copy of items and context with no decorators."""
        source = (
            self._manager or self._manager_prototype or DecoratorManager(self.config)
        )
        return self._copy(source.prototype())

    def _copy(self, manager: Optional[DecoratorManager]) -> "Expression":
        twin = object.__new__(type(self))
        twin.__dict__.update(self.__dict__)
        twin._manager = manager
        twin._items = list(self._items)
        twin._context = dict(self._context)
        twin._rendering = False
        return twin

    def with_context(self, context: Mapping[str, Any]) -> "Expression":
        """Return a copy whose context is replaced. The source is unchanged."""
        twin = self.clone()
        twin._context = dict(context)
        return twin

    def with_items(self, *items: Any) -> "Expression":
        """Return a copy holding only the given items."""
        twin = self.clone()
        twin._items = []
        return twin.push(*items)

    # -- rendering ----------------------------------------------------------

    def render(self) -> str:
        """Decorate the items, then interpolate the context.

        Nothing is cached; every call renders again.

        Raises:
            RenderError: If a decorator or nested expression fails, or the
                nesting exceeds the interpreter recursion limit.
            CyclicExpressionError: If the expression contains itself.
        """
        if self._rendering:
            raise CyclicExpressionError(self)

        self._rendering = True
        try:
            decorated = self._get_manager().apply_decorations(self)
        except RecursionError as e:
            raise RenderError("expression nesting too deep") from e
        finally:
            self._rendering = False

        return interpolate(decorated, self._context)

    def safe_render(self) -> str:
        """Render, replacing any failure with the configured error marker."""
        try:
            return self.render()
        except Exception as e:
            log.warning("Rendering %r failed: %s", self, e)
            return self.config.format_error(e)

    def _render_with_policy(self) -> str:
        if self.config.on_error == "marker":
            return self.safe_render()
        return self.render()

    def get_debug_string(self) -> str:
        """Render as ``{TAG:<rendered>}`` without touching the decorators.

        Follows ``config.on_error`` like ``str()`` does.
        """
        label = (self.type_tag or self.config.untyped_tag).upper()
        return f"{{{label}:{self._render_with_policy()}}}"
