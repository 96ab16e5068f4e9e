"""Tests for DecoratorManager."""

import copy

import pytest

from qwexpr.config import RenderConfig
from qwexpr.decorator import DecoratorManager
from qwexpr.exceptions import InvalidArgumentError, RenderError
from qwexpr.expression import Expression


def items(*values):
    return Expression().push(*values)


def test_no_decorators_joins_with_space():
    manager = DecoratorManager()
    assert manager.apply_decorations(items("a", "b", "c")) == "a b c"


def test_default_separator_comes_from_config():
    manager = DecoratorManager(RenderConfig(separator="|"))
    assert manager.apply_decorations(items("a", "b")) == "a|b"


def test_stage_order_is_independent_of_registration_order():
    """Expression decorators registered first still run after join."""
    manager = DecoratorManager()
    manager.add_decorator(lambda s: f"expr:{s}")
    manager.join(" | ")
    manager.add_item_decorator(lambda s: f"item:{s}")

    assert manager.apply_decorations(items("a", "b")) == "expr:item:a | item:b"


def test_decorators_apply_in_addition_order():
    manager = DecoratorManager()
    manager.add_decorator(lambda s: s + "_1", lambda s: s + "_2")
    manager.add_decorator(lambda s: s + "_3")
    assert manager.apply_decorations(items("t")) == "t_1_2_3"


def test_item_decorators_apply_in_addition_order():
    manager = DecoratorManager()
    manager.add_item_decorator(str.upper, lambda s: f"[{s}]")
    assert manager.apply_decorations(items("a", "b")) == "[A] [B]"


def test_join_decorator_last_set_wins():
    manager = DecoratorManager()
    manager.join(", ")
    manager.set_join_decorator(lambda values: " AND ".join(values))
    assert manager.apply_decorations(items("a", "b")) == "a AND b"


def test_wrap_layers_compose_outward():
    manager = DecoratorManager().wrap("(", ")").wrap("[", "]")
    assert manager.apply_decorations(items("v")) == "[(v)]"


def test_wrap_item():
    manager = DecoratorManager().wrap_item("`").join(", ")
    assert manager.apply_decorations(items("a", "b")) == "`a`, `b`"


def test_apply_decorations_does_not_mutate_expression():
    expression = items("a", 1)
    DecoratorManager().wrap_item("'").apply_decorations(expression)
    assert expression.get_items() == ["a", 1]


def test_reset_clears_everything():
    manager = DecoratorManager().wrap("(", ")").wrap_item("`").join(",")
    assert manager.reset() is manager
    assert manager.apply_decorations(items("a", "b")) == "a b"


def test_clone_is_independent():
    manager = DecoratorManager().wrap("(", ")")
    twin = manager.clone()
    twin.wrap("[", "]")

    assert manager.apply_decorations(items("v")) == "(v)"
    assert twin.apply_decorations(items("v")) == "[(v)]"


def test_copy_module_uses_clone():
    manager = DecoratorManager().join("-")
    twin = copy.copy(manager)
    assert twin is not manager
    assert twin.apply_decorations(items("a", "b")) == "a-b"


def test_prototype_drops_decorators():
    manager = DecoratorManager().wrap("(", ")")
    proto = manager.prototype()
    assert proto.apply_decorations(items("v")) == "v"
    assert manager.apply_decorations(items("v")) == "(v)"


def test_get_join_decorator_returns_default():
    assert DecoratorManager().get_join_decorator()(["a", "b"]) == "a b"


def test_non_callable_decorator_rejected():
    manager = DecoratorManager()
    with pytest.raises(InvalidArgumentError):
        manager.add_decorator("not callable")
    with pytest.raises(InvalidArgumentError):
        manager.set_join_decorator(None)
    assert list(manager.get_decorators()) == []


def test_failing_decorator_raises_render_error():
    def boom(value):
        raise ValueError("bad decorator")

    manager = DecoratorManager().add_item_decorator(boom)
    with pytest.raises(RenderError, match="bad decorator") as excinfo:
        manager.apply_decorations(items("a"))
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_runaway_decorator_recursion_raises_render_error():
    """Recursion inside a decorator surfaces the same way as deep nesting."""

    def runaway(value):
        return runaway(value)

    manager = DecoratorManager().add_decorator(runaway)
    with pytest.raises(RenderError, match="nesting too deep") as excinfo:
        manager.apply_decorations(items("a"))
    assert isinstance(excinfo.value.__cause__, RecursionError)
