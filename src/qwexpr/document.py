"""Expression documents - build expressions from YAML.

A document node mirrors the fluent API:

    type: insert
    items:
      - INSERT INTO {table}
      - {items: [id, name], join: ", ", wrap: ["(", ")"]}
      - VALUES
      - {items: ["1", "'John'"], join: ", ", wrap: ["(", ")"]}
    context:
      table: users

Decoration keys are applied in pipeline order (wrap_item, join, wrap), so
the order they appear in the file does not matter.
"""

from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

import msgspec

from qwexpr.config import RenderConfig
from qwexpr.exceptions import DocumentError
from qwexpr.expression import Expression

Delimiters = Union[str, Annotated[List[str], msgspec.Meta(min_length=1, max_length=2)]]


class ExpressionNode(msgspec.Struct, forbid_unknown_fields=True):
    """One expression in a document. Nested mappings in ``items`` are nodes."""

    items: List[Union[str, int, float, bool, "ExpressionNode", None]] = []
    type: Optional[str] = None
    join: Optional[str] = None
    wrap: Optional[Delimiters] = None
    wrap_item: Optional[Delimiters] = None
    context: Dict[str, Any] = {}


def parse_document(text: str) -> ExpressionNode:
    """Decode a YAML string into an ExpressionNode.

    Raises:
        DocumentError: If the YAML is malformed or does not match the schema.
    """
    if not isinstance(text, str):
        raise TypeError("`text` must be a string containing YAML")

    try:
        return msgspec.yaml.decode(text, type=ExpressionNode)
    except msgspec.DecodeError as exc:
        raise DocumentError(f"Invalid expression document: {exc}") from exc


def load_document(path: Union[str, Path]) -> ExpressionNode:
    """Load and decode a YAML document from a file."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Could not read file: {p}") from exc
    return parse_document(text)


def build_expression(
    node: ExpressionNode, config: Optional[RenderConfig] = None
) -> Expression:
    """Turn a decoded node (and its children) into an Expression."""
    expression = Expression(config=config, type_tag=node.type)

    for item in node.items:
        if isinstance(item, ExpressionNode):
            expression.push(build_expression(item, config))
        else:
            expression.push(item)

    if node.wrap_item is not None:
        expression.wrap_item(*_delimiters(node.wrap_item))
    if node.join is not None:
        expression.join(node.join)
    if node.wrap is not None:
        expression.wrap(*_delimiters(node.wrap))

    if node.context:
        expression = expression.with_context(node.context)

    return expression


def _delimiters(value: Union[str, List[str]]) -> Tuple[str, Optional[str]]:
    if isinstance(value, str):
        return value, None
    if len(value) == 1:
        return value[0], None
    return value[0], value[1]
