"""Context interpolation for rendered expressions.

Replaces ``{key}`` placeholders with values from a context mapping.
Deliberately minimal - no dotted lookups, no filters, no escaping.
"""

import re
from typing import Any, Mapping

from qwexpr.item import is_scalar


def interpolate(text: str, context: Mapping[str, Any]) -> str:
    """Substitute ``{key}`` placeholders in a single pass.

    Only scalar context values are substituted. Placeholders whose key is
    missing, or whose value is not a scalar, are left verbatim. Substituted
    values are never scanned again, and longer keys win over shorter ones
    when placeholders overlap.

    Args:
        text: Rendered expression text.
        context: Mapping of placeholder key to value.

    Returns:
        Interpolated string.

    Example:
        >>> interpolate("SELECT {col} FROM {table}", {"col": "id", "table": "t"})
        'SELECT id FROM t'
    """
    replacements = {
        f"{{{key}}}": str(value) for key, value in context.items() if is_scalar(value)
    }
    if not replacements:
        return text

    pattern = re.compile(
        "|".join(re.escape(p) for p in sorted(replacements, key=len, reverse=True))
    )
    return pattern.sub(lambda match: replacements[match.group(0)], text)
