"""Attribute filter compiler.

Compiles an ordered sequence of `FilterGroup` into one boolean expression the
search daemon can evaluate in its select list.

Rules
- A group renders as `IN(attr, v0, v1, ...)`, or with IMPLODE_AND as
  `IN(attr, v0) AND IN(attr, v1) ...`, and is wrapped in parentheses.
- EXCLUDE prefixes `NOT ` to that group only.
- Every group after the first is joined with ` AND `, or ` OR ` when the
  group carries JOINT_OR.
- Groups are concatenated left to right with no extra grouping, so a mix of
  AND and OR joins is resolved by the daemon's own operator precedence.
"""

from __future__ import annotations

from typing import Sequence

from SphinxQuery.core.filters import FilterGroup, Scalar


def _in(attribute: str, values: Sequence[Scalar]) -> str:
    return f"IN({attribute}, " + ", ".join(str(v) for v in values) + ")"


def _compile_group(group: FilterGroup) -> str:
    if group.implode_and:
        expr = " AND ".join(_in(group.attribute, (v,)) for v in group.values)
    else:
        expr = _in(group.attribute, group.values)

    expr = f"({expr})"
    if group.exclude:
        expr = f"NOT {expr}"
    return expr


def compile_filter_expr(groups: Sequence[FilterGroup]) -> str:
    """Compile filter groups into a single boolean expression.

    Args:
        groups: Filter groups in evaluation order.

    Returns:
        Expression string, or "" when there are no groups.
    """
    parts: list[str] = []
    for i, group in enumerate(groups):
        expr = _compile_group(group)
        if i > 0:
            expr = (" OR " if group.joint_or else " AND ") + expr
        parts.append(expr)
    return "".join(parts)
