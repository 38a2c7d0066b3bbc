"""Sphinx full-text search query layer.

Builds queries from accumulated parameters, compiles attribute filters, and
runs each query once against a configured search daemon backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from SphinxQuery.core.filters import FilterFlag, FilterGroup
from SphinxQuery.core.query import MatchMode, QueryBuilder, QueryState, SortMode
from SphinxQuery.core.result import ExecutionOutcome, QueryResult, ResultView
from SphinxQuery.sphinx.backend import SearchBackend, SphinxClientBackend
from SphinxQuery.sphinx.executor import Connector, execute
from SphinxQuery.sphinx.expr import compile_filter_expr
from SphinxQuery.sphinx.get import SphinxGet

if TYPE_CHECKING:
    from SphinxQuery.config import AppConfig


def create_builder(config: AppConfig | None = None) -> QueryBuilder:
    """Create a query builder, seeded with configured defaults when given.

    Args:
        config: Application configuration holding query defaults.

    Returns:
        A fresh QueryBuilder.
    """
    if config is None:
        return QueryBuilder()
    return QueryBuilder.from_defaults(config.query)


__all__ = [
    "Connector",
    "ExecutionOutcome",
    "FilterFlag",
    "FilterGroup",
    "MatchMode",
    "QueryBuilder",
    "QueryResult",
    "QueryState",
    "ResultView",
    "SearchBackend",
    "SortMode",
    "SphinxClientBackend",
    "SphinxGet",
    "compile_filter_expr",
    "create_builder",
    "execute",
]
