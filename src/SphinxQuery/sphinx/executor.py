"""Query execution against the search daemon.

Maps a `QueryState` onto backend calls in a fixed order, because later calls
(the filter column in particular) depend on state set by earlier ones.
"""

from __future__ import annotations

from typing import Callable

from SphinxQuery.core.query import QueryState
from SphinxQuery.core.result import FAILED_OUTCOME, ExecutionOutcome
from SphinxQuery.sphinx.backend import SearchBackend
from SphinxQuery.sphinx.expr import compile_filter_expr
from SphinxQuery.utils.log import log

FILTER_COLUMN = "_filter"

Connector = Callable[[], SearchBackend]


def build_query_text(backend: SearchBackend, state: QueryState) -> str:
    """Escape the search text and apply field scoping.

    Args:
        backend: Backend providing the literal-escaping rules.
        state: Query parameters.

    Returns:
        `@(f1,f2) text`, `@* text`, or "" when the escaped text is empty.
    """
    text = backend.escape_string(state.search)
    if not text:
        return text
    if state.search_fields:
        scope = "@(" + ",".join(state.search_fields) + ")"
    else:
        scope = "@*"
    return f"{scope} {text}"


def execute(state: QueryState, connect: Connector) -> ExecutionOutcome:
    """Configure the backend from `state`, submit the query and run it.

    Only a failure of `connect` is captured (as an unsuccessful outcome);
    errors from later backend calls propagate to the caller.

    Args:
        state: Query parameters.
        connect: Acquires a configured backend.

    Returns:
        Outcome of the run.
    """
    try:
        backend = connect()
    except Exception as e:  # noqa: BLE001 - acquisition failure becomes an outcome
        log.warning("Search backend unavailable: %s", e)
        return FAILED_OUTCOME

    if state.sort_field:
        backend.set_sort_mode(state.sort_mode if state.sort_mode is not None else 0, state.sort_field)

    if state.limit:
        backend.set_limits(state.offset, state.limit)

    if state.field_weights:
        backend.set_field_weights(dict(state.field_weights))

    if state.filters:
        expr = compile_filter_expr(state.filters)
        log.debug("Filter expression: %s", expr)
        backend.add_computed_column(expr, FILTER_COLUMN)
        backend.set_filter(FILTER_COLUMN, [1])

    if state.match_mode is not None:
        backend.set_match_mode(state.match_mode)

    query = build_query_text(backend, state)
    log.debug("Search query: index=%s query=%r", state.index, query)
    backend.add_query(query, state.index)

    response = backend.run_queries()
    success = response is not None
    log.debug("Search run finished: success=%s", success)
    return ExecutionOutcome(success=success, response=response)
