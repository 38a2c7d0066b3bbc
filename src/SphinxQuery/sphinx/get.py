"""Full-text search query object."""

from __future__ import annotations

from typing import Any, Sequence

from SphinxQuery.core.query import QueryState
from SphinxQuery.core.result import ExecutionOutcome, ResultSet, ResultView
from SphinxQuery.sphinx.executor import Connector, execute


class SphinxGet:
    """Runs one `QueryState` against the search daemon at most once.

    The first call to `execute()` or to any accessor submits the query and
    caches the outcome; later calls read the cache. A backend that cannot be
    acquired yields a cached failure. Errors raised while configuring or
    running the query propagate and leave nothing cached.

    Implements the `QueryResult` capability.
    """

    def __init__(self, state: QueryState, connect: Connector) -> None:
        """Initialize the query.

        Args:
            state: Snapshot of search parameters.
            connect: Zero-argument callable acquiring a backend.
        """
        self._state = state
        self._connect = connect
        self._outcome: ExecutionOutcome | None = None

    @property
    def state(self) -> QueryState:
        """Snapshot of search parameters this query runs."""
        return self._state

    @property
    def outcome(self) -> ExecutionOutcome:
        """Cached outcome, running the query on first access."""
        if self._outcome is None:
            self._outcome = execute(self._state, self._connect)
        return self._outcome

    @property
    def has_response(self) -> bool:
        """Whether an outcome has been cached."""
        return self._outcome is not None

    def execute(self) -> Sequence[ResultSet] | None:
        """Return the daemon response, running the query on first call."""
        return self.outcome.response

    def _view(self) -> ResultView:
        return ResultView(self.outcome)

    def get_error_code(self) -> int:
        return self._view().error_code

    def get_count_total(self) -> int | None:
        return self._view().count_total

    def get_count(self) -> int | None:
        return self._view().count

    def get_last_id(self) -> Any:
        return self._view().last_id
