from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence, cast

ResultSet = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    """Cached result of submitting one query.

    Attributes:
        success: False when the backend could not be acquired or the run
            returned the "call failed" sentinel.
        response: Result sets returned by the daemon, or None on failure.
    """

    success: bool
    response: Optional[Sequence[ResultSet]]


FAILED_OUTCOME = ExecutionOutcome(success=False, response=None)


class QueryResult(Protocol):
    """Capability shared by query kinds that run once and expose counts."""

    def execute(self) -> Any:
        """Run the query if needed and return the raw response."""
        raise NotImplementedError

    def get_error_code(self) -> int:
        raise NotImplementedError

    def get_count_total(self) -> int | None:
        raise NotImplementedError

    def get_count(self) -> int | None:
        raise NotImplementedError

    def get_last_id(self) -> int | None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ResultView:
    """Read-only accessors over an `ExecutionOutcome`.

    Only the first result set is inspected; one query is submitted per run.
    Accessors return None under error instead of a default value.
    """

    outcome: ExecutionOutcome

    def _first(self) -> ResultSet:
        return cast(Sequence[ResultSet], self.outcome.response)[0]

    @property
    def is_error(self) -> bool:
        if self.outcome.response is None or not self.outcome.response:
            return True
        return self._first().get("status", 0) != 0

    @property
    def error_code(self) -> int:
        return int(self.is_error)

    @property
    def count_total(self) -> int | None:
        if self.is_error:
            return None
        return self._first()["total"]

    @property
    def count(self) -> int | None:
        if self.is_error:
            return None
        matches = self._first().get("matches")
        if matches is None:
            return 0
        return len(matches)

    @property
    def last_id(self) -> None:
        """Not supported for full-text queries; always None."""
        return None
