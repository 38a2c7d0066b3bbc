"""Search daemon backend contract.

`SearchBackend` is the minimal surface the executor drives. Connection setup,
wire protocol and retries live behind it. `SphinxClientBackend` adapts an
object exposing the classic Sphinx client API (`SetSortMode`, `SetLimits`,
`AddQuery`, `RunQueries`, ...) to that surface.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from SphinxQuery.core.filters import Scalar
from SphinxQuery.core.result import ResultSet
from SphinxQuery.utils.log import log


class SearchBackend(Protocol):
    """Protocol for a configured connection to the search daemon."""

    def set_sort_mode(self, mode: int, clause: str) -> None:
        raise NotImplementedError

    def set_limits(self, offset: int, limit: int) -> None:
        raise NotImplementedError

    def set_field_weights(self, weights: Mapping[str, int]) -> None:
        raise NotImplementedError

    def add_computed_column(self, expr: str, alias: str) -> None:
        """Append `expr AS alias` to the select list."""
        raise NotImplementedError

    def set_filter(self, attribute: str, values: Sequence[Scalar]) -> None:
        raise NotImplementedError

    def set_match_mode(self, mode: int) -> None:
        raise NotImplementedError

    def escape_string(self, text: str) -> str:
        raise NotImplementedError

    def add_query(self, text: str, index: str | None) -> None:
        raise NotImplementedError

    def run_queries(self) -> Sequence[ResultSet] | None:
        """Run queued queries. Returns None when the call failed."""
        raise NotImplementedError


class SphinxClientBackend:
    """`SearchBackend` over a classic Sphinx API client object.

    The wrapped client is used as-is; this class only renames calls and keeps
    the select list in sync when computed columns are added.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    def set_sort_mode(self, mode: int, clause: str) -> None:
        self._client.SetSortMode(int(mode), clause)

    def set_limits(self, offset: int, limit: int) -> None:
        self._client.SetLimits(offset, limit)

    def set_field_weights(self, weights: Mapping[str, int]) -> None:
        self._client.SetFieldWeights(dict(weights))

    def add_computed_column(self, expr: str, alias: str) -> None:
        select = getattr(self._client, "_select", "*") or "*"
        self._client.SetSelect(f"{select}, {expr} AS {alias}")

    def set_filter(self, attribute: str, values: Sequence[Scalar]) -> None:
        self._client.SetFilter(attribute, list(values))

    def set_match_mode(self, mode: int) -> None:
        self._client.SetMatchMode(int(mode))

    def escape_string(self, text: str) -> str:
        return self._client.EscapeString(text)

    def add_query(self, text: str, index: str | None) -> None:
        if index is None:
            self._client.AddQuery(text)
        else:
            self._client.AddQuery(text, index)

    def run_queries(self) -> Sequence[ResultSet] | None:
        response = self._client.RunQueries()
        if response is None:
            error = getattr(self._client, "GetLastError", None)
            log.warning("Search daemon call failed: %s", error() if callable(error) else "unknown error")
        return response
