"""Tests for mapping query state onto backend calls."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SphinxQuery.core.filters import FilterFlag
from SphinxQuery.core.query import MatchMode, QueryBuilder, SortMode
from SphinxQuery.sphinx.executor import build_query_text, execute


class _StubBackend:
    """Records every call in order; `run_queries` returns a canned response."""

    def __init__(self, response: list[dict] | None = None, *, fail_on: str | None = None) -> None:
        self.calls: list[tuple] = []
        self.response = response if response is not None else [{"status": 0, "total": 0}]
        self.fail_on = fail_on

    def _record(self, name: str, *args) -> None:
        if name == self.fail_on:
            raise RuntimeError(f"{name} failed")
        self.calls.append((name, *args))

    def set_sort_mode(self, mode, clause):
        self._record("set_sort_mode", mode, clause)

    def set_limits(self, offset, limit):
        self._record("set_limits", offset, limit)

    def set_field_weights(self, weights):
        self._record("set_field_weights", dict(weights))

    def add_computed_column(self, expr, alias):
        self._record("add_computed_column", expr, alias)

    def set_filter(self, attribute, values):
        self._record("set_filter", attribute, list(values))

    def set_match_mode(self, mode):
        self._record("set_match_mode", mode)

    def escape_string(self, text):
        self._record("escape_string", text)
        return text.replace("-", "\\-")

    def add_query(self, text, index):
        self._record("add_query", text, index)

    def run_queries(self):
        self._record("run_queries")
        return self.response

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


class TestExecute(unittest.TestCase):
    def test_minimal_state_only_queues_and_runs(self) -> None:
        backend = _StubBackend()
        outcome = execute(QueryBuilder().add_index("idx").build(), lambda: backend)

        self.assertTrue(outcome.success)
        self.assertEqual(backend.names(), ["escape_string", "add_query", "run_queries"])
        self.assertEqual(backend.calls[1], ("add_query", "", "idx"))

    def test_calls_follow_fixed_order(self) -> None:
        backend = _StubBackend()
        state = (
            QueryBuilder()
            .set_match_mode(MatchMode.EXTENDED2)
            .add_filter("a", [1, 2])
            .set_field_weight("title", 5)
            .set_limit(10, 20)
            .set_order("year", descending=True)
            .set_search_string("tolstoy")
            .add_index("books")
            .build()
        )

        execute(state, lambda: backend)

        self.assertEqual(
            backend.names(),
            [
                "set_sort_mode",
                "set_limits",
                "set_field_weights",
                "add_computed_column",
                "set_filter",
                "set_match_mode",
                "escape_string",
                "add_query",
                "run_queries",
            ],
        )
        self.assertEqual(backend.calls[0], ("set_sort_mode", SortMode.ATTR_DESC, "year"))
        self.assertEqual(backend.calls[1], ("set_limits", 20, 10))
        self.assertEqual(backend.calls[2], ("set_field_weights", {"title": 5}))
        self.assertEqual(backend.calls[3], ("add_computed_column", "(IN(a, 1, 2))", "_filter"))
        self.assertEqual(backend.calls[4], ("set_filter", "_filter", [1]))
        self.assertEqual(backend.calls[7], ("add_query", "@* tolstoy", "books"))

    def test_sort_expression_mode(self) -> None:
        backend = _StubBackend()
        execute(QueryBuilder().set_order_expr("@weight*2").build(), lambda: backend)
        self.assertEqual(backend.calls[0], ("set_sort_mode", SortMode.EXPR, "@weight*2"))

    def test_zero_limit_is_not_applied(self) -> None:
        backend = _StubBackend()
        execute(QueryBuilder().set_limit(0, 30).build(), lambda: backend)
        self.assertNotIn("set_limits", backend.names())

    def test_unset_limit_is_not_applied(self) -> None:
        backend = _StubBackend()
        execute(QueryBuilder().build(), lambda: backend)
        self.assertNotIn("set_limits", backend.names())

    def test_zero_match_mode_is_applied(self) -> None:
        backend = _StubBackend()
        execute(QueryBuilder().set_match_mode(0).build(), lambda: backend)
        self.assertIn(("set_match_mode", 0), backend.calls)

    def test_unset_match_mode_is_not_applied(self) -> None:
        backend = _StubBackend()
        execute(QueryBuilder().build(), lambda: backend)
        self.assertNotIn("set_match_mode", backend.names())

    def test_filter_expression_uses_compiled_groups(self) -> None:
        backend = _StubBackend()
        state = (
            QueryBuilder()
            .add_filter("a", [1])
            .add_filter("b", [2], FilterFlag.JOINT_OR | FilterFlag.EXCLUDE)
            .build()
        )
        execute(state, lambda: backend)
        self.assertIn(
            ("add_computed_column", "(IN(a, 1)) OR NOT (IN(b, 2))", "_filter"),
            backend.calls,
        )

    def test_connect_failure_is_captured(self) -> None:
        def connect():
            raise ConnectionError("searchd is down")

        outcome = execute(QueryBuilder().build(), connect)

        self.assertFalse(outcome.success)
        self.assertIsNone(outcome.response)

    def test_later_backend_failure_propagates(self) -> None:
        backend = _StubBackend(fail_on="set_field_weights")
        state = QueryBuilder().set_field_weight("title", 2).build()
        with self.assertRaisesRegex(RuntimeError, "set_field_weights failed"):
            execute(state, lambda: backend)

    def test_failed_run_is_unsuccessful(self) -> None:
        backend = _StubBackend()
        backend.response = None
        outcome = execute(QueryBuilder().build(), lambda: backend)
        self.assertFalse(outcome.success)
        self.assertIsNone(outcome.response)


class TestBuildQueryText(unittest.TestCase):
    def test_unscoped_text_targets_all_fields(self) -> None:
        state = QueryBuilder().set_search_string("red-fox").build()
        self.assertEqual(build_query_text(_StubBackend(), state), "@* red\\-fox")

    def test_scoped_text_lists_fields(self) -> None:
        state = QueryBuilder().set_search_string("fox", ["title", "body"]).build()
        self.assertEqual(build_query_text(_StubBackend(), state), "@(title,body) fox")

    def test_empty_text_has_no_scope(self) -> None:
        state = QueryBuilder().set_search_string("", ["title"]).build()
        self.assertEqual(build_query_text(_StubBackend(), state), "")


if __name__ == "__main__":
    unittest.main()
