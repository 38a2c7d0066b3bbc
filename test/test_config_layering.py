"""Tests for layered config parsing and validation."""

import sys
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SphinxQuery.config import parse_config_dict
from SphinxQuery.core.query import MatchMode
from SphinxQuery.sphinx import create_builder


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "query": {
            "index": "books",
            "limit": 20,
            "offset": 0,
            "match_mode": "extended2",
            "field_weights": {"title": 10, "body": 1},
        },
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.query.index, "books")
        self.assertEqual(cfg.query.limit, 20)
        self.assertEqual(cfg.query.match_mode, MatchMode.EXTENDED2)
        self.assertEqual(dict(cfg.query.field_weights), {"title": 10, "body": 1})

    def test_query_section_is_optional(self) -> None:
        raw = _base_raw_config()
        del raw["query"]
        cfg = parse_config_dict(raw)
        self.assertIsNone(cfg.query.index)
        self.assertIsNone(cfg.query.limit)
        self.assertIsNone(cfg.query.match_mode)

    def test_log_section_is_optional(self) -> None:
        raw = _base_raw_config()
        del raw["log"]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.runtime.action, "query")

    def test_log_to_file_requires_action(self) -> None:
        raw = _base_raw_config()
        raw["log"]["to_file"] = True
        raw["log"]["action"] = " "
        with self.assertRaisesRegex(ValueError, "log\\.action"):
            parse_config_dict(raw)

    def test_log_level_validated(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "chatty"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_match_mode_accepts_int(self) -> None:
        raw = _base_raw_config()
        raw["query"]["match_mode"] = 0
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.query.match_mode, MatchMode.ALL)

    def test_match_mode_unknown_name(self) -> None:
        raw = _base_raw_config()
        raw["query"]["match_mode"] = "fuzzy"
        with self.assertRaisesRegex(ValueError, "query\\.match_mode"):
            parse_config_dict(raw)

    def test_match_mode_unknown_value(self) -> None:
        raw = _base_raw_config()
        raw["query"]["match_mode"] = 42
        with self.assertRaisesRegex(ValueError, "query\\.match_mode"):
            parse_config_dict(raw)

    def test_limit_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["query"]["limit"] = "20"
        with self.assertRaisesRegex(TypeError, "query\\.limit"):
            parse_config_dict(raw)

    def test_negative_offset_rejected(self) -> None:
        raw = _base_raw_config()
        raw["query"]["offset"] = -1
        with self.assertRaisesRegex(ValueError, "query\\.offset"):
            parse_config_dict(raw)

    def test_field_weight_must_be_positive(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["query"]["field_weights"]["body"] = 0
        with self.assertRaisesRegex(ValueError, "query\\.field_weights\\.body"):
            parse_config_dict(raw)

    def test_blank_index_becomes_none(self) -> None:
        raw = _base_raw_config()
        raw["query"]["index"] = "  "
        cfg = parse_config_dict(raw)
        self.assertIsNone(cfg.query.index)

    def test_create_builder_applies_defaults(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        state = create_builder(cfg).build()
        self.assertEqual(state.index, "books")
        self.assertEqual(state.limit, 20)
        self.assertEqual(state.match_mode, MatchMode.EXTENDED2)
        self.assertEqual(dict(state.field_weights), {"title": 10, "body": 1})

    def test_create_builder_without_config(self) -> None:
        state = create_builder().build()
        self.assertIsNone(state.index)


if __name__ == "__main__":
    unittest.main()
