"""Query defaults configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SphinxQuery.config.common import (
    expect_int,
    expect_int_mapping,
    expect_optional_int,
    expect_optional_str,
    get_section,
)
from SphinxQuery.core.query import MatchMode, WeightPairs, weight_pairs


@dataclass(frozen=True, slots=True)
class QueryDefaults:
    """Defaults applied to builders created with `QueryBuilder.from_defaults`.

    Attributes:
        index: Default index name.
        limit: Default page size; None leaves the daemon default.
        offset: Default offset used together with `limit`.
        match_mode: Default match mode; None leaves the daemon default.
        field_weights: Default per-field weights as `(field, weight)` pairs.
    """

    index: str | None = None
    limit: int | None = None
    offset: int = 0
    match_mode: MatchMode | None = None
    field_weights: WeightPairs = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "field_weights", weight_pairs(self.field_weights))


def load_query(raw: Mapping[str, Any]) -> QueryDefaults:
    """Load query defaults from raw mapping. The `query` section is optional.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If `query.match_mode` names an unknown mode.
    """
    section = get_section(raw, "query", required=False)
    return QueryDefaults(
        index=expect_optional_str(section.get("index"), "query.index"),
        limit=expect_optional_int(section.get("limit"), "query.limit"),
        offset=expect_int(section.get("offset", 0), "query.offset"),
        match_mode=_parse_match_mode(section.get("match_mode")),
        field_weights=expect_int_mapping(section.get("field_weights"), "query.field_weights"),
    )


def check_query(config: QueryDefaults) -> None:
    """Validate query defaults.

    Raises:
        ValueError: If values are out of range.
    """
    if config.limit is not None and config.limit < 0:
        raise ValueError("query.limit must be null or >= 0")
    if config.offset < 0:
        raise ValueError("query.offset must be >= 0")
    for name, weight in config.field_weights:
        if weight <= 0:
            raise ValueError(f"query.field_weights.{name} must be positive")


def _parse_match_mode(value: Any) -> MatchMode | None:
    """Accept a mode name (case-insensitive) or its integer value."""
    if value is None:
        return None
    if isinstance(value, str):
        name = value.strip().upper()
        try:
            return MatchMode[name]
        except KeyError:
            raise ValueError(
                f"query.match_mode must be one of {[m.name for m in MatchMode]}"
            ) from None
    try:
        return MatchMode(expect_int(value, "query.match_mode"))
    except ValueError:
        raise ValueError(f"query.match_mode has unknown value: {value}") from None
