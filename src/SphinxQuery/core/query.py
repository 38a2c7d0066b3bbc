from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from SphinxQuery.core.filters import FilterFlag, FilterGroup, Scalar

if TYPE_CHECKING:
    from SphinxQuery.config.query import QueryDefaults


WeightPairs = tuple[tuple[str, int], ...]


def weight_pairs(weights: Mapping[str, int] | Iterable[tuple[str, int]]) -> WeightPairs:
    """Normalize weights given as a mapping or as pairs; later pairs win."""
    items = weights.items() if isinstance(weights, Mapping) else weights
    return tuple(dict(items).items())


class SortMode(IntEnum):
    """Sort modes understood by the search daemon."""

    RELEVANCE = 0
    ATTR_DESC = 1
    ATTR_ASC = 2
    TIME_SEGMENTS = 3
    EXTENDED = 4
    EXPR = 5


class MatchMode(IntEnum):
    """Full-text matching strategies understood by the search daemon."""

    ALL = 0
    ANY = 1
    PHRASE = 2
    BOOLEAN = 3
    EXTENDED = 4
    FULLSCAN = 5
    EXTENDED2 = 6


@dataclass(frozen=True, slots=True)
class QueryState:
    """Immutable snapshot of accumulated search parameters.

    `limit` and `match_mode` use None for "never set"; zero is a value.

    Attributes:
        index: Index name(s) to query, as accepted by the daemon.
        search: Raw (unescaped) full-text query.
        search_fields: Fields the text query is scoped to; empty means all.
        limit: Maximum number of matches to return.
        offset: Offset of the first match.
        sort_field: Attribute name or sort expression.
        sort_mode: How `sort_field` is interpreted.
        field_weights: Per-field ranking weights as `(field, weight)` pairs.
        filters: Attribute filters in evaluation order.
        match_mode: Text matching strategy.
    """

    index: str | None = None
    search: str = ""
    search_fields: tuple[str, ...] = ()
    limit: int | None = None
    offset: int = 0
    sort_field: str | None = None
    sort_mode: SortMode | None = None
    field_weights: WeightPairs = ()
    filters: tuple[FilterGroup, ...] = ()
    match_mode: MatchMode | int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "field_weights", weight_pairs(self.field_weights))
        object.__setattr__(self, "search_fields", tuple(self.search_fields))
        object.__setattr__(self, "filters", tuple(self.filters))


class QueryBuilder:
    """Fluent accumulator for `QueryState`.

    Every setter returns the builder. `build()` takes a snapshot; later
    setter calls never affect snapshots already taken.

    Example:
        state = (
            QueryBuilder()
            .add_index("books")
            .set_search_string("war and peace", ["title"])
            .add_filter("genre_id", [3, 7])
            .add_filter("lang_id", [1], FilterFlag.EXCLUDE)
            .set_limit(20)
            .build()
        )
    """

    def __init__(self) -> None:
        self._index: str | None = None
        self._search = ""
        self._search_fields: tuple[str, ...] = ()
        self._limit: int | None = None
        self._offset = 0
        self._sort_field: str | None = None
        self._sort_mode: SortMode | None = None
        self._field_weights: dict[str, int] = {}
        self._filters: list[FilterGroup] = []
        self._match_mode: MatchMode | int | None = None

    @classmethod
    def from_defaults(cls, defaults: QueryDefaults) -> QueryBuilder:
        """Create a builder seeded with configured defaults."""
        builder = cls()
        if defaults.index:
            builder.add_index(defaults.index)
        if defaults.limit is not None:
            builder.set_limit(defaults.limit, defaults.offset)
        for name, weight in defaults.field_weights:
            builder.set_field_weight(name, weight)
        if defaults.match_mode is not None:
            builder.set_match_mode(defaults.match_mode)
        return builder

    def add_index(self, name: str) -> QueryBuilder:
        self._index = name
        return self

    def set_search_string(self, text: str, fields: Sequence[str] = ()) -> QueryBuilder:
        """Set the full-text query, optionally scoped to `fields`."""
        self._search = text or ""
        self._search_fields = tuple(fields)
        return self

    def set_limit(self, limit: int, offset: int = 0) -> QueryBuilder:
        """Set pagination. A limit of 0 is kept but never sent to the daemon."""
        if limit < 0:
            raise ValueError("limit must not be negative")
        if offset < 0:
            raise ValueError("offset must not be negative")
        self._limit = limit
        self._offset = offset
        return self

    def set_order(self, attribute: str, *, descending: bool = False) -> QueryBuilder:
        """Sort by an attribute value."""
        self._sort_field = attribute
        self._sort_mode = SortMode.ATTR_DESC if descending else SortMode.ATTR_ASC
        return self

    def set_order_expr(self, expr: str) -> QueryBuilder:
        """Sort by an arithmetic expression evaluated by the daemon."""
        self._sort_field = expr
        self._sort_mode = SortMode.EXPR
        return self

    def set_field_weight(self, name: str, weight: int) -> QueryBuilder:
        self._field_weights[name] = weight
        return self

    def add_filter(
        self,
        attribute: str,
        values: Iterable[Scalar],
        flags: FilterFlag | int | None = None,
    ) -> QueryBuilder:
        """Append an attribute filter. Order matters for how groups are joined."""
        self._filters.append(FilterGroup.of(attribute, values, flags))
        return self

    def set_match_mode(self, mode: MatchMode | int) -> QueryBuilder:
        self._match_mode = mode
        return self

    def build(self) -> QueryState:
        return QueryState(
            index=self._index,
            search=self._search,
            search_fields=self._search_fields,
            limit=self._limit,
            offset=self._offset,
            sort_field=self._sort_field,
            sort_mode=self._sort_mode,
            field_weights=tuple(self._field_weights.items()),
            filters=tuple(self._filters),
            match_mode=self._match_mode,
        )
