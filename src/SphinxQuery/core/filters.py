from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Iterable, Union

Scalar = Union[int, float, str]


class FilterFlag(IntFlag):
    """Flags controlling how one attribute filter is rendered.

    - `EXCLUDE`: negate this group.
    - `IMPLODE_AND`: every value must match (one `IN()` per value, joined by
      AND) instead of any value matching.
    - `JOINT_OR`: join this group to the preceding ones with OR instead of AND.

    Bit values match the constants older callers pass as plain ints.
    """

    NONE = 0
    EXCLUDE = 1
    IMPLODE_AND = 2
    JOINT_OR = 4


@dataclass(frozen=True, slots=True)
class FilterGroup:
    """One structured attribute filter.

    Attributes:
        attribute: Attribute name as known by the index.
        values: Ordered values tested for membership.
        flags: Rendering flags, see `FilterFlag`.
    """

    attribute: str
    values: tuple[Scalar, ...]
    flags: FilterFlag = FilterFlag.NONE

    def __post_init__(self) -> None:
        if not self.attribute or not self.attribute.strip():
            raise ValueError("Filter attribute must not be empty")
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError(f"Filter on {self.attribute} must have at least one value")
        object.__setattr__(self, "flags", FilterFlag(int(self.flags or 0)))

    @classmethod
    def of(cls, attribute: str, values: Iterable[Scalar], flags: FilterFlag | int | None = None) -> FilterGroup:
        """Build a group from any iterable of values and optional raw flags."""
        return cls(attribute=attribute, values=tuple(values), flags=FilterFlag(int(flags or 0)))

    @property
    def exclude(self) -> bool:
        return bool(self.flags & FilterFlag.EXCLUDE)

    @property
    def implode_and(self) -> bool:
        return bool(self.flags & FilterFlag.IMPLODE_AND)

    @property
    def joint_or(self) -> bool:
        return bool(self.flags & FilterFlag.JOINT_OR)
