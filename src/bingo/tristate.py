"""Three-valued (Kleene) logic used to reason about partially filled boards."""

from enum import Enum
from typing import Iterable


class TriState(Enum):
    """
    TRUE / FALSE / UNKNOWN truth values.
    UNKNOWN means "not determined yet"; it is resolved once the cells it
    depends on are assigned.
    """

    TRUE = "true"
    UNKNOWN = "unknown"
    FALSE = "false"

    @classmethod
    def of(cls, value: bool) -> "TriState":
        return cls.TRUE if value else cls.FALSE

    def and_(self, other: "TriState") -> "TriState":
        # FALSE wins even against an unresolved operand.
        if self is TriState.FALSE or other is TriState.FALSE:
            return TriState.FALSE
        if self is TriState.UNKNOWN or other is TriState.UNKNOWN:
            return TriState.UNKNOWN
        return TriState.TRUE

    def or_(self, other: "TriState") -> "TriState":
        if self is TriState.TRUE or other is TriState.TRUE:
            return TriState.TRUE
        if self is TriState.UNKNOWN or other is TriState.UNKNOWN:
            return TriState.UNKNOWN
        return TriState.FALSE

    def invert(self) -> "TriState":
        if self is TriState.UNKNOWN:
            return TriState.UNKNOWN
        return TriState.TRUE if self is TriState.FALSE else TriState.FALSE

    def matches(self, other: "TriState") -> "TriState":
        """XNOR: UNKNOWN if either side is unknown, else TRUE iff both agree."""
        if self is TriState.UNKNOWN or other is TriState.UNKNOWN:
            return TriState.UNKNOWN
        if other is TriState.TRUE:
            return self
        return self.invert()

    def truthy(self) -> bool:
        """Not ruled out yet. Only the search's pruning test reads this view."""
        return self is not TriState.FALSE

    def __str__(self) -> str:
        return self.name


TRUE = TriState.TRUE
FALSE = TriState.FALSE
UNKNOWN = TriState.UNKNOWN


def all_of(values: Iterable[TriState]) -> TriState:
    result = TRUE
    for value in values:
        result = result.and_(value)
        if result is FALSE:
            break
    return result


def any_of(values: Iterable[TriState]) -> TriState:
    result = FALSE
    for value in values:
        result = result.or_(value)
        if result is TRUE:
            break
    return result
