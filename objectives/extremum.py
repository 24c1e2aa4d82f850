"""Optimization direction and its strict "better than" comparison."""
from __future__ import annotations

from decimal import Decimal
from enum import Enum

from .errors import InvalidArgumentError

_ALIASES = {
    "max": "max",
    "maximize": "max",
    "maximization": "max",
    "min": "min",
    "minimize": "min",
    "minimization": "min",
}


class Extremum(Enum):
    """Direction of optimization, i.e. maximization or minimization."""
    MAXIMIZE = "max"
    MINIMIZE = "min"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            canonical = _ALIASES.get(value.strip().lower())
            if canonical is not None:
                return cls(canonical)
        return None

    @classmethod
    def parse(cls, value) -> "Extremum":
        """Resolve an ``Extremum`` from an instance or its textual name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Unknown extremum {value!r}; expected one of {sorted(_ALIASES)}"
            ) from e

    def better(self, incumbent: Decimal, candidate: Decimal) -> bool:
        """True iff *candidate* is strictly more desirable than *incumbent*."""
        if self is Extremum.MAXIMIZE:
            return candidate > incumbent
        return candidate < incumbent

    def __str__(self) -> str:
        return self.value
