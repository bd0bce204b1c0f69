"""Magnitude bands for random sweeps.

A sweep draws every operand of an operation from one band at a time, in the
order listed, so the same generator covers near-zero, unit, large, huge and
extreme scales in a fixed sequence.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MagnitudeBand:
    """Named inclusive range ``[minimum, maximum]`` for operand draws."""

    name: str
    minimum: float
    maximum: float

    @classmethod
    def symmetric(cls, name: str, magnitude: float) -> MagnitudeBand:
        return cls(name, -magnitude, magnitude)

    def to_dict(self) -> dict[str, float | str]:
        return {"name": self.name, "minimum": self.minimum, "maximum": self.maximum}


TINY = MagnitudeBand.symmetric("tiny", 1e-40)
NEAR_ZERO = MagnitudeBand.symmetric("near_zero", 1e-10)
UNIT = MagnitudeBand.symmetric("unit", 1.0)
HUNDRED = MagnitudeBand.symmetric("hundred", 100.0)
LARGE = MagnitudeBand.symmetric("large", 100_000.0)
HUGE = MagnitudeBand.symmetric("huge", 1_000_000_000.0)
EXTREME = MagnitudeBand.symmetric("extreme", 1e38)

BINARY_BANDS: tuple[MagnitudeBand, ...] = (NEAR_ZERO, UNIT, LARGE, HUGE, EXTREME)
UNARY_BANDS: tuple[MagnitudeBand, ...] = (TINY, UNIT, LARGE, HUGE)
# sine/cosine/tangent are only held to the periodic bound on short ranges
PERIODIC_BANDS: tuple[MagnitudeBand, ...] = (UNIT, HUNDRED)


__all__ = [
    "MagnitudeBand",
    "BINARY_BANDS",
    "UNARY_BANDS",
    "PERIODIC_BANDS",
]
