"""
Band Tables - Ordered threshold tables for the pricing conditions.

Each table is a list of (upper bound, multiplier) bands checked in order,
with the upper bound inclusive. A table may document a maximum count; past
that count the top multiplier is still used but the lookup is flagged as
clamped so the caller can attach a warning.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional


@dataclass(frozen=True)
class Band:
    """A contiguous numeric range ending at `upper` (inclusive)."""
    upper: float
    factor: float


@dataclass(frozen=True)
class MatchedBand:
    """A band lookup result with context."""
    factor: float
    clamped: bool = False
    match_reason: str = ""


class BandTable:
    """
    Maps a number to a multiplier through ordered bands.

    `zero_factor` applies to an exact zero (counts of optional sessions);
    `overflow_factor` applies above the last band; `documented_max` is the
    largest value the table is defined for, beyond which lookups clamp.
    """

    def __init__(
        self,
        name: str,
        bands: list[Band],
        overflow_factor: float,
        zero_factor: Optional[float] = None,
        documented_max: Optional[float] = None,
    ):
        uppers = [b.upper for b in bands]
        if uppers != sorted(uppers) or len(set(uppers)) != len(uppers):
            raise ValueError(f"{name}: band upper bounds must be strictly increasing")
        self.name = name
        self.bands = tuple(bands)
        self.overflow_factor = overflow_factor
        self.zero_factor = zero_factor
        self.documented_max = documented_max

    def lookup(self, value: float) -> MatchedBand:
        """Find the band for a finite value already checked for domain."""
        if self.zero_factor is not None and value == 0:
            return MatchedBand(factor=self.zero_factor, match_reason="zero")

        for band in self.bands:
            if value <= band.upper:
                return MatchedBand(factor=band.factor, match_reason=f"<= {band.upper:g}")

        clamped = self.documented_max is not None and value > self.documented_max
        return MatchedBand(
            factor=self.overflow_factor,
            clamped=clamped,
            match_reason=f"> {self.bands[-1].upper:g}" if self.bands else "any",
        )

    @property
    def max_factor(self) -> float:
        return self.overflow_factor


PARTICIPANT_BANDS = BandTable(
    "participants",
    [
        Band(10, 1.5),
        Band(15, 1.3),
        Band(20, 1.2),
        Band(25, 1.0),
        Band(30, 0.9),
    ],
    overflow_factor=0.8,
)

JAPANESE_LESSON_BANDS = BandTable(
    "japanese_lesson",
    [
        Band(2, 1.3),
        Band(5, 1.6),
    ],
    overflow_factor=2.0,
)

CULTURAL_BANDS = BandTable(
    "cultural_experience",
    [
        Band(3, 1.2),
        Band(6, 1.4),
        Band(9, 1.6),
        Band(14, 1.8),
        Band(20, 2.0),
        Band(30, 3.0),
    ],
    overflow_factor=3.0,
    zero_factor=1.0,
    documented_max=30,
)

COMPANY_VISIT_BANDS = BandTable(
    "company_visit",
    [
        Band(3, 1.2),
        Band(6, 1.4),
    ],
    overflow_factor=1.6,
    zero_factor=1.0,
    documented_max=9,
)

# Management fee per student by duration. Undefined past 5 weeks.
MANAGEMENT_FEE_BANDS = (
    Band(1, 20000),
    Band(2, 30000),
    Band(3, 40000),
    Band(4, 50000),
    Band(5, 60000),
)

PREP_COMPLEXITY_FACTORS = MappingProxyType({
    "Regular": 1.0,
    "Continuing": 1.2,
    "New": 1.35,
    "Complex": 1.5,
})

LECTURE_FACTORS = MappingProxyType({
    "None": 1.0,
    "Present": 1.5,
})
