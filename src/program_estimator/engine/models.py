"""
Data models for the estimate engine.

Uses dataclasses for structured, type-safe data representation.
Inputs and results are frozen: the engine is a pure function of its input.
"""
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union


@dataclass(frozen=True)
class TraceStep:
    """A single step in the estimate resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class EstimateInput:
    """
    Caller-supplied parameters for one estimate.

    Numeric fields are taken as the form layer hands them over (numbers or
    numeric strings); anything that cannot be read as a finite number is
    reported as invalid by the resolvers rather than raised.
    """
    weeks: Any
    participants: Any
    has_japanese_lesson: bool = False
    cultural_times: Any = 0
    prep_complexity: str = "Regular"
    lecture: str = "None"
    company_visit_times: Any = 0
    base_weekly_price: Any = 25000
    insurance_per_student: Any = 8000
    use_manual_mgmt_fee: bool = False
    management_fee_per_student_manual: Any = None


@dataclass(frozen=True)
class Resolved:
    """A factor that resolved to a multiplier."""
    value: float

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Unresolved:
    """A factor that could not be resolved from the input."""
    reason: str

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None


FactorResolution = Union[Resolved, Unresolved]


@dataclass(frozen=True)
class FactorOutcome:
    """A resolver's answer plus any warnings it raised along the way."""
    resolution: FactorResolution
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class FactorSet:
    """Ordered condition label → resolution mapping."""
    entries: tuple[tuple[str, FactorResolution], ...]

    def __iter__(self) -> Iterator[tuple[str, FactorResolution]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, label: str) -> FactorResolution:
        for key, resolution in self.entries:
            if key == label:
                return resolution
        raise KeyError(label)

    def labels(self) -> list[str]:
        return [label for label, _ in self.entries]

    def values(self) -> list[Optional[float]]:
        """Resolved multipliers in display order, None where unresolved."""
        return [resolution.value for _, resolution in self.entries]

    @property
    def all_resolved(self) -> bool:
        return all(resolution.ok for _, resolution in self.entries)

    def product(self) -> float:
        """Multiply all resolved factors; only meaningful when all_resolved."""
        total = 1.0
        for _, resolution in self.entries:
            total *= resolution.value
        return total

    def to_dict(self) -> dict[str, Optional[float]]:
        return {label: resolution.value for label, resolution in self.entries}


def _trace_text(trace: tuple[TraceStep, ...]) -> str:
    lines = []
    for t in trace:
        if t.value:
            lines.append(f"• {t.step}: {t.description} = {t.value}")
        else:
            lines.append(f"• {t.step}: {t.description}")
    return "\n".join(lines)


@dataclass(frozen=True)
class EstimateFailure:
    """Estimate that could not be computed. Carries no totals.

    The echoed inputs are the raw values from the EstimateInput.
    """
    factors: FactorSet
    warnings: tuple[str, ...]
    base_weekly_price: Any
    weeks: Any
    participants: Any
    trace: tuple[TraceStep, ...] = ()

    @property
    def ok(self) -> bool:
        return False

    def get_trace_text(self) -> str:
        """Get human-readable resolution trace as formatted text."""
        return _trace_text(self.trace)


@dataclass(frozen=True)
class EstimateSuccess:
    """Fully computed estimate."""
    factors: FactorSet
    warnings: tuple[str, ...]
    base_weekly_price: float
    weeks: float
    participants: float
    product_factor: float
    variable_per_student: float
    insurance_per_student: float
    management_fee_per_student: float
    fixed_per_student: float
    total_per_student: float
    total_program: float
    trace: tuple[TraceStep, ...] = ()

    @property
    def ok(self) -> bool:
        return True

    def get_trace_text(self) -> str:
        """Get human-readable resolution trace as formatted text."""
        return _trace_text(self.trace)

    def to_dict(self) -> dict:
        """Flat dict of the computed figures, for export tables."""
        return {
            "weeks": self.weeks,
            "participants": self.participants,
            "base_weekly_price": self.base_weekly_price,
            "product_factor": self.product_factor,
            "variable_per_student": self.variable_per_student,
            "insurance_per_student": self.insurance_per_student,
            "management_fee_per_student": self.management_fee_per_student,
            "fixed_per_student": self.fixed_per_student,
            "total_per_student": self.total_per_student,
            "total_program": self.total_program,
        }


EstimateResult = Union[EstimateSuccess, EstimateFailure]
