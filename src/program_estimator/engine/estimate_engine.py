"""
Estimate Engine - Composes the seven condition factors and the fixed
per-student fees into a program estimate, with traceability.

- Structured EstimateSuccess / EstimateFailure dataclass output
- Execution trace for every resolution step
- Warning collection for invalid inputs and clamped tables
- No rounding: display rounding belongs to the formatting layer
"""
import logging
from typing import Optional

from .factors import (
    LABEL_COMPANY_VISIT,
    LABEL_CULTURAL,
    LABEL_DURATION,
    LABEL_JAPANESE_LESSON,
    LABEL_LECTURE,
    LABEL_PARTICIPANTS,
    LABEL_PREP_COMPLEXITY,
    company_visit_factor,
    cultural_factor,
    japanese_lesson_factor,
    lecture_factor,
    participant_factor,
    prep_complexity_factor,
    to_number,
    week_factor,
)
from .management_fee import resolve_management_fee
from .models import (
    EstimateFailure,
    EstimateInput,
    EstimateResult,
    EstimateSuccess,
    FactorOutcome,
    FactorSet,
    TraceStep,
)

logger = logging.getLogger(__name__)

WARN_BASE_PRICE_INVALID = "base weekly price is invalid."
WARN_INSURANCE_INVALID = "insurance per student is invalid."


class EstimateEngine:
    """
    Core estimate engine: base weekly price × condition factors + fixed fees.

    Resolution order:
    1. Resolve each of the seven condition factors
    2. Resolve the management fee (auto table or manual entry)
    3. Check base weekly price, insurance and headcount
    4. If anything is unresolved, return a failure with all warnings
    5. Otherwise multiply the factors, add the fixed per-student fees,
       and scale by headcount

    The engine keeps no state between calls.
    """

    def calculate(self, estimate_input: EstimateInput) -> EstimateResult:
        """
        Calculate an estimate with full traceability.

        Args:
            estimate_input: EstimateInput with the program parameters

        Returns:
            EstimateSuccess, or EstimateFailure carrying the warnings
        """
        if not isinstance(estimate_input, EstimateInput):
            raise TypeError(
                f"calculate() expects an EstimateInput, got {type(estimate_input).__name__}"
            )

        inp = estimate_input
        trace: list[tuple[str, str, Optional[str]]] = []

        outcomes: list[tuple[str, FactorOutcome]] = [
            (LABEL_DURATION, week_factor(inp.weeks)),
            (LABEL_PARTICIPANTS, participant_factor(inp.participants)),
            (LABEL_JAPANESE_LESSON, japanese_lesson_factor(bool(inp.has_japanese_lesson), inp.weeks)),
            (LABEL_CULTURAL, cultural_factor(inp.cultural_times)),
            (LABEL_PREP_COMPLEXITY, prep_complexity_factor(inp.prep_complexity)),
            (LABEL_LECTURE, lecture_factor(inp.lecture)),
            (LABEL_COMPANY_VISIT, company_visit_factor(inp.company_visit_times)),
        ]

        # Clamping notes come first, then the invalid-input causes
        clamp_warnings: list[str] = []
        factor_warnings: list[str] = []
        for label, outcome in outcomes:
            if outcome.resolution.ok:
                trace.append(("Factor", label, f"{outcome.resolution.value:g}"))
                clamp_warnings.extend(outcome.warnings)
            else:
                trace.append(("Factor", f"{label} unresolved ({outcome.resolution.reason})", None))
                factor_warnings.extend(outcome.warnings)

        factors = FactorSet(tuple((label, outcome.resolution) for label, outcome in outcomes))
        warnings = clamp_warnings + factor_warnings

        base_weekly_price = to_number(inp.base_weekly_price)
        if base_weekly_price is None or base_weekly_price <= 0:
            warnings.append(WARN_BASE_PRICE_INVALID)
            base_ok = False
        else:
            base_ok = True

        insurance = to_number(inp.insurance_per_student)
        if insurance is None or insurance < 0:
            warnings.append(WARN_INSURANCE_INVALID)
            insurance_ok = False
        else:
            insurance_ok = True

        fee_outcome = resolve_management_fee(
            bool(inp.use_manual_mgmt_fee),
            inp.weeks,
            inp.management_fee_per_student_manual,
        )
        warnings.extend(fee_outcome.warnings)
        mode = "manual" if inp.use_manual_mgmt_fee else "auto"
        if fee_outcome.resolution.ok:
            trace.append(("Management Fee", f"Resolved ({mode})", f"{fee_outcome.resolution.value:g}"))
        else:
            trace.append(("Management Fee", f"Unresolved ({mode}): {fee_outcome.resolution.reason}", None))

        weeks = to_number(inp.weeks)
        participants = to_number(inp.participants)
        participants_ok = participants is not None and participants > 0

        if not (
            factors.all_resolved
            and fee_outcome.resolution.ok
            and base_ok
            and insurance_ok
            and participants_ok
        ):
            trace.append(("Result", "Estimate not computed", f"{len(warnings)} warning(s)"))
            logger.info("Estimate not computed: %s", "; ".join(warnings) or "unresolved input")
            return EstimateFailure(
                factors=factors,
                warnings=tuple(warnings),
                base_weekly_price=inp.base_weekly_price,
                weeks=inp.weeks,
                participants=inp.participants,
                trace=_to_trace(trace),
            )

        management_fee = fee_outcome.resolution.value
        product_factor = factors.product()

        # Per student, factor-driven part
        variable_per_student = base_weekly_price * product_factor
        fixed_per_student = insurance + management_fee
        total_per_student = variable_per_student + fixed_per_student
        total_program = total_per_student * participants

        trace.append(("Product", "Product of condition factors", f"{product_factor:.6g}"))
        trace.append(("Variable", f"Base {base_weekly_price:g} × product", f"{variable_per_student:.2f}"))
        trace.append(("Fixed", f"Insurance {insurance:g} + management fee {management_fee:g}", f"{fixed_per_student:.2f}"))
        trace.append(("Total", f"Per student × {participants:g} participants", f"{total_program:.2f}"))
        logger.debug("Estimate computed: product=%s total=%s", product_factor, total_program)

        return EstimateSuccess(
            factors=factors,
            warnings=tuple(warnings),
            base_weekly_price=base_weekly_price,
            weeks=weeks,
            participants=participants,
            product_factor=product_factor,
            variable_per_student=variable_per_student,
            insurance_per_student=insurance,
            management_fee_per_student=management_fee,
            fixed_per_student=fixed_per_student,
            total_per_student=total_per_student,
            total_program=total_program,
            trace=_to_trace(trace),
        )


def _to_trace(steps: list[tuple[str, str, Optional[str]]]) -> tuple[TraceStep, ...]:
    return tuple(TraceStep(step=s, description=d, value=v) for s, d, v in steps)


_engine = EstimateEngine()


def compute_estimate(estimate_input: EstimateInput) -> EstimateResult:
    """Module-level entry point; equivalent to EstimateEngine().calculate()."""
    return _engine.calculate(estimate_input)
