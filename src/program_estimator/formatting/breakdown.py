"""
Breakdown formatting - currency and multiplier display, and the copyable
breakdown text.

Everything here is render-time only: values are rounded for display and
never written back into an estimate result.
"""
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import pandas as pd

from ..engine.models import EstimateInput, EstimateResult

FAILURE_NOTE = "* Some inputs are missing or invalid, so the estimate cannot be computed."


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x)


def round_half_up(x: float) -> int:
    """Round to the nearest whole unit, halves away from zero."""
    return int(Decimal(repr(float(x))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def yen(n: Any) -> str:
    """Whole-yen display, e.g. ¥1,234. Non-numbers render as "-"."""
    if not _is_number(n):
        return "-"
    return f"¥{round_half_up(n):,}"


def num(n: Any, digits: int = 2) -> str:
    """Fixed-decimal display for multipliers."""
    if not _is_number(n):
        return "-"
    return f"{n:.{digits}f}"


def round_factor(x: Any, dp: int = 3) -> str:
    """Product display that hides float noise, e.g. 7.666 rather than 7.665840000000001."""
    if not _is_number(x):
        return str(x)
    return f"{x:.{dp}f}"


def _plain(x: Any) -> str:
    # 25000.0 -> "25000", 1.35 -> "1.35"
    if not _is_number(x):
        return "-" if x is None else str(x)
    x = float(x)
    if x.is_integer():
        return str(int(x))
    return repr(x)


def factor_rows(result: EstimateResult, digits: int = 2) -> pd.DataFrame:
    """Condition / factor table for display, unresolved factors shown as "-"."""
    rows = [
        {"Condition": label, "Factor": num(resolution.value, digits)}
        for label, resolution in result.factors
    ]
    return pd.DataFrame(rows, columns=["Condition", "Factor"])


def build_breakdown_text(
    program_name: str,
    estimate_input: EstimateInput,
    result: EstimateResult,
    product_digits: int = 3,
) -> str:
    """
    Plain-text breakdown suitable for pasting into an email or chat.

    Args:
        program_name: Free-text memo name shown on the first line
        estimate_input: The input the result was computed from
        result: Engine output
        product_digits: Decimals for the factor product

    Returns:
        Newline-joined breakdown text
    """
    lines = []
    lines.append(f"■ {program_name}")
    lines.append(
        f"Weeks: {_plain(estimate_input.weeks)} / Participants: {_plain(estimate_input.participants)}"
    )
    lines.append("")
    lines.append("[Factors]")
    for label, resolution in result.factors:
        lines.append(f"{label}: {_plain(resolution.value)}")

    if result.ok:
        lines.append("")
        lines.append(f"Base weekly price: {_plain(result.base_weekly_price)}")
        lines.append(f"Product factor: {round_factor(result.product_factor, product_digits)}")
        lines.append(f"Variable per student: {round_half_up(result.variable_per_student)}")
        lines.append(f"Insurance per student: {_plain(result.insurance_per_student)}")
        lines.append(f"Management fee per student: {_plain(result.management_fee_per_student)}")
        lines.append(f"Total per student: {round_half_up(result.total_per_student)}")
        lines.append(f"Program total: {round_half_up(result.total_program)}")
    else:
        lines.append("")
        lines.append(FAILURE_NOTE)

    return "\n".join(lines)
