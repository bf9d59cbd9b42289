"""
Management fee resolution (per student).

Auto mode reads the fee off the duration table, which is only defined up to
5 weeks. Longer programs fail closed: the caller must switch to manual entry.
"""
from typing import Any

from .bands import MANAGEMENT_FEE_BANDS
from .factors import to_number
from .models import FactorOutcome, Resolved, Unresolved

WARN_MANUAL_FEE_INVALID = "manual management fee is invalid."
WARN_NO_AUTO_RULE = "no auto rule for 6+ weeks; switch to manual entry."


def management_fee_auto(weeks: Any) -> FactorOutcome:
    """Table-driven fee. Unresolved past the last band, never extrapolated."""
    w = to_number(weeks)
    if w is None or w <= 0:
        # Reported by the duration factor.
        return FactorOutcome(Unresolved(f"weeks={weeks!r}"))

    for band in MANAGEMENT_FEE_BANDS:
        if w <= band.upper:
            return FactorOutcome(Resolved(float(band.factor)))

    return FactorOutcome(Unresolved(f"no auto rule for weeks={w:g}"), (WARN_NO_AUTO_RULE,))


def management_fee_manual(fee: Any) -> FactorOutcome:
    m = to_number(fee)
    if m is None or m < 0:
        return FactorOutcome(Unresolved(f"manual fee={fee!r}"), (WARN_MANUAL_FEE_INVALID,))
    return FactorOutcome(Resolved(m))


def resolve_management_fee(use_manual: bool, weeks: Any, manual_fee: Any) -> FactorOutcome:
    """Pick manual or auto resolution. The manual value is ignored in auto mode."""
    if use_manual:
        return management_fee_manual(manual_fee)
    return management_fee_auto(weeks)
