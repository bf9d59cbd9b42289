"""
Factor Resolvers - one pure function per pricing condition.

Each resolver takes the relevant raw input fields and returns a
FactorOutcome: a Resolved multiplier or an Unresolved marker, plus any
warnings. Resolvers never raise on bad input.
"""
import logging
import math
from typing import Any, Optional

from .bands import (
    COMPANY_VISIT_BANDS,
    CULTURAL_BANDS,
    JAPANESE_LESSON_BANDS,
    LECTURE_FACTORS,
    PARTICIPANT_BANDS,
    PREP_COMPLEXITY_FACTORS,
)
from .models import FactorOutcome, Resolved, Unresolved

logger = logging.getLogger(__name__)


LABEL_DURATION = "Condition 1 Duration"
LABEL_PARTICIPANTS = "Condition 2 Participants"
LABEL_JAPANESE_LESSON = "Condition 3 Japanese lesson"
LABEL_CULTURAL = "Condition 4 Cultural experience"
LABEL_PREP_COMPLEXITY = "Condition 5 Prep complexity"
LABEL_LECTURE = "Condition 6 Lecture"
LABEL_COMPANY_VISIT = "Condition 7 Company visit"

FACTOR_LABELS = (
    LABEL_DURATION,
    LABEL_PARTICIPANTS,
    LABEL_JAPANESE_LESSON,
    LABEL_CULTURAL,
    LABEL_PREP_COMPLEXITY,
    LABEL_LECTURE,
    LABEL_COMPANY_VISIT,
)

WARN_WEEKS_INVALID = "duration (weeks) must be a positive number."
WARN_PARTICIPANTS_INVALID = "participants must be a positive number."
WARN_CULTURAL_INVALID = "cultural experience count must be zero or more."
WARN_COMPANY_VISIT_INVALID = "company-visit count must be zero or more."
WARN_CULTURAL_CLAMPED = "cultural count exceeds table (30); using maximum factor 3.0"
WARN_COMPANY_VISIT_CLAMPED = "company-visit count exceeds table (9); using maximum factor 1.6"


def to_number(value: Any) -> Optional[float]:
    """
    Read a form value as a finite float.

    Returns None for None, empty or non-numeric strings, booleans,
    NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def week_factor(weeks: Any) -> FactorOutcome:
    """Condition 1: the duration factor is the week count itself."""
    w = to_number(weeks)
    if w is None or w <= 0:
        return FactorOutcome(Unresolved(f"weeks={weeks!r}"), (WARN_WEEKS_INVALID,))
    return FactorOutcome(Resolved(w))


def participant_factor(count: Any) -> FactorOutcome:
    """Condition 2: banded by expected headcount."""
    n = to_number(count)
    if n is None or n <= 0:
        return FactorOutcome(Unresolved(f"participants={count!r}"), (WARN_PARTICIPANTS_INVALID,))
    return FactorOutcome(Resolved(PARTICIPANT_BANDS.lookup(n).factor))


def japanese_lesson_factor(has_japanese_lesson: bool, weeks: Any) -> FactorOutcome:
    """
    Condition 3: Japanese lesson, scaled by duration when enabled.

    An invalid week count is already reported by the duration factor, so
    no second warning is raised here.
    """
    if not has_japanese_lesson:
        return FactorOutcome(Resolved(1.0))

    w = to_number(weeks)
    if w is None or w <= 0:
        return FactorOutcome(Unresolved(f"weeks={weeks!r}"))
    return FactorOutcome(Resolved(JAPANESE_LESSON_BANDS.lookup(w).factor))


def cultural_factor(times: Any) -> FactorOutcome:
    """Condition 4: cultural experience sessions. Clamps above 30."""
    t = to_number(times)
    if t is None or t < 0:
        return FactorOutcome(Unresolved(f"cultural_times={times!r}"), (WARN_CULTURAL_INVALID,))

    match = CULTURAL_BANDS.lookup(t)
    if match.clamped:
        logger.debug("Cultural count %s clamped to %s", t, match.factor)
        return FactorOutcome(Resolved(match.factor), (WARN_CULTURAL_CLAMPED,))
    return FactorOutcome(Resolved(match.factor))


def prep_complexity_factor(prep_complexity: Any) -> FactorOutcome:
    """Condition 5: direct lookup on the preparation complexity."""
    factor = PREP_COMPLEXITY_FACTORS.get(prep_complexity) if isinstance(prep_complexity, str) else None
    if factor is None:
        return FactorOutcome(
            Unresolved(f"prep_complexity={prep_complexity!r}"),
            (f"unknown preparation complexity: {prep_complexity}.",),
        )
    return FactorOutcome(Resolved(factor))


def lecture_factor(lecture: Any) -> FactorOutcome:
    """Condition 6: direct lookup on the lecture option."""
    factor = LECTURE_FACTORS.get(lecture) if isinstance(lecture, str) else None
    if factor is None:
        return FactorOutcome(
            Unresolved(f"lecture={lecture!r}"),
            (f"unknown lecture option: {lecture}.",),
        )
    return FactorOutcome(Resolved(factor))


def company_visit_factor(times: Any) -> FactorOutcome:
    """Condition 7: company visits. 7 and up share the top factor; warns above 9."""
    t = to_number(times)
    if t is None or t < 0:
        return FactorOutcome(Unresolved(f"company_visit_times={times!r}"), (WARN_COMPANY_VISIT_INVALID,))

    match = COMPANY_VISIT_BANDS.lookup(t)
    if match.clamped:
        logger.debug("Company-visit count %s clamped to %s", t, match.factor)
        return FactorOutcome(Resolved(match.factor), (WARN_COMPANY_VISIT_CLAMPED,))
    return FactorOutcome(Resolved(match.factor))
