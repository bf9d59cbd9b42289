"""
Band-table tests for the seven condition factors and the management fee.
Boundaries are inclusive on the upper bound of each band.
"""
import math
import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from program_estimator.engine.bands import Band, BandTable, CULTURAL_BANDS
from program_estimator.engine.factors import (
    WARN_COMPANY_VISIT_CLAMPED,
    WARN_COMPANY_VISIT_INVALID,
    WARN_CULTURAL_CLAMPED,
    WARN_CULTURAL_INVALID,
    WARN_PARTICIPANTS_INVALID,
    WARN_WEEKS_INVALID,
    company_visit_factor,
    cultural_factor,
    japanese_lesson_factor,
    lecture_factor,
    participant_factor,
    prep_complexity_factor,
    to_number,
    week_factor,
)
from program_estimator.engine.management_fee import (
    WARN_MANUAL_FEE_INVALID,
    WARN_NO_AUTO_RULE,
    management_fee_auto,
    management_fee_manual,
    resolve_management_fee,
)
from program_estimator.engine.models import Resolved, Unresolved

NOT_FINITE = [None, "", "abc", float("nan"), float("inf"), float("-inf"), True]


@pytest.mark.parametrize("raw,expected", [
    (12, 12.0),
    (1.5, 1.5),
    ("12", 12.0),
    (" 3 ", 3.0),
    ("0", 0.0),
])
def test_to_number_reads_form_values(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize("raw", NOT_FINITE + ["nan", "inf", 10**400, -10**400])
def test_to_number_rejects_non_finite(raw):
    assert to_number(raw) is None


@pytest.mark.parametrize("weeks", [1, 2, 2.5, 6, 12])
def test_week_factor_is_identity(weeks):
    outcome = week_factor(weeks)
    assert outcome.resolution == Resolved(float(weeks))
    assert outcome.warnings == ()


@pytest.mark.parametrize("weeks", [0, -1] + NOT_FINITE)
def test_week_factor_invalid(weeks):
    outcome = week_factor(weeks)
    assert isinstance(outcome.resolution, Unresolved)
    assert outcome.resolution.value is None
    assert outcome.warnings == (WARN_WEEKS_INVALID,)


@pytest.mark.parametrize("count,expected", [
    (1, 1.5), (10, 1.5),
    (10.5, 1.3), (11, 1.3), (15, 1.3),
    (16, 1.2), (20, 1.2),
    (21, 1.0), (25, 1.0),
    (26, 0.9), (30, 0.9),
    (31, 0.8), (500, 0.8),
])
def test_participant_bands(count, expected):
    outcome = participant_factor(count)
    assert outcome.resolution.value == expected, \
        f"{count} participants should map to {expected}, got {outcome.resolution.value}"


@pytest.mark.parametrize("count", [0, -3] + NOT_FINITE)
def test_participant_factor_invalid(count):
    outcome = participant_factor(count)
    assert not outcome.resolution.ok
    assert outcome.warnings == (WARN_PARTICIPANTS_INVALID,)


@pytest.mark.parametrize("weeks", [None, 0, -2, 3, 10])
def test_japanese_lesson_disabled_ignores_weeks(weeks):
    assert japanese_lesson_factor(False, weeks).resolution == Resolved(1.0)


@pytest.mark.parametrize("weeks,expected", [
    (1, 1.3), (2, 1.3),
    (2.5, 1.6), (3, 1.6), (5, 1.6),
    (6, 2.0), (20, 2.0),
])
def test_japanese_lesson_bands(weeks, expected):
    assert japanese_lesson_factor(True, weeks).resolution.value == expected


def test_japanese_lesson_invalid_weeks_adds_no_warning():
    outcome = japanese_lesson_factor(True, 0)
    assert not outcome.resolution.ok
    assert outcome.warnings == ()


@pytest.mark.parametrize("times,expected", [
    (0, 1.0),
    (0.5, 1.2), (1, 1.2), (3, 1.2),
    (4, 1.4), (6, 1.4),
    (7, 1.6), (9, 1.6),
    (10, 1.8), (14, 1.8),
    (15, 2.0), (20, 2.0),
    (21, 3.0), (30, 3.0),
])
def test_cultural_bands(times, expected):
    outcome = cultural_factor(times)
    assert outcome.resolution.value == expected
    assert outcome.warnings == ()


@pytest.mark.parametrize("times", [31, 35, 100])
def test_cultural_clamps_above_table(times):
    outcome = cultural_factor(times)
    assert outcome.resolution.value == 3.0
    assert outcome.warnings == (WARN_CULTURAL_CLAMPED,)


@pytest.mark.parametrize("times", [-1] + NOT_FINITE)
def test_cultural_invalid(times):
    outcome = cultural_factor(times)
    assert not outcome.resolution.ok
    assert outcome.warnings == (WARN_CULTURAL_INVALID,)


@pytest.mark.parametrize("value,expected", [
    ("Regular", 1.0),
    ("Continuing", 1.2),
    ("New", 1.35),
    ("Complex", 1.5),
])
def test_prep_complexity_table(value, expected):
    assert prep_complexity_factor(value).resolution.value == expected


@pytest.mark.parametrize("value", ["Expert", "new", "", None, 1.35])
def test_prep_complexity_unknown(value):
    outcome = prep_complexity_factor(value)
    assert not outcome.resolution.ok
    assert outcome.warnings == (f"unknown preparation complexity: {value}.",)


@pytest.mark.parametrize("value,expected", [("None", 1.0), ("Present", 1.5)])
def test_lecture_table(value, expected):
    assert lecture_factor(value).resolution.value == expected


@pytest.mark.parametrize("value", ["Yes", None, 1.5])
def test_lecture_unknown(value):
    outcome = lecture_factor(value)
    assert not outcome.resolution.ok
    assert outcome.warnings == (f"unknown lecture option: {value}.",)


@pytest.mark.parametrize("times,expected", [
    (0, 1.0),
    (1, 1.2), (3, 1.2),
    (4, 1.4), (6, 1.4),
    (6.5, 1.6), (7, 1.6), (9, 1.6),
])
def test_company_visit_bands(times, expected):
    outcome = company_visit_factor(times)
    assert outcome.resolution.value == expected
    assert outcome.warnings == ()


@pytest.mark.parametrize("times", [10, 25])
def test_company_visit_clamps_above_table(times):
    outcome = company_visit_factor(times)
    assert outcome.resolution.value == 1.6
    assert outcome.warnings == (WARN_COMPANY_VISIT_CLAMPED,)


@pytest.mark.parametrize("times", [-1] + NOT_FINITE)
def test_company_visit_invalid(times):
    outcome = company_visit_factor(times)
    assert not outcome.resolution.ok
    assert outcome.warnings == (WARN_COMPANY_VISIT_INVALID,)


@pytest.mark.parametrize("weeks,expected", [
    (0.5, 20000), (1, 20000),
    (2, 30000),
    (3, 40000),
    (4, 50000),
    (4.5, 60000), (5, 60000),
])
def test_management_fee_auto_table(weeks, expected):
    outcome = management_fee_auto(weeks)
    assert outcome.resolution.value == expected
    assert outcome.warnings == ()


@pytest.mark.parametrize("weeks", [5.5, 6, 12])
def test_management_fee_auto_fails_closed_past_five_weeks(weeks):
    outcome = management_fee_auto(weeks)
    assert not outcome.resolution.ok
    assert outcome.warnings == (WARN_NO_AUTO_RULE,)


def test_management_fee_auto_invalid_weeks_is_silent():
    outcome = management_fee_auto(-1)
    assert not outcome.resolution.ok
    assert outcome.warnings == ()


@pytest.mark.parametrize("fee,expected", [(70000, 70000.0), (0, 0.0), ("45000", 45000.0)])
def test_management_fee_manual(fee, expected):
    assert management_fee_manual(fee).resolution == Resolved(expected)


@pytest.mark.parametrize("fee", [-1, None, "", "abc", math.inf])
def test_management_fee_manual_invalid(fee):
    outcome = management_fee_manual(fee)
    assert not outcome.resolution.ok
    assert outcome.warnings == (WARN_MANUAL_FEE_INVALID,)


def test_resolve_management_fee_modes():
    assert resolve_management_fee(True, 10, 70000).resolution.value == 70000
    # Manual value is ignored in auto mode
    assert resolve_management_fee(False, 3, -5).resolution.value == 40000


def test_band_table_rejects_unordered_bands():
    with pytest.raises(ValueError):
        BandTable("broken", [Band(5, 1.0), Band(3, 1.2)], overflow_factor=1.5)


def test_band_table_reports_clamp_only_past_documented_max():
    assert not CULTURAL_BANDS.lookup(30).clamped
    assert CULTURAL_BANDS.lookup(30.5).clamped
    assert CULTURAL_BANDS.max_factor == 3.0
