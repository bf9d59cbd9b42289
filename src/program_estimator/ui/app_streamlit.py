"""
Streamlit UI for the Program Estimator.

Features:
- Input form for duration, headcount and add-ons
- Per-student and program KPIs
- Factor breakdown table with CSV export
- Copyable breakdown text
- Reset to defaults
"""
import streamlit as st
import pandas as pd
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from program_estimator.engine import EstimateEngine, EstimateInput
from program_estimator.engine.bands import LECTURE_FACTORS, PREP_COMPLEXITY_FACTORS
from program_estimator.config.settings import get_settings, default_input
from program_estimator.formatting import build_breakdown_text, factor_rows, yen


st.set_page_config(
    page_title="Custom Program Estimate",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return EstimateEngine()


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    return get_settings()


try:
    engine = get_engine()
    settings = get_settings_cached()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


FORM_KEYS = (
    "weeks", "participants", "has_japanese_lesson", "cultural_times",
    "prep_complexity", "lecture", "company_visit_times", "base_weekly_price",
    "insurance_per_student", "use_manual_mgmt_fee", "management_fee_per_student_manual",
)


def reset_form():
    """Put every widget back to its default value."""
    defaults = default_input(settings)
    st.session_state.program_name = settings.program_name
    for key in FORM_KEYS:
        if key == "management_fee_per_student_manual":
            # The widget starts empty on its own
            st.session_state.pop(key, None)
            continue
        st.session_state[key] = getattr(defaults, key)


if "weeks" not in st.session_state:
    reset_form()


# ============================================================================
# CUSTOM CSS & STYLING
# ============================================================================
st.markdown("""
    <style>
        .block-container {
            padding-top: 2rem;
            padding-bottom: 2rem;
        }
        .stMetric {
            background-color: #f0f2f6;
            padding: 10px;
            border-radius: 5px;
            border-left: 5px solid #ff4b4b;
        }
    </style>
""", unsafe_allow_html=True)

st.title("Custom Program Estimate (Factor Method)")
st.caption(
    f"Base weekly price × conditions 1-7 gives the per-participant price; "
    f"insurance and management fee are added per participant | {datetime.now().strftime('%Y-%m-%d')}"
)


# ============================================================================
# INPUT FORM
# ============================================================================
with st.container(border=True):
    st.text_input("Program name (memo)", key="program_name",
                  placeholder="e.g. 2026 Summer Custom Program")

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.number_input("Duration (weeks)", min_value=1, step=1, key="weeks")
        st.caption("Condition 1: 1 week = 1.0, 2 weeks = 2.0 ...")
    with c2:
        st.number_input("Participants (expected)", min_value=1, step=1, key="participants")
        st.caption("Condition 2: by headcount band")
    with c3:
        st.selectbox("Japanese lesson", options=[False, True], key="has_japanese_lesson",
                     format_func=lambda v: "Yes" if v else "No")
        st.caption("Condition 3: set by duration when enabled")
    with c4:
        st.number_input("Cultural experiences (sessions)", min_value=0, step=1, key="cultural_times")
        st.caption("Condition 4: 0 / 1-3 / 4-6 / ...")

    c1, c2, c3 = st.columns(3)
    with c1:
        st.selectbox("Prep complexity", options=list(PREP_COMPLEXITY_FACTORS), key="prep_complexity",
                     format_func=lambda k: f"{k} ({PREP_COMPLEXITY_FACTORS[k]})")
        st.caption("Condition 5")
    with c2:
        st.selectbox("Lecture", options=list(LECTURE_FACTORS), key="lecture",
                     format_func=lambda k: f"{k} ({LECTURE_FACTORS[k]})")
        st.caption("Condition 6")
    with c3:
        st.number_input("Company visits (sessions)", min_value=0, step=1, key="company_visit_times")
        st.caption("Condition 7: 0 / 1-3 / 4-6 / 7-9")

    c1, c2, c3 = st.columns(3)
    with c1:
        st.number_input("Base price (per week)", min_value=1.0, step=1000.0, key="base_weekly_price")
        st.caption(f"Default: {yen(settings.base_weekly_price)}")
    with c2:
        st.number_input("Insurance (per participant)", min_value=0.0, step=500.0, key="insurance_per_student")
        st.caption(f"Default: {yen(settings.insurance_per_student)}")
    with c3:
        st.radio("Management fee (per participant)", options=[False, True], key="use_manual_mgmt_fee",
                 format_func=lambda v: "Manual" if v else "Auto", horizontal=True)
        st.caption("1-5 weeks are automatic (20k/30k/40k/50k/60k). 6+ weeks need manual entry.")
        if st.session_state.use_manual_mgmt_fee:
            st.number_input("Management fee (manual, per participant)", min_value=0.0, step=1000.0,
                            value=None, placeholder="e.g. 70000", key="management_fee_per_student_manual")


estimate_input = EstimateInput(**{key: st.session_state.get(key) for key in FORM_KEYS})
result = engine.calculate(estimate_input)


# ============================================================================
# WARNINGS & KPIs
# ============================================================================
if result.warnings:
    for warning in result.warnings:
        st.warning(warning)
else:
    st.success("Inputs OK")

st.divider()

k1, k2 = st.columns(2)
with k1:
    st.metric("Per participant (total)", yen(result.total_per_student) if result.ok else "-")
    st.caption(
        f"Factor part {yen(result.variable_per_student) if result.ok else '-'} + "
        f"fixed (insurance + management) {yen(result.fixed_per_student) if result.ok else '-'}"
    )
with k2:
    st.metric("Program total (all participants)", yen(result.total_program) if result.ok else "-")
    st.caption(f"{st.session_state.participants} participants")


# ============================================================================
# FACTOR BREAKDOWN
# ============================================================================
st.divider()
st.subheader("Factor breakdown")

factors_df = factor_rows(result, digits=settings.factor_digits)
st.dataframe(factors_df, use_container_width=True, hide_index=True)
st.caption("The product factor is all of the factors above multiplied together.")

with st.expander("🔍 Resolution Details"):
    for step in result.trace:
        if step.value:
            st.caption(f"**{step.step}**: {step.description} = `{step.value}`")
        else:
            st.caption(f"**{step.step}**: {step.description}")


# ============================================================================
# COPYABLE BREAKDOWN
# ============================================================================
st.divider()
st.subheader("Breakdown text (for copying)")

breakdown = build_breakdown_text(
    st.session_state.program_name,
    estimate_input,
    result,
    product_digits=settings.product_digits,
)
st.code(breakdown, language=None)

b1, b2, b3 = st.columns(3)
with b1:
    st.download_button(
        "📥 Breakdown (.txt)",
        data=breakdown,
        file_name="estimate_breakdown.txt",
        mime="text/plain",
        on_click=lambda: st.toast("Breakdown downloaded."),
        use_container_width=True
    )
with b2:
    export_df = factors_df.copy()
    if result.ok:
        export_df = pd.concat([
            export_df,
            pd.DataFrame([{"Condition": k, "Factor": v} for k, v in result.to_dict().items()]),
        ], ignore_index=True)
    st.download_button(
        "📥 CSV",
        data=export_df.to_csv(index=False),
        file_name="estimate_factors.csv",
        mime="text/csv",
        on_click=lambda: st.toast("CSV downloaded."),
        use_container_width=True
    )
with b3:
    st.button("↺ Reset", on_click=reset_form, use_container_width=True)
