#!/usr/bin/env python3
"""
Streamlit Web Interface for the Data Reasoning Assistant
Upload or paste a dataset, list assumptions, and get an evidence-based verdict
for each one
"""

import streamlit as st
import asyncio

from reasoning_assistant.models.analysis import EvaluationStatus, split_assumptions
from reasoning_assistant.services.session_controller import SessionController
from reasoning_assistant.utils.logger import setup_logger

# Page configuration
st.set_page_config(
    page_title="Data Reasoning Assistant",
    page_icon="🧠",
    layout="wide",
    initial_sidebar_state="collapsed"
)

STATUS_BADGES = {
    EvaluationStatus.SUPPORTED: ("🟢", "Supported"),
    EvaluationStatus.REFUTED: ("🔴", "Refuted"),
    EvaluationStatus.PARTIALLY_SUPPORTED: ("🟡", "Partially Supported"),
    EvaluationStatus.INSUFFICIENT_DATA: ("⚪", "Insufficient Data"),
}

@st.cache_resource
def configure_logging():
    setup_logger()
    return True

def get_controller() -> SessionController:
    # One controller per browser session
    if "controller" not in st.session_state:
        st.session_state.controller = SessionController()
    return st.session_state.controller

def render_inputs(controller: SessionController):
    state = controller.state
    col1, col2 = st.columns(2)

    with col1:
        st.subheader("📊 Source Data")
        uploaded_file = st.file_uploader(
            "Upload PDF/CSV/XLS",
            type=["csv", "txt", "xlsx", "xls", "pdf"],
            help="The extracted text replaces the data below"
        )
        if uploaded_file is not None and st.session_state.get("last_upload") != uploaded_file.file_id:
            st.session_state.last_upload = uploaded_file.file_id
            with st.spinner("Extracting document contents..."):
                state = asyncio.run(controller.upload(uploaded_file.name, uploaded_file.getvalue()))
            st.session_state.data_text = state.data

        if "data_text" not in st.session_state:
            st.session_state.data_text = state.data
        data = st.text_area(
            "Paste your data here",
            height=400,
            key="data_text",
            placeholder="Paste your data here or upload a file (PDF, CSV, Excel)..."
        )
        if data != controller.state.data:
            controller.edit_data(data)

    with col2:
        st.subheader("🧪 Assumptions")
        if st.button("✨ Suggest assumptions", disabled=not controller.state.can_suggest):
            with st.spinner("Generating suggestions..."):
                state = asyncio.run(controller.suggest())
            st.session_state.assumptions_text = state.assumptions

        if "assumptions_text" not in st.session_state:
            st.session_state.assumptions_text = controller.state.assumptions
        assumptions = st.text_area(
            "One assumption per line",
            height=400,
            key="assumptions_text",
            placeholder="- Sales in the North region grew quarter over quarter\n- Returns are driven by one product line"
        )
        if assumptions != controller.state.assumptions:
            controller.edit_assumptions(assumptions)
        st.caption(f"{len(split_assumptions(assumptions))} assumptions to evaluate")

def render_result(controller: SessionController):
    result = controller.state.result

    if st.button("← Back to Inputs"):
        controller.back_to_inputs()
        st.rerun()

    st.header("📋 Executive Summary")
    st.write(result.summary)

    col1, col2 = st.columns([1, 2])
    with col1:
        st.metric("Overall Confidence", f"{result.overallConfidence:.0%}")
        st.progress(result.overallConfidence)
    with col2:
        st.info(f"**Key Decision Recommendation:** {result.keyDecisionRecommendation}")

    counts = result.status_counts()
    count_cols = st.columns(len(STATUS_BADGES))
    for column, (status, (icon, label)) in zip(count_cols, STATUS_BADGES.items()):
        column.metric(f"{icon} {label}", counts[status.value])

    st.header("🔍 Assumption Evaluations")
    unanswered = [
        assumption for assumption in split_assumptions(controller.state.assumptions)
        if result.evaluation_for(assumption) is None
    ]
    if unanswered:
        st.warning("No evaluation was returned for: " + "; ".join(unanswered))

    for evaluation in result.evaluations:
        icon, label = STATUS_BADGES[evaluation.status]
        with st.expander(f"{icon} {evaluation.assumption} ({label})", expanded=True):
            st.markdown(f"**Reasoning:** {evaluation.reasoning}")
            facts = st.columns(3)
            for column, title, items in (
                (facts[0], "✅ Supporting facts", evaluation.supportingFacts),
                (facts[1], "⚠️ Conflicting facts", evaluation.conflictingFacts),
                (facts[2], "❓ Missing data points", evaluation.missingDataPoints),
            ):
                with column:
                    st.markdown(f"**{title}**")
                    if items:
                        st.markdown("\n".join(f"- {item}" for item in items))
                    else:
                        st.caption("None")

def main():
    """Main Streamlit application"""
    configure_logging()
    controller = get_controller()

    # Header
    header_col, clear_col = st.columns([5, 1])
    with header_col:
        st.title("🧠 Data Reasoning Assistant")
    with clear_col:
        if st.button("Clear Session", use_container_width=True):
            controller.clear()
            for key in ("data_text", "assumptions_text"):
                st.session_state.pop(key, None)
            st.rerun()

    if controller.state.result is None:
        st.info(
            "**How to use:** Upload a **PDF, CSV, or Excel** file, or paste your dataset directly. "
            "Then, list the assumptions you want to test. The assistant will evaluate them strictly "
            "against the evidence provided."
        )
        render_inputs(controller)

    if controller.state.error:
        st.error(f"❌ {controller.state.error}")

    if controller.state.result is not None:
        render_result(controller)
        return

    st.markdown("---")
    if st.button(
        "🚀 Evaluate Assumptions",
        type="primary",
        use_container_width=True,
        disabled=controller.state.is_busy,
        help=None if controller.state.can_evaluate else "Provide both data and assumptions first"
    ):
        with st.spinner("Assistant is cross-referencing evidence..."):
            asyncio.run(controller.evaluate())
        st.rerun()

if __name__ == "__main__":
    main()
