"""Streamlit UI for CV Aligner.

Run from the repository root after ``pip install -e .``:
    streamlit run backend/ui/app.py
"""

from __future__ import annotations

import streamlit as st

from services.alignment_policy import get_policy
from services.errors import InputValidationError
from services.report_view import build_report_view
from services.session import AlignmentSession
from ui.components import render_report
from ui.runner import run_submission


st.set_page_config(page_title="CV Aligner", page_icon="🎯", layout="wide")

# ── Session ──────────────────────────────────────────────────────────────

if "alignment_session" not in st.session_state:
    st.session_state.alignment_session = AlignmentSession()
if "uploader_nonce" not in st.session_state:
    st.session_state.uploader_nonce = 0

session: AlignmentSession = st.session_state.alignment_session
policy = get_policy()


def _reset() -> None:
    session.reset()
    st.session_state.jd_text = ""
    st.session_state.cv_text = ""
    # a fresh key drops the previously uploaded file
    st.session_state.uploader_nonce += 1


def _run_analysis(uploaded) -> None:
    session.set_job_description(st.session_state.get("jd_text", ""))
    session.set_resume_text(st.session_state.get("cv_text", ""))
    if uploaded is not None:
        try:
            session.attach_image(uploaded.getvalue(), uploaded.type or "")
        except InputValidationError as e:
            session.fail(e.message)
            return
    else:
        session.clear_image()

    with st.spinner("Calculating Alignment..."):
        run_submission(session, policy=policy)


# ── Report ───────────────────────────────────────────────────────────────

if session.result is not None:
    render_report(build_report_view(session.result, policy), on_reset=_reset)
    st.stop()

# ── Input capture ────────────────────────────────────────────────────────

st.markdown(f"### Aligner :violet[v{policy.version}]")
st.title("Stop Guessing. Start Aligning.")
st.write(
    "Extracts hard requirements and applies realistic penalty scoring "
    "so you only move forward with true matches."
)

if session.error:
    st.error(session.error)

jd_col, cv_col = st.columns(2)
with jd_col:
    st.text_area(
        "JOB DESCRIPTION",
        key="jd_text",
        height=380,
        placeholder='Paste the full job description here... e.g. "Required: 5+ years React experience..."',
    )
with cv_col:
    st.text_area(
        "CANDIDATE CV",
        key="cv_text",
        height=260,
        placeholder="Paste CV text or upload an image/photo of the resume...",
    )
    uploaded = st.file_uploader(
        "Attach Photo of CV",
        type=["png", "jpg", "jpeg", "webp", "heic", "heif"],
        key=f"cv_image_{st.session_state.uploader_nonce}",
    )
    if uploaded is not None:
        st.caption("Image Attached")

if st.button(
    "Analyze Compatibility",
    type="primary",
    disabled=not session.can_submit,
    use_container_width=True,
):
    _run_analysis(uploaded)
    st.rerun()

st.divider()
hard_col, keyword_col, engine_col = st.columns(3)
with hard_col:
    st.markdown("**Hard Requirements**")
    st.caption(
        "Mandatory skills and experience are extracted first. Missing "
        f"{len(policy.penalty_caps) - 1}+ hard requirements caps the score at "
        f"{policy.penalty_caps[-1]}% regardless of keyword density."
    )
with keyword_col:
    st.markdown("**Keyword vs Qualification**")
    st.caption(
        "Mentioning a skill is not the same as demonstrating the required "
        "level of expertise and scale."
    )
with engine_col:
    st.markdown("**Policy**")
    st.caption(f"{policy.title}. Scoring rules are versioned and sent with every request.")
