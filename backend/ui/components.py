"""Streamlit building blocks for the alignment report."""

from __future__ import annotations

import html

import plotly.graph_objects as go
import streamlit as st

from models.schemas.report_view import ReportView, RequirementRow

REPORT_CSS = """
<style>
.badge {
    font-size: 0.65rem; font-weight: 700; padding: 0.1rem 0.4rem;
    border-radius: 4px; border: 1px solid transparent;
    text-transform: uppercase; letter-spacing: 0.05em; margin-left: 0.35rem;
}
.badge-met { background: #dcfce7; color: #166534; border-color: #bbf7d0; }
.badge-unmet { background: #fee2e2; color: #991b1b; border-color: #fecaca; }
.badge-partial { background: #fef9c3; color: #854d0e; border-color: #fef08a; }
.badge-hard { background: #1e293b; color: #ffffff; }
.badge-soft { background: #e2e8f0; color: #334155; }
.badge-gaps { background: #fee2e2; color: #b91c1c; border-radius: 999px; }
.req-row {
    padding: 0.75rem 1rem; border: 1px solid #f1f5f9; border-radius: 12px;
    margin-bottom: 0.6rem; background: #ffffff;
}
.req-row p { color: #64748b; font-size: 0.85rem; margin: 0.35rem 0 0 0; }
.rec-card {
    display: flex; gap: 0.75rem; padding: 0.6rem 0.8rem; margin-bottom: 0.5rem;
    background: #312e81; color: #eef2ff; border-radius: 10px; font-size: 0.9rem;
}
.rec-card b { color: #a5b4fc; }
.summary-box {
    padding: 0.8rem 1rem; background: #f8fafc; border-radius: 12px;
    font-style: italic; color: #475569; font-size: 0.9rem;
}
</style>
"""


def gauge_figure(view: ReportView) -> go.Figure:
    """Half-donut gauge: score vs. 100 minus score, colored by band."""
    labels = [seg.name for seg in view.gauge] + [""]
    values = [seg.value for seg in view.gauge] + [100]
    colors = [seg.color for seg in view.gauge] + ["rgba(0,0,0,0)"]

    fig = go.Figure(
        go.Pie(
            labels=labels,
            values=values,
            hole=0.6,
            rotation=90,
            direction="clockwise",
            sort=False,
            marker={"colors": colors},
            textinfo="none",
            hoverinfo="skip",
            showlegend=False,
        )
    )
    fig.add_annotation(
        text=f"<b>{view.score_label}</b>",
        x=0.5,
        y=0.55,
        showarrow=False,
        font={"size": 40},
    )
    fig.update_layout(height=260, margin=dict(l=10, r=10, t=10, b=0))
    return fig


def badge_html(text: str, style: str) -> str:
    return f'<span class="badge badge-{style}">{html.escape(text)}</span>'


def requirement_html(row: RequirementRow) -> str:
    return (
        '<div class="req-row">'
        f"<b>{html.escape(row.label)}</b>"
        f"{badge_html(row.status.value, row.status_style)}"
        f"{badge_html(row.kind.value, row.kind_style)}"
        f"<p>{html.escape(row.explanation)}</p>"
        "</div>"
    )


def render_report(view: ReportView, on_reset) -> None:
    st.markdown(REPORT_CSS, unsafe_allow_html=True)
    st.title("Alignment Report")
    st.caption(view.header)

    left, right = st.columns([1, 2])

    with left:
        with st.container(border=True):
            st.markdown("**ALIGNMENT SCORE**")
            st.plotly_chart(gauge_figure(view), use_container_width=True)
            st.markdown(f"**{html.escape(view.classification.upper())}**")
            if view.cap_exceeded:
                st.warning(
                    f"Score is above the {view.score_cap}% cap for the reported hard requirement gaps."
                )
            st.markdown(
                f'<div class="summary-box">"{html.escape(view.summary)}"</div>',
                unsafe_allow_html=True,
            )
            st.button("New Analysis", on_click=on_reset, use_container_width=True)

    with right:
        with st.container(border=True):
            st.subheader("Requirement Analysis")
            for row in view.requirements:
                st.markdown(requirement_html(row), unsafe_allow_html=True)

        gaps_col, strengths_col = st.columns(2)
        with gaps_col:
            with st.container(border=True):
                title = "#### :red[Critical Gaps]"
                if view.critical_gaps_badge:
                    title += " " + badge_html(view.critical_gaps_badge, "gaps")
                st.markdown(title, unsafe_allow_html=True)
                for gap in view.gaps:
                    st.markdown(f"- {gap}")
        with strengths_col:
            with st.container(border=True):
                st.markdown("#### :green[Core Strengths]")
                for strength in view.strengths:
                    st.markdown(f"- {strength}")

        st.markdown("#### Optimized Recommendations")
        for card in view.recommendations:
            st.markdown(
                f'<div class="rec-card"><b>{card.number}</b><span>{html.escape(card.text)}</span></div>',
                unsafe_allow_html=True,
            )
