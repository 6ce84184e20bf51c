from __future__ import annotations

from html import escape
from typing import Sequence

import streamlit as st

from logic import NEXT_STEPS, StreamScore


def inject_css() -> None:
    st.markdown(
        """
        <style>
            :root {
                --primary-blue: #0D47A1;
                --primary-orange: #FF7A00;
            }
            .pf-meter {
                margin-top: 0.4rem;
                margin-bottom: 0.45rem;
            }
            .pf-meter-head {
                display: flex;
                justify-content: space-between;
                align-items: center;
                font-size: 0.88rem;
                color: #45627e;
                margin-bottom: 0.2rem;
            }
            .pf-meter-track {
                width: 100%;
                height: 11px;
                border-radius: 999px;
                background: #dbe5f2;
                overflow: hidden;
                border: 1px solid #c4d4e9;
            }
            .pf-meter-fill {
                height: 100%;
                background: linear-gradient(90deg, var(--primary-blue), var(--primary-orange));
            }
            .pf-best-match {
                margin-top: 0.3rem;
                font-size: 0.85rem;
                font-weight: 600;
                color: #15803d;
            }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_meter(label: str, pct: float, value_text: str | None = None) -> None:
    pct = max(0.0, min(1.0, pct))
    pct_text = value_text or f"{int(round(pct * 100))}%"
    st.markdown(
        f"""
        <div class="pf-meter">
            <div class="pf-meter-head">
                <span>{escape(label)}</span>
                <span>{escape(pct_text)}</span>
            </div>
            <div class="pf-meter-track">
                <div class="pf-meter-fill" style="width: {pct * 100:.1f}%;"></div>
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_progress(question_number: int, total: int, percent: float) -> None:
    render_meter(f"Question {question_number} of {total}", percent / 100, f"{percent:.0f}% Complete")


def render_stream_results(results: Sequence[StreamScore]) -> None:
    st.subheader("Quiz Results")
    st.caption("Based on your responses, here are your recommended streams")
    for idx, item in enumerate(results):
        render_meter(f"{item.label} Stream", item.percentage / 100, f"{item.percentage:.0f}%")
        if idx == 0 and item.raw_count:
            st.markdown("<div class='pf-best-match'>Best Match</div>", unsafe_allow_html=True)


def render_next_steps() -> None:
    st.markdown("**Recommended Next Steps:**")
    for step in NEXT_STEPS:
        st.write(f"- {step}")
