from __future__ import annotations

import html
from typing import Sequence

import streamlit as st

from war_dashboard.data.summary import Headline


def headline_html(entry: Headline) -> str:
    text = html.escape(entry.text)
    if entry.link:
        text = f'<a href="{html.escape(entry.link)}" target="_blank">{text}</a>'
    return (
        '<div style="margin-bottom: 0.5rem; padding: 0.5rem; border-bottom: 1px solid #ddd;">'
        f'<div style="font-weight: 600;">{html.escape(entry.type_label)}</div>'
        f'<div style="color: #6c757d;">{text}</div>'
        "</div>"
    )


def render_headlines(entries: Sequence[Headline], title: str, height: int = 600) -> None:
    """Scrollable list with one entry per filtered township, in map order."""
    st.markdown(f"#### {title}")
    with st.container(height=height):
        for entry in entries:
            st.markdown(headline_html(entry), unsafe_allow_html=True)
