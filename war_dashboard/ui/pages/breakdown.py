from __future__ import annotations

import streamlit as st

from war_dashboard.config import UI_TEXT
from war_dashboard.data.summary import totals_by_state
from war_dashboard.ui.components.charts import bar_chart, render_plotly
from war_dashboard.ui.pages.context import PageContext


def render(context: PageContext) -> None:
    st.subheader(UI_TEXT["incident_count"])
    summary = totals_by_state(context.view.features)
    if summary.empty:
        st.info(UI_TEXT["no_data"])
        return
    fig = bar_chart(
        summary,
        x="State",
        y="Incidents",
        xaxis_title=UI_TEXT["state"],
        yaxis_title=UI_TEXT["incident_count"],
    )
    render_plotly(fig)
