from __future__ import annotations

import streamlit as st

from war_dashboard.config import UI_TEXT
from war_dashboard.ui.components.choropleth import render_map
from war_dashboard.ui.components.headlines import render_headlines
from war_dashboard.ui.components.kpi import render_kpi_cards, summary_cards
from war_dashboard.ui.pages.context import PageContext


def render(context: PageContext) -> None:
    view = context.view
    render_kpi_cards(summary_cards(view.totals), columns=4)

    map_col, headline_col = st.columns([3, 1])
    with map_col:
        render_map(view.features, view.max_total, context.map_config)
    with headline_col:
        render_headlines(view.headlines, UI_TEXT["headlines"])
