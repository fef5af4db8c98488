from __future__ import annotations

import streamlit as st

from war_dashboard.config import (
    COUNTERS,
    DATE_FIELD,
    GROUP_FIELD,
    HEADLINE_FIELD,
    LINK_FIELD,
    STATE_FIELD,
    TOTAL_TIME_FIELD,
    TOWNSHIP_FIELD,
    TYPE_FIELD,
    UI_TEXT,
)
from war_dashboard.ui.components.tables import features_to_frame, render_table
from war_dashboard.ui.pages.context import PageContext

COUNT_COLUMNS = [column for counter in COUNTERS for column in counter.columns]
RECORD_COLUMNS = [
    DATE_FIELD,
    STATE_FIELD,
    TOWNSHIP_FIELD,
    GROUP_FIELD,
    TYPE_FIELD,
    HEADLINE_FIELD,
    TOTAL_TIME_FIELD,
    *COUNT_COLUMNS,
    LINK_FIELD,
]


def render(context: PageContext) -> None:
    st.subheader(UI_TEXT["records"])
    matched = [f for f in context.view.features if f["properties"].get(TOWNSHIP_FIELD)]
    table = features_to_frame(matched, RECORD_COLUMNS)
    render_table(
        table,
        column_config={TOTAL_TIME_FIELD: {"type": "number", "decimals": 0}},
        export_file_name="township_incidents.csv",
    )
