"""
Layout helpers for the Streamlit application (page setup, sidebar filters).
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional, Tuple

import pandas as pd
import streamlit as st

from war_dashboard.config import ALL, DATE_FIELD, UI_TEXT
from war_dashboard.data.filters import (
    DEFAULT_FILTERS,
    FilterState,
    normalize_date_range,
    parse_dates,
    serialize_filters,
    update_filters,
)
from war_dashboard.data.view import DashboardView
from war_dashboard.ui.components.formatting import format_number

logger = logging.getLogger(__name__)

FILTERS_KEY = "wd_filters"
DATE_RANGE_KEY = "wd_date_range"
STATE_KEY = "wd_state"
TOWNSHIP_KEY = "wd_township"
GROUP_KEY = "wd_group"


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title=UI_TEXT["title"],
        layout="wide",
        page_icon=":world_map:",
    )


def current_filters() -> FilterState:
    return st.session_state.get(FILTERS_KEY, DEFAULT_FILTERS)


def _dispatch(field: str, widget_key: str) -> None:
    value = st.session_state.get(widget_key)
    if field == "date_range":
        value = normalize_date_range(value)
    filters = update_filters(current_filters(), field, value)
    st.session_state[FILTERS_KEY] = filters
    # Keep dependent selects in sync with the reset values
    st.session_state[TOWNSHIP_KEY] = filters.township
    st.session_state[GROUP_KEY] = filters.group
    logger.info("Filters changed (%s): %s", field, serialize_filters(filters))


def date_bounds(records: pd.DataFrame) -> Tuple[Optional[dt.date], Optional[dt.date]]:
    if records.empty or DATE_FIELD not in records.columns:
        return None, None
    dates = parse_dates(records[DATE_FIELD]).dropna()
    if dates.empty:
        return None, None
    return dates.min().date(), dates.max().date()


def sidebar_filters_ui(view: DashboardView, records: pd.DataFrame) -> None:
    """
    Render the sidebar filter controls for the current view.

    Widget callbacks store the next FilterState in session state, so the
    following rerun builds its view from the updated filters.
    """
    st.sidebar.header(UI_TEXT["filters"])

    min_date, max_date = date_bounds(records)
    st.sidebar.date_input(
        UI_TEXT["date_range"],
        value=(),
        min_value=min_date,
        max_value=max_date,
        format="YYYY-MM-DD",
        key=DATE_RANGE_KEY,
        on_change=_dispatch,
        args=("date_range", DATE_RANGE_KEY),
    )
    st.sidebar.selectbox(
        UI_TEXT["state"],
        view.state_options,
        key=STATE_KEY,
        on_change=_dispatch,
        args=("state", STATE_KEY),
    )
    st.sidebar.selectbox(
        UI_TEXT["township"],
        view.township_options,
        key=TOWNSHIP_KEY,
        on_change=_dispatch,
        args=("township", TOWNSHIP_KEY),
    )
    st.sidebar.selectbox(
        UI_TEXT["group"],
        view.group_options,
        key=GROUP_KEY,
        on_change=_dispatch,
        args=("group", GROUP_KEY),
    )


def active_filter_summary(filters: FilterState, total_features: int) -> None:
    badges = []
    if filters.start_date or filters.end_date:
        start = filters.start_date.isoformat() if filters.start_date else "…"
        end = filters.end_date.isoformat() if filters.end_date else "…"
        badges.append(f"{UI_TEXT['date_range']}: {start} – {end}")
    for label_key, value in (("state", filters.state), ("township", filters.township), ("group", filters.group)):
        if value != ALL:
            badges.append(f"{UI_TEXT[label_key]}: {value}")

    summary_text = " | ".join(badges) if badges else UI_TEXT["all_data"]
    st.markdown(f"**{UI_TEXT['active_filters']}: {summary_text}**")
    st.caption(UI_TEXT["showing_townships"].format(count=format_number(total_features, 0)))
