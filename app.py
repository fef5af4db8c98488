import war_dashboard.bootstrap_env  # must be first to set env/secrets
import logging

import streamlit as st

from war_dashboard.config import TABS, UI_TEXT, load_settings
from war_dashboard.data.loader import clear_cache, load_dashboard_data
from war_dashboard.data.view import build_view
from war_dashboard.ui.layout import active_filter_summary, current_filters, setup_page, sidebar_filters_ui
from war_dashboard.ui.pages import breakdown, map_view, records
from war_dashboard.ui.pages.context import PageContext

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


PAGE_RENDERERS = {
    "map": map_view.render,
    "breakdown": breakdown.render,
    "records": records.render,
}


def main() -> None:
    setup_page()
    st.title(UI_TEXT["title"])

    if st.sidebar.button(UI_TEXT["refresh"]):
        clear_cache()

    settings = load_settings()
    data = load_dashboard_data(settings)
    if data is None:
        # Failure already logged; leave the page blank
        return

    view = build_view(data, current_filters())
    sidebar_filters_ui(view, data.records)
    active_filter_summary(view.filters, len(view.features))

    context = PageContext(data=data, view=view, map_config=settings.map)

    tab_labels = [tab.label for tab in TABS]
    streamlit_tabs = st.tabs(tab_labels)

    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(context)


if __name__ == "__main__":
    main()
