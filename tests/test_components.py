import datetime as dt

import pandas as pd
import streamlit as st

from war_dashboard.config import UI_TEXT
from war_dashboard.data.summary import Headline
from war_dashboard.ui.components.charts import bar_chart, render_plotly
from war_dashboard.ui.components.formatting import format_number
from war_dashboard.ui.components.headlines import headline_html
from war_dashboard.ui.components.kpi import summary_cards
from war_dashboard.ui.components.tables import features_to_frame, render_table
from war_dashboard.ui.layout import date_bounds


def test_summary_cards_default_missing_to_zero():
    cards = summary_cards({"sacrifice_sac": 4})
    assert [card.value for card in cards] == [4, 0, 0, 0]
    assert cards[2].label == "စခန်းသိမ်း"


def test_summary_cards_display_counts():
    cards = summary_cards({"sacrifice_sac": 1250, "prisoners_war": 3})
    assert [card.display for card in cards] == ["1,250", "0", "0", "3"]


def test_format_number():
    assert format_number(1234) == "1,234"
    assert format_number(None) == "–"
    assert format_number("n/a") == "–"


def test_headline_html_escapes_and_links():
    content = headline_html(Headline(type_label="Raid", text="A & B", link="https://example.org/x"))
    assert "A &amp; B" in content
    assert 'href="https://example.org/x"' in content
    assert "Raid" in content

    plain = headline_html(Headline(type_label="", text="No link"))
    assert "<a " not in plain


def test_features_to_frame_selects_columns(merged):
    frame = features_to_frame(merged, ["TS_MMR_DASH", "totalTime", "Missing"])
    assert list(frame.columns) == ["TS_MMR_DASH", "totalTime", "Missing"]
    assert frame["totalTime"].tolist() == [5, 10, 2, 0]
    assert frame["Missing"].isna().all()


def test_date_bounds(records):
    assert date_bounds(records) == (dt.date(2024, 1, 5), dt.date(2024, 4, 1))


def test_date_bounds_without_dates():
    assert date_bounds(pd.DataFrame()) == (None, None)
    assert date_bounds(pd.DataFrame({"Date": ["soon", None]})) == (None, None)


def test_table_and_chart_stretch_to_container(monkeypatch):
    calls = {}
    monkeypatch.setattr(st, "dataframe", lambda data, **kwargs: calls.setdefault("dataframe", kwargs))
    monkeypatch.setattr(st, "download_button", lambda label, **kwargs: calls.setdefault("download", label))
    monkeypatch.setattr(st, "plotly_chart", lambda fig, **kwargs: calls.setdefault("plotly_chart", kwargs))

    render_table(pd.DataFrame({"totalTime": [1200]}), column_config={"totalTime": {"type": "number"}})
    render_plotly(bar_chart(pd.DataFrame({"State": ["Region A"], "Incidents": [3]}), x="State", y="Incidents"))

    assert calls["dataframe"]["width"] == "stretch"
    assert calls["plotly_chart"]["width"] == "stretch"
    assert calls["download"] == UI_TEXT["download_csv"]
    assert "use_container_width" not in calls["dataframe"]
