import pandas as pd

from war_dashboard.config import ALL
from war_dashboard.data.filters import DEFAULT_FILTERS, FilterState, update_filters
from war_dashboard.data.loader import DashboardData
from war_dashboard.data.merge import merge_features
from war_dashboard.data.view import build_view, max_total
from war_dashboard.ui.components.choropleth import feature_style, lightness


def test_build_view_unfiltered(dashboard_data):
    view = build_view(dashboard_data, DEFAULT_FILTERS)
    assert len(view.features) == 4
    assert view.max_total == 10
    assert view.state_options == [ALL, "Region A", "Region B"]
    assert view.township_options == [ALL, "T1", "T2", "T3"]
    assert view.group_options == [ALL, "G1", "G2", "G3"]
    assert len(view.headlines) == 4


def test_state_change_narrows_options(dashboard_data):
    start = FilterState(township="T3", group="G1")
    view = build_view(dashboard_data, update_filters(start, "state", "Region A"))
    assert view.filters == FilterState(state="Region A")
    assert view.township_options == [ALL, "T1", "T2"]
    assert [f["properties"]["TS_MMR"] for f in view.features] == ["T1", "T2"]


def test_township_change_narrows_groups(dashboard_data):
    filters = update_filters(FilterState(state="Region A", group="G2"), "township", "T1")
    view = build_view(dashboard_data, filters)
    assert view.filters.group == ALL
    assert view.group_options == [ALL, "G1", "G3"]


def test_empty_selection(dashboard_data):
    view = build_view(dashboard_data, FilterState(state="Nowhere"))
    assert view.features == []
    assert view.max_total is None
    assert set(view.totals.values()) == {0}
    assert view.headlines == []


def test_max_total():
    assert max_total([]) is None
    assert max_total([{"properties": {"totalTime": 3}}, {"properties": {"totalTime": 7}}]) == 7


def test_two_township_end_to_end():
    features = [
        {"type": "Feature", "properties": {"TS_MMR": "town1"}, "geometry": None},
        {"type": "Feature", "properties": {"TS_MMR": "town2"}, "geometry": None},
    ]
    records = pd.DataFrame([{"TS_MMR_DASH": "town1", "Time": "5", "ST_MMR": "S1"}])
    data = DashboardData(records=records, features=merge_features(features, records))

    view = build_view(data, DEFAULT_FILTERS)

    assert [f["properties"]["totalTime"] for f in view.features] == [5, 0]
    assert view.max_total == 5
    assert [lightness(f["properties"]["totalTime"], view.max_total) for f in view.features] == [50, 100]
    assert feature_style(view.features[0], view.max_total)["fillColor"] == "hsl(0, 100%, 50%)"
    assert feature_style(view.features[1], view.max_total)["fillColor"] == "hsl(0, 100%, 100%)"
