import pytest

from war_dashboard.data.loader import DashboardData, records_from_rows
from war_dashboard.data.merge import merge_features

HEADER = [
    "TS_MMR_DASH",
    "ST_MMR",
    "Groups",
    "Date",
    "Time",
    "Headline",
    "Link",
    "Type1",
    "စကစကျဆုံး",
    "တော်လှန်ရေးကျဆုံး",
    "စခန်းသိမ်း(တော်လှန်ရေး)",
    "စခန်းသိမ်း(စကစ)",
    "စစ်သုံပန်း",
]

SHEET_ROWS = [
    HEADER,
    ["T1", "Region A", "G1", "2024-01-05", "5", "Clash in T1", "https://example.org/t1", "Battle", "3", "1", "1", "0", "2"],
    ["T2", "Region A", "G2", "2024-02-10", "10", "Raid in T2", "", "Raid", "x", "2", "0", "1", ""],
    # short row: trailing cells omitted the way the values API does
    ["T3", "Region B", "G1", "2024-03-15", "2", "Drone strike in T3"],
    ["T1", "Region A", "G3", "2024-04-01", "99", "Second report for T1", "", "Battle", "50", "50", "50", "50", "50"],
]


def _square(x: float, y: float) -> dict:
    return {
        "type": "Polygon",
        "coordinates": [[[x, y], [x + 1, y], [x + 1, y + 1], [x, y + 1], [x, y]]],
    }


@pytest.fixture
def sheet_rows():
    return [list(row) for row in SHEET_ROWS]


@pytest.fixture
def records(sheet_rows):
    return records_from_rows(sheet_rows)


@pytest.fixture
def boundary_collection():
    features = []
    for idx, township in enumerate(["T1", "T2", "T3", "T4"]):
        features.append(
            {
                "type": "Feature",
                "properties": {"TS_MMR": township, "Headline": "boundary headline", "OBJECTID": idx},
                "geometry": _square(95 + idx, 20),
            }
        )
    return {"type": "FeatureCollection", "features": features}


@pytest.fixture
def merged(boundary_collection, records):
    return merge_features(boundary_collection["features"], records)


@pytest.fixture
def dashboard_data(boundary_collection, records, merged):
    return DashboardData(records=records, features=merged)
