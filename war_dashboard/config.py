"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import streamlit as st


# Sentinel meaning "no restriction" for the select filters
ALL = "အားလုံး"

# Boundary file property holding the township identifier
GEO_TOWNSHIP_FIELD = "TS_MMR"

# Spreadsheet columns
TOWNSHIP_FIELD = "TS_MMR_DASH"
STATE_FIELD = "ST_MMR"
GROUP_FIELD = "Groups"
DATE_FIELD = "Date"
TIME_FIELD = "Time"
HEADLINE_FIELD = "Headline"
LINK_FIELD = "Link"
TYPE_FIELD = "Type1"

# Derived on merge
TOTAL_TIME_FIELD = "totalTime"


@dataclass(frozen=True)
class CounterConfig:
    key: str
    label: str
    columns: Tuple[str, ...]


# Summary cards; captured bases counts both sides
COUNTERS: List[CounterConfig] = [
    CounterConfig("sacrifice_sac", "စကစကျဆုံး", ("စကစကျဆုံး",)),
    CounterConfig("revolution_martyrs", "တော်လှန်ရေးကျဆုံး", ("တော်လှန်ရေးကျဆုံး",)),
    CounterConfig(
        "captured_bases",
        "စခန်းသိမ်း",
        ("စခန်းသိမ်း(တော်လှန်ရေး)", "စခန်းသိမ်း(စကစ)"),
    ),
    CounterConfig("prisoners_war", "စစ်သုံပန်း", ("စစ်သုံပန်း",)),
]


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


TABS: List[TabConfig] = [
    TabConfig("map", "မြေပုံ"),
    TabConfig("breakdown", "တိုင်း/ပြည်နယ်အလိုက်"),
    TabConfig("records", "မှတ်တမ်းများ"),
]


UI_TEXT: Dict[str, str] = {
    "title": "စစ်ရေးဖြစ်စဉ်များ ဒက်ရှ်ဘုတ်",
    "date_range": "ရက်စွဲ",
    "state": "တိုင်း/ပြည်နယ်",
    "township": "မြို့နယ်",
    "group": "အဖွဲ့",
    "headlines": "သတင်းခေါင်းစဉ်များ",
    "no_info": "အချက်အလက်မရှိပါ",
    "incident_count": "ဖြစ်စဉ်အကြိမ်ရေ",
    "read_more": "အပြည့်အစုံဖတ်ရန်",
    "legend_high": "များ",
    "legend_mid": "ပျှမ်းမျှ",
    "legend_low": "နည်း",
    "refresh": "🔄 အချက်အလက် ပြန်ယူရန်",
    "filters": "စစ်ထုတ်ရန်",
    "records": "မှတ်တမ်းများ",
    "active_filters": "ရွေးထားသော စစ်ထုတ်မှုများ",
    "all_data": "အချက်အလက်အားလုံး",
    "showing_townships": "စစ်ထုတ်ပြီး မြို့နယ် {count} ခု ပြသထားသည်။",
    "no_data": "ပြသရန် အချက်အလက်မရှိပါ။",
    "download_csv": "CSV ဒေါင်းလုဒ်ရယူရန်",
}


DEFAULT_SHEET_RANGE = "Sheet1"
DEFAULT_CREDENTIALS_FILE = "google-credentials.json"
DEFAULT_GEOJSON_PATH = "data/myanmar_townships.geojson"
DEFAULT_MAP_CENTER: Tuple[float, float] = (19.75, 96.1)
DEFAULT_MAP_ZOOM = 6
DEFAULT_MAP_TILES = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
MAP_ATTRIBUTION = "© OpenStreetMap contributors"


@dataclass(frozen=True)
class MapConfig:
    center: Tuple[float, float] = DEFAULT_MAP_CENTER
    zoom: int = DEFAULT_MAP_ZOOM
    tiles: str = DEFAULT_MAP_TILES
    attribution: str = MAP_ATTRIBUTION


@dataclass(frozen=True)
class Settings:
    spreadsheet_id: Optional[str]
    sheet_range: str = DEFAULT_SHEET_RANGE
    api_key: Optional[str] = None
    credentials: str = DEFAULT_CREDENTIALS_FILE
    geojson_path: str = DEFAULT_GEOJSON_PATH
    map: MapConfig = field(default_factory=MapConfig)


def get_secret(name: str, default: str | None = None) -> str | None:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        pass
    return default


def parse_center(raw: str | None) -> Tuple[float, float]:
    """Parse a "lat,lon" pair; falls back to the default center."""
    if not raw:
        return DEFAULT_MAP_CENTER
    try:
        lat, lon = (float(part) for part in raw.split(","))
    except ValueError:
        return DEFAULT_MAP_CENTER
    return (lat, lon)


def parse_zoom(raw: str | None) -> int:
    if not raw:
        return DEFAULT_MAP_ZOOM
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_MAP_ZOOM


def load_settings() -> Settings:
    map_config = MapConfig(
        center=parse_center(get_secret("MAP_CENTER")),
        zoom=parse_zoom(get_secret("MAP_ZOOM")),
        tiles=get_secret("MAP_TILES", DEFAULT_MAP_TILES) or DEFAULT_MAP_TILES,
    )
    return Settings(
        spreadsheet_id=get_secret("SPREADSHEET_ID"),
        sheet_range=get_secret("SHEET_RANGE", DEFAULT_SHEET_RANGE) or DEFAULT_SHEET_RANGE,
        api_key=get_secret("GOOGLE_SHEETS_API_KEY"),
        credentials=get_secret("GOOGLE_APPLICATION_CREDENTIALS", DEFAULT_CREDENTIALS_FILE)
        or DEFAULT_CREDENTIALS_FILE,
        geojson_path=get_secret("GEOJSON_PATH", DEFAULT_GEOJSON_PATH) or DEFAULT_GEOJSON_PATH,
        map=map_config,
    )
