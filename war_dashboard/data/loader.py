import json
import logging
import os
import re
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import gspread
import pandas as pd
import streamlit as st
from google.oauth2.service_account import Credentials

from war_dashboard.config import TOTAL_TIME_FIELD, Settings, load_settings
from war_dashboard.data.merge import merge_features

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
]


@dataclass(frozen=True)
class DashboardData:
    """Everything fetched at startup; shared read-only by every rerun."""

    records: pd.DataFrame
    features: List[Dict[str, Any]]


def records_from_rows(rows: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """Turn a values range (row 0 = headers) into one record per row.

    Cells are kept as strings; cells missing from short rows become None.
    """
    if not rows:
        return pd.DataFrame()
    headers = [str(h) for h in rows[0]]
    records = []
    for row in rows[1:]:
        values = [None if v is None else str(v) for v in row[: len(headers)]]
        values += [None] * (len(headers) - len(values))
        records.append(dict(zip(headers, values)))
    return pd.DataFrame(records, columns=headers, dtype=object)


def _repair_json_private_key(text: str) -> str:
    """If JSON text contains an unescaped multi-line private_key, escape newlines.
    This fixes the common case when TOML triple-quoted strings preserve newlines.
    """
    pattern = r'"private_key"\s*:\s*"(.*?)"'

    def _repl(m: re.Match[str]) -> str:
        val = m.group(1)
        val = val.replace("\r\n", "\\n").replace("\n", "\\n")
        return f'"private_key": "{val}"'

    return re.sub(pattern, _repl, text, flags=re.DOTALL)


def _materialize_creds_if_inline(path_or_json: str) -> str:
    """If the credentials setting holds JSON content, write it to a temp file and return the path."""
    if os.path.exists(path_or_json):
        return path_or_json
    text = path_or_json.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return path_or_json
    content = text
    try:
        json.loads(content)
    except ValueError:
        repaired = _repair_json_private_key(content)
        try:
            json.loads(repaired)
            content = repaired
        except ValueError:
            logger.warning("Inline Google credentials are not valid JSON; writing them unchanged")
    tmp_path = os.path.join(tempfile.gettempdir(), "war-dashboard-google-credentials.json")
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(content)
    return tmp_path


def _sheets_client(settings: Settings) -> gspread.Client:
    if settings.api_key:
        return gspread.api_key(settings.api_key)
    service_account_file = _materialize_creds_if_inline(settings.credentials)
    if not os.path.exists(service_account_file):
        raise FileNotFoundError(f"Service account file not found: {service_account_file}")
    credentials = Credentials.from_service_account_file(service_account_file, scopes=SCOPES)
    return gspread.authorize(credentials)


def fetch_sheet_rows(settings: Settings) -> List[List[str]]:
    """Read the configured values range from the spreadsheet."""
    if not settings.spreadsheet_id:
        env_flag = bool(os.getenv("SPREADSHEET_ID"))
        raise RuntimeError(f"SPREADSHEET_ID missing (env or secrets). Env present? {env_flag}")
    client = _sheets_client(settings)
    spreadsheet = client.open_by_key(settings.spreadsheet_id)
    response = spreadsheet.values_get(settings.sheet_range)
    rows = response.get("values", [])
    logger.info("Fetched %d sheet rows from range %s", max(len(rows) - 1, 0), settings.sheet_range)
    return rows


def load_boundaries(path: str) -> Dict[str, Any]:
    """Read the township boundary FeatureCollection."""
    with open(path, encoding="utf-8") as f:
        collection = json.load(f)
    if not isinstance(collection, dict) or not isinstance(collection.get("features"), list):
        raise ValueError(f"{path} is not a GeoJSON FeatureCollection")
    logger.info("Loaded %d boundary features from %s", len(collection["features"]), path)
    return collection


def fetch_dashboard_data(
    settings: Settings,
    sheet_fetcher: Callable[[Settings], List[List[str]]] = fetch_sheet_rows,
    boundary_loader: Callable[[str], Dict[str, Any]] = load_boundaries,
) -> DashboardData:
    """
    Fetch the spreadsheet and the boundary file concurrently, then join them.

    Both fetches must succeed; the first error raised by either one is
    propagated unchanged.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="dashboard-fetch") as pool:
        rows_future = pool.submit(sheet_fetcher, settings)
        geo_future = pool.submit(boundary_loader, settings.geojson_path)
        rows = rows_future.result()
        boundaries = geo_future.result()

    records = records_from_rows(rows)
    features = merge_features(boundaries["features"], records)
    matched = sum(1 for f in features if f["properties"].get(TOTAL_TIME_FIELD))
    logger.info(
        "Merged %d boundary features with %d records (%d with incidents)",
        len(features),
        len(records),
        matched,
    )
    return DashboardData(records=records, features=features)


@st.cache_data(show_spinner=False, ttl=600)
def _load_dashboard_impl(
    spreadsheet_id: Optional[str],
    sheet_range: str,
    api_key: Optional[str],
    credentials: str,
    geojson_path: str,
) -> DashboardData:
    """Cached by source parameters; exceptions are not cached, so a failed load retries on the next run."""
    settings = Settings(
        spreadsheet_id=spreadsheet_id,
        sheet_range=sheet_range,
        api_key=api_key,
        credentials=credentials,
        geojson_path=geojson_path,
    )
    return fetch_dashboard_data(settings)


def clear_cache() -> None:
    _load_dashboard_impl.clear()  # type: ignore[attr-defined]


def load_dashboard_data(settings: Optional[Settings] = None) -> Optional[DashboardData]:
    """Wrapper that resolves config and calls the cached implementation.

    Returns None when either source fails; the failure is logged only.
    """
    settings = settings or load_settings()
    try:
        # Call cached impl with explicit params for proper cache keying
        return _load_dashboard_impl(
            settings.spreadsheet_id,
            settings.sheet_range,
            settings.api_key,
            settings.credentials,
            settings.geojson_path,
        )
    except Exception:
        logger.exception("Data loading error")
        return None
