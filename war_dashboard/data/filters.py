"""
Filter state, the filter evaluator and the cascading dropdown option helpers.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from war_dashboard.config import ALL, DATE_FIELD, GROUP_FIELD, STATE_FIELD, TOWNSHIP_FIELD


@dataclass(frozen=True)
class FilterState:
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    state: str = ALL
    township: str = ALL
    group: str = ALL


DEFAULT_FILTERS = FilterState()


def update_filters(filters: FilterState, field: str, value: Any) -> FilterState:
    """
    Return the filter state after one UI change.

    Changing the state resets township and group to ALL; changing the
    township resets the group. Group and date range changes do not cascade.
    ``value`` for ``date_range`` is a ``(start, end)`` pair, either may be None.
    """
    if field == "state":
        return replace(filters, state=value or ALL, township=ALL, group=ALL)
    if field == "township":
        return replace(filters, township=value or ALL, group=ALL)
    if field == "group":
        return replace(filters, group=value or ALL)
    if field == "date_range":
        start, end = value if value else (None, None)
        return replace(filters, start_date=start, end_date=end)
    raise ValueError(f"Unknown filter field: {field}")


def normalize_date_range(selection: Sequence[Any]) -> tuple[Optional[dt.date], Optional[dt.date]]:
    """Map a range picker selection of zero, one or two dates onto (start, end)."""
    values = list(selection or ())
    start = values[0] if len(values) > 0 else None
    end = values[1] if len(values) > 1 else None
    return start, end


def _properties_frame(features: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame([dict(f.get("properties") or {}) for f in features])


def _column(frame: pd.DataFrame, name: str) -> pd.Series:
    if name in frame.columns:
        return frame[name]
    return pd.Series([None] * len(frame), index=frame.index, dtype=object)


def parse_dates(series: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(series, errors="coerce", utc=True, format="mixed")
    return parsed.dt.tz_convert(None).dt.normalize()


def filter_mask(frame: pd.DataFrame, filters: FilterState) -> pd.Series:
    mask = pd.Series(True, index=frame.index)
    if frame.empty:
        return mask

    if filters.start_date is not None or filters.end_date is not None:
        dates = parse_dates(_column(frame, DATE_FIELD))
        if filters.start_date is not None:
            mask &= dates >= pd.Timestamp(filters.start_date)
        if filters.end_date is not None:
            mask &= dates <= pd.Timestamp(filters.end_date)

    for field, selected in (
        (STATE_FIELD, filters.state),
        (TOWNSHIP_FIELD, filters.township),
        (GROUP_FIELD, filters.group),
    ):
        if selected != ALL:
            mask &= _column(frame, field) == selected
    return mask.fillna(False).astype(bool)


def apply_filters(features: Sequence[Mapping[str, Any]], filters: FilterState) -> List[Mapping[str, Any]]:
    """
    Return the features that satisfy every active filter, in input order.

    Date bounds are inclusive and compared by calendar day; a feature whose
    date cannot be parsed only passes while both bounds are unset.
    """
    features = list(features)
    if not features:
        return []
    mask = filter_mask(_properties_frame(features), filters)
    return [feature for feature, keep in zip(features, mask.tolist()) if keep]


def _distinct(series: pd.Series) -> List[str]:
    values = [v for v in series.tolist() if isinstance(v, str) and v]
    return list(dict.fromkeys(values))


def state_options(records: pd.DataFrame) -> List[str]:
    return [ALL] + _distinct(_column(records, STATE_FIELD))


def township_options(records: pd.DataFrame, state: str = ALL) -> List[str]:
    working = records
    if state != ALL:
        working = records[_column(records, STATE_FIELD) == state]
    return [ALL] + _distinct(_column(working, TOWNSHIP_FIELD))


def group_options(records: pd.DataFrame, state: str = ALL, township: str = ALL) -> List[str]:
    working = records
    if state != ALL:
        working = working[_column(working, STATE_FIELD) == state]
    if township != ALL:
        working = working[_column(working, TOWNSHIP_FIELD) == township]
    return [ALL] + _distinct(_column(working, GROUP_FIELD))


def serialize_filters(filters: FilterState) -> Dict[str, Any]:
    """
    Convert the FilterState dataclass to a JSON-serialisable dictionary to be
    stored in session_state or used for logging.
    """
    return {
        "date_range": tuple(
            v.isoformat() if hasattr(v, "isoformat") else v
            for v in (filters.start_date, filters.end_date)
        ),
        "state": filters.state,
        "township": filters.township,
        "group": filters.group,
    }
