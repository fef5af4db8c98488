"""
Join helpers that attach spreadsheet rows to township boundary features.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd

from war_dashboard.config import GEO_TOWNSHIP_FIELD, TIME_FIELD, TOTAL_TIME_FIELD, TOWNSHIP_FIELD


LEADING_INT_REGEX = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> int:
    """Parse the leading integer of a cell value, 0 when there is none.

    "12" -> 12, " 7 people" -> 7, "abc" -> 0, None -> 0.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if pd.isna(value):
            return 0
        return int(value)
    match = LEADING_INT_REGEX.match(str(value))
    if not match:
        return 0
    return int(match.group(1))


def _clean_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    # Padded cells from short sheet rows stay out of the merged properties
    return {k: v for k, v in record.items() if v is not None and not (isinstance(v, float) and pd.isna(v))}


def _first_record_by_township(records: pd.DataFrame) -> Dict[Any, Dict[str, Any]]:
    lookup: Dict[Any, Dict[str, Any]] = {}
    if records.empty or TOWNSHIP_FIELD not in records.columns:
        return lookup
    for record in records.to_dict(orient="records"):
        key = record.get(TOWNSHIP_FIELD)
        if key is None or key in lookup:
            continue
        lookup[key] = _clean_record(record)
    return lookup


def merge_features(features: Iterable[Mapping[str, Any]], records: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Left-join boundary features with spreadsheet rows on the township identifier.

    Every boundary feature yields exactly one merged feature, in file order.
    The first row whose township matches wins and its fields override the
    feature's own properties. ``totalTime`` is the integer value of the
    row's ``Time`` column, or 0 when the row is missing or not numeric.
    Input features are left untouched.
    """
    lookup = _first_record_by_township(records)
    merged: List[Dict[str, Any]] = []
    for feature in features:
        properties = dict(feature.get("properties") or {})
        entry = lookup.get(properties.get(GEO_TOWNSHIP_FIELD))
        if entry is not None:
            properties.update(entry)
        properties[TOTAL_TIME_FIELD] = parse_int(entry.get(TIME_FIELD)) if entry else 0
        merged_feature = {k: v for k, v in feature.items() if k != "properties"}
        merged_feature["properties"] = properties
        merged.append(merged_feature)
    return merged
