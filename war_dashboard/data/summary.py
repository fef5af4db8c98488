"""
Reductions over the filtered feature set: summary counters and headline entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from war_dashboard.config import (
    COUNTERS,
    HEADLINE_FIELD,
    LINK_FIELD,
    STATE_FIELD,
    TOTAL_TIME_FIELD,
    TYPE_FIELD,
    CounterConfig,
)
from war_dashboard.data.merge import parse_int


@dataclass(frozen=True)
class Headline:
    type_label: str
    text: str
    link: Optional[str] = None


def _text(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def summarize(
    features: Sequence[Mapping[str, Any]],
    counters: Sequence[CounterConfig] = COUNTERS,
) -> Dict[str, int]:
    totals = {counter.key: 0 for counter in counters}
    for feature in features:
        props = feature.get("properties") or {}
        for counter in counters:
            totals[counter.key] += sum(parse_int(props.get(col)) for col in counter.columns)
    return totals


def headlines(features: Sequence[Mapping[str, Any]]) -> List[Headline]:
    entries: List[Headline] = []
    for feature in features:
        props = feature.get("properties") or {}
        entries.append(
            Headline(
                type_label=_text(props.get(TYPE_FIELD)),
                text=_text(props.get(HEADLINE_FIELD)),
                link=_text(props.get(LINK_FIELD)) or None,
            )
        )
    return entries


def totals_by_state(features: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    """Sum incident counts per state, largest first; features without a state are skipped."""
    rows = []
    for feature in features:
        props = feature.get("properties") or {}
        state = _text(props.get(STATE_FIELD))
        if not state:
            continue
        rows.append({"State": state, "Incidents": parse_int(props.get(TOTAL_TIME_FIELD))})
    if not rows:
        return pd.DataFrame(columns=["State", "Incidents"])
    summary = pd.DataFrame(rows).groupby("State", sort=False)["Incidents"].sum().reset_index()
    return summary.sort_values("Incidents", ascending=False, kind="stable").reset_index(drop=True)
