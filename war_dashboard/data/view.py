"""
Derived view snapshot recomputed from the dataset and the current filters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from war_dashboard.config import TOTAL_TIME_FIELD
from war_dashboard.data.filters import (
    FilterState,
    apply_filters,
    group_options,
    state_options,
    township_options,
)
from war_dashboard.data.loader import DashboardData
from war_dashboard.data.summary import Headline, headlines, summarize


@dataclass(frozen=True)
class DashboardView:
    filters: FilterState
    features: List[Mapping[str, Any]]
    max_total: Optional[int]
    totals: Dict[str, int]
    headlines: List[Headline]
    state_options: List[str]
    township_options: List[str]
    group_options: List[str]


def max_total(features) -> Optional[int]:
    """Largest totalTime in the set, None for an empty set."""
    values = [feature["properties"].get(TOTAL_TIME_FIELD, 0) for feature in features]
    return max(values) if values else None


def build_view(data: DashboardData, filters: FilterState) -> DashboardView:
    features = apply_filters(data.features, filters)
    return DashboardView(
        filters=filters,
        features=features,
        max_total=max_total(features),
        totals=summarize(features),
        headlines=headlines(features),
        state_options=state_options(data.records),
        township_options=township_options(data.records, filters.state),
        group_options=group_options(data.records, filters.state, filters.township),
    )
