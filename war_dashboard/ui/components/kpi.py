from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import streamlit as st

from war_dashboard.config import COUNTERS, CounterConfig
from war_dashboard.ui.components.formatting import format_number


@dataclass
class KpiCard:
    label: str
    value: Optional[int] = None

    @property
    def display(self) -> str:
        return format_number(self.value, decimals=0)


def summary_cards(totals: Dict[str, int], counters: Sequence[CounterConfig] = COUNTERS) -> List[KpiCard]:
    """One card per summary counter; counters missing from totals show 0."""
    return [KpiCard(label=counter.label, value=totals.get(counter.key, 0)) for counter in counters]


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 4) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(label=card.label, value=card.display)
