"""
Reusable helpers for rendering data tables with a CSV export.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd
import streamlit as st

from war_dashboard.config import UI_TEXT
from war_dashboard.ui.components.formatting import format_number


def features_to_frame(
    features: Sequence[Mapping[str, Any]],
    columns: Optional[List[str]] = None,
) -> pd.DataFrame:
    """Flatten feature properties into a table, optionally limited to the given columns."""
    frame = pd.DataFrame([dict(f.get("properties") or {}) for f in features])
    if columns is not None:
        frame = frame.reindex(columns=columns)
    return frame


def render_table(
    df: pd.DataFrame,
    column_config: Optional[Dict[str, Dict[str, str]]] = None,
    height: int = 400,
    export_file_name: str = "export.csv",
) -> None:
    if df.empty:
        st.info(UI_TEXT["no_data"])
        return

    formatted_df = df.copy()
    if column_config:
        for column, config in column_config.items():
            if column not in formatted_df.columns:
                continue
            if config.get("type") == "number":
                decimals = int(config.get("decimals", 0))
                formatted_df[column] = formatted_df[column].apply(
                    lambda v: format_number(v, decimals=decimals)
                )

    st.dataframe(
        formatted_df,
        width="stretch",
        height=height,
        hide_index=True,
    )

    csv_bytes = df.to_csv(index=False).encode("utf-8-sig")
    st.download_button(
        UI_TEXT["download_csv"],
        data=csv_bytes,
        file_name=export_file_name,
        mime="text/csv",
    )
