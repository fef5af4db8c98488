"""
Folium choropleth of incident counts per township.
"""

from __future__ import annotations

import html
from typing import Any, Dict, Mapping, Optional, Sequence

import folium
from folium.plugins import Fullscreen
from streamlit_folium import st_folium

from war_dashboard.config import (
    HEADLINE_FIELD,
    LINK_FIELD,
    STATE_FIELD,
    TOTAL_TIME_FIELD,
    TOWNSHIP_FIELD,
    UI_TEXT,
    MapConfig,
)

HUE = 0
POPUP_PROPERTY = "popup"
NEUTRAL_FILL = "#cccccc"
BORDER_COLOR = "white"


def lightness(value: float, max_value: Optional[float]) -> Optional[float]:
    """
    HSL lightness for a township: 50 at the maximum, 100 at zero.

    None when there is no maximum (empty selection). A zero maximum means
    every township is at zero intensity.
    """
    if max_value is None:
        return None
    if max_value <= 0:
        return 100.0
    intensity = min(max(value / max_value, 0.0), 1.0)
    return 100 - (intensity * 50)


def fill_color(light: Optional[float]) -> str:
    if light is None:
        return NEUTRAL_FILL
    return f"hsl({HUE}, 100%, {light:g}%)"


def feature_style(feature: Mapping[str, Any], max_value: Optional[float]) -> Dict[str, Any]:
    value = (feature.get("properties") or {}).get(TOTAL_TIME_FIELD, 0)
    return {
        "fillColor": fill_color(lightness(value, max_value)),
        "weight": 1,
        "opacity": 1,
        "color": BORDER_COLOR,
        "fillOpacity": 0.7,
    }


def _escape(value: Any) -> str:
    if value is None:
        return ""
    return html.escape(str(value))


def popup_html(properties: Mapping[str, Any]) -> str:
    headline = properties.get(HEADLINE_FIELD) or UI_TEXT["no_info"]
    link = properties.get(LINK_FIELD)
    parts = [
        '<div class="burmese-text">',
        f"<h5>{_escape(headline)}</h5>",
        f"<p>{_escape(properties.get(STATE_FIELD))}၊ {_escape(properties.get(TOWNSHIP_FIELD))}</p>",
        f"<p>{UI_TEXT['incident_count']}: {_escape(properties.get(TOTAL_TIME_FIELD, 0))}</p>",
    ]
    if link:
        parts.append(f'<a href="{_escape(link)}" target="_blank">{UI_TEXT["read_more"]}</a>')
    parts.append("</div>")
    return "".join(parts)


def legend_html() -> str:
    items = [
        (fill_color(50), UI_TEXT["legend_high"]),
        (fill_color(75), UI_TEXT["legend_mid"]),
        (fill_color(90), UI_TEXT["legend_low"]),
    ]
    rows = "".join(
        f'<div style="margin: 2px 0;"><span style="display:inline-block;width:14px;height:14px;'
        f'margin-right:6px;background:{color};"></span>{label}</div>'
        for color, label in items
    )
    return (
        '<div style="position: fixed; bottom: 30px; right: 30px; z-index: 9999; '
        'background-color: white; padding: 8px 10px; border: 1px solid #999; font-size: 13px;">'
        f'<b>{UI_TEXT["incident_count"]}</b>{rows}</div>'
    )


def township_collection(features: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    FeatureCollection of copies of the given features, each carrying its
    rendered popup. Folium assigns ids to the features it embeds, so the
    merged features are never handed over directly.
    """
    collection = []
    for feature in features:
        properties = dict(feature.get("properties") or {})
        properties[POPUP_PROPERTY] = popup_html(properties)
        collection.append({**feature, "properties": properties})
    return {"type": "FeatureCollection", "features": collection}


def build_map(
    features: Sequence[Mapping[str, Any]],
    max_value: Optional[float],
    map_config: MapConfig = MapConfig(),
) -> folium.Map:
    """Create a fresh map with the filtered townships as one styled GeoJson layer."""
    m = folium.Map(location=list(map_config.center), zoom_start=map_config.zoom, tiles=None)
    folium.TileLayer(tiles=map_config.tiles, attr=map_config.attribution, name="Base").add_to(m)
    Fullscreen().add_to(m)

    if features:
        folium.GeoJson(
            township_collection(features),
            name="townships",
            style_function=lambda feature: feature_style(feature, max_value),
            popup=folium.GeoJsonPopup(fields=[POPUP_PROPERTY], labels=False),
        ).add_to(m)

    m.get_root().html.add_child(folium.Element(legend_html()))
    return m


def render_map(
    features: Sequence[Mapping[str, Any]],
    max_value: Optional[float],
    map_config: MapConfig,
    height: int = 600,
) -> None:
    m = build_map(features, max_value, map_config)
    st_folium(m, width=None, height=height, returned_objects=[])
