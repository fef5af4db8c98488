from __future__ import annotations

from dataclasses import dataclass

from war_dashboard.config import MapConfig
from war_dashboard.data.loader import DashboardData
from war_dashboard.data.view import DashboardView


@dataclass
class PageContext:
    data: DashboardData
    view: DashboardView
    map_config: MapConfig
