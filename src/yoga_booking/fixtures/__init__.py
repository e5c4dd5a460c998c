"""
Seed fixtures and development scenarios.
"""

from .seed import ScenarioData, default_fixtures
from .scenarios import (
    SCENARIO_NAMES,
    SCENARIO_STORAGE_KEY,
    active_scenario,
    build_scenario,
    select_scenario,
)

__all__ = [
    "ScenarioData",
    "default_fixtures",
    "SCENARIO_NAMES",
    "SCENARIO_STORAGE_KEY",
    "active_scenario",
    "build_scenario",
    "select_scenario",
]
