"""ESGenius scenario module - what-if engine, Monte Carlo simulation, and sensitivity sweeps."""

from esgenius.scenario.engine import (
    apply_preset,
    calculate_impact,
    compare_scenarios,
    create_scenario,
    export_scenario,
    generate_recommendations,
    get_preset_scenarios,
)
from esgenius.scenario.models import Scenario, ScenarioComparison
from esgenius.scenario.monte_carlo import run_monte_carlo_simulation
from esgenius.scenario.sensitivity import run_sensitivity_analysis

__all__ = [
    "apply_preset",
    "calculate_impact",
    "compare_scenarios",
    "create_scenario",
    "export_scenario",
    "generate_recommendations",
    "get_preset_scenarios",
    "Scenario",
    "ScenarioComparison",
    "run_monte_carlo_simulation",
    "run_sensitivity_analysis",
]
