"""
ESGenius
Double materiality scoring and ESG scenario modelling
"""

__version__ = "0.1.0"
__author__ = "ESGenius Team"

from esgenius.config import Config, get_config
from esgenius.materiality.scorer import MaterialityScorer
from esgenius.materiality.assessment import assess_topics
from esgenius.scenario.engine import create_scenario, compare_scenarios
from esgenius.scenario.monte_carlo import run_monte_carlo_simulation
from esgenius.session import AssessmentSession

__all__ = [
    "Config",
    "get_config",
    "MaterialityScorer",
    "assess_topics",
    "create_scenario",
    "compare_scenarios",
    "run_monte_carlo_simulation",
    "AssessmentSession",
]
