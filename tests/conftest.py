"""Shared test fixtures for ESGenius test suite."""

import os

import numpy as np
import pytest


# Keep config deterministic regardless of the developer's shell
os.environ.setdefault("ESGENIUS_LOG_LEVEL", "WARNING")


@pytest.fixture
def baseline_data():
    """A typical annual ESG baseline as entered in the data-collection forms."""
    return {
        "scope1Emissions": 12000.0,
        "scope2Emissions": 8000.0,
        "renewableEnergy": 35.0,
        "waterUsage": 450000.0,
        "wasteRecycling": 60.0,
        "diversityScore": 42.0,
    }


@pytest.fixture
def emissions_scenario():
    """The reference scenario: emissions 1000 cut by 20%."""
    from esgenius.scenario.engine import create_scenario
    return create_scenario(
        "Test",
        {"emissions": 1000},
        {"emissions": {"type": "percentage", "value": -20}},
    )


@pytest.fixture
def sample_ratings():
    """Ratings for a handful of catalog topics; the rest stay unset."""
    return {
        "climate_change": {"impact_score": 5, "financial_score": 5, "justification": "Carbon-intensive operations"},
        "water_management": {"impact_score": 4, "financial_score": 2},
        "biodiversity": {"impact_score": 2, "financial_score": 4},
        "data_privacy": {"impact_score": 1, "financial_score": 2},
        "business_conduct": {"impact_score": 2, "financial_score": 1},
    }


@pytest.fixture
def seeded_rng():
    return np.random.default_rng(42)


@pytest.fixture
def fresh_config():
    """Reset the config singleton around a test."""
    import esgenius.config
    esgenius.config._config = None
    yield
    esgenius.config._config = None
