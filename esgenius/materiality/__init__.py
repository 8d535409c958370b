"""ESGenius materiality module - double materiality scoring, catalog and assessment."""

from esgenius.materiality.models import (
    MaterialityAssessment,
    MaterialityScore,
    MaterialityTopic,
)
from esgenius.materiality.scorer import MaterialityScorer, classify, score
from esgenius.materiality.catalog import MATERIALITY_TOPICS
from esgenius.materiality.assessment import assess_topics

__all__ = [
    "MaterialityAssessment",
    "MaterialityScore",
    "MaterialityTopic",
    "MaterialityScorer",
    "classify",
    "score",
    "MATERIALITY_TOPICS",
    "assess_topics",
]
