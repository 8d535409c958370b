"""Double materiality scorer - rates a topic on the materiality matrix.

Each topic carries two 1-5 ratings: impact materiality (the company's
impact on people and the environment) and financial materiality (the
topic's effect on the company). A topic is material when either rating
reaches the CSRD threshold of 3, and highly material when both reach 4.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from esgenius.materiality.models import ClassifiedTopic, MaterialityScore
from esgenius.utils import InvalidRatingError, InvalidTopicError, is_number

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_RATING = 3
MATERIAL_THRESHOLD = 3
HIGHLY_MATERIAL_THRESHOLD = 4

# level -> display priority (1 = most urgent)
LEVEL_PRIORITY: dict[str, int] = {
    "Highly Material": 1,
    "Material": 2,
    "Not Material": 3,
}


def validate_rating(value: Any, dimension: str) -> int:
    """Return *value* as an int rating, or the default when it is unset.

    Integral floats (e.g. ``4.0`` from a form field) are accepted; anything
    else outside the integers 1-5 raises InvalidRatingError.
    """
    if value is None:
        return DEFAULT_RATING
    if not is_number(value):
        raise InvalidRatingError(dimension, value)
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidRatingError(dimension, value)
        value = int(value)
    if not MIN_RATING <= value <= MAX_RATING:
        raise InvalidRatingError(dimension, value)
    return value


def matrix_quadrant(impact: int, financial: int) -> str:
    """Place a rating pair in one of the four matrix quadrants."""
    if impact >= MATERIAL_THRESHOLD and financial >= MATERIAL_THRESHOLD:
        return "high-high"
    if impact >= MATERIAL_THRESHOLD and financial < MATERIAL_THRESHOLD:
        return "high-low"
    if impact < MATERIAL_THRESHOLD and financial >= MATERIAL_THRESHOLD:
        return "low-high"
    return "low-low"


def topic_field(topic: Any, *names: str) -> Any:
    """Read the first present attribute or key among *names*."""
    for name in names:
        if isinstance(topic, Mapping):
            if name in topic:
                return topic[name]
        elif hasattr(topic, name):
            return getattr(topic, name)
    return None


class MaterialityScorer:
    """Score topics against the double materiality thresholds.

    Stateless; a shared module-level instance backs ``score`` and
    ``classify``.
    """

    def score(
        self,
        impact_score: int | None = None,
        financial_score: int | None = None,
    ) -> MaterialityScore:
        """Compute materiality flags and quadrant for one rating pair."""
        impact = validate_rating(impact_score, "impact")
        financial = validate_rating(financial_score, "financial")

        is_material = impact >= MATERIAL_THRESHOLD or financial >= MATERIAL_THRESHOLD
        is_highly_material = (
            impact >= HIGHLY_MATERIAL_THRESHOLD and financial >= HIGHLY_MATERIAL_THRESHOLD
        )

        return MaterialityScore(
            impact_score=impact,
            financial_score=financial,
            is_material=is_material,
            is_highly_material=is_highly_material,
            quadrant=matrix_quadrant(impact, financial),
        )

    def level(self, score: MaterialityScore) -> str:
        """Materiality label; the highly-material check must come first."""
        if score.is_highly_material:
            return "Highly Material"
        if score.is_material:
            return "Material"
        return "Not Material"

    def priority(self, score: MaterialityScore) -> int:
        return LEVEL_PRIORITY[self.level(score)]

    def classify(self, topics: Iterable[Any]) -> list[ClassifiedTopic]:
        """Label each ``{id, impact_score, financial_score}`` topic.

        Accepts mappings or objects; output order follows input order.
        A topic without an id raises InvalidTopicError.
        """
        classified: list[ClassifiedTopic] = []
        for topic in topics:
            topic_id = topic_field(topic, "id", "topic_id")
            if topic_id is None or topic_id == "":
                raise InvalidTopicError(f"Topic has no id: {topic!r}")
            result = self.score(
                topic_field(topic, "impact_score", "impactScore"),
                topic_field(topic, "financial_score", "financialScore"),
            )
            classified.append(ClassifiedTopic(id=str(topic_id), level=self.level(result)))
        logger.debug("Classified %d topics", len(classified))
        return classified


_default_scorer = MaterialityScorer()

score = _default_scorer.score
classify = _default_scorer.classify
materiality_level = _default_scorer.level
