"""Catalog-wide materiality assessment.

Scores every topic in a catalog from a mapping of user ratings and builds
the summary counts and matrix points shown on the assessment dashboard.
Persistence is left to the caller (see ``esgenius.session``).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from esgenius.materiality.catalog import (
    DEFAULT_STAKEHOLDER_WEIGHTS,
    MATERIALITY_TOPICS,
    MAX_STAKEHOLDER_WEIGHT,
)
from esgenius.materiality.models import (
    AssessmentMetadata,
    AssessmentSummary,
    MaterialityAssessment,
    MaterialityTopic,
    MatrixPoint,
    TopicResult,
)
from esgenius.materiality.scorer import MaterialityScorer, topic_field
from esgenius.utils import is_number

logger = logging.getLogger(__name__)

_QUADRANTS = ("high-high", "high-low", "low-high", "low-low")
_LEVELS = ("Highly Material", "Material", "Not Material")


def validate_stakeholder_weights(weights: Mapping[str, Any]) -> dict[str, int]:
    """Check each weight is an integer percent in [0, 50]."""
    validated: dict[str, int] = {}
    for group, weight in weights.items():
        if not is_number(weight) or not math.isfinite(weight) or weight != int(weight):
            raise ValueError(f"Stakeholder weight for '{group}' must be an integer, got {weight!r}")
        weight = int(weight)
        if not 0 <= weight <= MAX_STAKEHOLDER_WEIGHT:
            raise ValueError(
                f"Stakeholder weight for '{group}' must be between 0 and "
                f"{MAX_STAKEHOLDER_WEIGHT}, got {weight}"
            )
        validated[group] = weight
    return validated


def _summarize(results: list[TopicResult], weights: dict[str, int]) -> AssessmentSummary:
    by_category: dict[str, dict[str, int]] = {}
    by_quadrant = {q: 0 for q in _QUADRANTS}

    for r in results:
        bucket = by_category.setdefault(r.topic.category, {level: 0 for level in _LEVELS})
        bucket[r.level] += 1
        by_quadrant[r.score.quadrant] += 1

    return AssessmentSummary(
        total_topics=len(results),
        material_count=sum(1 for r in results if r.score.is_material),
        highly_material_count=sum(1 for r in results if r.score.is_highly_material),
        not_material_count=sum(1 for r in results if not r.score.is_material),
        by_category=by_category,
        by_quadrant=by_quadrant,
        total_stakeholder_weight=sum(weights.values()),
    )


def build_matrix(results: Iterable[TopicResult]) -> list[MatrixPoint]:
    """Project topic results onto the matrix (x = financial, y = impact)."""
    return [
        MatrixPoint(
            topic_id=r.topic.id,
            name=r.topic.name,
            category=r.topic.category,
            x=r.score.financial_score,
            y=r.score.impact_score,
            quadrant=r.score.quadrant,
            level=r.level,
        )
        for r in results
    ]


def assess_topics(
    ratings: Mapping[str, Mapping[str, Any] | None],
    catalog: Iterable[MaterialityTopic] = MATERIALITY_TOPICS,
    stakeholder_weights: Mapping[str, Any] | None = None,
    metadata: AssessmentMetadata | Mapping[str, Any] | None = None,
    scorer: MaterialityScorer | None = None,
) -> MaterialityAssessment:
    """Score every catalog topic and assemble a full assessment.

    Parameters
    ----------
    ratings : mapping
        ``{topic_id: {"impact_score": int, "financial_score": int, ...}}``.
        Topics without ratings, or with unset scores, default to 3/3.
        camelCase keys (impactScore, financialScore) are accepted too.
        Optional keys: justification, value_chain, time_horizon.
    catalog : iterable of MaterialityTopic
        Topics to assess; defaults to the ESRS catalog.
    stakeholder_weights : mapping
        Percent weight per stakeholder group; defaults to the standard split.
    metadata : AssessmentMetadata or mapping
        Assessor, sector, methodology and review details.

    Returns
    -------
    MaterialityAssessment with results in catalog order, summary, and matrix.
    """
    scorer = scorer or MaterialityScorer()
    catalog = list(catalog)
    known_ids = {t.id for t in catalog}
    unknown = sorted(set(ratings) - known_ids)
    if unknown:
        logger.warning("Ignoring ratings for topics not in catalog: %s", ", ".join(unknown))

    weights = validate_stakeholder_weights(
        DEFAULT_STAKEHOLDER_WEIGHTS if stakeholder_weights is None else stakeholder_weights
    )
    if metadata is None:
        metadata = AssessmentMetadata()
    elif not isinstance(metadata, AssessmentMetadata):
        metadata = AssessmentMetadata(**metadata)

    results: list[TopicResult] = []
    for topic in catalog:
        entry = ratings.get(topic.id) or {}
        topic_score = scorer.score(
            topic_field(entry, "impact_score", "impactScore"),
            topic_field(entry, "financial_score", "financialScore"),
        )
        level = scorer.level(topic_score)
        results.append(TopicResult(
            topic=topic,
            score=topic_score,
            level=level,
            priority=scorer.priority(topic_score),
            justification=topic_field(entry, "justification") or "",
            value_chain=topic_field(entry, "value_chain", "valueChain") or "own_operations",
            time_horizon=topic_field(entry, "time_horizon", "timeHorizon") or "medium_term",
        ))

    summary = _summarize(results, weights)
    logger.info(
        "Materiality assessment: %d topics, %d material, %d highly material",
        summary.total_topics,
        summary.material_count,
        summary.highly_material_count,
    )

    return MaterialityAssessment(
        metadata=metadata,
        stakeholder_weights=weights,
        results=results,
        summary=summary,
        matrix=build_matrix(results),
    )
