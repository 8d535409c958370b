"""Detailed double materiality assessment on a 0-100 scale.

Complements the 1-5 matrix ratings with a quantitative workup per topic:

Impact materiality (ESRS 1 section 3.4)
    severity = scale (40%) + scope (30%) + irremediability (20%)
    + likelihood (10%).

Financial materiality (ESRS 1 section 3.5)
    revenue (30%) + cost (30%) + asset (20%) + liability (20%) impact
    bands, scaled by likelihood.

A topic is material when either score reaches 50.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)

STAKEHOLDER_GROUPS = ["investors", "employees", "customers", "community", "regulators"]
IMPACT_AREAS = ["environmental", "social", "governance"]

MATERIALITY_SCORE_THRESHOLD = 50.0

IRREMEDIABILITY_SCORES: dict[str, float] = {
    "irreversible": 100,
    "difficult": 75,
    "medium": 50,
    "easy": 25,
    "reversible": 0,
}

LIKELIHOOD_SCORES: dict[str, float] = {
    "certain": 100,
    "high": 75,
    "medium": 50,
    "low": 25,
    "rare": 10,
}

# (minimum percent, band score), checked top-down; below all -> 10
_SCOPE_BANDS = [(75, 100), (50, 75), (25, 50), (10, 25)]
_FLOW_BANDS = [(10, 100), (5, 75), (2, 50), (1, 25)]          # revenue, cost
_STOCK_BANDS = [(5, 100), (2, 75), (1, 50), (0.5, 25)]        # assets, liabilities
_FLOOR_BAND = 10


def _band(percentage: float, bands: list[tuple[float, float]]) -> float:
    for minimum, band_score in bands:
        if percentage >= minimum:
            return band_score
    return _FLOOR_BAND


def _get(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _share_pct(impact: float, total: float) -> float:
    # A zero total is treated as 1 so that any impact is measured absolutely
    return abs(impact / (total or 1) * 100)


def materiality_level(score: float) -> str:
    if score >= 75:
        return "very-high"
    if score >= 50:
        return "high"
    if score >= 25:
        return "medium"
    return "low"


def likelihood_score(likelihood: str) -> float:
    return LIKELIHOOD_SCORES.get(likelihood, 50)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class ImpactAssessment:
    topic: str
    impact_type: str = ""
    scale: float = 0.0
    scope: float = 0.0
    irremediability: float = 0.0
    likelihood: str = "medium"
    overall_score: float = 0.0
    materiality_level: str = "low"


@dataclass
class FinancialAssessment:
    topic: str
    revenue_impact: float = 0.0
    cost_impact: float = 0.0
    asset_impact: float = 0.0
    liability_impact: float = 0.0
    time_horizon: str = "medium-term"
    likelihood: str = "medium"
    overall_score: float = 0.0
    materiality_level: str = "low"


@dataclass
class DoubleMaterialityResult:
    topic: str
    impact_materiality: ImpactAssessment
    financial_materiality: FinancialAssessment
    is_material: bool
    priority: str
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class StakeholderSurveySummary:
    topic: str
    stakeholder_group: str
    importance: float
    concern: float
    response_count: int
    average_score: float

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Impact materiality
# ---------------------------------------------------------------------------

def calculate_scale(data: Mapping[str, Any]) -> float:
    """Mean of severity, magnitude and duration (each 0-100, default 50)."""
    severity = _get(data, "severity", 50)
    magnitude = _get(data, "magnitude", 50)
    duration = _get(data, "duration", 50)
    return (severity + magnitude + duration) / 3


def calculate_scope(data: Mapping[str, Any]) -> float:
    """Band the share of the population affected."""
    affected = _get(data, "people_affected", 0)
    total = _get(data, "total_population", 1)
    return _band(affected / (total or 1) * 100, _SCOPE_BANDS)


def calculate_irremediability(data: Mapping[str, Any]) -> float:
    return IRREMEDIABILITY_SCORES.get(_get(data, "remediability", "medium"), 50)


def assess_impact_materiality(topic: str, data: Mapping[str, Any]) -> ImpactAssessment:
    likelihood = _get(data, "likelihood", "medium")
    assessment = ImpactAssessment(
        topic=topic,
        impact_type=_get(data, "impact_type", ""),
        scale=calculate_scale(data),
        scope=calculate_scope(data),
        irremediability=calculate_irremediability(data),
        likelihood=likelihood,
    )
    assessment.overall_score = (
        assessment.scale * 0.4
        + assessment.scope * 0.3
        + assessment.irremediability * 0.2
        + likelihood_score(likelihood) * 0.1
    )
    assessment.materiality_level = materiality_level(assessment.overall_score)
    return assessment


# ---------------------------------------------------------------------------
# Financial materiality
# ---------------------------------------------------------------------------

def assess_financial_materiality(topic: str, data: Mapping[str, Any]) -> FinancialAssessment:
    likelihood = _get(data, "likelihood", "medium")
    assessment = FinancialAssessment(
        topic=topic,
        revenue_impact=_band(
            _share_pct(_get(data, "revenue_impact", 0), _get(data, "total_revenue", 1)), _FLOW_BANDS
        ),
        cost_impact=_band(
            _share_pct(_get(data, "cost_impact", 0), _get(data, "total_costs", 1)), _FLOW_BANDS
        ),
        asset_impact=_band(
            _share_pct(_get(data, "asset_impact", 0), _get(data, "total_assets", 1)), _STOCK_BANDS
        ),
        liability_impact=_band(
            _share_pct(_get(data, "liability_impact", 0), _get(data, "total_liabilities", 1)),
            _STOCK_BANDS,
        ),
        time_horizon=_get(data, "time_horizon", "medium-term"),
        likelihood=likelihood,
    )
    assessment.overall_score = (
        assessment.revenue_impact * 0.3
        + assessment.cost_impact * 0.3
        + assessment.asset_impact * 0.2
        + assessment.liability_impact * 0.2
    ) * (likelihood_score(likelihood) / 100)
    assessment.materiality_level = materiality_level(assessment.overall_score)
    return assessment


# ---------------------------------------------------------------------------
# Double materiality
# ---------------------------------------------------------------------------

def calculate_priority(impact_score: float, financial_score: float) -> str:
    avg = (impact_score + financial_score) / 2
    if avg >= 75:
        return "critical"
    if avg >= 50:
        return "high"
    if avg >= 25:
        return "medium"
    return "low"


def generate_recommendations(
    impact: ImpactAssessment, financial: FinancialAssessment
) -> list[str]:
    recommendations: list[str] = []
    if impact.overall_score >= 75:
        recommendations.append("High impact materiality - immediate action required")
    if financial.overall_score >= 75:
        recommendations.append("High financial materiality - significant business impact")
    if (
        impact.overall_score >= MATERIALITY_SCORE_THRESHOLD
        and financial.overall_score >= MATERIALITY_SCORE_THRESHOLD
    ):
        recommendations.append("Material on both dimensions - priority topic for disclosure")
    if not recommendations:
        recommendations.append("Monitor and reassess periodically")
    return recommendations


def assess_double_materiality(
    topic: str,
    impact_data: Mapping[str, Any],
    financial_data: Mapping[str, Any],
) -> DoubleMaterialityResult:
    """Run both assessments for *topic* and derive priority and advice."""
    impact = assess_impact_materiality(topic, impact_data)
    financial = assess_financial_materiality(topic, financial_data)
    result = DoubleMaterialityResult(
        topic=topic,
        impact_materiality=impact,
        financial_materiality=financial,
        is_material=(
            impact.overall_score >= MATERIALITY_SCORE_THRESHOLD
            or financial.overall_score >= MATERIALITY_SCORE_THRESHOLD
        ),
        priority=calculate_priority(impact.overall_score, financial.overall_score),
        recommendations=generate_recommendations(impact, financial),
    )
    logger.debug(
        "Double materiality for %s: impact=%.1f financial=%.1f priority=%s",
        topic, impact.overall_score, financial.overall_score, result.priority,
    )
    return result


# ---------------------------------------------------------------------------
# Stakeholder engagement
# ---------------------------------------------------------------------------

def summarize_stakeholder_survey(
    topic: str,
    stakeholder_group: str,
    responses: Sequence[Mapping[str, float]],
) -> StakeholderSurveySummary:
    """Average importance and concern (each 0-100) across survey responses."""
    if not responses:
        raise ValueError(f"No survey responses for '{topic}' from {stakeholder_group}")
    importance = sum(r["importance"] for r in responses) / len(responses)
    concern = sum(r["concern"] for r in responses) / len(responses)
    return StakeholderSurveySummary(
        topic=topic,
        stakeholder_group=stakeholder_group,
        importance=importance,
        concern=concern,
        response_count=len(responses),
        average_score=(importance + concern) / 2,
    )


# ---------------------------------------------------------------------------
# Matrix and report
# ---------------------------------------------------------------------------

def generate_materiality_matrix(assessments: Sequence[DoubleMaterialityResult]) -> list[dict]:
    return [
        {
            "topic": a.topic,
            "x": a.financial_materiality.overall_score,
            "y": a.impact_materiality.overall_score,
            "priority": a.priority,
            "is_material": a.is_material,
        }
        for a in assessments
    ]


def generate_materiality_report(assessments: Sequence[DoubleMaterialityResult]) -> dict:
    """Summarize material and critical topics with the matrix."""
    material = [a for a in assessments if a.is_material]
    critical = [a for a in assessments if a.priority == "critical"]

    return {
        "summary": {
            "total_topics": len(assessments),
            "material_topics": len(material),
            "critical_topics": len(critical),
            "assessment_date": datetime.now(timezone.utc).isoformat(),
        },
        "material_topics": [
            {
                "topic": a.topic,
                "priority": a.priority,
                "impact_score": a.impact_materiality.overall_score,
                "financial_score": a.financial_materiality.overall_score,
                "recommendations": a.recommendations,
            }
            for a in material
        ],
        "matrix": generate_materiality_matrix(assessments),
    }
