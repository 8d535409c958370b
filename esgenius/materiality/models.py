"""Pydantic v2 models for double materiality scoring.

Importable without any configuration or running service.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Category = Literal["environmental", "social", "governance"]
Quadrant = Literal["high-high", "high-low", "low-high", "low-low"]
MaterialityLevel = Literal["Highly Material", "Material", "Not Material"]


class MaterialityTopic(BaseModel):
    """A catalog topic, e.g. ESRS E1 Climate Change."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: Category
    esrs_code: str = ""
    description: str = ""


class MaterialityScore(BaseModel):
    """Materiality flags and matrix quadrant for one pair of ratings."""
    model_config = ConfigDict(frozen=True)

    impact_score: int = Field(ge=1, le=5)
    financial_score: int = Field(ge=1, le=5)
    is_material: bool
    is_highly_material: bool
    quadrant: Quadrant


class ClassifiedTopic(BaseModel):
    id: str
    level: MaterialityLevel


class TopicResult(BaseModel):
    """One catalog topic joined with its computed score."""
    topic: MaterialityTopic
    score: MaterialityScore
    level: MaterialityLevel
    priority: int
    justification: str = ""
    value_chain: str = "own_operations"
    time_horizon: str = "medium_term"


class MatrixPoint(BaseModel):
    """A topic placed on the materiality matrix (x = financial, y = impact)."""
    topic_id: str
    name: str
    category: Category
    x: int
    y: int
    quadrant: Quadrant
    level: MaterialityLevel


class AssessmentSummary(BaseModel):
    total_topics: int = 0
    material_count: int = 0
    highly_material_count: int = 0
    not_material_count: int = 0
    by_category: dict[str, dict[str, int]] = Field(default_factory=dict)
    by_quadrant: dict[str, int] = Field(default_factory=dict)
    total_stakeholder_weight: int = 0


class AssessmentMetadata(BaseModel):
    assessor: str = ""
    reviewed_by: str = ""
    approved_by: str = ""
    next_review_date: str = ""
    sector: Literal["general", "mining", "energy", "technology", "financial"] = "general"
    methodology: str = "ESRS"


class MaterialityAssessment(BaseModel):
    """A complete assessment over a topic catalog, saved as a whole."""
    assessed_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    metadata: AssessmentMetadata = Field(default_factory=AssessmentMetadata)
    stakeholder_weights: dict[str, int] = Field(default_factory=dict)
    results: list[TopicResult] = Field(default_factory=list)
    summary: AssessmentSummary = Field(default_factory=AssessmentSummary)
    matrix: list[MatrixPoint] = Field(default_factory=list)

    def material_topics(self) -> list[TopicResult]:
        return [r for r in self.results if r.score.is_material]
