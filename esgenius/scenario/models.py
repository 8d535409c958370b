"""Pydantic v2 models for scenario modelling request/response types.

Adjustments form a closed tagged union on ``type`` so every derivation
rule is handled explicitly.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    TypeAdapter,
    field_validator,
)

from esgenius.utils import is_number

ADJUSTMENT_TYPES = ("percentage", "absolute", "target")


class _AdjustmentBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float

    @field_validator("value", mode="before")
    @classmethod
    def require_number(cls, v):
        if not is_number(v):
            raise ValueError(f"value must be a number, got {v!r}")
        return v


class PercentageAdjustment(_AdjustmentBase):
    type: Literal["percentage"] = "percentage"

    def apply(self, baseline: float) -> float:
        return baseline * (1 + self.value / 100)


class AbsoluteAdjustment(_AdjustmentBase):
    type: Literal["absolute"] = "absolute"

    def apply(self, baseline: float) -> float:
        return baseline + self.value


class TargetAdjustment(_AdjustmentBase):
    type: Literal["target"] = "target"

    def apply(self, baseline: float) -> float:
        return self.value


Adjustment = Annotated[
    Union[PercentageAdjustment, AbsoluteAdjustment, TargetAdjustment],
    Field(discriminator="type"),
]

adjustment_adapter: TypeAdapter = TypeAdapter(Adjustment)


def _read_only(value: dict) -> Mapping:
    return MappingProxyType(value)


def _as_dict(value: Mapping) -> dict:
    return dict(value)


# Validated as dicts, stored as read-only views, dumped as plain dicts
MetricValues = Annotated[
    dict[str, float],
    AfterValidator(_read_only),
    PlainSerializer(_as_dict, return_type=dict[str, float]),
]
AdjustmentMap = Annotated[
    dict[str, Adjustment],
    AfterValidator(_read_only),
    PlainSerializer(_as_dict, return_type=dict[str, Adjustment]),
]


class Scenario(BaseModel):
    """A named dataset derived from a baseline; frozen once created.

    The metric mappings are read-only views, so item assignment raises
    TypeError just as attribute assignment raises a ValidationError.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    baseline_data: MetricValues = Field(default_factory=dict, validate_default=True)
    adjustments: AdjustmentMap = Field(default_factory=dict, validate_default=True)
    results: MetricValues = Field(default_factory=dict, validate_default=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PresetScenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    adjustments: AdjustmentMap


class Uncertainty(BaseModel):
    """Normal perturbation of a metric, as a fraction of its baseline."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mean: float = 0.0
    std_dev: float = Field(default=0.1, alias="stdDev")


class MetricComparison(BaseModel):
    scenario: str
    value: float
    change: float


class MetricStatistics(BaseModel):
    """Spread of one metric across the compared scenarios."""
    best: str
    worst: str
    range: float
    average: float


class ComparisonSummary(BaseModel):
    total_metrics: int = 0
    best_overall: Optional[str] = None
    wins: dict[str, int] = Field(default_factory=dict)
    losses: dict[str, int] = Field(default_factory=dict)
    recommendation: str = ""


class ScenarioComparison(BaseModel):
    scenarios: list[str]
    metrics: dict[str, list[MetricComparison]] = Field(default_factory=dict)
    statistics: dict[str, MetricStatistics] = Field(default_factory=dict)
    summary: ComparisonSummary = Field(default_factory=ComparisonSummary)


class Recommendation(BaseModel):
    """Follow-up suggested for a metric that a scenario moves sharply."""
    metric: str
    priority: Literal["high", "medium"]
    direction: Literal["increase", "decrease"]
    change_percent: float
    message: str
    action: str
