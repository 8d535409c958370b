"""Scenario what-if engine.

Derives scenario datasets from a baseline and per-metric adjustments,
compares scenarios side by side, scores their pillar impact and exports
them as JSON or CSV. All functions are pure; nothing here reads or writes
persistent state.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from esgenius.scenario.constants import (
    FINANCIAL_IMPACT_WEIGHT,
    HIGH_PRIORITY_THRESHOLD,
    IMPACT_BUCKETS,
    PRESET_SCENARIOS,
    RECOMMENDATION_THRESHOLD,
)
from esgenius.scenario.models import (
    ADJUSTMENT_TYPES,
    AbsoluteAdjustment,
    ComparisonSummary,
    MetricComparison,
    MetricStatistics,
    PercentageAdjustment,
    PresetScenario,
    Recommendation,
    Scenario,
    ScenarioComparison,
    TargetAdjustment,
    adjustment_adapter,
)
from esgenius.utils import (
    InvalidAdjustmentError,
    InvalidScenarioError,
    UnknownPresetError,
    UnsupportedFormatError,
    format_number,
    is_number,
    percent_change,
)

logger = logging.getLogger(__name__)

AdjustmentModel = PercentageAdjustment | AbsoluteAdjustment | TargetAdjustment

CSV_HEADER = ["Metric", "Baseline", "Scenario", "Change"]
EXPORT_FORMATS = ("json", "csv")


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------

def parse_adjustment(metric: str, raw: Any) -> AdjustmentModel:
    """Turn ``{"type": ..., "value": ...}`` into a typed adjustment."""
    if isinstance(raw, (PercentageAdjustment, AbsoluteAdjustment, TargetAdjustment)):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidAdjustmentError(metric, "expected a mapping with 'type' and 'value'")

    kind = raw.get("type")
    if kind not in ADJUSTMENT_TYPES:
        raise InvalidAdjustmentError(
            metric, f"unknown type {kind!r}; expected one of {', '.join(ADJUSTMENT_TYPES)}"
        )
    if "value" not in raw or not is_number(raw["value"]):
        raise InvalidAdjustmentError(metric, f"value must be a number, got {raw.get('value')!r}")

    try:
        return adjustment_adapter.validate_python(dict(raw))
    except ValidationError as e:
        raise InvalidAdjustmentError(metric, str(e)) from e


def parse_adjustments(adjustments: Mapping[str, Any]) -> dict[str, AdjustmentModel]:
    return {metric: parse_adjustment(metric, raw) for metric, raw in adjustments.items()}


def _validate_baseline(baseline_data: Mapping[str, Any]) -> dict[str, float]:
    baseline: dict[str, float] = {}
    for metric, value in baseline_data.items():
        if not is_number(value):
            raise InvalidScenarioError(f"Baseline value for '{metric}' must be a number, got {value!r}")
        baseline[metric] = value
    return baseline


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------

def calculate_scenario(
    baseline: Mapping[str, float],
    adjustments: Mapping[str, AdjustmentModel],
) -> dict[str, float]:
    """Apply each adjustment to its own metric; other metrics pass through.

    A metric adjusted without a baseline value starts from 0.
    """
    results = dict(baseline)
    for metric, adjustment in adjustments.items():
        results[metric] = adjustment.apply(baseline.get(metric, 0.0))
    return results


def create_scenario(
    name: str,
    baseline_data: Mapping[str, Any],
    adjustments: Mapping[str, Any] | None = None,
) -> Scenario:
    """Build a frozen Scenario with derived results.

    Raises InvalidScenarioError for an empty name or non-numeric baseline,
    and InvalidAdjustmentError for an unknown type or non-numeric value.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidScenarioError("Scenario name must be a non-empty string")

    baseline = _validate_baseline(baseline_data)
    parsed = parse_adjustments(adjustments or {})
    results = calculate_scenario(baseline, parsed)

    scenario = Scenario(
        name=name,
        baseline_data=baseline,
        adjustments=parsed,
        results=results,
    )
    logger.debug(
        "Created scenario '%s' (%d baseline metrics, %d adjustments)",
        name, len(baseline), len(parsed),
    )
    return scenario


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def compare_scenarios(scenarios: Iterable[Scenario]) -> ScenarioComparison:
    """Line up every result metric across scenarios, in input order.

    ``change`` is measured against each scenario's own baseline.
    """
    scenarios = list(scenarios)

    all_metrics: dict[str, None] = {}
    for s in scenarios:
        for metric in s.results:
            all_metrics.setdefault(metric, None)

    metrics = {
        metric: [
            MetricComparison(
                scenario=s.name,
                value=s.results.get(metric, 0.0),
                change=percent_change(s.baseline_data.get(metric), s.results.get(metric)),
            )
            for s in scenarios
        ]
        for metric in all_metrics
    }

    statistics = {metric: _metric_statistics(entries) for metric, entries in metrics.items()}

    return ScenarioComparison(
        scenarios=[s.name for s in scenarios],
        metrics=metrics,
        statistics=statistics,
        summary=_comparison_summary([s.name for s in scenarios], statistics),
    )


def _metric_statistics(entries: list[MetricComparison]) -> MetricStatistics:
    # Stable descending sort: ties keep input order, so best is the first
    # highest value and worst the last lowest
    ranked = sorted(entries, key=lambda e: e.value, reverse=True)
    return MetricStatistics(
        best=ranked[0].scenario,
        worst=ranked[-1].scenario,
        range=ranked[0].value - ranked[-1].value,
        average=sum(e.value for e in entries) / len(entries),
    )


def _comparison_summary(
    names: list[str],
    statistics: Mapping[str, MetricStatistics],
) -> ComparisonSummary:
    """Count per-metric wins and losses; the most wins is best overall.

    Ties go to the scenario listed first.
    """
    wins = {name: 0 for name in names}
    losses = {name: 0 for name in names}
    for stats in statistics.values():
        wins[stats.best] += 1
        losses[stats.worst] += 1

    if not statistics:
        return ComparisonSummary(wins=wins, losses=losses)

    best = max(wins, key=wins.get)
    return ComparisonSummary(
        total_metrics=len(statistics),
        best_overall=best,
        wins=wins,
        losses=losses,
        recommendation=f"{best} performs best across {wins[best]} metrics",
    )


def generate_recommendations(scenario: Scenario) -> list[Recommendation]:
    """Flag adjusted metrics that move more than 20% from baseline.

    Moves above 50% are high priority. Metrics with a zero or missing
    baseline have no relative change and are skipped.
    """
    recommendations: list[Recommendation] = []
    for metric in scenario.adjustments:
        baseline = scenario.baseline_data.get(metric)
        if not baseline:
            continue
        result = scenario.results[metric]
        change = (result - baseline) / baseline * 100
        if abs(change) <= RECOMMENDATION_THRESHOLD:
            continue

        direction = "increase" if result > baseline else "decrease"
        recommendations.append(Recommendation(
            metric=metric,
            priority="high" if abs(change) > HIGH_PRIORITY_THRESHOLD else "medium",
            direction=direction,
            change_percent=round(change, 1),
            message=f"{metric} shows {direction} of {abs(change):.1f}%",
            action=(
                f"Monitor and manage {metric} growth"
                if direction == "increase"
                else f"Leverage {metric} reduction for competitive advantage"
            ),
        ))

    logger.debug("Scenario '%s': %d recommendations", scenario.name, len(recommendations))
    return recommendations


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

def get_preset_scenarios() -> list[PresetScenario]:
    """The five built-in what-if pathways."""
    return [
        PresetScenario(
            id=p["id"],
            name=p["name"],
            description=p["description"],
            adjustments=parse_adjustments(p["adjustments"]),
        )
        for p in PRESET_SCENARIOS
    ]


def get_preset(preset_id: str) -> PresetScenario:
    for preset in get_preset_scenarios():
        if preset.id == preset_id:
            return preset
    raise UnknownPresetError(preset_id)


def apply_preset(
    preset_id: str,
    baseline_data: Mapping[str, Any],
    name: str | None = None,
) -> Scenario:
    """Create a scenario from a preset's adjustments over *baseline_data*."""
    preset = get_preset(preset_id)
    return create_scenario(name or preset.name, baseline_data, preset.adjustments)


# ---------------------------------------------------------------------------
# Impact
# ---------------------------------------------------------------------------

def _bucket_for(metric: str) -> str | None:
    for bucket, needles in IMPACT_BUCKETS.items():
        if any(needle in metric for needle in needles):
            return bucket
    return None


def calculate_impact(
    scenario: Scenario | PresetScenario,
    category: str = "all",
) -> dict[str, float] | float:
    """Sum adjustment magnitudes per ESG pillar.

    Metrics are bucketed by case-sensitive substring of their name.
    Metrics that match no pillar do not count toward any total.
    Financial impact is a fixed share of the E+S+G sum.
    """
    impacts = {"environmental": 0.0, "social": 0.0, "governance": 0.0, "financial": 0.0}

    for metric, adjustment in scenario.adjustments.items():
        bucket = _bucket_for(metric)
        if bucket is None:
            logger.debug("Metric '%s' matches no impact pillar; excluded from totals", metric)
            continue
        impacts[bucket] += abs(adjustment.value)

    impacts["financial"] = (
        impacts["environmental"] + impacts["social"] + impacts["governance"]
    ) * FINANCIAL_IMPACT_WEIGHT

    if category == "all":
        return impacts
    if category not in impacts:
        raise ValueError(
            f"Unknown impact category '{category}'; expected 'all' or one of {', '.join(impacts)}"
        )
    return impacts[category]


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def _format_change(baseline: float | None, result: float | None) -> str:
    if not baseline:
        return "0"
    return f"{percent_change(baseline, result):.1f}"


def export_scenario(scenario: Scenario, format: str = "json") -> str:
    """Serialize a scenario as pretty-printed JSON or a CSV table."""
    if format == "json":
        return json.dumps(scenario.model_dump(mode="json"), indent=2)

    if format == "csv":
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for metric, result in scenario.results.items():
            baseline = scenario.baseline_data.get(metric)
            writer.writerow([
                metric,
                format_number(baseline or 0),
                format_number(result or 0),
                _format_change(baseline, result),
            ])
        return buffer.getvalue().rstrip("\n")

    raise UnsupportedFormatError(format)
