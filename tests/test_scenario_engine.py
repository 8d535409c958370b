"""Tests for the scenario what-if engine."""

import json
from datetime import timezone

import pytest

from esgenius.scenario.engine import (
    apply_preset,
    calculate_impact,
    compare_scenarios,
    create_scenario,
    export_scenario,
    generate_recommendations,
    get_preset,
    get_preset_scenarios,
    parse_adjustment,
)
from esgenius.scenario.models import (
    AbsoluteAdjustment,
    PercentageAdjustment,
    Scenario,
    TargetAdjustment,
)
from esgenius.utils import (
    InvalidAdjustmentError,
    InvalidScenarioError,
    UnknownPresetError,
    UnsupportedFormatError,
)


class TestAdjustmentRules:
    def test_percentage(self, emissions_scenario):
        assert emissions_scenario.results["emissions"] == pytest.approx(800)

    def test_target(self):
        scenario = create_scenario("Test", {"emissions": 1000}, {"emissions": {"type": "target", "value": 0}})
        assert scenario.results["emissions"] == 0

    def test_absolute(self):
        scenario = create_scenario("Test", {"emissions": 1000}, {"emissions": {"type": "absolute", "value": -150}})
        assert scenario.results["emissions"] == pytest.approx(850)

    def test_unadjusted_metrics_pass_through(self, baseline_data):
        scenario = create_scenario(
            "Water only", baseline_data, {"waterUsage": {"type": "percentage", "value": -10}}
        )
        for metric, value in baseline_data.items():
            if metric != "waterUsage":
                assert scenario.results[metric] == value
        assert scenario.results["waterUsage"] == pytest.approx(405000)

    def test_adjustment_without_baseline_starts_from_zero(self):
        scenario = create_scenario(
            "New metrics",
            {"emissions": 1000},
            {
                "carbonOffset": {"type": "percentage", "value": 200},
                "solarCapacity": {"type": "absolute", "value": 25},
            },
        )
        assert scenario.results["carbonOffset"] == 0
        assert scenario.results["solarCapacity"] == 25
        assert "carbonOffset" not in scenario.baseline_data

    def test_results_cover_baseline_and_adjusted_keys(self, baseline_data):
        adjustments = {"scope3Emissions": {"type": "target", "value": 5000}}
        scenario = create_scenario("Union", baseline_data, adjustments)
        assert set(scenario.results) == set(baseline_data) | set(adjustments)

    def test_no_adjustments_copies_baseline(self, baseline_data):
        scenario = create_scenario("Status quo", baseline_data)
        assert scenario.results == baseline_data
        assert scenario.adjustments == {}

    def test_accepts_typed_adjustments(self):
        scenario = create_scenario("Typed", {"waste": 10}, {"waste": AbsoluteAdjustment(value=5)})
        assert scenario.results["waste"] == 15

    def test_same_inputs_give_same_results(self, baseline_data):
        adjustments = {
            "scope1Emissions": {"type": "percentage", "value": -12.5},
            "waterUsage": {"type": "absolute", "value": -1000},
        }
        first = create_scenario("Repeat", baseline_data, adjustments)
        second = create_scenario("Repeat", baseline_data, adjustments)
        assert first.results == second.results

    def test_zero_percentage_keeps_baseline(self):
        scenario = create_scenario("Flat", {"x": 123.456}, {"x": {"type": "percentage", "value": 0}})
        assert scenario.results["x"] == 123.456


class TestScenarioModel:
    def test_is_frozen(self, emissions_scenario):
        with pytest.raises(Exception):
            emissions_scenario.name = "Other"

    @pytest.mark.parametrize("field", ["baseline_data", "results"])
    def test_metric_mappings_are_read_only(self, emissions_scenario, field):
        with pytest.raises(TypeError):
            getattr(emissions_scenario, field)["emissions"] = 1
        assert emissions_scenario.results["emissions"] == pytest.approx(800)

    def test_adjustments_are_read_only(self, emissions_scenario):
        with pytest.raises(TypeError):
            emissions_scenario.adjustments["emissions"] = AbsoluteAdjustment(value=1)
        with pytest.raises(TypeError):
            del emissions_scenario.adjustments["emissions"]

    def test_dump_gives_plain_dicts(self, emissions_scenario):
        data = emissions_scenario.model_dump()
        assert type(data["results"]) is dict
        assert type(data["adjustments"]) is dict
        assert data["adjustments"]["emissions"] == {"type": "percentage", "value": -20}

    def test_caller_mutation_does_not_leak(self):
        baseline = {"emissions": 1000}
        scenario = create_scenario("Copy", baseline)
        baseline["emissions"] = 1
        assert scenario.baseline_data["emissions"] == 1000

    def test_created_at_is_utc(self, emissions_scenario):
        assert emissions_scenario.created_at.tzinfo == timezone.utc

    def test_adjustments_are_typed(self, emissions_scenario):
        adjustment = emissions_scenario.adjustments["emissions"]
        assert isinstance(adjustment, PercentageAdjustment)
        assert adjustment.value == -20


class TestValidation:
    def test_unknown_type(self):
        with pytest.raises(InvalidAdjustmentError) as exc_info:
            create_scenario("Bad", {"emissions": 1000}, {"emissions": {"type": "multiply", "value": 2}})
        assert exc_info.value.metric == "emissions"

    @pytest.mark.parametrize("value", ["-20", None, True, [1]])
    def test_non_numeric_value(self, value):
        with pytest.raises(InvalidAdjustmentError):
            create_scenario("Bad", {"emissions": 1000}, {"emissions": {"type": "percentage", "value": value}})

    def test_missing_value(self):
        with pytest.raises(InvalidAdjustmentError):
            parse_adjustment("emissions", {"type": "target"})

    def test_adjustment_not_a_mapping(self):
        with pytest.raises(InvalidAdjustmentError):
            parse_adjustment("emissions", -20)

    def test_empty_name(self):
        with pytest.raises(InvalidScenarioError):
            create_scenario("   ", {"emissions": 1000})

    def test_non_numeric_baseline(self):
        with pytest.raises(InvalidScenarioError):
            create_scenario("Bad", {"emissions": "lots"})

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            create_scenario("Bad", {"emissions": 1000}, {"emissions": {"type": "nope", "value": 1}})


class TestCompareScenarios:
    def test_metrics_in_first_seen_order(self):
        a = create_scenario("A", {"x": 10, "y": 20})
        b = create_scenario("B", {"z": 5, "x": 10})
        comparison = compare_scenarios([a, b])
        assert list(comparison.metrics) == ["x", "y", "z"]
        assert comparison.scenarios == ["A", "B"]

    def test_one_entry_per_scenario(self, baseline_data):
        scenarios = [apply_preset(p.id, baseline_data) for p in get_preset_scenarios()]
        comparison = compare_scenarios(scenarios)
        for entries in comparison.metrics.values():
            assert [e.scenario for e in entries] == [s.name for s in scenarios]

    def test_change_against_own_baseline(self, emissions_scenario):
        other = create_scenario("Other", {"emissions": 500}, {"emissions": {"type": "absolute", "value": 50}})
        comparison = compare_scenarios([emissions_scenario, other])
        first, second = comparison.metrics["emissions"]
        assert first.value == pytest.approx(800)
        assert first.change == -20.0
        assert second.value == pytest.approx(550)
        assert second.change == 10.0

    def test_missing_metric_counts_as_zero(self):
        a = create_scenario("A", {"x": 10})
        b = create_scenario("B", {"y": 4})
        comparison = compare_scenarios([a, b])
        x_in_b = comparison.metrics["x"][1]
        assert x_in_b.value == 0
        assert x_in_b.change == 0.0

    def test_zero_baseline_gives_zero_change(self):
        scenario = create_scenario("Z", {"x": 0}, {"x": {"type": "absolute", "value": 5}})
        assert compare_scenarios([scenario]).metrics["x"][0].change == 0.0

    def test_change_rounded_to_one_decimal(self):
        scenario = create_scenario("R", {"x": 3}, {"x": {"type": "absolute", "value": 1}})
        assert compare_scenarios([scenario]).metrics["x"][0].change == 33.3

    def test_empty(self):
        comparison = compare_scenarios([])
        assert comparison.scenarios == []
        assert comparison.metrics == {}
        assert comparison.statistics == {}
        assert comparison.summary.best_overall is None
        assert comparison.summary.total_metrics == 0

    def test_metric_statistics(self):
        a = create_scenario("A", {"x": 10, "y": 20})
        b = create_scenario("B", {"x": 30, "y": 5})
        c = create_scenario("C", {"x": 30, "y": 20})
        statistics = compare_scenarios([a, b, c]).statistics

        # ties keep input order: best is the first top value, worst the last low one
        assert statistics["x"].best == "B"
        assert statistics["x"].worst == "A"
        assert statistics["x"].range == 20
        assert statistics["x"].average == pytest.approx(70 / 3)
        assert statistics["y"].best == "A"
        assert statistics["y"].worst == "B"
        assert statistics["y"].range == 15
        assert statistics["y"].average == pytest.approx(15)

    def test_summary_counts_wins(self):
        a = create_scenario("A", {"x": 10, "y": 20})
        b = create_scenario("B", {"x": 30, "y": 5})
        c = create_scenario("C", {"x": 30, "y": 20})
        summary = compare_scenarios([a, b, c]).summary
        assert summary.total_metrics == 2
        assert summary.wins == {"A": 1, "B": 1, "C": 0}
        assert summary.losses == {"A": 1, "B": 1, "C": 0}
        assert summary.best_overall == "A"
        assert summary.recommendation == "A performs best across 1 metrics"

    def test_summary_clear_winner(self, baseline_data):
        conservative = apply_preset("conservative", baseline_data)
        optimistic = apply_preset("optimistic", baseline_data)
        summary = compare_scenarios([conservative, optimistic]).summary
        # optimistic raises the three growth metrics further
        assert summary.wins["Optimistic Growth"] == 3
        assert summary.wins["Conservative Baseline"] == 3
        assert summary.best_overall == "Conservative Baseline"


class TestRecommendations:
    def test_thresholds_and_direction(self):
        scenario = create_scenario(
            "Moves",
            {"emissions": 1000, "water": 100, "waste": 50},
            {
                "emissions": {"type": "percentage", "value": -20},
                "water": {"type": "percentage", "value": 60},
                "waste": {"type": "percentage", "value": -30},
            },
        )
        water, waste = generate_recommendations(scenario)

        assert water.metric == "water"
        assert water.priority == "high"
        assert water.direction == "increase"
        assert water.change_percent == 60.0
        assert water.message == "water shows increase of 60.0%"
        assert water.action == "Monitor and manage water growth"

        assert waste.priority == "medium"
        assert waste.direction == "decrease"
        assert waste.message == "waste shows decrease of 30.0%"
        assert waste.action == "Leverage waste reduction for competitive advantage"

    def test_missing_or_zero_baseline_skipped(self):
        scenario = create_scenario(
            "New",
            {"zero": 0},
            {
                "zero": {"type": "absolute", "value": 10},
                "offsets": {"type": "absolute", "value": 10},
            },
        )
        assert generate_recommendations(scenario) == []

    def test_unadjusted_metrics_ignored(self, baseline_data):
        assert generate_recommendations(create_scenario("Flat", baseline_data)) == []


class TestPresets:
    def test_five_presets(self):
        ids = [p.id for p in get_preset_scenarios()]
        assert ids == ["optimistic", "realistic", "conservative", "netzero2030", "circular"]

    def test_netzero_targets_full_renewables(self):
        preset = get_preset("netzero2030")
        assert isinstance(preset.adjustments["renewableEnergy"], TargetAdjustment)
        assert preset.adjustments["renewableEnergy"].value == 100
        assert preset.adjustments["scope2Emissions"].value == -100

    def test_apply_preset(self, baseline_data):
        scenario = apply_preset("realistic", baseline_data)
        assert scenario.name == "Realistic Progress"
        assert scenario.results["scope1Emissions"] == pytest.approx(10200)
        assert scenario.results["renewableEnergy"] == pytest.approx(43.75)

    def test_apply_preset_custom_name(self, baseline_data):
        assert apply_preset("circular", baseline_data, name="Plan B").name == "Plan B"

    def test_unknown_preset(self, baseline_data):
        with pytest.raises(UnknownPresetError) as exc_info:
            apply_preset("moonshot", baseline_data)
        assert "moonshot" in str(exc_info.value)

    def test_unknown_preset_is_key_error(self):
        with pytest.raises(KeyError):
            get_preset("moonshot")


class TestCalculateImpact:
    def test_buckets_by_substring(self):
        scenario = create_scenario(
            "Impact",
            {},
            {
                "emission": {"type": "percentage", "value": -10},
                "waterUsage": {"type": "percentage", "value": -5},
                "employeeTurnover": {"type": "absolute", "value": -3},
                "boardIndependence": {"type": "target", "value": 60},
            },
        )
        impact = calculate_impact(scenario)
        assert impact["environmental"] == 15
        assert impact["social"] == 3
        assert impact["governance"] == 60
        assert impact["financial"] == pytest.approx(78 * 0.15)

    def test_match_is_case_sensitive(self):
        # "scope1Emissions" does not contain lowercase "emission"
        scenario = create_scenario(
            "Case", {}, {"scope1Emissions": {"type": "percentage", "value": -30}}
        )
        impact = calculate_impact(scenario)
        assert impact["environmental"] == 0
        assert impact["financial"] == 0

    def test_unmatched_metrics_excluded(self):
        scenario = create_scenario(
            "Unmatched", {}, {"renewableEnergy": {"type": "percentage", "value": 50}}
        )
        assert calculate_impact(scenario) == {
            "environmental": 0, "social": 0, "governance": 0, "financial": 0
        }

    def test_preset_impact(self):
        impact = calculate_impact(get_preset("realistic"))
        assert impact["environmental"] == pytest.approx(32)
        assert impact["social"] == pytest.approx(10)
        assert impact["governance"] == 0
        assert impact["financial"] == pytest.approx(6.3)

    def test_single_category(self):
        assert calculate_impact(get_preset("realistic"), "social") == pytest.approx(10)

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            calculate_impact(get_preset("realistic"), "economic")


class TestExport:
    def test_csv_reference_output(self, emissions_scenario):
        assert export_scenario(emissions_scenario, "csv") == (
            "Metric,Baseline,Scenario,Change\nemissions,1000,800,-20.0"
        )

    def test_csv_one_row_per_result(self, baseline_data):
        scenario = apply_preset("netzero2030", baseline_data)
        lines = export_scenario(scenario, "csv").split("\n")
        assert len(lines) == len(scenario.results) + 1

    def test_csv_missing_baseline_prints_zero_change(self):
        scenario = create_scenario("New", {}, {"solarCapacity": {"type": "absolute", "value": 25}})
        assert export_scenario(scenario, "csv").split("\n")[1] == "solarCapacity,0,25,0"

    def test_csv_change_matches_comparison(self, baseline_data):
        scenario = apply_preset("optimistic", baseline_data)
        comparison = compare_scenarios([scenario])
        for line in export_scenario(scenario, "csv").split("\n")[1:]:
            metric, _, _, change = line.split(",")
            assert float(change) == comparison.metrics[metric][0].change

    def test_json_round_trips_fields(self, emissions_scenario):
        data = json.loads(export_scenario(emissions_scenario, "json"))
        assert data["name"] == "Test"
        assert data["baseline_data"] == {"emissions": 1000}
        assert data["adjustments"]["emissions"] == {"type": "percentage", "value": -20}
        assert data["results"]["emissions"] == pytest.approx(800)
        assert "created_at" in data

    def test_json_is_default(self, emissions_scenario):
        assert export_scenario(emissions_scenario).startswith("{\n  ")

    def test_json_reloads_into_model(self, emissions_scenario):
        restored = Scenario.model_validate_json(export_scenario(emissions_scenario, "json"))
        assert restored == emissions_scenario

    def test_unsupported_format(self, emissions_scenario):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            export_scenario(emissions_scenario, "xlsx")
        assert exc_info.value.format == "xlsx"
