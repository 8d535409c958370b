"""
ESGenius CLI - materiality scoring and scenario modelling from JSON files

Every command reads plain JSON inputs and prints results; nothing is
written unless --output is given.
"""
import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from esgenius import __version__
from esgenius.config import get_config
from esgenius.materiality.assessment import assess_topics
from esgenius.materiality.scorer import materiality_level, score as score_ratings
from esgenius.scenario.engine import (
    apply_preset,
    calculate_impact,
    compare_scenarios,
    create_scenario,
    export_scenario,
    get_preset_scenarios,
)
from esgenius.scenario.monte_carlo import run_monte_carlo_simulation
from esgenius.scenario.sensitivity import run_sensitivity_analysis
from esgenius.utils import ESGeniusError, get_logger, read_json, setup_logging, write_text

console = Console()
logger = get_logger(__name__)


def _fail(e: Exception) -> None:
    console.print(f"\n[red]✗ Error: {e}[/red]")
    sys.exit(1)


def _emit(content: str, output) -> None:
    if output:
        write_text(content, output)
        console.print(f"\n[green]✓ Saved to {output}[/green]")
    else:
        click.echo(content)


# ═══════════════════════════════════════════════════════════════════
# MAIN CLI GROUP
# ═══════════════════════════════════════════════════════════════════

@click.group()
@click.version_option(version=__version__)
def main():
    """
    ESGenius - double materiality and ESG scenario modelling
    """
    config = get_config()
    setup_logging(config.log_level, config.log_file)


# ═══════════════════════════════════════════════════════════════════
# MATERIALITY COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.argument('impact', type=int)
@click.argument('financial', type=int)
def score(impact, financial):
    """Score one topic from IMPACT and FINANCIAL ratings (1-5)"""
    try:
        result = score_ratings(impact, financial)
    except ESGeniusError as e:
        _fail(e)

    table = Table(title="Materiality Score")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Impact", str(result.impact_score))
    table.add_row("Financial", str(result.financial_score))
    table.add_row("Material", "yes" if result.is_material else "no")
    table.add_row("Highly material", "yes" if result.is_highly_material else "no")
    table.add_row("Quadrant", result.quadrant)
    table.add_row("Level", materiality_level(result))
    console.print(table)


@main.command()
@click.argument('ratings_path', type=click.Path(exists=True))
@click.option('--output', '-o', type=click.Path(), help='Output JSON file')
def assess(ratings_path, output):
    """Assess the topic catalog from a ratings JSON file"""
    ratings = read_json(ratings_path)
    try:
        assessment = assess_topics(
            ratings.get("ratings", ratings),
            stakeholder_weights=ratings.get("stakeholder_weights"),
            metadata=ratings.get("metadata"),
        )
    except (ESGeniusError, ValueError) as e:
        _fail(e)

    table = Table(title="Materiality Assessment")
    table.add_column("Topic", style="cyan")
    table.add_column("ESRS")
    table.add_column("Impact", justify="right")
    table.add_column("Financial", justify="right")
    table.add_column("Quadrant")
    table.add_column("Level", style="magenta")
    for r in assessment.results:
        table.add_row(
            r.topic.name,
            r.topic.esrs_code,
            str(r.score.impact_score),
            str(r.score.financial_score),
            r.score.quadrant,
            r.level,
        )
    console.print(table)

    summary = assessment.summary
    console.print(f"\n[bold cyan]Summary:[/bold cyan]")
    console.print(f"  Topics: {summary.total_topics}")
    console.print(f"  Material: [green]{summary.material_count}[/green]")
    console.print(f"  Highly material: [red]{summary.highly_material_count}[/red]")

    if output:
        write_text(assessment.model_dump_json(indent=2), output)
        console.print(f"\n[green]✓ Saved to {output}[/green]")


# ═══════════════════════════════════════════════════════════════════
# SCENARIO COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
def presets():
    """List preset scenarios with their pillar impact"""
    table = Table(title="Preset Scenarios")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Adjustments", justify="right")
    table.add_column("Env", justify="right")
    table.add_column("Social", justify="right")
    table.add_column("Financial", justify="right")
    for preset in get_preset_scenarios():
        impact = calculate_impact(preset)
        table.add_row(
            preset.id,
            preset.name,
            str(len(preset.adjustments)),
            f"{impact['environmental']:.0f}",
            f"{impact['social']:.0f}",
            f"{impact['financial']:.2f}",
        )
    console.print(table)


@main.command()
@click.argument('baseline_path', type=click.Path(exists=True))
@click.option('--preset', '-p', 'preset_id', help='Preset scenario id')
@click.option('--adjustments', '-a', 'adjustments_path', type=click.Path(exists=True),
              help='Adjustments JSON file')
@click.option('--name', '-n', default=None, help='Scenario name')
@click.option('--format', '-f', 'fmt', default=None, help='Export format (json or csv)')
@click.option('--output', '-o', type=click.Path(), help='Output file')
def scenario(baseline_path, preset_id, adjustments_path, name, fmt, output):
    """Derive a scenario from a baseline JSON file"""
    if bool(preset_id) == bool(adjustments_path):
        _fail(click.UsageError("Pass exactly one of --preset or --adjustments"))

    baseline = read_json(baseline_path)
    fmt = fmt or get_config().export_format
    try:
        if preset_id:
            result = apply_preset(preset_id, baseline, name=name)
        else:
            result = create_scenario(name or Path(adjustments_path).stem, baseline,
                                     read_json(adjustments_path))
        content = export_scenario(result, fmt)
    except ESGeniusError as e:
        _fail(e)

    logger.info("Exported scenario '%s' as %s", result.name, fmt)
    _emit(content, output)


@main.command()
@click.argument('baseline_path', type=click.Path(exists=True))
@click.option('--preset', '-p', 'preset_ids', multiple=True, required=True,
              help='Preset scenario id (repeatable)')
def compare(baseline_path, preset_ids):
    """Compare preset scenarios over one baseline"""
    baseline = read_json(baseline_path)
    try:
        scenarios = [apply_preset(pid, baseline) for pid in preset_ids]
    except ESGeniusError as e:
        _fail(e)

    comparison = compare_scenarios(scenarios)
    table = Table(title="Scenario Comparison")
    table.add_column("Metric", style="cyan")
    for scenario_name in comparison.scenarios:
        table.add_column(scenario_name, justify="right")
    for metric, rows in comparison.metrics.items():
        table.add_row(metric, *[f"{r.value:,.2f} ({r.change:+.1f}%)" for r in rows])
    console.print(table)
    if comparison.summary.best_overall:
        console.print(f"\n[bold cyan]Best overall:[/bold cyan] {comparison.summary.recommendation}")


@main.command()
@click.argument('baseline_path', type=click.Path(exists=True))
@click.argument('uncertainties_path', type=click.Path(exists=True))
@click.option('--iterations', '-i', type=int, default=None, help='Number of trials')
@click.option('--seed', '-s', type=int, default=None, help='Random seed')
@click.option('--output', '-o', type=click.Path(), help='Output JSON file')
def simulate(baseline_path, uncertainties_path, iterations, seed, output):
    """Run a Monte Carlo simulation over a baseline"""
    config = get_config()
    iterations = config.monte_carlo_iterations if iterations is None else iterations
    seed = config.monte_carlo_seed if seed is None else seed

    try:
        with console.status(f"[bold green]Running {iterations} trials..."):
            analysis = run_monte_carlo_simulation(
                read_json(baseline_path),
                read_json(uncertainties_path),
                iterations=iterations,
                seed=seed,
            )
    except ESGeniusError as e:
        _fail(e)

    table = Table(title=f"Monte Carlo ({iterations} trials)")
    table.add_column("Metric", style="cyan")
    for stat in ("mean", "median", "p5", "p95", "min", "max"):
        table.add_column(stat, justify="right")
    for metric, stats in analysis.items():
        table.add_row(metric, *[f"{stats[k]:,.2f}" for k in ("mean", "median", "p5", "p95", "min", "max")])
    console.print(table)

    if output:
        write_text(json.dumps(analysis, indent=2), output)
        console.print(f"\n[green]✓ Saved to {output}[/green]")


@main.command()
@click.argument('baseline_path', type=click.Path(exists=True))
@click.argument('metric')
@click.option('--min', 'minimum', type=float, default=None, help='Sweep start value')
@click.option('--max', 'maximum', type=float, default=None, help='Sweep end value')
@click.option('--steps', type=int, default=None, help='Number of sweep intervals')
def sensitivity(baseline_path, metric, minimum, maximum, steps):
    """Sweep METRIC across a range and report its sensitivity"""
    steps = get_config().sensitivity_steps if steps is None else steps
    try:
        sweep = run_sensitivity_analysis(
            read_json(baseline_path), metric, minimum=minimum, maximum=maximum, steps=steps,
        )
    except ESGeniusError as e:
        _fail(e)

    table = Table(title=f"Sensitivity: {metric}")
    table.add_column("Value", justify="right", style="cyan")
    table.add_column("Change %", justify="right")
    for point in sweep["results"]:
        table.add_row(f"{point['value']:,.2f}", f"{point['change_percent']:+.1f}")
    console.print(table)
    console.print(f"\n[bold]{sweep['insights']['sensitivity']}[/bold]: {sweep['insights']['recommendation']}")


if __name__ == '__main__':
    main()
