"""
Command-line interface for ROVOCS.

Provides commands for replaying reading streams through the breath analyzer,
generating synthetic streams, and managing analyzer configuration.
"""

import json
import logging

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Any

import click

from rovocs.analysis import AnalysisUpdate, AnalyzerConfig, BreathAnalyzer
from rovocs.analysis.quality import assess_breath_quality
from rovocs.analysis.types import EventTransition
from rovocs.config import (
    ANALYZER_SECTION,
    ConfigError,
    get_config_path,
    load_analyzer_config,
    load_config,
    set_analyzer_option,
    unset_analyzer_option,
)
from rovocs.logging_config import setup_logging
from rovocs.readings import ReadingFormatError, load_readings, write_readings
from rovocs.simulation import generate_session

logger = logging.getLogger(__name__)

try:
    __version__ = get_version("rovocs")
except PackageNotFoundError:
    __version__ = "dev"


def _analyzer_config() -> AnalyzerConfig:
    try:
        return load_analyzer_config()
    except ConfigError as e:
        raise click.ClickException(f"{e}\nConfig: {get_config_path()}") from e


def _breath_record(update: AnalysisUpdate, include_quality: bool) -> dict[str, Any]:
    """Flatten a closing update into a JSON-ready record."""
    metrics = update.metrics or []
    record: dict[str, Any] = {
        "event": update.event.model_dump(mode="json") if update.event else None,
        "metrics": [m.model_dump(mode="json") for m in metrics],
    }
    if include_quality:
        record["quality"] = assess_breath_quality(metrics).model_dump(mode="json")
    return record


def _display_breath(number: int, record: dict[str, Any]) -> None:
    event = record["event"]
    click.echo(f"\nBreath #{number}")
    click.echo(f"  Start: {event['start_time']}")
    click.echo(f"  Peak:  {event['peak_time'] or '-'}")
    click.echo(f"  End:   {event['end_time']}")

    for metric in record["metrics"]:
        parts = [
            f"baseline={metric['baseline']:.2f}",
            f"peak={metric['peak']:.2f}",
            f"rise={metric['percent_rise']:.1f}%",
        ]
        if metric["time_to_peak"] is not None:
            parts.append(f"t_peak={metric['time_to_peak']:.1f}s")
        if metric["slope"] is not None:
            parts.append(f"slope={metric['slope']:.2f}/s")
        if metric["recovery_time"] is not None:
            parts.append(f"t_rec={metric['recovery_time']:.1f}s")
        click.echo(f"  {metric['channel'].upper():>4}: " + ", ".join(parts))

    quality = record.get("quality")
    if quality:
        click.echo(
            f"  Quality: {quality['overall']} "
            f"(tvoc={quality['tvoc_score']}, eco2={quality['eco2_score']})"
        )
        for recommendation in quality["recommendations"]:
            click.echo(f"    - {recommendation}")


@click.group()
@click.version_option(__version__, prog_name="rovocs")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """ROVOCS: breath analysis for VOC/eCO2 sensor streams"""
    setup_logging(verbose=verbose, console_format="%(levelname)s: %(message)s")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Emit results as JSON")
@click.option(
    "--quality/--no-quality",
    default=True,
    help="Include breath quality assessment (default: on)",
)
def analyze(path: Path, as_json: bool, quality: bool) -> None:
    """Replay a CSV reading stream through the breath analyzer."""
    try:
        readings = load_readings(path)
    except ReadingFormatError as e:
        raise click.ClickException(str(e)) from e

    analyzer = BreathAnalyzer(_analyzer_config())

    breaths = []
    stable_at = None
    for reading in readings:
        update = analyzer.process_reading(reading)
        if stable_at is None and update.baseline is not None:
            stable_at = reading.recorded_at
        if update.transition is EventTransition.CLOSED:
            breaths.append(_breath_record(update, quality))

    open_event = analyzer.current_event
    baseline = analyzer.baseline

    if as_json:
        payload = {
            "readings": len(readings),
            "baseline": baseline.model_dump(mode="json"),
            "baseline_stable_at": stable_at.isoformat() if stable_at else None,
            "breaths": breaths,
            "open_event": open_event.model_dump(mode="json") if open_event else None,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Processed {len(readings)} readings from {path}")
    if stable_at is None:
        click.echo("Baseline never stabilized; no breaths could be detected.")
        return

    click.echo(f"Baseline stable from {stable_at.isoformat()}")
    click.echo(f"  Final baseline: tvoc={baseline.tvoc:.2f}, eco2={baseline.eco2:.2f}")
    click.echo(f"Detected {len(breaths)} breath(s)")

    for number, record in enumerate(breaths, start=1):
        _display_breath(number, record)

    if open_event is not None:
        click.echo(
            f"\nNote: an event opened at {open_event.start_time.isoformat()} "
            "had not recovered by the end of the stream"
        )


@cli.command()
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--duration", type=float, default=300.0, show_default=True, help="Seconds"
)
@click.option(
    "--interval",
    type=float,
    default=2.0,
    show_default=True,
    help="Seconds between readings",
)
@click.option(
    "--breath-at",
    "breath_at",
    type=float,
    multiple=True,
    help="Exhalation onset in seconds from start (repeatable)",
)
@click.option("--seed", type=int, default=None, help="Random seed")
def simulate(
    output: Path,
    duration: float,
    interval: float,
    breath_at: tuple[float, ...],
    seed: int | None,
) -> None:
    """Write a synthetic sensor stream to a CSV file."""
    if duration <= 0 or interval <= 0:
        raise click.BadParameter("duration and interval must be positive")

    readings = generate_session(duration, interval, breath_at, seed=seed)
    count = write_readings(readings, output)
    click.echo(f"✓ Wrote {count} readings to {output}")


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("show")
def show_config_cmd() -> None:
    """Show effective analyzer settings."""
    config_path = get_config_path()
    overrides = load_config().get(ANALYZER_SECTION, {})
    effective = _analyzer_config()

    if config_path.exists():
        click.echo(f"Config file: {config_path}\n")
    else:
        click.echo(f"No config file: {config_path} (using defaults)\n")

    click.echo(f"[{ANALYZER_SECTION}]")
    for key, value in effective.model_dump().items():
        marker = "" if key in overrides else "  (default)"
        click.echo(f"  {key} = {value}{marker}")


@config.command("set")
@click.argument("key")
@click.argument("value")
def set_config_cmd(key: str, value: str) -> None:
    """Set an analyzer setting (e.g. breath_threshold 0.2)."""
    try:
        stored = set_analyzer_option(key, value)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✓ {key} = {stored}")
    click.echo(f"  Config: {get_config_path()}")


@config.command("unset")
@click.argument("key")
def unset_config_cmd(key: str) -> None:
    """Restore an analyzer setting to its default."""
    if unset_analyzer_option(key):
        click.echo(f"✓ Removed {key}")
    else:
        click.echo(f"{key} was not configured.")


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
