"""
lesson-rigor CLI - Offline audit of lesson transcripts.

Commands:
    lesson-rigor validate TRANSCRIPT [--analysis FILE]   Rigorous score vs. external score
    lesson-rigor behavior TRANSCRIPT                     Per-category behavior detections

TRANSCRIPT is a UTF-8 text file, or "-" for stdin.
"""

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ValidatorConfig
from .detectors import BehaviorDetector
from .scoring import DISCREPANCY_THRESHOLD
from .validator import AnalysisValidator

app = typer.Typer(help="Deterministic rigor checks for AI-generated lesson analyses")
console = Console()

SEVERITY_STYLES = {
    "low": "green",
    "medium": "yellow",
    "high": "red",
    "critical": "bold red",
}


def _read_transcript(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(
            f"[bold red]Error:[/bold red] cannot read transcript {escape(path)}: {escape(str(e))}"
        )
        raise typer.Exit(2)


def _read_analysis(path: str | None) -> dict:
    if path is None:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        console.print(
            f"[bold red]Error:[/bold red] cannot read analysis {escape(path)}: {escape(str(e))}"
        )
        raise typer.Exit(2)
    except json.JSONDecodeError as e:
        console.print(
            f"[bold red]Error:[/bold red] {escape(path)} is not valid JSON: {escape(str(e))}"
        )
        raise typer.Exit(2)
    if not isinstance(data, dict):
        console.print(f"[bold red]Error:[/bold red] {escape(path)} must contain a JSON object")
        raise typer.Exit(2)
    return data


def _styled(level: str | None) -> str:
    if not level:
        return "-"
    style = SEVERITY_STYLES.get(level, "white")
    return f"[{style}]{level}[/{style}]"


# =============================================================================
# VALIDATE
# =============================================================================


@app.command()
def validate(
    transcript: str = typer.Argument(help="Transcript file, or - for stdin"),
    analysis: str = typer.Option(None, help="JSON file with the external analysis record"),
    as_json: bool = typer.Option(False, "--json", help="Print the augmented record as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Score a transcript and compare it with the external analysis score."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    text = _read_transcript(transcript)
    record = _read_analysis(analysis)
    result = AnalysisValidator(config=ValidatorConfig.from_env()).validate(text, record)
    warning = result.get("validation_warning")

    if as_json:
        typer.echo(json.dumps(result, ensure_ascii=False, indent=2))
        if warning:
            raise typer.Exit(1)
        return

    report = result["validation_report"]
    breakdown = report["score_breakdown"]
    compliance = result["behavior_analysis"]["compliance"]

    table = Table(title="Rigor Report")
    table.add_column("Component", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Weighted", justify="right")
    table.add_row("Behavior", str(report["behavior_score"]), str(breakdown["behavior_component"]))
    table.add_row("Context", str(report["context_score"]), str(breakdown["context_component"]))
    table.add_row("Legal", str(report["legal_score"]), str(breakdown["legal_component"]))
    table.add_row("[bold]Rigorous[/bold]", "", f"[bold]{report['rigorous_score']}[/bold]")
    console.print(table)

    console.print(f"Issues detected: {report['detected_issues_count']}")
    console.print(f"Legal risk: {_styled(compliance['overall_risk'])}")
    console.print(compliance["legal_summary"])

    if warning:
        console.print(
            f"\n[bold red]Inflated score:[/bold red] current {warning['current_score']} "
            f"vs rigorous {warning['rigorous_score']} (delta {warning['delta']} > "
            f"{DISCREPANCY_THRESHOLD})"
        )
        console.print(warning["reason"])
        console.print(f"[yellow]{warning['recommendation']}[/yellow]")
        raise typer.Exit(1)
    console.print("\n[bold green]No score discrepancy.[/bold green]")


# =============================================================================
# BEHAVIOR
# =============================================================================


@app.command()
def behavior(
    transcript: str = typer.Argument(help="Transcript file, or - for stdin"),
):
    """Show the behavior detections for a transcript."""
    text = _read_transcript(transcript)
    config = ValidatorConfig.from_env()
    report = BehaviorDetector(evidence_limit=config.evidence_limit).analyze(text)

    table = Table(title="Behavior Report")
    table.add_column("Category", style="bold")
    table.add_column("Severity")
    table.add_column("Evidence")
    for name, detection in report.detections().items():
        evidence = escape("; ".join(detection.evidence)) if detection.detected else ""
        table.add_row(name, _styled(detection.severity), evidence)
    console.print(table)

    console.print(f"Safety score: [bold]{report.safety_score}[/bold]")
    console.print(report.summary)


if __name__ == "__main__":
    app()
