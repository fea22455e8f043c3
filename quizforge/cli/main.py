"""
Typer CLI for quizforge.

Commands:
    quizforge format FILE           - Format a raw quiz into canonical JSON
    quizforge export FILE -t csv    - Export a quiz (json, csv, moodle/gift, text/plain)
    quizforge validate FILE         - Validate raw quiz data and report quality
    quizforge summary FILE          - Show the reporting summary of a quiz
    quizforge formats               - List supported export types

FILE is a .json raw quiz, or any other text file holding an AI response
(markdown fences and surrounding prose are stripped).

Usage:
    quizforge --help
    quizforge format quiz.json --user-id 7 -o formatted.json
    quizforge export response.txt --type gift
    quizforge export quiz.json --type text --locale en
"""

from __future__ import annotations

import json
import os
import sys

# Fix Windows encoding issues for Thai labels and check marks
if sys.platform == "win32":
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    if hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from pathlib import Path
from typing import Any, NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from quizforge.config import get_settings
from quizforge.errors import QuizForgeError, ValidationError
from quizforge.export import export_to_string, supported_export_types
from quizforge.export.plain_text import render_plain_text
from quizforge.formatting import QuizFormatter
from quizforge.logging_config import configure_logging
from quizforge.models import GENERATED_BY_AI, FormatContext, Quiz
from quizforge.parsing import parse_quiz_response
from quizforge.validation import QuizValidator

app = typer.Typer(
    help="quizforge CLI: format, validate and export quizzes",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """Quiz formatting, validation and export."""
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, settings.log_file)


# ========================================
# Helpers
# ========================================


def _load_raw_quiz(path: Path) -> dict[str, Any]:
    """Read a raw quiz from a .json file, or parse any other file as an AI response."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError("Input file is not valid UTF-8") from e
    if path.suffix.lower() != ".json":
        logger.debug(f"Parsing {path} as AI response")
        return parse_quiz_response(text)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON format: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("Quiz data must be an object")
    return data


def _context_for(path: Path, user_id: int | None, generated_by: str | None) -> FormatContext:
    # AI responses are tagged as AI generated unless told otherwise
    if generated_by is None and path.suffix.lower() != ".json":
        generated_by = GENERATED_BY_AI
    return FormatContext(user_id=user_id, generated_by=generated_by)


def _load_quiz(path: Path, user_id: int | None = None, generated_by: str | None = None) -> Quiz:
    formatter = QuizFormatter()
    return formatter.format_quiz(_load_raw_quiz(path), _context_for(path, user_id, generated_by))


def _write_output(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text, nl=not text.endswith("\n"))
        return
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]✓[/green] Written to {escape(str(output))}")


def _fail(error: QuizForgeError) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(error.message)}", soft_wrap=True)
    for item in getattr(error, "errors", []):
        console.print(f"  [red]•[/red] {escape(item)}", soft_wrap=True)
    raise typer.Exit(code=1)


InputFile = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Raw quiz (.json) or AI response file")


# ========================================
# Commands
# ========================================


@app.command("format")
def format_command(
    input_file: Path = InputFile,
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
    user_id: int | None = typer.Option(None, "--user-id", help="Owner used when the quiz has none"),
    generated_by: str | None = typer.Option(None, "--generated-by", help="Provenance tag (ai, system, ...)"),
) -> None:
    """Format a raw quiz into its canonical JSON shape."""
    try:
        quiz = _load_quiz(input_file, user_id, generated_by)
    except QuizForgeError as e:
        _fail(e)
    _write_output(json.dumps(quiz.to_dict(), ensure_ascii=False, indent=2) + "\n", output)


@app.command("export")
def export_command(
    input_file: Path = InputFile,
    export_type: str | None = typer.Option(None, "--type", "-t", help="Export type (default: from config)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
    locale: str | None = typer.Option(None, "--locale", help="Label language for text export (th, en)"),
    user_id: int | None = typer.Option(None, "--user-id", help="Owner used when the quiz has none"),
) -> None:
    """Export a quiz as json, csv, moodle/gift or text/plain."""
    export_type = export_type or get_settings().default_export_type
    try:
        quiz = _load_quiz(input_file, user_id)
        if locale and export_type.lower() in ("text", "plain"):
            rendered = render_plain_text(quiz, locale)
        else:
            rendered = export_to_string(quiz, export_type)
    except QuizForgeError as e:
        _fail(e)
    _write_output(rendered, output)


@app.command("validate")
def validate_command(
    input_file: Path = InputFile,
    publication: bool = typer.Option(False, "--publication", help="Fail unless the quiz is ready to publish"),
    user_id: int | None = typer.Option(None, "--user-id", help="Owner used when the quiz has none"),
) -> None:
    """Validate raw quiz data, then report quality and publication readiness."""
    settings = get_settings()
    validator = QuizValidator(settings.get_validator_config())
    try:
        raw = _load_raw_quiz(input_file)
        if user_id is not None and not (raw.get("userId") or raw.get("user_id")):
            raw["userId"] = user_id
        validator.validate_quiz_data(raw)
        quiz = QuizFormatter().format_quiz(raw, _context_for(input_file, user_id, None))
    except QuizForgeError as e:
        _fail(e)

    console.print(f"[green]✓[/green] {escape(quiz.title)}: quiz data is valid")

    quality = validator.validate_quiz_quality(quiz)
    table = Table(title="Quality Report", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Quality score", f"{quality.quality_score:g}")
    table.add_row("Quality level", quality.quality_level)
    table.add_row("Type variety", f"{quality.analytics['questionTypes']['variety']:.2f}")
    table.add_row("Difficulty imbalance", f"{quality.analytics['difficultyDistribution']['imbalance']:.2f}")
    table.add_row("Length inconsistency", f"{quality.analytics['lengthAnalysis']['inconsistency']:.2f}")
    table.add_row("Answer bias", f"{quality.analytics['answerDistribution']['bias']:.2f}")
    console.print(table)

    for issue, suggestion in zip(quality.issues, quality.suggestions):
        console.print(f"[yellow]![/yellow] {issue} [dim]({suggestion})[/dim]")

    report = validator.validate_for_publication(quiz)
    if report.is_ready_for_publication:
        console.print("[green]✓[/green] Ready for publication")
        return

    console.print("[yellow]Not ready for publication:[/yellow]")
    for error in report.errors:
        console.print(f"  [yellow]•[/yellow] {escape(error)}")
    if publication:
        raise typer.Exit(code=1)


@app.command("summary")
def summary_command(
    input_file: Path = InputFile,
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON"),
) -> None:
    """Show the reporting summary of a quiz."""
    try:
        quiz = _load_quiz(input_file)
        summary = QuizFormatter().format_summary(quiz)
    except QuizForgeError as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))
        return

    table = Table(title=f"Summary: {escape(quiz.title)}", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for section in (summary.basic, summary.statistics, summary.metadata):
        for key, value in section.items():
            if isinstance(value, dict):
                value = ", ".join(f"{k}={v}" for k, v in value.items()) or "-"
            table.add_row(key, escape(str(value)))
    console.print(table)


@app.command("formats")
def formats_command() -> None:
    """List supported export types."""
    for export_type in supported_export_types():
        typer.echo(export_type)


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
