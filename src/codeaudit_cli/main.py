"""Codeaudit CLI - heuristic code quality analyzer for source files.

Usage:
    codeaudit analyze app.js
    codeaudit analyze - --language python < script.py
    codeaudit detect snippet.txt
    codeaudit cicd .github/workflows/ci.yml
    codeaudit ask app.js "what does the eval warning mean?"
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .analyzer import analyze as run_analysis
from .analyzer import check_input_size, check_language_mismatch, export_json, format_report, resolve_language
from .cicd import analyze_cicd_config
from .detection import detect_language
from .fixes import FixSuggestionGenerator
from .languages import EXT_LANG, Language, language_label
from .model import DEFAULT_MODEL, ModelError, OllamaClient
from .prompts import chat_context
from .results import CRITICAL, INFO, WARNING
from .serve import DEFAULT_PORT, start_server

console = Console()

SEVERITY_STYLE = {CRITICAL: "bold red", WARNING: "yellow", INFO: "cyan"}


def _read_source(target: str) -> tuple[str, str | None]:
    """Read TARGET (a path or '-' for stdin). Returns (text, filename)."""
    if target == "-":
        return click.get_text_stream("stdin").read(), None
    path = Path(target)
    if not path.is_file():
        raise click.ClickException(f"Not a file: {target}")
    try:
        return path.read_text(encoding="utf-8"), path.name
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read {target}: {e}")


def _guard_size(code: str) -> None:
    try:
        check_input_size(code)
    except ValueError as e:
        raise click.ClickException(str(e))


def _score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )
    else:
        logging.basicConfig(level=logging.WARNING)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log engine internals to stderr")
def cli(verbose: bool):
    """Codeaudit - heuristic code quality analyzer.

    Scores source code for quality, flags bugs and security problems,
    estimates whether it was AI-generated, and reviews CI/CD configs.
    Everything runs locally; only --fix talks to a local Ollama model.
    """
    _setup_logging(verbose)


@cli.command()
@click.argument("target")
@click.option("--language", "-l", type=click.Choice([l.value for l in Language]), default=None,
              help="Language of the code (default: file extension, else auto-detect)")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
@click.option("--report", is_flag=True, help="Print the shareable plain-text report")
@click.option("--cicd-config", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Pipeline config to include in the report")
@click.option("--fix", is_flag=True, help="Ask the local model for fixes to the top issues")
@click.option("--model", "-m", default=DEFAULT_MODEL, help="Ollama model name for --fix")
def analyze(target: str, language: str | None, json_only: bool, report: bool, cicd_config: str | None,
            fix: bool, model: str):
    """Analyze a source file and score its quality.

    TARGET is a file path, or - to read from stdin.

    Examples:

        codeaudit analyze app.js

        codeaudit analyze script.py --report

        cat main.go | codeaudit analyze - -l go --json-only
    """
    code, filename = _read_source(target)
    _guard_size(code)
    if language is None:
        language = resolve_language(code, filename)

    result = run_analysis(code, language)
    cicd = None
    if cicd_config:
        cicd_text, _ = _read_source(cicd_config)
        cicd = analyze_cicd_config(cicd_text)

    if json_only:
        click.echo(export_json(result, cicd))
        return
    if report:
        click.echo(format_report(result, cicd))
        return

    console.print()
    console.print(Panel.fit(
        f"[bold cyan]Codeaudit v{__version__}[/] - {filename or 'stdin'} ({language_label(language)})",
        border_style="cyan",
    ))

    mismatch = check_language_mismatch(code, language)
    if mismatch:
        console.print(
            f"[yellow]This looks like {language_label(mismatch.detected)} "
            f"({mismatch.confidence}% confidence), not {language_label(mismatch.selected)}. "
            f"Try --language {mismatch.detected}[/]"
        )

    _print_result(result)
    if cicd is not None:
        _print_cicd(cicd)

    if fix:
        _run_fix(code, language, result.issues, model)


def _run_fix(code: str, language: str, issues, model: str) -> None:
    client = OllamaClient(model=model)
    generator = FixSuggestionGenerator(client)

    with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
        task = progress.add_task(f"Asking {model} for fixes...", total=None)
        try:
            client.ensure_ready()
            fixes = generator.generate(code, language, issues)
        except ModelError as e:
            raise click.ClickException(str(e))
        progress.update(task, description="Done!", completed=True)

    console.print()
    if not fixes.fixes and not fixes.full_corrected_code:
        console.print("[yellow]No fix suggestions available.[/]")
        return

    console.print(Panel.fit(
        f"[bold green]{len(fixes.fixes)} fix suggestion(s)[/]\n"
        f"Model: {fixes.model_used} | Time: {fixes.generation_time_seconds:.1f}s",
        border_style="green",
    ))
    for f in fixes.fixes:
        console.print()
        console.print(f"[bold]{escape(f.issue)}[/]")
        if f.explanation:
            console.print(escape(f.explanation), style="dim")
        if f.fixed_code:
            console.print(Syntax(f.fixed_code, language, theme="ansi_dark"))
    if fixes.full_corrected_code:
        console.print()
        console.print("[bold]Full corrected code:[/]")
        console.print(Syntax(fixes.full_corrected_code, language, theme="ansi_dark", line_numbers=True))


@cli.command()
@click.argument("target")
@click.argument("question")
@click.option("--language", "-l", type=click.Choice([l.value for l in Language]), default=None,
              help="Language of the code (default: file extension, else auto-detect)")
@click.option("--model", "-m", default=DEFAULT_MODEL, help="Ollama model name")
def ask(target: str, question: str, language: str | None, model: str):
    """Ask the local model a question about a file and its analysis.

    Example:

        codeaudit ask app.js "why is line 12 flagged?"
    """
    code, filename = _read_source(target)
    _guard_size(code)
    if language is None:
        language = resolve_language(code, filename)

    result = run_analysis(code, language)
    client = OllamaClient(model=model)
    try:
        client.ensure_ready()
        for chunk in client.chat([{"role": "user", "content": question}], system=chat_context(code, language, result)):
            click.echo(chunk, nl=False)
    except ModelError as e:
        raise click.ClickException(str(e))
    click.echo()


@cli.command()
@click.argument("target")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
def detect(target: str, json_only: bool):
    """Guess the language of a file or stdin."""
    code, _ = _read_source(target)
    _guard_size(code)
    detection = detect_language(code)

    if json_only:
        click.echo(json.dumps(detection.to_dict(), indent=2))
        return

    console.print()
    console.print(
        f"Detected: [bold cyan]{language_label(detection.language)}[/] "
        f"({detection.confidence}% confidence)"
    )
    if detection.scores:
        table = Table(title="Top candidates", border_style="dim")
        table.add_column("Language", style="bold")
        table.add_column("Score", justify="right")
        for s in detection.scores:
            table.add_row(language_label(s.language), f"{s.score:g}")
        console.print(table)


@cli.command()
@click.argument("target")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
def cicd(target: str, json_only: bool):
    """Review a CI/CD pipeline config for security and best practices."""
    text, _ = _read_source(target)
    _guard_size(text)
    result = analyze_cicd_config(text)

    if json_only:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return
    _print_cicd(result)


@cli.command()
@click.option("--port", "-p", default=DEFAULT_PORT, show_default=True, help="Port to listen on")
@click.option("--open", "open_browser", is_flag=True, help="Open the API index in a browser")
def serve(port: int, open_browser: bool):
    """Run the local JSON API (127.0.0.1 only)."""
    console.print(f"[bold cyan]Codeaudit API[/] on http://localhost:{port}  (Ctrl+C to stop)")
    try:
        start_server(port=port, open_browser=open_browser)
    except OSError as e:
        raise click.ClickException(f"Cannot listen on port {port}: {e}")


@cli.command()
def languages():
    """List supported languages and their file extensions."""
    exts: dict[str, list[str]] = {}
    for ext, lang in EXT_LANG.items():
        exts.setdefault(lang.value, []).append(ext)

    table = Table(title="Supported Languages", show_header=True)
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Extensions")
    for lang in Language:
        table.add_row(lang.value, language_label(lang.value), ", ".join(exts.get(lang.value, [])))
    console.print(table)


def _print_result(result) -> None:
    m = result.metrics
    console.print()
    console.print(Panel.fit(
        f"[bold {_score_style(result.score)}]{result.score}[/]/100",
        title="Quality Score",
        border_style=_score_style(result.score),
    ))

    table = Table(title="Metrics", show_header=False, border_style="dim")
    table.add_column("Key", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Lines", f"{m.lines_of_code:,}")
    table.add_row("Code / Comment / Blank", f"{m.code_lines:,} / {m.comment_lines:,} / {m.blank_lines:,}")
    table.add_row("Complexity", str(m.complexity))
    table.add_row("Functions", str(m.functions))
    table.add_row("Classes", str(m.classes))
    console.print(table)

    if result.issues:
        issues = Table(title=f"Issues ({len(result.issues)})", show_lines=True)
        issues.add_column("Severity")
        issues.add_column("Line", justify="right")
        issues.add_column("Issue", style="bold")
        issues.add_column("Suggestion")
        for i in result.issues:
            issues.add_row(
                f"[{SEVERITY_STYLE.get(i.severity, '')}]{i.severity}[/]",
                str(i.line) if i.line else "",
                f"{escape(i.title)}\n[dim]{escape(i.description)}[/]",
                escape(i.suggestion),
            )
        console.print(issues)
    else:
        console.print("[green]No issues found.[/]")

    ai = result.ai_detection
    verdict = "[magenta]Possibly AI generated[/]" if ai.is_likely_ai else "[green]Likely human written[/]"
    console.print()
    console.print(f"[bold]Authorship:[/] {verdict} ({ai.confidence}% AI confidence)")
    for ind in ai.indicators:
        marker = "[magenta]ai[/]   " if ind.kind == "ai" else "[green]human[/]"
        console.print(f"  {marker} {escape(ind.text)}")


def _print_cicd(result) -> None:
    console.print()
    if not result.detected:
        console.print("[yellow]No CI/CD configuration detected.[/]")
        return

    console.print(Panel.fit(
        f"[bold]{result.platform}[/]\nSecurity score: "
        f"[bold {_score_style(result.security_score)}]{result.security_score}[/]/100",
        title="CI/CD Pipeline",
        border_style="cyan",
    ))
    for i in result.issues:
        console.print(f"  [{SEVERITY_STYLE.get(i.severity, '')}]{i.severity}[/] [bold]{escape(i.title)}[/]: {escape(i.description)}")
        console.print(f"    {escape(i.suggestion)}", style="dim")

    table = Table(title="Best Practices", show_header=False, border_style="dim")
    table.add_column("Done", justify="center")
    table.add_column("Practice", style="bold")
    table.add_column("Note")
    for bp in result.best_practices:
        table.add_row("[green]yes[/]" if bp.implemented else "[red]no[/]", bp.name, bp.description)
    console.print(table)


if __name__ == "__main__":
    cli()
