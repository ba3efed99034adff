"""
cvmatch Command Line Interface

Provides CLI commands for running the extraction pipeline, parsing
candidate attributes, benchmarking adapters and scoring matches.
"""

import json
from collections import defaultdict
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="cvmatch",
    help="CV extraction and candidate/job match scoring CLI",
    add_completion=False,
)
console = Console()


def _read_file(path: Path) -> bytes:
    if not path.is_file():
        console.print(f"[red]Error: File does not exist: {path}[/red]")
        raise typer.Exit(1)
    return path.read_bytes()


def _guess_mime(path: Path) -> Optional[str]:
    from cvmatch.utils.constants import MIME_TYPES_BY_EXTENSION

    return MIME_TYPES_BY_EXTENSION.get(path.suffix.lower())


def _parse_skills(value: Optional[str]) -> dict[str, bool]:
    """'policy,publicAffairs' -> {'policy': True, 'publicAffairs': True}"""
    from cvmatch.utils.constants import SkillCategory

    skills = {}
    for key in (value or "").split(","):
        key = key.strip()
        if not key:
            continue
        category = SkillCategory.from_key(key)
        if category is None:
            console.print(f"[red]Error: Unknown skill category: {key}[/red]")
            console.print(f"[dim]Categories: {', '.join(c.value for c in SkillCategory)}[/dim]")
            raise typer.Exit(1)
        skills[category.value] = True
    return skills


def _build_pipeline(ocr: bool, timeout_ms: Optional[int]):
    from cvmatch.nlp.extractors import ExtractionPipeline
    from cvmatch.utils.config import get_settings

    extraction = get_settings().extraction.model_copy(
        update={"enable_optical_recognition": ocr or get_settings().extraction.enable_optical_recognition}
    )
    if timeout_ms is not None:
        extraction = extraction.model_copy(update={"timeout_ms": timeout_ms})
    return ExtractionPipeline(settings=extraction)


@app.command()
def version():
    """Show application version."""
    from cvmatch import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show effective configuration."""
    from cvmatch.utils.config import get_settings

    settings = get_settings()

    table = Table(title="cvmatch Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Optical Recognition", str(settings.extraction.enable_optical_recognition))
    table.add_row("Extraction Escalation Threshold", f"{settings.extraction.minimum_text_yield} chars")
    table.add_row("Extraction Timeout", f"{settings.extraction.timeout_ms} ms" if settings.extraction.timeout_ms else "none")
    table.add_row("OCR Language / DPI", f"{settings.extraction.ocr_language} / {settings.extraction.ocr_dpi}")
    table.add_row("Attribute Confidence Cap Threshold", f"{settings.parsing.minimum_text_yield} chars")
    table.add_row("Max Upload Size", f"{settings.upload.max_file_size_bytes // (1024 * 1024)} MB")
    table.add_row("Allowed Extensions", ", ".join(settings.upload.allowed_extensions))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def extract(
    path: Path = typer.Argument(..., help="Path to a CV file"),
    mime: Optional[str] = typer.Option(None, "--mime", "-m", help="Declared MIME type"),
    ocr: bool = typer.Option(False, "--ocr", help="Enable optical recognition"),
    timeout_ms: Optional[int] = typer.Option(None, "--timeout-ms", help="Total extraction budget"),
    show_text: bool = typer.Option(False, "--text", help="Print the selected text"),
):
    """Run the extraction pipeline and show every adapter attempt."""
    from cvmatch.core.exceptions import ExtractionFailed

    content = _read_file(path)
    pipeline = _build_pipeline(ocr, timeout_ms)

    try:
        outcome = pipeline.run(content, mime or _guess_mime(path), path.name)
    except ExtractionFailed as e:
        console.print(f"[red]{e.user_message}[/red]")
        for error in e.errors:
            console.print(f"  [dim]- {error}[/dim]")
        raise typer.Exit(1)

    table = Table(title=f"Extraction attempts: {path.name}")
    table.add_column("Adapter", style="cyan")
    table.add_column("Chars", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Selected", justify="center")

    for attempt in outcome.attempts:
        table.add_row(
            attempt.adapter_name,
            str(attempt.char_count),
            f"{attempt.confidence:.2f}",
            f"{attempt.duration_ms} ms",
            "[green]✓[/green]" if attempt is outcome.best else "",
        )
    console.print(table)

    for error in outcome.errors:
        console.print(f"  [yellow]✗ {error}[/yellow]")
    if outcome.short_circuited:
        console.print("  [dim]Stopped early on a good-enough result[/dim]")
    if outcome.timed_out:
        console.print("  [yellow]Extraction budget exhausted; using best result so far[/yellow]")

    if show_text:
        console.print()
        console.print(outcome.text)


@app.command()
def parse(
    path: Path = typer.Argument(..., help="Path to a CV file"),
    mime: Optional[str] = typer.Option(None, "--mime", "-m", help="Declared MIME type"),
    ocr: bool = typer.Option(False, "--ocr", help="Enable optical recognition"),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON"),
):
    """Extract text and derive candidate attributes."""
    from cvmatch.core.exceptions import ExtractionFailed
    from cvmatch.nlp.attribute_extractor import get_attribute_extractor

    content = _read_file(path)
    pipeline = _build_pipeline(ocr, None)

    try:
        outcome = pipeline.run(content, mime or _guess_mime(path), path.name)
    except ExtractionFailed as e:
        console.print(f"[red]{e.user_message}[/red]")
        raise typer.Exit(1)

    attributes = get_attribute_extractor().extract(outcome.text)

    if as_json:
        console.print_json(json.dumps(attributes.to_record()))
        return

    table = Table(title=f"Candidate: {path.name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", attributes.full_name or "-")
    table.add_row("Email", attributes.email or "-")
    table.add_row("Phone", attributes.phone or "-")
    table.add_row("Current Title", attributes.current_title or "-")
    table.add_row("Current Employer", attributes.current_employer or "-")
    table.add_row("Skills", ", ".join(sorted(c.label for c in attributes.skills.active)) or "-")
    table.add_row("Experience Entries", str(len(attributes.experience)))
    table.add_row("Notes", attributes.notes or "-")
    table.add_row("Confidence", f"{attributes.confidence:.2f}")
    table.add_row("Extracted By", f"{outcome.best.adapter_name} ({outcome.best.confidence:.2f})")

    console.print(table)


@app.command()
def benchmark(
    directory: Path = typer.Argument(..., help="Directory of CV files"),
    ocr: bool = typer.Option(False, "--ocr", help="Enable optical recognition"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Search recursively"),
):
    """Run the pipeline over a directory and summarise adapter performance."""
    from cvmatch.core.exceptions import ExtractionFailed
    from cvmatch.utils.constants import SUPPORTED_RESUME_FORMATS

    if not directory.is_dir():
        console.print(f"[red]Error: Not a directory: {directory}[/red]")
        raise typer.Exit(1)

    pattern = "**/*" if recursive else "*"
    files = sorted(
        p for p in directory.glob(pattern)
        if p.is_file() and p.suffix.lower() in SUPPORTED_RESUME_FORMATS
    )
    if not files:
        console.print("[yellow]No CV files found.[/yellow]")
        raise typer.Exit(0)

    pipeline = _build_pipeline(ocr, None)
    stats: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))
    best_counts: dict[str, int] = defaultdict(int)
    failures = 0

    for path in files:
        try:
            outcome = pipeline.run(path.read_bytes(), _guess_mime(path), path.name)
        except ExtractionFailed as e:
            failures += 1
            console.print(f"  [red]✗[/red] {path.name}: {e.message}")
            continue

        best_counts[outcome.best.adapter_name] += 1
        for attempt in outcome.attempts:
            adapter_stats = stats[attempt.adapter_name]
            adapter_stats["runs"] += 1
            adapter_stats["confidence"] += attempt.confidence
            adapter_stats["duration_ms"] += attempt.duration_ms
            adapter_stats["chars"] += attempt.char_count
        for error in outcome.errors:
            stats[error.adapter_name]["errors"] += 1
        console.print(
            f"  [green]✓[/green] {path.name}: {outcome.best.adapter_name} "
            f"({outcome.best.char_count} chars, {outcome.best.confidence:.2f})"
        )

    table = Table(title="Adapter Performance")
    table.add_column("Adapter", style="cyan")
    table.add_column("Runs", justify="right")
    table.add_column("Errors", justify="right")
    table.add_column("Selected", justify="right")
    table.add_column("Avg Confidence", justify="right")
    table.add_column("Avg Duration", justify="right")
    table.add_column("Avg Chars", justify="right")

    for name, adapter_stats in sorted(stats.items()):
        runs = int(adapter_stats["runs"])
        table.add_row(
            name,
            str(runs),
            str(int(adapter_stats["errors"])),
            str(best_counts.get(name, 0)),
            f"{adapter_stats['confidence'] / runs:.2f}" if runs else "-",
            f"{adapter_stats['duration_ms'] / runs:.0f} ms" if runs else "-",
            f"{adapter_stats['chars'] / runs:.0f}" if runs else "-",
        )

    console.print(table)
    console.print(f"Processed [cyan]{len(files)}[/cyan] file(s), [red]{failures}[/red] failed")


@app.command()
def band(
    amount: float = typer.Argument(..., help="Salary amount"),
):
    """Show the salary band and default maximum for an amount."""
    from cvmatch.core.salary_banding import band_label, default_max

    label = band_label(amount, currency_symbol="£")
    if label is None:
        console.print("[yellow]No band for this amount.[/yellow]")
        raise typer.Exit(1)

    console.print(f"Band: [green]{label}[/green]")
    console.print(f"Default maximum: [green]£{int(default_max(amount)):,}[/green]")


@app.command()
def score(
    skills: Optional[str] = typer.Option(None, "--skills", "-s", help="Candidate skills, comma separated"),
    salary_min: Optional[int] = typer.Option(None, "--salary-min", help="Candidate minimum salary"),
    salary_max: Optional[int] = typer.Option(None, "--salary-max", help="Candidate maximum salary"),
    job_skills: Optional[str] = typer.Option(None, "--job-skills", "-j", help="Required skills, comma separated"),
    job_min: Optional[int] = typer.Option(None, "--job-min", help="Job minimum salary"),
    job_max: Optional[int] = typer.Option(None, "--job-max", help="Job maximum salary"),
):
    """Score one candidate against one job."""
    from cvmatch.core.matching import get_match_scorer
    from cvmatch.data.models import CandidateProfile, JobRequisition, SalaryRange

    candidate = CandidateProfile(
        skills=_parse_skills(skills),
        salary=SalaryRange(min=salary_min, max=salary_max),
    )
    job = JobRequisition(
        required_skills=_parse_skills(job_skills),
        salary=SalaryRange(min=job_min, max=job_max),
    )

    result = get_match_scorer().evaluate(candidate, job)

    table = Table(title="Match Score")
    table.add_column("Component", style="cyan")
    table.add_column("Score", justify="right", style="green")
    table.add_row("Skills (max 0.70)", f"{result.score.skill_score:.4f}")
    table.add_row("Salary (max 0.30)", f"{result.score.salary_score:.4f}")
    table.add_row("Total", f"{result.score.total_score:.4f}")
    table.add_row("Level", result.level.value)
    console.print(table)

    for reason in result.reasons:
        console.print(f"  • {reason}")


if __name__ == "__main__":
    app()
