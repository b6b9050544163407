"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jobfit_core.config.settings import Settings
from jobfit_core.models.candidate import CandidateProfile
from jobfit_core.models.job import JobPosting, JobSearchParams, NormalizedJob
from jobfit_matching.matcher import AdvancedJobMatcher
from jobfit_search.observability import configure_logging
from jobfit_search.service import JobSearchService

app = typer.Typer(
    name="jobfit",
    help="Multi-provider job search and job-to-candidate fit scoring",
)
console = Console()
logger = structlog.get_logger()

_STATUS_STYLES = {
    "healthy": "[green]{}[/green]",
    "degraded": "[yellow]{}[/yellow]",
    "unhealthy": "[red]{}[/red]",
}


def _load_settings(verbose: bool) -> Settings:
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    return settings


@app.command()
def search(
    query: str = typer.Argument("", help="Free-text search query"),
    location: str = typer.Option("", "--location", "-l", help="Location filter"),
    remote: bool = typer.Option(False, "--remote", help="Remote jobs only"),
    limit: int = typer.Option(20, "--limit", "-n", min=0, help="Maximum results"),
    experience_level: str | None = typer.Option(
        None, "--experience-level", help="entry, mid, senior or executive"
    ),
    salary_min: int | None = typer.Option(None, "--salary-min", help="Minimum salary"),
    salary_max: int | None = typer.Option(None, "--salary-max", help="Maximum salary"),
    job_type: str | None = typer.Option(
        None, "--job-type", help="full-time, part-time, contract or internship"
    ),
    date_posted: str | None = typer.Option(None, "--date-posted", help="today, week or month"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Search all configured job boards and print ranked results."""
    settings = _load_settings(verbose)
    try:
        params = JobSearchParams(
            query=query,
            location=location,
            remote=remote,
            limit=limit,
            experience_level=experience_level,
            salary_min=salary_min,
            salary_max=salary_max,
            job_type=job_type,
            date_posted=date_posted,
        )
    except ValidationError as exc:
        console.print(f"[red]Error:[/red] invalid search parameters\n{escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    service = JobSearchService(settings)
    enabled = [a.name for a in service.enabled_providers()]
    if not as_json:
        console.print(f"[dim]Providers: {', '.join(enabled) or 'none'}[/dim]")

    jobs = asyncio.run(service.search_jobs(params))

    if as_json:
        typer.echo(json.dumps([job.model_dump(mode="json") for job in jobs], indent=2))
        return
    if not jobs:
        console.print("[yellow]No jobs found[/yellow]")
        return
    console.print(_jobs_table(jobs))


@app.command()
def providers() -> None:
    """Show each provider's enabled flag and health status."""
    settings = Settings()
    configure_logging(settings)
    health = JobSearchService(settings).get_provider_health()

    table = Table(title="Providers")
    table.add_column("Provider")
    table.add_column("Priority", justify="right")
    table.add_column("Enabled")
    table.add_column("Status")
    for entry in sorted(health.values(), key=lambda h: -h.priority):
        table.add_row(
            entry.display_name,
            str(entry.priority),
            "yes" if entry.enabled else "[dim]no credential[/dim]",
            _STATUS_STYLES[entry.status].format(entry.status),
        )
    console.print(table)


@app.command()
def match(
    job_file: Path = typer.Argument(..., help="JSON file describing the job", exists=True),
    profile_file: Path = typer.Argument(
        ..., help="JSON file describing the candidate", exists=True
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Score how well a job fits a candidate and print the analysis as JSON."""
    _load_settings(verbose)
    try:
        job = JobPosting.model_validate(_read_json(job_file))
        profile = CandidateProfile.model_validate(_read_json(profile_file))
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    result = AdvancedJobMatcher().generate_advanced_match(job, profile)
    typer.echo(result.model_dump_json(indent=2))


@app.command()
def version() -> None:
    """Show version."""
    console.print("jobfit v0.1.0")


def _read_json(path: Path) -> Any:
    """Load a JSON document, raising ValueError with the path on bad input."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"invalid JSON in {path}: {exc}"
        raise ValueError(msg) from exc


def _jobs_table(jobs: list[NormalizedJob]) -> Table:
    table = Table(title=f"{len(jobs)} jobs")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Company")
    table.add_column("Location")
    table.add_column("Salary")
    table.add_column("Source")
    for index, job in enumerate(jobs, start=1):
        location = job.location
        if job.remote and "remote" not in location.lower():
            location += " (remote)"
        table.add_row(
            str(index),
            job.title,
            job.company,
            location,
            job.salary_text or "",
            job.source,
        )
    return table


if __name__ == "__main__":
    app()
