#!/usr/bin/env python3
"""
Job Match Analysis CLI

Compares a saved resume against a job description.

Examples:\n

    analyze_job.py cv.yaml job.txt                 # LLM analysis, offline fallback

    analyze_job.py cv.yaml job.txt --offline       # Keyword scorer only

    analyze_job.py cv.yaml job.txt --json          # Machine-readable output
"""

import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.targeting.job_analysis import analyze_job_match
from vitae.contexts.templating.exceptions import InvalidResumeStructureError
from vitae.contexts.templating.resume_data_structure import ResumeDocument

load_dotenv()


def _print_list(label: str, items: list) -> None:
    if not items:
        return
    typer.secho(f"\n{label}:", bold=True)
    for item in items:
        typer.echo(f"  - {item}")


def main(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Saved resume (.yaml or .json)", exists=True, dir_okay=False),
    ],
    job_file: Annotated[
        Path,
        typer.Argument(help="Job description text file", exists=True, dir_okay=False),
    ],
    offline: Annotated[
        bool,
        typer.Option("--offline", help="Use the keyword scorer only (no LLM call)"),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the analysis as JSON"),
    ] = False,
):
    """Score how well a resume matches a job description."""
    try:
        resume = ResumeDocument.from_file(resume_file)
    except InvalidResumeStructureError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    job_description = job_file.read_text(encoding="utf-8")
    result = analyze_job_match(job_description, resume, use_llm=not offline)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    score = result.match_score
    color = typer.colors.GREEN if score >= 70 else typer.colors.YELLOW if score >= 40 else typer.colors.RED
    typer.secho(f"\nMatch score: {score}/100", fg=color, bold=True)
    _print_list("Matching skills", result.key_skills)
    _print_list("Missing skills", result.missing_skills)
    _print_list("Strengths", result.strengths)
    _print_list("Improvements", result.improvements)
    if result.optimized_summary:
        typer.secho("\nSuggested summary:", bold=True)
        typer.echo(f"  {result.optimized_summary}")
    typer.echo("")


if __name__ == "__main__":
    typer.run(main)
