#!/usr/bin/env python3
"""
Resume Import CLI

Extracts text from a resume file and parses it into the structured resume format.

Commands:
    parse   - Parse a resume file (.pdf, .docx, .txt, .md) and save it as YAML or JSON
    preview - Print the markdown preview of a saved resume

Examples:\n

    parse_resume.py parse cv.pdf                       # LLM parser, heuristic fallback

    parse_resume.py parse cv.pdf --offline             # Heuristic parser only

    parse_resume.py parse cv.docx -o outs/cv.json      # Choose output file

    parse_resume.py preview outs/results/cv.yaml       # Markdown preview
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.intake.llm_parser import import_resume
from vitae.contexts.intake.logger import setup_intake_logger
from vitae.contexts.intake.text_extraction import TextExtractionError, UnsupportedFileTypeError, extract_text
from vitae.contexts.templating.exceptions import InvalidResumeStructureError
from vitae.contexts.templating.resume_data_structure import ResumeDocument

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


app = typer.Typer(
    help="Import resume files into structured resume documents",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("parse")
def parse_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume file (.pdf, .docx, .txt, .md)", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file (.yaml or .json)"),
    ] = None,
    offline: Annotated[
        bool,
        typer.Option("--offline", help="Use the heuristic parser only (no LLM call)"),
    ] = False,
):
    """
    Parse a resume file into a structured document.

    Examples:\n

        $ parse_resume.py parse cv.pdf

        $ parse_resume.py parse cv.txt --offline -o cv.json
    """
    log_file = setup_intake_logger(LOGS_PATH)
    typer.secho(f"\nImporting: {resume_file}", fg=typer.colors.BLUE, bold=True)

    try:
        raw_text = extract_text(resume_file)
    except (UnsupportedFileTypeError, TextExtractionError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    result = import_resume(raw_text, filename=resume_file.name, use_llm=not offline)
    resume = result.resume

    output = output or RESULTS_PATH / f"{resume_file.stem}.yaml"
    resume.save(output)

    typer.secho(f"✓ Parsed with {result.source} parser", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Name:       {resume.personal_info.full_name or '(not found)'}")
    typer.echo(f"  Experience: {len(resume.experience)} entries")
    typer.echo(f"  Education:  {len(resume.education)} entries")
    typer.echo(f"  Skills:     {len(resume.skills)}")
    typer.echo(f"  Projects:   {len(resume.projects)}")
    if result.needs_review:
        typer.secho("  Few fields were found; review the output before using it", fg=typer.colors.YELLOW)
    typer.echo(f"\nSaved to: {output}")
    typer.echo(f"Log: {log_file}\n")


@app.command("preview")
def preview_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Saved resume (.yaml or .json)", exists=True, dir_okay=False),
    ],
):
    """Print the markdown preview of a saved resume."""
    try:
        resume = ResumeDocument.from_file(resume_file)
    except InvalidResumeStructureError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(resume.text)


if __name__ == "__main__":
    app()
