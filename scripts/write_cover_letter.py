#!/usr/bin/env python3
"""
Cover Letter CLI

Drafts a cover letter for a job from a saved resume.

Examples:\n

    write_cover_letter.py cv.yaml "Data Engineer" "Acme" -j job.txt     # LLM draft

    write_cover_letter.py cv.yaml "Data Engineer" "Acme" --offline      # Template draft

    write_cover_letter.py cv.yaml "Data Engineer" "Acme" -o letter.txt  # Save to file
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.drafting.cover_letter import write_cover_letter
from vitae.contexts.templating.exceptions import InvalidResumeStructureError
from vitae.contexts.templating.resume_data_structure import ResumeDocument

load_dotenv()


def main(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Saved resume (.yaml or .json)", exists=True, dir_okay=False),
    ],
    job_title: Annotated[str, typer.Argument(help="Position applied for")],
    company_name: Annotated[str, typer.Argument(help="Hiring company")],
    job_file: Annotated[
        Optional[Path],
        typer.Option("--job", "-j", help="Job description text file", exists=True, dir_okay=False),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the letter to this file"),
    ] = None,
    offline: Annotated[
        bool,
        typer.Option("--offline", help="Use the built-in template only (no LLM call)"),
    ] = False,
):
    """Draft a cover letter for a job."""
    try:
        resume = ResumeDocument.from_file(resume_file)
    except InvalidResumeStructureError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    job_description = job_file.read_text(encoding="utf-8") if job_file else ""
    draft = write_cover_letter(job_title, company_name, job_description, resume, use_llm=not offline)

    if output is None:
        typer.echo(draft.content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(draft.content, encoding="utf-8")
    typer.secho(f"✓ Wrote {output} ({draft.source})", fg=typer.colors.GREEN)


if __name__ == "__main__":
    typer.run(main)
