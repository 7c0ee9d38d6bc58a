#!/usr/bin/env python3
"""
Resume Rendering CLI

Generates LaTeX from a saved resume and compiles it to PDF.

Commands:
    render    - Render a resume to PDF
    latex     - Print or save the generated LaTeX without compiling
    templates - List available templates

Examples:\n

    render_resume.py render cv.yaml                      # Resume's own template

    render_resume.py render cv.yaml -t modern -v         # Override template, verbose

    render_resume.py latex cv.yaml -o cv.tex             # LaTeX only

    render_resume.py templates                           # List templates
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.rendering.compiler import compiler_available, render_resume_pdf
from vitae.contexts.templating.exceptions import (
    InvalidResumeStructureError,
    TemplateRenderError,
    UnknownTemplateError,
)
from vitae.contexts.templating.latex_generator import generate_latex
from vitae.contexts.templating.registries import TemplateCatalog
from vitae.contexts.templating.resume_data_structure import ResumeDocument

load_dotenv()
LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Render structured resumes to LaTeX and PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(resume_file: Path) -> ResumeDocument:
    try:
        return ResumeDocument.from_file(resume_file)
    except InvalidResumeStructureError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("render")
def render_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Saved resume (.yaml or .json)", exists=True, dir_okay=False),
    ],
    template_id: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template id (default: the resume's templateId)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Output directory (default: RESULTS_PATH/<date>)"),
    ] = None,
    num_passes: Annotated[
        int,
        typer.Option("--passes", "-p", help="Number of compiler passes", min=1, max=5),
    ] = 2,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed compilation output"),
    ] = False,
):
    """
    Render a resume to PDF.

    Examples:\n

        $ render_resume.py render cv.yaml

        $ render_resume.py render cv.yaml --template executive --passes 1
    """
    if not compiler_available():
        typer.secho(f"Error: {LATEX_COMPILER} not found on PATH\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    resume = _load(resume_file)
    typer.secho(f"\nRendering: {resume_file}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {template_id or resume.template_id}")
    typer.echo("")

    try:
        result = render_resume_pdf(
            resume,
            output_dir=output_dir,
            template_id=template_id,
            num_passes=num_passes,
            verbose=verbose,
            log_dir=LOGS_PATH,
        )
    except (UnknownTemplateError, TemplateRenderError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.success:
        typer.secho("✓ Compilation succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Pages: {result.page_count}")
        typer.echo(f"  {LATEX_COMPILER} warnings: {len(result.warnings)}")
        typer.echo(f"\nPDF: {result.pdf_path}\n")
    else:
        typer.secho("✗ Compilation failed", fg=typer.colors.RED, bold=True, err=True)
        for error in result.errors[:5]:
            typer.echo(f"  - {error}", err=True)
        typer.echo(f"\nLaTeX source kept at: {result.tex_path}\n", err=True)
        raise typer.Exit(code=1)


@app.command("latex")
def latex_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Saved resume (.yaml or .json)", exists=True, dir_okay=False),
    ],
    template_id: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template id (default: the resume's templateId)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write to this .tex file instead of stdout"),
    ] = None,
):
    """Generate LaTeX source without compiling."""
    resume = _load(resume_file)
    try:
        latex = generate_latex(resume, template_id)
    except (UnknownTemplateError, TemplateRenderError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(latex)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(latex, encoding="utf-8")
    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


@app.command("templates")
def templates_command():
    """List available templates."""
    catalog = TemplateCatalog()
    for template_id in catalog.ids():
        entry = catalog.get(template_id)
        marker = " (default)" if template_id == catalog.default_id else ""
        typer.echo(f"  {template_id}{marker}: {entry.get('description', '')}")


if __name__ == "__main__":
    app()
