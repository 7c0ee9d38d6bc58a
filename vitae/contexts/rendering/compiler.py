"""
LaTeX Compilation Module

Handles compilation of generated resume .tex files to PDF using pdflatex.
"""

import os
import re
import shutil
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from vitae.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    log_compilation_result,
    log_compilation_start,
    setup_rendering_logger,
)
from vitae.contexts.templating.latex_generator import generate_latex
from vitae.contexts.templating.resume_data_structure import ResumeDocument
from vitae.utils.pdf_processing import page_count
from vitae.utils.timestamp import today

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"
COMPILE_TIMEOUT_S = 120

# LaTeX intermediate files created during compilation
LATEX_ARTIFACTS = [".aux", ".log", ".out", ".toc"]


@dataclass
class CompilationResult:
    """
    Result of LaTeX compilation.

    Attributes:
        success: Whether compilation succeeded
        pdf_path: Path to generated PDF (None if failed)
        tex_path: Path to the .tex source that was compiled
        stdout: Standard output from pdflatex
        stderr: Standard error from pdflatex
        errors: List of parsed LaTeX errors
        warnings: List of parsed LaTeX warnings
        page_count: Number of pages in generated PDF (None if not available)
    """

    success: bool
    pdf_path: Optional[Path] = None
    tex_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def compiler_available(compiler: str = LATEX_COMPILER) -> bool:
    """True if the LaTeX compiler is on PATH."""
    return shutil.which(compiler) is not None


def _parse_latex_log(log_content: str) -> tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    error_pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        errors.append(match.group(1).strip())

    # -file-line-error format: "./resume.tex:42: Undefined control sequence."
    file_line_pattern = re.compile(r"^\S+\.tex:\d+: (.+)$", re.MULTILINE)
    for match in file_line_pattern.finditer(log_content):
        message = match.group(1).strip()
        if message not in errors:
            errors.append(message)

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]
    for pattern in warning_patterns:
        for match in re.finditer(pattern, log_content, re.MULTILINE):
            warnings.append(match.group(1).strip())

    return errors, warnings


def _remove_artifacts(tex_path: Path) -> None:
    """Remove intermediate LaTeX files next to tex_path."""
    base_path = tex_path.parent / tex_path.stem
    for ext in LATEX_ARTIFACTS:
        artifact_path = base_path.with_suffix(ext)
        if artifact_path.exists():
            artifact_path.unlink()


def compile_latex(
    tex_file: Path,
    compile_dir: Optional[Path] = None,
    num_passes: int = 2,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
) -> CompilationResult:
    """
    Compile a LaTeX file to PDF using pdflatex.

    Pure compilation function - assumes paths are resolved and directories exist.

    Args:
        tex_file: Path to the .tex file to compile
        compile_dir: Output directory (default: the .tex file's directory)
        num_passes: Number of pdflatex passes (default: 2 for cross-references)
        keep_artifacts: Keep intermediate files (default: from KEEP_LATEX_ARTIFACTS env)

    Returns:
        CompilationResult with success status and diagnostic information
    """
    tex_file = Path(tex_file).resolve()
    if not tex_file.exists():
        return CompilationResult(success=False, errors=[f"TeX file not found: {tex_file}"])
    if not compiler_available():
        return CompilationResult(
            success=False, tex_path=tex_file, errors=[f"LaTeX compiler not found: {LATEX_COMPILER}"]
        )

    original_tex_file = tex_file
    compile_dir = Path(compile_dir).resolve() if compile_dir else tex_file.parent
    if compile_dir != tex_file.parent:
        tex_file = compile_dir / tex_file.name
        shutil.copy2(original_tex_file, tex_file)

    # Missing log file -> compilation failed; existing PDF -> compilation succeeded
    stem = tex_file.stem
    for ext in [".pdf"] + LATEX_ARTIFACTS:
        old_file = compile_dir / f"{stem}{ext}"
        if old_file.exists():
            old_file.unlink()

    all_stdout = []
    all_stderr = []

    # First pass generates .aux, second pass resolves references
    for _ in range(num_passes):
        cmd = [
            LATEX_COMPILER,
            "-interaction=nonstopmode",
            "-halt-on-error",
            "-file-line-error",
            tex_file.name,
        ]
        try:
            result = subprocess.run(
                cmd,
                cwd=compile_dir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=COMPILE_TIMEOUT_S,
            )
        except subprocess.TimeoutExpired as e:
            all_stderr.append(f"{LATEX_COMPILER} timed out after {e.timeout}s")
            break

        all_stdout.append(result.stdout)
        all_stderr.append(result.stderr)

        # Non-zero return means pdflatex stopped on an error
        if result.returncode != 0:
            break

    errors = []
    warnings = []
    log_file = compile_dir / f"{stem}.log"
    if log_file.exists():
        # pdflatex writes log files in latin-1 encoding (font metadata contains non-UTF-8)
        errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))

    pdf_path = compile_dir / f"{stem}.pdf"
    success = pdf_path.exists() and not errors
    if not pdf_path.exists() and not errors:
        errors.append("PDF file was not generated")

    if not keep_artifacts:
        _remove_artifacts(tex_file)

    # Remove copied tex file (source remains untouched)
    if original_tex_file != tex_file and tex_file.exists():
        tex_file.unlink()

    return CompilationResult(
        success=success,
        pdf_path=pdf_path if pdf_path.exists() else None,
        tex_path=original_tex_file,
        stdout="\n".join(all_stdout),
        stderr="\n".join(all_stderr),
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_path) if pdf_path.exists() else None,
    )


def resume_file_stem(resume: ResumeDocument) -> str:
    """Filesystem-safe stem from the candidate's name, or the resume title."""
    source = resume.personal_info.full_name or resume.title
    stem = re.sub(r"[^A-Za-z0-9]+", "_", source).strip("_")
    return stem or "resume"


def render_resume_pdf(
    resume: ResumeDocument,
    output_dir: Optional[Path] = None,
    template_id: Optional[str] = None,
    num_passes: int = 2,
    verbose: bool = False,
    log_dir: Optional[Path] = None,
) -> CompilationResult:
    """
    Render a resume to PDF: generate LaTeX, write it, compile it.

    The .tex source is kept next to the PDF. Artifacts are kept on failure
    for debugging and removed on success.

    Args:
        resume: Document to render
        output_dir: Output directory (default: RESULTS_PATH/YYYY-MM-DD)
        template_id: Catalog id (default: the resume's template_id)
        num_passes: Number of pdflatex passes
        verbose: Log full compiler output even on success
        log_dir: Logs root; when given, a render log session is started under it

    Returns:
        CompilationResult (check .success)

    Raises:
        UnknownTemplateError: Template id not in the catalog
        TemplateRenderError: LaTeX generation failed
    """
    template_id = template_id or resume.template_id
    output_dir = Path(output_dir or RESULTS_PATH / today()).resolve()
    output_dir.mkdir(parents=True, exist_ok=True)

    if log_dir is not None:
        setup_rendering_logger(log_dir)

    stem = resume_file_stem(resume)
    tex_file = output_dir / f"{stem}.tex"
    tex_file.write_text(generate_latex(resume, template_id), encoding="utf-8")
    _log_debug(f"Wrote LaTeX source: {tex_file}")

    log_compilation_start(stem, template_id, tex_file, num_passes)
    start_time = time.time()
    result = compile_latex(tex_file, output_dir, num_passes=num_passes, keep_artifacts=True)
    log_compilation_result(stem, result, time.time() - start_time, verbose=verbose)

    if result.success:
        _remove_artifacts(tex_file)
        _log_info(f"PDF saved to: {result.pdf_path}")
    else:
        _log_debug("Keeping artifacts: compilation failed")

    return result
