"""
Rendering context logger.

Compilation messages carry a [render] prefix. Failed compilations also dump
the compiler's raw stdout and stderr to the session's log file, since the
parsed error list often hides the line that actually broke.
"""

import os
from pathlib import Path
from typing import Callable, List

from dotenv import load_dotenv
from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"

# How many parsed errors/warnings to show (quiet, verbose)
ERROR_LIMITS = (5, 10)
WARNING_LIMITS = (3, 10)


def setup_rendering_logger(logs_root: Path) -> Path:
    """Start a render log session under logs_root. Returns the log file path."""
    return _setup_logger(
        context_name="render",
        logs_root=logs_root,
        extra_provenance={"LaTeX compiler": os.getenv("LATEX_COMPILER", "pdflatex")},
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_capped(label: str, items: List[str], limit: int, log: Callable[[str], None]) -> None:
    for number, item in enumerate(items[:limit], 1):
        log(f"  {label} {number}: {item}")
    if len(items) > limit:
        log(f"  ... {len(items) - limit} more {label.lower()}s")


def _dump_stream(name: str, text: str) -> None:
    # raw=True keeps multi-line compiler output unformatted
    if text.strip():
        logger.opt(raw=True).debug(f"\n--- {name} ---\n{text}\n--- end {name} ---\n")


def log_compilation_start(resume_name: str, template_id: str, tex_file: Path, num_passes: int) -> None:
    _log_info(f"Compiling {resume_name} with template '{template_id}' ({num_passes} passes)")
    _log_debug(f"  Source: {tex_file}")


def log_compilation_result(resume_name: str, result, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log a CompilationResult.

    Success logs page count and warning total; failure logs the first parsed
    errors. With verbose, or on failure, raw compiler output goes to the log file.
    """
    if result.success:
        pages = "?" if result.page_count is None else result.page_count
        _log_success(
            f"{resume_name}: {pages} page(s), {len(result.warnings)} warnings ({elapsed_time:.2f}s)"
        )
    else:
        _log_error(f"{resume_name}: failed with {len(result.errors)} errors ({elapsed_time:.2f}s)")
        _log_capped("Error", result.errors, ERROR_LIMITS[verbose], _log_error)

    _log_capped("Warning", result.warnings, WARNING_LIMITS[verbose], _log_debug)

    if verbose or not result.success:
        _dump_stream("compiler stdout", result.stdout)
        _dump_stream("compiler stderr", result.stderr)
