"""
Intake context logger.

Messages from parsing and import carry an [intake] prefix so they stand out
in sessions that also log rendering or LLM calls.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(logs_root: Path) -> Path:
    """Start an intake log session under logs_root. Returns the log file path."""
    return _setup_logger(
        context_name="intake",
        logs_root=logs_root,
        extra_provenance={"LLM provider": os.getenv("LLM_PROVIDER", "anthropic")},
    )


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_parse_result(resume, source: str) -> None:
    """
    Log a one-line summary of a parsed resume.

    Args:
        resume: ResumeDocument produced by a parser
        source: "heuristic" or "llm"
    """
    info = resume.personal_info
    name = info.full_name or "(no name)"
    _log_info(
        f"Parsed '{resume.title}' via {source}: {name}, "
        f"{len(resume.experience)} experience, {len(resume.education)} education, "
        f"{len(resume.skills)} skills, {len(resume.projects)} projects"
    )
    if resume.is_sparse:
        _log_warning("Parsed resume is sparse; manual review recommended")


def log_fallback(reason: Exception) -> None:
    """Log that the LLM parser failed and the heuristic parser is taking over."""
    _log_warning(f"LLM parsing failed ({type(reason).__name__}: {reason}); using heuristic parser")
