"""
Log sessions for vitae commands.

Every command that writes logs gets its own session directory under the logs
root, named <context>_<timestamp>. A session has a DEBUG file sink, a
console sink at VITAE_LOG_LEVEL, and opens with a provenance block so a log
file can be traced back to the command and configuration that produced it.

Contexts wrap this in contexts/{context}/logger.py with their own prefix.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from vitae import __version__
from vitae.utils.timestamp import now

load_dotenv()

CONSOLE_LOG_LEVEL = os.getenv("VITAE_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> <level>{message}</level>"

LEVEL_COLORS = {
    "SUCCESS": "<green>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}

RULE = "-" * 72


def session_dir(context_name: str, logs_root: Path) -> Path:
    """Fresh session directory path, e.g. outs/logs/render_20251114_123456."""
    return Path(logs_root) / f"{context_name}_{now()}"


def provenance(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Key/value facts identifying the current run."""
    facts = {
        "vitae": __version__,
        "Command": " ".join([Path(sys.argv[0]).name] + sys.argv[1:]),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
    }
    facts.update(extra or {})
    return facts


def setup_logger(
    context_name: str,
    logs_root: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    console_level: str = CONSOLE_LOG_LEVEL,
) -> Path:
    """
    Start a log session for one context.

    Replaces any existing loguru sinks, so only the newest session receives
    output.

    Args:
        context_name: Context identifier ("intake", "render")
        logs_root: Directory that holds session directories
        extra_provenance: Context facts added to the provenance block
        console_level: Minimum level echoed to stdout

    Returns:
        Path to the session's log file
    """
    log_dir = session_dir(context_name, logs_root)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    width = max(len(key) for key in provenance(extra_provenance))
    logger.info(RULE)
    for key, value in provenance(extra_provenance).items():
        logger.info(f"{key.ljust(width)}  {value}")
    logger.info(RULE)

    return log_file
