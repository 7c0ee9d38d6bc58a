"""Fixtures for driving the scripts/ CLIs in-process."""

import importlib.util
import sys
from pathlib import Path

import pytest
import typer
from loguru import logger

SCRIPTS_PATH = Path(__file__).resolve().parents[2] / "scripts"


@pytest.fixture
def load_script():
    """Factory: load_script("parse_resume") imports scripts/parse_resume.py (not a package)."""

    def factory(name: str):
        spec = importlib.util.spec_from_file_location(f"{name}_cli", SCRIPTS_PATH / f"{name}.py")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return factory


@pytest.fixture
def script_app(load_script):
    """Factory: wrap a typer.run()-style script's main so CliRunner can invoke it."""

    def factory(name: str) -> typer.Typer:
        app = typer.Typer(add_completion=False)
        app.command()(load_script(name).main)
        return app

    return factory


@pytest.fixture(autouse=True)
def reset_logger():
    """Scripts point loguru at their own sinks; restore the default afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def saved_resume(tmp_path, sample_resume) -> Path:
    return sample_resume.save(tmp_path / "jane.yaml")
