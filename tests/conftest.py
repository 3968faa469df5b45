"""Shared pytest fixtures for the SpringWell test suite."""

import logging
from pathlib import Path

import pytest

from springwell.config import get_default_config
from springwell.output import RecordingOutput


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def config():
    cfg = get_default_config()
    cfg.project.package = "com.example.blog"
    return cfg


@pytest.fixture
def spring_project(tmp_path: Path) -> Path:
    """A minimal Maven project directory."""
    (tmp_path / "pom.xml").write_text("<project/>", encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def reset_springwell_logger():
    """Undo handlers installed by setup_logging so caplog keeps working."""
    yield
    logger = logging.getLogger("springwell")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
