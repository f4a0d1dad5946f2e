"""Pytest configuration and shared fixtures."""

import logging
import shutil
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest

from tests.fakes import RecordingSink


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_project(temp_dir: Path) -> Callable[..., Path]:
    """Factory creating a project directory under ``temp_dir``.

    Usage:
        make_project("api", "pom.xml", executable=("mvnw",))

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Function taking a directory name, marker file names and an optional
        ``executable`` tuple of files to create with the executable bit set.
    """

    def _make(name: str, *files: str, executable: tuple[str, ...] = ()) -> Path:
        project_dir = temp_dir / name
        project_dir.mkdir(parents=True, exist_ok=True)
        for file_name in files:
            (project_dir / file_name).write_text("")
        for file_name in executable:
            script = project_dir / file_name
            script.write_text("#!/bin/sh\nexit 0\n")
            script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return project_dir

    return _make


@pytest.fixture
def sink() -> RecordingSink:
    """Output sink capturing build tool lines."""
    return RecordingSink()


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
