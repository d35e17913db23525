"""Workspace path conventions for the solution file and test directory."""

from __future__ import annotations

import os
from pathlib import Path

from icie.evscode.config import config

SOLUTION_STEM = config("icie.dir.solutionStem", "main", "Solution file stem")
CPP_EXTENSION = config("icie.dir.cppExtension", "cpp", "C++ source extension")
TESTS_DIRECTORY = config("icie.dir.testsDirectory", "tests", "Tests directory name")


def workspace_root() -> Path:
    """Root of the open workspace (``ICIE_ROOT`` overrides the current directory)."""
    return Path(os.environ.get("ICIE_ROOT", Path.cwd())).resolve()


def solution() -> Path:
    stem, ext = SOLUTION_STEM.get(), CPP_EXTENSION.get()
    path = workspace_root() / stem
    return path.with_suffix(f".{ext}") if ext else path


def tests() -> Path:
    return workspace_root() / TESTS_DIRECTORY.get()


__all__ = ["CPP_EXTENSION", "SOLUTION_STEM", "TESTS_DIRECTORY", "solution", "tests", "workspace_root"]
