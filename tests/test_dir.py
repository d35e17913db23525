"""Tests for icie.dir — workspace path conventions."""

from __future__ import annotations

import pytest

from icie import dir as icie_dir


@pytest.fixture()
def workspace(tmp_path, monkeypatch):
    monkeypatch.setenv("ICIE_ROOT", str(tmp_path))
    yield tmp_path.resolve()
    for handle in (icie_dir.SOLUTION_STEM, icie_dir.CPP_EXTENSION, icie_dir.TESTS_DIRECTORY):
        handle.bind(None)


def _bind(settings):
    for handle in (icie_dir.SOLUTION_STEM, icie_dir.CPP_EXTENSION, icie_dir.TESTS_DIRECTORY):
        handle.bind(settings)


class TestPaths:
    def test_defaults(self, workspace):
        _bind({})
        assert icie_dir.solution() == workspace / "main.cpp"
        assert icie_dir.tests() == workspace / "tests"

    def test_overrides(self, workspace):
        _bind({
            "icie.dir.solutionStem": "sol",
            "icie.dir.cppExtension": "cc",
            "icie.dir.testsDirectory": "cases",
        })
        assert icie_dir.solution() == workspace / "sol.cc"
        assert icie_dir.tests() == workspace / "cases"

    def test_stem_suffix_replaced_by_extension(self, workspace):
        _bind({"icie.dir.solutionStem": "main.old"})
        assert icie_dir.solution() == workspace / "main.cpp"

    def test_empty_extension(self, workspace):
        _bind({"icie.dir.cppExtension": ""})
        assert icie_dir.solution() == workspace / "main"

    def test_workspace_root_from_env(self, workspace):
        assert icie_dir.workspace_root() == workspace

    def test_workspace_root_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ICIE_ROOT", raising=False)
        monkeypatch.chdir(tmp_path)
        assert icie_dir.workspace_root() == tmp_path.resolve()
