"""Tests for icie.cli — argument parsing and command handlers."""

from __future__ import annotations

import argparse
import json

import pytest

from icie.cli import create_parser, main
from icie.commands.config_cmd import cmd_config
from icie.commands.manifest_cmd import cmd_manifest
from icie.commands.view_cmd import cmd_view
from icie.extension import activate


@pytest.fixture()
def parser():
    return create_parser()


@pytest.fixture()
def settings_path(tmp_path):
    return tmp_path / ".icie" / "settings.json"


def _args(settings_path, **kwargs):
    return argparse.Namespace(runtime=activate(settings_path), **kwargs)


# ===========================================================================
# create_parser
# ===========================================================================


class TestCreateParser:
    def test_config_set(self, parser):
        args = parser.parse_args(["config", "set", "icie.dir.solutionStem", "sol"])
        assert args.command == "config"
        assert args.config_action == "set"
        assert args.config_key == "icie.dir.solutionStem"
        assert args.config_value == "sol"

    def test_config_defaults_to_show(self, parser):
        args = parser.parse_args(["config"])
        assert args.config_action is None

    def test_manifest_output(self, parser):
        args = parser.parse_args(["manifest", "--output", "package.json"])
        assert args.output == "package.json"
        assert args.title is None

    def test_global_settings_and_verbose(self, parser):
        args = parser.parse_args(["--settings", "s.json", "-v", "paths"])
        assert args.settings == "s.json"
        assert args.verbose is True

    def test_command_required(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args([])

    def test_no_abbreviations(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(["manifest", "--out", "x"])


# ===========================================================================
# config
# ===========================================================================


class TestConfigCommand:
    def test_show_lists_options_in_order(self, settings_path, capsys):
        cmd_config(_args(settings_path, config_action="show"))
        out = capsys.readouterr().out
        assert out.index("icie.dir.solutionStem") < out.index("icie.test.view.maxTestLines")
        assert "Solution file stem" in out
        assert "If any test failed" in out

    def test_set_persists(self, settings_path, capsys):
        cmd_config(_args(settings_path, config_action="set",
                         config_key="icie.test.view.hideAc", config_value="always"))
        assert json.loads(settings_path.read_text()) == {"icie.test.view.hideAc": "Always"}
        assert "Set icie.test.view.hideAc = Always" in capsys.readouterr().out

    def test_set_unknown_key_exits(self, settings_path, capsys):
        with pytest.raises(SystemExit) as exc:
            cmd_config(_args(settings_path, config_action="set",
                             config_key="icie.nope", config_value="1"))
        assert exc.value.code == 1
        assert "Unknown config key: icie.nope" in capsys.readouterr().err
        assert not settings_path.exists()

    def test_set_bad_value_exits(self, settings_path):
        with pytest.raises(SystemExit):
            cmd_config(_args(settings_path, config_action="set",
                             config_key="icie.test.view.maxTestLines", config_value="lots"))

    def test_unset(self, settings_path, capsys):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({"icie.dir.solutionStem": "sol", "x.other": 1}))
        cmd_config(_args(settings_path, config_action="unset",
                         config_key="icie.dir.solutionStem"))
        assert json.loads(settings_path.read_text()) == {"x.other": 1}
        assert "Reset icie.dir.solutionStem to default (main)" in capsys.readouterr().out


# ===========================================================================
# manifest
# ===========================================================================


class TestManifestCommand:
    def test_prints_schema(self, settings_path, capsys):
        cmd_manifest(_args(settings_path, output=None, title=None))
        schema = json.loads(capsys.readouterr().out)
        assert schema["title"] == "ICIE"
        assert next(iter(schema["properties"])) == "icie.dir.solutionStem"

    def test_writes_manifest(self, settings_path, tmp_path):
        target = tmp_path / "package.json"
        cmd_manifest(_args(settings_path, output=str(target), title="Custom"))
        data = json.loads(target.read_text())
        assert data["contributes"]["configuration"]["title"] == "Custom"


# ===========================================================================
# view / paths / main
# ===========================================================================


class TestViewCommand:
    def test_writes_html(self, settings_path, tmp_path, capsys):
        (tmp_path / "1.in").write_text("1 2")
        (tmp_path / "1.out").write_text("3")
        results = tmp_path / "results.json"
        results.write_text(json.dumps([
            {"in_path": str(tmp_path / "1.in"), "out_path": str(tmp_path / "1.out"),
             "out": "4", "desired": "3"},
        ]))
        output = tmp_path / "view.html"
        cmd_view(_args(settings_path, results=str(results), output=str(output)))
        assert "test-row-failed" in output.read_text()
        assert "1 failing" in capsys.readouterr().out

    def test_missing_results_exits(self, settings_path, tmp_path, capsys):
        with pytest.raises(SystemExit):
            cmd_view(_args(settings_path, results=str(tmp_path / "none.json"), output=None))
        assert "could not render" in capsys.readouterr().err


class TestMain:
    def test_paths(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("ICIE_ROOT", str(tmp_path))
        main(["--settings", str(tmp_path / "settings.json"), "paths"])
        out = capsys.readouterr().out
        assert str(tmp_path.resolve() / "main.cpp") in out
        assert str(tmp_path.resolve() / "tests") in out
