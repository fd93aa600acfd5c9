"""Tests for the validate and slugs CLI commands."""

from __future__ import annotations

import argparse
import json
import os
import subprocess
import sys
from pathlib import Path

from conftest import REF, make_tool, write_primary, write_split
from tool_directory.interfaces.cli.main import build_parser, cmd_slugs, cmd_validate, main


def _validate_args(data_root: Path, **overrides) -> argparse.Namespace:
    values = dict(
        data_root=str(data_root),
        tools_file=None,
        split_dir=None,
        no_split=False,
        config=None,
        cross_source_duplicates=False,
        report=False,
        report_json=False,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


class TestCmdValidate:
    """Tests for cmd_validate function."""

    def test_clean_dataset_returns_zero(self, clean_data_root, capsys):
        result = cmd_validate(_validate_args(clean_data_root))

        assert result == 0
        out = capsys.readouterr().out
        assert "Total tools processed: 3 (+ 1 split)" in out
        assert "✅ All checks passed!" in out

    def test_issues_return_one(self, data_root, capsys):
        write_primary(data_root, {"Chat": [make_tool("FTP", "ftp://x.com")]})

        result = cmd_validate(_validate_args(data_root))

        assert result == 1
        out = capsys.readouterr().out
        assert "Missing HTTP/HTTPS (1)" in out
        assert "Summary: 2 issue(s) found" in out

    def test_fatal_load_error(self, data_root, capsys):
        (data_root / "tools.json").write_text('{"categories": []}', encoding="utf-8")

        result = cmd_validate(_validate_args(data_root))

        assert result == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error reading tools.json" in captured.err

    def test_missing_primary_file(self, tmp_path):
        assert cmd_validate(_validate_args(tmp_path / "nowhere")) == 1

    def test_split_structure_anomaly_fails_run(self, clean_data_root, capsys):
        write_split(clean_data_root, "broken.json", {"not": "array"})

        result = cmd_validate(_validate_args(clean_data_root))

        assert result == 1
        assert 'Category: "broken" - Expected Array, got object' in capsys.readouterr().out

    def test_no_split_flag(self, clean_data_root, capsys):
        write_split(clean_data_root, "broken.json", {"not": "array"})

        assert cmd_validate(_validate_args(clean_data_root, no_split=True)) == 0
        assert "(+ " not in capsys.readouterr().out

    def test_cross_source_duplicates_flag(self, clean_data_root):
        write_split(clean_data_root, "chat.json", [make_tool("ChatGPT", f"https://chat.openai.com/{REF}")])

        assert cmd_validate(_validate_args(clean_data_root)) == 0
        assert cmd_validate(_validate_args(clean_data_root, cross_source_duplicates=True)) == 1

    def test_config_file(self, data_root, tmp_path):
        write_primary(data_root, {"Chat": [make_tool("T", "https://t.com/?via=example")]})
        config_file = tmp_path / "validation.yaml"
        config_file.write_text("required_ref: '?via=example'\n", encoding="utf-8")

        assert cmd_validate(_validate_args(data_root)) == 1
        assert cmd_validate(_validate_args(data_root, config=str(config_file))) == 0

    def test_bad_config_file(self, clean_data_root, tmp_path):
        config_file = tmp_path / "validation.yaml"
        config_file.write_text("unknown: 1\n", encoding="utf-8")
        assert cmd_validate(_validate_args(clean_data_root, config=str(config_file))) == 1

    def test_wrong_config_value_type(self, clean_data_root, tmp_path, capsys):
        config_file = tmp_path / "validation.yaml"
        config_file.write_text("accepted_schemes: 5\n", encoding="utf-8")

        assert cmd_validate(_validate_args(clean_data_root, config=str(config_file))) == 1
        assert capsys.readouterr().out == ""

    def test_report_files_default_location(self, data_root):
        write_primary(data_root, {"Chat": [make_tool("NoLink")]})

        result = cmd_validate(_validate_args(data_root, report=True, report_json=True))

        assert result == 1
        md = (data_root / "tools_validation.md").read_text(encoding="utf-8")
        assert "# Validation Report: tools.json" in md
        assert "missing_url (1)" in md
        data = json.loads((data_root / "tools_validation.json").read_text(encoding="utf-8"))
        assert data["summary"]["issues"] == 1

    def test_report_files_custom_directory(self, clean_data_root, tmp_path):
        reports = tmp_path / "reports"

        result = cmd_validate(_validate_args(clean_data_root, report=str(reports), report_json=str(reports)))

        assert result == 0
        assert (reports / "tools_validation.md").exists()
        assert json.loads((reports / "tools_validation.json").read_text())["summary"]["passed"] is True


class TestCmdSlugs:
    """Tests for cmd_slugs function."""

    def test_generates_and_writes(self, data_root, capsys):
        path = write_primary(data_root, {"Chat": [make_tool("Zed"), make_tool("Alpha", slug="alpha")]})

        result = cmd_slugs(argparse.Namespace(data_root=str(data_root), tools_file=None, dry_run=False))

        assert result == 0
        out = capsys.readouterr().out
        assert "Generated slug for Zed: zed" in out
        assert "Sorted tools in category: Chat" in out
        assert "✅ Updated tools.json (slugs & sorting)" in out
        titles = [t["title"] for t in json.loads(path.read_text())["tools"][0]["content"]]
        assert titles == ["Alpha", "Zed"]

    def test_missing_file(self, tmp_path):
        args = argparse.Namespace(data_root=str(tmp_path), tools_file=None, dry_run=False)
        assert cmd_slugs(args) == 1


def test_no_subcommand_runs_validate(tmp_path, monkeypatch, capsys):
    """A bare invocation validates ./src/data relative to the working directory."""
    write_primary(tmp_path / "src" / "data", {"Chat": [make_tool("T", f"https://t.com/{REF}")]})
    monkeypatch.chdir(tmp_path)

    assert main([]) == 0
    assert "Total tools processed: 1\n" in capsys.readouterr().out


def test_no_subcommand_missing_dataset(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main([]) == 1
    assert capsys.readouterr().out == ""


def test_parser_defaults_to_validate():
    args = build_parser().parse_args([])
    assert args.func is cmd_validate
    assert args.command is None


def test_main_validate_subcommand(clean_data_root):
    assert main(["validate", "--data-root", str(clean_data_root)]) == 0


def test_validate_options_without_subcommand(clean_data_root, capsys):
    write_split(clean_data_root, "broken.json", {"not": "array"})

    assert main(["--data-root", str(clean_data_root)]) == 1
    capsys.readouterr()
    assert main(["--data-root", str(clean_data_root), "--no-split"]) == 0
    assert "(+ " not in capsys.readouterr().out


def test_cli_module_entrypoint(clean_data_root):
    """Run the CLI as a module, the way CI invokes it."""
    src = Path(__file__).resolve().parents[2] / "src"
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [str(src), os.environ.get("PYTHONPATH")]))}
    result = subprocess.run(
        [sys.executable, "-m", "tool_directory.interfaces.cli.main", "validate", "--data-root", str(clean_data_root)],
        capture_output=True,
        text=True,
        encoding="utf-8",
        check=False,
        env=env,
    )
    assert result.returncode == 0
    assert "✅ All checks passed!" in result.stdout
    assert result.stderr == ""
