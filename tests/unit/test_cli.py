"""Tests for the analyzer CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from automapper_analyzer.config import CONFIG_ENV_VAR
from automapper_analyzer.scanner.cli import cli

REPO_ROOT = Path(__file__).parents[2]


def _write_source(tmp_path: Path, name: str, content: bytes) -> str:
    sources = tmp_path / "src"
    sources.mkdir(exist_ok=True)
    f = sources / name
    f.write_bytes(content)
    return str(f)


def _write_config(tmp_path: Path, data: dict) -> str:
    p = tmp_path / "analyzer.json"
    p.write_text(json.dumps(data))
    return str(p)


def test_scan_command_outputs_json(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "ok.cs", b"class A { }")
    result = CliRunner().invoke(cli, ["scan", source])
    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["findings"] == []
    assert report["files_analyzed"] == 1


def test_scan_detects_pattern(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "Profile.cs", b"class MyProfile : Profile { }")
    result = CliRunner().invoke(cli, ["scan", source])
    assert result.exit_code == 0
    report = json.loads(result.output)
    assert [f["rule_id"] for f in report["findings"]] == ["AR003"]
    assert report["findings"][0]["severity"] == "warning"


def test_scan_text_format(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "Profile.cs", b"class MyProfile : Profile { }")
    result = CliRunner().invoke(cli, ["scan", "--format", "text", source])
    assert result.exit_code == 0
    first, summary = result.output.strip().split("\n")
    assert first.startswith(f"{source}:1:6: warning AR003 Breaking change: Profile inheritance found")
    assert summary == "1 finding(s) in 1 file(s)"


def test_fail_on_findings(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "Profile.cs", b"class MyProfile : Profile { }")
    result = CliRunner().invoke(cli, ["scan", "--fail-on-findings", source])
    assert result.exit_code == 1


def test_fail_on_findings_clean(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "ok.cs", b"class A { }")
    result = CliRunner().invoke(cli, ["scan", "--fail-on-findings", source])
    assert result.exit_code == 0


def test_config_disables_rule(tmp_path: Path) -> None:
    source = _write_source(tmp_path, "Profile.cs", b"class MyProfile : Profile { }")
    config = _write_config(tmp_path, {"disabled_rules": ["AR003"]})
    result = CliRunner().invoke(cli, ["--config", config, "scan", source])
    assert result.exit_code == 0
    assert json.loads(result.output)["findings"] == []


def test_invalid_config_reports_error(tmp_path: Path) -> None:
    config = _write_config(tmp_path, {"disabled_rules": ["NOPE"]})
    result = CliRunner().invoke(cli, ["--config", config, "rules"])
    assert result.exit_code == 1
    assert "NOPE" in result.output


def test_rules_lists_enabled_rules() -> None:
    result = CliRunner().invoke(cli, ["rules"])
    assert result.exit_code == 0
    rules = json.loads(result.output)
    assert len(rules) == 11
    assert rules[0] == {
        "id": "AR001",
        "title": "Breaking Change: Static Mapper initialization found",
        "category": "BreakingChange",
        "severity": "warning",
    }


def test_rules_help_notes_extra_rule_id() -> None:
    result = CliRunner().invoke(cli, ["rules", "--help"])
    assert result.exit_code == 0
    assert "AR011" in result.output
    assert "AR003" in result.output


def test_default_config_excludes_build_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_source(tmp_path, "a.cs", b"class A { }")
    build = tmp_path / "src" / "bin" / "Debug"
    build.mkdir(parents=True)
    (build / "x.cs").write_bytes(b"class MyProfile : Profile { }")
    monkeypatch.chdir(REPO_ROOT)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    result = CliRunner().invoke(cli, ["scan", str(tmp_path / "src")])
    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["findings"] == []
    assert report["files_analyzed"] == 1


def test_missing_default_config_falls_back_to_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    build = tmp_path / "src" / "bin"
    build.mkdir(parents=True)
    (build / "x.cs").write_bytes(b"class MyProfile : Profile { }")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    result = CliRunner().invoke(cli, ["scan", "src"])
    assert result.exit_code == 0
    assert [f["rule_id"] for f in json.loads(result.output)["findings"]] == ["AR003"]


def test_explicit_missing_config_is_an_error(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "missing.json"), "rules"])
    assert result.exit_code == 1
    assert "not found" in result.output
