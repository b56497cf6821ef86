import json
from pathlib import Path

import pytest

from guidelint import cli

SAMPLES = Path(__file__).resolve().parents[1] / "samples"


def test_cli_generates_json_report(tmp_path, capsys):
    output_path = tmp_path / "scan.json"

    exit_code = cli.main([str(SAMPLES / "violating"), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert "Scan Summary" in captured.out
    assert exit_code == 2  # hardcoded secret is HIGH
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["passed"] is False
    assert data["files_scanned"] == 1
    assert [(f["line"], f["rule"]) for f in data["findings"]] == [
        (5, "missing-doc-comment"),
        (7, "hardcoded-secret"),
        (11, "todo-marker"),
        (12, "missing-braces"),
        (18, "empty-catch"),
    ]
    assert data["summary"]["high"] == 1
    assert data["report"]["files_with_findings"] == 1


def test_cli_passes_on_clean_sources(tmp_path, capsys):
    output_path = tmp_path / "clean.json"

    exit_code = cli.main([str(SAMPLES / "clean"), "--out", str(output_path), "--workers", "2"])

    captured = capsys.readouterr()
    assert "Status    : PASS" in captured.out
    assert exit_code == 0
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["findings"] == []
    assert data["passed"] is True


def test_cli_reads_default_config_from_working_directory(tmp_path, monkeypatch, capsys):
    (tmp_path / ".guidelint.yaml").write_text("disabled_rules: [todo-marker]\n", encoding="utf-8")
    (tmp_path / "Notes.cs").write_text("// TODO: nothing to see\n", encoding="utf-8")
    (tmp_path / "readme.txt").write_text("if (x) ignored();\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    exit_code = cli.main([])

    captured = capsys.readouterr()
    report = json.loads(captured.out.split("JSON Report", 1)[1])
    assert exit_code == 0
    assert report["files_scanned"] == 1
    assert report["findings"] == []


def test_cli_reports_missing_explicit_file(tmp_path, capsys):
    output_path = tmp_path / "scan.json"

    exit_code = cli.main([str(tmp_path / "Missing.cs"), "--out", str(output_path)])

    capsys.readouterr()
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert exit_code == 1
    assert [f["rule"] for f in data["findings"]] == ["scan-error"]


def test_cli_configuration_error_exits(tmp_path):
    config = tmp_path / "bad.yaml"
    config.write_text("rules:\n  - id: broken\n    pattern: '('\n    message: x\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path), "--config", str(config)])

    assert "Configuration error" in str(excinfo.value.code)
