from __future__ import annotations

import json
import sys
import types
from pathlib import Path

import pytest

from sfdiff import cli
from sfdiff.backends.numpy_backend import NumpyBackend


def _config(tmp_path: Path, **data) -> Path:
    path = tmp_path / "harness.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestParser:
    def test_run_arguments(self) -> None:
        args = cli.create_parser().parse_args(
            ["run", "--samples", "5", "--op", "addition", "sine", "--seed", "1", "2", "--batch"]
        )
        assert args.command == "run"
        assert args.samples == 5
        assert args.operations == ["addition", "sine"]
        assert args.seed == [1, 2]
        assert args.batch is True

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args([])


class TestRun:
    def test_successful_run(self, capsys) -> None:
        code = cli.main(["run", "--samples", "2", "--op", "addition", "floor"])
        assert code == cli.EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Result:      PASS" in out
        assert "addition" in out

    def test_json_output(self, capsys) -> None:
        code = cli.main(["run", "-n", "1", "--op", "round", "--json"])
        assert code == cli.EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["ok"] is True
        assert data["operations"][0]["operation"] == "round"

    def test_quiet_prints_nothing(self, capsys) -> None:
        assert cli.main(["run", "-n", "1", "--op", "round", "-q"]) == cli.EXIT_SUCCESS
        assert capsys.readouterr().out == ""

    def test_report_file(self, tmp_path: Path, capsys) -> None:
        report = tmp_path / "out" / "report.json"
        code = cli.main(["run", "-n", "1", "--op", "ceiling", "-q", "-o", str(report)])
        assert code == cli.EXIT_SUCCESS
        data = json.loads(report.read_text(encoding="utf-8"))
        assert data["meta"]["config"]["operations"] == ["ceiling"]
        assert data["meta"]["harness"]["name"] == "sfdiff"

    def test_config_file(self, tmp_path: Path, capsys) -> None:
        path = _config(tmp_path, sample_count=1, operations=["modulus"])
        code = cli.main(["run", "--config", str(path), "--json"])
        assert code == cli.EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert [op["operation"] for op in data["operations"]] == ["modulus"]

    def test_missing_config_file(self, tmp_path: Path, capsys) -> None:
        code = cli.main(["run", "--config", str(tmp_path / "missing.json")])
        assert code == cli.EXIT_CONFIG_NOT_FOUND
        assert "not found" in capsys.readouterr().err

    def test_unknown_operation(self, capsys) -> None:
        assert cli.main(["run", "--op", "hypot"]) == cli.EXIT_VALIDATION_FAILED

    def test_unavailable_backend(self, capsys) -> None:
        code = cli.main(["run", "-n", "1", "--backend", "nonexistent_sf:Backend"])
        assert code == cli.EXIT_BACKEND_UNAVAILABLE
        assert "backend unavailable" in capsys.readouterr().err

    def test_comparison_failure(self, monkeypatch, capsys) -> None:
        _install_skewed_backend(monkeypatch)
        code = cli.main(
            ["run", "-n", "3", "--op", "addition", "--backend", _SKEWED]
        )
        assert code == cli.EXIT_COMPARISON_FAILED
        assert "Comparison failed" in capsys.readouterr().err

    def test_batch_failure_reports_all(self, monkeypatch, capsys) -> None:
        _install_skewed_backend(monkeypatch)
        code = cli.main(
            ["run", "-n", "3", "--op", "addition", "--batch", "--json", "--backend", _SKEWED]
        )
        assert code == cli.EXIT_COMPARISON_FAILED
        data = json.loads(capsys.readouterr().out)
        assert data["ok"] is False
        assert data["mismatch_count"] > 1


_SKEWED = "skewed_backend_for_cli:SkewedAddition"


def _install_skewed_backend(monkeypatch) -> None:
    class SkewedAddition(NumpyBackend):
        name = "skewed"

        def add(self, a, b):
            return super().add(a, b) * (1.0 + 1e-6)

    module = types.ModuleType("skewed_backend_for_cli")
    module.SkewedAddition = SkewedAddition
    monkeypatch.setitem(sys.modules, module.__name__, module)


class TestList:
    def test_plain(self, capsys) -> None:
        assert cli.main(["list"]) == cli.EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "exponential" in out
        assert "periodic" in out

    def test_json(self, capsys) -> None:
        assert cli.main(["list", "--json"]) == cli.EXIT_SUCCESS
        rows = json.loads(capsys.readouterr().out)
        assert len(rows) == 20
        exp = next(r for r in rows if r["operation"] == "exponential")
        assert exp["multiplier"] == 100.0


class TestValidate:
    def test_valid(self, tmp_path: Path, capsys) -> None:
        path = _config(tmp_path, sample_count=10)
        assert cli.main(["validate", str(path)]) == cli.EXIT_SUCCESS
        assert "Config valid" in capsys.readouterr().out

    def test_invalid(self, tmp_path: Path, capsys) -> None:
        path = _config(tmp_path, sample_count=-3)
        assert cli.main(["validate", str(path)]) == cli.EXIT_VALIDATION_FAILED

    def test_unknown_operation(self, tmp_path: Path, capsys) -> None:
        path = _config(tmp_path, operations=["hypot"])
        assert cli.main(["validate", str(path)]) == cli.EXIT_VALIDATION_FAILED

    def test_broken_json(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        assert cli.main(["validate", str(path)]) == cli.EXIT_VALIDATION_FAILED

    def test_missing(self, tmp_path: Path, capsys) -> None:
        code = cli.main(["validate", str(tmp_path / "missing.json")])
        assert code == cli.EXIT_CONFIG_NOT_FOUND
