"""Tests for the score command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from haccpctl.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestScoreCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--tenant", "kitchen-1", "score"])
        assert result.exit_code == 0
        assert "100/100" in result.stdout
        assert "Inspection-ready" in result.stdout

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--tenant", "kitchen-1", "score"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "evaluate"
        assert data["data"]["score"] == 100
        assert data["data"]["classification"] == "ok"

    def test_quiet_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "--tenant", "kitchen-1", "score"])
        assert result.stdout.strip() == "100 ok"

    def test_as_of(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "--tenant", "kitchen-1", "score", "--as-of", "2026-10-01"]
        )
        window = json.loads(result.stdout)["data"]["window"]
        assert window == {"from": "2026-10-01", "to": "2026-10-01"}

    def test_missing_evidence_degrades_with_warnings(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "--tenant", "new-site", "score"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "0 setup"
        assert "WARNING: signal_unavailable" in result.stderr

    def test_json_keeps_warnings_in_payload(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--tenant", "new-site", "score"])
        data = json.loads(result.stdout)
        assert len(data["warnings"]) == 4
        assert "WARNING:" not in result.stderr

    def test_tenant_from_config(self, cli_runner: CliRunner, workspace_root) -> None:
        (workspace_root / "haccpctl.toml").write_text('[workspace]\ntenant = "kitchen-1"\n')
        result = cli_runner.invoke(cli, ["-q", "score"])
        assert result.stdout.strip() == "100 ok"

    def test_evidence_flag(self, cli_runner: CliRunner, workspace_root) -> None:
        (workspace_root / "evidence.json").rename(workspace_root / "other.json")
        result = cli_runner.invoke(
            cli, ["-q", "--tenant", "kitchen-1", "--evidence", "other.json", "score"]
        )
        assert result.stdout.strip() == "100 ok"
