"""Tests for ReviewService."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from haccpctl.infrastructure.workspace import Workspace
from haccpctl.services.review import ReviewService

END = date(2026, 10, 28)


class TestSummarize:
    def test_kitchen_review(self, workspace: Workspace) -> None:
        result = ReviewService(workspace).summarize("kitchen-1", to=END)
        assert result.ok
        assert result.op == "review"
        data = result.data
        assert data["summary"]["window"] == {"from": "2026-10-01", "to": "2026-10-28"}
        assert data["eligible"] is True
        assert data["next_due_on"] == "2026-08-29"
        assert data["issues"] == 4
        assert result.warnings == []

    def test_renewed_credential_is_not_an_issue(
        self, workspace: Workspace, evidence_path: Path
    ) -> None:
        document = json.loads(evidence_path.read_text())
        document["tenants"]["kitchen-1"]["events"].append(
            {"domain": "credential_expiry", "key": "s1|Level 2", "label": "Sam (Level 2)",
             "outcome": "pass", "on": "2026-10-20", "expires_on": "2027-10-20"}
        )
        evidence_path.write_text(json.dumps(document))
        result = ReviewService(workspace).summarize("kitchen-1", to=END)
        training = result.data["summary"]["totals"]["credential_expiry"]
        assert training["failures"] == 0
        assert result.data["issues"] == 3

    def test_report_lines(self, workspace: Workspace) -> None:
        lines = ReviewService(workspace).summarize("kitchen-1", to=END).data["lines"]
        assert lines[0] == "Four-Weekly Review (SFBB)"
        assert "  • Walk-in | Chicken → 3 (last 2026-10-20)" in lines
        assert "  • Mop floors (Kitchen) → 26 (last 2026-10-28)" in lines
        assert "- Expired: 1" in lines
        assert "- Due soon (30d): 1" in lines

    def test_custom_days(self, workspace: Workspace) -> None:
        result = ReviewService(workspace).summarize("kitchen-1", to=END, days=7)
        assert result.data["summary"]["window"] == {"from": "2026-10-22", "to": "2026-10-28"}

    def test_invalid_days(self, workspace: Workspace) -> None:
        result = ReviewService(workspace).summarize("kitchen-1", to=END, days=0)
        assert not result.ok
        assert result.error.code == "INVALID_WINDOW"

    def test_new_tenant_not_yet_eligible(self, workspace: Workspace) -> None:
        data = ReviewService(workspace).summarize("new-site", to=END).data
        assert data["eligible"] is False
        assert data["issues"] == 0
        assert data["next_due_on"] == "2026-11-07"

    def test_collaborator_failure_means_no_activity(
        self, workspace: Workspace, broken_evidence
    ) -> None:
        result = ReviewService(workspace, evidence=broken_evidence).summarize("kitchen-1", to=END)
        assert result.ok
        assert result.data["issues"] == 0
        assert result.data["eligible"] is True
        assert len(result.warnings) == 4
        assert result.data["summary"]["repeat_groups"] == []
