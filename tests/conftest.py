from __future__ import annotations
from datetime import date

import pandas as pd
import pytest

from sprint_report.lib.config import ReportConfig

COLUMNS = {
    "assignee": "Assignee",
    "status": "Status",
    "sprint": "Sprint",
    "story_points": "Story Points",
    "tested_by": "Tested By",
    "updated": "Updated",
    "issue_key": "Issue Key",
    "issue_type": "Issue Type",
    "summary": "Summary",
}
HEADER = list(COLUMNS.values())

def record(key="SP-1", assignee="", status="Done", points="", tested_by="",
           updated="05/10/2022", sprint="Sprint 18", issue_type="Story", summary=""):
    return {
        "Issue Key": key, "Issue Type": issue_type, "Status": status,
        "Assignee": assignee, "Tested By": tested_by, "Story Points": points,
        "Sprint": sprint, "Updated": updated, "Summary": summary or f"Summary of {key}",
    }

def frame(*records) -> pd.DataFrame:
    return pd.DataFrame(list(records), columns=HEADER).astype(str)

@pytest.fixture
def make_config(tmp_path):
    """Factory for a valid config over a 01/10/2022..14/10/2022 window."""
    def _make(**overrides) -> ReportConfig:
        values = dict(
            csv_path=tmp_path / "issues.csv",
            sprint_name="Sprint 18",
            columns=COLUMNS,
            sprint_start=date(2022, 10, 1),
            sprint_end=date(2022, 10, 14),
            statuses=["Backlog", "In Progress", "Ready To QA", "Done"],
            output_path=tmp_path / "out" / "report.html",
        )
        values.update(overrides)
        return ReportConfig.model_validate(values)
    return _make
