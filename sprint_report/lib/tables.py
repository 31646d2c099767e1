from __future__ import annotations
from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd

from .aggregations import TOTAL_KEY, SprintAggregates
from .config import ReportConfig
from .schema import issue_rows

__all__ = ["status_matrix", "tested_by_rows", "build_report_context"]

def status_matrix(per_assignee: Mapping[str, Mapping[str, float]], statuses: Sequence[str]) -> List[list]:
    """Rows of [assignee, value per configured status..., total], sorted by assignee.

    Statuses an assignee has no entry for are filled with 0.
    """
    rows = []
    for assignee in sorted(per_assignee):
        by_status = per_assignee[assignee]
        rows.append([assignee, *(by_status.get(s, 0) for s in statuses), by_status.get(TOTAL_KEY, 0)])
    return rows

def tested_by_rows(per_tester: Mapping[str, int]) -> List[list]:
    return [[tester, per_tester[tester]] for tester in sorted(per_tester)]

def _bucket_rows(status_totals: Mapping[str, Mapping[str, float]]) -> List[Dict[str, Any]]:
    return [
        {"status": status, "issue_count": t["issue_count"], "story_points": t["story_points"]}
        for status, t in status_totals.items()
    ]

def build_report_context(aggregates: SprintAggregates, df: pd.DataFrame, config: ReportConfig) -> Dict[str, Any]:
    """Every slot the report template fills, keyed by slot name."""
    fmt = config.date_format
    return {
        "sprint_name": config.sprint_name,
        "sprint_start": config.sprint_start.strftime(fmt),
        "sprint_end": config.sprint_end.strftime(fmt),
        "statuses": list(config.statuses),
        "total_label": TOTAL_KEY,
        "issue_count_rows": status_matrix(aggregates.issue_count, config.statuses),
        "story_point_rows": status_matrix(aggregates.story_points, config.statuses),
        "tested_by_rows": tested_by_rows(aggregates.tested_by),
        "status_buckets": _bucket_rows(aggregates.status_totals),
        "untested_done": aggregates.untested_done,
        "done_status": config.done_status,
        "ready_to_qa_status": config.ready_to_qa_status,
        "record_count": int(len(df)),
        "issues": issue_rows(df, config),
    }
