from .aggregations import (
    per_assignee_per_status_issue_count,
    per_assignee_per_status_story_points,
    per_tested_by_issue_not_in_ready_to_qa,
    issue_count_and_story_points_in_status,
    issue_count_tested_by_none_and_status_done,
    compute_aggregates,
)
from .config import ReportConfig, ReportConfigError
from .pipeline import run_report

__all__ = [
    "per_assignee_per_status_issue_count",
    "per_assignee_per_status_story_points",
    "per_tested_by_issue_not_in_ready_to_qa",
    "issue_count_and_story_points_in_status",
    "issue_count_tested_by_none_and_status_done",
    "compute_aggregates",
    "ReportConfig",
    "ReportConfigError",
    "run_report",
]
