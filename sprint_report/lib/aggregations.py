from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Union

import pandas as pd

from .config import ReportConfig
from .filters import (
    Predicate,
    assignee_is_not_empty,
    narrow,
    status_equal,
    status_not_equal,
    tested_by_empty,
    tested_by_not_empty,
    updated_between,
)
from .utils import as_text, coerce_dates, coerce_points

logger = logging.getLogger(__name__)

TOTAL_KEY = "Total"
_POINTS = "_story_points_value"

@dataclass(frozen=True)
class SprintAggregates:
    """The five aggregate outputs of one report run."""
    issue_count: Dict[str, Dict[str, int]]
    story_points: Dict[str, Dict[str, float]]
    tested_by: Dict[str, int]
    status_totals: Dict[str, Dict[str, Union[int, float]]]
    untested_done: int

def _in_window(config: ReportConfig) -> Predicate:
    return updated_between(config.columns.updated, config.sprint_start, config.sprint_end, config.date_format)

def _status_row(by_status: pd.Series, cast: Callable) -> dict:
    row = {str(status): cast(v) for status, v in by_status.items()}
    row[TOTAL_KEY] = cast(by_status.sum())
    return row

def _assigned(df: pd.DataFrame, config: ReportConfig) -> pd.DataFrame:
    out = narrow(df, _in_window(config), assignee_is_not_empty(config.columns.assignee))
    logger.debug("%d of %d records assigned and inside the window", len(out), len(df))
    return out

def per_assignee_per_status_issue_count(df: pd.DataFrame, config: ReportConfig) -> Dict[str, Dict[str, int]]:
    """Issues per assignee per status, with a 'Total' per assignee."""
    cols = config.columns
    d = _assigned(df, config)
    return {
        str(assignee): _status_row(group.groupby(as_text(group[cols.status])).size(), int)
        for assignee, group in d.groupby(as_text(d[cols.assignee]))
    }

def per_assignee_per_status_story_points(df: pd.DataFrame, config: ReportConfig) -> Dict[str, Dict[str, float]]:
    """Story points per assignee per status, with a 'Total' per assignee.

    Blank or unparsable story points count as 0.0; their status key is still created.
    """
    cols = config.columns
    d = _assigned(df, config)
    d = d.assign(**{_POINTS: coerce_points(d[cols.story_points])})
    return {
        str(assignee): _status_row(group.groupby(as_text(group[cols.status]))[_POINTS].sum(), float)
        for assignee, group in d.groupby(as_text(d[cols.assignee]))
    }

def per_tested_by_issue_not_in_ready_to_qa(df: pd.DataFrame, config: ReportConfig) -> Dict[str, int]:
    """Issues per tester, excluding those still waiting in the ready-to-QA status."""
    cols = config.columns
    d = narrow(
        df,
        _in_window(config),
        tested_by_not_empty(cols.tested_by),
        status_not_equal(cols.status, config.ready_to_qa_status),
    )
    return {str(tester): int(n) for tester, n in d.groupby(as_text(d[cols.tested_by])).size().items()}

def issue_count_and_story_points_in_status(
    df: pd.DataFrame, config: ReportConfig, status_name: str
) -> Dict[str, Union[int, float]]:
    cols = config.columns
    d = narrow(df, _in_window(config), status_equal(cols.status, status_name))
    points = coerce_points(d[cols.story_points]).sum() if len(d) else 0.0
    return {"issue_count": int(len(d)), "story_points": float(points)}

def issue_count_tested_by_none_and_status_done(df: pd.DataFrame, config: ReportConfig) -> int:
    cols = config.columns
    d = narrow(
        df,
        _in_window(config),
        tested_by_empty(cols.tested_by),
        status_equal(cols.status, config.done_status),
    )
    return int(len(d))

def _log_data_gaps(df: pd.DataFrame, config: ReportConfig) -> None:
    if df.empty or not logger.isEnabledFor(logging.DEBUG):
        return
    cols = config.columns
    bad_dates = int(coerce_dates(df[cols.updated], config.date_format).isna().sum())
    raw_points = as_text(df[cols.story_points]).str.strip()
    bad_points = int(((raw_points != "") & pd.to_numeric(raw_points, errors="coerce").isna()).sum())
    logger.debug("%d records with an unparsable updated date, %d with unparsable story points", bad_dates, bad_points)

def compute_aggregates(df: pd.DataFrame, config: ReportConfig) -> SprintAggregates:
    """Run every aggregation over the same records."""
    out = SprintAggregates(
        issue_count=per_assignee_per_status_issue_count(df, config),
        story_points=per_assignee_per_status_story_points(df, config),
        tested_by=per_tested_by_issue_not_in_ready_to_qa(df, config),
        status_totals={
            status: issue_count_and_story_points_in_status(df, config, status)
            for status in config.bucket_statuses
        },
        untested_done=issue_count_tested_by_none_and_status_done(df, config),
    )
    _log_data_gaps(df, config)
    logger.info(
        "Aggregated %d assignees, %d testers, %d done without tester",
        len(out.issue_count), len(out.tested_by), out.untested_done,
    )
    return out
