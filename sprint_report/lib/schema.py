from __future__ import annotations
from typing import Any, Dict, List, Mapping

import pandas as pd
from pydantic import BaseModel

from .config import FieldMap, ReportConfig, ReportConfigError

class IssueRow(BaseModel):
    """One line of the issue listing in the rendered report."""
    issue_key: str
    issue_type: str
    status: str
    assignee: str
    tested_by: str
    story_points: str
    summary: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any], columns: FieldMap) -> "IssueRow":
        def cell(name: str) -> str:
            v = record.get(name)
            return "" if v is None or pd.isna(v) else str(v)

        return cls(
            issue_key=cell(columns.issue_key),
            issue_type=cell(columns.issue_type),
            status=cell(columns.status),
            assignee=cell(columns.assignee),
            tested_by=cell(columns.tested_by),
            story_points=cell(columns.story_points),
            summary=cell(columns.summary),
        )

def missing_columns(df: pd.DataFrame, config: ReportConfig) -> List[str]:
    present = set(df.columns)
    return sorted({c for c in config.columns.names() if c not in present})

def require_columns(df: pd.DataFrame, config: ReportConfig) -> pd.DataFrame:
    """Check that every configured field name is a column of ``df``.

    Raises:
        ReportConfigError: naming every configured column the CSV lacks.
    """
    missing = missing_columns(df, config)
    if missing:
        raise ReportConfigError(
            f"Configured columns not found in {config.csv_path}: {missing}; "
            f"available: {list(df.columns)}"
        )
    return df

def issue_rows(df: pd.DataFrame, config: ReportConfig) -> List[Dict[str, str]]:
    """Project every record, in file order, onto the issue listing columns."""
    return [
        IssueRow.from_record(rec, config.columns).model_dump()
        for rec in df.to_dict(orient="records")
    ]
