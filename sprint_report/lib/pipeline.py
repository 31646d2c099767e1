from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Tuple

import pandas as pd

from .aggregations import SprintAggregates, compute_aggregates
from .config import ReportConfig
from .data_access import load_issues_csv
from .filters import equal_sprint_name, narrow
from .render import render_report
from .schema import require_columns
from .tables import build_report_context

logger = logging.getLogger(__name__)

def load_records(config: ReportConfig) -> pd.DataFrame:
    """Load the configured CSV and check it has every configured column."""
    df = require_columns(load_issues_csv(config.csv_path), config)
    if config.restrict_to_sprint:
        before = len(df)
        df = narrow(df, equal_sprint_name(config.columns.sprint, config.sprint_name))
        logger.info("Kept %d of %d records in sprint %r", len(df), before, config.sprint_name)
    return df

def build_report(config: ReportConfig) -> Tuple[SprintAggregates, Dict[str, Any]]:
    """Load, aggregate and project; returns the aggregates and the template context."""
    df = load_records(config)
    aggregates = compute_aggregates(df, config)
    return aggregates, build_report_context(aggregates, df, config)

def run_report(config: ReportConfig) -> Path:
    """Run the whole report and return the path of the written HTML."""
    logger.info(
        "Sprint report for %r, window %s..%s",
        config.sprint_name, config.sprint_start.isoformat(), config.sprint_end.isoformat(),
    )
    _, context = build_report(config)
    return render_report(context, config.template_path, config.output_path)
