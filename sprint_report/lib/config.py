from __future__ import annotations
import os
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

DEFAULT_DATE_FORMAT = "%d/%m/%Y"
DEFAULT_TEMPLATE_PATH = "templates/report.html"
DEFAULT_OUTPUT_PATH = "output/report.html"

# env var -> FieldMap attribute
FIELD_ENV_KEYS: Dict[str, str] = {
    "ASSIGNEE_FIELD": "assignee",
    "STATUS_FIELD": "status",
    "SPRINT_FIELD": "sprint",
    "STORY_POINT_FIELD": "story_points",
    "TESTED_BY_FIELD": "tested_by",
    "UPDATED_FIELD": "updated",
    "ISSUE_KEY_FIELD": "issue_key",
    "ISSUE_TYPE_FIELD": "issue_type",
    "SUMMARY_FIELD": "summary",
}
REQUIRED_ENV_KEYS = ["CSV_FILE_PATH", *FIELD_ENV_KEYS, "SPRINT_START_DATE", "SPRINT_END_DATE", "STATUS_LIST"]
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ReportConfigError(ValueError):
    """Raised when the report configuration is missing or malformed."""


class FieldMap(BaseModel):
    """CSV column names for every field the report reads."""
    assignee: str = Field(min_length=1)
    status: str = Field(min_length=1)
    sprint: str = Field(min_length=1)
    story_points: str = Field(min_length=1)
    tested_by: str = Field(min_length=1)
    updated: str = Field(min_length=1)
    issue_key: str = Field(min_length=1)
    issue_type: str = Field(min_length=1)
    summary: str = Field(min_length=1)

    def names(self) -> List[str]:
        return list(self.model_dump().values())


class ReportConfig(BaseModel):
    """Everything one report run needs, passed explicitly through the pipeline."""
    model_config = {"frozen": True}

    csv_path: Path
    sprint_name: str = ""
    columns: FieldMap
    sprint_start: date
    sprint_end: date
    statuses: List[str] = Field(min_length=1)
    date_format: str = DEFAULT_DATE_FORMAT
    ready_to_qa_status: str = "Ready To QA"
    done_status: str = "Done"
    backlog_status: str = "Backlog"
    restrict_to_sprint: bool = False
    template_path: Path = Path(DEFAULT_TEMPLATE_PATH)
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    log_level: str = "INFO"

    @field_validator("statuses")
    @classmethod
    def _statuses_clean(cls, v: List[str]) -> List[str]:
        if any(not s for s in v):
            raise ValueError("status list contains an empty entry")
        dupes = sorted({s for s in v if v.count(s) > 1})
        if dupes:
            raise ValueError(f"status list repeats {dupes}")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return v.upper()

    @model_validator(mode="after")
    def _check_window(self) -> "ReportConfig":
        if self.sprint_start > self.sprint_end:
            raise ValueError(f"sprint start {self.sprint_start} is after sprint end {self.sprint_end}")
        if self.restrict_to_sprint and not self.sprint_name:
            raise ValueError("RESTRICT_TO_SPRINT needs SPRINT_NAME")
        buckets = self.bucket_statuses
        repeated = sorted({s for s in buckets if buckets.count(s) > 1})
        if repeated:
            raise ValueError(f"ready-to-QA, done and backlog statuses must differ, got {repeated} twice")
        return self

    @property
    def bucket_statuses(self) -> List[str]:
        return [self.ready_to_qa_status, self.done_status, self.backlog_status]

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[str] = None,
    ) -> "ReportConfig":
        """Build a config from environment variables.

        When ``environ`` is omitted, ``.env`` (or ``env_file``) is loaded into
        ``os.environ`` first; variables already set win.

        Raises:
            ReportConfigError: listing every missing or malformed setting.
        """
        if environ is None:
            load_dotenv(env_file, override=False)
            environ = os.environ
        env = {k: v.strip() for k, v in environ.items() if isinstance(v, str)}

        problems = []
        missing = [k for k in REQUIRED_ENV_KEYS if not env.get(k)]
        if missing:
            problems.append(f"Missing settings: {missing}")

        date_format = env.get("DATE_FORMAT") or DEFAULT_DATE_FORMAT
        window = {}
        for key, name in (("SPRINT_START_DATE", "sprint_start"), ("SPRINT_END_DATE", "sprint_end")):
            if env.get(key):
                try:
                    window[name] = parse_config_date(env[key], date_format)
                except ValueError:
                    problems.append(f"{key}={env[key]!r} does not match date format {date_format!r}")

        restrict = env.get("RESTRICT_TO_SPRINT", "").lower()
        if restrict not in _TRUE | _FALSE:
            problems.append(f"RESTRICT_TO_SPRINT={env['RESTRICT_TO_SPRINT']!r} is not a boolean")
        if problems:
            raise ReportConfigError("; ".join(problems))

        values = {
            "csv_path": env["CSV_FILE_PATH"],
            "sprint_name": env.get("SPRINT_NAME", ""),
            "columns": {attr: env[key] for key, attr in FIELD_ENV_KEYS.items()},
            "statuses": parse_status_list(env["STATUS_LIST"]),
            "date_format": date_format,
            "restrict_to_sprint": restrict in _TRUE,
            **window,
        }
        optional = {
            "READY_TO_QA_STATUS": "ready_to_qa_status",
            "DONE_STATUS": "done_status",
            "BACKLOG_STATUS": "backlog_status",
            "TEMPLATE_PATH": "template_path",
            "OUTPUT_PATH": "output_path",
            "LOG_LEVEL": "log_level",
        }
        values.update({attr: env[key] for key, attr in optional.items() if env.get(key)})
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ReportConfigError(_describe(e)) from e


def parse_config_date(value: str, date_format: str = DEFAULT_DATE_FORMAT) -> date:
    return datetime.strptime(value.strip(), date_format).date()


def parse_status_list(value: str) -> List[str]:
    """Split a comma-separated status list, keeping order."""
    return [part.strip() for part in value.split(",")]


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e["loc"]) or "config"
        parts.append(f"{loc}: {e['msg']}")
    return "; ".join(parts)

