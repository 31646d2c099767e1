"""Record predicates used by the sprint aggregations.

Each predicate is a small frozen value object. Calling it on a single record
(any mapping of column name to value) returns a bool; ``mask`` evaluates the
same test over every row of a frame. ``narrow`` applies predicates left to
right, each one shrinking the candidate rows.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

import pandas as pd

from .utils import as_text, coerce_dates

class Predicate(ABC):
    @abstractmethod
    def mask(self, df: pd.DataFrame) -> pd.Series:
        """Row-aligned boolean mask over ``df``."""

    def __call__(self, record: Mapping[str, Any]) -> bool:
        return bool(self.mask(pd.DataFrame([dict(record)])).iloc[0])

@dataclass(frozen=True)
class FieldNotEmpty(Predicate):
    field: str

    def mask(self, df: pd.DataFrame) -> pd.Series:
        return as_text(df[self.field]) != ""

@dataclass(frozen=True)
class FieldEmpty(Predicate):
    field: str

    def mask(self, df: pd.DataFrame) -> pd.Series:
        return as_text(df[self.field]) == ""

@dataclass(frozen=True)
class FieldEquals(Predicate):
    """Exact, case-sensitive match; no trimming."""
    field: str
    value: str

    def mask(self, df: pd.DataFrame) -> pd.Series:
        return as_text(df[self.field]) == self.value

@dataclass(frozen=True)
class FieldNotEquals(Predicate):
    field: str
    value: str

    def mask(self, df: pd.DataFrame) -> pd.Series:
        return as_text(df[self.field]) != self.value

@dataclass(frozen=True)
class DateBetween(Predicate):
    """Inclusive calendar-date window; cells that do not parse never match."""
    field: str
    start: date
    end: date
    date_format: str

    def mask(self, df: pd.DataFrame) -> pd.Series:
        parsed = coerce_dates(df[self.field], self.date_format)
        return parsed.between(pd.Timestamp(self.start), pd.Timestamp(self.end), inclusive="both")

def assignee_is_not_empty(field: str) -> Predicate:
    return FieldNotEmpty(field)

def tested_by_not_empty(field: str) -> Predicate:
    return FieldNotEmpty(field)

def tested_by_empty(field: str) -> Predicate:
    return FieldEmpty(field)

def equal_sprint_name(field: str, name: str) -> Predicate:
    return FieldEquals(field, name)

def status_equal(field: str, name: str) -> Predicate:
    return FieldEquals(field, name)

def status_not_equal(field: str, name: str) -> Predicate:
    return FieldNotEquals(field, name)

def updated_between(field: str, start: date, end: date, date_format: str) -> Predicate:
    return DateBetween(field, start, end, date_format)

def narrow(df: pd.DataFrame, *predicates: Predicate) -> pd.DataFrame:
    """Keep the rows of ``df`` matching every predicate, applied in order."""
    out = df
    for pred in predicates:
        if out.empty:
            break
        out = out[pred.mask(out)]
    return out
