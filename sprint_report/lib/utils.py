from __future__ import annotations
import pandas as pd

def as_text(s: pd.Series) -> pd.Series:
    """Return ``s`` as strings with missing cells as ''."""
    return s.astype("object").where(pd.notna(s), "").astype(str)

def coerce_points(s: pd.Series) -> pd.Series:
    """Parse story points as floats; blank or unparsable cells become 0.0."""
    return pd.to_numeric(as_text(s).str.strip(), errors="coerce").fillna(0.0).astype(float)

def coerce_dates(s: pd.Series, date_format: str) -> pd.Series:
    """Parse cells as calendar dates with ``date_format``; failures become NaT.

    Only the leading whitespace-separated tokens are parsed (as many as the
    format has), so a trailing time ("12/10/2022 10:30") is dropped. Those
    tokens must match the format exactly.
    """
    n_tokens = len(date_format.split()) or 1
    head = as_text(s).map(lambda v: " ".join(v.split()[:n_tokens]))
    parsed = pd.to_datetime(head, format=date_format, exact=True, errors="coerce")
    return parsed.dt.normalize()
