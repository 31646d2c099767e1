from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

import pandas as pd

logger = logging.getLogger(__name__)

def load_issues_csv(path: Union[str, Path]) -> pd.DataFrame:
    """Read an issue-tracker CSV export, keeping every cell as its raw string.

    Blank cells stay ``""``; rows keep file order and columns follow the header.

    Raises:
        FileNotFoundError / OSError: the path cannot be read.
        ValueError: the file is not parseable as CSV text.
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValueError(f"Could not parse {path} as CSV: {e}") from e
    logger.info("Loaded %d records with %d columns from %s", len(df), len(df.columns), path)
    return df
