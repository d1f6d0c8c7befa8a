"""
DataFrame helpers for raw sheet values.
"""
from typing import Any, List, Sequence

import pandas as pd


def values_to_dataframe(values: List[List[Any]], columns: Sequence[str], skip_header: bool = True) -> pd.DataFrame:
    """
    Build a DataFrame from a values range.

    The Sheets API drops trailing empty cells, so rows are padded (or cut)
    to the number of columns.
    """
    rows = values[1:] if skip_header else values
    width = len(columns)
    padded = [(list(row) + [''] * width)[:width] for row in rows]
    return pd.DataFrame(padded, columns=list(columns))


def normalize_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize DataFrame: strip whitespace, handle NaN values.
    """
    df = df.copy()

    for col in df.columns:
        if df[col].dtype == "object":
            df[col] = df[col].astype(str).str.strip()
            # Replace 'nan' strings with actual NaN
            df[col] = df[col].replace(["nan", "None", ""], pd.NA)

    return df
