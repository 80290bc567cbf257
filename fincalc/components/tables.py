"""Turn calculator row dataclasses into pandas DataFrames for display and export."""

from __future__ import annotations

from dataclasses import asdict, fields, is_dataclass
from typing import Dict, Iterable, Optional, Sequence

import pandas as pd

from fincalc.formatting import format_currency


def _title(name: str) -> str:
    return name.replace("_", " ").capitalize()


def to_frame(rows: Sequence, columns: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """Build a DataFrame from a sequence of dataclass rows.

    ``columns`` maps field names to headings and also picks and orders the
    columns.  Without it every field is kept with a readable heading.
    """
    rows = list(rows)
    if rows and not is_dataclass(rows[0]):
        raise TypeError("to_frame expects dataclass rows")
    if columns is None:
        names = [f.name for f in fields(rows[0])] if rows else []
        columns = {name: _title(name) for name in names}
    df = pd.DataFrame([asdict(row) for row in rows], columns=list(columns))
    return df.rename(columns=columns)


def format_money(df: pd.DataFrame, money_columns: Iterable[str]) -> pd.DataFrame:
    """Copy of ``df`` with ``money_columns`` rendered as currency strings."""
    out = df.copy()
    for col in money_columns:
        if col in out.columns:
            out[col] = out[col].map(format_currency)
    return out


__all__ = ["to_frame", "format_money"]
