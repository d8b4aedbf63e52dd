"""
Table unifier.
Concatenates the per-(category × effect type) tables into one long table of
effect rows with a uniform schema. No filtering, no deduplication.
"""
from typing import Iterable, List

import numpy as np
import pandas as pd

from mixture_network.config import ALL_WINDOW, EFFECT_TYPES
from mixture_network.data_prep.category_mapper import parse_outcome_category
from mixture_network.errors import SchemaError
from mixture_network.etl.loader import (
    RawTable,
    normalize_columns,
    normalize_sign,
    normalize_window,
    sign_from_estimate,
)

UNIFIED_COLUMNS = [
    "exposure",
    "outcome_name",
    "outcome_category",
    "window",
    "effect_type",
    "sign",
    "estimate",
    "p_value",
]

REQUIRED_COLUMNS = ("exposure", "outcome_name")


def _missing_columns(frame: pd.DataFrame, effect_type: str) -> List[str]:
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if "sign" not in frame.columns and "estimate" not in frame.columns:
        missing.append("sign or estimate")
    # Main effects are window-independent; only interactions carry a window.
    if effect_type == "interaction" and "window" not in frame.columns:
        missing.append("window")
    return missing


def _optional_numeric(frame: pd.DataFrame, column: str) -> pd.Series:
    if column in frame.columns:
        return pd.to_numeric(frame[column], errors="coerce")
    return pd.Series(np.nan, index=frame.index, dtype=float)


def _identifier(frame: pd.DataFrame, column: str, table: str) -> pd.Series:
    """Stripped string identifiers; blank or missing cells are rejected."""
    values = frame[column]
    text = values.astype(str).str.strip()
    blank = values.isna() | (text == "")
    if blank.any():
        raise SchemaError(
            f"{int(blank.sum())} rows have a blank {column!r}",
            table=table, columns=[column],
        )
    return text


def _checked_sign(frame: pd.DataFrame, table: str) -> pd.Series:
    """
    Sign from the `sign` column if present, else from `estimate`.

    When both are present, rows with a usable estimate must agree with
    the stated sign.
    """
    if "sign" not in frame.columns:
        return sign_from_estimate(frame["estimate"], table=table)

    sign = normalize_sign(frame["sign"], table=table)
    if "estimate" in frame.columns:
        numeric = pd.to_numeric(frame["estimate"], errors="coerce")
        usable = numeric.notna() & (numeric != 0)
        implied = pd.Series(np.where(numeric > 0, "positive", "negative"), index=frame.index)
        conflict = usable & (implied != sign)
        if conflict.any():
            raise SchemaError(
                f"{int(conflict.sum())} rows have a sign that contradicts the estimate",
                table=table, columns=["sign", "estimate"],
            )
    return sign


def normalize_table(table: RawTable) -> pd.DataFrame:
    """Bring one raw table to the unified schema."""
    label = table.label
    try:
        category = parse_outcome_category(table.category)
    except SchemaError as e:
        raise SchemaError(str(e), table=label) from e

    effect_type = str(table.effect_type).strip().lower()
    if effect_type not in EFFECT_TYPES:
        raise SchemaError(f"unknown effect type {table.effect_type!r}", table=label)

    frame = normalize_columns(table.frame, table=label).reset_index(drop=True)
    missing = _missing_columns(frame, effect_type)
    if missing:
        raise SchemaError(f"missing columns {missing}", table=label, columns=missing)

    if effect_type == "main":
        window = pd.Series(ALL_WINDOW, index=frame.index)
    else:
        window = frame["window"].map(lambda w: normalize_window(w, table=label))
        if (window == ALL_WINDOW).any():
            raise SchemaError("interaction rows must name a window, not 'all'",
                              table=label, columns=["window"])

    exposure = _identifier(frame, "exposure", label)
    outcome_name = _identifier(frame, "outcome_name", label)
    sign = _checked_sign(frame, label)

    return pd.DataFrame({
        "exposure": exposure,
        "outcome_name": outcome_name,
        "outcome_category": category.value,
        "window": window,
        "effect_type": effect_type,
        "sign": sign,
        "estimate": _optional_numeric(frame, "estimate"),
        "p_value": _optional_numeric(frame, "p_value"),
    }, index=frame.index, columns=UNIFIED_COLUMNS)


def unify(category_tables: Iterable[RawTable]) -> pd.DataFrame:
    """
    Concatenate all category tables into one long effect-row table.

    Row order follows input order (table by table, row by row); downstream
    id assignment depends on it.
    """
    parts = [normalize_table(t) for t in category_tables]
    parts = [p for p in parts if len(p)]
    if not parts:
        return pd.DataFrame(columns=UNIFIED_COLUMNS)
    return pd.concat(parts, ignore_index=True)
