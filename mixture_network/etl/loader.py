"""
Model-output table loader.
Reads per-(category × effect type) CSV exports, normalizes header aliases
and labels, and wraps each as a RawTable for the unifier.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from mixture_network.config import (
    COLUMN_ALIASES,
    DATA_DIR,
    INPUT_TABLES,
    SIGN_ALIASES,
    SIGNIFICANCE_ALPHA,
    WINDOW_ALIASES,
)
from mixture_network.errors import SchemaError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawTable:
    """One model-output table before unification."""
    category: str
    effect_type: str              # 'main' | 'interaction'
    frame: pd.DataFrame
    source: str = ""              # file name, for error messages

    @property
    def label(self) -> str:
        return self.source or f"{self.category}/{self.effect_type}"


def normalize_columns(frame: pd.DataFrame, table: Optional[str] = None) -> pd.DataFrame:
    """Strip BOM/whitespace from headers, lowercase them and map aliases."""
    renamed = {}
    for col in frame.columns:
        key = str(col).strip().lstrip("\ufeff").strip().lower()
        renamed[col] = COLUMN_ALIASES.get(key, key)
    out = frame.rename(columns=renamed)

    dupes = sorted(set(out.columns[out.columns.duplicated()]))
    if dupes:
        raise SchemaError(f"several columns map to {dupes}", table=table, columns=dupes)
    return out


def normalize_window(label, table: Optional[str] = None) -> str:
    """Map a window label such as 'Prenatal' or '3 years' to its tag."""
    key = str(label).strip().lower().replace("-", " ").replace("_", " ")
    key = " ".join(key.split())
    if key in WINDOW_ALIASES:
        return WINDOW_ALIASES[key]
    raise SchemaError(f"unknown window label {label!r}", table=table, columns=["window"])


def normalize_sign(values: pd.Series, table: Optional[str] = None) -> pd.Series:
    keys = values.astype(str).str.strip().str.lower()
    signs = keys.map(SIGN_ALIASES)
    bad = signs.isna()
    if bad.any():
        raise SchemaError(
            f"unknown sign labels {sorted(values[bad].astype(str).unique())}",
            table=table, columns=["sign"],
        )
    return signs


def sign_from_estimate(values: pd.Series, table: Optional[str] = None) -> pd.Series:
    """
    'positive' / 'negative' from the sign of each estimate.

    A zero or missing estimate has no direction; the row cannot be drawn.
    """
    numeric = pd.to_numeric(values, errors="coerce")
    bad = numeric.isna() | (numeric == 0)
    if bad.any():
        raise SchemaError(
            f"{int(bad.sum())} rows have a zero or non-numeric estimate",
            table=table, columns=["estimate"],
        )
    return pd.Series(np.where(numeric > 0, "positive", "negative"), index=values.index)


def filter_significant(frame: pd.DataFrame, alpha: float = SIGNIFICANCE_ALPHA,
                       table: Optional[str] = None) -> pd.DataFrame:
    """Keep rows with p_value < alpha."""
    if "p_value" not in frame.columns:
        raise SchemaError("missing column 'p_value'", table=table, columns=["p_value"])
    p = pd.to_numeric(frame["p_value"], errors="coerce")
    mask = p < alpha
    logger.debug("%s: kept %d of %d rows at alpha=%s", table or "table", int(mask.sum()), len(frame), alpha)
    return frame.loc[mask].reset_index(drop=True)


def load_table(path, category: str, effect_type: str, alpha: Optional[float] = None) -> RawTable:
    """
    Load one CSV export as a RawTable.

    Args:
        path: CSV file (a leading BOM is tolerated).
        category: outcome category of every row in the file.
        effect_type: 'main' or 'interaction'.
        alpha: if given, drop rows with p_value >= alpha.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input table not found: {path}")

    try:
        frame = pd.read_csv(path, encoding="utf-8-sig")
    except pd.errors.EmptyDataError:
        raise SchemaError("file is empty (no header row)", table=path.name) from None
    frame = normalize_columns(frame, table=path.name)
    if alpha is not None:
        frame = filter_significant(frame, alpha, table=path.name)

    return RawTable(category=category, effect_type=effect_type, frame=frame, source=path.name)


def load_all_tables(data_dir: Optional[Path] = None,
                    manifest: Optional[List[Dict]] = None,
                    alpha: float = SIGNIFICANCE_ALPHA) -> List[RawTable]:
    """Load every table listed in the manifest (INPUT_TABLES by default)."""
    data_dir = Path(data_dir or DATA_DIR)
    manifest = manifest if manifest is not None else INPUT_TABLES

    tables = []
    for entry in manifest:
        table = load_table(
            data_dir / entry["filename"],
            category=entry["category"],
            effect_type=entry["effect_type"],
            alpha=alpha if entry.get("filter_significance") else None,
        )
        logger.info("Loaded %s: %d rows", table.label, len(table.frame))
        tables.append(table)
    return tables
