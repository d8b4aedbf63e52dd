"""
Edge derivation.
One directed edge per effect row, exposure -> outcome, resolved through the
node lookup built from the same rows. Edges are never merged: the same pair
can appear once per window and effect type.
"""
from typing import Dict

import pandas as pd

from mixture_network.config import WINDOW_ORDER
from mixture_network.errors import SchemaError, UnresolvedNodeReference
from mixture_network.network.node_deriver import (
    NodeKey,
    check_columns,
    exposure_key,
    outcome_key,
)

EDGE_INPUT_COLUMNS = ("exposure", "outcome_name", "outcome_category", "window", "effect_type", "sign")
EDGE_COLUMNS = ["from_id", "to_id", "window", "effect_type", "sign", "dashed"]


def _resolve(lookup: Dict[NodeKey, int], key: NodeKey) -> int:
    try:
        return lookup[key]
    except KeyError:
        raise UnresolvedNodeReference(key) from None


def window_rank(window: str) -> int:
    try:
        return WINDOW_ORDER[window]
    except KeyError:
        raise SchemaError(f"unknown window {window!r}", table="edges", columns=["window"]) from None


def sort_by_window(edges: pd.DataFrame) -> pd.DataFrame:
    """Stable sort: prenatal, birth, three_year, then all."""
    rank = edges["window"].map(window_rank)
    return (
        edges.assign(_rank=rank)
        .sort_values("_rank", kind="stable")
        .drop(columns="_rank")
        .reset_index(drop=True)
    )


def derive_edges(rows: pd.DataFrame, lookup: Dict[NodeKey, int]) -> pd.DataFrame:
    """
    Map effect rows to an edge table.

    Raises UnresolvedNodeReference if an endpoint is missing from lookup,
    which means rows and lookup were not derived from the same row set.
    """
    check_columns(rows, EDGE_INPUT_COLUMNS, "effect rows")

    records = []
    for row in rows[list(EDGE_INPUT_COLUMNS)].itertuples(index=False):
        records.append({
            "from_id": _resolve(lookup, exposure_key(row.exposure)),
            "to_id": _resolve(lookup, outcome_key(row.outcome_name, row.outcome_category)),
            "window": row.window,
            "effect_type": row.effect_type,
            "sign": row.sign,
            "dashed": row.effect_type == "interaction",
        })

    edges = pd.DataFrame.from_records(records, columns=EDGE_COLUMNS)
    if edges.empty:
        return edges
    return sort_by_window(edges)
