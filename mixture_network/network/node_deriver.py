"""
Node derivation.

Every effect row names two variables: the exposure (always a Chemical
Mixture node) and the outcome. Outcome names are suffixed by category
before deduplication, so "Caudate" as Cortical Thickness and as Volume
become "Caudate (CT)" and "Caudate (Vol.)", two separate nodes.

Node identity is (display_name, category). Ids are assigned 0..n-1 in
first-seen order: rows top to bottom, exposure before outcome within a row.
The same rows therefore always give the same ids.

A display name claimed by a second category (e.g. the same raw name used
for a Metabolite and a Subcortical Volume, neither of which is suffixed)
is a data-quality problem. The first-seen node is kept and later claims
resolve to it, with a DuplicateCategoryConflict warning; strict mode
raises instead.
"""
import logging
import warnings
from typing import Dict, Iterator, List, Tuple

import pandas as pd

from mixture_network.config import WINDOW_TAGS
from mixture_network.data_prep.category_mapper import (
    Category,
    display_name,
    palette_role,
    parse_outcome_category,
)
from mixture_network.errors import DuplicateCategoryConflict, SchemaError

logger = logging.getLogger(__name__)

NodeKey = Tuple[str, str]          # (display_name, category)

NODE_INPUT_COLUMNS = ("exposure", "outcome_name", "outcome_category", "window")
NODE_COLUMNS = ["id", "display_name", "category", "palette_role"] + list(WINDOW_TAGS)


def exposure_key(exposure) -> NodeKey:
    return (str(exposure).strip(), Category.CHEMICAL_MIXTURE.value)


def outcome_key(outcome_name, outcome_category) -> NodeKey:
    category = parse_outcome_category(outcome_category)
    return (display_name(outcome_name, category), category.value)


def check_columns(rows: pd.DataFrame, required, stage: str) -> None:
    missing = [c for c in required if c not in rows.columns]
    if missing:
        raise SchemaError(f"missing columns {missing}", table=stage, columns=missing)


def iter_row_keys(rows: pd.DataFrame) -> Iterator[Tuple[NodeKey, NodeKey, str]]:
    """Yield (exposure key, outcome key, window) per row, in row order."""
    check_columns(rows, NODE_INPUT_COLUMNS, "effect rows")
    for row in rows[list(NODE_INPUT_COLUMNS)].itertuples(index=False):
        window = str(row.window)
        if window not in WINDOW_TAGS:
            raise SchemaError(f"unknown window {window!r}", table="effect rows", columns=["window"])
        yield exposure_key(row.exposure), outcome_key(row.outcome_name, row.outcome_category), window


def _report_conflict(name: str, kept: str, claimed: str, strict: bool) -> None:
    conflict = DuplicateCategoryConflict(name, kept, claimed)
    if strict:
        raise conflict
    logger.warning("Data-quality: %s", conflict)
    warnings.warn(conflict, stacklevel=3)


def derive_nodes(rows: pd.DataFrame, strict: bool = False) -> Tuple[pd.DataFrame, Dict[NodeKey, int]]:
    """
    Derive the node table and the (display_name, category) -> id lookup.

    Args:
        rows: unified effect rows (see table_unifier.UNIFIED_COLUMNS).
        strict: raise DuplicateCategoryConflict instead of warning.

    Returns:
        (node_table, lookup). node_table has one row per node with columns
        NODE_COLUMNS; each window column is True when the node is an endpoint
        of at least one row in that window. lookup covers every key seen in
        rows, including keys folded onto a first-seen node.
    """
    lookup: Dict[NodeKey, int] = {}
    owner: Dict[str, int] = {}           # display_name -> id
    nodes: List[Dict] = []

    for exp_key, out_key, window in iter_row_keys(rows):
        for key in (exp_key, out_key):
            node_id = lookup.get(key)
            if node_id is None:
                name, category = key
                node_id = owner.get(name)
                if node_id is None:
                    node_id = len(nodes)
                    owner[name] = node_id
                    nodes.append({
                        "id": node_id,
                        "display_name": name,
                        "category": category,
                        "palette_role": palette_role(category),
                        "windows": set(),
                    })
                else:
                    _report_conflict(name, nodes[node_id]["category"], category, strict)
                lookup[key] = node_id
            nodes[node_id]["windows"].add(window)

    return _node_table(nodes), lookup


def _node_table(nodes: List[Dict]) -> pd.DataFrame:
    if not nodes:
        return pd.DataFrame(columns=NODE_COLUMNS)
    records = []
    for node in nodes:
        record = {k: v for k, v in node.items() if k != "windows"}
        for tag in WINDOW_TAGS:
            record[tag] = tag in node["windows"]
        records.append(record)
    return pd.DataFrame.from_records(records, columns=NODE_COLUMNS)


def node_windows(nodes: pd.DataFrame) -> Dict[int, set]:
    """Map node id -> set of window tags it participates in."""
    return {
        int(row["id"]): {tag for tag in WINDOW_TAGS if bool(row[tag])}
        for _, row in nodes.iterrows()
    }
