"""
Per-window views.

  main        — main effects only ("all" rows)
  prenatal    — prenatal interactions plus all main effects
  birth       — birth interactions plus all main effects
  three_year  — three-year interactions plus all main effects

Views are plain filters over the derived tables and never modify them.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

import pandas as pd

from mixture_network.config import ALL_WINDOW, MAIN_VIEW, VIEWS, WINDOWS


@dataclass(frozen=True)
class NetworkView:
    """Node and edge subsets handed to the renderer."""
    name: str
    nodes: pd.DataFrame
    edges: pd.DataFrame


def view_windows(view: str) -> Tuple[str, ...]:
    """Window tags a view draws from."""
    if view == MAIN_VIEW:
        return (ALL_WINDOW,)
    if view in WINDOWS:
        return (view, ALL_WINDOW)
    raise ValueError(f"Unknown view {view!r}; expected one of {VIEWS}")


def build_view(nodes: pd.DataFrame, edges: pd.DataFrame, window: str) -> NetworkView:
    windows = list(view_windows(window))
    node_mask = nodes[windows].astype(bool).any(axis=1)
    edge_mask = edges["window"].isin(windows)
    return NetworkView(
        name=window,
        nodes=nodes.loc[node_mask].reset_index(drop=True),
        edges=edges.loc[edge_mask].reset_index(drop=True),
    )


def build_all_views(nodes: pd.DataFrame, edges: pd.DataFrame) -> Dict[str, NetworkView]:
    return {view: build_view(nodes, edges, view) for view in VIEWS}
