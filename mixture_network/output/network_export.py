"""
Network export.
Hands views to the rendering side: a networkx graph per view, a per-window
detail table for tabular display, and CSV/JSON files for one run.
"""
import json
from pathlib import Path
from typing import Dict, Optional

import networkx as nx
import numpy as np
import pandas as pd

from mixture_network.config import OUTPUT_DIR, VIEWS
from mixture_network.data_prep.category_mapper import display_name
from mixture_network.network.view_builder import NetworkView, view_windows

DETAIL_COLUMNS = ["exposure", "outcome", "category", "effect_type", "sign", "estimate"]


def detail_table(rows: pd.DataFrame, window: str) -> pd.DataFrame:
    """
    Effect rows of one view, for a table next to the diagram.

    `outcome` is the display name, matching the node labels.
    """
    subset = rows.loc[rows["window"].isin(view_windows(window))]
    if subset.empty:
        return pd.DataFrame(columns=DETAIL_COLUMNS)
    table = pd.DataFrame({
        "exposure": subset["exposure"],
        "outcome": [display_name(n, c) for n, c in zip(subset["outcome_name"], subset["outcome_category"])],
        "category": subset["outcome_category"],
        "effect_type": subset["effect_type"],
        "sign": subset["sign"],
        "estimate": subset["estimate"],
    }, columns=DETAIL_COLUMNS)
    return table.sort_values(["exposure", "outcome"], kind="stable").reset_index(drop=True)


def view_to_graph(view: NetworkView) -> nx.MultiDiGraph:
    """
    Build a MultiDiGraph for one view.

    Parallel edges (same pair, different window or effect type) are kept.
    """
    G = nx.MultiDiGraph(view=view.name)
    for node in view.nodes.itertuples(index=False):
        G.add_node(
            int(node.id),
            label=node.display_name,
            category=node.category,
            palette_role=node.palette_role,
        )
    for edge in view.edges.itertuples(index=False):
        G.add_edge(
            int(edge.from_id),
            int(edge.to_id),
            window=edge.window,
            effect_type=edge.effect_type,
            sign=edge.sign,
            dashed=bool(edge.dashed),
        )
    return G


def summarize_network(nodes: pd.DataFrame, edges: pd.DataFrame) -> Dict:
    """Counts per category, window, effect type and sign."""
    return {
        "total_nodes": len(nodes),
        "total_edges": len(edges),
        "nodes_by_category": nodes["category"].value_counts().sort_index().to_dict(),
        "edges_by_window": edges["window"].value_counts().sort_index().to_dict(),
        "edges_by_effect_type": edges["effect_type"].value_counts().sort_index().to_dict(),
        "edges_by_sign": edges["sign"].value_counts().sort_index().to_dict(),
    }


class NumpyEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.bool_,)):
            return bool(obj)
        return super().default(obj)


def save_views(views: Dict[str, NetworkView], rows: pd.DataFrame,
               output_dir: Optional[Path] = None) -> Path:
    """
    Write <view>_nodes.csv, <view>_edges.csv, <view>_detail.csv per view and
    network_summary.json into output_dir. Returns the summary path.
    """
    output_dir = Path(output_dir or OUTPUT_DIR)
    output_dir.mkdir(parents=True, exist_ok=True)

    summary = {"views": {}}
    for name in VIEWS:
        if name not in views:
            continue
        view = views[name]
        view.nodes.to_csv(output_dir / f"{name}_nodes.csv", index=False)
        view.edges.to_csv(output_dir / f"{name}_edges.csv", index=False)
        detail_table(rows, name).to_csv(output_dir / f"{name}_detail.csv", index=False)
        summary["views"][name] = summarize_network(view.nodes, view.edges)

    summary_path = output_dir / "network_summary.json"
    with open(summary_path, "w") as f:
        json.dump(summary, f, indent=2, cls=NumpyEncoder)

    print(f"Saved {len(summary['views'])} views to {output_dir}")
    return summary_path
