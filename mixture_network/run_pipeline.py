"""
Mixture Network — Main Pipeline
Turns significant mixture → outcome model estimates into per-window
network views:
Load → Unify → Nodes → Edges → Views → Export
"""
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from mixture_network.config import SIGNIFICANCE_ALPHA, VIEWS
from mixture_network.errors import NetworkError
from mixture_network.etl.loader import RawTable, load_all_tables
from mixture_network.data_prep.table_unifier import unify
from mixture_network.network.node_deriver import derive_nodes
from mixture_network.network.edge_deriver import derive_edges
from mixture_network.network.view_builder import build_all_views
from mixture_network.output.network_export import save_views, summarize_network


def run_pipeline(
    data_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    alpha: float = SIGNIFICANCE_ALPHA,
    strict: bool = False,
    save: bool = True,
    tables: Optional[List[RawTable]] = None,
) -> Dict:
    """
    Execute the full network pipeline.

    Args:
        data_dir: Directory holding the INPUT_TABLES CSVs.
        output_dir: Where views are written when save is True.
        alpha: Significance threshold for tables flagged filter_significance.
        strict: Abort on a display name claimed by two categories.
        save: Write CSV/JSON output.
        tables: Pre-loaded tables; skips Phase 1 when given.
    """
    print("=" * 60)
    print("MIXTURE NETWORK — Exposure/Outcome Pipeline")
    print("=" * 60)

    # ── Phase 1: Load ───────────────────────────────────────────
    print("\n▶ Phase 1: Loading model output tables...")
    if tables is None:
        tables = load_all_tables(data_dir, alpha=alpha)
    for t in tables:
        print(f"  {t.label}: {len(t.frame)} rows")

    # ── Phase 2: Unify ──────────────────────────────────────────
    print("\n▶ Phase 2: Unifying tables...")
    rows = unify(tables)
    print(f"  → {len(rows)} effect rows")

    # ── Phase 3: Nodes ──────────────────────────────────────────
    print("\n▶ Phase 3: Deriving nodes...")
    nodes, lookup = derive_nodes(rows, strict=strict)
    for category, count in nodes["category"].value_counts().sort_index().items():
        print(f"  {category}: {count}")

    # ── Phase 4: Edges ──────────────────────────────────────────
    print("\n▶ Phase 4: Deriving edges...")
    edges = derive_edges(rows, lookup)
    summary = summarize_network(nodes, edges)
    for window, count in summary["edges_by_window"].items():
        print(f"  {window}: {count} edges")

    # ── Phase 5: Views ──────────────────────────────────────────
    print("\n▶ Phase 5: Building views...")
    views = build_all_views(nodes, edges)
    for name in VIEWS:
        v = views[name]
        print(f"  {name:10s} {len(v.nodes):4d} nodes {len(v.edges):4d} edges")

    output_path = None
    if save:
        print("\n▶ Phase 6: Exporting views...")
        output_path = save_views(views, rows, output_dir)

    # ── Summary ─────────────────────────────────────────────────
    print("\n" + "=" * 60)
    print("PIPELINE COMPLETE")
    print("=" * 60)
    print(f"  Effect rows: {len(rows)}")
    print(f"  Nodes: {len(nodes)}")
    print(f"  Edges: {len(edges)}")
    if output_path:
        print(f"  Output: {output_path}")
    print()

    return {
        "rows": rows,
        "nodes": nodes,
        "edges": edges,
        "lookup": lookup,
        "views": views,
        "output_path": output_path,
    }


def main(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Mixture exposure/outcome network builder")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory with the input CSVs")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for view CSV/JSON output")
    parser.add_argument("--alpha", type=float, default=SIGNIFICANCE_ALPHA,
                        help=f"Significance threshold (default: {SIGNIFICANCE_ALPHA})")
    parser.add_argument("--strict", action="store_true", help="Fail on a name claimed by two categories")
    parser.add_argument("--no-save", action="store_true", help="Do not write output files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run_pipeline(
            data_dir=args.data_dir,
            output_dir=args.output_dir,
            alpha=args.alpha,
            strict=args.strict,
            save=not args.no_save,
        )
    except (NetworkError, FileNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
