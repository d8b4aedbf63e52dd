import warnings

import pandas as pd
import pytest

from mixture_network.config import WINDOW_TAGS
from mixture_network.errors import DuplicateCategoryConflict, SchemaError
from mixture_network.network.edge_deriver import derive_edges
from mixture_network.network.node_deriver import NODE_COLUMNS, derive_nodes, node_windows


def _by_name(nodes):
    return nodes.set_index("display_name")


def test_caudate_example_gives_three_nodes(caudate_rows):
    nodes, lookup = derive_nodes(caudate_rows)

    assert list(nodes.columns) == NODE_COLUMNS
    assert nodes[["display_name", "category"]].values.tolist() == [
        ["BDCPP", "Chemical Mixture"],
        ["Caudate (Vol.)", "Volume"],
        ["Caudate (CT)", "Cortical Thickness"],
    ]
    assert nodes["id"].tolist() == [0, 1, 2]
    assert lookup == {
        ("BDCPP", "Chemical Mixture"): 0,
        ("Caudate (Vol.)", "Volume"): 1,
        ("Caudate (CT)", "Cortical Thickness"): 2,
    }


def test_same_name_in_volume_and_subcortical_is_two_nodes(make_rows):
    rows = make_rows([
        ("DPHP", "Amygdala", "Volume", "all", "main", "positive"),
        ("DPHP", "Amygdala", "Subcortical Volume", "all", "main", "positive"),
    ])
    nodes, lookup = derive_nodes(rows)

    assert len(nodes) == 3
    assert lookup[("Amygdala (Vol.)", "Volume")] != lookup[("Amygdala", "Subcortical Volume")]


def test_repeated_keys_collapse(study_rows):
    nodes, lookup = derive_nodes(study_rows)

    assert nodes["display_name"].is_unique
    assert len(nodes) == len(lookup)
    # 3 exposures + Caudate (Vol.), Glutamine, Caudate (CT), Amygdala,
    # Amygdala (Vol.), Insula (CT)
    assert len(nodes) == 9
    assert sorted(nodes.loc[nodes["category"] == "Chemical Mixture", "display_name"]) == ["BCEP", "BDCPP", "DPHP"]


def test_window_membership(study_rows):
    nodes, _ = derive_nodes(study_rows)
    windows = node_windows(nodes)
    ids = _by_name(nodes)["id"]

    assert windows[ids["BDCPP"]] == {"all", "prenatal", "three_year"}
    assert windows[ids["Caudate (Vol.)"]] == {"all", "three_year", "prenatal"}
    assert windows[ids["Caudate (CT)"]] == {"prenatal"}
    assert windows[ids["Glutamine"]] == {"all", "prenatal"}
    assert windows[ids["Amygdala"]] == {"birth"}
    assert nodes[list(WINDOW_TAGS)].dtypes.map(lambda d: d == bool).all()


def test_window_membership_matches_edges_for_every_node(study_rows):
    nodes, lookup = derive_nodes(study_rows)
    edges = derive_edges(study_rows, lookup)

    for node_id, windows in node_windows(nodes).items():
        touching = edges.loc[(edges["from_id"] == node_id) | (edges["to_id"] == node_id), "window"]
        assert windows == set(touching), nodes.loc[nodes["id"] == node_id, "display_name"].iloc[0]
    assert len(node_windows(nodes)) == len(nodes)


def test_ids_are_deterministic(study_rows):
    first_nodes, first_lookup = derive_nodes(study_rows)
    second_nodes, second_lookup = derive_nodes(study_rows.copy())

    pd.testing.assert_frame_equal(first_nodes, second_nodes)
    assert first_lookup == second_lookup


def test_exposure_found_only_in_outcome_table_is_still_chemical_mixture(make_rows):
    rows = make_rows([("BCIPP", "Glycine", "Metabolite", "birth", "interaction", "negative")])
    nodes, _ = derive_nodes(rows)
    assert _by_name(nodes).loc["BCIPP", "category"] == "Chemical Mixture"


def test_name_claimed_by_two_categories_warns_and_keeps_first(make_rows):
    rows = make_rows([
        ("BDCPP", "Thalamus", "Metabolite", "all", "main", "positive"),
        ("DPHP", "Thalamus", "Subcortical Volume", "birth", "interaction", "negative"),
    ])

    with pytest.warns(DuplicateCategoryConflict, match="Thalamus"):
        nodes, lookup = derive_nodes(rows)

    thalamus = _by_name(nodes).loc["Thalamus"]
    assert thalamus["category"] == "Metabolite"
    assert lookup[("Thalamus", "Subcortical Volume")] == thalamus["id"]
    assert bool(thalamus["birth"]) and bool(thalamus["all"])
    assert len(nodes) == 3


def test_name_claimed_by_two_categories_raises_in_strict_mode(make_rows):
    rows = make_rows([
        ("BDCPP", "Thalamus", "Metabolite", "all", "main", "positive"),
        ("DPHP", "Thalamus", "Subcortical Volume", "birth", "interaction", "negative"),
    ])
    with pytest.raises(DuplicateCategoryConflict) as exc:
        derive_nodes(rows, strict=True)
    assert exc.value.kept_category == "Metabolite"
    assert exc.value.claimed_category == "Subcortical Volume"


def test_no_warning_for_clean_input(study_rows):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        derive_nodes(study_rows)


def test_missing_column_is_schema_error(study_rows):
    with pytest.raises(SchemaError):
        derive_nodes(study_rows.drop(columns=["window"]))


def test_empty_rows(make_rows):
    nodes, lookup = derive_nodes(make_rows([]))
    assert nodes.empty
    assert list(nodes.columns) == NODE_COLUMNS
    assert lookup == {}
