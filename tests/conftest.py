import pandas as pd
import pytest

from mixture_network.etl.loader import RawTable


def rows_frame(records):
    """Unified effect rows from (exposure, outcome, category, window, effect_type, sign) tuples."""
    frame = pd.DataFrame.from_records(
        records,
        columns=["exposure", "outcome_name", "outcome_category", "window", "effect_type", "sign"],
    )
    frame["estimate"] = frame["sign"].map({"positive": 0.5, "negative": -0.5})
    frame["p_value"] = 0.01
    return frame


@pytest.fixture
def caudate_rows():
    return rows_frame([
        ("BDCPP", "Caudate", "Volume", "prenatal", "main", "positive"),
        ("BDCPP", "Caudate", "Cortical Thickness", "birth", "interaction", "negative"),
    ])


@pytest.fixture
def study_rows():
    return rows_frame([
        ("BDCPP", "Caudate", "Volume", "all", "main", "positive"),
        ("DPHP", "Glutamine", "Metabolite", "all", "main", "negative"),
        ("BDCPP", "Caudate", "Cortical Thickness", "prenatal", "interaction", "negative"),
        ("DPHP", "Amygdala", "Subcortical Volume", "birth", "interaction", "positive"),
        ("BCEP", "Amygdala", "Volume", "birth", "interaction", "negative"),
        ("BDCPP", "Caudate", "Volume", "three_year", "interaction", "positive"),
        ("BCEP", "Glutamine", "Metabolite", "prenatal", "interaction", "positive"),
        ("DPHP", "Insula", "Cortical Thickness", "three_year", "interaction", "negative"),
        ("BDCPP", "Caudate", "Volume", "prenatal", "interaction", "negative"),
    ])


@pytest.fixture
def raw_tables():
    return [
        RawTable(
            category="Volume",
            effect_type="main",
            frame=pd.DataFrame({
                "Chem": ["BDCPP", "DPHP"],
                "Region": ["Caudate", "Putamen"],
                "Beta": [0.8, -1.2],
                "p": [0.01, 0.03],
            }),
            source="volume_main.csv",
        ),
        RawTable(
            category="Cortical Thickness",
            effect_type="interaction",
            frame=pd.DataFrame({
                "exposure": ["BDCPP", "BCEP"],
                "outcome": ["Caudate", "Insula"],
                "estimate": [-0.3, 0.4],
                "Window": ["Prenatal", "3 years"],
            }),
            source="thickness_interaction.csv",
        ),
    ]


@pytest.fixture
def make_rows():
    return rows_frame
