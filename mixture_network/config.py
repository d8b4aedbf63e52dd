"""
Mixture Network — Configuration
Paths, input manifest, window tags and column aliases.
"""
from pathlib import Path

# ── Base paths ──────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = BASE_DIR / "output_data"

# ── Input tables (one per outcome category × effect type) ──────
# filter_significance: apply SIGNIFICANCE_ALPHA to p_value on load.
# Only the metabolite exports still carry non-significant rows.
INPUT_TABLES = [
    {"category": "Metabolite", "effect_type": "main",
     "filename": "metabolite_main.csv", "filter_significance": True},
    {"category": "Metabolite", "effect_type": "interaction",
     "filename": "metabolite_interaction.csv", "filter_significance": True},
    {"category": "Cortical Thickness", "effect_type": "main",
     "filename": "thickness_main.csv", "filter_significance": False},
    {"category": "Cortical Thickness", "effect_type": "interaction",
     "filename": "thickness_interaction.csv", "filter_significance": False},
    {"category": "Volume", "effect_type": "main",
     "filename": "volume_main.csv", "filter_significance": False},
    {"category": "Volume", "effect_type": "interaction",
     "filename": "volume_interaction.csv", "filter_significance": False},
    {"category": "Subcortical Volume", "effect_type": "main",
     "filename": "subcortical_main.csv", "filter_significance": False},
    {"category": "Subcortical Volume", "effect_type": "interaction",
     "filename": "subcortical_interaction.csv", "filter_significance": False},
]

SIGNIFICANCE_ALPHA = 0.05

# ── Windows ────────────────────────────────────────────────────
# "all" tags window-independent main effects.
WINDOWS = ("prenatal", "birth", "three_year")
ALL_WINDOW = "all"
WINDOW_TAGS = WINDOWS + (ALL_WINDOW,)

# Edge ordering precedence
WINDOW_ORDER = {
    "prenatal": 0,
    "birth": 1,
    "three_year": 2,
    "all": 3,
}

# The four rendered views; "main" shows main effects only.
MAIN_VIEW = "main"
VIEWS = (MAIN_VIEW,) + WINDOWS

EFFECT_TYPES = ("main", "interaction")

# ── Column normalization ───────────────────────────────────────
# Keys are lowercased, stripped header names as they appear in the
# model exports; values are the unified column names.
COLUMN_ALIASES = {
    "exposure": "exposure",
    "exposure_name": "exposure",
    "chem": "exposure",
    "chemical": "exposure",
    "mixture": "exposure",
    "outcome_name": "outcome_name",
    "outcome": "outcome_name",
    "region": "outcome_name",
    "metabolite": "outcome_name",
    "variable": "outcome_name",
    "estimate": "estimate",
    "beta": "estimate",
    "coef": "estimate",
    "p_value": "p_value",
    "p": "p_value",
    "pval": "p_value",
    "p.value": "p_value",
    "window": "window",
    "time": "window",
    "timepoint": "window",
    "period": "window",
    "sign": "sign",
    "direction": "sign",
}

# Keys are lowercased with "-" and "_" folded to spaces.
WINDOW_ALIASES = {
    "prenatal": "prenatal",
    "pregnancy": "prenatal",
    "gestation": "prenatal",
    "birth": "birth",
    "delivery": "birth",
    "cord": "birth",
    "three year": "three_year",
    "3 year": "three_year",
    "3 years": "three_year",
    "3yr": "three_year",
    "3 yr": "three_year",
    "36 months": "three_year",
    "all": "all",
}

SIGN_ALIASES = {
    "positive": "positive",
    "pos": "positive",
    "+": "positive",
    "negative": "negative",
    "neg": "negative",
    "-": "negative",
}
