"""
Variable category mapper.
Maps every graph variable to one of five categories and derives its
display name and palette role.

  Chemical Mixture   — exposures (always edge sources)
  Metabolite         — urinary/serum metabolite outcomes
  Cortical Thickness — cortical thickness per region, shown with " (CT)"
  Volume             — cortical volume per region, shown with " (Vol.)"
  Subcortical Volume — subcortical structure volumes

Thickness and volume share region names (e.g. "Caudate"), so those two
categories carry a suffix. The others are shown by their raw name.
"""
from enum import Enum
from typing import Dict

from mixture_network.errors import SchemaError


class Category(str, Enum):
    CHEMICAL_MIXTURE = "Chemical Mixture"
    METABOLITE = "Metabolite"
    CORTICAL_THICKNESS = "Cortical Thickness"
    VOLUME = "Volume"
    SUBCORTICAL_VOLUME = "Subcortical Volume"


OUTCOME_CATEGORIES = (
    Category.METABOLITE,
    Category.CORTICAL_THICKNESS,
    Category.VOLUME,
    Category.SUBCORTICAL_VOLUME,
)

CATEGORY_SUFFIX: Dict[Category, str] = {
    Category.CORTICAL_THICKNESS: " (CT)",
    Category.VOLUME: " (Vol.)",
}

# Renderer picks colors per role; no styling here.
PALETTE_ROLE: Dict[Category, str] = {
    Category.CHEMICAL_MIXTURE: "exposure",
    Category.METABOLITE: "metabolite",
    Category.CORTICAL_THICKNESS: "cortical_thickness",
    Category.VOLUME: "volume",
    Category.SUBCORTICAL_VOLUME: "subcortical_volume",
}

# Short labels used in some model exports
_CATEGORY_CODES = {
    "chem": Category.CHEMICAL_MIXTURE,
    "chem. mix.": Category.CHEMICAL_MIXTURE,
    "met": Category.METABOLITE,
    "ct": Category.CORTICAL_THICKNESS,
    "thickness": Category.CORTICAL_THICKNESS,
    "vol": Category.VOLUME,
    "vol.": Category.VOLUME,
    "subcortical": Category.SUBCORTICAL_VOLUME,
    "subcort": Category.SUBCORTICAL_VOLUME,
}


def parse_category(value) -> Category:
    """Resolve a category label (full name or short code) to a Category."""
    if isinstance(value, Category):
        return value
    key = str(value).strip().lower()
    for cat in Category:
        if cat.value.lower() == key:
            return cat
    if key in _CATEGORY_CODES:
        return _CATEGORY_CODES[key]
    raise SchemaError(f"unknown category {value!r}")


def parse_outcome_category(value) -> Category:
    cat = parse_category(value)
    if cat not in OUTCOME_CATEGORIES:
        raise SchemaError(f"{cat.value} is not an outcome category")
    return cat


def display_name(raw_name: str, category) -> str:
    """Raw variable name with the category suffix where one applies."""
    return f"{str(raw_name).strip()}{CATEGORY_SUFFIX.get(parse_category(category), '')}"


def palette_role(category) -> str:
    return PALETTE_ROLE[parse_category(category)]
