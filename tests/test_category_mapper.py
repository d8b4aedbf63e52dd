import pytest

from mixture_network.data_prep.category_mapper import (
    Category,
    display_name,
    palette_role,
    parse_category,
    parse_outcome_category,
)
from mixture_network.errors import SchemaError


def test_suffix_only_for_thickness_and_volume():
    assert display_name("Caudate", "Cortical Thickness") == "Caudate (CT)"
    assert display_name("Caudate", "Volume") == "Caudate (Vol.)"
    assert display_name("Amygdala", "Subcortical Volume") == "Amygdala"
    assert display_name("Glutamine", "Metabolite") == "Glutamine"
    assert display_name("BDCPP", Category.CHEMICAL_MIXTURE) == "BDCPP"


def test_parse_category_codes_and_case():
    assert parse_category("volume") is Category.VOLUME
    assert parse_category("CT") is Category.CORTICAL_THICKNESS
    assert parse_category(Category.METABOLITE) is Category.METABOLITE
    with pytest.raises(SchemaError):
        parse_category("Surface Area")


def test_exposure_is_not_an_outcome_category():
    with pytest.raises(SchemaError):
        parse_outcome_category("Chemical Mixture")


def test_every_category_has_a_palette_role():
    roles = {palette_role(cat) for cat in Category}
    assert len(roles) == len(Category)
    assert palette_role("Chemical Mixture") == "exposure"
