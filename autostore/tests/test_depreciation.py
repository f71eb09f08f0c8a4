import pytest

from autostore.domain.depreciation import (
    FACTORS,
    apply_depreciation,
    depreciation_factor,
    normalize_condition,
)
from autostore.errors import InvalidConditionError


@pytest.mark.parametrize(
    "condition, factor",
    [("NEW", 0.0), ("SEMI_NEW", 0.05), ("USED", 0.10), ("DAMAGED", 0.15)],
)
@pytest.mark.parametrize("price", [0.0, 1.0, 1000.0, 12345.67])
def test_factor_table(condition, factor, price):
    assert FACTORS[condition] == factor
    assert abs(apply_depreciation(condition, price) - price * (1 - factor)) < 1e-9


def test_case_insensitive_and_whitespace():
    assert normalize_condition("used") == "USED"
    assert normalize_condition("  Semi_New ") == "SEMI_NEW"
    assert apply_depreciation("damaged", 200.0) == pytest.approx(170.0)


def test_legacy_labels():
    assert normalize_condition("NOVO") == "NEW"
    assert normalize_condition("semi_novo") == "SEMI_NEW"
    assert normalize_condition("Usado") == "USED"
    assert normalize_condition("BATIDO") == "DAMAGED"
    assert apply_depreciation("SEMI_NOVO", 1000.0) == 950.0


def test_new_leaves_price_untouched():
    assert apply_depreciation("NEW", 999.99) == 999.99


@pytest.mark.parametrize("label", ["MINT", "", None, "SEMI NEW"])
def test_unknown_condition_raises(label):
    with pytest.raises(InvalidConditionError) as ei:
        apply_depreciation(label, 1000.0)
    assert ei.value.condition == label
    with pytest.raises(InvalidConditionError):
        depreciation_factor(label)


def test_factor_lookup():
    assert depreciation_factor("used") == 0.10
