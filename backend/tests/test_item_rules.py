# backend/tests/test_item_rules.py

from types import SimpleNamespace

import pytest

from app.core.exceptions import BusinessRuleError
from app.services.item_rules import (
    BOTH_PARENTS_MESSAGE,
    DISCOUNT_MESSAGE,
    NO_PARENT_MESSAGE,
    check_discount,
    check_exclusive_parent,
    compute_total_amount,
    normalize_item,
    resolve_parent_update,
)


def make_item(**fields):
    values = dict(
        category_id=1,
        subcategory_id=None,
        tax_applicability=False,
        tax=None,
        base_amount=100.0,
        discount=0.0,
        total_amount=None,
    )
    values.update(fields)
    return SimpleNamespace(**values)


# ========================================
# PADRE EXCLUSIVO
# ========================================

def test_item_with_single_parent_is_valid():
    check_exclusive_parent(1, None)
    check_exclusive_parent(None, 2)


def test_item_with_both_parents_is_rejected():
    with pytest.raises(BusinessRuleError) as exc_info:
        check_exclusive_parent(1, 2)
    assert exc_info.value.message == BOTH_PARENTS_MESSAGE


def test_item_without_parent_is_rejected():
    with pytest.raises(BusinessRuleError) as exc_info:
        check_exclusive_parent(None, None)
    assert exc_info.value.message == NO_PARENT_MESSAGE


def test_moving_to_subcategory_clears_category():
    assert resolve_parent_update(1, None, None, 7, {"subcategory_id"}) == (None, 7)


def test_moving_to_category_clears_subcategory():
    assert resolve_parent_update(None, 7, 3, None, {"category_id"}) == (3, None)


def test_untouched_parents_are_kept():
    assert resolve_parent_update(None, 7, None, None, set()) == (None, 7)


def test_clearing_the_only_parent_is_rejected():
    with pytest.raises(BusinessRuleError):
        resolve_parent_update(1, None, None, None, {"category_id"})


def test_update_with_both_parents_is_rejected():
    with pytest.raises(BusinessRuleError):
        resolve_parent_update(1, None, 2, 3, {"category_id", "subcategory_id"})


# ========================================
# IMPORTES
# ========================================

def test_discount_equal_to_base_is_allowed():
    check_discount(50, 50)


def test_discount_above_base_is_rejected():
    with pytest.raises(BusinessRuleError) as exc_info:
        check_discount(50, 60)
    assert exc_info.value.message == DISCOUNT_MESSAGE


def test_total_amount_subtracts_discount():
    assert compute_total_amount(80, 10) == 70
    assert compute_total_amount(80, None) == 80


def test_normalize_recomputes_total_amount():
    item = normalize_item(make_item(base_amount=80, discount=10, total_amount=999))
    assert item.total_amount == 70


def test_normalize_defaults_missing_discount():
    item = normalize_item(make_item(discount=None))
    assert item.discount == 0
    assert item.total_amount == 100


def test_normalize_clears_tax_when_not_applicable():
    item = normalize_item(make_item(tax_applicability=False, tax=12))
    assert item.tax is None


def test_normalize_requires_tax_when_applicable():
    with pytest.raises(BusinessRuleError):
        normalize_item(make_item(tax_applicability=True, tax=None))


def test_normalize_rejects_discount_above_base():
    with pytest.raises(BusinessRuleError):
        normalize_item(make_item(base_amount=10, discount=11))
