# backend/app/services/item_rules.py
"""
Reglas de integridad de los ítems del menú.

- Un ítem pertenece exactamente a un padre: categoría XOR subcategoría.
- El descuento nunca supera el importe base.
- total_amount = base_amount - discount, recalculado antes de cada escritura.
"""

import logging
from typing import AbstractSet, Any, Optional, Tuple

from app.core.exceptions import BusinessRuleError
from app.services.tax_rules import TAX_REQUIRED_MESSAGE

logger = logging.getLogger(__name__)

BOTH_PARENTS_MESSAGE = "Item cannot belong to both category and subcategory"
NO_PARENT_MESSAGE = "Item must belong to either a category or subcategory"
DISCOUNT_MESSAGE = "Discount cannot exceed base amount"


def check_exclusive_parent(category_id: Optional[int], subcategory_id: Optional[int]) -> None:
    if category_id is not None and subcategory_id is not None:
        raise BusinessRuleError(BOTH_PARENTS_MESSAGE)
    if category_id is None and subcategory_id is None:
        raise BusinessRuleError(NO_PARENT_MESSAGE)


def resolve_parent_update(
    current_category_id: Optional[int],
    current_subcategory_id: Optional[int],
    category_id: Optional[int],
    subcategory_id: Optional[int],
    fields_set: AbstractSet[str],
) -> Tuple[Optional[int], Optional[int]]:
    """
    Calcula los padres de un ítem tras una actualización parcial.

    Informar un padre nuevo anula el otro. Un campo informado sin valor
    (null o cadena vacía) borra esa referencia; uno no informado la conserva.
    """
    if category_id is not None and subcategory_id is not None:
        raise BusinessRuleError(BOTH_PARENTS_MESSAGE)
    if category_id is not None:
        return category_id, None
    if subcategory_id is not None:
        return None, subcategory_id

    new_category_id = None if "category_id" in fields_set else current_category_id
    new_subcategory_id = None if "subcategory_id" in fields_set else current_subcategory_id
    check_exclusive_parent(new_category_id, new_subcategory_id)
    return new_category_id, new_subcategory_id


def check_discount(base_amount: float, discount: float) -> None:
    if discount > base_amount:
        raise BusinessRuleError(DISCOUNT_MESSAGE)


def compute_total_amount(base_amount: float, discount: Optional[float]) -> float:
    return base_amount - (discount or 0)


def normalize_item(item: Any) -> Any:
    """
    Prepara un ítem para persistirse.

    Se invoca justo antes de cada commit: comprueba las invariantes y
    reescribe total_amount aunque no hayan cambiado los importes.
    """
    check_exclusive_parent(item.category_id, item.subcategory_id)
    if item.discount is None:
        item.discount = 0
    check_discount(item.base_amount, item.discount)
    if item.tax_applicability:
        if item.tax is None or item.tax < 0:
            raise BusinessRuleError(TAX_REQUIRED_MESSAGE)
    else:
        item.tax = None
    item.total_amount = compute_total_amount(item.base_amount, item.discount)
    logger.debug(f"Ítem normalizado: total_amount={item.total_amount}")
    return item
