# backend/app/services/tax_rules.py
"""
Reglas de impuestos de la jerarquía Categoría > Subcategoría > Ítem.

Funciones puras, sin acceso a base de datos, que usan los servicios antes de
persistir. Cada entidad con impuestos se comporta como una pequeña máquina
de estados:

- sin impuesto (tax_applicability=False, tax=None)
- con impuesto (tax_applicability=True, tax >= 0)

Pasar a "con impuesto" exige un valor de tax en la misma transición (el del
payload o el que ya tenía el registro). Pasar a "sin impuesto" borra el tax.

La herencia es una copia puntual: una subcategoría toma los valores de su
categoría en el momento de crearse y no se actualiza si el padre cambia.
"""

from typing import Any, NamedTuple, Optional

from app.core.exceptions import BusinessRuleError

TAX_REQUIRED_MESSAGE = "Tax value is required and must be non-negative when tax applicability is enabled"
TAX_REQUIRED_ON_ENABLE_MESSAGE = "Tax value is required when enabling tax applicability"
TAX_WITHOUT_APPLICABILITY_MESSAGE = "Cannot set tax value when tax applicability is disabled"


class TaxSettings(NamedTuple):
    """Par (tax_applicability, tax) de una entidad. None significa 'heredar'."""
    applicability: Optional[bool]
    tax: Optional[float]

    @classmethod
    def of(cls, entity: Any) -> "TaxSettings":
        return cls(entity.tax_applicability, entity.tax)


def _check_tax_value(tax: Optional[float], message: str) -> float:
    if tax is None or tax < 0:
        raise BusinessRuleError(message)
    return tax


def resolve_new_tax(applicability: bool, tax: Optional[float]) -> TaxSettings:
    """
    Resuelve los impuestos de una entidad nueva con valores explícitos.

    Con applicability=True el tax es obligatorio; en otro caso se descarta.
    """
    if applicability:
        return TaxSettings(True, _check_tax_value(tax, TAX_REQUIRED_MESSAGE))
    return TaxSettings(False, None)


def inherit_tax(
    applicability: Optional[bool],
    tax: Optional[float],
    parent: TaxSettings,
) -> TaxSettings:
    """
    Impuestos efectivos de una entidad hija en el momento de su creación.

    Los campos no informados se copian del padre. Si el resultado tiene el
    impuesto activo debe existir un tax válido, propio o heredado.
    """
    effective_applicability = parent.applicability if applicability is None else applicability
    if not effective_applicability:
        return TaxSettings(False, None)
    effective_tax = parent.tax if tax is None else tax
    return TaxSettings(True, _check_tax_value(effective_tax, TAX_REQUIRED_MESSAGE))


def apply_tax_change(
    current: TaxSettings,
    applicability: Optional[bool] = None,
    tax: Optional[float] = None,
    fallback_tax: Optional[float] = None,
) -> TaxSettings:
    """
    Aplica una actualización parcial de impuestos sobre el estado actual.

    Args:
        current: valores guardados en el registro
        applicability: nuevo tax_applicability, o None si no se informa
        tax: nuevo tax, o None si no se informa
        fallback_tax: valor a usar al activar el impuesto si ni el payload
            ni el registro tienen uno (p. ej. el tax actual del padre)

    Returns:
        TaxSettings resultante, que cumple la invariante
        "tax_applicability implica tax >= 0".
    """
    if applicability is True:
        for candidate in (tax, current.tax, fallback_tax):
            if candidate is not None:
                return TaxSettings(True, _check_tax_value(candidate, TAX_REQUIRED_ON_ENABLE_MESSAGE))
        raise BusinessRuleError(TAX_REQUIRED_ON_ENABLE_MESSAGE)

    if applicability is False:
        return TaxSettings(False, None)

    if tax is not None:
        if not current.applicability:
            raise BusinessRuleError(TAX_WITHOUT_APPLICABILITY_MESSAGE)
        return TaxSettings(True, _check_tax_value(tax, TAX_REQUIRED_MESSAGE))

    return current
