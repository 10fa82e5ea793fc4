"""Merge, consume and low-stock rules applied to pantry quantities."""

from dataclasses import dataclass

from pantryquant.logging_config import get_logger
from pantryquant.normalize.units import (
    COUNT_UNIT,
    Quantity,
    convert,
    format_quantity,
    normalize_unit,
    parse_number,
    parse_quantity,
)

logger = get_logger(__name__)


# =============================================================================
# Policy Constants
# =============================================================================

# Remaining share of the original amount treated as used up
DEPLETION_MARGIN = 0.05

# Amount deducted when the used amount can't be expressed in the pantry unit
FALLBACK_DECREMENT = 1.0

SPICES_CATEGORY = "Spices"
BULK_CATEGORIES: frozenset[str] = frozenset({"Dairy", "Beverages", "Grains"})

# Small quantities are normal for spices; other units are never flagged
SPICE_THRESHOLDS: dict[str, float] = {
    "g": 10.0,
    "ml": 10.0,
    "oz": 0.5,
    "tbsp": 1.0,
}

# Milk, juice, flour: less than about a cup is low
BULK_THRESHOLDS: dict[str, float] = {
    "g": 250.0,
    "ml": 250.0,
    "kg": 0.25,
    "l": 0.25,
}

GENERAL_THRESHOLDS: dict[str, float] = {
    "g": 150.0,
    "ml": 150.0,
    "kg": 0.2,
    "l": 0.2,
    "lb": 0.5,
    "oz": 6.0,
    "cups": 0.5,
    "tbsp": 2.0,
    "tsp": 5.0,
}

# Eggs, onions, cans, bottles
COUNT_THRESHOLD = 2.0


@dataclass(frozen=True)
class ConsumptionResult:
    """Outcome of deducting a used amount from a pantry quantity."""

    new_quantity: str
    should_remove: bool
    # True when the used amount was incompatible and the fallback decrement applied
    degraded: bool = False


# =============================================================================
# Merging
# =============================================================================


def merge_quantities(
    qty1: str,
    unit1: str | None,
    qty2: str,
    unit2: str | None,
) -> str | None:
    """
    Merge two quantities, converting units if compatible.

    The first operand is authoritative: the sum is expressed in unit1.

    Returns:
        The merged quantity formatted for display, or None when the units
        are incompatible and the entries must stay separate.
    """
    u1 = normalize_unit(unit1 or COUNT_UNIT)
    u2 = normalize_unit(unit2 or COUNT_UNIT)
    val1 = parse_number(qty1) or 0.0
    val2 = parse_number(qty2) or 0.0

    if u1 == u2:
        return format_quantity(val1 + val2)

    converted = convert(Quantity(val=val2, unit=u2), u1)
    if converted is None:
        logger.info(f"Cannot merge {qty2} {u2} into {qty1} {u1}")
        return None

    return format_quantity(val1 + converted)


# =============================================================================
# Consumption
# =============================================================================


def calculate_new_inventory(
    pantry_qty: str,
    pantry_unit: str | None,
    used_amount: str,
) -> ConsumptionResult:
    """
    Deduct a used amount from a pantry quantity.

    The used amount is parsed as free text and converted into the pantry
    unit. When that is impossible (e.g. "200 ml" against "500 g") exactly
    one pantry unit is deducted instead. An item with 5% or less of its
    original amount left is considered used up.

    A pantry quantity that is not a number is left untouched.
    """
    current = parse_number(pantry_qty)
    current_unit = normalize_unit(pantry_unit or COUNT_UNIT)

    if current is None:
        logger.warning(
            f"Pantry quantity {pantry_qty!r} is not numeric, leaving it unchanged",
            extra={"extra_data": {"pantry_quantity": pantry_qty, "used_amount": used_amount}},
        )
        return ConsumptionResult(new_quantity=pantry_qty, should_remove=False, degraded=True)

    used = parse_quantity(used_amount)
    used_converted = convert(used, current_unit)

    degraded = used_converted is None
    if used_converted is None:
        logger.warning(
            f"Cannot express {used_amount!r} in {current_unit}, "
            f"deducting {format_quantity(FALLBACK_DECREMENT)} {current_unit}",
            extra={
                "extra_data": {
                    "pantry_quantity": pantry_qty,
                    "pantry_unit": current_unit,
                    "used_amount": used_amount,
                }
            },
        )
        remaining = current - FALLBACK_DECREMENT
    else:
        remaining = current - used_converted

    if remaining <= 0 or remaining <= DEPLETION_MARGIN * current:
        return ConsumptionResult(new_quantity="0", should_remove=True, degraded=degraded)

    return ConsumptionResult(
        new_quantity=format_quantity(remaining),
        should_remove=False,
        degraded=degraded,
    )


# =============================================================================
# Low Stock
# =============================================================================


def is_low_stock(quantity: str, unit: str | None, category: str) -> bool:
    """
    Decide whether a pantry item is running low.

    Thresholds depend on the category first and the unit second:
    spices tolerate tiny amounts, dairy/beverages/grains are flagged
    earlier, and countable items are low at two or fewer.
    """
    qty = parse_number(quantity)
    if qty is None:
        return False
    u = normalize_unit(unit or COUNT_UNIT)

    if category == SPICES_CATEGORY:
        threshold = SPICE_THRESHOLDS.get(u)
        return threshold is not None and qty <= threshold

    if category in BULK_CATEGORIES and u in BULK_THRESHOLDS:
        return qty <= BULK_THRESHOLDS[u]

    if u in GENERAL_THRESHOLDS:
        return qty <= GENERAL_THRESHOLDS[u]

    return qty <= COUNT_THRESHOLD
