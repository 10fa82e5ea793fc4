"""Apply quantity rules to pantry items."""

from pantryquant.inventory.pantry import (
    ConsumptionReport,
    EmptiedItem,
    Pantry,
    PantryItem,
)
from pantryquant.inventory.reconcile import (
    ConsumptionResult,
    calculate_new_inventory,
    is_low_stock,
    merge_quantities,
)

__all__ = [
    "ConsumptionReport",
    "ConsumptionResult",
    "EmptiedItem",
    "Pantry",
    "PantryItem",
    "calculate_new_inventory",
    "is_low_stock",
    "merge_quantities",
]
