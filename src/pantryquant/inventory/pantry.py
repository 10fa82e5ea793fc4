"""In-memory pantry that applies merge, consume and low-stock rules."""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime

from pantryquant.inventory.reconcile import (
    calculate_new_inventory,
    is_low_stock,
    merge_quantities,
)
from pantryquant.logging_config import LoggingContext, get_logger
from pantryquant.normalize.units import COUNT_UNIT

logger = get_logger(__name__)

# How many emptied items are remembered for "buy again" suggestions
RECENTLY_EMPTIED_LIMIT = 50

DEFAULT_CATEGORY = "General"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _normalize_name(name: str) -> str:
    return name.lower().strip()


@dataclass
class PantryItem:
    """A single pantry record."""

    name: str
    quantity: str
    unit: str | None = None
    category: str = DEFAULT_CATEGORY
    expiry_date: date | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    added_at: datetime = field(default_factory=_utcnow)

    @property
    def is_low_stock(self) -> bool:
        """Check if the item is running low for its category."""
        return is_low_stock(self.quantity, self.unit or COUNT_UNIT, self.category)


@dataclass
class EmptiedItem:
    """Record of an item that was used up or deleted."""

    name: str
    category: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    removed_at: datetime = field(default_factory=_utcnow)


@dataclass
class ConsumptionReport:
    """Which pantry items a consume call touched and how."""

    updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    degraded: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)


class Pantry:
    """
    Holds pantry items and keeps them reconciled.

    Adding an item whose name already exists merges the quantities when the
    units allow it, so the pantry never holds avoidable duplicates.
    Consuming ingredients updates or removes items based on what is left.
    """

    def __init__(
        self,
        items: Iterable[PantryItem] | None = None,
        recently_emptied: Iterable[EmptiedItem] | None = None,
    ):
        self._items: list[PantryItem] = list(items or [])
        self._recently_emptied: list[EmptiedItem] = list(recently_emptied or [])[
            :RECENTLY_EMPTIED_LIMIT
        ]

    @property
    def items(self) -> list[PantryItem]:
        return list(self._items)

    @property
    def recently_emptied(self) -> list[EmptiedItem]:
        """Emptied items, newest first."""
        return list(self._recently_emptied)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: str) -> PantryItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def find_by_name(self, name: str) -> PantryItem | None:
        """Find an item by name, ignoring case and surrounding whitespace."""
        key = _normalize_name(name)
        for item in self._items:
            if _normalize_name(item.name) == key:
                return item
        return None

    def add_item(
        self,
        name: str,
        quantity: str,
        unit: str | None = None,
        category: str = DEFAULT_CATEGORY,
        expiry_date: date | None = None,
    ) -> PantryItem:
        """
        Add an item, merging into an existing one with the same name.

        The merged item keeps the earlier of the two expiry dates. If the
        units are incompatible a separate item is created instead.

        Returns:
            The updated existing item or the newly created one.
        """
        existing = self.find_by_name(name)

        if existing is not None:
            merged_qty = merge_quantities(existing.quantity, existing.unit, quantity, unit)
            if merged_qty is not None:
                changes: dict = {"quantity": merged_qty}
                if expiry_date and (
                    existing.expiry_date is None or expiry_date < existing.expiry_date
                ):
                    changes["expiry_date"] = expiry_date

                logger.info(f"Merged {quantity} {unit or COUNT_UNIT} into {existing.name}")
                return self._replace(existing, **changes)

            logger.info(
                f"Units {existing.unit!r} and {unit!r} are incompatible, "
                f"adding {name} as a separate item"
            )

        item = PantryItem(
            name=name,
            quantity=quantity,
            unit=unit,
            category=category,
            expiry_date=expiry_date,
        )
        self._items.append(item)
        return item

    def update_item(self, item_id: str, **changes) -> PantryItem | None:
        """Apply field changes to an item. Unknown ids return None."""
        item = self.get(item_id)
        if item is None:
            logger.warning(f"Cannot update unknown pantry item {item_id}")
            return None
        return self._replace(item, **changes)

    def remove_item(self, item_id: str) -> PantryItem | None:
        """Remove an item and remember it as recently emptied."""
        item = self.get(item_id)
        if item is None:
            logger.warning(f"Cannot remove unknown pantry item {item_id}")
            return None

        self._items = [i for i in self._items if i.id != item_id]
        self._recently_emptied.insert(0, EmptiedItem(name=item.name, category=item.category))
        del self._recently_emptied[RECENTLY_EMPTIED_LIMIT:]
        return item

    def consume(self, usage: Iterable[tuple[str, str]]) -> ConsumptionReport:
        """
        Deduct used amounts from pantry items.

        Args:
            usage: Pairs of (pantry item id, used amount text such as "200 g").

        Returns:
            ConsumptionReport listing updated, removed, degraded and unknown ids.
        """
        report = ConsumptionReport()

        for item_id, used_amount in usage:
            with LoggingContext(item_id=item_id):
                item = self.get(item_id)
                if item is None:
                    logger.warning(f"Skipping usage {used_amount!r} for unknown pantry item")
                    report.unknown.append(item_id)
                    continue

                result = calculate_new_inventory(
                    item.quantity, item.unit or COUNT_UNIT, used_amount
                )
                if result.degraded:
                    report.degraded.append(item_id)

                if result.should_remove:
                    self.remove_item(item_id)
                    report.removed.append(item_id)
                else:
                    self._replace(item, quantity=result.new_quantity)
                    report.updated.append(item_id)

        logger.info(
            f"Consumed ingredients: {len(report.updated)} updated, "
            f"{len(report.removed)} removed, {len(report.unknown)} unknown"
        )
        return report

    def low_stock_items(self) -> list[PantryItem]:
        """Get items running low for their category."""
        return [item for item in self._items if item.is_low_stock]

    def _replace(self, item: PantryItem, **changes) -> PantryItem:
        updated = replace(item, **changes)
        self._items = [updated if i.id == item.id else i for i in self._items]
        return updated
