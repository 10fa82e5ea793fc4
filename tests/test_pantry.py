"""Unit tests for the in-memory Pantry."""

from datetime import date

from pantryquant.inventory.pantry import (
    RECENTLY_EMPTIED_LIMIT,
    EmptiedItem,
    Pantry,
    PantryItem,
)


class TestPantryItem:
    """Tests for PantryItem dataclass."""

    def test_generated_fields(self):
        """Test id and added_at are generated."""
        first = PantryItem(name="Salt", quantity="1")
        second = PantryItem(name="Salt", quantity="1")
        assert first.id != second.id
        assert first.added_at is not None

    def test_is_low_stock(self):
        """Test low stock property uses the item's category."""
        assert PantryItem(name="Milk", quantity="200", unit="ml", category="Dairy").is_low_stock
        assert not PantryItem(name="Juice", quantity="200", unit="ml").is_low_stock


class TestPantryLookup:
    """Tests for Pantry lookups."""

    def test_get(self, pantry):
        """Test lookup by id."""
        assert pantry.get("item-rice").name == "Rice"
        assert pantry.get("missing") is None

    def test_find_by_name_ignores_case_and_whitespace(self, pantry):
        """Test name lookup is case-insensitive and trimmed."""
        assert pantry.find_by_name("  rICE ").id == "item-rice"
        assert pantry.find_by_name("Basmati Rice") is None

    def test_items_is_a_copy(self, pantry):
        """Test the items list can't be mutated from outside."""
        pantry.items.clear()
        assert len(pantry) == 6


class TestPantryAddItem:
    """Tests for Pantry.add_item."""

    def test_add_new_item(self, pantry):
        """Test a new name creates a new item."""
        item = pantry.add_item("Butter", "250", "g", category="Dairy")
        assert len(pantry) == 7
        assert pantry.get(item.id).quantity == "250"

    def test_merge_same_unit(self, pantry):
        """Test a duplicate name merges quantities."""
        item = pantry.add_item("eggs", "6", "pieces")
        assert len(pantry) == 6
        assert item.id == "item-eggs"
        assert pantry.get("item-eggs").quantity == "12"

    def test_merge_converted_unit(self, pantry):
        """Test merging converts into the existing item's unit."""
        pantry.add_item("Rice", "500", "g")
        rice = pantry.get("item-rice")
        assert rice.quantity == "1.5"
        assert rice.unit == "kg"

    def test_incompatible_units_create_separate_item(self, pantry):
        """Test incompatible units keep both entries."""
        item = pantry.add_item("Milk", "1", "kg")
        assert len(pantry) == 7
        assert item.id != "item-milk"
        assert pantry.get("item-milk").quantity == "200"

    def test_merge_keeps_earlier_expiry(self, pantry):
        """Test the earlier expiry date wins."""
        pantry.add_item("Cumin", "5", "g", expiry_date=date(2026, 11, 1))
        assert pantry.get("item-cumin").expiry_date == date(2026, 11, 1)

        pantry.add_item("Cumin", "5", "g", expiry_date=date(2027, 6, 1))
        cumin = pantry.get("item-cumin")
        assert cumin.expiry_date == date(2026, 11, 1)
        assert cumin.quantity == "18"

    def test_merge_adopts_expiry_when_missing(self, pantry):
        """Test the new expiry is used when the existing item has none."""
        pantry.add_item("Flour", "1", "kg", expiry_date=date(2027, 1, 15))
        flour = pantry.get("item-flour")
        assert flour.expiry_date == date(2027, 1, 15)
        assert flour.quantity == "1500"


class TestPantryRemoveAndUpdate:
    """Tests for Pantry.remove_item and Pantry.update_item."""

    def test_remove_records_emptied(self, pantry):
        """Test removed items are remembered newest first."""
        pantry.remove_item("item-rice")
        pantry.remove_item("item-milk")

        assert pantry.get("item-rice") is None
        emptied = pantry.recently_emptied
        assert [e.name for e in emptied] == ["Milk", "Rice"]
        assert emptied[0].category == "Dairy"

    def test_remove_unknown(self, pantry):
        """Test removing an unknown id is a no-op."""
        assert pantry.remove_item("missing") is None
        assert len(pantry) == 6
        assert pantry.recently_emptied == []

    def test_recently_emptied_is_bounded(self):
        """Test the emptied log keeps only the most recent entries."""
        items = [PantryItem(name=f"item {i}", quantity="1") for i in range(60)]
        pantry = Pantry(items)
        for item in items:
            pantry.remove_item(item.id)

        emptied = pantry.recently_emptied
        assert len(emptied) == RECENTLY_EMPTIED_LIMIT
        assert emptied[0].name == "item 59"

    def test_initial_emptied_is_bounded(self):
        """Test a preloaded emptied log is trimmed."""
        emptied = [EmptiedItem(name=f"old {i}", category="General") for i in range(70)]
        pantry = Pantry(recently_emptied=emptied)
        assert len(pantry.recently_emptied) == RECENTLY_EMPTIED_LIMIT

    def test_update_item(self, pantry):
        """Test updating fields of an item."""
        updated = pantry.update_item("item-onion", quantity="5", unit="pcs")
        assert updated.quantity == "5"
        assert pantry.get("item-onion").unit == "pcs"

    def test_update_unknown(self, pantry):
        """Test updating an unknown id returns None."""
        assert pantry.update_item("missing", quantity="1") is None


class TestPantryConsume:
    """Tests for Pantry.consume."""

    def test_consume_updates_and_removes(self, pantry):
        """Test usage updates partially used items and removes used up ones."""
        report = pantry.consume([("item-rice", "300 g"), ("item-onion", "2")])

        assert report.updated == ["item-rice"]
        assert report.removed == ["item-onion"]
        assert pantry.get("item-rice").quantity == "0.7"
        assert pantry.get("item-onion") is None
        assert pantry.recently_emptied[0].name == "Onion"

    def test_consume_degraded(self, pantry):
        """Test incompatible usage is reported as degraded."""
        report = pantry.consume([("item-flour", "1 cup")])

        assert report.degraded == ["item-flour"]
        assert report.updated == ["item-flour"]
        assert pantry.get("item-flour").quantity == "499"

    def test_consume_unknown_item(self, pantry):
        """Test unknown ids are skipped and reported."""
        report = pantry.consume([("missing", "1 pcs"), ("item-eggs", "2 pcs")])

        assert report.unknown == ["missing"]
        assert pantry.get("item-eggs").quantity == "4"

    def test_consume_same_item_twice(self, pantry):
        """Test repeated usage of one item applies in order."""
        report = pantry.consume([("item-eggs", "2"), ("item-eggs", "4")])

        assert report.updated == ["item-eggs"]
        assert report.removed == ["item-eggs"]
        assert pantry.get("item-eggs") is None


class TestPantryLowStock:
    """Tests for Pantry.low_stock_items."""

    def test_low_stock_items(self, pantry):
        """Test low stock items across categories."""
        low = {item.id for item in pantry.low_stock_items()}
        assert low == {"item-milk", "item-onion", "item-cumin"}
