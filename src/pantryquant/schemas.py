"""Common data schemas shared by the API routers."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from pantryquant.inventory.pantry import DEFAULT_CATEGORY, EmptiedItem, PantryItem


class PantryItemSchema(BaseModel):
    """Pantry item as exchanged with clients."""

    id: str | None = Field(None, description="Generated when omitted")
    name: str = Field(min_length=1)
    quantity: str = Field(description='Amount as text, e.g. "500" or "1.5"')
    unit: str | None = None
    category: str = DEFAULT_CATEGORY
    expiry_date: date | None = None
    added_at: datetime | None = None

    class Config:
        from_attributes = True

    def to_item(self) -> PantryItem:
        """Build the domain record, filling generated fields."""
        data = self.model_dump(exclude_none=True, exclude={"unit", "expiry_date"})
        return PantryItem(unit=self.unit, expiry_date=self.expiry_date, **data)


class EmptiedItemSchema(BaseModel):
    """Recently emptied pantry item."""

    id: str
    name: str
    category: str
    removed_at: datetime

    class Config:
        from_attributes = True


def dump_items(items: list[PantryItem]) -> list[PantryItemSchema]:
    return [PantryItemSchema.model_validate(item) for item in items]


def dump_emptied(items: list[EmptiedItem]) -> list[EmptiedItemSchema]:
    return [EmptiedItemSchema.model_validate(item) for item in items]
