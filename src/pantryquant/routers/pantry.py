"""API routes that reconcile a client's pantry list."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from pantryquant.inventory.pantry import Pantry
from pantryquant.logging_config import get_logger
from pantryquant.schemas import (
    EmptiedItemSchema,
    PantryItemSchema,
    dump_emptied,
    dump_items,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])


# Request/Response schemas
class AddItemRequest(BaseModel):
    """Request to add an item to a pantry list."""

    items: list[PantryItemSchema] = Field(default_factory=list)
    item: PantryItemSchema


class AddItemResponse(BaseModel):
    """Pantry list after adding an item."""

    items: list[PantryItemSchema]
    item: PantryItemSchema
    merged: bool


class UsageEntry(BaseModel):
    """Amount of a pantry item used by a recipe."""

    pantry_id: str
    used_amount: str


class ConsumeRequest(BaseModel):
    """Request to consume ingredients from a pantry list."""

    items: list[PantryItemSchema]
    usage: list[UsageEntry] = Field(min_length=1)


class ConsumeResponse(BaseModel):
    """Pantry list after consumption."""

    items: list[PantryItemSchema]
    updated: list[str]
    removed: list[str]
    degraded: list[str]
    unknown: list[str]
    recently_emptied: list[EmptiedItemSchema]


class LowStockRequest(BaseModel):
    """Request to list low stock items."""

    items: list[PantryItemSchema]


class LowStockResponse(BaseModel):
    """Items running low."""

    items: list[PantryItemSchema]
    total: int


def _build_pantry(items: list[PantryItemSchema]) -> Pantry:
    return Pantry(item.to_item() for item in items)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/add", response_model=AddItemResponse)
async def add_item(request: AddItemRequest) -> AddItemResponse:
    """
    Add an item to the pantry list.

    An item with the same name (ignoring case) is merged into the existing
    entry when the units are compatible; otherwise it is appended.
    """
    pantry = _build_pantry(request.items)
    before = {item.id for item in pantry.items}

    new = request.item
    try:
        item = pantry.add_item(
            name=new.name,
            quantity=new.quantity,
            unit=new.unit,
            category=new.category,
            expiry_date=new.expiry_date,
        )
    except Exception as e:
        logger.error(f"Failed to add pantry item {new.name!r}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add pantry item",
        )

    return AddItemResponse(
        items=dump_items(pantry.items),
        item=PantryItemSchema.model_validate(item),
        merged=item.id in before,
    )


@router.post("/consume", response_model=ConsumeResponse)
async def consume(request: ConsumeRequest) -> ConsumeResponse:
    """
    Deduct recipe usage from the pantry list.

    Items that are used up (5% or less left) are removed and listed in
    recently_emptied. Unknown pantry ids are reported, not rejected.
    """
    pantry = _build_pantry(request.items)

    try:
        report = pantry.consume((entry.pantry_id, entry.used_amount) for entry in request.usage)
    except Exception as e:
        logger.error(f"Failed to consume ingredients: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to consume ingredients",
        )

    return ConsumeResponse(
        items=dump_items(pantry.items),
        updated=report.updated,
        removed=report.removed,
        degraded=report.degraded,
        unknown=report.unknown,
        recently_emptied=dump_emptied(pantry.recently_emptied),
    )


@router.post("/low-stock", response_model=LowStockResponse)
async def low_stock(request: LowStockRequest) -> LowStockResponse:
    """List the items running low for their category."""
    pantry = _build_pantry(request.items)
    items = pantry.low_stock_items()
    return LowStockResponse(items=dump_items(items), total=len(items))
