"""API routes for parsing, converting and reconciling single quantities."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from pantryquant.inventory.pantry import DEFAULT_CATEGORY
from pantryquant.inventory.reconcile import (
    calculate_new_inventory,
    is_low_stock,
    merge_quantities,
)
from pantryquant.logging_config import get_logger
from pantryquant.normalize.units import (
    COUNT_UNIT,
    Quantity,
    convert,
    normalize_unit,
    parse_quantity,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/quantities", tags=["quantities"])


# Request/Response schemas
class NormalizeUnitRequest(BaseModel):
    """Request to normalize a unit spelling."""

    unit: str


class NormalizeUnitResponse(BaseModel):
    """Unit spelling and its canonical code."""

    unit: str
    canonical: str


class ParseQuantityRequest(BaseModel):
    """Request to parse free-form quantity text."""

    text: str = Field(description='e.g. "200g", "1/2 cup", "1.5 kg"')


class QuantityResponse(BaseModel):
    """Parsed quantity."""

    val: float
    unit: str


class ConvertRequest(BaseModel):
    """Request to convert a quantity into another unit."""

    val: float = Field(ge=0)
    unit: str
    target_unit: str


class ConvertResponse(BaseModel):
    """Converted value; value is null when the units are incompatible."""

    value: float | None
    unit: str
    compatible: bool


class MergeRequest(BaseModel):
    """Request to merge two quantities."""

    qty1: str
    unit1: str | None = None
    qty2: str
    unit2: str | None = None


class MergeResponse(BaseModel):
    """Merged quantity in the first operand's unit."""

    quantity: str | None
    unit: str
    merged: bool


class ConsumeRequest(BaseModel):
    """Request to deduct a used amount from a pantry quantity."""

    pantry_quantity: str
    pantry_unit: str | None = None
    used_amount: str = Field(description='e.g. "200 g", "2 pcs"')


class ConsumeResponse(BaseModel):
    """Remaining quantity after consumption."""

    new_quantity: str
    should_remove: bool
    degraded: bool


class LowStockRequest(BaseModel):
    """Request to classify a pantry quantity."""

    quantity: str
    unit: str | None = None
    category: str = DEFAULT_CATEGORY


class LowStockResponse(BaseModel):
    """Low stock flag."""

    low_stock: bool


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/normalize-unit", response_model=NormalizeUnitResponse)
async def normalize_unit_endpoint(request: NormalizeUnitRequest) -> NormalizeUnitResponse:
    """Map a unit spelling such as "Tablespoons" to its canonical code."""
    return NormalizeUnitResponse(unit=request.unit, canonical=normalize_unit(request.unit))


@router.post("/parse", response_model=QuantityResponse)
async def parse_quantity_endpoint(request: ParseQuantityRequest) -> QuantityResponse:
    """
    Parse free-form quantity text.

    Unparseable text yields one piece rather than an error.
    """
    quantity = parse_quantity(request.text)
    return QuantityResponse(val=quantity.val, unit=quantity.unit)


@router.post("/convert", response_model=ConvertResponse)
async def convert_endpoint(request: ConvertRequest) -> ConvertResponse:
    """
    Convert a quantity into the target unit.

    Mass and volume never convert into each other; such requests return
    value null with compatible false.
    """
    target = normalize_unit(request.target_unit)
    value = convert(Quantity(val=request.val, unit=request.unit), target)
    if value is None:
        logger.info(f"Incompatible conversion requested: {request.unit} -> {target}")

    return ConvertResponse(value=value, unit=target, compatible=value is not None)


@router.post("/merge", response_model=MergeResponse)
async def merge_endpoint(request: MergeRequest) -> MergeResponse:
    """Merge two quantities, expressing the sum in the first unit."""
    quantity = merge_quantities(request.qty1, request.unit1, request.qty2, request.unit2)
    return MergeResponse(
        quantity=quantity,
        unit=normalize_unit(request.unit1 or COUNT_UNIT),
        merged=quantity is not None,
    )


@router.post("/consume", response_model=ConsumeResponse)
async def consume_endpoint(request: ConsumeRequest) -> ConsumeResponse:
    """Deduct a used amount from a pantry quantity."""
    result = calculate_new_inventory(
        request.pantry_quantity, request.pantry_unit, request.used_amount
    )
    return ConsumeResponse(
        new_quantity=result.new_quantity,
        should_remove=result.should_remove,
        degraded=result.degraded,
    )


@router.post("/low-stock", response_model=LowStockResponse)
async def low_stock_endpoint(request: LowStockRequest) -> LowStockResponse:
    """Check whether a quantity is running low for its category."""
    return LowStockResponse(
        low_stock=is_low_stock(request.quantity, request.unit, request.category)
    )
