"""Unit normalization, quantity parsing and unit conversion."""

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from pantryquant.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Unit Tables
# =============================================================================

# Canonical code -> accepted spellings (lowercase, no trailing period)
UNIT_ALIASES: dict[str, tuple[str, ...]] = {
    # Mass
    "g": ("g", "gram", "grams", "gms"),
    "kg": ("kg", "kilo", "kilogram", "kilograms"),
    # Volume
    "ml": ("ml", "milliliter", "milliliters"),
    "l": ("l", "liter", "liters"),
    # Imperial mass
    "lb": ("lb", "lbs", "pound", "pounds"),
    "oz": ("oz", "ounce", "ounces"),
    # US customary volume
    "cups": ("cup", "cups"),
    "tbsp": ("tbsp", "tablespoon", "tablespoons"),
    "tsp": ("tsp", "teaspoon", "teaspoons"),
    # Count
    "pcs": ("pcs", "pc", "piece", "pieces", "whole"),
}

_ALIAS_LOOKUP: dict[str, str] = {
    alias: code for code, aliases in UNIT_ALIASES.items() for alias in aliases
}

# Mass conversions (base unit: g)
MASS_FACTORS: dict[str, float] = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.3495,
    "lb": 453.592,
}

# Volume conversions (base unit: ml)
VOLUME_FACTORS: dict[str, float] = {
    "ml": 1.0,
    "l": 1000.0,
    "cups": 236.588,
    "tbsp": 14.7868,
    "tsp": 4.9289,
}

COUNT_UNIT = "pcs"

# Average weight of one piece of produce (potato, onion, tomato, apple, ...)
AVG_PIECE_WEIGHT_G = 150.0

_FRACTION_RE = re.compile(r"^(\d+)/(\d+)\s*([a-zA-Z]+)?")
_DECIMAL_RE = re.compile(r"^([\d.]+)\s*([a-zA-Z%]+)?")
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_TENTH = Decimal("0.1")


@dataclass(frozen=True)
class Quantity:
    """A numeric amount paired with a canonical unit code."""

    val: float
    unit: str


# =============================================================================
# Normalization and Parsing
# =============================================================================


def normalize_unit(raw: str) -> str:
    """
    Map a free-text unit spelling to its canonical code.

    Matching is case-insensitive and ignores surrounding whitespace and
    trailing periods ("Tbsp." -> "tbsp"). Unknown units are returned cleaned
    but otherwise unchanged, so they only ever match themselves.
    """
    unit = raw.lower().strip().rstrip(".").strip()
    return _ALIAS_LOOKUP.get(unit, unit)


def parse_number(text: str | None) -> float | None:
    """
    Read the leading number of a string, ignoring anything after it.

    "2.5 kg" -> 2.5, "  3" -> 3.0, "abc" -> None. Non-finite values are
    treated as unparseable.
    """
    if not text:
        return None

    match = _LEADING_NUMBER_RE.match(text)
    if not match:
        return None

    value = float(match.group(1))
    if not math.isfinite(value):
        return None
    return value


def parse_quantity(text: str) -> Quantity:
    """
    Parse a free-form quantity string into a Quantity.

    Handles formats like:
    - "1/2 cup"
    - "200g", "200 g"
    - "1.5 kg"
    - "50%"

    Anything else falls back to one piece.
    """
    text = (text or "").strip()

    frac_match = _FRACTION_RE.match(text)
    if frac_match and int(frac_match.group(2)) != 0:
        return Quantity(
            val=int(frac_match.group(1)) / int(frac_match.group(2)),
            unit=normalize_unit(frac_match.group(3) or COUNT_UNIT),
        )

    num_match = _DECIMAL_RE.match(text)
    if num_match:
        value = parse_number(num_match.group(1))
        if value is not None:
            return Quantity(val=value, unit=normalize_unit(num_match.group(2) or COUNT_UNIT))

    logger.debug(f"Unparseable quantity {text!r}, defaulting to 1 {COUNT_UNIT}")
    return Quantity(val=1.0, unit=COUNT_UNIT)


# =============================================================================
# Conversion
# =============================================================================


def convert(quantity: Quantity, target_unit: str) -> float | None:
    """
    Convert a quantity into the target unit.

    Mass and volume convert within their own family through grams and
    milliliters. Pieces and mass convert through AVG_PIECE_WEIGHT_G.

    Returns:
        The converted value, or None when the units are irreconcilable
        (mass vs volume, volume vs pieces, or any unknown unit).
    """
    base = normalize_unit(quantity.unit)
    target = normalize_unit(target_unit)

    if base == target:
        return quantity.val

    if base in MASS_FACTORS and target in MASS_FACTORS:
        return quantity.val * MASS_FACTORS[base] / MASS_FACTORS[target]

    if base in VOLUME_FACTORS and target in VOLUME_FACTORS:
        return quantity.val * VOLUME_FACTORS[base] / VOLUME_FACTORS[target]

    # Pieces -> mass: estimate grams first
    if base == COUNT_UNIT and target in MASS_FACTORS:
        return quantity.val * AVG_PIECE_WEIGHT_G / MASS_FACTORS[target]

    # Mass -> pieces: how many average pieces the mass represents
    if base in MASS_FACTORS and target == COUNT_UNIT:
        return quantity.val * MASS_FACTORS[base] / AVG_PIECE_WEIGHT_G

    logger.debug(f"Cannot convert {base} to {target}")
    return None


# =============================================================================
# Display
# =============================================================================


def format_quantity(value: float) -> str:
    """
    Format a quantity for display.

    Whole numbers render without a decimal point; anything else is rounded
    to one decimal place (ties away from zero) and loses a trailing ".0".
    """
    if not math.isfinite(value):
        return str(value)
    if float(value).is_integer():
        return str(int(value))

    rounded = Decimal(value).quantize(_TENTH, rounding=ROUND_HALF_UP)
    text = str(rounded)
    if text.endswith(".0"):
        text = text[:-2]
    return text
