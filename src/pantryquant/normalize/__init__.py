"""Normalize quantity text and convert between units."""

from pantryquant.normalize.units import (
    AVG_PIECE_WEIGHT_G,
    MASS_FACTORS,
    UNIT_ALIASES,
    VOLUME_FACTORS,
    Quantity,
    convert,
    format_quantity,
    normalize_unit,
    parse_number,
    parse_quantity,
)

__all__ = [
    "AVG_PIECE_WEIGHT_G",
    "MASS_FACTORS",
    "UNIT_ALIASES",
    "VOLUME_FACTORS",
    "Quantity",
    "convert",
    "format_quantity",
    "normalize_unit",
    "parse_number",
    "parse_quantity",
]
