"""API routers for the pantryquant application."""

from pantryquant.routers.pantry import router as pantry_router
from pantryquant.routers.quantities import router as quantities_router

__all__ = [
    "pantry_router",
    "quantities_router",
]
