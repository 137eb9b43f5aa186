"""FibonRose - API Routers"""
from .fibonacci import router as fibonacci_router
from .units import router as units_router
from .identity import router as identity_router

__all__ = [
    "fibonacci_router",
    "units_router",
    "identity_router",
]
