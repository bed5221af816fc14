"""API route modules."""

from .jsonapi import router as jsonapi_router

__all__ = [
    "jsonapi_router",
]
