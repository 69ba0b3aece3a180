"""Ordering domain API package."""

from ordering.api.routes import confirmation_router, order_router

__all__ = ["confirmation_router", "order_router"]
