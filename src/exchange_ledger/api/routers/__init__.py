"""API routers package."""

from exchange_ledger.api.routers.exchange import router as exchange_router

__all__ = [
    "exchange_router",
]
