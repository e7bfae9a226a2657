"""API routers."""

from amendment_engine.api.routes.amendments import router as amendments_router

__all__ = ["amendments_router"]
