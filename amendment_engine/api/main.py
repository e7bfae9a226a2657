"""FastAPI application entry point for the amendment engine.

Run with:
    uvicorn amendment_engine.api.main:app
"""

from fastapi import FastAPI

from amendment_engine import __version__
from amendment_engine.api.middleware.logging_middleware import LoggingMiddleware
from amendment_engine.api.routes.amendments import router as amendments_router
from amendment_engine.bootstrap.logging import configure_structlog
from amendment_engine.bootstrap.workflow import get_workflow_config


def create_app(*, configure_logging: bool = True) -> FastAPI:
    """Build the application.

    Args:
        configure_logging: Configure structlog from the workflow config.
            Tests pass False to keep their own logging setup.
    """
    if configure_logging:
        configure_structlog(get_workflow_config().environment)

    application = FastAPI(
        title="Amendment Engine API",
        description="Constitutional amendment proposals, review and weighted voting",
        version=__version__,
    )
    application.add_middleware(LoggingMiddleware)
    application.include_router(amendments_router)
    return application


app = create_app()
