"""FastAPI adapter – application factory."""
from __future__ import annotations

import contextlib
from typing import AsyncIterator

from fastapi import FastAPI

from todos import __version__
from todos.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from todos.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from todos.adapters.fastapi.routers import FastAPIHealthRouter, FastAPITodosRouter
from todos.config import load_settings
from todos.container import Container


def create_app(container: Container) -> FastAPI:
    """Build the HTTP app around *container*.

    Startup configures logging, creates the schema and warms the broker
    connection; shutdown closes the publisher, the connection and the engine.
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
        await container.startup()
        try:
            yield
        finally:
            await container.shutdown()

    app = FastAPI(title=container.settings.title, version=__version__, lifespan=lifespan)
    app.state.container = container
    app.add_middleware(FastAPICorrelationIdMiddleware)
    FastAPIExceptionMapper().register(app)
    app.include_router(FastAPITodosRouter())
    app.include_router(FastAPIHealthRouter(readiness_checks=[container.broker_ready]))
    return app


def app_factory() -> FastAPI:
    """Entry point for ``uvicorn --factory``; reads settings from ``.env`` and the environment."""
    return create_app(Container.build(load_settings()))


__all__ = ["app_factory", "create_app"]
