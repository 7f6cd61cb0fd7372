from __future__ import annotations

import logging

from fastapi import FastAPI

from sahayak.dependencies import get_settings, register_exception_handlers
from sahayak.internal import admin
from sahayak.routers import functions


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="sahayak",
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
    )

    register_exception_handlers(app)

    app.include_router(functions.router)
    app.include_router(admin.router)

    return app


app = create_app()
