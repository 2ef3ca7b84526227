"""
FastAPI app entry point aggregating per-entity routers under travel_planner/routes.
Keep as `uvicorn travel_planner.api:app`.
"""
from __future__ import annotations

from fastapi import FastAPI

from .db import close_db
from .logs import LogContext
from .schema import ensure_schema
from .routes.base import APP_NAME, APP_VERSION

app = FastAPI(title=APP_NAME, version=APP_VERSION)


@app.on_event("startup")
def on_startup():
    try:
        ensure_schema()
    except Exception as e:
        LogContext("STARTUP").write("ERROR", f"ensure_schema_failed: {e}")
        raise


@app.on_event("shutdown")
def on_shutdown():
    close_db()


# Include routers (split by entity)
from .routes import base as base_routes
from .routes import plans as plans_routes
from .routes import days as days_routes
from .routes import stops as stops_routes
from .routes import reviews as reviews_routes

app.include_router(base_routes.router)
app.include_router(plans_routes.router)
app.include_router(days_routes.router)
app.include_router(stops_routes.router)
app.include_router(reviews_routes.router)
