"""FastAPI application factory."""
from __future__ import annotations
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from churchdash.domain.exceptions import (
    ChurchDashError, ConflictError, ForbiddenError, NetworkError, NotFoundError, ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[ChurchDashError], int]] = [
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 422),
    (ForbiddenError, 403),
    (NetworkError, 502),
]


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from churchdash.infra.db.engine import engine  # triggers WAL pragma + mapper registration
        from churchdash.db import init_db
        init_db(engine)
        yield
        from churchdash.api.deps import close_roster_loader
        close_roster_loader()

    app = FastAPI(
        title="Church Attendance Dashboard API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Import routers inside create_app() to avoid circular imports at module load time
    from churchdash.api.routers.service import router as service_router
    from churchdash.api.routers.roster import router as roster_router
    from churchdash.api.routers.dashboard import router as dashboard_router
    from churchdash.api.routers.members import router as members_router
    from churchdash.api.routers.attendance import router as attendance_router

    app.include_router(service_router)
    app.include_router(roster_router)
    app.include_router(dashboard_router)
    app.include_router(members_router)
    app.include_router(attendance_router)

    def _handler(status_code: int):
        def handle(request: Request, exc: ChurchDashError) -> JSONResponse:
            return JSONResponse(status_code=status_code, content={"detail": exc.message})
        return handle

    for error_cls, status_code in _STATUS_BY_ERROR:
        app.add_exception_handler(error_cls, _handler(status_code))

    @app.get("/health", tags=["ops"])
    def health() -> dict:
        return {"status": "ok"}

    return app
