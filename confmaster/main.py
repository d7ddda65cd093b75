"""FastAPI application for the conference submission and document workflow."""

from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware

from confmaster.api.routes import api_router
from confmaster.core.config import settings
from confmaster.core.errors import WorkflowError
from confmaster.core.logging import get_logger
from confmaster.db.base import Base
from confmaster.db.session import SessionLocal, engine
from confmaster.services.bootstrap import bootstrap, default_seed
from confmaster.services.storage import StorageError

logger = get_logger(__name__)


def error_response(*, status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, "message": message}})


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_schema:
        Base.metadata.create_all(bind=engine)
    if settings.bootstrap_on_startup:
        with SessionLocal() as db:
            bootstrap(db, default_seed(settings))
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="ConfMaster API", version="0.1.0", lifespan=lifespan)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(WorkflowError)
    async def handle_workflow_error(request: Request, exc: WorkflowError):
        log = logger.warning if exc.http_status in (401, 403) else logger.info
        log(
            "request rejected",
            extra={"fields": {"path": request.url.path, "code": exc.code, "detail": exc.message}},
        )
        return error_response(status_code=exc.http_status, code=exc.code, message=exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        fields = [".".join(str(x) for x in err.get("loc", ()) if x != "body") for err in exc.errors()]
        message = "invalid or missing fields: " + ", ".join(f for f in fields if f) if fields else "invalid payload"
        return error_response(status_code=422, code="validation", message=message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        return error_response(status_code=502, code="storage_unavailable", message="file storage unavailable")

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error("database error", exc_info=exc, extra={"fields": {"path": request.url.path}})
        return error_response(status_code=500, code="storage_error", message="internal storage error")

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api_router)
    return app


app = create_app()


def start_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    uvicorn.run("confmaster.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    start_server()
