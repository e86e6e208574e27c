# src/services/rides_service/app.py
"""
FastAPI приложение сервиса поездок.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from src.common.logger import log_error, log_info, setup_logging
from src.common.constants import ErrorCode, TypeMsg
from src.config import settings
from src.infra.database import DatabaseManager, close_db, init_db
from src.services.rides_service.routes import router
from src.services.rides_service.service import server_error
from src.services.rides_service.validation import ValidationErrorKind
from src.shared.models.common import ErrorResponse


def create_app(db: Optional[DatabaseManager] = None) -> FastAPI:
    """
    Создаёт приложение.

    Args:
        db: Готовый менеджер БД. Если не передан, пул открывается
            в lifespan по настройкам и закрывается при остановке.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        await log_info("Запуск Rides Service...", type_msg=TypeMsg.INFO)
        owns_db = db is None
        app.state.db = await init_db() if owns_db else db

        yield

        await log_info("Остановка Rides Service...", type_msg=TypeMsg.INFO)
        if owns_db:
            await close_db(app.state.db)

    app = FastAPI(
        title=settings.system.PROJECT_NAME,
        description="Rides API: create a ride, get the ride list and get a ride record",
        version=settings.system.VERSION,
        docs_url="/explorer",
        redoc_url=None,
        lifespan=lifespan,
    )
    if db is not None:
        app.state.db = db

    @app.middleware("http")
    async def unknown_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            await log_error(f"Необработанная ошибка {request.method} {request.url.path}: {e}", exc_info=True)
            return JSONResponse(content=server_error().model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Нечитаемое тело не содержит ни одного поля поездки
        await log_info(f"Некорректное тело запроса {request.url.path}: {exc.errors()}", type_msg=TypeMsg.DEBUG)
        error = ErrorResponse(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=ValidationErrorKind.INVALID_START_COORDS.message,
        )
        return JSONResponse(content=error.model_dump(mode="json"))

    app.include_router(router)

    @app.get("/health", response_class=PlainTextResponse, summary="Check the health of the service")
    async def health_check():
        return "Healthy"

    return app


app = create_app()
