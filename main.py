#!/usr/bin/env python3
# main.py
"""
Точка входа Rides API.
Запускает HTTP сервис поездок под uvicorn.
"""

from __future__ import annotations

import asyncio
import sys

import uvicorn

from src.config import settings
from src.common.logger import setup_logging, log_info
from src.common.constants import TypeMsg


async def main() -> None:
    """Запуск Rides Service."""
    setup_logging()
    await log_info(
        f"App started and listening on port {settings.deployment.RIDES_SERVICE_PORT}",
        type_msg=TypeMsg.INFO,
    )

    config = uvicorn.Config(
        "src.services.rides_service.app:app",
        host=settings.deployment.RIDES_SERVICE_HOST,
        port=settings.deployment.RIDES_SERVICE_PORT,
        reload=settings.system.DEBUG,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    await server.serve()


def print_usage() -> None:
    """Выводит справку по запуску."""
    print(f"""
{settings.system.PROJECT_NAME} v{settings.system.VERSION} - HTTP сервис поездок

Использование:
    python main.py

Эндпоинты:
    GET  /health          - проверка живости
    POST /rides           - создать поездку
    GET  /rides?page=N    - список поездок (по {settings.rides.RIDES_PAGE_SIZE} на страницу)
    GET  /rides/{{id}}      - поездка по ID
    GET  /explorer        - документация API

Переменные окружения:
    DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD
    RIDES_SERVICE_HOST, RIDES_SERVICE_PORT, RIDES_RESET_ON_STARTUP
    """)


if __name__ == "__main__":
    if len(sys.argv) > 1:
        arg = sys.argv[1].lower()
        if arg in ("--help", "-h"):
            print_usage()
            sys.exit(0)
        print(f"Ошибка: неизвестный аргумент '{arg}'")
        print_usage()
        sys.exit(1)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
