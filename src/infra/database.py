# src/infra/database.py
"""
Менеджер базы данных PostgreSQL.
Реализует пул соединений, ретрай подключения при старте и применение схемы.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from functools import wraps
from pathlib import Path
from typing import Any, AsyncGenerator, Callable, TypeVar

import asyncpg
from asyncpg import Connection, Pool, Record

from src.common.constants import TypeMsg
from src.common.logger import log_error, log_info

T = TypeVar("T")


def retry_on_connection_error(
    max_attempts: int = 3,
    delay: float = 1.0,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Декоратор для повторных попыток при ошибках подключения.
    Применяется только к открытию пула: запросы не повторяются.

    Args:
        max_attempts: Максимальное количество попыток
        delay: Базовая задержка между попытками (секунды)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            last_error: Exception | None = None

            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except (
                    asyncpg.PostgresConnectionError,
                    asyncpg.InterfaceError,
                    ConnectionRefusedError,
                    OSError,
                ) as e:
                    last_error = e
                    if attempt < max_attempts:
                        await log_info(
                            f"Ошибка подключения к БД (попытка {attempt}/{max_attempts}): {e}",
                            type_msg=TypeMsg.WARNING,
                        )
                        await asyncio.sleep(delay * attempt)
                    else:
                        await log_error(f"Не удалось подключиться к БД после {max_attempts} попыток: {e}")

            raise last_error  # type: ignore

        return wrapper  # type: ignore

    return decorator


class DatabaseManager:
    """
    Обёртка над пулом соединений PostgreSQL.
    Создаётся один раз при старте приложения и передаётся в репозитории явно.
    """

    def __init__(self) -> None:
        self._pool: Pool | None = None

    @property
    def pool(self) -> Pool:
        """Возвращает пул соединений."""
        if self._pool is None:
            raise RuntimeError("Пул соединений не инициализирован. Вызовите connect() сначала.")
        return self._pool

    async def connect(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
        command_timeout: int = 60,
    ) -> None:
        """
        Создаёт пул соединений к PostgreSQL.

        Args:
            dsn: DSN строка подключения
            min_size: Минимальный размер пула
            max_size: Максимальный размер пула
            command_timeout: Таймаут команд (секунды)
        """
        if self._pool is not None:
            return

        await log_info("Подключение к PostgreSQL...", type_msg=TypeMsg.INFO)

        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            min_size=min_size,
            max_size=max_size,
            command_timeout=command_timeout,
        )

        await log_info("Подключение к PostgreSQL установлено", type_msg=TypeMsg.INFO)

    async def disconnect(self) -> None:
        """Закрывает пул соединений."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            await log_info("Соединение с PostgreSQL закрыто", type_msg=TypeMsg.INFO)

    @asynccontextmanager
    async def acquire(self) -> AsyncGenerator[Connection, None]:
        """
        Контекстный менеджер для получения соединения из пула.

        Example:
            async with db.acquire() as conn:
                rows = await conn.fetch("SELECT * FROM rides")
        """
        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[Connection, None]:
        """
        Контекстный менеджер для транзакции.
        Commit при успехе, rollback при ошибке.
        """
        async with self.pool.acquire() as connection:
            async with connection.transaction():
                yield connection

    async def fetch(self, query: str, *args: Any) -> list[Record]:
        """Выполняет SQL запрос и возвращает все строки."""
        async with self.acquire() as conn:
            return await conn.fetch(query, *args)

    async def fetchrow(self, query: str, *args: Any) -> Record | None:
        """Выполняет SQL запрос и возвращает одну строку или None."""
        async with self.acquire() as conn:
            return await conn.fetchrow(query, *args)

    async def fetchval(self, query: str, *args: Any, column: int = 0) -> Any:
        """Выполняет SQL запрос и возвращает одно значение."""
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args, column=column)

    async def apply_schema(self, schema_sql: str, reset_sql: str | None = None) -> None:
        """
        Применяет схему БД в одной транзакции.

        Args:
            schema_sql: SQL создания таблиц
            reset_sql: SQL удаления таблиц, выполняется перед схемой
        """
        async with self.transaction() as conn:
            if reset_sql:
                await conn.execute(reset_sql)
            await conn.execute(schema_sql)


def _read_migration(name: str) -> str:
    """Читает SQL файл из директории migrations."""
    from src.config.loader import get_project_root

    path: Path = get_project_root() / "migrations" / name
    if not path.exists():
        raise FileNotFoundError(f"Файл схемы БД не найден: {path}")
    return path.read_text(encoding="utf-8")


async def init_db() -> DatabaseManager:
    """
    Открывает пул соединений по настройкам и применяет схему.

    Returns:
        Подключённый DatabaseManager
    """
    from src.config import settings

    db_settings = settings.database
    db = DatabaseManager()

    connect = retry_on_connection_error(
        max_attempts=db_settings.DB_RETRY_ATTEMPTS,
        delay=db_settings.DB_RETRY_DELAY,
    )(db.connect)
    await connect(
        dsn=db_settings.dsn,
        min_size=db_settings.DB_MIN_POOL_SIZE,
        max_size=db_settings.DB_MAX_POOL_SIZE,
        command_timeout=db_settings.DB_COMMAND_TIMEOUT,
    )
    await log_info(
        f"PostgreSQL подключён: {db_settings.DB_HOST}:{db_settings.DB_PORT}/{db_settings.DB_NAME}",
        type_msg=TypeMsg.INFO,
    )

    reset = settings.rides.RIDES_RESET_ON_STARTUP
    await log_info(
        "Пересоздание таблицы поездок..." if reset else "Применение схемы БД...",
        type_msg=TypeMsg.INFO,
    )
    try:
        await db.apply_schema(
            _read_migration("init.sql"),
            _read_migration("reset.sql") if reset else None,
        )
    except Exception as e:
        await log_error(f"Ошибка при инициализации схемы БД: {e}", exc_info=True)
        await db.disconnect()
        raise

    await log_info("Схема БД успешно применена", type_msg=TypeMsg.INFO)
    return db


async def close_db(db: DatabaseManager) -> None:
    """Закрывает подключение к базе данных."""
    await db.disconnect()
    await log_info("PostgreSQL отключён", type_msg=TypeMsg.INFO)
