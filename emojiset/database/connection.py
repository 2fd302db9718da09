"""
Соединение с файлом кэша имен эмодзи
Кэш живет один запуск генератора: открывается перед поиском имен
и закрывается при завершении
"""

import asyncio
from pathlib import Path
from typing import Any, Optional, Sequence

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Сторонние библиотеки
import aiosqlite

# Локальные импорты
from emojiset.utils.exceptions import DatabaseConnectionError, DatabaseError

# Настройка логгера модуля
logger = logger.bind(module="database")

_cache_lock = asyncio.Lock()
_cache: Optional["NameCacheConnection"] = None


class NameCacheConnection:
    """Открытый файл кэша имен"""

    def __init__(self, database_path: str):
        self.database_path = Path(database_path)
        self.connection: Optional[aiosqlite.Connection] = None

    async def open(self) -> None:
        """Открыть файл кэша, создав директорию при необходимости"""
        try:
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
            self.connection = await aiosqlite.connect(str(self.database_path), timeout=30.0)
            await self.connection.execute("PRAGMA journal_mode = WAL")
        except (OSError, aiosqlite.Error) as e:
            await self.close()
            raise DatabaseConnectionError(str(self.database_path), str(e))

        logger.info("Кэш имен открыт: {}", self.database_path)

    async def close(self) -> None:
        """Закрыть файл кэша; ошибки закрытия не мешают завершению"""
        if self.connection is None:
            return
        try:
            await self.connection.close()
            logger.debug("Кэш имен закрыт: {}", self.database_path)
        except aiosqlite.Error as e:
            logger.warning("Ошибка при закрытии кэша имен: {}", str(e))
        finally:
            self.connection = None


async def initialize_database(database_path: str) -> None:
    """Открыть кэш имен (ранее открытый кэш закрывается)"""
    global _cache

    async with _cache_lock:
        if _cache is not None:
            await _cache.close()

        cache = NameCacheConnection(database_path)
        await cache.open()
        _cache = cache


async def close_database() -> None:
    """Закрыть кэш имен, если он открыт"""
    global _cache

    async with _cache_lock:
        if _cache is not None:
            await _cache.close()
            _cache = None


def is_database_initialized() -> bool:
    return _cache is not None and _cache.connection is not None


def get_connection() -> aiosqlite.Connection:
    """Соединение открытого кэша"""
    if not is_database_initialized():
        raise DatabaseError("Кэш имен не открыт")
    return _cache.connection


async def write_statement(sql: str, params: Sequence[Any] = ()) -> None:
    """
    Выполнить одну пишущую команду и зафиксировать ее

    Кэш пишет по одной строке за раз, поэтому транзакция охватывает
    ровно одну команду: при ошибке она откатывается целиком.
    """
    conn = get_connection()
    try:
        await conn.execute(sql, params)
        await conn.commit()
    except aiosqlite.Error:
        await conn.rollback()
        raise
