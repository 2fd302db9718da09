"""
Модуль миграций базы данных
Создание и обновление схемы кэша имен эмодзи
"""

from typing import Any, Dict

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Сторонние библиотеки
import aiosqlite

# Локальные импорты
from emojiset.database.connection import get_connection, write_statement
from emojiset.utils.exceptions import DatabaseError, DatabaseMigrationError

# Настройка логгера модуля
logger = logger.bind(module="migrations")


# SQL запросы для создания таблиц
CREATE_TABLES_SQL = {
    "emoji_names": """
        CREATE TABLE IF NOT EXISTS emoji_names (
            codepoint_hex VARCHAR(8) PRIMARY KEY,
            name TEXT NOT NULL,
            source VARCHAR(255),
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            updated_at DATETIME
        )
    """
}


class DatabaseMigrator:
    """Класс для управления миграциями базы данных"""

    def __init__(self):
        """Инициализация мигратора"""
        self.version_table = "schema_versions"

    async def create_version_table(self) -> None:
        """Создать таблицу версий схемы"""
        sql = f"""
            CREATE TABLE IF NOT EXISTS {self.version_table} (
                version INTEGER PRIMARY KEY,
                description TEXT,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        """
        await write_statement(sql)
        logger.debug("Создана таблица версий схемы")

    async def get_current_version(self) -> int:
        """Получить текущую версию схемы"""
        try:
            cursor = await get_connection().execute(
                f"SELECT MAX(version) FROM {self.version_table}"
            )
            result = await cursor.fetchone()
        except aiosqlite.OperationalError:
            return 0
        return result[0] if result[0] is not None else 0

    async def set_version(self, version: int, description: str) -> None:
        """Установить версию схемы"""
        await write_statement(
            f"INSERT OR REPLACE INTO {self.version_table} (version, description) VALUES (?, ?)",
            (version, description)
        )

        logger.info("Установлена версия схемы: {} - {}", version, description)

    async def run_migration_v1(self) -> None:
        """Миграция версии 1 - таблица кэша имен"""
        logger.info("Выполняется миграция v1: таблица emoji_names")

        try:
            for table_name, sql in CREATE_TABLES_SQL.items():
                await write_statement(sql)
                logger.debug("Создана таблица: {}", table_name)

            await self.set_version(1, "Кэш имен эмодзи")
            logger.info("Миграция v1 выполнена успешно")

        except aiosqlite.Error as e:
            error_msg = f"Ошибка выполнения миграции v1: {str(e)}"
            logger.error(error_msg)
            raise DatabaseMigrationError("v1", error_msg)

    async def run_all_migrations(self) -> None:
        """Выполнить все необходимые миграции"""
        logger.info("Начало выполнения миграций БД")

        try:
            await self.create_version_table()

            current_version = await self.get_current_version()
            logger.info("Текущая версия схемы БД: {}", current_version)

            migrations = [
                (1, self.run_migration_v1, "Кэш имен эмодзи"),
            ]

            for version, migration_func, description in migrations:
                if current_version < version:
                    logger.info("Применяется миграция v{}: {}", version, description)
                    await migration_func()
                else:
                    logger.debug("Миграция v{} уже применена", version)

            logger.info("Все миграции выполнены успешно")

        except aiosqlite.Error as e:
            error_msg = f"Критическая ошибка при выполнении миграций: {str(e)}"
            logger.error(error_msg)
            raise DatabaseMigrationError("all", error_msg)


# Глобальный экземпляр мигратора
_migrator: DatabaseMigrator = DatabaseMigrator()


async def initialize_database_schema() -> None:
    """Инициализировать схему базы данных"""
    logger.info("Инициализация схемы базы данных")
    await _migrator.run_all_migrations()
    logger.info("Схема базы данных инициализирована")


async def get_database_info() -> Dict[str, Any]:
    """Получить информацию о состоянии БД"""
    try:
        current_version = await _migrator.get_current_version()

        conn = get_connection()
        tables_info = {}
        for table in CREATE_TABLES_SQL:
            try:
                cursor = await conn.execute(f"SELECT COUNT(*) FROM {table}")
                tables_info[table] = (await cursor.fetchone())[0]
            except aiosqlite.Error:
                tables_info[table] = "ERROR"

        return {
            "schema_version": current_version,
            "tables": tables_info,
            "status": "OK"
        }

    except (DatabaseError, aiosqlite.Error) as e:
        logger.error("Ошибка получения информации о БД: {}", str(e))
        return {
            "schema_version": None,
            "tables": {},
            "status": f"ERROR: {str(e)}"
        }
