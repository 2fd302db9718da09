"""
CRUD операции для модели EmojiName
Чтение и запись кэша имен эмодзи
"""

from typing import Optional

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Сторонние библиотеки
import aiosqlite

# Локальные импорты
from emojiset.alphabet.codepoints import format_hex
from emojiset.database.connection import get_connection, write_statement
from emojiset.database.models.emoji_name import EmojiName
from emojiset.utils.exceptions import DatabaseError

# Настройка логгера модуля
logger = logger.bind(module="crud_emoji_name")


class EmojiNameCRUD:
    """CRUD операции для кэша имен"""

    @staticmethod
    async def get(codepoint: int) -> Optional[EmojiName]:
        """
        Получить имя из кэша

        Args:
            codepoint: Кодпоинт

        Returns:
            Объект EmojiName или None
        """
        codepoint_hex = format_hex(codepoint)
        try:
            cursor = await get_connection().execute(
                """SELECT codepoint_hex, name, source, created_at, updated_at
                   FROM emoji_names WHERE codepoint_hex = ?""",
                (codepoint_hex,)
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error("Ошибка чтения кэша имени {}: {}", codepoint_hex, str(e))
            raise DatabaseError(f"Не удалось прочитать кэш имени: {str(e)}")

        return EmojiNameCRUD._row_to_name(row) if row else None

    @staticmethod
    async def save(emoji_name: EmojiName) -> EmojiName:
        """
        Сохранить имя в кэш (запись по ключу перезаписывается)

        Args:
            emoji_name: Объект EmojiName

        Returns:
            Сохраненный объект
        """
        if not emoji_name.validate():
            raise ValueError("Данные имени не прошли валидацию")

        try:
            emoji_name.update_timestamp()
            await write_statement(
                """INSERT OR REPLACE INTO emoji_names
                   (codepoint_hex, name, source, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    emoji_name.codepoint_hex,
                    emoji_name.name,
                    emoji_name.source,
                    emoji_name.created_at.isoformat(),
                    emoji_name.updated_at.isoformat()
                )
            )
        except aiosqlite.Error as e:
            logger.error("Ошибка записи кэша имени {}: {}", emoji_name.codepoint_hex, str(e))
            raise DatabaseError(f"Не удалось записать кэш имени: {str(e)}")

        emoji_name.log_creation()
        return emoji_name

    @staticmethod
    async def count() -> int:
        """Количество записей в кэше"""
        try:
            cursor = await get_connection().execute("SELECT COUNT(*) FROM emoji_names")
            return (await cursor.fetchone())[0]
        except aiosqlite.Error as e:
            logger.error("Ошибка подсчета кэша имен: {}", str(e))
            raise DatabaseError(f"Не удалось подсчитать кэш имен: {str(e)}")

    @staticmethod
    def _row_to_name(row) -> EmojiName:
        """Преобразовать строку БД в модель"""
        return EmojiName.from_dict({
            "codepoint_hex": row[0],
            "name": row[1],
            "source": row[2],
            "created_at": row[3],
            "updated_at": row[4],
        })


# Глобальный экземпляр CRUD
_emoji_name_crud: Optional[EmojiNameCRUD] = None


def get_emoji_name_crud() -> EmojiNameCRUD:
    """Получить экземпляр EmojiNameCRUD"""
    global _emoji_name_crud
    if _emoji_name_crud is None:
        _emoji_name_crud = EmojiNameCRUD()
    return _emoji_name_crud
