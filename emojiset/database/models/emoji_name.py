"""
Модель кэша имен эмодзи
Одна запись на кодпоинт, ключ - строчный hex
"""

from dataclasses import dataclass
from typing import Optional

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Локальные импорты
from .base import BaseModel
from emojiset.alphabet.codepoints import format_hex

# Настройка логгера модуля
logger = logger.bind(module="models_emoji_name")


@dataclass
class EmojiName(BaseModel):
    """
    Закэшированное имя кодпоинта

    Attributes:
        codepoint_hex: Кодпоинт строчным hex без префикса (ключ кэша)
        name: Отображаемое имя
        source: Откуда получено имя (URL)
    """

    codepoint_hex: str = ""
    name: str = ""
    source: Optional[str] = None

    def validate(self) -> bool:
        """Валидация записи кэша"""
        if not self.codepoint_hex or self.codepoint_hex != self.codepoint_hex.lower():
            logger.error("codepoint_hex должен быть строчным hex: '{}'", self.codepoint_hex)
            return False

        try:
            int(self.codepoint_hex, 16)
        except ValueError:
            logger.error("codepoint_hex не является hex: '{}'", self.codepoint_hex)
            return False

        if not self.name:
            logger.error("name не может быть пустым для {}", self.codepoint_hex)
            return False

        return True

    @property
    def codepoint(self) -> int:
        return int(self.codepoint_hex, 16)

    def __repr__(self) -> str:
        return f"EmojiName(0x{self.codepoint_hex}, name='{self.name}')"


def create_emoji_name(codepoint: int, name: str, source: Optional[str] = None) -> EmojiName:
    """
    Фабричная функция для создания записи кэша

    Args:
        codepoint: Кодпоинт
        name: Отображаемое имя
        source: Источник имени

    Returns:
        Созданный объект EmojiName
    """
    return EmojiName(codepoint_hex=format_hex(codepoint), name=name.strip(), source=source)
