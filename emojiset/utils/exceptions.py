"""
Модуль кастомных исключений приложения
Содержит специализированные исключения для разных модулей
"""

from typing import Optional

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Настройка логгера модуля
logger = logger.bind(module="exceptions")


class EmojisetError(Exception):
    """Базовое исключение для всех ошибок приложения"""

    # Уровень, с которым исключение попадает в лог при создании
    log_level = "ERROR"

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

        # Логируем все исключения
        if details:
            logger.log(self.log_level, "EmojisetError: {} | Детали: {}", message, details)
        else:
            logger.log(self.log_level, "EmojisetError: {}", message)


# ==============================================
# ИСКЛЮЧЕНИЯ КОНФИГУРАЦИИ
# ==============================================

class ConfigurationError(EmojisetError):
    """Ошибки конфигурации приложения"""
    pass


class CurationError(ConfigurationError):
    """Противоречивые или испорченные списки исключений и overrides"""

    def __init__(self, reason: str, details: Optional[str] = None):
        message = f"Ошибка curation: {reason}"
        super().__init__(message, details)
        self.reason = reason


# ==============================================
# ИСКЛЮЧЕНИЯ ИСТОЧНИКА АЛФАВИТА
# ==============================================

class SourceError(EmojisetError):
    """Базовое исключение для источника эталонного алфавита"""
    pass


class SourceUnavailableError(SourceError):
    """Источник недоступен (сеть, файл, HTTP статус)"""

    def __init__(self, source: str, details: Optional[str] = None):
        message = f"Источник недоступен: {source}"
        super().__init__(message, details)
        self.source = source


class MalformedSourceError(SourceError):
    """Документ не соответствует ожидаемой грамматике"""

    def __init__(self, source: str, details: Optional[str] = None):
        message = f"Некорректный формат источника: {source}"
        super().__init__(message, details)
        self.source = source


# ==============================================
# ИСКЛЮЧЕНИЯ СВЕРКИ АЛФАВИТА
# ==============================================

class ReconciliationError(EmojisetError):
    """Базовое исключение для движка сверки"""
    pass


class PoolExhaustedError(ReconciliationError):
    """В пуле замен не осталось кандидатов, override для позиции нет"""

    def __init__(self, alphabet_kind: str, position: int, original: int):
        message = (
            f"Пул замен исчерпан: алфавит '{alphabet_kind}', позиция {position}, "
            f"исходный символ 0x{original:x}"
        )
        super().__init__(message)
        self.alphabet_kind = alphabet_kind
        self.position = position
        self.original = original


# ==============================================
# ИСКЛЮЧЕНИЯ ИМЕН ЭМОДЗИ
# ==============================================

class NameLookupError(EmojisetError):
    """Не удалось получить имя для кодпоинта (восстановимая ошибка)"""

    log_level = "WARNING"

    def __init__(self, codepoint: int, status_code: Optional[int] = None, details: Optional[str] = None):
        if status_code:
            message = f"Ошибка получения имени 0x{codepoint:x} (код {status_code})"
        else:
            message = f"Ошибка получения имени 0x{codepoint:x}"
        super().__init__(message, details)
        self.codepoint = codepoint
        self.status_code = status_code


# ==============================================
# ИСКЛЮЧЕНИЯ ВЫВОДА
# ==============================================

class OutputWriteError(EmojisetError):
    """Не удалось записать файл алфавита"""

    def __init__(self, path: str, details: Optional[str] = None):
        message = f"Не удалось записать файл: {path}"
        super().__init__(message, details)
        self.path = path


# ==============================================
# ИСКЛЮЧЕНИЯ БАЗЫ ДАННЫХ
# ==============================================

class DatabaseError(EmojisetError):
    """Базовое исключение для базы данных"""
    pass


class DatabaseConnectionError(DatabaseError):
    """Ошибка подключения к базе данных"""

    def __init__(self, database_path: str, details: Optional[str] = None):
        message = f"Не удалось подключиться к базе данных: {database_path}"
        super().__init__(message, details)
        self.database_path = database_path


class DatabaseMigrationError(DatabaseError):
    """Ошибка миграции базы данных"""

    def __init__(self, migration_name: str, details: Optional[str] = None):
        message = f"Ошибка миграции: {migration_name}"
        super().__init__(message, details)
        self.migration_name = migration_name
