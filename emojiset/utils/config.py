"""
Модуль конфигурации приложения
Загружает и валидирует переменные окружения
"""

from typing import Optional
from pathlib import Path

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Сторонние библиотеки
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Локальные импорты
from emojiset.alphabet.codepoints import parse_codepoint

# Настройка логгера модуля
logger = logger.bind(module="config")

DEFAULT_MAPPING_URL = "https://raw.githubusercontent.com/keith-turner/ecoji/master/mapping.go"
DEFAULT_NAME_LOOKUP_URL = "https://codepoints.net/api/v1/codepoint/{hex}"


class Config(BaseSettings):
    """Конфигурация приложения с валидацией"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Источник эталонного алфавита (V1)
    MAPPING_URL: str = DEFAULT_MAPPING_URL
    MAPPING_PATH: Optional[str] = None  # Локальный файл вместо URL

    # Списки исключений и overrides (JSON)
    CURATION_PATH: Optional[str] = None

    # Выходные файлы
    OUTPUT_PATH: str = "emojis.txt"
    PADDING_OUTPUT_PATH: str = "emojis_padding.txt"
    LEGACY_VIEW_ENABLED: bool = False
    LEGACY_V1_PATH: str = "emojisv1.txt"
    LEGACY_SORTED_PATH: str = "emojis_sorted.txt"

    # Пул замен
    REPLACEMENT_FLOOR: Optional[int] = 0x1F004
    AUTO_PEOPLE_VARIANTS: bool = True

    # Отчет и имена
    REPORT_ENABLED: bool = True
    NAME_LOOKUP_ENABLED: bool = True
    NAME_LOOKUP_URL: str = DEFAULT_NAME_LOOKUP_URL
    NAME_LOOKUP_CONCURRENCY: int = 8

    # HTTP
    REQUEST_TIMEOUT: int = 30
    MAX_RETRIES: int = 3

    # Database (кэш имен)
    DATABASE_PATH: str = "./data/emoji_names.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "30 days"

    @field_validator("REPLACEMENT_FLOOR", mode="before")
    @classmethod
    def validate_replacement_floor(cls, v):
        """
        Порог пула: 0x1F004 или U+1F004 (hex), 127000 (десятичное число)

        Строка только из цифр читается как десятичное число, как и int.
        """
        if v is None or v == "":
            return None
        if isinstance(v, str) and v.strip().isdecimal():
            v = int(v.strip())
        try:
            return parse_codepoint(v)
        except ValueError as e:
            raise ValueError(f"REPLACEMENT_FLOOR должен быть кодпоинтом: {e}")

    @field_validator("MAPPING_URL")
    @classmethod
    def validate_mapping_url(cls, v: str) -> str:
        """Валидация URL эталонного алфавита"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("MAPPING_URL должен начинаться с http:// или https://")
        return v

    @field_validator("NAME_LOOKUP_URL")
    @classmethod
    def validate_name_lookup_url(cls, v: str) -> str:
        """Шаблон должен содержать {hex}"""
        if "{hex}" not in v:
            raise ValueError("NAME_LOOKUP_URL должен содержать плейсхолдер {hex}")
        if not v.startswith(("http://", "https://")):
            raise ValueError("NAME_LOOKUP_URL должен начинаться с http:// или https://")
        return v

    @field_validator("NAME_LOOKUP_CONCURRENCY", "REQUEST_TIMEOUT", "MAX_RETRIES")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Валидация положительных целых"""
        if v <= 0:
            raise ValueError("Значение должно быть положительным числом")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Валидация уровня логирования"""
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL должен быть одним из: {', '.join(valid_levels)}")
        return v.upper()

    def validate_all(self) -> bool:
        """Проверка путей и зависимостей между параметрами"""
        try:
            if self.MAPPING_PATH and not Path(self.MAPPING_PATH).is_file():
                raise ValueError(f"MAPPING_PATH не найден: {self.MAPPING_PATH}")

            if self.CURATION_PATH and not Path(self.CURATION_PATH).is_file():
                raise ValueError(f"CURATION_PATH не найден: {self.CURATION_PATH}")

            outputs = [self.OUTPUT_PATH, self.PADDING_OUTPUT_PATH]
            if self.LEGACY_VIEW_ENABLED:
                outputs += [self.LEGACY_V1_PATH, self.LEGACY_SORTED_PATH]
            resolved = [Path(p).resolve() for p in outputs]
            if len(set(resolved)) != len(resolved):
                raise ValueError("Пути выходных файлов должны различаться")

            logger.info("Конфигурация успешно валидирована")
            logger.debug("Источник алфавита: {}", self.MAPPING_PATH or self.MAPPING_URL)
            logger.debug("Порог пула замен: {}", hex(self.REPLACEMENT_FLOOR) if self.REPLACEMENT_FLOOR else None)
            logger.debug("Получение имен: {}", self.NAME_LOOKUP_ENABLED)

            return True

        except Exception as e:
            logger.error("Ошибка валидации конфигурации: {}", str(e))
            raise


# Глобальный экземпляр конфигурации
_config: Optional[Config] = None


def get_config() -> Config:
    """Получить глобальный экземпляр конфигурации"""
    global _config
    if _config is None:
        _config = Config()
        _config.validate_all()
    return _config
