"""
Базовая модель для всех моделей базы данных
Содержит общие поля и методы
"""

from datetime import datetime
from typing import Optional, Dict, Any
from dataclasses import dataclass, field

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Настройка логгера модуля
logger = logger.bind(module="models")


@dataclass
class BaseModel:
    """
    Базовая модель для всех таблиц БД
    Содержит общие поля и методы
    """

    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Создание модели из словаря"""
        data = dict(data)

        # Преобразуем строки datetime обратно
        for key in ("created_at", "updated_at"):
            value = data.get(key)
            if isinstance(value, str) and value:
                data[key] = datetime.fromisoformat(value)
            elif value == "":
                data[key] = None

        return cls(**data)

    def update_timestamp(self) -> None:
        """Обновить timestamp изменения"""
        self.updated_at = datetime.now()

    def validate(self) -> bool:
        """
        Базовая валидация модели
        Переопределяется в наследниках
        """
        return True

    def log_creation(self) -> None:
        """Логирование создания записи"""
        logger.debug("Создана запись {}: {}", self.__class__.__name__, self)
