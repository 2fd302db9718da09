"""
Модуль настройки логирования через loguru
Конфигурирует все обработчики логов для приложения
"""

import sys
from pathlib import Path

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Настройка логгера модуля
logger = logger.bind(module="logging_config")


def _has_module(record) -> bool:
    return record["extra"].get("module") is not None


def _without_module(record) -> bool:
    return record["extra"].get("module") is None


def setup_logging(
    log_level: str = "INFO",
    log_rotation: str = "10 MB",
    log_retention: str = "30 days",
    logs_dir: str = "logs"
) -> None:
    """
    Настройка логирования через loguru

    Консоль пишет в stderr: stdout остается свободным для отчета
    и перенаправления в файлы.

    Args:
        log_level: Уровень логирования
        log_rotation: Размер файла для ротации
        log_retention: Время хранения логов
        logs_dir: Директория для файлов логов
    """

    # Создаем директорию для логов
    logs_path = Path(logs_dir)
    logs_path.mkdir(parents=True, exist_ok=True)

    # Удаляем стандартный handler
    logger.remove()

    # Console handler с цветной подсветкой
    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[module]}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
        filter=_has_module
    )

    # Fallback console handler для записей без модуля
    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}:{function}:{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
        filter=_without_module
    )

    # File handler для всех логов
    logger.add(
        logs_path / "emojiset.log",
        level="DEBUG",
        format=(
            "{time:YYYY-MM-DD HH:mm:ss} | "
            "{level: <8} | "
            "{extra[module]} | "
            "{message}"
        ),
        rotation=log_rotation,
        retention=log_retention,
        compression="zip",
        encoding="utf-8",
        filter=_has_module
    )

    # Fallback file handler для записей без модуля
    logger.add(
        logs_path / "emojiset.log",
        level="DEBUG",
        format=(
            "{time:YYYY-MM-DD HH:mm:ss} | "
            "{level: <8} | "
            "{name}:{function}:{line} | "
            "{message}"
        ),
        rotation=log_rotation,
        retention=log_retention,
        compression="zip",
        encoding="utf-8",
        filter=_without_module
    )

    # Отдельный файл для ошибок
    logger.add(
        logs_path / "errors.log",
        level="ERROR",
        format=(
            "{time:YYYY-MM-DD HH:mm:ss} | "
            "{level: <8} | "
            "{extra[module]} | "
            "{message} | "
            "{exception}"
        ),
        rotation="5 MB",
        retention="60 days",
        compression="zip",
        encoding="utf-8",
        filter=_has_module
    )

    logger.info("Логирование настроено успешно")
    logger.debug("Уровень логирования: {}", log_level)
    logger.debug("Ротация файлов: {}", log_rotation)
    logger.debug("Время хранения: {}", log_retention)


def setup_logging_from_config() -> None:
    """Настройка логирования из конфигурации"""
    try:
        # Импортируем здесь чтобы избежать циклических импортов
        from emojiset.utils.config import get_config

        config = get_config()
        setup_logging(
            log_level=config.LOG_LEVEL,
            log_rotation=config.LOG_ROTATION,
            log_retention=config.LOG_RETENTION
        )

    except Exception as e:
        # Используем базовую настройку при ошибке загрузки конфигурации
        setup_logging()
        logger.error("Ошибка загрузки конфигурации для логирования: {}", str(e))


def get_module_logger(module_name: str):
    """
    Получить логгер для конкретного модуля

    Args:
        module_name: Имя модуля

    Returns:
        Настроенный логгер с привязкой к модулю
    """
    return logger.bind(module=module_name)


def log_startup_info() -> None:
    """Логирование информации о запуске приложения"""
    startup_logger = get_module_logger("startup")

    startup_logger.info("🚀 Запуск генератора алфавита emojiset")
    startup_logger.info("Python version: {}", sys.version.split()[0])
    startup_logger.info("Platform: {}", sys.platform)
    startup_logger.info("Working directory: {}", Path.cwd())
