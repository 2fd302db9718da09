"""
Главный файл запуска генератора алфавита emojiset
Координирует загрузку эталона, сверку, отчет и запись файлов
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

# Стандартные импорты
from dotenv import load_dotenv

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Локальные импорты
from emojiset.alphabet import DictionaryIndex, ReconciliationEngine, ReconciliationResult, load_curation
from emojiset.database.connection import initialize_database, close_database
from emojiset.database.migrations import initialize_database_schema
from emojiset.names.resolver import NameResolver
from emojiset.report.formatter import render_report
from emojiset.report.writer import AlphabetWriter
from emojiset.source.mapping import load_reference_alphabet
from emojiset.utils.config import Config, get_config
from emojiset.utils.exceptions import DatabaseError, EmojisetError
from emojiset.utils.logging_config import log_startup_info, setup_logging, setup_logging_from_config

COMMANDS = ("generate", "report", "setup")


class AlphabetBuilder:
    """Главный класс генерации алфавита"""

    def __init__(self, config: Config, write_files: bool = True):
        """
        Инициализация генератора

        Args:
            config: Конфигурация приложения
            write_files: Записывать ли файлы алфавита
        """
        self.config = config
        self.write_files = write_files
        self.cache_ready = False

    async def build(self) -> ReconciliationResult:
        """Загрузить входные данные и выполнить сверку"""
        curation = load_curation(self.config.CURATION_PATH)
        reference = await load_reference_alphabet(self.config)

        dictionary = DictionaryIndex.from_emoji_package()
        engine = ReconciliationEngine(
            dictionary,
            curation,
            auto_people_variants=self.config.AUTO_PEOPLE_VARIANTS,
            replacement_floor=self.config.REPLACEMENT_FLOOR
        )
        return engine.reconcile(reference)

    async def _open_cache(self) -> None:
        """Кэш имен необязателен: без него имена запрашиваются напрямую"""
        try:
            await initialize_database(self.config.DATABASE_PATH)
            await initialize_database_schema()
            self.cache_ready = True
        except DatabaseError as e:
            logger.warning("⚠️ Кэш имен недоступен, работаем без него: {}", e.message)

    async def attach_names(self, result: ReconciliationResult) -> ReconciliationResult:
        """Получить имена для замененных позиций"""
        await self._open_cache()

        async with NameResolver(
            self.config.NAME_LOOKUP_URL,
            request_timeout=self.config.REQUEST_TIMEOUT,
            max_retries=self.config.MAX_RETRIES,
            concurrency=self.config.NAME_LOOKUP_CONCURRENCY,
            use_cache=self.cache_ready
        ) as resolver:
            names = await resolver.resolve_many(r.final for r in result.substitutions())

        return result.with_names(names)

    async def run(self) -> bool:
        """Главный цикл выполнения"""
        try:
            logger.info("🚀 Генерация алфавита...")
            result = await self.build()

            if self.config.REPORT_ENABLED:
                if self.config.NAME_LOOKUP_ENABLED and result.substitutions():
                    result = await self.attach_names(result)
                sys.stderr.write(render_report(result))

            if self.write_files:
                writer = AlphabetWriter(
                    self.config.OUTPUT_PATH,
                    self.config.PADDING_OUTPUT_PATH,
                    legacy_view=self.config.LEGACY_VIEW_ENABLED,
                    legacy_v1_path=self.config.LEGACY_V1_PATH,
                    legacy_sorted_path=self.config.LEGACY_SORTED_PATH
                )
                writer.write(result)

            total, replaced = result.counts()
            logger.info("✅ Готово: {} позиций, {} замен", total, replaced)
            return True

        except EmojisetError as e:
            logger.error("💥 Генерация прервана: {}", e.message)
            return False

        finally:
            await self.shutdown()

    async def shutdown(self) -> None:
        """Освобождение ресурсов"""
        if self.cache_ready:
            await close_database()
            self.cache_ready = False


async def setup_cache(config: Config) -> bool:
    """Создать схему кэша имен"""
    try:
        await initialize_database(config.DATABASE_PATH)
        await initialize_database_schema()
        logger.info("✅ Кэш имен готов: {}", config.DATABASE_PATH)
        return True
    except DatabaseError as e:
        logger.error("❌ Ошибка настройки кэша: {}", e.message)
        return False
    finally:
        await close_database()


async def main(argv: Optional[list] = None) -> int:
    """Главная функция"""
    args = sys.argv[1:] if argv is None else argv

    setup_logging()
    load_dotenv()

    command = args[0] if args else "generate"
    if command not in COMMANDS:
        logger.error("Неизвестная команда: {}", command)
        logger.info("Доступные команды: {}", ", ".join(COMMANDS))
        return 1

    try:
        config = get_config()
    except Exception as e:
        logger.error("❌ Ошибка конфигурации: {}", str(e))
        return 1

    setup_logging_from_config()
    log_startup_info()
    logger.info("📂 Рабочая директория: {}", Path.cwd())

    if command == "setup":
        logger.info("⚙️ Режим настройки кэша имен")
        return 0 if await setup_cache(config) else 1

    builder = AlphabetBuilder(config, write_files=(command == "generate"))
    success = await builder.run()
    return 0 if success else 1


if __name__ == "__main__":
    """Точка входа в приложение"""

    try:
        exit_code = asyncio.run(main())
        sys.exit(exit_code)

    except KeyboardInterrupt:
        logger.info("👋 Программа завершена пользователем")
        sys.exit(1)
