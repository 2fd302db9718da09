"""
Загрузка эталонного алфавита (V1)
Скачивание mapping.go и извлечение строк вида
    emojis[<index>] = 0x<HEX>
"""

import asyncio
import re
from pathlib import Path
from typing import List, Optional

# HTTP запросы
import aiohttp

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Локальные импорты
from emojiset.utils.config import Config
from emojiset.utils.exceptions import MalformedSourceError, SourceUnavailableError

# Настройка логгера модуля
logger = logger.bind(module="mapping_source")

# Табуляция, десятичный индекс, hex в верхнем регистре с префиксом 0x
MAPPING_LINE_PATTERN = re.compile(r"\temojis\[(\d+)\] = 0x([0-9A-Z]+)\n")


def parse_mapping(text: str, source: str = "<mapping>") -> List[int]:
    """
    Извлечь алфавит из документа mapping

    Args:
        text: Содержимое документа
        source: Имя источника для сообщений об ошибках

    Returns:
        Кодпоинты в порядке документа

    Raises:
        MalformedSourceError: нет ни одной строки или hex не разбирается
    """
    normalized = text.replace("\r\n", "\n")
    matches = MAPPING_LINE_PATTERN.findall(normalized)

    if not matches:
        raise MalformedSourceError(source, "не найдено ни одной строки emojis[N] = 0x...")

    alphabet: List[int] = []
    for position, (index_text, hex_text) in enumerate(matches):
        try:
            codepoint = int(hex_text, 16)
        except ValueError:
            raise MalformedSourceError(source, f"emojis[{index_text}]: неверный hex 0x{hex_text}")

        if codepoint > 0x10FFFF:
            raise MalformedSourceError(source, f"emojis[{index_text}]: 0x{hex_text} вне диапазона Unicode")

        if int(index_text) != position:
            logger.warning("Индекс emojis[{}] не совпадает с позицией {}", index_text, position)

        alphabet.append(codepoint)

    logger.info("Из {} извлечено {} символов алфавита", source, len(alphabet))
    return alphabet


class MappingClient:
    """Клиент для скачивания документа mapping"""

    def __init__(self, url: str, request_timeout: int = 30, max_retries: int = 3):
        """
        Args:
            url: Адрес документа
            request_timeout: Общий таймаут запроса, секунды
            max_retries: Количество попыток
        """
        self.url = url
        self.request_timeout = request_timeout
        self.max_retries = max_retries
        self.retry_delay = 1
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Асинхронный контекст менеджер - вход"""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Асинхронный контекст менеджер - выход"""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Создать HTTP сессию если не существует"""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.request_timeout)
            self.session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"User-Agent": "emojiset/1.0"}
            )
        return self.session

    async def close(self) -> None:
        """Закрыть HTTP сессию"""
        if self.session and not self.session.closed:
            await self.session.close()
            self.session = None

    async def fetch(self) -> str:
        """
        Скачать документ

        Returns:
            Текст документа

        Raises:
            SourceUnavailableError: все попытки неуспешны
        """
        session = await self._ensure_session()
        last_error = ""

        for attempt in range(1, self.max_retries + 1):
            try:
                logger.debug("Запрос mapping: {} (попытка {})", self.url, attempt)

                async with session.get(self.url) as response:
                    if response.status == 200:
                        text = await response.text()
                        logger.info("Получен mapping: {} байт", len(text))
                        return text

                    last_error = f"HTTP {response.status}"
                    if response.status != 429 and response.status < 500:
                        break

                    logger.warning("Mapping недоступен ({}), попытка {}/{}", last_error, attempt, self.max_retries)

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = str(e) or type(e).__name__
                logger.warning("Сетевая ошибка mapping: {}, попытка {}/{}", last_error, attempt, self.max_retries)

            if attempt < self.max_retries:
                await asyncio.sleep(self.retry_delay * attempt)

        raise SourceUnavailableError(self.url, last_error)


def read_mapping_file(path: str) -> str:
    """Прочитать документ mapping с диска"""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(path, str(e))


async def load_reference_alphabet(config: Config) -> List[int]:
    """
    Получить эталонный алфавит согласно конфигурации

    MAPPING_PATH имеет приоритет над MAPPING_URL.
    """
    if config.MAPPING_PATH:
        logger.info("Чтение mapping из файла {}", config.MAPPING_PATH)
        return parse_mapping(read_mapping_file(config.MAPPING_PATH), source=config.MAPPING_PATH)

    logger.info("Скачивание mapping из {}", config.MAPPING_URL)
    async with MappingClient(
        config.MAPPING_URL,
        request_timeout=config.REQUEST_TIMEOUT,
        max_retries=config.MAX_RETRIES
    ) as client:
        text = await client.fetch()

    return parse_mapping(text, source=config.MAPPING_URL)
