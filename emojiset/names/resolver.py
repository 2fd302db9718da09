"""
Получение отображаемых имен кодпоинтов
Удаленный источник (JSON API) с кэшем в SQLite
"""

import asyncio
from typing import Dict, Iterable, Optional

# HTTP запросы
import aiohttp

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Локальные импорты
from emojiset.alphabet.codepoints import format_literal
from emojiset.database.connection import is_database_initialized
from emojiset.database.crud.emoji_name import get_emoji_name_crud
from emojiset.database.models.emoji_name import create_emoji_name
from emojiset.utils.exceptions import DatabaseError, NameLookupError

# Настройка логгера модуля
logger = logger.bind(module="name_resolver")

# Поля ответа с именем, по приоритету
NAME_FIELDS = ("na", "na1", "name")


class NameResolver:
    """
    Резолвер имен кодпоинтов

    Ошибки получения имени не прерывают генерацию: имя просто
    остается пустым. Параллельные запросы ограничены семафором,
    результат отдается словарем по кодпоинту.
    """

    def __init__(
        self,
        url_template: str,
        request_timeout: int = 30,
        max_retries: int = 3,
        concurrency: int = 8,
        use_cache: bool = True
    ):
        """
        Args:
            url_template: Шаблон URL с плейсхолдером {hex} (hex в верхнем регистре)
            request_timeout: Общий таймаут запроса, секунды
            max_retries: Количество попыток на кодпоинт
            concurrency: Максимум одновременных запросов
            use_cache: Читать и писать кэш в БД (если она инициализирована)
        """
        self.url_template = url_template
        self.request_timeout = request_timeout
        self.max_retries = max_retries
        self.retry_delay = 1
        self.concurrency = concurrency
        self.use_cache = use_cache
        self.session: Optional[aiohttp.ClientSession] = None
        self._crud = get_emoji_name_crud()
        self._stats = {"cached": 0, "fetched": 0, "failed": 0}

    async def __aenter__(self):
        """Асинхронный контекст менеджер - вход"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Асинхронный контекст менеджер - выход"""
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Получить или создать HTTP сессию"""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.request_timeout)
            self.session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"User-Agent": "emojiset/1.0", "Accept": "application/json"}
            )
        return self.session

    async def close(self) -> None:
        """Закрыть HTTP сессию"""
        if self.session and not self.session.closed:
            await self.session.close()
            self.session = None

    def _cache_enabled(self) -> bool:
        return self.use_cache and is_database_initialized()

    async def _cache_get(self, codepoint: int) -> Optional[str]:
        if not self._cache_enabled():
            return None
        try:
            cached = await self._crud.get(codepoint)
        except DatabaseError as e:
            logger.warning("Кэш имен недоступен: {}", e.message)
            return None
        return cached.name if cached else None

    async def _cache_put(self, codepoint: int, name: str) -> None:
        if not self._cache_enabled():
            return
        try:
            await self._crud.save(create_emoji_name(codepoint, name, source=self.url_template))
        except DatabaseError as e:
            logger.warning("Не удалось сохранить имя {} в кэш: {}", format_literal(codepoint), e.message)

    async def _fetch_name(self, codepoint: int) -> str:
        """
        Запросить имя у удаленного источника

        Raises:
            NameLookupError: имя не получено после всех попыток
        """
        session = await self._get_session()
        url = self.url_template.format(hex=f"{codepoint:X}")
        status: Optional[int] = None
        last_error = ""

        for attempt in range(1, self.max_retries + 1):
            try:
                async with session.get(url) as response:
                    status = response.status
                    if status == 200:
                        data = await response.json(content_type=None)
                        name = self._extract_name(data)
                        if name:
                            return name
                        raise NameLookupError(codepoint, status, "в ответе нет поля с именем")

                    last_error = f"HTTP {status}"
                    if status != 429 and status < 500:
                        break

            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                last_error = str(e) or type(e).__name__

            if attempt < self.max_retries:
                await asyncio.sleep(self.retry_delay * attempt)

        raise NameLookupError(codepoint, status, last_error)

    @staticmethod
    def _extract_name(data) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        for key in NAME_FIELDS:
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None

    async def resolve(self, codepoint: int) -> Optional[str]:
        """
        Получить имя кодпоинта

        Returns:
            Имя или None если получить не удалось
        """
        cached = await self._cache_get(codepoint)
        if cached:
            self._stats["cached"] += 1
            return cached

        try:
            name = await self._fetch_name(codepoint)
        except NameLookupError:
            self._stats["failed"] += 1
            return None

        self._stats["fetched"] += 1
        await self._cache_put(codepoint, name)
        return name

    async def resolve_many(self, codepoints: Iterable[int]) -> Dict[int, Optional[str]]:
        """
        Получить имена для набора кодпоинтов параллельно

        Returns:
            Словарь {кодпоинт: имя или None}
        """
        unique = list(dict.fromkeys(codepoints))
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _bounded(codepoint: int) -> Optional[str]:
            async with semaphore:
                return await self.resolve(codepoint)

        names = await asyncio.gather(*(_bounded(cp) for cp in unique))

        logger.info(
            "Имена: {} из кэша, {} получено, {} без имени",
            self._stats["cached"], self._stats["fetched"], self._stats["failed"]
        )
        return dict(zip(unique, names))

    @property
    def stats(self) -> dict:
        """Статистика получения имен"""
        return dict(self._stats)
