"""
Тесты кэша имен и резолвера
"""

import asyncio

import pytest
from loguru import logger

from emojiset.database.connection import close_database, get_connection, initialize_database, is_database_initialized
from emojiset.database.crud.emoji_name import get_emoji_name_crud
from emojiset.database.migrations import get_database_info, initialize_database_schema
from emojiset.database.models.emoji_name import create_emoji_name
from emojiset.names.resolver import NameResolver
from emojiset.utils.exceptions import DatabaseError, NameLookupError

URL_TEMPLATE = "https://example.test/codepoint/{hex}"


class StubResolver(NameResolver):
    """Резолвер без сети: имена из словаря, остальное - ошибка"""

    def __init__(self, known, **kwargs):
        super().__init__(URL_TEMPLATE, **kwargs)
        self.known = known
        self.fetched = []

    async def _fetch_name(self, codepoint):
        self.fetched.append(codepoint)
        if codepoint in self.known:
            return self.known[codepoint]
        raise NameLookupError(codepoint, 404)


def test_emoji_name_key_is_lowercase_hex():
    record = create_emoji_name(0x1F60A, " SMILING FACE WITH SMILING EYES ")
    assert record.codepoint_hex == "1f60a"
    assert record.name == "SMILING FACE WITH SMILING EYES"
    assert record.codepoint == 0x1F60A
    assert record.validate()


def test_cache_roundtrip(tmp_path):
    async def scenario():
        await initialize_database(str(tmp_path / "names.db"))
        try:
            await initialize_database_schema()
            # повторная инициализация не ломает схему
            await initialize_database_schema()

            crud = get_emoji_name_crud()
            assert await crud.get(0x1F600) is None

            await crud.save(create_emoji_name(0x1F600, "GRINNING FACE", source=URL_TEMPLATE))
            await crud.save(create_emoji_name(0x1F600, "GRINNING FACE", source=URL_TEMPLATE))

            cached = await crud.get(0x1F600)
            info = await get_database_info()
            return cached, await crud.count(), info
        finally:
            await close_database()

    cached, count, info = asyncio.run(scenario())

    assert cached.codepoint_hex == "1f600"
    assert cached.name == "GRINNING FACE"
    assert count == 1
    assert info["schema_version"] == 1
    assert info["tables"] == {"emoji_names": 1}


def test_resolver_failures_are_recoverable():
    resolver = StubResolver({0x1F600: "GRINNING FACE"})

    names = asyncio.run(resolver.resolve_many([0x1F600, 0x1F601, 0x1F600]))

    assert names == {0x1F600: "GRINNING FACE", 0x1F601: None}
    assert sorted(resolver.fetched) == [0x1F600, 0x1F601]
    assert resolver.stats == {"cached": 0, "fetched": 1, "failed": 1}


def test_resolver_uses_cache_on_second_run(tmp_path):
    async def scenario():
        await initialize_database(str(tmp_path / "names.db"))
        try:
            await initialize_database_schema()
            first = StubResolver({0x1F602: "FACE WITH TEARS OF JOY"})
            await first.resolve_many([0x1F602])

            second = StubResolver({})
            names = await second.resolve_many([0x1F602])
            return second, names
        finally:
            await close_database()

    second, names = asyncio.run(scenario())

    assert names == {0x1F602: "FACE WITH TEARS OF JOY"}
    assert second.fetched == []
    assert second.stats["cached"] == 1


def test_resolver_without_database_skips_cache():
    resolver = StubResolver({0x1F603: "SMILING FACE WITH OPEN MOUTH"})
    assert asyncio.run(resolver.resolve(0x1F603)) == "SMILING FACE WITH OPEN MOUTH"


def test_extract_name_prefers_unicode_name_field():
    assert NameResolver._extract_name({"na": "GRINNING FACE", "name": "x"}) == "GRINNING FACE"
    assert NameResolver._extract_name({"na": "", "na1": "OLD NAME"}) == "OLD NAME"
    assert NameResolver._extract_name({"cp": 128512}) is None
    assert NameResolver._extract_name(["GRINNING FACE"]) is None


def test_failed_lookup_is_logged_as_warning():
    levels = []
    handler_id = logger.add(lambda message: levels.append(message.record["level"].name), level="DEBUG")
    try:
        asyncio.run(StubResolver({}).resolve(0x1F604))
    finally:
        logger.remove(handler_id)

    assert "WARNING" in levels
    assert "ERROR" not in levels


def test_closed_cache_refuses_queries(tmp_path):
    async def scenario():
        await initialize_database(str(tmp_path / "names.db"))
        opened = is_database_initialized()
        await close_database()
        return opened

    assert asyncio.run(scenario()) is True
    assert is_database_initialized() is False
    with pytest.raises(DatabaseError):
        get_connection()
    with pytest.raises(DatabaseError):
        asyncio.run(get_emoji_name_crud().get(0x1F600))


def test_unusable_cache_path_raises_connection_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(DatabaseError):
        asyncio.run(initialize_database(str(blocker / "names.db")))
    assert is_database_initialized() is False
