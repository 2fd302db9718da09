"""
Тесты разбора и загрузки эталонного алфавита
"""

import asyncio

import aiohttp
import pytest

from emojiset.source.mapping import MappingClient, load_reference_alphabet, parse_mapping
from emojiset.utils.config import Config
from emojiset.utils.exceptions import MalformedSourceError, SourceUnavailableError

MAPPING_DOCUMENT = (
    "package ecoji\n"
    "\n"
    "func init() {\n"
    "\temojis[0] = 0x1F004\n"
    "\temojis[1] = 0x1F0CF\n"
    "\temojis[2] = 0x1F170\n"
    "}\n"
)


class FakeResponse:
    def __init__(self, status, text=""):
        self.status = status
        self._text = text

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Сессия, отдающая заранее заданные ответы по очереди"""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []
        self.closed = False

    def get(self, url, **kwargs):
        self.requests.append(url)
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self):
        self.closed = True


def make_client(responses, max_retries=3):
    client = MappingClient("https://example.test/mapping.go", max_retries=max_retries)
    client.retry_delay = 0
    client.session = FakeSession(responses)
    return client


def test_parse_mapping_extracts_in_document_order():
    assert parse_mapping(MAPPING_DOCUMENT) == [0x1F004, 0x1F0CF, 0x1F170]


def test_parse_mapping_accepts_crlf():
    assert parse_mapping(MAPPING_DOCUMENT.replace("\n", "\r\n")) == [0x1F004, 0x1F0CF, 0x1F170]


def test_parse_mapping_ignores_lines_outside_grammar():
    document = (
        "\temojis[0] = 0x1F004\n"
        "    emojis[1] = 0x1F0CF\n"   # пробелы вместо табуляции
        "\temojis[2] = 0x1f170\n"     # hex в нижнем регистре
        "\temojis[3] = 0x1F600\n"
    )
    assert parse_mapping(document) == [0x1F004, 0x1F600]


def test_parse_mapping_without_matches_is_malformed():
    with pytest.raises(MalformedSourceError):
        parse_mapping("<html>404</html>")


def test_parse_mapping_bad_hex_is_malformed():
    with pytest.raises(MalformedSourceError):
        parse_mapping("\temojis[0] = 0x1F0G4\n")


def test_parse_mapping_out_of_range_is_malformed():
    with pytest.raises(MalformedSourceError):
        parse_mapping("\temojis[0] = 0x110000\n")


def test_load_reference_alphabet_from_file(tmp_path):
    path = tmp_path / "mapping.go"
    path.write_text(MAPPING_DOCUMENT, encoding="utf-8")
    config = Config(MAPPING_PATH=str(path))

    assert asyncio.run(load_reference_alphabet(config)) == [0x1F004, 0x1F0CF, 0x1F170]


def test_fetch_retries_on_server_errors():
    client = make_client([FakeResponse(503), FakeResponse(200, MAPPING_DOCUMENT)])

    text = asyncio.run(client.fetch())

    assert text == MAPPING_DOCUMENT
    assert len(client.session.requests) == 2


def test_fetch_gives_up_on_client_error():
    client = make_client([FakeResponse(404), FakeResponse(200, MAPPING_DOCUMENT)])

    with pytest.raises(SourceUnavailableError):
        asyncio.run(client.fetch())
    assert len(client.session.requests) == 1


def test_fetch_raises_after_network_failures():
    client = make_client([aiohttp.ClientConnectionError("down")] * 2, max_retries=2)

    with pytest.raises(SourceUnavailableError) as exc_info:
        asyncio.run(client.fetch())
    assert "down" in exc_info.value.details
