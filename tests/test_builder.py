"""
Сквозные тесты генератора (без сети)
"""

import asyncio

import pytest
from loguru import logger

from main import AlphabetBuilder, main
from emojiset.utils.config import Config

MAPPING_DOCUMENT = (
    "\temojis[0] = 0x1F600\n"
    "\temojis[1] = 0x41\n"
    "\temojis[2] = 0x1F601\n"
)


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Запуск CLI в tmp_path: свежая конфигурация, логи не переживают тест"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("emojiset.utils.config._config", None)
    yield tmp_path
    logger.remove()


def make_config(tmp_path, document=MAPPING_DOCUMENT, **overrides):
    mapping = tmp_path / "mapping.go"
    mapping.write_text(document, encoding="utf-8")
    values = dict(
        MAPPING_PATH=str(mapping),
        OUTPUT_PATH=str(tmp_path / "emojis.txt"),
        PADDING_OUTPUT_PATH=str(tmp_path / "emojis_padding.txt"),
        NAME_LOOKUP_ENABLED=False,
        DATABASE_PATH=str(tmp_path / "names.db"),
    )
    values.update(overrides)
    return Config(**values)


def read_alphabet(path):
    return [int(line, 16) for line in path.read_text(encoding="utf-8").splitlines()]


def test_generate_writes_collision_free_alphabet(tmp_path, capsys):
    config = make_config(tmp_path)

    assert asyncio.run(AlphabetBuilder(config).run()) is True

    alphabet = read_alphabet(tmp_path / "emojis.txt")
    padding = read_alphabet(tmp_path / "emojis_padding.txt")
    assert alphabet[0] == 0x1F600
    assert alphabet[2] == 0x1F601
    assert alphabet[1] > 0x1F004
    assert len(set(alphabet + padding)) == len(alphabet) + len(padding)
    assert "| 1 | A (41) |" in capsys.readouterr().err


def test_report_mode_writes_nothing(tmp_path):
    config = make_config(tmp_path)

    assert asyncio.run(AlphabetBuilder(config, write_files=False).run()) is True
    assert not (tmp_path / "emojis.txt").exists()


def test_malformed_source_fails_without_output(tmp_path):
    config = make_config(tmp_path, document="not a mapping\n")

    assert asyncio.run(AlphabetBuilder(config).run()) is False
    assert not (tmp_path / "emojis.txt").exists()
    assert not (tmp_path / "emojis_padding.txt").exists()


def test_repeated_runs_are_byte_identical(tmp_path):
    first = make_config(tmp_path, OUTPUT_PATH=str(tmp_path / "first.txt"))
    second = make_config(tmp_path, OUTPUT_PATH=str(tmp_path / "second.txt"))

    asyncio.run(AlphabetBuilder(first).run())
    asyncio.run(AlphabetBuilder(second).run())

    assert (tmp_path / "first.txt").read_bytes() == (tmp_path / "second.txt").read_bytes()


def test_exhausted_pool_fails_without_output(tmp_path):
    config = make_config(tmp_path, REPLACEMENT_FLOOR="0x10FFFE")
    errors = []
    handler_id = logger.add(errors.append, level="ERROR")
    try:
        assert asyncio.run(AlphabetBuilder(config).run()) is False
    finally:
        logger.remove(handler_id)

    assert any("Пул замен исчерпан" in message for message in errors)
    assert not (tmp_path / "emojis.txt").exists()
    assert not (tmp_path / "emojis_padding.txt").exists()


def test_generate_command_exits_non_zero_when_pool_is_exhausted(cli_env, monkeypatch):
    mapping = cli_env / "mapping.go"
    mapping.write_text(MAPPING_DOCUMENT, encoding="utf-8")
    monkeypatch.setenv("MAPPING_PATH", str(mapping))
    monkeypatch.setenv("REPLACEMENT_FLOOR", "0x10FFFE")
    monkeypatch.setenv("NAME_LOOKUP_ENABLED", "false")

    assert asyncio.run(main(["generate"])) == 1
    assert not (cli_env / "emojis.txt").exists()
    assert not (cli_env / "emojis_padding.txt").exists()


def test_unknown_command_exits_non_zero(cli_env):
    assert asyncio.run(main(["explode"])) == 1
