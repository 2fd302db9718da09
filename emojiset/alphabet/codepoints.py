"""
Утилиты для работы с кодпоинтами
Разбор литералов вида 0x1F600 / U+1F600 / 1F600 и форматирование
"""

from typing import Iterable, List, Union

CodepointLike = Union[int, str]

MAX_CODEPOINT = 0x10FFFF
SURROGATE_RANGE = range(0xD800, 0xE000)


def parse_codepoint(value: CodepointLike) -> int:
    """
    Преобразовать литерал в кодпоинт

    Args:
        value: int или строка "0x1F600", "U+1F600", "1F600"

    Returns:
        Кодпоинт (int)

    Raises:
        ValueError: если значение не является скалярным значением Unicode
    """
    if isinstance(value, bool):
        raise ValueError(f"Неверный кодпоинт: {value!r}")

    if isinstance(value, int):
        codepoint = value
    elif isinstance(value, str):
        text = value.strip()
        upper = text.upper()
        if upper.startswith("U+"):
            text = text[2:]
        elif upper.startswith("0X"):
            text = text[2:]
        if not text:
            raise ValueError(f"Пустой литерал кодпоинта: {value!r}")
        codepoint = int(text, 16)
    else:
        raise ValueError(f"Неподдерживаемый тип кодпоинта: {type(value).__name__}")

    if codepoint < 0 or codepoint > MAX_CODEPOINT or codepoint in SURROGATE_RANGE:
        raise ValueError(f"Значение вне диапазона Unicode: {value!r}")

    return codepoint


def parse_codepoints(values: Iterable[CodepointLike]) -> List[int]:
    """Разобрать список литералов, порядок сохраняется"""
    return [parse_codepoint(value) for value in values]


def format_hex(codepoint: int) -> str:
    """Строчный hex без префикса, формат файла алфавита"""
    return f"{codepoint:x}"


def format_literal(codepoint: int) -> str:
    """Литерал для логов: 0x1f600"""
    return f"0x{codepoint:x}"
