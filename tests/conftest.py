"""
Общие фикстуры тестов
"""

import pytest

from emojiset.alphabet import DictionaryIndex


def emoji_entries(*codepoints):
    """Записи словаря из кодпоинтов (одиночные символы)"""
    return [chr(cp) for cp in codepoints]


@pytest.fixture
def small_dictionary():
    """Словарь из шести одиночных эмодзи и пары последовательностей"""
    entries = emoji_entries(0x1F600, 0x1F601, 0x1F602, 0x1F603, 0x1F604, 0x1F605)
    entries.append(chr(0x1F44D) + chr(0x1F3FB))       # 👍🏻
    entries.append(chr(0x1F1FA) + chr(0x1F1F8))       # флаг US
    return DictionaryIndex(entries)
