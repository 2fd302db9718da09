"""
Словарь известных эмодзи
Обертка над каталогом пакета emoji: проверка членства и выборка
одиночных кодпоинтов в родном порядке каталога
"""

from typing import Dict, Iterable, List, Optional, Set

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Сторонние библиотеки
import emoji

# Настройка логгера модуля
logger = logger.bind(module="emoji_dictionary")

# Модификаторы тона кожи U+1F3FB..U+1F3FF
SKIN_TONE_MODIFIERS = frozenset(range(0x1F3FB, 0x1F400))
VARIATION_SELECTOR_16 = 0xFE0F


class DictionaryIndex:
    """
    Индекс словаря эмодзи

    Порядок all_single_codepoint_emoji() совпадает с порядком перечисления
    словаря: от него зависит, какой символ пул выдаст первым.
    """

    def __init__(self, entries: Iterable[str], components: Iterable[str] = ()):
        """
        Инициализация индекса

        Args:
            entries: Записи словаря (строки эмодзи) в родном порядке
            components: Записи со статусом component, не самостоятельные символы
        """
        component_set = set(components)

        self._single: List[int] = []
        self._single_set: Set[int] = set()
        self._modifier_bases: List[int] = []
        modifier_base_set: Set[int] = set()
        self._entry_count = 0

        for entry in entries:
            self._entry_count += 1

            if len(entry) == 1:
                if entry in component_set:
                    continue
                codepoint = ord(entry)
                if codepoint not in self._single_set:
                    self._single.append(codepoint)
                    self._single_set.add(codepoint)
                continue

            base = self._modifier_base_of(entry)
            if base is not None and base not in modifier_base_set:
                self._modifier_bases.append(base)
                modifier_base_set.add(base)

        logger.debug(
            "Индекс словаря: {} записей, {} одиночных кодпоинтов, {} баз модификаторов",
            self._entry_count, len(self._single), len(self._modifier_bases)
        )

    @staticmethod
    def _modifier_base_of(entry: str) -> Optional[int]:
        """База последовательности X [FE0F] + тон кожи, иначе None"""
        codepoints = [ord(ch) for ch in entry]
        if len(codepoints) == 3 and codepoints[1] == VARIATION_SELECTOR_16:
            codepoints = [codepoints[0], codepoints[2]]
        if len(codepoints) == 2 and codepoints[1] in SKIN_TONE_MODIFIERS:
            return codepoints[0]
        return None

    @classmethod
    def from_emoji_package(cls, emoji_data: Optional[Dict[str, dict]] = None) -> "DictionaryIndex":
        """
        Построить индекс из каталога пакета emoji

        Args:
            emoji_data: Каталог в формате emoji.EMOJI_DATA (по умолчанию сам EMOJI_DATA)

        Returns:
            Готовый DictionaryIndex
        """
        data = emoji.EMOJI_DATA if emoji_data is None else emoji_data
        component_status = emoji.STATUS["component"]

        components = [
            entry for entry, meta in data.items()
            if meta.get("status") == component_status
        ]

        logger.info(
            "Загружен словарь emoji {}: {} записей",
            getattr(emoji, "__version__", "unknown"), len(data)
        )
        return cls(data.keys(), components=components)

    def is_known_single_codepoint_emoji(self, codepoint: int) -> bool:
        """Есть ли в словаре запись ровно из одного кодпоинта, равного codepoint"""
        return codepoint in self._single_set

    def all_single_codepoint_emoji(self) -> List[int]:
        """Все одиночные кодпоинты словаря в родном порядке"""
        return list(self._single)

    def modifier_bases(self) -> List[int]:
        """Одиночные кодпоинты, к которым словарь присоединяет тон кожи"""
        return list(self._modifier_bases)

    def __contains__(self, codepoint: int) -> bool:
        return self.is_known_single_codepoint_emoji(codepoint)

    def __len__(self) -> int:
        return len(self._single)
