"""
Пул замен
Упорядоченный набор свободных кандидатов, расходуется строго от начала к концу
"""

from typing import AbstractSet, Dict, Iterable, Iterator, List, Optional

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Настройка логгера модуля
logger = logger.bind(module="replacement_pool")


class ReplacementPool:
    """
    Пул кандидатов на замену

    Хранится как упорядоченный список слотов плюс карта значение -> слот.
    Удаленные и выданные слоты помечаются недействительными, курсор
    только движется вперед: выданное значение больше не появится.
    """

    def __init__(self, candidates: Iterable[int], exclusions: AbstractSet[int] = frozenset()):
        """
        Args:
            candidates: Одиночные кодпоинты словаря в родном порядке
            exclusions: Значения, которые нельзя предлагать как замену
        """
        self._slots: List[int] = []
        self._index: Dict[int, int] = {}

        for codepoint in candidates:
            if codepoint in exclusions or codepoint in self._index:
                continue
            self._index[codepoint] = len(self._slots)
            self._slots.append(codepoint)

        self._valid: List[bool] = [True] * len(self._slots)
        self._cursor = 0
        self._remaining = len(self._slots)

        logger.debug("Пул замен создан: {} кандидатов", self._remaining)

    def remove(self, codepoint: int) -> None:
        """Убрать значение из пула, если оно еще не выдано"""
        slot = self._index.pop(codepoint, None)
        if slot is None:
            return
        if self._valid[slot]:
            self._valid[slot] = False
            self._remaining -= 1

    def take_next(self) -> Optional[int]:
        """
        Выдать следующий свободный кандидат

        Returns:
            Кодпоинт или None если пул исчерпан
        """
        while self._cursor < len(self._slots):
            slot = self._cursor
            self._cursor += 1
            if not self._valid[slot]:
                continue
            self._valid[slot] = False
            self._remaining -= 1
            codepoint = self._slots[slot]
            del self._index[codepoint]
            return codepoint
        return None

    def remaining(self) -> List[int]:
        """Оставшиеся кандидаты в порядке выдачи"""
        return list(self)

    def __iter__(self) -> Iterator[int]:
        for slot in range(self._cursor, len(self._slots)):
            if self._valid[slot]:
                yield self._slots[slot]

    def __contains__(self, codepoint: int) -> bool:
        return codepoint in self._index

    def __len__(self) -> int:
        return self._remaining

    def __bool__(self) -> bool:
        return self._remaining > 0
