"""
Модели данных сверки алфавита
Вид алфавита, запись о подстановке и итог прохода
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple


class AlphabetKind(str, Enum):
    """Вид алфавита: у каждого свое пространство позиций"""
    PADDING = "padding"
    MAIN = "main"


class SubstitutionReason(str, Enum):
    """Почему позиция получила свое итоговое значение"""
    KEPT = "kept"
    OVERRIDE = "override"
    POOL = "pool"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class SubstitutionRecord:
    """
    Запись о подстановке для одной позиции

    Attributes:
        kind: Вид алфавита
        position: Индекс позиции внутри алфавита
        original: Исходный кодпоинт
        kept: Оставлен ли исходный символ
        final: Итоговый кодпоинт
        reason: Причина итогового значения
        name: Отображаемое имя итогового символа (если получено)
    """

    kind: AlphabetKind
    position: int
    original: int
    kept: bool
    final: int
    reason: SubstitutionReason
    name: Optional[str] = None

    @property
    def replaced(self) -> bool:
        return not self.kept

    def with_name(self, name: Optional[str]) -> "SubstitutionRecord":
        return replace(self, name=name)


@dataclass(frozen=True)
class ExclusionSet:
    """
    Категории исключений пула

    Значение из любой категории никогда не выдается как замена.
    """

    already_used: frozenset = frozenset()
    redundant: frozenset = frozenset()
    future_spec: frozenset = frozenset()
    people_variant: frozenset = frozenset()
    explicit_override: frozenset = frozenset()

    def categories(self) -> Dict[str, frozenset]:
        return {
            "already_used": self.already_used,
            "redundant": self.redundant,
            "future_spec": self.future_spec,
            "people_variant": self.people_variant,
            "explicit_override": self.explicit_override,
        }

    def all(self) -> frozenset:
        """Объединение всех категорий"""
        return frozenset().union(*self.categories().values())

    def categories_of(self, codepoint: int) -> List[str]:
        """Имена категорий, в которые попадает codepoint"""
        return [name for name, values in self.categories().items() if codepoint in values]

    def __contains__(self, codepoint: int) -> bool:
        return any(codepoint in values for values in self.categories().values())


@dataclass
class ReconciliationResult:
    """Итог сверки: записи по обоим алфавитам в порядке позиций"""

    padding_records: List[SubstitutionRecord] = field(default_factory=list)
    main_records: List[SubstitutionRecord] = field(default_factory=list)

    @property
    def final_padding(self) -> List[int]:
        return [record.final for record in self.padding_records]

    @property
    def final_alphabet(self) -> List[int]:
        return [record.final for record in self.main_records]

    @property
    def original_padding(self) -> List[int]:
        return [record.original for record in self.padding_records]

    @property
    def original_alphabet(self) -> List[int]:
        return [record.original for record in self.main_records]

    def records(self) -> List[SubstitutionRecord]:
        """Все записи: сначала padding, затем основной алфавит"""
        return self.padding_records + self.main_records

    def substitutions(self) -> List[SubstitutionRecord]:
        """Только замененные позиции"""
        return [record for record in self.records() if record.replaced]

    def with_names(self, names: Mapping[int, Optional[str]]) -> "ReconciliationResult":
        """Копия результата с именами итоговых символов, порядок записей сохраняется"""
        return ReconciliationResult(
            padding_records=[r.with_name(names.get(r.final)) for r in self.padding_records],
            main_records=[r.with_name(names.get(r.final)) for r in self.main_records],
        )

    def counts(self) -> Tuple[int, int]:
        """(всего позиций, заменено позиций)"""
        records = self.records()
        return len(records), sum(1 for r in records if r.replaced)
