"""
Классификатор символов алфавита
Решает, остается ли символ на месте, и собирает категории исключений пула
"""

from typing import Sequence

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Локальные импорты
from emojiset.alphabet.curation import Curation
from emojiset.alphabet.dictionary import DictionaryIndex
from emojiset.alphabet.models import ExclusionSet

# Настройка логгера модуля
logger = logger.bind(module="classifier")


class Classifier:
    """
    Классификатор: keep или replace

    Списки исключений ограничивают только то, что можно предложить как
    замену. Символ, который уже есть в словаре, остается на месте даже
    если попал в какой-то список.
    """

    def __init__(self, dictionary: DictionaryIndex, auto_people_variants: bool = False):
        """
        Args:
            dictionary: Индекс словаря эмодзи
            auto_people_variants: Добавлять базы модификаторов тона кожи из словаря
        """
        self.dictionary = dictionary
        self.auto_people_variants = auto_people_variants

    def is_acceptable(self, codepoint: int) -> bool:
        """Символ допустим как есть только при наличии в словаре"""
        return self.dictionary.is_known_single_codepoint_emoji(codepoint)

    def build_exclusion_set(
        self,
        main: Sequence[int],
        padding: Sequence[int],
        curation: Curation
    ) -> ExclusionSet:
        """
        Собрать категории исключений пула

        Args:
            main: Основной алфавит
            padding: Алфавит padding
            curation: Ручные списки и overrides

        Returns:
            ExclusionSet
        """
        people = set(curation.people_variant)
        if self.auto_people_variants:
            people.update(self.dictionary.modifier_bases())

        exclusions = ExclusionSet(
            already_used=frozenset(main) | frozenset(padding),
            redundant=frozenset(curation.redundant),
            future_spec=frozenset(curation.future_spec),
            people_variant=frozenset(people),
            explicit_override=curation.override_targets(),
        )

        for name, values in exclusions.categories().items():
            logger.debug("Категория исключений {}: {} кодпоинтов", name, len(values))

        return exclusions
