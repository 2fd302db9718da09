"""
Движок сверки алфавита
Проходит padding и основной алфавит по позициям и выдает итоговые символы
без повторов, с учетом ручных замен и порядка пула
"""

from collections import Counter
from typing import List, Mapping, Optional, Sequence, Set

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Локальные импорты
from emojiset.alphabet.classifier import Classifier
from emojiset.alphabet.codepoints import format_literal
from emojiset.alphabet.curation import Curation
from emojiset.alphabet.dictionary import DictionaryIndex
from emojiset.alphabet.models import (
    AlphabetKind,
    ExclusionSet,
    ReconciliationResult,
    SubstitutionReason,
    SubstitutionRecord,
)
from emojiset.alphabet.pool import ReplacementPool
from emojiset.utils.exceptions import CurationError, PoolExhaustedError

# Настройка логгера модуля
logger = logger.bind(module="reconciler")


class ReconciliationEngine:
    """
    Движок сверки

    Порядок: сначала padding, затем основной алфавит. Оба прохода делят
    один пул, поэтому значение не может попасть в два алфавита сразу.
    Один и тот же вход всегда дает один и тот же выход.
    """

    def __init__(
        self,
        dictionary: DictionaryIndex,
        curation: Optional[Curation] = None,
        auto_people_variants: bool = False,
        replacement_floor: Optional[int] = None
    ):
        """
        Инициализация движка

        Args:
            dictionary: Индекс словаря эмодзи
            curation: Списки исключений и overrides (по умолчанию встроенные)
            auto_people_variants: Исключать из пула базы модификаторов тона кожи
            replacement_floor: Кандидаты с кодпоинтом <= floor не попадают в пул
        """
        self.dictionary = dictionary
        self.curation = curation if curation is not None else Curation()
        self.classifier = Classifier(dictionary, auto_people_variants=auto_people_variants)
        self.replacement_floor = replacement_floor

    def validate_curation(self, main: Sequence[int], padding: Sequence[int]) -> None:
        """
        Проверить overrides до начала прохода

        Raises:
            CurationError: override повторяется, совпадает с исходным символом
                или отсутствует в словаре
        """
        targets = list(self.curation.main_overrides.values()) + list(self.curation.padding_overrides.values())
        repeated = sorted(cp for cp, count in Counter(targets).items() if count > 1)
        if repeated:
            raise CurationError(
                "одна и та же замена назначена нескольким позициям",
                ", ".join(format_literal(cp) for cp in repeated)
            )

        originals = set(main) | set(padding)
        clashing = sorted(set(targets) & originals)
        if clashing:
            raise CurationError(
                "замена совпадает с символом исходного алфавита",
                ", ".join(format_literal(cp) for cp in clashing)
            )

        unknown = sorted(cp for cp in set(targets) if not self.dictionary.is_known_single_codepoint_emoji(cp))
        if unknown:
            raise CurationError(
                "замена отсутствует в словаре эмодзи",
                ", ".join(format_literal(cp) for cp in unknown)
            )

        for kind, alphabet in ((AlphabetKind.PADDING, padding), (AlphabetKind.MAIN, main)):
            for position in self.curation.overrides_for(kind):
                if position >= len(alphabet):
                    logger.warning(
                        "Override {}[{}] вне алфавита длиной {}, не будет применен",
                        kind.value, position, len(alphabet)
                    )
                elif self.classifier.is_acceptable(alphabet[position]):
                    logger.debug(
                        "Override {}[{}] не нужен: {} допустим как есть",
                        kind.value, position, format_literal(alphabet[position])
                    )

    def build_pool(self, exclusions: ExclusionSet) -> ReplacementPool:
        """Собрать пул: одиночные кодпоинты словаря минус исключения"""
        candidates = self.dictionary.all_single_codepoint_emoji()
        if self.replacement_floor is not None:
            candidates = [cp for cp in candidates if cp > self.replacement_floor]
        return ReplacementPool(candidates, exclusions.all())

    def reconcile(self, main: Sequence[int], padding: Optional[Sequence[int]] = None) -> ReconciliationResult:
        """
        Выполнить сверку

        Args:
            main: Основной алфавит (эталон V1)
            padding: Алфавит padding (по умолчанию из curation)

        Returns:
            ReconciliationResult с записями по каждой позиции

        Raises:
            PoolExhaustedError: замена нужна, а кандидатов не осталось
            CurationError: противоречивые overrides
        """
        main = list(main)
        padding = list(self.curation.padding if padding is None else padding)

        self.validate_curation(main, padding)

        exclusions = self.classifier.build_exclusion_set(main, padding, self.curation)
        pool = self.build_pool(exclusions)
        logger.info(
            "Сверка: {} позиций padding, {} позиций алфавита, {} кандидатов в пуле",
            len(padding), len(main), len(pool)
        )

        emitted: Set[int] = set()
        result = ReconciliationResult(
            padding_records=self._reconcile_alphabet(AlphabetKind.PADDING, padding, pool, emitted),
            main_records=self._reconcile_alphabet(AlphabetKind.MAIN, main, pool, emitted),
        )

        total, replaced = result.counts()
        logger.info("Сверка завершена: {} позиций, {} замен, {} кандидатов осталось", total, replaced, len(pool))
        return result

    def _reconcile_alphabet(
        self,
        kind: AlphabetKind,
        alphabet: Sequence[int],
        pool: ReplacementPool,
        emitted: Set[int]
    ) -> List[SubstitutionRecord]:
        """Один проход по алфавиту"""
        overrides: Mapping[int, int] = self.curation.overrides_for(kind)
        records: List[SubstitutionRecord] = []

        for position, original in enumerate(alphabet):
            acceptable = self.classifier.is_acceptable(original)

            if acceptable and original not in emitted:
                record = SubstitutionRecord(
                    kind=kind,
                    position=position,
                    original=original,
                    kept=True,
                    final=original,
                    reason=SubstitutionReason.KEPT,
                )
            else:
                record = self._substitute(kind, position, original, acceptable, overrides, pool)

            emitted.add(record.final)
            records.append(record)

        return records

    def _substitute(
        self,
        kind: AlphabetKind,
        position: int,
        original: int,
        acceptable: bool,
        overrides: Mapping[int, int],
        pool: ReplacementPool
    ) -> SubstitutionRecord:
        """Подобрать замену: override для позиции, иначе следующий из пула"""
        if position in overrides:
            final = overrides[position]
            pool.remove(final)
            reason = SubstitutionReason.OVERRIDE
        else:
            final = pool.take_next()
            if final is None:
                raise PoolExhaustedError(kind.value, position, original)
            reason = SubstitutionReason.DUPLICATE if acceptable else SubstitutionReason.POOL

        if acceptable:
            logger.warning(
                "{}[{}]: {} повторяется, замена: {}",
                kind.value, position, format_literal(original), format_literal(final)
            )
        else:
            logger.info(
                "{}[{}]: {} недопустим, замена ({}): {}",
                kind.value, position, format_literal(original), reason.value, format_literal(final)
            )

        return SubstitutionRecord(
            kind=kind,
            position=position,
            original=original,
            kept=False,
            final=final,
            reason=reason,
        )
