"""
Модуль сверки алфавита эмодзи
Фильтрация эталонного алфавита по словарю и детерминированная замена
недопустимых символов без повторов
"""

from .dictionary import DictionaryIndex
from .pool import ReplacementPool
from .classifier import Classifier
from .curation import Curation, load_curation
from .models import (
    AlphabetKind,
    ExclusionSet,
    ReconciliationResult,
    SubstitutionReason,
    SubstitutionRecord,
)
from .reconciler import ReconciliationEngine

__all__ = [
    "DictionaryIndex",
    "ReplacementPool",
    "Classifier",
    "Curation",
    "load_curation",
    "AlphabetKind",
    "ExclusionSet",
    "ReconciliationResult",
    "SubstitutionReason",
    "SubstitutionRecord",
    "ReconciliationEngine",
]
