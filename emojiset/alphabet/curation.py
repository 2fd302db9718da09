"""
Списки исключений и ручные замены (curation)
Встроенные значения по умолчанию и загрузка из JSON файла
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Локальные импорты
from emojiset.alphabet.codepoints import parse_codepoint, parse_codepoints
from emojiset.alphabet.models import AlphabetKind
from emojiset.utils.exceptions import CurationError

# Настройка логгера модуля
logger = logger.bind(module="curation")

# Символы padding эталонной кодировки
DEFAULT_PADDING: Tuple[int, ...] = (
    0x269C,   # ⚜
    0x1F3CD,  # 🏍
    0x1F4D1,  # 📑
    0x1F64B,  # 🙋
)

# Почти одинаковые глифы: циферблаты и фазы луны, пузыри речи
DEFAULT_REDUNDANT: Tuple[int, ...] = (
    *range(0x1F550, 0x1F568),  # 🕐..🕧
    *range(0x1F311, 0x1F319),  # 🌑..🌘
    0x1F5E8,  # 🗨
    0x1F5EF,  # 🗯
)

# Ожидаются в следующих версиях словаря (Emoji 16.0)
DEFAULT_FUTURE_SPEC: Tuple[int, ...] = (
    0x1FAE9,  # face with bags under eyes
    0x1FAC6,  # fingerprint
    0x1FABE,  # leafless tree
    0x1FADC,  # root vegetable
    0x1FA89,  # harp
    0x1FA8F,  # shovel
    0x1FADF,  # splatter
)

# Люди и пары: словарь прикрепляет к ним тон кожи или пол
DEFAULT_PEOPLE_VARIANT: Tuple[int, ...] = (
    0x1F46A,  # 👪
    0x1F48F,  # 💏
    0x1F491,  # 💑
    0x1F9D1,  # 🧑
    0x1F468,  # 👨
    0x1F469,  # 👩
)


@dataclass(frozen=True)
class Curation:
    """
    Ручная настройка сверки

    Attributes:
        padding: Алфавит padding (позиционный)
        redundant: Нежелательные кандидаты (дубли по виду)
        future_spec: Зарезервированы под будущие версии словаря
        people_variant: Символы с модификаторами тона кожи или пола
        main_overrides: Позиция основного алфавита -> замена
        padding_overrides: Позиция padding -> замена
    """

    padding: Tuple[int, ...] = DEFAULT_PADDING
    redundant: FrozenSet[int] = frozenset(DEFAULT_REDUNDANT)
    future_spec: FrozenSet[int] = frozenset(DEFAULT_FUTURE_SPEC)
    people_variant: FrozenSet[int] = frozenset(DEFAULT_PEOPLE_VARIANT)
    main_overrides: Mapping[int, int] = field(default_factory=dict)
    padding_overrides: Mapping[int, int] = field(default_factory=dict)

    def overrides_for(self, kind: AlphabetKind) -> Mapping[int, int]:
        """Overrides одного вида алфавита; пространства позиций не смешиваются"""
        if kind is AlphabetKind.PADDING:
            return self.padding_overrides
        return self.main_overrides

    def override_targets(self) -> FrozenSet[int]:
        return frozenset(self.main_overrides.values()) | frozenset(self.padding_overrides.values())


def _parse_list(data: Dict[str, Any], key: str, source: str) -> Optional[Tuple[int, ...]]:
    if key not in data:
        return None
    values = data[key]
    if not isinstance(values, list):
        raise CurationError(f"поле '{key}' должно быть списком", source)
    try:
        return tuple(parse_codepoints(values))
    except ValueError as e:
        raise CurationError(f"неверный кодпоинт в '{key}'", f"{source}: {e}")


def _parse_overrides(raw: Any, kind: AlphabetKind, source: str) -> Dict[int, int]:
    if not isinstance(raw, dict):
        raise CurationError(f"overrides.{kind.value} должен быть объектом", source)

    overrides: Dict[int, int] = {}
    for position, value in raw.items():
        try:
            index = int(position)
            codepoint = parse_codepoint(value)
        except (TypeError, ValueError) as e:
            raise CurationError(
                f"неверный override {kind.value}[{position}]", f"{source}: {e}"
            )
        if index < 0:
            raise CurationError(f"отрицательная позиция override {kind.value}[{index}]", source)
        overrides[index] = codepoint
    return overrides


def curation_from_dict(data: Dict[str, Any], source: str = "<dict>") -> Curation:
    """
    Собрать Curation из словаря формата JSON файла

    Отсутствующие ключи берутся из встроенных значений по умолчанию.
    """
    if not isinstance(data, dict):
        raise CurationError("корень curation должен быть объектом", source)

    defaults = Curation()

    padding = _parse_list(data, "padding", source)
    redundant = _parse_list(data, "redundant", source)
    future_spec = _parse_list(data, "future_spec", source)
    people_variant = _parse_list(data, "people_variant", source)

    raw_overrides = data.get("overrides", {})
    if not isinstance(raw_overrides, dict):
        raise CurationError("поле 'overrides' должно быть объектом", source)

    unknown = set(raw_overrides) - {kind.value for kind in AlphabetKind}
    if unknown:
        raise CurationError(f"неизвестные виды алфавита в overrides: {sorted(unknown)}", source)

    return Curation(
        padding=padding if padding is not None else defaults.padding,
        redundant=frozenset(redundant) if redundant is not None else defaults.redundant,
        future_spec=frozenset(future_spec) if future_spec is not None else defaults.future_spec,
        people_variant=frozenset(people_variant) if people_variant is not None else defaults.people_variant,
        main_overrides=_parse_overrides(raw_overrides.get("main", {}), AlphabetKind.MAIN, source),
        padding_overrides=_parse_overrides(raw_overrides.get("padding", {}), AlphabetKind.PADDING, source),
    )


def load_curation(path: Optional[str] = None) -> Curation:
    """
    Загрузить curation из JSON файла

    Args:
        path: Путь к файлу; None - встроенные значения

    Returns:
        Объект Curation
    """
    if not path:
        logger.debug("Используется встроенная curation")
        return Curation()

    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CurationError("не удалось прочитать файл", f"{file_path}: {e}")
    except json.JSONDecodeError as e:
        raise CurationError("файл не является корректным JSON", f"{file_path}: {e}")

    curation = curation_from_dict(data, source=str(file_path))
    logger.info(
        "Загружена curation {}: padding={}, redundant={}, future={}, people={}, overrides={}",
        file_path, len(curation.padding), len(curation.redundant), len(curation.future_spec),
        len(curation.people_variant), len(curation.main_overrides) + len(curation.padding_overrides)
    )
    return curation
