"""
Форматирование отчета о заменах
Таблица в стиле Markdown: позиция, исходный символ, замена и ее имя
"""

from typing import List, Sequence

# Локальные импорты
from emojiset.alphabet.models import AlphabetKind, ReconciliationResult, SubstitutionRecord

TABLE_HEADER = (
    "| Index | Invalid Emoji (hex) | Replacement (hex) | Notes |\n"
    "|-------|---------------------|-------------------|-------|"
)

KIND_TITLES = {
    AlphabetKind.PADDING: "Padding",
    AlphabetKind.MAIN: "Alphabet",
}


def _glyph(codepoint: int) -> str:
    """Символ для отображения; непечатаемые заменяются пустой строкой"""
    char = chr(codepoint)
    return char if char.isprintable() else ""


def format_row(record: SubstitutionRecord) -> str:
    """
    Строка таблицы для одной замены

    Формат: | index | original (hex) | replacement (hex) (name) | - |
    """
    original = f"{_glyph(record.original)} ({record.original:x})".lstrip()
    replacement = f"{_glyph(record.final)} ({record.final:x})".lstrip()
    if record.name:
        replacement += f" ({record.name})"
    return f"| {record.position} | {original} | {replacement} | - |"


def render_table(records: Sequence[SubstitutionRecord]) -> str:
    """Таблица только по замененным позициям, в порядке позиций"""
    lines = [TABLE_HEADER]
    lines.extend(format_row(record) for record in records if record.replaced)
    return "\n".join(lines)


def render_report(result: ReconciliationResult) -> str:
    """
    Полный отчет по обоим алфавитам

    Args:
        result: Итог сверки (с именами или без)

    Returns:
        Текст отчета
    """
    sections: List[str] = []

    for kind, records in (
        (AlphabetKind.PADDING, result.padding_records),
        (AlphabetKind.MAIN, result.main_records),
    ):
        replaced = sum(1 for record in records if record.replaced)
        sections.append(f"## {KIND_TITLES[kind]}: {replaced} of {len(records)} replaced")
        if replaced:
            sections.append(render_table(records))

    total, replaced = result.counts()
    sections.append(f"Total: {total} positions, {replaced} replaced")
    return "\n\n".join(sections) + "\n"
