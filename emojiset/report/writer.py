"""
Запись алфавитов на диск
Один строчный hex кодпоинт на строку, порядок строк = порядок позиций
"""

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

# Логирование (ОБЯЗАТЕЛЬНО loguru)
from loguru import logger

# Локальные импорты
from emojiset.alphabet.codepoints import format_hex
from emojiset.alphabet.models import ReconciliationResult
from emojiset.utils.exceptions import OutputWriteError

# Настройка логгера модуля
logger = logger.bind(module="alphabet_writer")


def render_alphabet(codepoints: Iterable[int]) -> str:
    """Текст файла алфавита: без заголовка, перевод строки после каждой записи"""
    return "".join(f"{format_hex(cp)}\n" for cp in codepoints)


def _stage(path: str, content: str) -> str:
    """Записать содержимое во временный файл рядом с целевым, вернуть его имя"""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
    except OSError:
        os.unlink(tmp_name)
        raise
    return tmp_name


def write_all_atomic(files: Sequence[Tuple[str, str]]) -> None:
    """
    Записать набор файлов: сначала все временные файлы, затем замены

    Пока не подготовлены все временные файлы, ни один целевой файл не тронут.

    Raises:
        OutputWriteError: запись не удалась
    """
    staged: List[Tuple[str, str]] = []
    current = None
    try:
        for path, content in files:
            current = path
            staged.append((_stage(path, content), path))

        while staged:
            tmp_name, path = staged[0]
            current = path
            os.replace(tmp_name, path)
            staged.pop(0)
    except OSError as e:
        raise OutputWriteError(str(current), str(e))
    finally:
        for tmp_name, _ in staged:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)


def write_atomic(path: str, content: str) -> None:
    """
    Записать один файл через временный файл и атомарную замену

    Raises:
        OutputWriteError: запись не удалась, целевой файл не тронут
    """
    write_all_atomic([(path, content)])


class AlphabetWriter:
    """
    Приемник итогового алфавита

    Все файлы рендерятся в память до первой записи: ошибка рендеринга
    не оставляет частично записанных файлов.
    """

    def __init__(
        self,
        output_path: str,
        padding_output_path: str,
        legacy_view: bool = False,
        legacy_v1_path: str = "emojisv1.txt",
        legacy_sorted_path: str = "emojis_sorted.txt"
    ):
        """
        Args:
            output_path: Файл основного алфавита
            padding_output_path: Файл алфавита padding
            legacy_view: Писать ли дополнительный вид (исходный V1 и отсортированный итог)
            legacy_v1_path: Файл исходного алфавита V1
            legacy_sorted_path: Файл отсортированного итогового алфавита
        """
        self.output_path = output_path
        self.padding_output_path = padding_output_path
        self.legacy_view = legacy_view
        self.legacy_v1_path = legacy_v1_path
        self.legacy_sorted_path = legacy_sorted_path

    def plan(self, result: ReconciliationResult) -> List[Tuple[str, str]]:
        """Список (путь, содержимое) для записи"""
        files = [
            (self.output_path, render_alphabet(result.final_alphabet)),
            (self.padding_output_path, render_alphabet(result.final_padding)),
        ]
        if self.legacy_view:
            files.append((self.legacy_v1_path, render_alphabet(result.original_alphabet)))
            files.append((self.legacy_sorted_path, render_alphabet(sorted(result.final_alphabet))))
        return files

    def write(self, result: ReconciliationResult) -> Sequence[str]:
        """
        Записать все файлы

        Returns:
            Пути записанных файлов
        """
        files = self.plan(result)
        write_all_atomic(files)
        for path, content in files:
            logger.info("Записан файл {} ({} строк)", path, content.count("\n"))
        return [path for path, _ in files]
