"""
Тесты отчета и записи файлов алфавита
"""

import os

import pytest

from emojiset.alphabet import Curation, DictionaryIndex, ReconciliationEngine
from emojiset.report.formatter import format_row, render_report
from emojiset.report.writer import AlphabetWriter, render_alphabet, write_atomic
from emojiset.utils.exceptions import OutputWriteError


def sample_result():
    dictionary = DictionaryIndex([chr(cp) for cp in (0x1F000, 0x1F601, 0x1F602)])
    curation = Curation(padding=(), redundant=frozenset(), future_spec=frozenset(), people_variant=frozenset())
    return ReconciliationEngine(dictionary, curation).reconcile([0x1F000, 0x41], padding=[0x42])


def test_render_alphabet_format():
    assert render_alphabet([0x1F000, 0x1F601]) == "1f000\n1f601\n"
    assert render_alphabet([]) == ""


def test_format_row_with_and_without_name():
    result = sample_result()
    record = result.main_records[1]

    assert format_row(record) == f"| 1 | A (41) | {chr(0x1F602)} (1f602) | - |"
    assert format_row(record.with_name("FACE WITH TEARS OF JOY")) == (
        f"| 1 | A (41) | {chr(0x1F602)} (1f602) (FACE WITH TEARS OF JOY) | - |"
    )


def test_report_lists_only_replaced_positions():
    report = render_report(sample_result())

    assert "## Padding: 1 of 1 replaced" in report
    assert "## Alphabet: 1 of 2 replaced" in report
    assert "| 0 | B (42) |" in report
    assert "| 1 | A (41) |" in report
    assert "(1f000) |" not in report
    assert report.endswith("Total: 3 positions, 2 replaced\n")


def test_writer_writes_final_alphabets(tmp_path):
    writer = AlphabetWriter(str(tmp_path / "emojis.txt"), str(tmp_path / "padding.txt"))
    written = writer.write(sample_result())

    assert len(written) == 2
    assert (tmp_path / "emojis.txt").read_text(encoding="utf-8") == "1f000\n1f602\n"
    assert (tmp_path / "padding.txt").read_text(encoding="utf-8") == "1f601\n"


def test_writer_legacy_view(tmp_path):
    writer = AlphabetWriter(
        str(tmp_path / "emojis.txt"),
        str(tmp_path / "padding.txt"),
        legacy_view=True,
        legacy_v1_path=str(tmp_path / "v1.txt"),
        legacy_sorted_path=str(tmp_path / "sorted.txt"),
    )
    writer.write(sample_result())

    assert (tmp_path / "v1.txt").read_text(encoding="utf-8") == "1f000\n41\n"
    assert (tmp_path / "sorted.txt").read_text(encoding="utf-8") == "1f000\n1f602\n"


def test_identical_runs_write_identical_bytes(tmp_path):
    first = AlphabetWriter(str(tmp_path / "a.txt"), str(tmp_path / "pa.txt"))
    second = AlphabetWriter(str(tmp_path / "b.txt"), str(tmp_path / "pb.txt"))
    first.write(sample_result())
    second.write(sample_result())

    assert (tmp_path / "a.txt").read_bytes() == (tmp_path / "b.txt").read_bytes()


def test_write_atomic_leaves_no_temp_files(tmp_path):
    target = tmp_path / "out" / "emojis.txt"
    write_atomic(str(target), "1f600\n")

    assert target.read_text(encoding="utf-8") == "1f600\n"
    assert os.listdir(target.parent) == ["emojis.txt"]


def test_write_atomic_reports_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(OutputWriteError):
        write_atomic(str(blocker / "emojis.txt"), "1f600\n")


def test_failed_padding_write_leaves_main_file_untouched(tmp_path):
    main_file = tmp_path / "emojis.txt"
    main_file.write_text("old\n", encoding="utf-8")
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    writer = AlphabetWriter(str(main_file), str(blocker / "padding.txt"))

    with pytest.raises(OutputWriteError):
        writer.write(sample_result())

    assert main_file.read_text(encoding="utf-8") == "old\n"
    assert sorted(os.listdir(tmp_path)) == ["emojis.txt", "file"]
