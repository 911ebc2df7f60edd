# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations

import io
from pathlib import Path

import pytest

from bedlist.common.formats.interval_list import Interval, IntervalList
from bedlist.common.formats.seqdict import SequenceDictionary
from bedlist.tools.interval_list_to_bed import main, write_bed

_INTERVAL_LIST = (
    "@HD\tVN:1.6\tSO:unsorted\n"
    "@SQ\tSN:chr1\tLN:1000\n"
    "@SQ\tSN:chr2\tLN:500\n"
    "chr2\t1\t10\t-\tb\n"
    "chr1\t1\t100\t+\tfeatureA\n"
    "chr1\t201\t300\t+\t.\n"
)


def test_write_bed__3_columns() -> None:
    dictionary = SequenceDictionary.from_lengths([("chr1", 1000)])
    intervals = IntervalList(dictionary, [Interval("chr1", 1, 100, True, "foo")])

    handle = io.StringIO()
    write_bed(handle, intervals, columns=3)

    assert handle.getvalue() == "chr1\t0\t100\n"


def test_main__interval_list_to_stdout(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    filename = tmp_path / "targets.interval_list"
    filename.write_text(_INTERVAL_LIST)

    assert main([str(filename)]) == 0
    assert capsys.readouterr().out == (
        "chr1\t0\t100\tfeatureA\t0\t+\nchr1\t200\t300\t\t0\t+\nchr2\t0\t10\tb\t0\t-\n"
    )


def test_main__interval_list_to_file(tmp_path: Path) -> None:
    filename = tmp_path / "targets.interval_list"
    filename.write_text(_INTERVAL_LIST)
    output = tmp_path / "targets.bed"

    assert main([str(filename), "--columns", "3", "-O", str(output)]) == 0
    assert output.read_text() == "chr1\t0\t100\nchr1\t200\t300\nchr2\t0\t10\n"


def test_main__bed_with_sequence_dictionary(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    dictionary = tmp_path / "reference.dict"
    dictionary.write_text("@SQ\tSN:chr1\tLN:1000\n")
    filename = tmp_path / "targets.bed"
    filename.write_text("chr1\t50\t60\nchr1\t0\t55\n")

    assert main([str(filename), "-SD", str(dictionary), "--columns", "3"]) == 0
    assert capsys.readouterr().out == "chr1\t0\t60\n"


def test_main__bed_without_sequence_dictionary(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    filename = tmp_path / "targets.bed"
    filename.write_text("chr1\t0\t55\n")

    assert main([str(filename)]) == 1
    assert "Sequence 'chr1' was not found in the sequence dictionary" in caplog.text


def test_main__unrecognized_input(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    filename = tmp_path / "targets.txt"
    filename.write_text("chr1:1-100\n")

    assert main([str(filename)]) == 1
    assert "Unrecognized interval file format" in caplog.text


def test_main__invalid_columns(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main([str(tmp_path / "targets.interval_list"), "--columns", "4"])
