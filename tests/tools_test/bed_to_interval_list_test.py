# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations

import gzip
import logging
from collections.abc import Callable
from pathlib import Path

import pytest

import bedlist.tools.bed_to_interval_list as tool
from bedlist.tools.bed_to_interval_list import main, parse_args

_DICT = "@HD\tVN:1.6\n@SQ\tSN:chr1\tLN:1000\n@SQ\tSN:chr2\tLN:500\n"
_HEADER = "@SQ\tSN:chr1\tLN:1000\n@SQ\tSN:chr2\tLN:500\n"


@pytest.fixture
def dict_file(tmp_path: Path) -> Path:
    filename = tmp_path / "reference.dict"
    filename.write_text(_DICT)
    return filename


@pytest.fixture(autouse=True)
def _no_config_files(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tool, "_DEFAULT_CONFIG_FILES", [])


def _run(
    tmp_path: Path,
    dict_file: Path,
    bed: str,
    *args: str,
) -> tuple[int, str]:
    input_file = tmp_path / "input.bed"
    input_file.write_text(bed)
    output_file = tmp_path / "output.interval_list"

    returncode = main(
        [
            "-I",
            str(input_file),
            "-SD",
            str(dict_file),
            "-O",
            str(output_file),
            "--log-color",
            "never",
            *args,
        ]
    )

    output = output_file.read_text() if output_file.exists() else ""

    return returncode, output


########################################################################################
# Argument parsing


def test_parse_args__defaults() -> None:
    args = parse_args(["-I", "in.bed", "-SD", "ref.dict", "-O", "out.interval_list"])

    assert args.input == "in.bed"
    assert args.sequence_dictionary == "ref.dict"
    assert args.output == "out.interval_list"
    assert args.sort
    assert not args.unique
    assert not args.drop_missing_contigs
    assert not args.keep_length_zero_intervals
    assert args.log_level == "info"


def test_parse_args__long_options() -> None:
    args = parse_args(
        [
            "--input",
            "-",
            "--sequence-dictionary",
            "ref.fa",
            "--output",
            "-",
            "--no-sort",
            "--unique",
            "--drop-missing-contigs",
            "--keep-length-zero-intervals",
        ]
    )

    assert args.input == "-"
    assert not args.sort
    assert args.unique
    assert args.drop_missing_contigs
    assert args.keep_length_zero_intervals


def test_parse_args__required_options() -> None:
    with pytest.raises(SystemExit):
        parse_args(["-I", "in.bed"])


def test_parse_args__config_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    config = tmp_path / "bed_to_interval_list.ini"
    config.write_text("drop_missing_contigs = true\nlog-level = warning\n")
    monkeypatch.setattr(tool, "_DEFAULT_CONFIG_FILES", [str(config)])

    args = parse_args(["-I", "in.bed", "-SD", "ref.dict", "-O", "out"])

    assert args.drop_missing_contigs
    assert args.log_level == "warning"


def test_parse_args__command_line_overrides_config_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    config = tmp_path / "bed_to_interval_list.ini"
    config.write_text("log_level = warning\n")
    monkeypatch.setattr(tool, "_DEFAULT_CONFIG_FILES", [str(config)])

    args = parse_args(["-I", "x", "-SD", "y", "-O", "z", "--log-level", "debug"])

    assert args.log_level == "debug"


########################################################################################
# Conversion


def test_main__single_record(tmp_path: Path, dict_file: Path) -> None:
    returncode, output = _run(tmp_path, dict_file, "chr1\t0\t100\tfeatureA\t0\t+\n")

    assert returncode == 0
    assert output == (
        "@HD\tVN:1.6\tSO:coordinate\n" + _HEADER + "chr1\t1\t100\t+\tfeatureA\n"
    )


def test_main__sorted_by_default(tmp_path: Path, dict_file: Path) -> None:
    bed = "chr2\t0\t10\nchr1\t50\t60\nchr1\t0\t100\n"
    returncode, output = _run(tmp_path, dict_file, bed)

    assert returncode == 0
    assert output == (
        "@HD\tVN:1.6\tSO:coordinate\n"
        + _HEADER
        + "chr1\t1\t100\t+\t.\nchr1\t51\t60\t+\t.\nchr2\t1\t10\t+\t.\n"
    )


def test_main__no_sort(tmp_path: Path, dict_file: Path) -> None:
    bed = "chr2\t0\t10\nchr1\t50\t60\nchr1\t0\t100\n"
    returncode, output = _run(tmp_path, dict_file, bed, "--no-sort")

    assert returncode == 0
    assert output == (
        "@HD\tVN:1.6\tSO:unsorted\n"
        + _HEADER
        + "chr2\t1\t10\t+\t.\nchr1\t51\t60\t+\t.\nchr1\t1\t100\t+\t.\n"
    )


def test_main__unique(tmp_path: Path, dict_file: Path) -> None:
    bed = "chr1\t50\t60\tb\nchr1\t0\t100\ta\nchr1\t100\t110\tc\n"
    returncode, output = _run(tmp_path, dict_file, bed, "--no-sort", "--unique")

    assert returncode == 0
    assert output == (
        "@HD\tVN:1.6\tSO:coordinate\n" + _HEADER + "chr1\t1\t110\t+\ta|b|c\n"
    )


def test_main__zero_length_intervals(tmp_path: Path, dict_file: Path) -> None:
    bed = "chr1\t0\t0\nchr1\t5\t10\n"

    _, output = _run(tmp_path, dict_file, bed)
    assert "chr1\t1\t0" not in output

    _, output = _run(tmp_path, dict_file, bed, "--keep-length-zero-intervals")
    assert output.endswith("chr1\t1\t0\t+\t.\nchr1\t6\t10\t+\t.\n")


def test_main__summary(
    tmp_path: Path,
    dict_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO):
        returncode, _ = _run(tmp_path, dict_file, "chr1\t0\t100\nchr2\t0\t50\n")

    assert returncode == 0
    assert "Wrote 2 intervals spanning a total of 150 bases" in caplog.messages


def test_main__gzip_input(tmp_path: Path, dict_file: Path) -> None:
    input_file = tmp_path / "input.bed.gz"
    input_file.write_bytes(gzip.compress(b"chr2\t10\t20\n"))
    output_file = tmp_path / "output.interval_list"

    returncode = main(
        ["-I", str(input_file), "-SD", str(dict_file), "-O", str(output_file)]
    )

    assert returncode == 0
    assert output_file.read_text().endswith("\nchr2\t11\t20\t+\t.\n")


def test_main__stdin_to_stdout(
    dict_file: Path,
    pipe_stdin: Callable[[bytes], None],
    capsys: pytest.CaptureFixture[str],
) -> None:
    pipe_stdin(b"chr1\t0\t100\tfeatureA\t0\t-\n")

    returncode = main(["-I", "-", "-SD", str(dict_file), "-O", "-"])

    assert returncode == 0
    assert capsys.readouterr().out == (
        "@HD\tVN:1.6\tSO:coordinate\n" + _HEADER + "chr1\t1\t100\t-\tfeatureA\n"
    )


def test_main__log_file(tmp_path: Path, dict_file: Path) -> None:
    log_file = tmp_path / "conversion.log"
    returncode, _ = _run(
        tmp_path, dict_file, "chr1\t0\t100\n", "--log-file", str(log_file)
    )

    assert returncode == 0
    assert "Wrote 1 intervals spanning a total of 100 bases" in log_file.read_text()


########################################################################################
# Missing contigs


def test_main__missing_contig_is_an_error(
    tmp_path: Path,
    dict_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    returncode, output = _run(tmp_path, dict_file, "chrX\t5\t10\n")

    assert returncode == 1
    assert output == ""
    assert "Sequence 'chrX' was not found in the sequence dictionary" in caplog.text


def test_main__drop_missing_contigs(
    tmp_path: Path,
    dict_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO):
        returncode, output = _run(
            tmp_path, dict_file, "chrX\t5\t10\n", "--drop-missing-contigs"
        )

    assert returncode == 0
    assert output == "@HD\tVN:1.6\tSO:coordinate\n" + _HEADER
    assert "There were 1 missing regions with a total of 5 bases" in caplog.messages
    assert "Wrote 0 intervals spanning a total of 0 bases" in caplog.messages


########################################################################################
# Errors


def test_main__interval_list_input(
    tmp_path: Path,
    dict_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    returncode, output = _run(tmp_path, dict_file, _HEADER + "chr1\t1\t100\t+\t.\n")

    assert returncode == 1
    assert output == ""
    assert "interval_list" in caplog.text


def test_main__unrecognized_input(
    tmp_path: Path,
    dict_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    returncode, _ = _run(tmp_path, dict_file, "chr1 0 100\n")

    assert returncode == 1
    assert "First data line: chr1 0 100" in caplog.text


def test_main__out_of_range(
    tmp_path: Path,
    dict_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    returncode, _ = _run(tmp_path, dict_file, "chr1\t0\t100\nchr2\t0\t501\n")

    assert returncode == 1
    assert "input.bed:2: End on sequence 'chr2' was past the end" in caplog.text


def test_main__missing_input(
    tmp_path: Path,
    dict_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    input_file = tmp_path / "missing.bed"
    output_file = tmp_path / "output.interval_list"
    returncode = main(
        ["-I", str(input_file), "-SD", str(dict_file), "-O", str(output_file)]
    )

    assert returncode == 1
    assert not output_file.exists()
    assert "Error reading intervals from" in caplog.text


def test_main__invalid_utf8_input(
    tmp_path: Path,
    dict_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    input_file = tmp_path / "input.bed"
    input_file.write_bytes(b"chr1\t0\t10\tfeat\xff\n")
    output_file = tmp_path / "output.interval_list"
    returncode = main(
        ["-I", str(input_file), "-SD", str(dict_file), "-O", str(output_file)]
    )

    assert returncode == 1
    assert not output_file.exists()
    assert "Error reading intervals from" in caplog.text


def test_main__missing_dictionary(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    input_file = tmp_path / "input.bed"
    input_file.write_text("chr1\t0\t100\n")

    returncode = main(
        ["-I", str(input_file), "-SD", str(tmp_path / "missing.dict"), "-O", "-"]
    )

    assert returncode == 1
    assert "missing.dict" in caplog.text
