# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
"""Sequence dictionaries: the names and lengths of the contigs in a reference.

Dictionaries may be read from a number of different sources:

  - Picard/samtools sequence dictionaries (.dict)
  - FASTA files, using a .dict file placed next to the FASTA file, or the FASTA
    index (.fai) if no such dictionary exists
  - Interval lists and SAM files, using the @SQ lines in the header
  - BAM and CRAM files, using the header of the file
  - VCF and BCF files, using the ##contig lines in the header
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from os import fspath

import pysam

from bedlist.common.fileutils import PathTypes, open_rt
from bedlist.common.formats import FormatError
from bedlist.common.utilities import Immutable, TotallyOrdered

_ALIGNMENT_EXTENSIONS = (".bam", ".cram")
_VARIANT_EXTENSIONS = (".vcf", ".vcf.gz", ".vcf.bgz", ".bcf")
_FASTA_EXTENSIONS = (
    ".fasta",
    ".fasta.gz",
    ".fa",
    ".fa.gz",
    ".fna",
    ".fna.gz",
)


class SequenceDictionaryError(FormatError):
    pass


class ContigInfo(TotallyOrdered, Immutable):
    name: str
    length: int

    def __init__(self, name: str, length: int) -> None:
        if not (name and isinstance(name, str)):
            raise SequenceDictionaryError("contig name must be a non-empty string")
        elif not (isinstance(length, int) and length > 0):
            raise SequenceDictionaryError(
                f"invalid length {length!r} for contig {name!r}"
            )

        Immutable.__init__(self, name=name, length=length)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ContigInfo):
            return NotImplemented

        return (self.name, self.length) < (other.name, other.length)

    def __hash__(self) -> int:
        return hash((self.name, self.length))

    def __repr__(self) -> str:
        return f"ContigInfo({self.name!r}, {self.length!r})"


class SequenceDictionary(Immutable):
    """Ordered, immutable collection of contigs with unique names."""

    contigs: tuple[ContigInfo, ...]
    _indices: dict[str, int]

    def __init__(self, contigs: Iterable[ContigInfo] = ()) -> None:
        contigs = tuple(contigs)
        indices: dict[str, int] = {}
        for index, contig in enumerate(contigs):
            if contig.name in indices:
                raise SequenceDictionaryError(
                    f"duplicate contig {contig.name!r} in sequence dictionary"
                )

            indices[contig.name] = index

        Immutable.__init__(self, contigs=contigs, _indices=indices)

    @classmethod
    def from_lengths(cls, items: Iterable[tuple[str, int]]) -> SequenceDictionary:
        return cls(ContigInfo(name, length) for name, length in items)

    def resolve(self, name: str) -> ContigInfo | None:
        index = self._indices.get(name)
        if index is None:
            return None

        return self.contigs[index]

    def index(self, name: str) -> int:
        """Returns the position of a contig in the dictionary; raises KeyError if the
        contig is not found."""
        return self._indices[name]

    @property
    def names(self) -> list[str]:
        return [contig.name for contig in self.contigs]

    def __contains__(self, name: object) -> bool:
        return name in self._indices

    def __iter__(self) -> Iterator[ContigInfo]:
        return iter(self.contigs)

    def __len__(self) -> int:
        return len(self.contigs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SequenceDictionary):
            return NotImplemented

        return self.contigs == other.contigs

    def __hash__(self) -> int:
        return hash(self.contigs)

    def __repr__(self) -> str:
        return f"SequenceDictionary({list(self.contigs)!r})"


def parse_sam_header(lines: Iterable[str]) -> SequenceDictionary:
    """Collects @SQ records from the header of a SAM-like file. Reading stops at the
    first line that does not start with '@'; empty lines are skipped."""
    contigs: list[ContigInfo] = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line:
            continue
        elif not line.startswith("@"):
            break
        elif line.startswith("@SQ\t"):
            contigs.append(_parse_sq_line(line))

    return SequenceDictionary(contigs)


def _parse_sq_line(line: str) -> ContigInfo:
    tags: dict[str, str] = {}
    for field in line.split("\t")[1:]:
        key, sep, value = field.partition(":")
        if sep:
            tags[key] = value

    name = tags.get("SN")
    length = tags.get("LN")
    if not name:
        raise SequenceDictionaryError(f"@SQ line without SN tag: {line!r}")
    elif length is None:
        raise SequenceDictionaryError(f"@SQ line without LN tag: {line!r}")

    try:
        return ContigInfo(name, int(length))
    except ValueError as error:
        raise SequenceDictionaryError(
            f"invalid LN value {length!r} for contig {name!r}"
        ) from error


def load_sequence_dictionary(filename: PathTypes) -> SequenceDictionary:
    """Reads a sequence dictionary from a .dict, FASTA, interval list, SAM, BAM,
    CRAM, VCF, or BCF file, selected based on the file extension. Files with
    unknown extensions are read as sequence dictionaries."""
    filename = fspath(filename)
    lowercase = filename.lower()

    try:
        if lowercase.endswith(_ALIGNMENT_EXTENSIONS):
            dictionary = _read_alignment_header(filename)
        elif lowercase.endswith(_VARIANT_EXTENSIONS):
            dictionary = _read_variant_header(filename)
        elif lowercase.endswith(_FASTA_EXTENSIONS):
            dictionary = _read_fasta_dictionary(filename)
        else:
            dictionary = _read_sam_header(filename)
    except (UnicodeDecodeError, ValueError) as error:
        raise SequenceDictionaryError(
            f"could not read sequence dictionary from {filename!r}: {error}"
        ) from error

    if not dictionary:
        raise SequenceDictionaryError(
            f"could not extract a sequence dictionary from {filename!r}; "
            "no sequences found"
        )

    return dictionary


def _read_sam_header(filename: str) -> SequenceDictionary:
    with open_rt(filename) as handle:
        return parse_sam_header(handle)


def _read_alignment_header(filename: str) -> SequenceDictionary:
    with pysam.AlignmentFile(filename) as handle:
        return SequenceDictionary.from_lengths(zip(handle.references, handle.lengths))


def _read_variant_header(filename: str) -> SequenceDictionary:
    contigs: list[ContigInfo] = []
    with pysam.VariantFile(filename) as handle:
        for contig in handle.header.contigs.values():
            if contig.length is None:
                raise SequenceDictionaryError(
                    f"contig {contig.name!r} in {filename!r} has no length"
                )

            contigs.append(ContigInfo(contig.name, contig.length))

    return SequenceDictionary(contigs)


def _read_fasta_dictionary(filename: str) -> SequenceDictionary:
    # Picard names the dictionary 'reference.dict', samtools 'reference.fa.dict'
    stem = filename
    for extension in _FASTA_EXTENSIONS:
        if filename.lower().endswith(extension):
            stem = filename[: -len(extension)]
            break

    for candidate in (stem + ".dict", filename + ".dict"):
        if os.path.exists(candidate):
            return _read_sam_header(candidate)

    # If an index does not already exist, then it is created automatically
    with pysam.FastaFile(filename) as handle:
        return SequenceDictionary.from_lengths(zip(handle.references, handle.lengths))
