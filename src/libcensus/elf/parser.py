"""Format parser — validate an ELF image and pull out its dynamic table."""

from __future__ import annotations

import io
import logging
from typing import Any

import lief

from libcensus.elf.errors import ElfError, ErrorKind
from libcensus.model import DT_NULL, DynamicEntry, LoadSegment, ParsedElf

logger = logging.getLogger(__name__)

# lief reports every oddity of every scanned file on stderr
if not logger.isEnabledFor(logging.DEBUG):
    lief.logging.disable()

ELF_MAGIC = b"\x7fELF"

ELFCLASS32 = 1
ELFCLASS64 = 2
ELFDATA2LSB = 1
ELFDATA2MSB = 2

_HEADER_SIZE = {ELFCLASS32: 52, ELFCLASS64: 64}
_PHDR_SIZE = {ELFCLASS32: 32, ELFCLASS64: 56}


def _check_ident(data: bytes) -> tuple[int, bool]:
    """Validate e_ident and return (ELF class, little endian)."""
    if len(data) < 16 or data[:4] != ELF_MAGIC:
        raise ElfError(ErrorKind.NOT_AN_ELF, "bad magic")

    ei_class, ei_data = data[4], data[5]
    if ei_class not in _HEADER_SIZE:
        raise ElfError(ErrorKind.NOT_AN_ELF, f"unknown ELF class {ei_class}")
    if ei_data not in (ELFDATA2LSB, ELFDATA2MSB):
        raise ElfError(ErrorKind.NOT_AN_ELF, f"unknown data encoding {ei_data}")

    if len(data) < _HEADER_SIZE[ei_class]:
        raise ElfError(ErrorKind.NOT_AN_ELF, "truncated header")
    return ei_class, ei_data == ELFDATA2LSB


def _check_program_headers(header: Any, ei_class: int, size: int) -> None:
    """The program header table must have the class's entry size and fit in the file."""
    phnum = header.numberof_segments
    if phnum == 0:
        return
    phentsize = header.program_header_size
    if phentsize != _PHDR_SIZE[ei_class]:
        raise ElfError(ErrorKind.NOT_AN_ELF, f"bad e_phentsize {phentsize}")
    phoff = header.program_header_offset
    if phoff + phnum * phentsize > size:
        raise ElfError(
            ErrorKind.NOT_AN_ELF,
            f"program headers [{phoff:#x}, {phoff + phnum * phentsize:#x}) outside file",
        )


def _dynamic_entries(binary: Any) -> list[DynamicEntry]:
    entries: list[DynamicEntry] = []
    for entry in binary.dynamic_entries:
        tag = int(entry.tag)
        if tag == DT_NULL:
            break
        entries.append(DynamicEntry(tag=tag, value=entry.value))
    return entries


def parse_elf(data: bytes) -> ParsedElf:
    """Parse a raw ELF image.

    Both ELF32 and ELF64 in either byte order are accepted; everything
    is decoded according to what ``e_ident`` declares.

    Raises:
        ElfError: ``NOT_AN_ELF`` if the header is missing or inconsistent,
            ``NOT_DYNAMIC`` if there is no PT_DYNAMIC segment.
    """
    ei_class, little_endian = _check_ident(data)

    try:
        binary = lief.ELF.parse(io.BytesIO(data))
    except Exception as e:
        raise ElfError(ErrorKind.NOT_AN_ELF, f"LIEF could not parse: {e}") from e
    if binary is None:
        raise ElfError(ErrorKind.NOT_AN_ELF, "LIEF could not parse")

    _check_program_headers(binary.header, ei_class, len(data))

    segments: list[LoadSegment] = []
    dynamic_seg = None
    for seg in binary.segments:
        if seg.type == lief.ELF.Segment.TYPE.LOAD:
            segments.append(
                LoadSegment(
                    vaddr=seg.virtual_address,
                    offset=seg.file_offset,
                    filesz=seg.physical_size,
                )
            )
        elif seg.type == lief.ELF.Segment.TYPE.DYNAMIC and dynamic_seg is None:
            dynamic_seg = seg

    if dynamic_seg is None:
        raise ElfError(ErrorKind.NOT_DYNAMIC)

    dyn_start = dynamic_seg.file_offset
    dyn_end = dyn_start + dynamic_seg.physical_size
    if dyn_end > len(data):
        raise ElfError(
            ErrorKind.NOT_AN_ELF,
            f"PT_DYNAMIC [{dyn_start:#x}, {dyn_end:#x}) outside file",
        )

    machine = int(binary.header.machine_type)
    dynamic = _dynamic_entries(binary)
    logger.debug(
        "ELF%d machine=%d: %d dynamic entries, %d load segments",
        32 if ei_class == ELFCLASS32 else 64,
        machine,
        len(dynamic),
        len(segments),
    )

    return ParsedElf(
        machine=machine,
        bits=32 if ei_class == ELFCLASS32 else 64,
        little_endian=little_endian,
        dynamic=dynamic,
        segments=segments,
    )
