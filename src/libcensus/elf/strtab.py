"""Dynamic string table (DT_STRTAB / DT_STRSZ) resolution."""

from __future__ import annotations

from collections.abc import Sequence

from libcensus.elf.errors import ElfError, ErrorKind
from libcensus.model import DT_STRSZ, DT_STRTAB, LoadSegment, ParsedElf


class StringTable:
    """A region of NUL-terminated strings addressed by byte offset."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    def __len__(self) -> int:
        return len(self._data)

    def get(self, offset: int) -> str:
        """Return the string starting at ``offset``.

        Raises:
            ElfError: ``STRTAB_BAD`` if ``offset`` is outside ``[0, size)``,
                the string has no terminating NUL inside the table, or it is
                not valid UTF-8.
        """
        if offset < 0 or offset >= len(self._data):
            raise ElfError(
                ErrorKind.STRTAB_BAD,
                f"offset {offset:#x} outside string table of size {len(self._data):#x}",
            )
        end = self._data.find(b"\0", offset)
        if end < 0:
            raise ElfError(ErrorKind.STRTAB_BAD, f"unterminated string at {offset:#x}")
        try:
            return self._data[offset:end].decode("utf-8")
        except UnicodeDecodeError as e:
            raise ElfError(ErrorKind.STRTAB_BAD, f"bad string at {offset:#x}") from e


def vaddr_to_offset(segments: Sequence[LoadSegment], vaddr: int, size: int = 0) -> int:
    """Translate a virtual address range to a file offset via PT_LOAD segments.

    The whole range ``[vaddr, vaddr + size)`` has to fall inside the
    file-backed part of a single segment.
    """
    for seg in segments:
        if seg.contains(vaddr, size):
            return seg.offset + (vaddr - seg.vaddr)
    raise ElfError(
        ErrorKind.STRTAB_BAD,
        f"[{vaddr:#x}, {vaddr + size:#x}) is not mapped by any PT_LOAD segment",
    )


def resolve_strtab(parsed: ParsedElf, data: bytes) -> StringTable:
    """Locate and slice the dynamic string table out of the raw image."""
    addr = parsed.find(DT_STRTAB)
    if addr is None:
        raise ElfError(ErrorKind.STRTAB_BAD, "no DT_STRTAB entry")
    size = parsed.find(DT_STRSZ)
    if size is None:
        raise ElfError(ErrorKind.STRTAB_BAD, "no DT_STRSZ entry")

    offset = vaddr_to_offset(parsed.segments, addr.value, size.value)
    if offset + size.value > len(data):
        raise ElfError(ErrorKind.STRTAB_BAD, "string table runs past end of file")
    return StringTable(data[offset : offset + size.value])
