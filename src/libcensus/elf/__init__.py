"""ELF inspection: header, dynamic table, string table, DT_NEEDED.

parse_elf uses `lief` to validate the container and read its program
headers; the dynamic table and string table are decoded from the raw
image.
"""

from libcensus.elf.deps import needed_libraries, process_one, read_binary
from libcensus.elf.errors import ElfError, ErrorKind
from libcensus.elf.machine import machine_name
from libcensus.elf.parser import parse_elf
from libcensus.elf.strtab import StringTable, resolve_strtab, vaddr_to_offset

__all__ = [
    "ElfError",
    "ErrorKind",
    "StringTable",
    "machine_name",
    "needed_libraries",
    "parse_elf",
    "process_one",
    "read_binary",
    "resolve_strtab",
    "vaddr_to_offset",
]
