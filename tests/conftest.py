"""Shared fixtures: synthetic ELF images small enough to build by hand."""

from __future__ import annotations

import os
import struct
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

BASE = 0x400000
SPLIT_GAP = 0x200000

PT_LOAD = 1
PT_DYNAMIC = 2

DT_NULL = 0
DT_NEEDED = 1
DT_STRTAB = 5
DT_STRSZ = 10


def build_elf(
    needed: Sequence[str] = ("libc.so.6",),
    *,
    machine: int = 62,
    bits: int = 64,
    big_endian: bool = False,
    dynamic: bool = True,
    extra_dynamic: Sequence[tuple[int, int]] = (),
    omit_tags: Sequence[int] = (),
    strsz: int | None = None,
    strtab_addr: int | None = None,
    split_load: bool = False,
) -> bytes:
    """Build a minimal ET_EXEC image with program headers only.

    Layout: ELF header, program headers, dynamic array, string table.
    With ``split_load`` the string table lives in a second PT_LOAD whose
    virtual address is not equal to its file offset plus BASE.
    """
    order = ">" if big_endian else "<"
    is64 = bits == 64
    ehdr_size = 64 if is64 else 52
    phent = 56 if is64 else 32
    dyn_fmt = order + ("qQ" if is64 else "iI")
    dyn_ent = struct.calcsize(dyn_fmt)

    strtab = b"\0"
    offsets = []
    for name in needed:
        offsets.append(len(strtab))
        strtab += name.encode() + b"\0"

    phnum = 1 + (1 if dynamic else 0) + (1 if dynamic and split_load else 0)
    phoff = ehdr_size
    dyn_off = phoff + phnum * phent

    entries = [(DT_NEEDED, off) for off in offsets] + list(extra_dynamic)
    n_entries = len(entries) + 1  # DT_NULL
    n_entries += sum(1 for tag in (DT_STRTAB, DT_STRSZ) if tag not in omit_tags)
    dyn_size = n_entries * dyn_ent if dynamic else 0
    str_off = dyn_off + dyn_size
    total = str_off + (len(strtab) if dynamic else 16)

    if split_load:
        str_vaddr = BASE + SPLIT_GAP + str_off
    else:
        str_vaddr = BASE + str_off
    if strtab_addr is not None:
        str_vaddr = strtab_addr
    if DT_STRTAB not in omit_tags:
        entries.append((DT_STRTAB, str_vaddr))
    if DT_STRSZ not in omit_tags:
        entries.append((DT_STRSZ, len(strtab) if strsz is None else strsz))
    entries.append((DT_NULL, 0))

    ident = b"\x7fELF" + bytes([2 if is64 else 1, 2 if big_endian else 1, 1])
    ident = ident.ljust(16, b"\0")
    hdr_fmt = order + ("16sHHIQQQIHHHHHH" if is64 else "16sHHIIIIIHHHHHH")
    header = struct.pack(
        hdr_fmt, ident, 2, machine, 1, BASE, phoff, 0, 0,
        ehdr_size, phent, phnum, 64 if is64 else 40, 0, 0,
    )

    def phdr(p_type: int, offset: int, vaddr: int, size: int, flags: int) -> bytes:
        if is64:
            return struct.pack(
                order + "IIQQQQQQ", p_type, flags, offset, vaddr, vaddr, size, size, 0x1000
            )
        return struct.pack(
            order + "IIIIIIII", p_type, offset, vaddr, vaddr, size, size, flags, 0x1000
        )

    first_load_size = str_off if (dynamic and split_load) else total
    phdrs = phdr(PT_LOAD, 0, BASE, first_load_size, 5)
    if dynamic:
        if split_load:
            phdrs += phdr(PT_LOAD, str_off, BASE + SPLIT_GAP + str_off, len(strtab), 4)
        phdrs += phdr(PT_DYNAMIC, dyn_off, BASE + dyn_off, dyn_size, 6)

    body = b""
    if dynamic:
        body += b"".join(struct.pack(dyn_fmt, tag, val) for tag, val in entries)
        body += strtab
    else:
        body += b"\x90" * 16

    image = header + phdrs + body
    assert len(image) == total
    return image


@pytest.fixture
def make_elf() -> Callable[..., bytes]:
    return build_elf


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Write bytes under tmp_path with the given mode and return the path."""

    def _write(relpath: str, data: bytes, mode: int = 0o755) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        os.chmod(path, mode)
        return path

    return _write
