"""ELF e_machine identifiers and their short names."""

from __future__ import annotations

EM_386 = 3
EM_ARM = 40
EM_X86_64 = 62
EM_AARCH64 = 183
EM_RISCV = 243

_MACHINE_NAMES: dict[int, str] = {
    0: "NONE",
    1: "M32",
    2: "SPARC",
    EM_386: "386",
    4: "68K",
    5: "88K",
    6: "IAMCU",
    7: "860",
    8: "MIPS",
    9: "S370",
    10: "MIPS_RS3_LE",
    15: "PARISC",
    18: "SPARC32PLUS",
    20: "PPC",
    21: "PPC64",
    22: "S390",
    EM_ARM: "ARM",
    42: "SH",
    43: "SPARCV9",
    50: "IA_64",
    EM_X86_64: "X86_64",
    83: "AVR",
    94: "XTENSA",
    105: "MSP430",
    EM_AARCH64: "AARCH64",
    190: "CUDA",
    191: "TILEGX",
    EM_RISCV: "RISCV",
    247: "BPF",
    252: "CSKY",
    258: "LOONGARCH",
}


def machine_name(machine: int) -> str:
    """Short name for an ``e_machine`` value, ``EM_<n>`` when unknown."""
    return _MACHINE_NAMES.get(machine, f"EM_{machine}")
