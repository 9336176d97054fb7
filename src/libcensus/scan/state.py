"""ScanState — accumulates (architecture, soname) -> dependent paths."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from libcensus.model import Binary


@dataclass
class LibraryUsage:
    """One finalized report entry: a library and the executables using it."""

    soname: str
    paths: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.paths)


@dataclass
class ScanState:
    """Accumulator owned by a single scan.

    ``libraries`` maps machine -> soname -> paths, in the order binaries
    were folded in. Ordering is normalized by ``finalize``.
    """

    libraries: dict[int, dict[str, list[str]]] = field(default_factory=dict)

    def add(self, machine: int, libraries: Iterable[str], path: str) -> None:
        """Record ``path`` as a user of every library in ``libraries``.

        A name repeated in ``libraries`` is counted once for this path.
        """
        by_name = self.libraries.setdefault(machine, {})
        for name in dict.fromkeys(libraries):
            by_name.setdefault(name, []).append(path)

    def add_binary(self, binary: Binary) -> None:
        if binary.machine is None:
            raise ValueError(f"{binary.path} has not been parsed")
        self.add(binary.machine, binary.dependencies, binary.path)

    def merge(self, other: ScanState) -> None:
        """Fold another (e.g. per-worker) state into this one."""
        for machine, by_name in other.libraries.items():
            mine = self.libraries.setdefault(machine, {})
            for name, paths in by_name.items():
                mine.setdefault(name, []).extend(paths)

    def machines(self) -> list[int]:
        return sorted(self.libraries)

    def finalize(self, machine: int) -> list[LibraryUsage]:
        """Entries for one architecture, most used library first.

        Ties are broken by soname; paths within an entry are sorted.
        """
        usages = [
            LibraryUsage(soname=name, paths=sorted(paths))
            for name, paths in self.libraries.get(machine, {}).items()
        ]
        usages.sort(key=lambda u: (-u.count, u.soname))
        return usages

    def __len__(self) -> int:
        return sum(len(by_name) for by_name in self.libraries.values())
