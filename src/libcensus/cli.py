"""CLI entry point for libcensus."""

from __future__ import annotations

import logging
import os

import lief
import typer
from rich.progress import Progress

from libcensus import __version__
from libcensus.config import CensusConfig
from libcensus.elf import (
    ElfError,
    machine_name,
    needed_libraries,
    parse_elf,
    read_binary,
    resolve_strtab,
)
from libcensus.scan import iter_executables, scan_paths, write_reports

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="libcensus",
    help="Rank shared libraries by how many executables in a tree depend on them.",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    if verbose:
        lief.logging.enable()
    else:
        lief.logging.disable()


@app.command()
def scan(
    executables_dir: str = typer.Option(
        ...,
        "--executables-dir",
        "-e",
        help="Root of the directory tree to scan.",
    ),
    output_dir: str | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Where to write m_<ARCH>.txt reports (default: from env/config, else cwd).",
    ),
    jobs: int | None = typer.Option(
        None, "--jobs", "-j", min=1, help="Worker threads parsing binaries."
    ),
    follow_symlinks: bool = typer.Option(
        False, "--follow-symlinks", help="Follow symlinks while walking."
    ),
    progress: bool = typer.Option(
        True, "--progress/--no-progress", help="Show a progress bar."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="Config file path."
    ),
) -> None:
    """Scan a tree of executables and write one report per architecture."""
    setup_logging(verbose)

    root = os.path.abspath(executables_dir)
    if not os.path.isdir(root):
        typer.echo(f"Error: Directory not found: {root}", err=True)
        raise typer.Exit(1)

    config = CensusConfig.load(config_file)
    if output_dir:
        config.report.output_dir = output_dir
    if jobs:
        config.scan.jobs = jobs
    if follow_symlinks:
        config.scan.follow_symlinks = True

    paths = list(iter_executables(root, follow_symlinks=config.scan.follow_symlinks))
    logger.debug("Found %d executable files under %s", len(paths), root)

    if progress:
        with Progress(transient=True) as bar:
            task = bar.add_task("Scanning", total=len(paths))
            state = scan_paths(
                paths,
                jobs=config.scan.jobs,
                on_progress=lambda _path: bar.advance(task),
            )
    else:
        state = scan_paths(paths, jobs=config.scan.jobs)

    written = write_reports(state, config.report.output_dir, config.report.prefix)
    if not written:
        typer.echo("No dynamically linked executables found.")
    for path in written:
        typer.echo(str(path))


@app.command()
def inspect(
    binary: str = typer.Argument(help="Path to the binary to inspect."),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
) -> None:
    """Show the architecture and needed libraries of a single binary."""
    setup_logging(verbose)

    try:
        data = read_binary(binary)
        parsed = parse_elf(data)
        libraries = needed_libraries(parsed.dynamic, resolve_strtab(parsed, data))
    except ElfError as e:
        reason = f"{e.kind.value} ({e.detail})" if e.detail else e.kind.value
        typer.echo(f"Error: {binary}: {reason}", err=True)
        raise typer.Exit(1)

    endian = "little" if parsed.little_endian else "big"
    typer.echo(f"Class: ELF{parsed.bits}")
    typer.echo(f"Endian: {endian}")
    typer.echo(f"Machine: {machine_name(parsed.machine)} ({parsed.machine})")
    typer.echo(f"== Libraries ({len(libraries)}) ==")
    for lib in libraries:
        typer.echo(f"  {lib}")


@app.command()
def version() -> None:
    """Print the libcensus version."""
    typer.echo(f"libcensus v{__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
