"""Directory scanning, aggregation and report output."""

from libcensus.scan.pipeline import scan_paths, try_process
from libcensus.scan.report import render_report, report_filename, write_reports
from libcensus.scan.state import LibraryUsage, ScanState
from libcensus.scan.walker import is_executable_file, iter_executables

__all__ = [
    "LibraryUsage",
    "ScanState",
    "is_executable_file",
    "iter_executables",
    "render_report",
    "report_filename",
    "scan_paths",
    "try_process",
    "write_reports",
]
