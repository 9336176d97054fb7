"""libcensus — which executables use which shared libraries."""

__version__ = "0.1.0"
