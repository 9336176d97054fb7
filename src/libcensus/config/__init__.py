"""Configuration — Pydantic models for libcensus settings."""

from __future__ import annotations

import json
import os
from typing import Any

from pydantic import BaseModel, Field


class ScanConfig(BaseModel):
    """Directory walk and worker settings."""

    jobs: int = Field(default=1, ge=1, description="Worker threads parsing binaries")
    follow_symlinks: bool = Field(
        default=False, description="Follow symlinked files and directories"
    )


class ReportConfig(BaseModel):
    """Where and how reports are written."""

    output_dir: str = Field(default=".", description="Directory for report files")
    prefix: str = Field(
        default="m_",
        description="Report file name prefix; files are <prefix><ARCH>.txt",
    )


class CensusConfig(BaseModel):
    """Top-level libcensus configuration."""

    scan: ScanConfig = Field(default_factory=ScanConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @classmethod
    def load(cls, config_path: str | None = None) -> CensusConfig:
        """Load config from file, env vars, or defaults.

        Priority: env vars > config file > defaults.

        Env vars:
            LIBCENSUS_JOBS            - Number of worker threads
            LIBCENSUS_OUTPUT_DIR      - Report output directory
            LIBCENSUS_REPORT_PREFIX   - Report file name prefix
        """
        config_data: dict[str, Any] = {}

        if config_path and os.path.exists(config_path):
            with open(config_path) as f:
                config_data = json.load(f)

        scan = config_data.get("scan", {})
        env_jobs = os.environ.get("LIBCENSUS_JOBS")
        if env_jobs:
            scan["jobs"] = int(env_jobs)
        if scan:
            config_data["scan"] = scan

        report = config_data.get("report", {})
        env_output_dir = os.environ.get("LIBCENSUS_OUTPUT_DIR")
        if env_output_dir:
            report["output_dir"] = env_output_dir
        env_prefix = os.environ.get("LIBCENSUS_REPORT_PREFIX")
        if env_prefix:
            report["prefix"] = env_prefix
        if report:
            config_data["report"] = report

        return cls.model_validate(config_data)
