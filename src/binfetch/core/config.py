"""Run configuration and path management for binfetch."""

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from binfetch.core.errors import ConfigError
from binfetch.core.platform import detect_os

DEFAULT_JOBS = 3
PROBE_TIMEOUT = 5.0
DOWNLOAD_TIMEOUT = 30.0


@dataclass
class AppConfig:
    """Configuration for a single binfetch run."""

    bin_dir: Path
    work_dir: Path
    os_name: str
    jobs: int = DEFAULT_JOBS
    probe_timeout: float = PROBE_TIMEOUT
    download_timeout: float = DOWNLOAD_TIMEOUT

    @classmethod
    def from_env(cls, bin_dir: Path | None = None, jobs: int = DEFAULT_JOBS) -> "AppConfig":
        """Create config from the environment.

        The bin directory defaults to ``$HOME/bin`` and is created if
        missing. A fresh temporary workspace is allocated for downloads.
        """
        if jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {jobs}")

        os_name = detect_os()

        if bin_dir is None:
            home = os.environ.get("HOME")
            if not home:
                raise ConfigError("HOME is not set")
            bin_dir = Path(home) / "bin"

        try:
            bin_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"cannot create {bin_dir}: {e}") from e

        work_dir = Path(tempfile.mkdtemp(prefix="binfetch_"))
        return cls(bin_dir=bin_dir, work_dir=work_dir, os_name=os_name, jobs=jobs)

    def package_dir(self, name: str) -> Path:
        """Per-package subdirectory of the workspace."""
        return self.work_dir / name

    def cleanup(self) -> None:
        """Remove the temporary workspace."""
        if self.work_dir.exists():
            shutil.rmtree(self.work_dir, ignore_errors=True)
