"""Per-run install records."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class InstallState(str, Enum):
    """Pipeline stage reached by a package during a run."""

    PENDING = "pending"
    VERSION_RESOLVED = "version_resolved"
    ALREADY_LATEST = "already_latest"
    DOWNLOADED = "downloaded"
    EXTRACTED = "extracted"
    INSTALLED = "installed"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (InstallState.ALREADY_LATEST, InstallState.INSTALLED, InstallState.FAILED)


@dataclass
class PackageRun:
    """Mutable state for a single package, owned by one worker."""

    name: str
    state: InstallState = InstallState.PENDING
    current: str | None = None  # None when the tool is not installed
    latest: str | None = None
    download_file: Path | None = None
    binary_file: Path | None = None
    installed_path: Path | None = None
    error: str | None = None

    def advance(self, state: InstallState) -> None:
        """Move to the next pipeline stage."""
        if self.state.terminal:
            raise RuntimeError(f"{self.name}: cannot leave terminal state {self.state.value}")
        self.state = state

    def set_latest(self, version: str) -> None:
        if self.latest is not None:
            raise RuntimeError(f"{self.name}: latest version already resolved")
        self.latest = version

    def fail(self, error: Exception) -> None:
        self.error = str(error)
        self.state = InstallState.FAILED

    @property
    def failed(self) -> bool:
        return self.state is InstallState.FAILED


@dataclass
class RunReport:
    """Aggregate outcome of a run."""

    runs: list[PackageRun] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def record(self, run: PackageRun) -> None:
        self.runs.append(run)
        if run.failed:
            self.failed.append(run.name)

    @property
    def ok(self) -> bool:
        return not self.failed

    def get(self, name: str) -> PackageRun | None:
        for run in self.runs:
            if run.name == name:
                return run
        return None
