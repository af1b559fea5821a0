"""Data models for binfetch."""

from binfetch.models.package import DownloadURL, Package, VersionSpec
from binfetch.models.result import InstallState, PackageRun, RunReport

__all__ = [
    "DownloadURL",
    "Package",
    "VersionSpec",
    "InstallState",
    "PackageRun",
    "RunReport",
]
