"""Platform detection and download URL expansion."""

import platform

from binfetch.core.errors import UnsupportedPlatformError
from binfetch.models.package import Package

SUPPORTED_OS = ("linux", "darwin")


def detect_os() -> str:
    """Detect current OS, normalized to ``linux`` or ``darwin``."""
    system = platform.system().lower()
    if system not in SUPPORTED_OS:
        raise UnsupportedPlatformError(f"unsupported operating system: {platform.system()}")
    return system


def strip_v(version: str) -> str:
    """Remove a single leading 'v' from a version string."""
    if version.startswith("v"):
        return version[1:]
    return version


def expand_template(template: str, version: str) -> str:
    """Substitute a version into a download URL template.

    ``%v`` becomes the version with a ``v`` prefix and ``%n`` the bare
    version, whichever form ``version`` was given in.
    """
    bare = strip_v(version)
    return template.replace("%v", "v" + bare).replace("%n", bare)


def download_url_for(package: Package, os_name: str, version: str) -> str:
    """Get the download URL of a package for an OS and version."""
    return expand_template(package.template_for(os_name), version)
