"""Moving binaries into the bin directory."""

import errno
import os
import shutil
import stat
import tempfile
from pathlib import Path

from binfetch.core.errors import InstallError


def make_executable(path: Path) -> None:
    """Make a file executable."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IRUSR | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _replace_across_devices(source: Path, target: Path) -> None:
    # Copy next to the target first so the final rename stays on one filesystem.
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        shutil.copy2(source, tmp_path)
        os.replace(tmp_path, target)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    source.unlink(missing_ok=True)


def install_binary(source: Path, bin_dir: Path, name: str) -> Path:
    """Install a binary as ``bin_dir/name``, replacing any previous file.

    Returns the installed path.
    """
    target = bin_dir / name
    try:
        make_executable(source)
        try:
            os.replace(source, target)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            _replace_across_devices(source, target)
    except OSError as e:
        raise InstallError(f"Failed to install {source} as {target}: {e}") from e
    return target
