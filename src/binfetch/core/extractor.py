"""Archive extraction and binary selection."""

import tarfile
import zipfile
from pathlib import Path

from binfetch.core.errors import ExtractionError

ARCHIVE_SUFFIXES = (".tar.gz", ".tgz", ".zip")
EXTRACT_DIR = "__extract"


def is_archive(path: Path) -> bool:
    """Check if a downloaded file is an archive we know how to unpack."""
    return path.name.lower().endswith(ARCHIVE_SUFFIXES)


def extract_archive(archive_path: Path, dest_dir: Path) -> Path:
    """Extract an archive into ``dest_dir``.

    Returns the directory containing extracted files.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    name = archive_path.name.lower()

    try:
        if name.endswith(".tar.gz") or name.endswith(".tgz"):
            with tarfile.open(archive_path, "r:gz") as tar:
                tar.extractall(dest_dir, filter="data")

        elif name.endswith(".zip"):
            with zipfile.ZipFile(archive_path, "r") as zf:
                zf.extractall(dest_dir)

        else:
            raise ExtractionError(f"Unsupported archive format: {archive_path.name}")

    except (
        tarfile.TarError,
        zipfile.BadZipFile,
        EOFError,
        RuntimeError,
        NotImplementedError,
        OSError,
    ) as e:
        raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return dest_dir


def find_largest_file(directory: Path) -> Path:
    """Find the largest regular file under a directory.

    Release archives usually carry one binary next to small docs and
    licenses, so the largest file is taken to be the binary. On equal
    sizes the first path in sorted order wins.
    """
    largest: Path | None = None
    largest_size = -1

    for item in sorted(directory.rglob("*")):
        if item.is_symlink() or not item.is_file():
            continue
        size = item.stat().st_size
        if size > largest_size:
            largest, largest_size = item, size

    if largest is None:
        raise ExtractionError(f"No files found in {directory}")
    return largest


def binary_candidate(download_file: Path) -> Path:
    """Get the file to install from a downloaded asset.

    Non-archives are returned unchanged. Archives are extracted into a
    sibling directory and the largest extracted file is returned.
    """
    if not is_archive(download_file):
        return download_file

    extract_dir = extract_archive(download_file, download_file.parent / EXTRACT_DIR)
    return find_largest_file(extract_dir)
