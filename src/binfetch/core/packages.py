"""Loading the packages file."""

from pathlib import Path

import yaml

from binfetch.core.errors import ConfigParseError
from binfetch.models.package import Package


def load_packages(path: Path) -> list[Package]:
    """Load package descriptors from a YAML file.

    The file must contain a top-level ``packages`` list; each entry is
    parsed with :meth:`Package.from_dict`.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigParseError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigParseError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"{path}: top level must be a mapping")

    entries = data.get("packages") or []
    if not isinstance(entries, list):
        raise ConfigParseError(f"{path}: 'packages' must be a list")

    packages = [Package.from_dict(entry) for entry in entries]

    seen: set[str] = set()
    for package in packages:
        if package.name in seen:
            raise ConfigParseError(f"{path}: duplicate package name '{package.name}'")
        seen.add(package.name)

    return packages
