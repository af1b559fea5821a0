"""binfetch - install release binaries listed in a YAML file."""

__version__ = "0.1.0"
