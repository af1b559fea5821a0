"""Error types raised by binfetch."""


class BinfetchError(Exception):
    """Base class for all binfetch errors."""

    pass


class ConfigError(BinfetchError):
    """Run setup failed (environment, platform, input file)."""

    pass


class ConfigParseError(ConfigError):
    """The packages file is malformed."""

    pass


class UnsupportedPlatformError(ConfigError):
    """The current operating system has no download templates."""

    pass


class NotInstalledError(BinfetchError):
    """The version command could not be found on PATH."""

    pass


class VersionFormatError(BinfetchError):
    """The version command output did not match the configured format."""

    pass


class UnexpectedResponseError(BinfetchError):
    """An HTTP response had an unexpected status or was missing headers."""

    pass


class DownloadError(BinfetchError):
    """Error during download."""

    pass


class ExtractionError(BinfetchError):
    """Error during extraction."""

    pass


class InstallError(BinfetchError):
    """Error while moving a binary into the bin directory."""

    pass
