"""TrackGuard exception hierarchy.

All public exceptions inherit from TrackGuardError, giving callers a single
base class to catch when they want to handle any TrackGuard-specific failure
without swallowing unrelated errors.
"""


class TrackGuardError(Exception):
    """Base exception for all TrackGuard errors."""


class ManifestError(TrackGuardError):
    """Base class for dependency manifest failures."""


class ManifestNotFoundError(ManifestError):
    """Raised when the project has no dependency manifest.

    The analyzer reports this as a skipped run: there is nothing to
    inspect, and the target project is not at fault.
    """


class ManifestParseError(ManifestError):
    """Raised when the manifest exists but is not a valid JSON object.

    Covers syntax errors, undecodable bytes, non-object documents, and
    OS-level read failures on an existing file.
    """


class ConfigError(TrackGuardError):
    """Raised for malformed configuration.

    Covers YAML syntax errors and values of the wrong type.
    """


class SourceReadError(TrackGuardError):
    """Raised when a designated source file cannot be loaded.

    Covers unreadable files, undecodable content, and files above the
    configured size ceiling. The analyzer treats these as "no evidence".
    """
