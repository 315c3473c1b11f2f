"""lsmcp exception hierarchy.

All public exceptions inherit from LsMcpError, giving callers a single
base class to catch when they want to handle any lsmcp-specific failure
without swallowing unrelated errors.
"""


class LsMcpError(Exception):
    """Base exception for all lsmcp errors."""


class ConfigReadError(LsMcpError):
    """Raised when a configuration file cannot be read at all.

    Distinct from malformed content: a file that reads but does not parse
    is reported as ``valid=False`` and never raises.
    """

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = str(path)
        self.reason = reason
        message = f"Failed to read file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ProcessProbeError(LsMcpError):
    """Raised when the OS process table cannot be listed.

    Wraps psutil failures while walking the table and walks that run
    past the snapshot timeout.
    """


class RegistryError(LsMcpError):
    """Raised for invalid lookups in the application path registry."""


class UnsupportedPlatformError(RegistryError):
    """Raised when an operating system has no path table."""


class UnknownAppError(RegistryError):
    """Raised when an application is not registered for an operating system."""
