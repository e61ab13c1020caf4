"""Exceptions raised by pydroidsync."""


class DroidSyncError(Exception):
    """Base exception for all pydroidsync errors."""


class DroidSyncConfigError(DroidSyncError):
    """Raised when the user or sync configuration is invalid."""


class CommandChannelError(DroidSyncError):
    """Raised when a device command (listing or pull) fails.

    Attributes:
        output: Diagnostic text captured from the failed command
    """

    def __init__(self, message: str, output: str = ""):
        self.output = output
        if output:
            message = f"{message}: {output}"
        super().__init__(message)


class ListingParseError(DroidSyncError):
    """Raised when a directory listing line cannot be parsed.

    Attributes:
        line: The offending listing line
    """

    def __init__(self, message: str, line: str = ""):
        self.line = line
        super().__init__(message)


class LocalFilesystemError(DroidSyncError):
    """Raised when a local directory cannot be created."""


class PatternError(DroidSyncError):
    """Raised when an ignore pattern or the path to match is empty."""
