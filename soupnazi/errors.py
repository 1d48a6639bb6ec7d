"""
License store error types.

All store errors inherit from LicenseStoreError for consistent handling.
Every error is terminal for the call that raised it. Nothing is retried,
nothing is repaired.
"""

from typing import Optional


class LicenseStoreError(Exception):
    """Base exception for all license store failures."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(message)


class OpenError(LicenseStoreError):
    """Raised when the license file cannot be opened for reading."""

    def __init__(self, path: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"Error trying to open license file {path}: {cause}", path)


class ReadError(LicenseStoreError):
    """Raised when reading the license file fails part way through."""

    def __init__(self, path: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"Error reading license file {path}: {cause}", path)


class CorruptFileError(LicenseStoreError):
    """
    Raised when the license file does not end on a line boundary.

    The unterminated trailing content is kept in ``line``. The store never
    guesses at a fix; the operator has to resolve it.
    """

    def __init__(self, path: str, line: str):
        self.line = line
        super().__init__(
            f"License file {path} is corrupted, ended with {line!r}", path
        )


class InvalidTokenError(LicenseStoreError):
    """Raised when a token fails syntax checking."""

    def __init__(self, token: str, reason: Optional[str] = None):
        self.token = token
        self.reason = reason
        message = f"License {token!r} is not a valid token"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnresolvedPathError(LicenseStoreError):
    """Raised when no license file location could be determined."""

    def __init__(self):
        super().__init__("Unable to identify license file location")


class CreateError(LicenseStoreError):
    """Raised when the license file or its parent directories cannot be created."""

    def __init__(self, path: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"Error trying to create license file at {path}: {cause}", path)


class WriteError(LicenseStoreError):
    """Raised when appending a license to the file fails."""

    def __init__(self, path: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"Error writing license to {path}: {cause}", path)
