"""
Soupnazi Licensing - License Store

Reads and appends licenses in the local license file.
NO network calls. NO activation. NO phone-home.

Add Sequence (each step must succeed before the next):
1. Syntax check the token
2. Resolve the license file location
3. Create the file (and parent directories) if it does not exist
4. Parse existing entries (corruption aborts the add)
5. Skip if the token is already present
6. Append the token as one new line

Nothing is retried. Nothing is repaired. Existing lines are never touched.

NOT PROVIDED:
-------------
- File locking. Two processes adding at the same time can race between
  step 4 and step 6 and store a token twice. Single user, single process
  is assumed.
- Atomic writes. A failed append can leave a partial last line, which the
  next parse reports as corruption.
"""

import logging
import os
from typing import List, Optional

from pydantic import ValidationError

from .errors import CreateError, InvalidTokenError, UnresolvedPathError, WriteError
from .license_model import LicenseEntry, LicenseListing
from .license_parser import parse_licenses
from .license_path import LicensePathResolver
from .token_check import TokenValidator, is_valid_jwt


logger = logging.getLogger(__name__)

# Mode for directories created on first add (umask still applies)
DIRECTORY_MODE = 0o755


class LicenseStore:
    """
    File-backed license store.

    Location comes from the path resolver unless a path is passed
    explicitly. Token syntax is delegated to the injected validator.
    """

    def __init__(
        self,
        validator: TokenValidator = is_valid_jwt,
        resolver: Optional[LicensePathResolver] = None,
        log: Optional[logging.Logger] = None,
    ):
        """
        Initialize the license store.

        Args:
            validator: Callable deciding whether a token is syntactically valid
            resolver: License file locator, defaults to the process environment
            log: Logger for step-by-step trace output
        """
        self.validator = validator
        self.resolver = resolver or LicensePathResolver()
        self.log = log or logger

    def license_file(self) -> str:
        """
        Get the resolved license file path.

        Raises:
            UnresolvedPathError: The resolver produced no location
        """
        resolved = self.resolver.resolve()
        if not resolved:
            raise UnresolvedPathError()
        return resolved

    def _path_or_resolve(self, path: Optional[str]) -> str:
        if path:
            return str(path)
        return self.license_file()

    def check_token(self, token: str) -> LicenseEntry:
        """
        Syntax check a token.

        Raises:
            InvalidTokenError: Token is empty, spans lines, or fails the validator
        """
        try:
            entry = LicenseEntry(token=token)
        except ValidationError as e:
            raise InvalidTokenError(token, e.errors()[0]["msg"]) from e

        if not self.validator(entry.token):
            raise InvalidTokenError(token)

        self.log.debug(f"License passed syntax checking: {entry.token!r}")
        return entry

    def list_licenses(self, path: Optional[str] = None) -> List[str]:
        """
        Get all licenses in the license file.

        Args:
            path: License file path, resolved when omitted

        Returns:
            Licenses in the order they were added

        Raises:
            UnresolvedPathError: No location could be determined
            OpenError: File missing or unreadable
            ReadError: Read failed part way through
            CorruptFileError: File does not end on a line boundary
        """
        lfile = self._path_or_resolve(path)
        return parse_licenses(lfile, self.log)

    def listing(self, path: Optional[str] = None) -> LicenseListing:
        """Get the license file contents as a serializable listing."""
        lfile = self._path_or_resolve(path)
        return LicenseListing.create(lfile, parse_licenses(lfile, self.log))

    def _ensure_file(self, lfile: str) -> None:
        """Create the license file and its parent directories if missing."""
        if os.path.exists(lfile):
            return

        pdir = os.path.dirname(lfile)
        try:
            if pdir:
                self.log.info(f"  Creating parent directories {pdir}")
                os.makedirs(pdir, mode=DIRECTORY_MODE, exist_ok=True)
            self.log.info("  Creating license file")
            # Append mode never truncates an existing file
            with open(lfile, "a", encoding="utf-8"):
                pass
        except OSError as e:
            raise CreateError(lfile, e) from e

    def add_license(self, token: str, path: Optional[str] = None) -> bool:
        """
        Add a license to the license file.

        Safe to call repeatedly with the same token.

        Args:
            token: License token to store
            path: License file path, resolved when omitted

        Returns:
            True if the token was appended, False if it was already present

        Raises:
            InvalidTokenError: Token failed syntax checking (no file I/O done)
            UnresolvedPathError: No location could be determined
            CreateError: File or parent directories could not be created
            OpenError / ReadError / CorruptFileError: Existing file unusable
            WriteError: Append failed
        """
        entry = self.check_token(token)

        lfile = self._path_or_resolve(path)
        self.log.info(f"License file location: {lfile}")

        self._ensure_file(lfile)

        licenses = parse_licenses(lfile, self.log)

        if entry.token in licenses:
            self.log.info(
                f"  Not adding {entry.token!r} because it is a duplicate of an existing entry"
            )
            return False

        try:
            with open(lfile, "r+", encoding="utf-8", newline="\n") as f:
                f.seek(0, os.SEEK_END)
                f.write(entry.to_line())
        except (OSError, UnicodeError) as e:
            raise WriteError(lfile, e) from e

        self.log.info(f"  Added license {entry.token!r}")
        return True


# Module-level singleton store
_default_store: Optional[LicenseStore] = None


def get_license_store() -> LicenseStore:
    """Get the default license store singleton."""
    global _default_store
    if _default_store is None:
        _default_store = LicenseStore()
    return _default_store


def add_license(token: str) -> bool:
    """Add a license to the default store."""
    return get_license_store().add_license(token)


def list_licenses() -> List[str]:
    """Get all licenses from the default store."""
    return get_license_store().list_licenses()
