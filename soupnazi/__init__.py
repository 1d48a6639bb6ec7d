"""
Soupnazi - Local License Store

Keeps a user's license tokens in a plain text file, one per line.

Principles:
- Local-first only (no network calls)
- No encryption, no obfuscation
- Append-only: lines are never rewritten, reordered or removed
- Corruption = loud failure (no healing)

The store does not decide whether a license is *trusted*. It only checks
that a token is well formed before writing it down.
"""

from .errors import (
    LicenseStoreError,
    OpenError,
    ReadError,
    CorruptFileError,
    InvalidTokenError,
    UnresolvedPathError,
    CreateError,
    WriteError,
)

from .license_model import (
    LicenseEntry,
    LicenseListing,
)

from .license_path import (
    CONFIG_FILE_ENV_VAR,
    LicensePathResolver,
    resolve_base,
    resolve_license_path,
    license_file,
)

from .license_parser import (
    ParseState,
    parse_licenses,
    parse_stream,
)

from .license_store import (
    LicenseStore,
    get_license_store,
    add_license,
    list_licenses,
)

from .token_check import (
    TokenValidator,
    is_valid_jwt,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "LicenseStoreError",
    "OpenError",
    "ReadError",
    "CorruptFileError",
    "InvalidTokenError",
    "UnresolvedPathError",
    "CreateError",
    "WriteError",
    # Model
    "LicenseEntry",
    "LicenseListing",
    # Location
    "CONFIG_FILE_ENV_VAR",
    "LicensePathResolver",
    "resolve_base",
    "resolve_license_path",
    "license_file",
    # Parser
    "ParseState",
    "parse_licenses",
    "parse_stream",
    # Store
    "LicenseStore",
    "get_license_store",
    "add_license",
    "list_licenses",
    # Token checking
    "TokenValidator",
    "is_valid_jwt",
]
