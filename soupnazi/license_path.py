"""
Soupnazi Licensing - License File Location

Works out where the per-user license file lives. Local lookups only.

Resolution Order:
1. Environment variable SOUPNAZI_CONFIG_FILE (used verbatim)
2. Platform config home joined with soupnazi/licenses
   - windows: APPDATA, else <home>/.config
   - linux:   XDG_CONFIG_HOME, else <home>/.config
   - darwin:  <home>/Library/Preferences
   - other:   no base, relative soupnazi/licenses (logged)

Resolution is a pure function of platform id, environment and home
directory. LicensePathResolver only binds those three inputs, so tests
can simulate any platform without touching the process environment.
"""

import logging
import ntpath
import os
import posixpath
import sys
from pathlib import Path
from typing import Callable, Mapping, Optional


logger = logging.getLogger(__name__)


# Environment variable naming the license file directly
CONFIG_FILE_ENV_VAR = "SOUPNAZI_CONFIG_FILE"

# Platform config home variables
APPDATA_ENV_VAR = "APPDATA"
XDG_CONFIG_HOME_ENV_VAR = "XDG_CONFIG_HOME"

# Fixed sub-path below the config home
STORE_DIRNAME = "soupnazi"
STORE_FILENAME = "licenses"

WINDOWS = "windows"
LINUX = "linux"
DARWIN = "darwin"


def platform_family(platform_id: str) -> Optional[str]:
    """
    Map a platform identifier to a platform family.

    Accepts sys.platform values ("win32", "cygwin", "linux", "darwin") as
    well as plain family names. Returns None for anything else.
    """
    platform_id = (platform_id or "").lower()
    if platform_id in ("win32", "cygwin", WINDOWS):
        return WINDOWS
    if platform_id.startswith(LINUX):
        return LINUX
    if platform_id == DARWIN:
        return DARWIN
    return None


def _env_or_default(env: Mapping[str, str], name: str, default: str) -> str:
    value = env.get(name)
    if value:
        return value
    return default


def _config_dir(join, home: str) -> str:
    return join(home, ".config") if home else ".config"


def _windows_base(env: Mapping[str, str], home: str) -> str:
    return _env_or_default(env, APPDATA_ENV_VAR, _config_dir(ntpath.join, home))


def _linux_base(env: Mapping[str, str], home: str) -> str:
    return _env_or_default(env, XDG_CONFIG_HOME_ENV_VAR, _config_dir(posixpath.join, home))


def _darwin_base(env: Mapping[str, str], home: str) -> str:
    return posixpath.join(home, "Library", "Preferences")


# family -> (base resolver, path join)
_PLATFORM_TABLE = {
    WINDOWS: (_windows_base, ntpath.join),
    LINUX: (_linux_base, posixpath.join),
    DARWIN: (_darwin_base, posixpath.join),
}


def resolve_base(platform_id: str, env: Mapping[str, str], home: str) -> str:
    """
    Get the config home directory for a platform.

    Args:
        platform_id: Platform identifier (e.g. sys.platform)
        env: Environment mapping
        home: Current user's home directory, "" if unknown

    Returns:
        Base directory, or "" for an unknown platform
    """
    family = platform_family(platform_id)
    if family is None:
        logger.warning(f"Unknown platform {platform_id!r}, license file path will be relative")
        return ""
    base_for, _ = _PLATFORM_TABLE[family]
    return base_for(env, home)


def resolve_license_path(platform_id: str, env: Mapping[str, str], home: str) -> str:
    """
    Get the full license file path.

    The override variable wins over everything else and is returned as-is.
    """
    override = env.get(CONFIG_FILE_ENV_VAR)
    if override:
        return override

    base = resolve_base(platform_id, env, home)
    family = platform_family(platform_id)
    join = _PLATFORM_TABLE[family][1] if family else posixpath.join
    if not base:
        return join(STORE_DIRNAME, STORE_FILENAME)
    return join(base, STORE_DIRNAME, STORE_FILENAME)


def current_user_home() -> str:
    """Home directory of the current user, "" if it cannot be determined."""
    try:
        return str(Path.home())
    except (RuntimeError, KeyError) as e:
        logger.warning(f"Unable to determine home directory: {e}")
        return ""


class LicensePathResolver:
    """
    Resolves the license file location.

    Platform, environment and home lookup are injectable; by default they
    come from the running process.
    """

    def __init__(
        self,
        platform_id: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        home_lookup: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the resolver.

        Args:
            platform_id: Platform identifier, defaults to sys.platform
            env: Environment mapping, defaults to os.environ
            home_lookup: Callable returning the home directory
        """
        self.platform_id = platform_id if platform_id is not None else sys.platform
        self.env = env if env is not None else os.environ
        self.home_lookup = home_lookup or current_user_home

    def _home(self) -> str:
        try:
            return self.home_lookup() or ""
        except (OSError, RuntimeError, KeyError) as e:
            logger.warning(f"Home directory lookup failed: {e}")
            return ""

    def resolve(self) -> str:
        """
        Get the license file path.

        Returns:
            Path to the license file. Never raises; degraded lookups give
            a relative path.
        """
        if self.env.get(CONFIG_FILE_ENV_VAR):
            path = self.env[CONFIG_FILE_ENV_VAR]
            logger.info(f"License file set via {CONFIG_FILE_ENV_VAR}: {path}")
            return path

        path = resolve_license_path(self.platform_id, self.env, self._home())
        logger.info(f"License file location for {self.platform_id}: {path}")
        return path


def license_file() -> str:
    """Get the license file path for the running process."""
    return LicensePathResolver().resolve()
