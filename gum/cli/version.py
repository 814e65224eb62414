"""Version string resolution.

The version shown by ``gum --version`` comes from build metadata injected
into :mod:`gum._build` (or the ``GUM_VERSION`` / ``GUM_COMMIT_SHA``
environment variables). Source checkouts fall back to the installed package
metadata, and finally to a placeholder.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from importlib import metadata

from gum import _build

SHA_LEN = 7
"""Number of commit characters shown, and the minimum length to show any."""

UNKNOWN_VERSION = "unknown (built from source)"

DIST_NAME = "gum"


@dataclass(frozen=True)
class VersionInfo:
    """Version and commit gum was built from.

    Attributes:
        version: Release version, or the placeholder for source builds
        commit: Full commit identifier, possibly empty
    """

    version: str
    commit: str = ""

    @property
    def short_commit(self) -> str:
        """Leading SHA_LEN characters of the commit, or "" if it is too short."""
        if len(self.commit) >= SHA_LEN:
            return self.commit[:SHA_LEN]
        return ""

    def __str__(self) -> str:
        text = f"gum version {self.version}"
        if self.short_commit:
            text += f" ({self.short_commit})"
        return text


def installed_version(dist_name: str = DIST_NAME) -> str | None:
    """Return the version of the installed distribution, if there is one."""
    try:
        return metadata.version(dist_name)
    except metadata.PackageNotFoundError:
        return None


def resolve_version(version: str = "", commit: str = "") -> VersionInfo:
    """Build the VersionInfo shown to users.

    Args:
        version: Injected version string (empty when not injected)
        commit: Injected commit identifier (empty when not injected)

    Returns:
        VersionInfo using the injected version, else the installed package
        version, else the "unknown (built from source)" placeholder

    Example:
        >>> str(resolve_version("0.14.0", "8fe2a6bd1c"))
        'gum version 0.14.0 (8fe2a6b)'
    """
    if not version:
        version = installed_version() or UNKNOWN_VERSION
    return VersionInfo(version=version, commit=commit or "")


def build_metadata(env: Mapping[str, str] | None = None) -> tuple[str, str]:
    """Return the injected (version, commit), environment overrides first."""
    env = os.environ if env is None else env
    version = env.get("GUM_VERSION") or _build.VERSION
    commit = env.get("GUM_COMMIT_SHA") or _build.COMMIT_SHA
    return version, commit
