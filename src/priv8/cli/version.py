"""Build/version information for ``priv8 --version``."""

import platform
import sys
from importlib.metadata import PackageNotFoundError, version

# Overwritten by release builds.
VCS_COMMIT = "<unset>"
VCS_TAG = "<unset>"


def package_version() -> str:
    try:
        return version("priv8")
    except PackageNotFoundError:
        return "<unset>"


def version_text() -> str:
    executable = sys.argv[0] if sys.argv and sys.argv[0] else "<unset>"
    return "\n".join(
        [
            f"priv8 version: {package_version()}",
            f"  Executable: {executable}",
            f"  VCS Commit: {VCS_COMMIT}",
            f"  VCS Tag: {VCS_TAG}",
            f"  Python Version: {platform.python_version()} "
            f"({sys.platform}/{platform.machine()})",
        ]
    )
