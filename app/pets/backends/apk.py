"""APK package backend implementation.

Alpine's apk prints matching package names (with versions) for
``apk search -e`` and exits non-zero from ``apk info -e`` when a package
is not installed.
"""

import logging

from pets.backends.base import PackageBackend
from pets.utils.shell import Command

logger = logging.getLogger(__name__)


class ApkBackend(PackageBackend):
    """Backend for Alpine-like systems."""

    @property
    def name(self) -> str:
        """Return "apk" as the backend name."""
        return "apk"

    @property
    def executable(self) -> str:
        """Return apk as the probe executable."""
        return "apk"

    def exists_in_repository(self, package: str) -> bool:
        """Check if apk search -e output begins with the package name."""
        result = self._query(["apk", "search", "-e", package])
        if result is None:
            return False

        if result.stdout.startswith(package):
            logger.debug("%s is a valid package name", package)
            return True

        logger.error("%s is not an available package", package)
        return False

    def is_installed(self, package: str) -> bool:
        """Check if apk info -e exits with status zero."""
        return self._succeeds(["apk", "info", "-e", package])

    def install_command(self) -> Command:
        """Return apk add."""
        return Command(args=("apk", "add"))
