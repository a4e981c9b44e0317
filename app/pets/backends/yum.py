"""YUM package backend implementation.

Queries repository metadata with ``yum info`` and the local package
database with ``rpm -q``.
"""

import logging

from pets.backends.base import PackageBackend
from pets.utils.shell import Command

logger = logging.getLogger(__name__)


class YumBackend(PackageBackend):
    """Backend for RPM-based systems using yum (or its dnf alias)."""

    @property
    def name(self) -> str:
        """Return "yum" as the backend name."""
        return "yum"

    @property
    def executable(self) -> str:
        """Return yum as the probe executable."""
        return "yum"

    def exists_in_repository(self, package: str) -> bool:
        """Check for a ``Name : <package>`` field in yum info output."""
        result = self._query(["yum", "info", package])
        if result is None:
            return False

        for line in result.stdout.splitlines():
            key, sep, value = line.partition(":")
            if sep and key.strip() == "Name" and value.strip() == package:
                logger.debug("%s is a valid package name", package)
                return True

        logger.error("%s is not an available package", package)
        return False

    def is_installed(self, package: str) -> bool:
        """Check if rpm -q exits with status zero."""
        return self._succeeds(["rpm", "-q", package])

    def install_command(self) -> Command:
        """Return yum -y install."""
        return Command(args=("yum", "-y", "install"))
