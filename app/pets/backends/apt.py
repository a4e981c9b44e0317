"""APT package backend implementation.

Queries package availability and installation state through apt-cache
and installs packages with apt-get.
"""

import logging

from pets.backends.base import PackageBackend
from pets.utils.shell import Command

logger = logging.getLogger(__name__)


class AptBackend(PackageBackend):
    """Backend for Debian-like systems (APT/dpkg).

    Both queries parse the output of ``apt-cache policy``, which starts with
    the package name when the package is known and reports an
    ``Installed:`` field of ``(none)`` when it is not installed.
    """

    @property
    def name(self) -> str:
        """Return "apt" as the backend name."""
        return "apt"

    @property
    def executable(self) -> str:
        """Return apt-get as the probe executable."""
        return "apt-get"

    def exists_in_repository(self, package: str) -> bool:
        """Check if apt-cache policy output begins with the package name."""
        result = self._query(["apt-cache", "policy", package])
        if result is None:
            return False

        if result.stdout.startswith(package):
            logger.debug("%s is a valid package name", package)
            return True

        logger.error("%s is not an available package", package)
        return False

    def is_installed(self, package: str) -> bool:
        """Check the Installed: field of apt-cache policy."""
        result = self._query(["apt-cache", "policy", package])
        if result is None:
            return False

        for line in result.stdout.splitlines():
            key, sep, value = line.strip().partition(":")
            if sep and key == "Installed":
                return value.strip() not in ("", "(none)")

        return False

    def install_command(self) -> Command:
        """Return apt-get -y install with a non-interactive frontend."""
        return Command(
            args=("apt-get", "-y", "install"),
            env={"DEBIAN_FRONTEND": "noninteractive"},
        )
