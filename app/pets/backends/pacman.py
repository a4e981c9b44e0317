"""Pacman and Yay package backend implementations.

Yay wraps pacman and adds AUR support with the same command line, so
YayBackend only swaps the executable.
"""

import logging

from pets.backends.base import PackageBackend
from pets.utils.shell import Command

logger = logging.getLogger(__name__)


class PacmanBackend(PackageBackend):
    """Backend for Arch-like systems using pacman."""

    # Prefix pacman prints when a sync database lookup fails
    _ERROR_MARKER = "error:"

    @property
    def name(self) -> str:
        """Return "pacman" as the backend name."""
        return "pacman"

    @property
    def executable(self) -> str:
        """Return pacman as the probe executable."""
        return "pacman"

    def exists_in_repository(self, package: str) -> bool:
        """Check that -Si output does not begin with an error marker."""
        result = self._query([self.executable, "-Si", package])
        if result is None:
            return False

        if result.stdout.startswith(self._ERROR_MARKER):
            logger.error("%s is not an available package", package)
            return False

        logger.debug("%s is a valid package name", package)
        return True

    def is_installed(self, package: str) -> bool:
        """Check if -Qq exits with status zero."""
        return self._succeeds([self.executable, "-Qq", package])

    def install_command(self) -> Command:
        """Return -S --noconfirm."""
        return Command(args=(self.executable, "-S", "--noconfirm"))


class YayBackend(PacmanBackend):
    """Backend for Arch-like systems using the yay AUR helper."""

    @property
    def name(self) -> str:
        """Return "yay" as the backend name."""
        return "yay"

    @property
    def executable(self) -> str:
        """Return yay as the probe executable."""
        return "yay"
