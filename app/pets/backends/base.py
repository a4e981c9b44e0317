"""Abstract base class for package backends.

This module defines the PackageBackend interface that every supported
package manager family must implement.
"""

import logging
from abc import ABC, abstractmethod

from pets.utils.shell import Command, CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class PackageBackend(ABC):
    """Abstract base class for all package backends.

    A backend answers yes/no questions about a package name and knows how
    to build the bulk install command for its package manager. Query
    failures never raise: they are logged and answered with False.

    Example:
        >>> backend = AptBackend()
        >>> if backend.exists_in_repository("htop") and not backend.is_installed("htop"):
        ...     print(backend.install_command().with_args("htop"))
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the short name of this backend (e.g. "apt")."""

    @property
    @abstractmethod
    def executable(self) -> str:
        """Return the executable whose presence identifies this backend."""

    def is_available(self) -> bool:
        """Check if this package manager is present on the system."""
        return command_exists(self.executable)

    @abstractmethod
    def exists_in_repository(self, package: str) -> bool:
        """Check if a package can be installed from the configured repositories.

        Args:
            package: Package name.

        Returns:
            True if the package is available, False otherwise or on error.
        """

    @abstractmethod
    def is_installed(self, package: str) -> bool:
        """Check if a package is installed.

        Args:
            package: Package name.

        Returns:
            True if the package is installed, False otherwise or on error.
        """

    @abstractmethod
    def install_command(self) -> Command:
        """Return the non-interactive bulk install command.

        Package names are appended by the caller.
        """

    def _query(self, args: list[str]) -> CommandResult | None:
        """Run a query command, returning None if it could not run or failed.

        Args:
            args: Query command and arguments.

        Returns:
            CommandResult on zero exit status, None otherwise.
        """
        try:
            result = run_command(args)
        except OSError as e:
            logger.error("%s query %s failed: %s", self.name, " ".join(args), e)
            return None

        if not result.success:
            logger.error(
                "%s query %s exited with status %d: %s",
                self.name,
                " ".join(args),
                result.returncode,
                result.stderr.strip(),
            )
            return None

        return result

    def _succeeds(self, args: list[str]) -> bool:
        """Run a query command and report whether it exited with status zero."""
        try:
            result = run_command(args)
        except OSError as e:
            logger.error("%s query %s failed: %s", self.name, " ".join(args), e)
            return False
        return result.success

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
