"""Unit tests for AptBackend."""

from unittest.mock import patch

import pytest
from pets.backends.apt import AptBackend
from pets.utils.shell import CommandResult


class TestAptBackend:
    """Tests for AptBackend class."""

    @pytest.fixture
    def backend(self) -> AptBackend:
        """Create AptBackend instance."""
        return AptBackend()

    def test_identity(self, backend: AptBackend) -> None:
        """Backend is named apt and probed through apt-get."""
        assert backend.name == "apt"
        assert backend.executable == "apt-get"

    def test_is_available(self, backend: AptBackend) -> None:
        """is_available follows command_exists."""
        with patch("pets.backends.base.command_exists", return_value=True) as mock_exists:
            assert backend.is_available() is True
        mock_exists.assert_called_once_with("apt-get")

    def test_exists_in_repository(self, backend: AptBackend, apt_policy_installed: str) -> None:
        """Output starting with the package name means the package exists."""
        with patch("pets.backends.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=apt_policy_installed, stderr="", returncode=0
            )
            assert backend.exists_in_repository("coreutils") is True

        assert mock_run.call_args[0][0] == ["apt-cache", "policy", "coreutils"]

    def test_unknown_package(self, backend: AptBackend) -> None:
        """apt-cache prints nothing on stdout for unknown packages."""
        with patch("pets.backends.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="", stderr="N: Unable to locate package nope", returncode=0
            )
            assert backend.exists_in_repository("nope") is False

    def test_query_failure_fails_closed(self, backend: AptBackend) -> None:
        """A query that cannot run answers False instead of raising."""
        with patch("pets.backends.base.run_command", side_effect=FileNotFoundError("apt-cache")):
            assert backend.exists_in_repository("coreutils") is False
            assert backend.is_installed("coreutils") is False

    def test_query_nonzero_exit_fails_closed(self, backend: AptBackend) -> None:
        """A query exiting non-zero answers False."""
        with patch("pets.backends.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="coreutils:", stderr="E", returncode=100)
            assert backend.exists_in_repository("coreutils") is False

    def test_is_installed(self, backend: AptBackend, apt_policy_installed: str) -> None:
        """An Installed: version means the package is installed."""
        with patch("pets.backends.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=apt_policy_installed, stderr="", returncode=0
            )
            assert backend.is_installed("coreutils") is True

    def test_is_not_installed(self, backend: AptBackend, apt_policy_not_installed: str) -> None:
        """Installed: (none) means the package is not installed."""
        with patch("pets.backends.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=apt_policy_not_installed, stderr="", returncode=0
            )
            assert backend.is_installed("abiword") is False

    def test_install_command(self, backend: AptBackend) -> None:
        """install_command is non-interactive."""
        command = backend.install_command()
        assert command.args == ("apt-get", "-y", "install")
        assert command.env == {"DEBIAN_FRONTEND": "noninteractive"}
