"""Unit tests for the YUM, APK, Pacman and Yay backends."""

from unittest.mock import patch

import pytest
from pets.backends.apk import ApkBackend
from pets.backends.pacman import PacmanBackend, YayBackend
from pets.backends.yum import YumBackend
from pets.utils.shell import CommandResult


def _ok(stdout: str = "") -> CommandResult:
    return CommandResult(stdout=stdout, stderr="", returncode=0)


def _fail(stderr: str = "") -> CommandResult:
    return CommandResult(stdout="", stderr=stderr, returncode=1)


class TestYumBackend:
    """Tests for YumBackend."""

    @pytest.fixture
    def backend(self) -> YumBackend:
        """Create YumBackend instance."""
        return YumBackend()

    def test_exists_matches_name_field(self, backend: YumBackend, yum_info_output: str) -> None:
        """A Name : field equal to the package means it exists."""
        with patch("pets.backends.base.run_command", return_value=_ok(yum_info_output)) as mock:
            assert backend.exists_in_repository("htop") is True
        assert mock.call_args[0][0] == ["yum", "info", "htop"]

    def test_name_field_must_match_exactly(
        self, backend: YumBackend, yum_info_output: str
    ) -> None:
        """A different Name : value does not count."""
        with patch("pets.backends.base.run_command", return_value=_ok(yum_info_output)):
            assert backend.exists_in_repository("htop-extra") is False

    def test_unknown_package(self, backend: YumBackend) -> None:
        """yum info exits non-zero for unknown packages."""
        with patch(
            "pets.backends.base.run_command",
            return_value=_fail("Error: No matching Packages to list"),
        ):
            assert backend.exists_in_repository("nope") is False

    def test_is_installed_uses_rpm_exit_status(self, backend: YumBackend) -> None:
        """rpm -q exit status decides installation."""
        with patch("pets.backends.base.run_command", return_value=_ok("htop-3.2.1")) as mock:
            assert backend.is_installed("htop") is True
        assert mock.call_args[0][0] == ["rpm", "-q", "htop"]

        with patch("pets.backends.base.run_command", return_value=_fail()):
            assert backend.is_installed("htop") is False

    def test_install_command(self, backend: YumBackend) -> None:
        """install_command is yum -y install."""
        assert backend.install_command().args == ("yum", "-y", "install")


class TestApkBackend:
    """Tests for ApkBackend."""

    @pytest.fixture
    def backend(self) -> ApkBackend:
        """Create ApkBackend instance."""
        return ApkBackend()

    def test_exists_prefix_match(self, backend: ApkBackend) -> None:
        """apk search output starting with the package name means it exists."""
        with patch("pets.backends.base.run_command", return_value=_ok("vim-9.0.2073-r0\n")) as m:
            assert backend.exists_in_repository("vim") is True
        assert m.call_args[0][0] == ["apk", "search", "-e", "vim"]

    def test_unknown_package(self, backend: ApkBackend) -> None:
        """Empty apk search output means the package does not exist."""
        with patch("pets.backends.base.run_command", return_value=_ok("")):
            assert backend.exists_in_repository("nope") is False

    def test_is_installed(self, backend: ApkBackend) -> None:
        """apk info -e exit status decides installation."""
        with patch("pets.backends.base.run_command", return_value=_ok("vim")) as mock:
            assert backend.is_installed("vim") is True
        assert mock.call_args[0][0] == ["apk", "info", "-e", "vim"]

        with patch("pets.backends.base.run_command", return_value=_fail()):
            assert backend.is_installed("vim") is False

    def test_install_command(self, backend: ApkBackend) -> None:
        """install_command is apk add."""
        assert backend.install_command().args == ("apk", "add")


class TestPacmanBackend:
    """Tests for PacmanBackend and YayBackend."""

    @pytest.mark.parametrize("backend_cls", [PacmanBackend, YayBackend])
    def test_exists(self, backend_cls: type[PacmanBackend]) -> None:
        """Output not starting with error: means the package exists."""
        backend = backend_cls()
        with patch(
            "pets.backends.base.run_command",
            return_value=_ok("Repository      : extra\nName            : vim\n"),
        ) as mock:
            assert backend.exists_in_repository("vim") is True
        assert mock.call_args[0][0] == [backend.executable, "-Si", "vim"]

    def test_error_marker(self) -> None:
        """Output starting with error: means the package does not exist."""
        with patch(
            "pets.backends.base.run_command",
            return_value=_ok("error: package 'nope' was not found\n"),
        ):
            assert PacmanBackend().exists_in_repository("nope") is False

    def test_nonzero_exit(self) -> None:
        """pacman -Si exiting non-zero means the package does not exist."""
        with patch("pets.backends.base.run_command", return_value=_fail("error: not found")):
            assert PacmanBackend().exists_in_repository("nope") is False

    def test_is_installed(self) -> None:
        """-Qq exit status decides installation."""
        with patch("pets.backends.base.run_command", return_value=_ok("vim\n")) as mock:
            assert YayBackend().is_installed("vim") is True
        assert mock.call_args[0][0] == ["yay", "-Qq", "vim"]

        with patch("pets.backends.base.run_command", side_effect=OSError("boom")):
            assert PacmanBackend().is_installed("vim") is False

    def test_install_commands(self) -> None:
        """Install commands never prompt."""
        assert PacmanBackend().install_command().args == ("pacman", "-S", "--noconfirm")
        assert YayBackend().install_command().args == ("yay", "-S", "--noconfirm")

    def test_names(self) -> None:
        """Yay is reported as its own backend."""
        assert PacmanBackend().name == "pacman"
        assert YayBackend().name == "yay"
