"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import grp
import os
import pwd
from collections.abc import Iterator

import pytest
from pets.backends import reset_backend_cache
from pets.backends.base import PackageBackend
from pets.utils.shell import Command


class FakeBackend(PackageBackend):
    """In-memory package backend for planner and validator tests."""

    def __init__(
        self,
        available: set[str] | None = None,
        installed: set[str] | None = None,
    ) -> None:
        self.available = available or set()
        self.installed = installed or set()
        self.installed_queries: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def executable(self) -> str:
        return "fake-pkg"

    def exists_in_repository(self, package: str) -> bool:
        return package in self.available or package in self.installed

    def is_installed(self, package: str) -> bool:
        self.installed_queries.append(package)
        return package in self.installed

    def install_command(self) -> Command:
        return Command(args=("fake-pkg", "install"))


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Backend where p1 is installed and p2 is available."""
    return FakeBackend(available={"p2", "vim"}, installed={"p1"})


@pytest.fixture
def backend_factory() -> type[FakeBackend]:
    """The FakeBackend class, for tests needing custom package sets."""
    return FakeBackend


@pytest.fixture(autouse=True)
def _clear_backend_cache() -> Iterator[None]:
    """Make every test start without a detected backend."""
    reset_backend_cache()
    yield
    reset_backend_cache()


@pytest.fixture
def current_user() -> str:
    """Name of the user running the tests."""
    return pwd.getpwuid(os.getuid()).pw_name


@pytest.fixture
def current_group() -> str:
    """Name of the primary group of the user running the tests."""
    return grp.getgrgid(os.getgid()).gr_name


@pytest.fixture
def apt_policy_installed() -> str:
    """Sample apt-cache policy output for an installed package."""
    return """coreutils:
  Installed: 9.1-1
  Candidate: 9.1-1
  Version table:
 *** 9.1-1 500
        500 http://deb.debian.org/debian bookworm/main amd64 Packages
        100 /var/lib/dpkg/status
"""


@pytest.fixture
def apt_policy_not_installed() -> str:
    """Sample apt-cache policy output for an available, uninstalled package."""
    return """abiword:
  Installed: (none)
  Candidate: 3.0.5~dfsg-3.2
  Version table:
     3.0.5~dfsg-3.2 500
        500 http://deb.debian.org/debian bookworm/main amd64 Packages
"""


@pytest.fixture
def yum_info_output() -> str:
    """Sample yum info output."""
    return """Available Packages
Name         : htop
Version      : 3.2.1
Release      : 1.el9
Architecture : x86_64
Summary      : Interactive process viewer
"""
