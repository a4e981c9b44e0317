"""Unit tests for package backend detection."""

import threading
from unittest.mock import patch

import pytest
from pets.backends import (
    BACKEND_PRECEDENCE,
    ApkBackend,
    AptBackend,
    BackendNotFoundError,
    PacmanBackend,
    YayBackend,
    detect_backend,
    reset_backend_cache,
)


def _only(*executables: str):
    """Return a command_exists replacement knowing only the given executables."""
    return lambda name: name in executables


class TestDetectBackend:
    """Tests for detect_backend."""

    def test_detects_apt(self) -> None:
        """apt-get on the host selects the APT backend."""
        with patch("pets.backends.base.command_exists", side_effect=_only("apt-get")):
            assert isinstance(detect_backend(), AptBackend)

    def test_detects_apk(self) -> None:
        """apk on the host selects the APK backend."""
        with patch("pets.backends.base.command_exists", side_effect=_only("apk")):
            assert isinstance(detect_backend(), ApkBackend)

    def test_yay_wins_over_pacman(self) -> None:
        """The wrapper is preferred over the manager it wraps."""
        with patch("pets.backends.base.command_exists", side_effect=_only("pacman", "yay")):
            assert isinstance(detect_backend(), YayBackend)

    def test_plain_pacman(self) -> None:
        """pacman alone selects the Pacman backend."""
        with patch("pets.backends.base.command_exists", side_effect=_only("pacman")):
            backend = detect_backend()
        assert type(backend) is PacmanBackend

    def test_yay_probed_before_pacman(self) -> None:
        """Precedence lists YayBackend before PacmanBackend."""
        assert BACKEND_PRECEDENCE.index(YayBackend) < BACKEND_PRECEDENCE.index(PacmanBackend)

    def test_no_backend_is_fatal(self) -> None:
        """No known package manager raises BackendNotFoundError."""
        with (
            patch("pets.backends.base.command_exists", return_value=False),
            pytest.raises(BackendNotFoundError, match="No supported package manager"),
        ):
            detect_backend()

    def test_memoized(self) -> None:
        """The probe runs once; later calls return the same instance."""
        with patch("pets.backends.base.command_exists", side_effect=_only("apk")) as mock:
            first = detect_backend()
            calls = mock.call_count
            second = detect_backend()

        assert first is second
        assert mock.call_count == calls

    def test_reset(self) -> None:
        """reset_backend_cache forces a new probe."""
        with patch("pets.backends.base.command_exists", side_effect=_only("apk")):
            first = detect_backend()
        reset_backend_cache()
        with patch("pets.backends.base.command_exists", side_effect=_only("apt-get")):
            second = detect_backend()

        assert isinstance(first, ApkBackend)
        assert isinstance(second, AptBackend)

    def test_concurrent_callers_share_one_probe(self) -> None:
        """Threads racing on first use all get the same backend."""
        results = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            results.append(detect_backend())

        with patch("pets.backends.base.command_exists", side_effect=_only("apt-get")):
            threads = [threading.Thread(target=worker) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert len(results) == 8
        assert all(backend is results[0] for backend in results)
