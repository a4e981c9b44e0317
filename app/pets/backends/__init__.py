"""Package backends for the supported package manager families.

The backend in use is detected once per process by probing for known
package manager executables. Wrappers are probed before the manager they
wrap (yay before pacman), otherwise an Arch system with yay installed
would be classified as plain pacman.
"""

import logging
import threading

from pets.backends.apk import ApkBackend
from pets.backends.apt import AptBackend
from pets.backends.base import PackageBackend
from pets.backends.pacman import PacmanBackend, YayBackend
from pets.backends.yum import YumBackend

logger = logging.getLogger(__name__)

# Probe order matters: see module docstring.
BACKEND_PRECEDENCE: tuple[type[PackageBackend], ...] = (
    AptBackend,
    YumBackend,
    ApkBackend,
    YayBackend,
    PacmanBackend,
)


class BackendNotFoundError(RuntimeError):
    """Raised when no supported package manager is found on the host."""


_detected: PackageBackend | None = None
_detect_lock = threading.Lock()


def _probe() -> PackageBackend:
    """Return the first available backend in precedence order.

    Raises:
        BackendNotFoundError: If no known package manager is present.
    """
    for backend_cls in BACKEND_PRECEDENCE:
        backend = backend_cls()
        if backend.is_available():
            logger.debug("Detected package backend: %s", backend.name)
            return backend

    names = ", ".join(cls().executable for cls in BACKEND_PRECEDENCE)
    msg = f"No supported package manager found (looked for: {names})"
    raise BackendNotFoundError(msg)


def detect_backend() -> PackageBackend:
    """Get the package backend of this host, probing it on first use.

    Safe to call from several threads: the probe runs at most once, and
    later calls return the cached backend without taking the lock.

    Returns:
        The detected PackageBackend.

    Raises:
        BackendNotFoundError: If no known package manager is present.
    """
    global _detected
    backend = _detected
    if backend is not None:
        return backend

    with _detect_lock:
        if _detected is None:
            _detected = _probe()
        return _detected


def reset_backend_cache() -> None:
    """Forget the detected backend so the next call probes again."""
    global _detected
    with _detect_lock:
        _detected = None


__all__ = [
    "BACKEND_PRECEDENCE",
    "ApkBackend",
    "AptBackend",
    "BackendNotFoundError",
    "PackageBackend",
    "PacmanBackend",
    "YayBackend",
    "YumBackend",
    "detect_backend",
    "reset_backend_cache",
]
