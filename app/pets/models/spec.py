"""Desired-state model for a declared configuration target.

A DesiredFileSpec is built by the modeline parser from the declarations
found in one configuration file. Principals and modes are checked while
the spec is being built, so a spec that exists is always well-formed.
"""

import grp
import pwd
import re
from dataclasses import dataclass, field

from pets.utils.shell import Command

# Highest permission value accepted by chmod in octal notation
MAX_MODE = 0o7777

# Plain octal digits only: no sign, prefix or digit separators
_OCTAL_RE = re.compile(r"[0-7]+")


class DeclarationError(ValueError):
    """Raised when a declaration value is invalid (unknown user, bad mode...)."""


@dataclass(frozen=True, slots=True)
class Principal:
    """A user or group resolved to its numeric id.

    Attributes:
        name: User or group name as declared.
        id: Numeric uid or gid.
    """

    name: str
    id: int


def parse_mode(mode: str) -> int:
    """Parse an octal mode string into permission bits.

    Args:
        mode: Octal text such as "0644" or "755".

    Returns:
        Permission bits as an integer.

    Raises:
        DeclarationError: If the text is not a valid octal mode.
    """
    if not _OCTAL_RE.fullmatch(mode):
        msg = f"invalid mode '{mode}'"
        raise DeclarationError(msg)

    bits = int(mode, 8)

    if not 0 <= bits <= MAX_MODE:
        msg = f"mode '{mode}' out of range"
        raise DeclarationError(msg)

    return bits


@dataclass(slots=True)
class DesiredFileSpec:
    """In-memory representation of one declared configuration target.

    Attributes:
        source: Absolute path of the content to propagate (may be empty).
        destination: Path to apply content, owner and mode to, or the link name.
        link: If True, destination is a symbolic link pointing at source.
        directory: Directory to create (with parents) if missing.
        owner: Resolved owning user, if declared.
        group: Resolved owning group, if declared.
        mode: Permission bits in their original octal text form.
        packages: Packages required by this target, in declaration order.
        pre: Validation command run against source before changes.
        post: Command run after any change to this target.
    """

    source: str = ""
    destination: str = ""
    link: bool = False
    directory: str = ""
    owner: Principal | None = None
    group: Principal | None = None
    mode: str = ""
    packages: list[str] = field(default_factory=list)
    pre: Command | None = None
    post: Command | None = None

    def add_destination(self, path: str) -> None:
        """Set the destination of a plain file copy."""
        if self.link:
            msg = f"'{path}': destfile and symlink are mutually exclusive"
            raise DeclarationError(msg)
        self.destination = path

    def add_link(self, path: str) -> None:
        """Set the destination as a symbolic link to source."""
        if self.destination and not self.link:
            msg = f"'{path}': destfile and symlink are mutually exclusive"
            raise DeclarationError(msg)
        self.destination = path
        self.link = True

    def add_directory(self, path: str) -> None:
        """Set a directory to be created."""
        self.directory = path

    def add_owner(self, name: str) -> None:
        """Resolve and set the owning user.

        Raises:
            DeclarationError: If the user does not exist.
        """
        try:
            entry = pwd.getpwnam(name)
        except KeyError:
            msg = f"unknown user '{name}'"
            raise DeclarationError(msg) from None
        self.owner = Principal(name=name, id=entry.pw_uid)

    def add_group(self, name: str) -> None:
        """Resolve and set the owning group.

        Raises:
            DeclarationError: If the group does not exist.
        """
        try:
            entry = grp.getgrnam(name)
        except KeyError:
            msg = f"unknown group '{name}'"
            raise DeclarationError(msg) from None
        self.group = Principal(name=name, id=entry.gr_gid)

    def add_mode(self, mode: str) -> None:
        """Validate and set the mode, keeping its textual form.

        Raises:
            DeclarationError: If the mode is not valid octal.
        """
        parse_mode(mode)
        self.mode = mode

    def add_package(self, package: str) -> None:
        """Add a required package, ignoring repeats."""
        if package not in self.packages:
            self.packages.append(package)

    def add_pre(self, pre: str) -> None:
        """Set the pre-update validation command."""
        self.pre = Command.from_string(pre)

    def add_post(self, post: str) -> None:
        """Set the post-update command."""
        self.post = Command.from_string(post)

    @property
    def mode_bits(self) -> int | None:
        """Return the declared mode as permission bits, or None if unset."""
        if not self.mode:
            return None
        return parse_mode(self.mode)

    @property
    def is_package_only(self) -> bool:
        """Check if this spec only requires packages."""
        return bool(self.packages) and not self.destination and not self.directory

    @property
    def is_directory_only(self) -> bool:
        """Check if this spec only creates a directory."""
        return bool(self.directory) and not self.destination

    def pre_command(self) -> Command | None:
        """Return the pre command with source appended, or None if unset."""
        if self.pre is None:
            return None
        return self.pre.with_args(self.source)

    def label(self) -> str:
        """Return a short human-readable identifier for logs."""
        return self.source or self.destination or self.directory or ", ".join(self.packages)
