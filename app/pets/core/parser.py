"""Configuration parser.

Walks a configuration directory and turns pets modelines into
DesiredFileSpec objects. A modeline is any line containing the ``pets:``
marker within the first MAX_LINES lines of a file, for example::

    # pets: destfile=/etc/ssh/sshd_config, owner=root, group=root, mode=0644

A syntax error in one file skips that file only.
"""

import logging
import os
from pathlib import Path

from pets.models.spec import DeclarationError, DesiredFileSpec

logger = logging.getLogger(__name__)

MARKER = "pets:"

# Only the head of a file is searched for modelines
MAX_LINES = 10


class ModelineError(ValueError):
    """Raised when a modeline cannot be parsed."""


def read_modelines(path: Path) -> list[str]:
    """Return the modelines found in the first MAX_LINES lines of a file.

    Args:
        path: File to scan.

    Returns:
        Modelines as-is, in file order.

    Raises:
        OSError: If the file cannot be read.
    """
    modelines: list[str] = []

    with open(path, encoding="utf-8", errors="replace") as f:
        for lineno, line in enumerate(f):
            if lineno == MAX_LINES:
                break
            if MARKER in line:
                modelines.append(line.rstrip("\n"))

    return modelines


def parse_modeline(line: str, spec: DesiredFileSpec) -> None:
    """Parse a single modeline into the given spec.

    Anything before the marker is ignored.

    Args:
        line: Modeline text.
        spec: Spec to populate.

    Raises:
        ModelineError: On an unknown keyword or a missing '='.
        DeclarationError: On an invalid value (unknown user, bad mode...).
    """
    _, marker, directives = line.partition(MARKER)
    if not marker:
        msg = f"invalid pets modeline: {line}"
        raise ModelineError(msg)

    for component in directives.split(","):
        elem = component.strip()
        if not elem:
            continue

        keyword, sep, argument = elem.partition("=")
        if not sep:
            msg = f"invalid keyword/argument '{elem}'"
            raise ModelineError(msg)

        keyword = keyword.strip()
        argument = argument.strip()

        match keyword:
            case "destfile":
                spec.add_destination(argument)
            case "symlink":
                spec.add_link(argument)
            case "mkdir":
                spec.add_directory(argument)
            case "owner":
                spec.add_owner(argument)
            case "group":
                spec.add_group(argument)
            case "mode":
                spec.add_mode(argument)
            case "package":
                spec.add_package(argument)
            case "pre":
                spec.add_pre(argument)
            case "post":
                spec.add_post(argument)
            case _:
                msg = f"invalid keyword/argument '{elem}'"
                raise ModelineError(msg)


def parse_file(path: Path) -> DesiredFileSpec | None:
    """Parse one configuration file.

    Args:
        path: File to parse.

    Returns:
        DesiredFileSpec, or None if the file is not a pets file or is invalid.

    Raises:
        OSError: If the file cannot be read.
    """
    modelines = read_modelines(path)
    if not modelines:
        return None

    logger.debug("%d pets modelines found in %s", len(modelines), path)

    spec = DesiredFileSpec(source=os.path.abspath(path))

    for line in modelines:
        try:
            parse_modeline(line, spec)
        except (ModelineError, DeclarationError) as e:
            logger.error("Skipping %s: %s", path, e)
            return None

    if not spec.destination and not spec.is_package_only and not spec.is_directory_only:
        logger.error("No 'destfile' directive found in '%s'", path)
        return None

    logger.debug("'%s' pets syntax OK", path)
    return spec


def parse_files(directory: Path) -> list[DesiredFileSpec]:
    """Walk a directory and parse all files carrying pets modelines.

    Files are visited in sorted order so that declaration order, and
    therefore duplicate detection, is stable.

    Args:
        directory: Configuration directory.

    Returns:
        Parsed specs in declaration order.

    Raises:
        OSError: If the directory or a file in it cannot be read.
    """
    logger.debug("Using configuration directory '%s'", directory)

    if not directory.is_dir():
        msg = f"Configuration directory not found: {directory}"
        raise FileNotFoundError(msg)

    specs: list[DesiredFileSpec] = []

    def _raise(error: OSError) -> None:
        raise error

    for root, dirs, files in os.walk(directory, onerror=_raise):
        dirs.sort()
        for name in sorted(files):
            spec = parse_file(Path(root) / name)
            if spec is not None:
                specs.append(spec)

    return specs
