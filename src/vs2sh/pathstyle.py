"""
Path-style conversion between Windows and MSYS/Cygwin POSIX filenames.

    C:\\Program Files\\Git   <->   /c/Program Files/Git

These functions emulate `cygpath -w` / `cygpath -u` for drive-letter
paths. They are pure: the profile itself calls the real `cygpath` at
load time when path-style conversion is enabled.
"""

import re
import shutil

_WINDOWS_DRIVE_RE = re.compile(r'^([A-Za-z]):[\\/]*(.*)$', re.DOTALL)
_POSIX_DRIVE_RE = re.compile(r'^/([A-Za-z])(?:/+(.*))?$', re.DOTALL)


def has_cygpath() -> bool:
    """True if a `cygpath` executable is available on this host."""
    return shutil.which("cygpath") is not None


def to_native_style(path: str) -> str:
    """
    Convert a POSIX drive path to Windows style.

    Paths without a single-letter drive component (e.g. /usr/bin) are
    returned unchanged; their Windows location depends on the install root.
    """
    match = _POSIX_DRIVE_RE.match(path)
    if match is None:
        return path
    drive, rest = match.group(1), match.group(2) or ""
    return f"{drive.upper()}:\\" + rest.replace("/", "\\")


def to_posix_style(path: str) -> str:
    """Convert a Windows path to POSIX style (drive letter lowercased)."""
    match = _WINDOWS_DRIVE_RE.match(path)
    if match is None:
        return path.replace("\\", "/")
    drive, rest = match.group(1), match.group(2)
    return f"/{drive.lower()}/" + rest.replace("\\", "/")


__all__ = ["has_cygpath", "to_native_style", "to_posix_style"]
