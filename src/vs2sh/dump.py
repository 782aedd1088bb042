"""
Installed-version dump.

Lists the versions installed next to the ones the developer shell selected,
so a user can pick one for --sdk, --vctools or --vcredist:

    SDK.list       versions under WindowsSdkDir (lib, include or bin)
    VCTOOLS.list   siblings of VCToolsInstallDir
    VCREDIST.list  siblings of VCToolsRedistDir
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Callable, List, Optional

from vs2sh.model import Snapshot
from vs2sh.pathstyle import to_posix_style

logger = logging.getLogger(__name__)


SDK_VERSION_RE = re.compile(r"\d+\.\d+\.\d+\.\d")
VC_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")


def is_windows_host() -> bool:
    return os.environ.get("OS") == "Windows_NT"


def _list_versions(directory: Path, pattern: re.Pattern) -> List[str]:
    return sorted(p.name for p in directory.iterdir() if pattern.search(p.name))


def _write_list(names: List[str], out_file: Path) -> Path:
    out_file.write_text("".join(f"{n}\n" for n in names), encoding="utf-8")
    logger.info(f"Wrote {len(names)} entries to {out_file}")
    return out_file


def dump_sdk(
    snapshot: Snapshot,
    out_dir: Path,
    to_posix: Callable[[str], str] = to_posix_style,
) -> Optional[Path]:
    """Write SDK.list. Returns the file written, or None."""
    var = "WindowsSdkDir"
    value = snapshot.get_value(var)
    if not value:
        logger.warning(f"cannot dump SDK.list - variable {var} is not found in environment file")
        return None

    directory = Path(to_posix(value))
    if not directory.is_dir():
        logger.warning(f"cannot dump SDK.list - directory '{directory}' does not exist")
        return None

    for sub in ("lib", "include", "bin"):
        if (directory / sub).is_dir():
            directory = directory / sub
            break

    return _write_list(_list_versions(directory, SDK_VERSION_RE), out_dir / "SDK.list")


def _dump_vc(
    snapshot: Snapshot,
    out_dir: Path,
    filename: str,
    var: str,
    to_posix: Callable[[str], str],
) -> Optional[Path]:
    value = snapshot.get_value(var)
    if not value:
        logger.warning(f"cannot dump {filename} - variable {var} is not found in environment file")
        return None

    # The variable points at one version directory; list its siblings
    directory = Path(to_posix(value).rstrip("/")).parent
    if not directory.is_dir():
        logger.warning(f"cannot dump {filename} - directory '{directory}' does not exist")
        return None

    return _write_list(_list_versions(directory, VC_VERSION_RE), out_dir / filename)


def dump_vctools(snapshot, out_dir, to_posix=to_posix_style):
    return _dump_vc(snapshot, out_dir, "VCTOOLS.list", "VCToolsInstallDir", to_posix)


def dump_vcredist(snapshot, out_dir, to_posix=to_posix_style):
    return _dump_vc(snapshot, out_dir, "VCREDIST.list", "VCToolsRedistDir", to_posix)


def dump_versions(
    snapshot: Snapshot,
    out_dir,
    to_posix: Callable[[str], str] = to_posix_style,
) -> List[Path]:
    """
    Write SDK.list, VCTOOLS.list and VCREDIST.list into out_dir.

    Problems with one list are logged and do not stop the others.

    Returns:
        Files actually written
    """
    out_dir = Path(out_dir)
    written = []
    for dump in (dump_sdk, dump_vctools, dump_vcredist):
        path = dump(snapshot, out_dir, to_posix)
        if path is not None:
            written.append(path)
    return written
