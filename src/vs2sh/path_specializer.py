"""
Path Specializer: prepares path-list entries for prepend-based emission.

The profile builds the path-list by repeatedly prepending:

    PATH="eN"${PATH:+':'}${PATH}
    ...
    PATH="e1"${PATH:+':'}${PATH}

so entries must be handed to the backend last-first. After all
statements run, the path-list reads e1, e2, ..., eN again.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List

from vs2sh.pathstyle import to_native_style
from vs2sh.registry import ReferenceRegistry, escape_literal, rewrite

logger = logging.getLogger(__name__)


def specialize_path(
    entries: Iterable[str],
    registry: ReferenceRegistry,
    convert_style: bool = False,
    fast: bool = False,
    to_native: Callable[[str], str] = to_native_style,
) -> List[str]:
    """
    Convert, substitute and reverse path-list entries.

    The registry is only read; nothing is registered.

    Args:
        entries: Post-diff path entries, left to right as in the dump
        registry: Registry built by the substitution engine
        convert_style: Convert each entry with ``to_native`` first
        fast: Skip substitution
        to_native: Path-style converter

    Returns:
        Entries in reverse order, ready for prepend emission
    """
    result: List[str] = []
    for entry in entries:
        if convert_style:
            entry = to_native(entry)
        if fast:
            entry = escape_literal(entry)
        else:
            entry = rewrite(entry, registry)
        result.append(entry)

    result.reverse()
    logger.debug(f"Specialized {len(result)} path entries")
    return result
