"""Snapshot differencing: keep only what the developer shell adds."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from vs2sh.model import Snapshot

logger = logging.getLogger(__name__)


# Variables the developer shell sets for its own bookkeeping. They are
# dropped even when the baseline does not have them.
DEFAULT_DENY_PATTERNS: List[str] = [
    r"_.*",
    r"PROMPT",
]


def compile_name_patterns(patterns: Iterable[str]) -> List[re.Pattern]:
    """Compile whole-name patterns (anchored at both ends)."""
    return [re.compile(rf"(?:{p})\Z") for p in patterns]


def _is_denied(name: str, denied: Sequence[re.Pattern]) -> bool:
    return any(p.match(name) for p in denied)


def diff_snapshots(
    target: Snapshot,
    baseline: Snapshot,
    deny_patterns: Optional[Iterable[str]] = None,
) -> Snapshot:
    """Subtract ``baseline`` from ``target``.

    Removes every variable whose name appears in the baseline (values are
    not compared), every variable matching a deny pattern, and every path
    entry the baseline path-list already contains. Surviving items keep
    their relative order. Neither input is modified.

    Args:
        target: Snapshot taken inside the developer shell.
        baseline: Snapshot taken in a plain shell.
        deny_patterns: Whole-name patterns to drop unconditionally.
            Defaults to DEFAULT_DENY_PATTERNS.

    Returns:
        A new Snapshot with the residual variables and path entries.
    """
    if deny_patterns is None:
        deny_patterns = DEFAULT_DENY_PATTERNS
    denied = compile_name_patterns(deny_patterns)
    baseline_names = set(baseline.names())

    variables = [
        v
        for v in target.variables
        if v.name not in baseline_names and not _is_denied(v.name, denied)
    ]

    search_path = None
    if target.search_path is not None:
        baseline_entries = set(baseline.search_path or [])
        search_path = [e for e in target.search_path if e not in baseline_entries]

    logger.info(
        f"Diff kept {len(variables)}/{len(target.variables)} variables, "
        f"{len(search_path or [])}/{len(target.search_path or [])} path entries"
    )

    return Snapshot(variables=variables, search_path=search_path)
