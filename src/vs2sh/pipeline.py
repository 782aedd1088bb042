"""
Profile pipeline: two snapshots in, one ProfileModel (or script) out.

    parse → diff → classify → substitute → specialize path → overrides

Every stage runs to completion before the next. The only state shared
between stages is the ReferenceRegistry, written by the substitution
engine and read by the path specializer.
"""

from __future__ import annotations

import logging
from typing import Optional

from vs2sh.backends.shell_profile import generate_profile
from vs2sh.classifier import classify
from vs2sh.config import ProfileConfig
from vs2sh.diff import diff_snapshots
from vs2sh.model import ProfileModel, Snapshot
from vs2sh.overrides import apply_overrides
from vs2sh.parser import parse_snapshot_string
from vs2sh.path_specializer import specialize_path
from vs2sh.substitution import substitute

logger = logging.getLogger(__name__)


class StructuralInputError(Exception):
    """Raised when a snapshot cannot yield a usable profile."""
    pass


def _check_structure(snapshot: Snapshot, role: str, path_variable: str) -> None:
    if snapshot.search_path is None:
        raise StructuralInputError(
            f"{role} environment has no {path_variable} variable"
        )


def build_profile_model(
    target: Snapshot,
    baseline: Snapshot,
    config: Optional[ProfileConfig] = None,
) -> ProfileModel:
    """
    Run the transformation engine on two parsed snapshots.

    Args:
        target: Snapshot of the developer shell
        baseline: Snapshot of a plain shell
        config: Run configuration (defaults if None)

    Returns:
        Finished ProfileModel

    Raises:
        StructuralInputError: If either snapshot lacks the path-list variable
    """
    if config is None:
        config = ProfileConfig()

    _check_structure(target, "development", config.path_variable)
    _check_structure(baseline, "default", config.path_variable)

    residual = diff_snapshots(target, baseline, deny_patterns=config.deny_patterns)
    buckets = classify(residual.variables, rules=config.rules)
    records, registry = substitute(buckets, fast=config.fast)

    path_entries = specialize_path(
        residual.search_path or [],
        registry,
        convert_style=config.convert_path_style,
        fast=config.fast,
    )

    if not config.fast:
        records = apply_overrides(records, config.overrides)
    elif config.overrides:
        logger.warning("fast mode: ignoring version overrides")

    return ProfileModel(
        records=records,
        path_entries=path_entries,
        path_variable=config.path_variable,
        path_separator=config.path_separator,
        list_separator=config.list_separator,
        convert_path_style=config.convert_path_style,
    )


def build_profile(
    target_text: str,
    baseline_text: str,
    config: Optional[ProfileConfig] = None,
) -> str:
    """
    Parse two normalized dumps and return the profile script text.

    Raises:
        StructuralInputError: If either dump lacks the path-list variable
    """
    if config is None:
        config = ProfileConfig()

    target = parse_snapshot_string(
        target_text, config.path_variable, config.path_separator
    )
    baseline = parse_snapshot_string(
        baseline_text, config.path_variable, config.path_separator
    )
    return generate_profile(build_profile_model(target, baseline, config))
