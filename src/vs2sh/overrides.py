"""Override Patcher: version pins applied after substitution."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

from vs2sh.model import Category, EmissionRecord, Override
from vs2sh.registry import escape_literal

logger = logging.getLogger(__name__)


VERSION_TRIPLE = r"\d+\.\d+\.\d+"


def sdk_override(version: str) -> Override:
    """Pin the Universal CRT / Windows SDK version (whole value)."""
    return Override(name="UCRTVersion", pattern=".*", replacement=version, regex=True)


def vctools_override(version: str) -> Override:
    """Pin the MSVC toolset version (whole value)."""
    return Override(name="VCToolsVersion", pattern=".*", replacement=version, regex=True)


def vcredist_override(version: str) -> Override:
    """Pin the redistributable version inside VCToolsRedistDir."""
    return Override(
        name="VCToolsRedistDir", pattern=VERSION_TRIPLE, replacement=version, regex=True
    )


def build_overrides(
    sdk: Optional[str] = None,
    vctools: Optional[str] = None,
    vcredist: Optional[str] = None,
) -> List[Override]:
    """Overrides for the versions the user asked to pin."""
    overrides = []
    if sdk:
        overrides.append(sdk_override(sdk))
    if vctools:
        overrides.append(vctools_override(vctools))
    if vcredist:
        overrides.append(vcredist_override(vcredist))
    return overrides


def patch_value(value: str, override: Override) -> str:
    """
    Replace the first occurrence of the override's pattern in value.

    The replacement is literal text. A literal pattern matches literal
    text; a regex pattern runs against the finished value as stored.
    """
    replacement = escape_literal(override.replacement)
    if override.regex:
        return re.sub(override.pattern, lambda _m: replacement, value, count=1)
    return value.replace(escape_literal(override.pattern), replacement, 1)


def apply_overrides(
    records: Dict[Category, List[EmissionRecord]],
    overrides: Iterable[Override],
) -> Dict[Category, List[EmissionRecord]]:
    """
    Apply overrides to final values.

    An override whose variable is absent is a no-op. Only the named
    record changes; records referencing it keep their references.

    Args:
        records: Records keyed by Category (not modified)
        overrides: Patches to apply, in order

    Returns:
        New records mapping with the patched values
    """
    patched = {category: list(recs) for category, recs in records.items()}

    for override in overrides:
        found = False
        for recs in patched.values():
            for i, record in enumerate(recs):
                if record.name != override.name:
                    continue
                found = True
                value = patch_value(record.value, override)
                if value != record.value:
                    logger.info(f"Override {record.name}: {record.value!r} -> {value!r}")
                recs[i] = EmissionRecord(name=record.name, value=value, is_list=record.is_list)
        if not found:
            logger.debug(f"Override for {override.name} ignored: variable not present")

    return patched
