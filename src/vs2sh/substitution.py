"""
Substitution Engine: turns classified variables into emission records.

Categories are processed strictly in Category order. Within a category,
variables are processed in their bucket order, so each value can only
reference variables handled before it.

    LITERAL          copied verbatim, never registered
    COMMON           rewritten, raw value registered
    DOTNET           rewritten, raw value registered
    TOOLCHAIN        rewritten, raw value registered
    TOOLCHAIN_LISTS  rewritten, never registered (is_list=True)
    OTHER            rewritten, never registered
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from vs2sh.model import Category, EmissionRecord, REGISTERING_CATEGORIES, Variable
from vs2sh.registry import ReferenceRegistry, escape_literal, rewrite

logger = logging.getLogger(__name__)


def substitute(
    buckets: Dict[Category, List[Variable]],
    registry: Optional[ReferenceRegistry] = None,
    fast: bool = False,
) -> Tuple[Dict[Category, List[EmissionRecord]], ReferenceRegistry]:
    """
    Rewrite values of classified variables.

    Args:
        buckets: Output of classify()
        registry: Registry to extend (a new one is created if None)
        fast: Skip substitution entirely; values are copied verbatim
            and nothing is registered

    Returns:
        (records keyed by Category in Category order, the registry)
    """
    if registry is None:
        registry = ReferenceRegistry()

    records: Dict[Category, List[EmissionRecord]] = {}
    rewritten = 0

    for category in Category:
        is_list = category == Category.TOOLCHAIN_LISTS
        out: List[EmissionRecord] = []

        for var in buckets.get(category, []):
            if fast or category == Category.LITERAL:
                value = escape_literal(var.value)
            else:
                value = rewrite(var.value, registry)
                if value != escape_literal(var.value):
                    rewritten += 1

            out.append(EmissionRecord(name=var.name, value=value, is_list=is_list))

            if not fast and category in REGISTERING_CATEGORIES:
                registry.register(var.name, var.value)

        records[category] = out

    logger.info(
        f"Substituted {rewritten} value(s) using {len(registry)} reference(s)"
    )
    return records, registry
