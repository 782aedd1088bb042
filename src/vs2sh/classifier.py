"""
Variable Classifier: assigns every residual variable to one Category.

The rule table is an ordered list of (Category, [name patterns]).
For each variable the table is walked top to bottom and the first
whole-name match decides the bucket. Unmatched variables go to OTHER.

IMPORTANT: Buckets keep the input order of their members. The bucket
order (Category declaration order) decides both emission and
substitution-registration order, so rules here shape which variables
can reference which.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from vs2sh.diff import compile_name_patterns
from vs2sh.model import Category, Variable

logger = logging.getLogger(__name__)


RuleTable = List[Tuple[Category, List[str]]]


DEFAULT_RULES: RuleTable = [
    # Written verbatim, never used as substitution sources
    (Category.LITERAL, [
        "VSCMD_VER",
        "VSCMD_ARG_app_plat",
        "VSCMD_ARG_HOST_ARCH",
        "VSCMD_ARG_TGT_ARCH",
        "VSCMD_.+",
        "CommandPromptType",
        "Platform",
        "is_x64_arch",
        "PreferredToolArchitecture",
    ]),
    # Installation roots; most other values are prefixed by these
    (Category.COMMON, [
        "VisualStudioVersion",
        "VSINSTALLDIR",
        "DevEnvDir",
        "VS.*",
    ]),
    (Category.DOTNET, [
        "[Ff]ramework.+",
        "NET.+",
        "FSHARP.+",
    ]),
    (Category.TOOLCHAIN, [
        "VCINSTALLDIR",
        "VCIDEInstallDir",
        "VCToolsVersion",
        "VCToolsRedistDir",
        "VCToolsInstallDir",
        "UniversalCRTSdkDir",
        "UCRTVersion",
        "WindowsSDKVersion",
        "WindowsSDKLibVersion",
        "WindowsSdkDir",
        "ExtensionSdkDir",
    ]),
    # Separator-joined directory lists
    (Category.TOOLCHAIN_LISTS, [
        "Windows.*Path",
        "EXTERNAL_INCLUDE",
        "INCLUDE",
        "LIBPATH",
        "LIB",
    ]),
]


class Classifier:
    """Compiled form of a rule table."""

    def __init__(self, rules: Optional[Sequence[Tuple[Category, Iterable[str]]]] = None) -> None:
        if rules is None:
            rules = DEFAULT_RULES
        self._compiled = []
        for category, patterns in rules:
            if category == Category.OTHER:
                # OTHER is the fallback; explicit rules for it are redundant
                continue
            for pattern in compile_name_patterns(patterns):
                self._compiled.append((category, pattern))

    def category_of(self, name: str) -> Category:
        for category, pattern in self._compiled:
            if pattern.match(name):
                return category
        return Category.OTHER

    def classify(self, variables: Iterable[Variable]) -> Dict[Category, List[Variable]]:
        buckets: Dict[Category, List[Variable]] = {c: [] for c in Category}
        for var in variables:
            buckets[self.category_of(var.name)].append(var)
        return buckets


def category_of(name: str, rules: Optional[RuleTable] = None) -> Category:
    """Return the Category a single variable name falls into."""
    return Classifier(rules).category_of(name)


def classify(
    variables: Iterable[Variable],
    rules: Optional[RuleTable] = None,
) -> Dict[Category, List[Variable]]:
    """
    Partition variables into category buckets.

    Args:
        variables: Post-diff variables, in source order
        rules: Rule table (defaults to DEFAULT_RULES)

    Returns:
        Dict with every Category as a key, in Category order.
        Each input variable appears in exactly one bucket.
    """
    buckets = Classifier(rules).classify(variables)
    logger.info(
        "Classified: "
        + ", ".join(f"{c.value}={len(vs)}" for c, vs in buckets.items())
    )
    return buckets


__all__ = ["DEFAULT_RULES", "RuleTable", "Classifier", "category_of", "classify"]
