"""
Profile Analyzer: diagnostics and inventory of finished profile models.

This module provides lightweight analysis of ProfileModel objects:
    - Variable inventory per category
    - Reference usage (who references whom)
    - Ordering check: no variable references one emitted after it
    - Substitution sources nobody uses
    - Warning flags

IMPORTANT: This is read-only. It does NOT modify the model.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Set

from vs2sh.model import Category, ProfileModel, REGISTERING_CATEGORIES
from vs2sh.registry import find_references


@dataclass
class ProfileReport:
    """Analysis report for a profile model."""

    total_variables: int = 0
    variables_per_category: Dict[str, int] = field(default_factory=dict)
    total_path_entries: int = 0

    # Reference usage
    references_per_variable: Dict[str, List[str]] = field(default_factory=dict)
    reference_usage: Dict[str, int] = field(default_factory=dict)
    total_references: int = 0
    substituted_variables: int = 0
    substituted_path_entries: int = 0

    # Ordering
    forward_references: List[str] = field(default_factory=list)
    unused_sources: List[str] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_profile(model: ProfileModel) -> ProfileReport:
    """
    Analyze a ProfileModel.

    A reference is valid only if it names a substitution source
    (COMMON, DOTNET, TOOLCHAIN) emitted before the referencing variable.

    Returns a ProfileReport with metrics and warnings.
    """
    report = ProfileReport()
    usage: Dict[str, int] = defaultdict(int)

    available: Set[str] = set()
    sources: List[str] = []

    # =========================================================================
    # 1. VARIABLES, IN EMISSION ORDER
    # =========================================================================

    for category in Category:
        records = model.records.get(category, [])
        report.variables_per_category[category.value] = len(records)
        report.total_variables += len(records)

        for record in records:
            refs = find_references(record.value)
            if refs:
                report.references_per_variable[record.name] = refs
                report.substituted_variables += 1
            for ref in refs:
                usage[ref] += 1
                if ref not in available:
                    report.forward_references.append(f"{record.name} -> {ref}")

            if category in REGISTERING_CATEGORIES:
                available.add(record.name)
                sources.append(record.name)

    # =========================================================================
    # 2. PATH ENTRIES
    # =========================================================================

    report.total_path_entries = len(model.path_entries)
    for entry in model.path_entries:
        refs = find_references(entry)
        if refs:
            report.substituted_path_entries += 1
        for ref in refs:
            usage[ref] += 1
            if ref not in available:
                report.forward_references.append(f"{model.path_variable} -> {ref}")

    report.reference_usage = dict(usage)
    report.total_references = sum(usage.values())
    report.unused_sources = [name for name in sources if name not in usage]

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.forward_references:
        report.add_warning(
            f"References to variables not emitted earlier: {', '.join(report.forward_references)}"
        )

    if report.total_variables == 0 and report.total_path_entries == 0:
        report.add_warning("Profile is empty: the environments do not differ")

    if sources and len(report.unused_sources) == len(sources):
        report.add_warning("No substitution source is referenced by any value")

    return report


def format_report(report: ProfileReport) -> str:
    """Human-readable rendering of a report."""
    lines = [
        f"Variables: {report.total_variables}",
    ]
    for name, count in report.variables_per_category.items():
        lines.append(f"  {name}: {count}")
    lines.append(f"Path entries: {report.total_path_entries}")
    lines.append(
        f"References: {report.total_references} "
        f"({report.substituted_variables} variables, "
        f"{report.substituted_path_entries} path entries)"
    )
    if report.unused_sources:
        lines.append(f"Unused sources: {', '.join(report.unused_sources)}")
    for warning in report.warnings:
        lines.append(f"WARNING: {warning}")
    return "\n".join(lines)
