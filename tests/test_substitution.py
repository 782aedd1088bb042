"""
Tests for the substitution engine.
"""

import pytest
from vs2sh.classifier import classify
from vs2sh.model import Category, EmissionRecord, Variable
from vs2sh.registry import ReferenceRegistry, find_references
from vs2sh.substitution import substitute


def buckets(**kwargs):
    result = {c: [] for c in Category}
    for key, pairs in kwargs.items():
        result[Category[key.upper()]] = [Variable(n, v) for n, v in pairs]
    return result


def values(records, category):
    return {r.name: r.value for r in records[category]}


class TestCategories:

    def test_scenario_common_referenced_by_other(self):
        records, registry = substitute(buckets(
            common=[("ROOT", "/opt/tool")],
            other=[("SUB", "/opt/tool/bin")],
        ))
        assert values(records, Category.COMMON) == {"ROOT": "/opt/tool"}
        assert values(records, Category.OTHER) == {"SUB": "${ROOT}/bin"}
        assert registry.names() == ["ROOT"]

    def test_literal_copied_and_not_registered(self):
        records, registry = substitute(buckets(
            literal=[("VSCMD_VER", "17.9.6")],
            common=[("VSVER", "17.9.6")],
        ))
        assert values(records, Category.LITERAL) == {"VSCMD_VER": "17.9.6"}
        # LITERAL is never a source, so the COMMON value stays literal
        assert values(records, Category.COMMON) == {"VSVER": "17.9.6"}
        assert registry.names() == ["VSVER"]

    def test_literal_never_rewritten(self):
        records, _ = substitute(buckets(
            literal=[("L", "/opt/tool")],
            common=[("ROOT", "/opt/tool")],
        ))
        assert values(records, Category.LITERAL) == {"L": "/opt/tool"}

    def test_lists_and_other_not_registered(self):
        records, registry = substitute(buckets(
            toolchain_lists=[("INCLUDE", "/inc1;/inc2")],
            other=[("A", "/inc1"), ("B", "/inc1/sub")],
        ))
        assert registry.names() == []
        assert values(records, Category.OTHER) == {"A": "/inc1", "B": "/inc1/sub"}

    def test_list_records_flagged(self):
        records, _ = substitute(buckets(toolchain_lists=[("LIB", "/a;/b")], other=[("X", "y")]))
        assert records[Category.TOOLCHAIN_LISTS] == [EmissionRecord("LIB", "/a;/b", is_list=True)]
        assert records[Category.OTHER] == [EmissionRecord("X", "y", is_list=False)]

    def test_raw_value_registered_not_rewritten_value(self):
        records, registry = substitute(buckets(
            common=[("VSINSTALLDIR", "C:\\VS\\"), ("DevEnvDir", "C:\\VS\\IDE\\")],
        ))
        assert values(records, Category.COMMON)["DevEnvDir"] == "${VSINSTALLDIR}IDE\\"
        assert registry.get("DevEnvDir").value == "C:\\VS\\IDE\\"

    def test_within_category_earlier_only(self):
        """A variable cannot reference one later in its own bucket."""
        records, _ = substitute(buckets(
            toolchain=[("SUB", "/opt/tool/bin"), ("ROOT", "/opt/tool")],
        ))
        assert values(records, Category.TOOLCHAIN) == {
            "SUB": "/opt/tool/bin",
            "ROOT": "/opt/tool",
        }

    def test_category_order_beats_input_order(self):
        """DOTNET is processed before TOOLCHAIN whatever the dump order."""
        variables = [
            Variable("VCINSTALLDIR", "C:\\Windows\\Microsoft.NET\\VC\\"),
            Variable("FrameworkDir", "C:\\Windows\\Microsoft.NET\\"),
        ]
        records, _ = substitute(classify(variables))
        assert values(records, Category.TOOLCHAIN) == {"VCINSTALLDIR": "${FrameworkDir}VC\\"}

    def test_records_in_category_order(self):
        records, _ = substitute(buckets(other=[("X", "1")]))
        assert list(records) == list(Category)

    def test_existing_registry_extended(self):
        registry = ReferenceRegistry()
        registry.register("PRE", "/pre")
        records, same = substitute(buckets(toolchain=[("T", "/pre/t")]), registry=registry)
        assert same is registry
        assert values(records, Category.TOOLCHAIN) == {"T": "${PRE}/t"}
        assert registry.names() == ["PRE", "T"]


class TestFastMode:

    def test_values_verbatim(self):
        records, registry = substitute(buckets(
            common=[("ROOT", "/opt/tool")],
            other=[("SUB", "/opt/tool/bin")],
        ), fast=True)
        assert values(records, Category.OTHER) == {"SUB": "/opt/tool/bin"}
        assert len(registry) == 0


class TestMonotonicity:
    """No final value references a variable processed later."""

    def test_no_forward_references(self):
        variables = [
            Variable("INCLUDE", "/opt/vs/inc;/opt/kits/inc"),
            Variable("VCINSTALLDIR", "/opt/vs/vc"),
            Variable("WindowsSdkDir", "/opt/kits"),
            Variable("VSINSTALLDIR", "/opt/vs"),
            Variable("DevEnvDir", "/opt/vs/ide"),
            Variable("FrameworkDir", "/opt/vs/fw"),
            Variable("HOME", "/opt/vs/home"),
        ]
        records, _ = substitute(classify(variables))

        processed = []
        for category in Category:
            for record in records[category]:
                for ref in find_references(record.value):
                    assert ref in processed, f"{record.name} references later {ref}"
                processed.append(record.name)


class TestDollarText:
    """A raw '$' is stored escaped and never read back as a reference."""

    def test_literal_category_escaped(self):
        records, _ = substitute(buckets(literal=[("L", "${HOME}/x")]))
        assert values(records, Category.LITERAL) == {"L": "$${HOME}/x"}
        assert find_references(records[Category.LITERAL][0].value) == []

    def test_fast_mode_escaped(self):
        records, _ = substitute(buckets(other=[("FOO", "${HOME}/x")]), fast=True)
        assert values(records, Category.OTHER) == {"FOO": "$${HOME}/x"}

    def test_only_inserted_references_found(self):
        records, _ = substitute(buckets(
            common=[("VSINSTALLDIR", "/opt/vs")],
            other=[("FOO", "/opt/vs/${HOME}")],
        ))
        assert values(records, Category.OTHER) == {"FOO": "${VSINSTALLDIR}/$${HOME}"}
        assert find_references(records[Category.OTHER][0].value) == ["VSINSTALLDIR"]
