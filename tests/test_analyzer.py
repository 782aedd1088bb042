"""
Tests for the Profile Analyzer.

Tests verify that the analyzer correctly:
    - Inventories variables per category
    - Counts reference usage
    - Detects references to variables not emitted earlier
    - Reports unused substitution sources
"""

from vs2sh.analyzer import analyze_profile, format_report
from vs2sh.examples import build_example_snapshots
from vs2sh.model import Category, EmissionRecord, ProfileModel
from vs2sh.pipeline import build_profile_model


def make_model(records=None, path_entries=None):
    full = {c: [] for c in Category}
    full.update(records or {})
    return ProfileModel(records=full, path_entries=path_entries or [])


def test_simple_profile():
    """ROOT referenced by SUB and by one path entry."""
    model = make_model(
        {
            Category.COMMON: [EmissionRecord("ROOT", "/opt/tool")],
            Category.OTHER: [EmissionRecord("SUB", "${ROOT}/bin")],
        },
        path_entries=["${ROOT}/sbin", "/usr/local/bin"],
    )
    report = analyze_profile(model)

    assert report.total_variables == 2
    assert report.variables_per_category["common"] == 1
    assert report.variables_per_category["other"] == 1
    assert report.total_path_entries == 2
    assert report.references_per_variable == {"SUB": ["ROOT"]}
    assert report.reference_usage == {"ROOT": 2}
    assert report.total_references == 2
    assert report.substituted_variables == 1
    assert report.substituted_path_entries == 1
    assert report.forward_references == []
    assert report.unused_sources == []
    assert report.warnings == []


def test_forward_reference():
    """A reference to a later variable is flagged."""
    model = make_model({
        Category.COMMON: [EmissionRecord("A", "${B}x")],
        Category.TOOLCHAIN: [EmissionRecord("B", "/b")],
    })
    report = analyze_profile(model)

    assert report.forward_references == ["A -> B"]
    assert any("not emitted earlier" in w for w in report.warnings)


def test_reference_to_non_source():
    """OTHER variables are never valid reference targets."""
    model = make_model({
        Category.OTHER: [EmissionRecord("O", "/o"), EmissionRecord("P", "${O}/p")],
    })
    assert analyze_profile(model).forward_references == ["P -> O"]


def test_unknown_reference_in_path():
    model = make_model(path_entries=["${NOPE}/bin"])
    assert analyze_profile(model).forward_references == ["PATH -> NOPE"]


def test_empty_profile():
    report = analyze_profile(make_model())
    assert report.total_variables == 0
    assert "Profile is empty: the environments do not differ" in report.warnings


def test_unused_sources():
    model = make_model({
        Category.COMMON: [EmissionRecord("ROOT", "/opt")],
        Category.DOTNET: [EmissionRecord("FW", "/fw")],
    })
    report = analyze_profile(model)
    assert report.unused_sources == ["ROOT", "FW"]
    assert "No substitution source is referenced by any value" in report.warnings


def test_example_profile_is_clean():
    dev, user = build_example_snapshots()
    report = analyze_profile(build_profile_model(dev, user))

    assert report.forward_references == []
    assert report.reference_usage["VSINSTALLDIR"] >= 3
    assert report.variables_per_category["literal"] == 7


def test_format_report():
    model = make_model(
        {Category.COMMON: [EmissionRecord("ROOT", "/opt")]},
        path_entries=["${ROOT}/bin"],
    )
    text = format_report(analyze_profile(model))
    assert "Variables: 1" in text
    assert "  common: 1" in text
    assert "Path entries: 1" in text
    assert "References: 1 (0 variables, 1 path entries)" in text
    assert "WARNING" not in text


def test_escaped_reference_text_ignored():
    """Literal ${HOME} text (stored as $${HOME}) is not a reference."""
    model = make_model({Category.OTHER: [EmissionRecord("FOO", "$${HOME}/x")]})
    report = analyze_profile(model)
    assert report.forward_references == []
    assert report.total_references == 0
