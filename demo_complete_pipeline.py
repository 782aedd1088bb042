#!/usr/bin/env python3
"""
Complete Pipeline Demo: dumps → Snapshot → ProfileModel → Analysis → Profile

Shows the full workflow on the bundled example environments:
1. Parse both environment dumps
2. Build the profile model (diff, classify, substitute)
3. Analyze the model
4. Generate the sh profile
"""

from vs2sh.analyzer import analyze_profile, format_report
from vs2sh.backends import generate_profile, save_profile
from vs2sh.config import ProfileConfig
from vs2sh.examples import build_example_snapshots
from vs2sh.overrides import build_overrides
from vs2sh.pipeline import build_profile_model


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: dumps → Snapshot → ProfileModel → Profile")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Parse dumps
    # =========================================================================
    print("\n1. PARSING ENVIRONMENT DUMPS...")
    dev, user = build_example_snapshots()
    print(f"   ✓ Development variables: {len(dev.variables)}")
    print(f"   ✓ Development PATH entries: {len(dev.search_path)}")
    print(f"   ✓ Default variables: {len(user.variables)}")

    # =========================================================================
    # STEP 2: Build model
    # =========================================================================
    print("\n2. BUILDING PROFILE MODEL...")
    config = ProfileConfig(
        convert_path_style=True,
        overrides=build_overrides(vctools="14.38.33130"),
    )
    model = build_profile_model(dev, user, config)
    for category, records in model.records.items():
        print(f"   ✓ {category.value}: {len(records)}")

    # =========================================================================
    # STEP 3: Analyze
    # =========================================================================
    print("\n3. ANALYZING MODEL...")
    print(format_report(analyze_profile(model)))

    # =========================================================================
    # STEP 4: Profile
    # =========================================================================
    print("\n4. GENERATED PROFILE:")
    print("-" * 80)
    print(generate_profile(model))
    save_profile(model, "vs.sh")
    print("   ✓ Saved vs.sh")

    print("\n" + "=" * 80)
    print("To use it:")
    print("  . ./vs.sh")
    print("=" * 80)


if __name__ == "__main__":
    main()
