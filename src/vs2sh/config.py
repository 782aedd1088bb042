"""
Configuration for a profile run.

A ProfileConfig can be built in code, from a dict, or from a YAML file:

    path_variable: PATH
    path_separator: ":"
    list_separator: ";"
    convert_path_style: true
    fast: false
    deny_patterns: ["_.*", "PROMPT"]
    overrides:
      - {name: VCToolsVersion, pattern: ".*", replacement: "14.38.33130", regex: true}
    rules:
      literal: [VSCMD_.+]
      common: [VSINSTALLDIR, "VS.*"]
      ...

`rules`, when given, replaces the whole default rule table; the order of
its keys does not matter, categories are always evaluated in Category order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

from vs2sh.classifier import DEFAULT_RULES, RuleTable
from vs2sh.diff import DEFAULT_DENY_PATTERNS
from vs2sh.model import Category, Override


class ConfigError(Exception):
    """Raised when a configuration file or dict is malformed."""
    pass


@dataclass
class ProfileConfig:
    path_variable: str = "PATH"
    path_separator: str = ":"
    list_separator: str = ";"
    convert_path_style: bool = False
    fast: bool = False
    overrides: List[Override] = field(default_factory=list)
    deny_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_DENY_PATTERNS))
    rules: RuleTable = field(default_factory=lambda: [(c, list(p)) for c, p in DEFAULT_RULES])


_KNOWN_KEYS = {
    "path_variable",
    "path_separator",
    "list_separator",
    "convert_path_style",
    "fast",
    "overrides",
    "deny_patterns",
    "rules",
}


def override_to_dict(o: Override) -> Dict[str, Any]:
    return {"name": o.name, "pattern": o.pattern, "replacement": o.replacement, "regex": o.regex}


def override_from_dict(d: Dict[str, Any]) -> Override:
    try:
        return Override(
            name=d["name"],
            pattern=d["pattern"],
            replacement=d["replacement"],
            regex=bool(d.get("regex", False)),
        )
    except (KeyError, TypeError) as e:
        raise ConfigError(f"Invalid override {d!r}: missing {e}")


def rules_to_dict(rules: RuleTable) -> Dict[str, List[str]]:
    return {category.value: list(patterns) for category, patterns in rules}


def rules_from_dict(d: Dict[str, Any]) -> RuleTable:
    rules: RuleTable = []
    by_category: Dict[Category, List[str]] = {}
    for key, patterns in d.items():
        try:
            category = Category(key)
        except ValueError:
            valid = ", ".join(c.value for c in Category)
            raise ConfigError(f"Unknown category '{key}' (expected one of: {valid})")
        if not isinstance(patterns, list):
            raise ConfigError(f"Rules for '{key}' must be a list of patterns")
        by_category[category] = [str(p) for p in patterns]
    for category in Category:
        if category in by_category:
            rules.append((category, by_category[category]))
    return rules


def config_to_dict(c: ProfileConfig) -> Dict[str, Any]:
    return {
        "path_variable": c.path_variable,
        "path_separator": c.path_separator,
        "list_separator": c.list_separator,
        "convert_path_style": c.convert_path_style,
        "fast": c.fast,
        "overrides": [override_to_dict(o) for o in c.overrides],
        "deny_patterns": list(c.deny_patterns),
        "rules": rules_to_dict(c.rules),
    }


def config_from_dict(d: Dict[str, Any]) -> ProfileConfig:
    if d is None:
        return ProfileConfig()
    if not isinstance(d, dict):
        raise ConfigError("Configuration must be a mapping")

    unknown = set(d) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

    c = ProfileConfig()
    c.path_variable = d.get("path_variable", c.path_variable)
    c.path_separator = d.get("path_separator", c.path_separator)
    c.list_separator = d.get("list_separator", c.list_separator)
    c.convert_path_style = bool(d.get("convert_path_style", c.convert_path_style))
    c.fast = bool(d.get("fast", c.fast))
    c.overrides = [override_from_dict(o) for o in d.get("overrides", [])]
    if "deny_patterns" in d:
        c.deny_patterns = [str(p) for p in d["deny_patterns"]]
    if "rules" in d:
        c.rules = rules_from_dict(d["rules"] or {})
    return c


def config_to_yaml(c: ProfileConfig) -> str:
    return yaml.safe_dump(config_to_dict(c), sort_keys=False)


def config_from_yaml(s: str) -> ProfileConfig:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}")
    return config_from_dict(d)


def load_config(filepath: str) -> ProfileConfig:
    """Read a ProfileConfig from a YAML file."""
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {filepath}")
    return config_from_yaml(content)
