"""
Serialization helpers for vs2sh objects (Snapshot, ProfileModel, etc.).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from vs2sh.model import (
    Category,
    EmissionRecord,
    ProfileModel,
    Snapshot,
    Variable,
)


def variable_to_dict(v: Variable) -> Dict[str, Any]:
    return {"name": v.name, "value": v.value}


def variable_from_dict(d: Dict[str, Any]) -> Variable:
    return Variable(name=d["name"], value=d.get("value", ""))


def snapshot_to_dict(s: Snapshot) -> Dict[str, Any]:
    return {
        "variables": [variable_to_dict(v) for v in s.variables],
        "search_path": list(s.search_path) if s.search_path is not None else None,
    }


def snapshot_from_dict(d: Dict[str, Any]) -> Snapshot:
    search_path = d.get("search_path")
    return Snapshot(
        variables=[variable_from_dict(v) for v in d.get("variables", [])],
        search_path=list(search_path) if search_path is not None else None,
    )


def record_to_dict(r: EmissionRecord) -> Dict[str, Any]:
    return {"name": r.name, "value": r.value, "is_list": r.is_list}


def record_from_dict(d: Dict[str, Any]) -> EmissionRecord:
    return EmissionRecord(name=d["name"], value=d.get("value", ""), is_list=d.get("is_list", False))


def model_to_dict(m: ProfileModel) -> Dict[str, Any]:
    return {
        "records": {
            c.value: [record_to_dict(r) for r in m.records.get(c, [])] for c in Category
        },
        "path_entries": list(m.path_entries),
        "path_variable": m.path_variable,
        "path_separator": m.path_separator,
        "list_separator": m.list_separator,
        "convert_path_style": m.convert_path_style,
    }


def model_from_dict(d: Dict[str, Any]) -> ProfileModel:
    m = ProfileModel()
    records = d.get("records", {})
    m.records = {c: [record_from_dict(r) for r in records.get(c.value, [])] for c in Category}
    m.path_entries = list(d.get("path_entries", []))
    m.path_variable = d.get("path_variable", m.path_variable)
    m.path_separator = d.get("path_separator", m.path_separator)
    m.list_separator = d.get("list_separator", m.list_separator)
    m.convert_path_style = d.get("convert_path_style", m.convert_path_style)
    return m


def model_to_json(m: ProfileModel) -> str:
    return json.dumps(model_to_dict(m), sort_keys=True)


def model_from_json(s: str) -> ProfileModel:
    d = json.loads(s)
    return model_from_dict(d)


def model_to_yaml(m: ProfileModel) -> str:
    return yaml.safe_dump(model_to_dict(m), sort_keys=False)


def model_from_yaml(s: str) -> ProfileModel:
    d = yaml.safe_load(s)
    return model_from_dict(d)


def snapshot_to_yaml(s: Snapshot) -> str:
    return yaml.safe_dump(snapshot_to_dict(s), sort_keys=False)


def snapshot_from_yaml(s: str) -> Snapshot:
    d = yaml.safe_load(s)
    return snapshot_from_dict(d)
