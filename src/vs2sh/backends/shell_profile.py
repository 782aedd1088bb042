"""
POSIX shell profile generator for vs2sh profile models.

Converts a ProfileModel into a script to be sourced by sh-compatible shells.

Layout of the generated profile:
    - One `export NAME=...` line per single-valued variable
      (LITERAL, COMMON, DOTNET, TOOLCHAIN, OTHER)
    - Per toolchain list variable: a `# NAME` comment, one prepend
      statement per entry and an `export NAME` line
    - The path-list variable in the same shape

Quoting:
    Values without references are written in single quotes and are never
    expanded. Values with references are written in double quotes with
    everything except the references escaped. A literal `$$` in a finished
    value is written as a plain dollar sign.
"""

import logging
import re
from typing import List

from vs2sh.model import Category, EmissionRecord, ProfileModel
from vs2sh.registry import has_reference, reference, split_value

logger = logging.getLogger(__name__)


SINGLE_CATEGORIES = (
    Category.LITERAL,
    Category.COMMON,
    Category.DOTNET,
    Category.TOOLCHAIN,
    Category.OTHER,
)

_DOUBLE_QUOTE_SPECIAL_RE = re.compile(r'([\\"`$])')


def _single_quote(s: str) -> str:
    return "'" + s.replace("'", "'\\''") + "'"


def _double_quote(value: str) -> str:
    """Double-quote a finished value; only its references stay expandable."""
    out = []
    for text, name in split_value(value):
        if name is not None:
            out.append(reference(name))
        else:
            out.append(_DOUBLE_QUOTE_SPECIAL_RE.sub(r'\\\1', text))
    return '"' + "".join(out) + '"'


def quote_value(value: str) -> str:
    """Quote a finished value, depending on whether it has references."""
    if has_reference(value):
        return _double_quote(value)
    return _single_quote("".join(text for text, _ in split_value(value)))


def _prepend_line(name: str, quoted_entry: str, separator: str) -> str:
    sep = _single_quote(separator)
    return f"{name}={quoted_entry}${{{name}:+{sep}}}${{{name}}}"


def _render_single(record: EmissionRecord) -> str:
    return f"export {record.name}={quote_value(record.value)}"


def _render_list(record: EmissionRecord, separator: str) -> List[str]:
    entries = [e for e in record.value.split(separator) if e]
    lines = [f"# {record.name}"]
    for entry in reversed(entries):
        lines.append(_prepend_line(record.name, quote_value(entry), separator))
    lines.append(f"export {record.name}")
    return lines


def _render_path(model: ProfileModel) -> List[str]:
    name = model.path_variable
    lines = [f"# {name}"]
    for entry in model.path_entries:
        quoted = _double_quote(entry)
        if model.convert_path_style:
            quoted = f"$(cygpath -u {quoted})"
        lines.append(_prepend_line(name, quoted, model.path_separator))
    lines.append(f"export {name}")
    return lines


def generate_profile(model: ProfileModel) -> str:
    """
    Generate profile script text for a model.

    Args:
        model: Finished profile model

    Returns:
        Script text, newline-terminated
    """
    lines: List[str] = []

    for category in SINGLE_CATEGORIES:
        for record in model.records.get(category, []):
            lines.append(_render_single(record))

    for record in model.records.get(Category.TOOLCHAIN_LISTS, []):
        lines.extend(_render_list(record, model.list_separator))

    lines.extend(_render_path(model))

    return "\n".join(lines) + "\n"


def save_profile(model: ProfileModel, filename: str) -> None:
    """
    Generate the profile and write it to a file, replacing its content.

    Args:
        model: Finished profile model
        filename: Output file path (e.g. vs.sh)
    """
    text = generate_profile(model)
    with open(filename, 'w', encoding='utf-8', newline='\n') as f:
        f.write(text)
    logger.info(f"Wrote profile to {filename}")


__all__ = ["generate_profile", "save_profile", "quote_value"]
