"""
Reference Registry for value deduplication.

Values of already-processed variables are kept here, escaped once so they
can be searched for inside later values. A later value containing such a
text gets it replaced with a symbolic reference, e.g.

    VSINSTALLDIR=C:\\VS\\
    DevEnvDir=C:\\VS\\Common7\\IDE\\      ->  DevEnvDir=${VSINSTALLDIR}Common7\\IDE\\

Finished values use string.Template syntax: ``${NAME}`` is a reference
inserted by rewrite() and ``$$`` is a literal dollar sign. Raw text that
happens to look like ``${NAME}`` is therefore never taken for a reference.

ARCHITECTURAL RULE:
    The registry is append-only and ordered.
    rewrite() tries entries in registration order; text consumed by an
    earlier entry cannot be matched by a later one. This
    first-registered-wins behavior is relied upon by generated profiles;
    do not switch to longest-match.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


# '$$' or '${NAME}'; any other '$' is literal text
_TOKEN_RE = re.compile(r'\$(?:(\$)|\{([A-Za-z_][A-Za-z0-9_]*)\})')


def escape_value(value: str) -> str:
    """Escape a value so that, as a regex, it matches only itself."""
    return re.escape(value)


def escape_literal(text: str) -> str:
    """Template form of raw text: every '$' doubled."""
    return text.replace("$", "$$")


def reference(name: str) -> str:
    """Symbolic reference to a variable, expanded when the profile loads."""
    return "${%s}" % name


def split_value(value: str) -> List[Tuple[str, Optional[str]]]:
    """
    Split a finished value into segments.

    Returns:
        (text, None) for literal text (unescaped) and ("", name) for
        each reference, in order
    """
    segments: List[Tuple[str, Optional[str]]] = []
    literal = []
    pos = 0
    for match in _TOKEN_RE.finditer(value):
        literal.append(value[pos:match.start()])
        pos = match.end()
        if match.group(1):
            literal.append("$")
            continue
        if literal:
            segments.append(("".join(literal), None))
            literal = []
        segments.append(("", match.group(2)))
    literal.append(value[pos:])
    text = "".join(literal)
    if text:
        segments.append((text, None))
    return [s for s in segments if s[0] or s[1]]


def find_references(value: str) -> List[str]:
    """Names of all variables referenced in a value, in order of appearance."""
    return [name for _, name in split_value(value) if name is not None]


def has_reference(value: str) -> bool:
    return any(name is not None for _, name in split_value(value))


@dataclass(frozen=True)
class Reference:
    """
    One registered substitution source.

    Properties:
        name: Variable the reference expands to
        value: Raw value as registered
        pattern: value escaped for literal matching (computed once)
    """

    name: str
    value: str
    pattern: str


class ReferenceRegistry:
    """Ordered, append-only mapping of variable name to escaped value."""

    def __init__(self) -> None:
        self._entries: Dict[str, Reference] = {}
        self._compiled: Dict[str, re.Pattern] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Reference]:
        return iter(self._entries.values())

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def names(self) -> List[str]:
        return list(self._entries)

    def get(self, name: str) -> Optional[Reference]:
        return self._entries.get(name)

    def register(self, name: str, value: str) -> Optional[Reference]:
        """
        Append a substitution source.

        Empty values are not registered (they would match everywhere).
        A name is registered at most once; later attempts are ignored.

        Returns:
            The new Reference, or None if nothing was registered
        """
        if not value:
            logger.debug(f"Not registering {name}: empty value")
            return None
        if name in self._entries:
            logger.debug(f"Not registering {name}: already registered")
            return None

        entry = Reference(name=name, value=value, pattern=escape_value(value))
        self._entries[name] = entry
        self._compiled[name] = re.compile(entry.pattern)
        return entry

    def compiled(self, name: str) -> re.Pattern:
        return self._compiled[name]


def rewrite(value: str, registry: ReferenceRegistry) -> str:
    """
    Replace registered values inside a raw ``value`` with references.

    Entries are applied one after another in registration order. Each
    entry only sees text no earlier entry has replaced, so a short value
    cannot match inside an inserted reference.

    Args:
        value: Raw text to rewrite
        registry: Substitution sources

    Returns:
        Finished value (template form, see module docstring)
    """
    parts: List[Union[str, Reference]] = [value]
    for entry in registry:
        pattern = registry.compiled(entry.name)
        split: List[Union[str, Reference]] = []
        for part in parts:
            if isinstance(part, Reference):
                split.append(part)
                continue
            pos = 0
            for match in pattern.finditer(part):
                split.append(part[pos:match.start()])
                split.append(entry)
                pos = match.end()
            split.append(part[pos:])
        parts = split

    return "".join(
        reference(p.name) if isinstance(p, Reference) else escape_literal(p)
        for p in parts
    )


__all__ = [
    "Reference",
    "ReferenceRegistry",
    "escape_literal",
    "escape_value",
    "reference",
    "split_value",
    "find_references",
    "has_reference",
    "rewrite",
]
