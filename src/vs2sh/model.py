"""
Core Environment Model Objects

Defines the data structures shared by every stage of the profile pipeline.

These are pure data classes representing:
    - Variables (one name=value assignment)
    - Snapshots (one captured shell environment)
    - Categories (emission buckets)
    - Emission records (finished values ready to be written)
    - Overrides (post-substitution patches)
    - Profile models (root container consumed by backends)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about shell syntax
        - Are never mutated by a later stage (stages build new objects)
        - Are fully serializable
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Variable:
    """
    A single environment variable assignment.

    Properties:
        name: Variable identifier (e.g., "VCToolsInstallDir")
        value: Raw value exactly as captured (may be empty)
    """

    name: str
    value: str


@dataclass
class Snapshot:
    """
    One captured shell environment.

    Properties:
        variables:
            Assignments in the order they appeared in the dump text.
            The path-list variable is never part of this list.

        search_path:
            Entries of the path-list variable, left to right.
            None if the dump had no path-list variable at all.

    INVARIANTS:
        - Variable names are unique
        - The path-list variable lives only in search_path
    """

    variables: List[Variable] = field(default_factory=list)
    search_path: Optional[List[str]] = None

    def names(self) -> List[str]:
        return [v.name for v in self.variables]

    def get_variable(self, name: str) -> Optional[Variable]:
        """
        Retrieve a variable by name.

        Args:
            name: Variable name

        Returns:
            Variable object or None if not found
        """
        for var in self.variables:
            if var.name == name:
                return var
        return None

    def get_value(self, name: str) -> Optional[str]:
        var = self.get_variable(name)
        return var.value if var is not None else None


class Category(Enum):
    """
    Emission buckets, declared in emission order.

    The declaration order is also the substitution-registration order:
    a variable may only reference variables from an earlier bucket, or
    from earlier in its own bucket.
    """

    LITERAL = "literal"
    COMMON = "common"
    DOTNET = "dotnet"
    TOOLCHAIN = "toolchain"
    TOOLCHAIN_LISTS = "toolchain_lists"
    OTHER = "other"


# Categories whose raw values become substitution sources.
REGISTERING_CATEGORIES = (Category.COMMON, Category.DOTNET, Category.TOOLCHAIN)


@dataclass(frozen=True)
class EmissionRecord:
    """
    A finished variable ready for a backend.

    Properties:
        name: Variable identifier
        value: Final value in string.Template form: ${NAME} is a symbolic
            reference, $$ a literal dollar sign
        is_list: True if the value is a separator-joined directory list
    """

    name: str
    value: str
    is_list: bool = False


@dataclass(frozen=True)
class Override:
    """
    A post-substitution patch of one variable's final value.

    Properties:
        name:
            Variable to patch (e.g., "VCToolsVersion")

        pattern:
            Text to look for. Interpreted literally unless regex is True.

        replacement:
            Text substituted for the first occurrence of pattern

        regex:
            Treat pattern as a regular expression
    """

    name: str
    pattern: str
    replacement: str
    regex: bool = False


@dataclass
class ProfileModel:
    """
    Root container for a finished profile.

    Everything a backend writes MUST be derivable from this object alone.

    Properties:
        records:
            Emission records keyed by category, in Category order.
            Values are final (substituted and overridden).

        path_entries:
            Path-list entries (template form, like record values), already
            style-converted, substituted
            and reversed for prepend-based emission.

        path_variable:
            Name of the path-list variable (e.g., "PATH")

        path_separator:
            Separator used when materializing the path-list

        list_separator:
            Separator of the toolchain list variables (e.g., INCLUDE)

        convert_path_style:
            True if path entries are native-style and must be converted
            back to POSIX style when the profile is loaded
    """

    records: Dict[Category, List[EmissionRecord]] = field(default_factory=dict)
    path_entries: List[str] = field(default_factory=list)
    path_variable: str = "PATH"
    path_separator: str = ":"
    list_separator: str = ";"
    convert_path_style: bool = False

    def all_records(self) -> List[EmissionRecord]:
        """Every record, in emission (Category) order."""
        result = []
        for category in Category:
            result.extend(self.records.get(category, []))
        return result

    def get_record(self, name: str) -> Optional[EmissionRecord]:
        for record in self.all_records():
            if record.name == name:
                return record
        return None

    def category_of(self, name: str) -> Optional[Category]:
        for category in Category:
            for record in self.records.get(category, []):
                if record.name == name:
                    return category
        return None
