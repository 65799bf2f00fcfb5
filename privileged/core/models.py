"""
Privilege models - Rules, aliases and reserved tokens.

These are plain immutable value records. All matching behavior lives in
PrivilegeContext; nothing here knows about comparers or precedence.

Usage:
    rule = PrivilegeRule(action="read", subject="Post")
    field_rule = PrivilegeRule(action="update", subject="Post", qualifiers=("title",))
    deny_rule = PrivilegeRule(action="delete", subject="Post", denied=True)

    crud = PrivilegeAlias(
        alias="crud",
        values=("create", "read", "update", "delete"),
        scope=PrivilegeMatch.ACTION,
    )
"""

from dataclasses import dataclass, field
from enum import Enum


class PrivilegeSubjects:
    """Reserved subject tokens."""

    # Matches any subject
    ALL = "*"


class PrivilegeActions:
    """Reserved action tokens."""

    # Matches any action
    ALL = "all"


class PrivilegeMatch(str, Enum):
    """Which part of a rule an alias expands."""
    SUBJECT = "subject"
    ACTION = "action"
    QUALIFIER = "qualifier"


@dataclass(frozen=True)
class PrivilegeRule:
    """
    A single allow or deny declaration.

    Attributes:
        action: Action name, alias name or PrivilegeActions.ALL
        subject: Subject name, alias name or PrivilegeSubjects.ALL
        qualifiers: Qualifiers this rule is restricted to (empty = every qualifier)
        denied: True for a forbid rule
    """
    action: str
    subject: str
    qualifiers: tuple[str, ...] = ()
    denied: bool = False

    def __post_init__(self) -> None:
        # Ordered set: keep first occurrence, drop duplicates
        object.__setattr__(self, "qualifiers", tuple(dict.fromkeys(self.qualifiers or ())))


@dataclass(frozen=True)
class PrivilegeAlias:
    """
    A named group of values usable in place of a literal subject, action or qualifier.

    Attributes:
        alias: The name used in rules (e.g. "manage")
        values: The concrete values the name expands to (e.g. ("create", "update"))
        scope: Which rule part the alias applies to (default: ACTION)
    """
    alias: str
    values: tuple[str, ...]
    scope: PrivilegeMatch = PrivilegeMatch.ACTION

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class PrivilegeModel:
    """Rules and aliases bundled together, e.g. as loaded from JSON."""
    rules: tuple[PrivilegeRule, ...] = field(default_factory=tuple)
    aliases: tuple[PrivilegeAlias, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "aliases", tuple(self.aliases))
