"""
Privilege builder - Fluent accumulator for rules and aliases.

Used once at setup time, then discarded. Not safe for concurrent mutation;
the contexts it builds are.

Usage:
    context = (
        PrivilegeBuilder()
        .alias("crud", ["create", "read", "update", "delete"])
        .allow("crud", "Post")
        .allow(["read", "update"], ["Comment", "Tag"])   # one rule per pair
        .allow("update", "User", ["profile", "settings"])
        .forbid("delete", "Post")
        .build()
    )
"""

from typing import Iterable

import structlog

from .comparers import StringComparer
from .context import PrivilegeContext
from .models import PrivilegeAlias, PrivilegeMatch, PrivilegeRule

logger = structlog.get_logger()

Names = str | Iterable[str]


class PrivilegeBuilder:
    """
    Builds an immutable PrivilegeContext.

    Rules keep the order in which they are declared; later rules override
    earlier ones when both match a request.
    """

    def __init__(self, comparer: StringComparer | None = None):
        self._comparer = comparer
        self._rules: list[PrivilegeRule] = []
        self._aliases: list[PrivilegeAlias] = []

    def allow(
        self,
        action: Names,
        subject: Names,
        qualifiers: Names | None = None,
    ) -> "PrivilegeBuilder":
        """
        Add allow rules.

        Args:
            action: Action, or several actions
            subject: Subject, or several subjects
            qualifiers: Optional qualifiers restricting the rule(s)

        Raises:
            ValueError: If an action or subject is empty or whitespace
        """
        return self._add(action, subject, qualifiers, denied=False)

    def forbid(
        self,
        action: Names,
        subject: Names,
        qualifiers: Names | None = None,
    ) -> "PrivilegeBuilder":
        """
        Add forbid rules. Same arguments as allow().

        Raises:
            ValueError: If an action or subject is empty or whitespace
        """
        return self._add(action, subject, qualifiers, denied=True)

    def alias(
        self,
        name: str,
        values: Iterable[str],
        scope: PrivilegeMatch = PrivilegeMatch.ACTION,
    ) -> "PrivilegeBuilder":
        """
        Add an alias expanding name to values within scope.

        Raises:
            ValueError: If name is empty or values is empty
        """
        if not name or not name.strip():
            raise ValueError("alias name cannot be empty or whitespace")

        values = _as_tuple(values)
        if not values:
            raise ValueError(f"alias '{name}' must have at least one value")

        self._aliases.append(PrivilegeAlias(alias=name, values=values, scope=PrivilegeMatch(scope)))
        return self

    def build(self) -> PrivilegeContext:
        """Snapshot the accumulated rules and aliases into a new context."""
        context = PrivilegeContext(tuple(self._rules), tuple(self._aliases), self._comparer)
        logger.debug(
            "Privilege context built",
            rules=len(self._rules),
            aliases=len(self._aliases),
        )
        return context

    def _add(
        self,
        action: Names,
        subject: Names,
        qualifiers: Names | None,
        denied: bool,
    ) -> "PrivilegeBuilder":
        actions = _as_tuple(action)
        subjects = _as_tuple(subject)
        qualifier_tuple = _as_tuple(qualifiers) if qualifiers is not None else ()

        # Validate everything first so a bad entry adds nothing
        for value in actions:
            _require("action", value)
        for value in subjects:
            _require("subject", value)
        if not actions:
            raise ValueError("action cannot be empty or whitespace")
        if not subjects:
            raise ValueError("subject cannot be empty or whitespace")

        for act in actions:
            for sub in subjects:
                self._rules.append(
                    PrivilegeRule(action=act, subject=sub, qualifiers=qualifier_tuple, denied=denied)
                )

        return self


def _as_tuple(values: Names | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def _require(name: str, value: str | None) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} cannot be empty or whitespace")
