"""
Privilege context - The matching engine.

A PrivilegeContext is an immutable snapshot of rules and aliases. It answers
"may this action be performed on this subject (and qualifier)?" and is safe
to share between any number of concurrent readers.

Evaluation:
1. Collect every rule matching (action, subject, qualifier), in declaration order
2. The last matching rule decides: allow rule -> True, forbid rule -> False
3. No matching rule -> False

Matching per rule:
- Subject: equal, the subject wildcard, or a subject alias containing the subject
- Action: equal, the action wildcard, or an action alias containing the action
- Qualifier: no requested qualifier or an unrestricted rule always matches;
  otherwise the rule's qualifiers (or a qualifier alias named by one of them)
  must contain the requested qualifier

Usage:
    context = (
        PrivilegeBuilder()
        .alias("manage", ["create", "update", "delete"], PrivilegeMatch.ACTION)
        .allow("manage", "Project")
        .allow("read", "User")
        .allow("update", "User", ["profile", "settings"])
        .forbid("delete", "User")
        .build()
    )

    context.allowed("create", "Project")          # True
    context.allowed("update", "User", "profile")  # True
    context.allowed("update", "User", "password") # False
    context.allowed("delete", "User")             # False
"""

from dataclasses import dataclass
from typing import Iterable

from .comparers import StringComparer
from .models import (
    PrivilegeActions,
    PrivilegeAlias,
    PrivilegeMatch,
    PrivilegeModel,
    PrivilegeRule,
    PrivilegeSubjects,
)


@dataclass(frozen=True)
class _IndexedRule:
    """A rule with its comparer-normalized keys, computed once."""
    position: int
    rule: PrivilegeRule
    action_key: str
    subject_key: str
    qualifier_keys: frozenset[str]


class PrivilegeContext:
    """
    Immutable privilege evaluation context.

    Args:
        rules: Rules in declaration order (order is precedence)
        aliases: Optional aliases expanding subject/action/qualifier names
        comparer: String comparer (default: StringComparer.IGNORE_CASE)
    """

    __slots__ = (
        "_rules",
        "_aliases",
        "_comparer",
        "_indexed",
        "_by_subject",
        "_alias_values",
        "_subject_aliases",
        "_subject_wildcard",
        "_action_wildcard",
    )

    def __init__(
        self,
        rules: Iterable[PrivilegeRule],
        aliases: Iterable[PrivilegeAlias] | None = None,
        comparer: StringComparer | None = None,
    ):
        if rules is None:
            raise ValueError("rules cannot be None")

        self._rules: tuple[PrivilegeRule, ...] = tuple(rules)
        self._aliases: tuple[PrivilegeAlias, ...] = tuple(aliases or ())
        self._comparer = comparer or StringComparer.IGNORE_CASE

        normalize = self._comparer.normalize
        self._subject_wildcard = normalize(PrivilegeSubjects.ALL)
        self._action_wildcard = normalize(PrivilegeActions.ALL)

        # (scope, alias name) -> values; aliases sharing a name are merged
        alias_values: dict[tuple[PrivilegeMatch, str], set[str]] = {}
        # subject value -> alias names that expand to it
        subject_aliases: dict[str, set[str]] = {}
        for alias in self._aliases:
            name_key = normalize(alias.alias)
            value_keys = {normalize(v) for v in alias.values}
            alias_values.setdefault((alias.scope, name_key), set()).update(value_keys)
            if alias.scope == PrivilegeMatch.SUBJECT:
                for value_key in value_keys:
                    subject_aliases.setdefault(value_key, set()).add(name_key)

        self._alias_values = {key: frozenset(values) for key, values in alias_values.items()}
        self._subject_aliases = {key: frozenset(names) for key, names in subject_aliases.items()}

        indexed = []
        by_subject: dict[str, list[_IndexedRule]] = {}
        for position, rule in enumerate(self._rules):
            entry = _IndexedRule(
                position=position,
                rule=rule,
                action_key=normalize(rule.action),
                subject_key=normalize(rule.subject),
                qualifier_keys=frozenset(normalize(q) for q in rule.qualifiers),
            )
            indexed.append(entry)
            by_subject.setdefault(entry.subject_key, []).append(entry)

        self._indexed = tuple(indexed)
        self._by_subject = {key: tuple(entries) for key, entries in by_subject.items()}

    # ============================================================
    # CONSTRUCTORS
    # ============================================================

    @classmethod
    def from_model(
        cls,
        model: PrivilegeModel,
        comparer: StringComparer | None = None,
    ) -> "PrivilegeContext":
        """Create a context from a PrivilegeModel."""
        return cls(model.rules, model.aliases, comparer)

    @classmethod
    def empty(cls, comparer: StringComparer | None = None) -> "PrivilegeContext":
        """A context without rules. Denies everything."""
        return cls((), (), comparer)

    # ============================================================
    # PROPERTIES
    # ============================================================

    @property
    def rules(self) -> tuple[PrivilegeRule, ...]:
        return self._rules

    @property
    def aliases(self) -> tuple[PrivilegeAlias, ...]:
        return self._aliases

    @property
    def comparer(self) -> StringComparer:
        return self._comparer

    @property
    def model(self) -> PrivilegeModel:
        return PrivilegeModel(rules=self._rules, aliases=self._aliases)

    # ============================================================
    # QUERIES
    # ============================================================

    def allowed(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
    ) -> bool:
        """
        Check if action is allowed on subject (and optional qualifier).

        The last matching rule in declaration order decides. Returns False
        when nothing matches or when action/subject is missing.
        """
        if not action or not subject:
            return False

        state = False
        for rule in self.match_rules(action, subject, qualifier):
            state = not rule.denied

        return state

    def forbidden(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
    ) -> bool:
        """Negation of allowed()."""
        return not self.allowed(action, subject, qualifier)

    def match_rules(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
    ) -> list[PrivilegeRule]:
        """Get every rule matching the request, in declaration order."""
        if not action or not subject:
            return []

        normalize = self._comparer.normalize
        action_key = normalize(action)
        subject_key = normalize(subject)
        qualifier_key = normalize(qualifier) if qualifier else None

        return [
            entry.rule
            for entry in self._candidates(subject_key)
            if self._action_matches(entry, action_key)
            and self._qualifier_matches(entry, qualifier_key)
        ]

    # ============================================================
    # BULK QUERIES
    # ============================================================

    def allowed_any(self, action: str, *subjects: str) -> bool:
        """True if action is allowed on at least one subject."""
        _require_action(action)
        return any(self.allowed(action, subject) for subject in subjects)

    def allowed_all(self, action: str, *subjects: str) -> bool:
        """True if action is allowed on every subject (True when none given)."""
        _require_action(action)
        return all(self.allowed(action, subject) for subject in subjects)

    def allowed_none(self, action: str, *subjects: str) -> bool:
        """True if action is allowed on no subject (True when none given)."""
        _require_action(action)
        return not any(self.allowed(action, subject) for subject in subjects)

    # ============================================================
    # MATCHING
    # ============================================================

    def _candidates(self, subject_key: str) -> Iterable[_IndexedRule]:
        """Rules whose subject matches, restored to declaration order."""
        buckets = [self._by_subject.get(subject_key, ())]
        if subject_key != self._subject_wildcard:
            buckets.append(self._by_subject.get(self._subject_wildcard, ()))
        for alias_name in self._subject_aliases.get(subject_key, ()):
            if alias_name not in (subject_key, self._subject_wildcard):
                buckets.append(self._by_subject.get(alias_name, ()))

        non_empty = [bucket for bucket in buckets if bucket]
        if len(non_empty) <= 1:
            return non_empty[0] if non_empty else ()

        return sorted(
            {entry.position: entry for bucket in non_empty for entry in bucket}.values(),
            key=lambda entry: entry.position,
        )

    def _action_matches(self, entry: _IndexedRule, action_key: str) -> bool:
        return (
            entry.action_key == action_key
            or entry.action_key == self._action_wildcard
            or action_key in self._alias_values.get((PrivilegeMatch.ACTION, entry.action_key), ())
        )

    def _qualifier_matches(self, entry: _IndexedRule, qualifier_key: str | None) -> bool:
        # Unrestricted rule, or caller did not ask about a qualifier
        if qualifier_key is None or not entry.qualifier_keys:
            return True

        if qualifier_key in entry.qualifier_keys:
            return True

        return any(
            qualifier_key in self._alias_values.get((PrivilegeMatch.QUALIFIER, name), ())
            for name in entry.qualifier_keys
        )

    def __repr__(self) -> str:
        return (
            f"<PrivilegeContext rules={len(self._rules)} "
            f"aliases={len(self._aliases)} comparer={self._comparer.name}>"
        )


def _require_action(action: str) -> None:
    if not action or not action.strip():
        raise ValueError("action cannot be empty or whitespace")
