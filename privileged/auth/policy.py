"""
Privilege policy names.

A privilege requirement is encoded as a colon-delimited policy name:

    Privilege:<action>:<subject>
    Privilege:<action>:<subject>:<qualifier>

Formatting drops the qualifier segment only when the qualifier is None or "".
A whitespace qualifier is kept as is. Parsing never raises: anything that is
not a well-formed privilege policy name yields None.

Usage:
    format_policy_name("write", "Post", "title")   # "Privilege:write:Post:title"
    parse_policy_name("Privilege:read:User")        # PrivilegeRequirement("read", "User")
    parse_policy_name("Admin")                      # None
"""

from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

PRIVILEGE_POLICY_PREFIX = "Privilege:"


def format_policy_name(action: str, subject: str, qualifier: str | None = None) -> str:
    """
    Encode a requirement as a policy name.

    Raises:
        ValueError: If action or subject is empty or whitespace
    """
    _require("action", action)
    _require("subject", subject)

    if not qualifier:
        return f"{PRIVILEGE_POLICY_PREFIX}{action}:{subject}"
    return f"{PRIVILEGE_POLICY_PREFIX}{action}:{subject}:{qualifier}"


@dataclass(frozen=True)
class PrivilegeRequirement:
    """
    The privilege a route requires.

    Attributes:
        action: Action to check (e.g. "read")
        subject: Subject to check (e.g. "Post")
        qualifier: Optional qualifier (e.g. a field name)
    """
    action: str
    subject: str
    qualifier: str | None = None

    def __post_init__(self) -> None:
        _require("action", self.action)
        _require("subject", self.subject)

    @property
    def policy_name(self) -> str:
        return format_policy_name(self.action, self.subject, self.qualifier)


def parse_policy_name(policy_name: str | None) -> PrivilegeRequirement | None:
    """
    Decode a policy name into a requirement.

    Returns:
        PrivilegeRequirement, or None if the name is not a privilege policy
    """
    if not policy_name:
        return None

    if policy_name[:len(PRIVILEGE_POLICY_PREFIX)].lower() != PRIVILEGE_POLICY_PREFIX.lower():
        return None

    # Prefix colon plus one or two separators
    if policy_name.count(":") not in (2, 3):
        return None

    parts = policy_name.split(":")
    action = parts[1]
    subject = parts[2]

    if not action.strip() or not subject.strip():
        return None

    qualifier = parts[3] if len(parts) == 4 and parts[3] else None

    return PrivilegeRequirement(action, subject, qualifier)


class PrivilegePolicyProvider:
    """
    Resolves policy names into requirements, caching results.

    Negative results are cached too, so repeated lookups of non-privilege
    policies stay cheap.
    """

    def __init__(self):
        self._cache: dict[str, PrivilegeRequirement | None] = {}

    def get_requirement(self, policy_name: str | None) -> PrivilegeRequirement | None:
        """Get the requirement for a policy name, or None if unrecognized."""
        if not policy_name:
            return None

        if policy_name in self._cache:
            return self._cache[policy_name]

        requirement = parse_policy_name(policy_name)
        self._cache[policy_name] = requirement

        if requirement is None:
            logger.debug("Not a privilege policy", policy=policy_name)

        return requirement

    def clear_cache(self) -> None:
        """Forget all parsed policy names."""
        self._cache.clear()


def _require(name: str, value: str | None) -> None:
    if not value or not value.strip():
        raise ValueError(f"{name} cannot be empty or whitespace")
