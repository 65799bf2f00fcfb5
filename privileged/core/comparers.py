"""
String comparison strategies.

A context applies a single comparer to every string it compares: subjects,
actions, qualifiers, alias names and alias values. Comparison is defined by
normalizing both sides, so a comparer also yields exact index keys.

IGNORE_CASE lower-cases per code point. It does not fold "ß" to "ss", so
"straße" and "strasse" stay different.
"""

from dataclasses import dataclass
from typing import Callable, Iterable


def _identity(value: str) -> str:
    return value


def _lower(value: str) -> str:
    return value.lower()


@dataclass(frozen=True)
class StringComparer:
    """
    Case-sensitivity policy for privilege matching.

    Usage:
        StringComparer.IGNORE_CASE.equals("Read", "READ")  # True
        StringComparer.ORDINAL.equals("Read", "READ")      # False
    """
    name: str
    normalizer: Callable[[str], str]

    # Set after class creation
    IGNORE_CASE = None  # type: StringComparer
    ORDINAL = None  # type: StringComparer

    def normalize(self, value: str) -> str:
        return self.normalizer(value)

    def equals(self, left: str | None, right: str | None) -> bool:
        if left is None or right is None:
            return left is right
        return self.normalizer(left) == self.normalizer(right)

    def contains(self, values: Iterable[str], value: str) -> bool:
        key = self.normalizer(value)
        return any(self.normalizer(v) == key for v in values)

    def __repr__(self) -> str:
        return f"<StringComparer {self.name}>"


StringComparer.IGNORE_CASE = StringComparer("ignore_case", _lower)
StringComparer.ORDINAL = StringComparer("ordinal", _identity)


def get_comparer(case_sensitive: bool = False) -> StringComparer:
    """Pick a comparer from a case-sensitivity flag (as found in settings)."""
    return StringComparer.ORDINAL if case_sensitive else StringComparer.IGNORE_CASE
