"""
Tests for string comparers.
"""

from privileged import PrivilegeBuilder, StringComparer, get_comparer


def test_ignore_case_equals():
    comparer = StringComparer.IGNORE_CASE

    assert comparer.equals("Read", "READ") is True
    assert comparer.equals("read", "write") is False
    assert comparer.equals(None, None) is True
    assert comparer.equals("read", None) is False


def test_ordinal_equals():
    comparer = StringComparer.ORDINAL

    assert comparer.equals("Read", "Read") is True
    assert comparer.equals("Read", "READ") is False


def test_contains():
    assert StringComparer.IGNORE_CASE.contains(["Title", "Body"], "title") is True
    assert StringComparer.ORDINAL.contains(["Title", "Body"], "title") is False
    assert StringComparer.IGNORE_CASE.contains([], "title") is False


def test_ignore_case_does_not_fold_sharp_s():
    """Test "ß" is lower-cased, not expanded to "ss"."""
    assert StringComparer.IGNORE_CASE.equals("straße", "strasse") is False
    assert StringComparer.IGNORE_CASE.equals("STRASSE", "strasse") is True

    context = PrivilegeBuilder().allow("read", "Straße").build()

    assert context.allowed("read", "straße") is True
    assert context.allowed("read", "strasse") is False


def test_get_comparer():
    assert get_comparer() is StringComparer.IGNORE_CASE
    assert get_comparer(case_sensitive=True) is StringComparer.ORDINAL
