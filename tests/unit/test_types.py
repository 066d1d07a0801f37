"""Tests for shared value types."""

from gitguard.types import GuardResult, StagedChange, StagedSet, VersionTriple, is_null_oid


def test_null_oid_detection():
    assert is_null_oid("0" * 40)
    assert is_null_oid("0" * 64)
    assert not is_null_oid("0" * 39 + "1")
    assert not is_null_oid("")


def test_staged_set_keeps_copies_and_type_changes():
    staged = StagedSet.from_changes(
        [
            StagedChange(path="b.json", status="copied", old_path="a.json"),
            StagedChange(path="link", status="type_changed"),
            StagedChange(path="gone", status="deleted"),
        ],
        baseline="HEAD",
    )
    assert staged.files == ("b.json", "link")
    assert staged.renamed == ()


def test_version_parse_ignores_prerelease():
    assert VersionTriple.parse("v1.2.3-rc.1+build") == VersionTriple(1, 2, 3)
    assert VersionTriple.parse("1.2") is None


def test_guard_result_accumulates_in_order():
    result = GuardResult(hook="pre-commit")
    assert result.passed and result.exit_code == 0
    result.add("one")
    result.extend(["two", "three"])
    assert result.failures == ["one", "two", "three"]
    assert not result.passed and result.exit_code == 1
