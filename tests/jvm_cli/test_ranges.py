"""Tests for semver-style version ranges."""

from __future__ import annotations

import pytest

from jvm_cli.resolution.ranges import InvalidRangeError, VersionRange, parse_version, satisfies


class TestParseVersion:
    def test_plain(self):
        assert str(parse_version("17.0.2")) == "17.0.2"

    def test_leading_v(self):
        assert str(parse_version("v21")) == "21"

    def test_build_metadata(self):
        assert parse_version("21.0.1+12").local == "12"

    def test_early_access(self):
        version = parse_version("22-ea")
        assert version is not None
        assert version.is_prerelease

    def test_not_a_version(self):
        assert parse_version("my custom jdk") is None


@pytest.mark.parametrize(
    "version,expression",
    [
        ("17.0.2", "17"),
        ("17.0.2", "17.0"),
        ("17.0.2", "17.x"),
        ("17.0.2", "17.0.*"),
        ("17.0.2", "17.0.2"),
        ("17.0.2", "=17.0.2"),
        ("17.0.2", "*"),
        ("17.0.2", ""),
        ("17.0.2", "^17"),
        ("17.9.0", "^17.0.1"),
        ("17.0.5", "~17.0.1"),
        ("21", ">=17"),
        ("18", ">17"),
        ("17.0.4", "<=17"),
        ("16.0.2", "<17"),
        ("17.0.4", ">11 <=17.0.4"),
        ("17.0.4", ">= 11 < 18"),
        ("14", "11 - 17"),
        ("17.0.9", "11 - 17"),
        ("21.0.1", "11 || ^21"),
        ("21.0.1+12", "21.0.1"),
        ("21-ea", "21"),
    ],
)
def test_satisfies(version, expression):
    assert satisfies(version, expression)


@pytest.mark.parametrize(
    "version,expression",
    [
        ("20", "17"),
        ("18.0.0", "^17"),
        ("17.1.0", "~17.0.1"),
        ("17.0.9", ">17"),
        ("18", "<=17"),
        ("17", "<17"),
        ("18.0.1", "11 - 17"),
        ("18-ea", "<18"),
        ("17", ">*"),
        ("17.0.1", "17.0.2"),
        ("my custom jdk", "*"),
    ],
)
def test_does_not_satisfy(version, expression):
    assert not satisfies(version, expression)


def test_invalid_range_raises():
    with pytest.raises(InvalidRangeError):
        VersionRange.parse(">=banana")


def test_invalid_range_is_not_satisfied():
    assert satisfies("17", "not a range") is False


def test_union_of_alternatives():
    version_range = VersionRange.parse("11 || 17")
    assert len(version_range.alternatives) == 2
    assert version_range.contains(parse_version("11.0.20"))
    assert not version_range.contains(parse_version("15"))
