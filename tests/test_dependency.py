"""Tests for the major-update check and the dependency record text."""

import dataclasses

import pytest

from models.dependency import Dependency, OutdatedEntry, is_major_update


@pytest.mark.parametrize(
    ("wanted", "latest", "expected"),
    [
        ("1.2.0", "2.0.0", True),
        ("1.2.0", "1.5.0", False),
        ("1.2.0", "1.2.0", False),
        ("0.9.1", "0.10.0", False),
        ("9.0.0", "10.0.0", True),
        ("1", "1", False),
        ("1", "2", True),
        ("", "", False),
        ("", "1.0.0", True),
        ("beta.1", "beta.2", False),
        ("alpha.1", "beta.1", True),
        ("01.0.0", "1.0.0", True),
    ],
)
def test_is_major_update_compares_leading_segment_as_text(wanted, latest, expected):
    assert is_major_update(wanted, latest) is expected


def test_major_update_gets_warning_marker():
    dep = Dependency.from_entry(OutdatedEntry("pkg-a", "1.0.0", "1.2.0", "2.0.0"))

    assert dep.is_major_update is True
    assert dep.label == "⚠️ pkg-a"
    assert dep.description.endswith("⚠️ Major update!")
    assert dep.tooltip.splitlines()[-1] == "⚠️ Major update available"


def test_minor_update_has_plain_label():
    dep = Dependency.from_entry(OutdatedEntry("pkg-b", "1.0.0", "1.2.0", "1.5.0"))

    assert dep.is_major_update is False
    assert dep.label == "pkg-b"
    assert "⚠️" not in dep.description
    assert dep.description == "Installed: 1.0.0 → Wanted: 1.2.0, Latest: 1.5.0"
    assert dep.tooltip == (
        "Installed: 1.0.0\n"
        "Wanted (package.json): 1.2.0\n"
        "Latest (npm registry): 1.5.0"
    )


def test_major_flag_ignores_current_version():
    # Only wanted vs latest counts, even when current is a major behind.
    dep = Dependency.from_entry(OutdatedEntry("pkg-c", "1.0.0", "2.1.0", "2.3.0"))
    assert dep.is_major_update is False


def test_dependency_is_immutable():
    dep = Dependency("pkg", "1.0.0", "1.0.1", "1.0.2")
    with pytest.raises(dataclasses.FrozenInstanceError):
        dep.name = "other"


def test_direct_construction_derives_major_flag():
    major = Dependency("pkg-a", "1.0.0", "1.2.0", "2.0.0")
    minor = Dependency("pkg-b", "1.0.0", "1.2.0", "1.5.0")

    assert major.is_major_update is True
    assert major.label == "⚠️ pkg-a"
    assert minor.is_major_update is False
    assert minor.label == "pkg-b"


def test_major_flag_cannot_be_passed_in():
    with pytest.raises(TypeError):
        Dependency("pkg-b", "1.0.0", "1.2.0", "1.5.0", is_major_update=True)
