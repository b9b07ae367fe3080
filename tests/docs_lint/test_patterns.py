"""Tests for glob matching and file discovery."""

import pytest

from docs_lint.patterns import discover_files, matches_glob, matches_include, select_files


@pytest.mark.parametrize(
    ("path", "pattern", "expected"),
    [
        ("README.md", "**/*.md", True),
        ("a/b/c.md", "**/*.md", True),
        ("a/b/c.txt", "**/*.md", False),
        ("REQUIREMENTS.md", "**/REQUIREMENTS.md", True),
        ("02-spec/01-requirements/AUTH.md", "**/01-requirements/**/*.md", True),
        ("01-requirements/AUTH.md", "**/01-requirements/**/*.md", True),
        ("02-spec/OTHER.md", "**/01-requirements/**/*.md", False),
        ("x/LOGIN-TESTS.md", "**/*-TESTS.md", True),
        ("_archive/OLD.md", "**/_*/**", True),
        ("docs/_draft.md", "**/_*.md", True),
        ("a/b.md", "*.md", False),
        ("ab.md", "a?.md", True),
    ],
)
def test_matches_glob(path, pattern, expected):
    assert matches_glob(path, pattern) is expected


def test_matches_include_substring_and_wildcard():
    assert matches_include("02-spec/API.md", ["02-spec"])
    assert matches_include("02-spec/API.md", ["spec/*.md"])
    assert not matches_include("03-guide/SETUP.md", ["02-spec", "*/API.md"])


def test_select_files_keeps_order_without_duplicates():
    files = ["a/TEST.md", "b/REQUIREMENTS.md", "c/TEST.md"]
    assert select_files(files, ["**/TEST.md", "c/*.md"]) == ["a/TEST.md", "c/TEST.md"]


def test_discover_files_applies_include_and_exclude(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "_archive").mkdir()
    (tmp_path / ".hidden").mkdir()
    for relative in ["b.md", "a.md", "sub/c.md", "_archive/old.md", "_draft.md", ".hidden/x.md", "notes.txt"]:
        (tmp_path / relative).write_text("x", encoding="utf-8")

    files = discover_files(tmp_path, ["**/*.md", "*.md"], ["**/_*/**", "**/_*.md"])

    assert files == ["a.md", "b.md", "sub/c.md"]


def test_discover_files_empty_tree(tmp_path):
    assert discover_files(tmp_path, ["**/*.md"], []) == []
