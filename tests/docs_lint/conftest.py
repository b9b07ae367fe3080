"""Shared fixtures for docs_lint tests."""

from pathlib import Path

import pytest


@pytest.fixture
def make_docs(tmp_path):
    """Create a docs tree from a mapping of relative path to content.

    Paths ending with "/" create empty folders.
    """

    def _make(files: dict[str, str]) -> Path:
        docs_dir = tmp_path / "docs"
        docs_dir.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = docs_dir / relative
            if relative.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return docs_dir

    return _make
