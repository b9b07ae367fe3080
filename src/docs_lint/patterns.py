"""Glob and include-pattern matching over docs-relative paths."""

import re
from functools import lru_cache
from pathlib import Path


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a glob into an anchored regex over posix relative paths.

    ``**/`` matches zero or more directories, ``**`` any run of characters,
    ``*`` anything except ``/`` and ``?`` a single non-separator character.

    Args:
        pattern: Glob such as ``**/01-requirements/**/*.md``

    Returns:
        Compiled regex to be used with ``fullmatch``
    """
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts))


def matches_glob(path: str, pattern: str) -> bool:
    """Check if a relative path matches a glob."""
    return glob_to_regex(pattern).fullmatch(path) is not None


def matches_any_glob(path: str, patterns: list[str] | tuple[str, ...]) -> bool:
    return any(matches_glob(path, p) for p in patterns)


def matches_include(path: str, patterns: list[str] | tuple[str, ...]) -> bool:
    """Loose include matching used by marker rules.

    A pattern containing ``*`` is a wildcard searched anywhere in the path;
    any other pattern is a plain substring.
    """
    for pattern in patterns:
        if "*" in pattern:
            regex = ".*".join(re.escape(chunk) for chunk in pattern.split("*"))
            if re.search(regex, path):
                return True
        elif pattern in path:
            return True
    return False


def select_files(files: list[str], patterns: list[str] | tuple[str, ...]) -> list[str]:
    """Return files matching any glob, in the order of ``files``, without duplicates."""
    return [f for f in files if matches_any_glob(f, patterns)]


def discover_files(
    docs_dir: Path,
    include: list[str] | tuple[str, ...],
    exclude: list[str] | tuple[str, ...],
) -> list[str]:
    """Expand include globs under docs_dir minus exclude globs.

    Hidden files and folders are never matched.

    Returns:
        Sorted, deduplicated posix paths relative to docs_dir
    """
    found: set[str] = set()
    for path in docs_dir.rglob("*"):
        if not path.is_file():
            continue
        relative = path.relative_to(docs_dir).as_posix()
        if any(part.startswith(".") for part in relative.split("/")):
            continue
        if not matches_any_glob(relative, include):
            continue
        if matches_any_glob(relative, exclude):
            continue
        found.add(relative)
    return sorted(found)
