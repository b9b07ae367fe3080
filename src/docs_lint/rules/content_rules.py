"""Content rules that read each document's text."""

import re
from dataclasses import dataclass
from pathlib import Path

from ..models import Issue
from ..patterns import matches_any_glob, matches_include
from ..scanner import read_document, strip_inline_code
from .base import RuleOptions

DEFAULT_LEGACY_PATTERN = r"\d{2}-[A-Z][A-Z0-9-]+\.md"
DEFAULT_VERSION_MARKERS = ("**バージョン**:", "**Version**:")
DEFAULT_RELATED_MARKERS = ("関連ドキュメント", "Related Documents")


@dataclass(frozen=True)
class BrokenLinksOptions(RuleOptions):
    exclude_paths: tuple[str, ...] = ()  # Globs of source files to skip


@dataclass(frozen=True)
class LegacyFileNamesOptions(RuleOptions):
    pattern: str = DEFAULT_LEGACY_PATTERN
    exclude: tuple[str, ...] = ()  # Substrings of file paths to skip


@dataclass(frozen=True)
class VersionInfoOptions(RuleOptions):
    patterns: tuple[str, ...] = DEFAULT_VERSION_MARKERS
    include: tuple[str, ...] = ()  # Empty means every file


@dataclass(frozen=True)
class RelatedDocumentsOptions(RuleOptions):
    patterns: tuple[str, ...] = DEFAULT_RELATED_MARKERS
    include: tuple[str, ...] = ()


@dataclass(frozen=True)
class TerminologyMapping:
    """A preferred term and the variants that should be replaced by it."""

    preferred: str
    variants: tuple[str, ...]
    exceptions: tuple[str, ...] = ()  # Longer words containing a variant that are fine
    word_boundary: bool = False


def check_broken_links(
    docs_dir: Path, files: list[str], options: BrokenLinksOptions | None = None
) -> list[Issue]:
    """Flag relative ``.md`` links whose target does not exist.

    Args:
        docs_dir: Documentation root
        files: Docs-relative Markdown files
        options: Source files to skip

    Returns:
        One issue per broken link
    """
    options = options or BrokenLinksOptions()
    issues = []

    for file in files:
        if matches_any_glob(file, options.exclude_paths):
            continue
        document = read_document(docs_dir, file)
        source_dir = (docs_dir / file).parent
        for link in document.relative_links:
            if not (source_dir / link.target).exists():
                issues.append(
                    Issue(
                        file_path=file,
                        line_number=link.line_number,
                        message=f'Broken link to "{link.target}"',
                        suggestion="Verify the file exists or update the link",
                    )
                )

    return issues


def check_legacy_file_names(
    docs_dir: Path, files: list[str], options: LegacyFileNamesOptions | None = None
) -> list[Issue]:
    """Flag references to old-style file names in prose."""
    options = options or LegacyFileNamesOptions()
    legacy_pattern = re.compile(options.pattern)
    issues = []

    for file in files:
        if any(excluded in file for excluded in options.exclude):
            continue
        document = read_document(docs_dir, file)
        for line_number, line in document.prose_lines():
            for match in legacy_pattern.finditer(strip_inline_code(line)):
                issues.append(
                    Issue(
                        file_path=file,
                        line_number=line_number,
                        message=f'Legacy file reference "{match.group(0)}"',
                        suggestion="Update to new file naming convention",
                    )
                )

    return issues


def _check_markers(
    docs_dir: Path, files: list[str], patterns: tuple[str, ...], include: tuple[str, ...]
) -> list[str]:
    """Return the targeted files that contain none of the marker strings."""
    targets = [f for f in files if matches_include(f, include)] if include else files
    missing = []
    for file in targets:
        content = (docs_dir / file).read_text(encoding="utf-8")
        if not any(marker in content for marker in patterns):
            missing.append(file)
    return missing


def check_version_info(
    docs_dir: Path, files: list[str], options: VersionInfoOptions | None = None
) -> list[Issue]:
    options = options or VersionInfoOptions()
    return [
        Issue(
            file_path=file,
            message="Missing version info",
            suggestion='Add "**Version**: X.X" near the top of the document',
        )
        for file in _check_markers(docs_dir, files, options.patterns, options.include)
    ]


def check_related_documents(
    docs_dir: Path, files: list[str], options: RelatedDocumentsOptions | None = None
) -> list[Issue]:
    options = options or RelatedDocumentsOptions()
    return [
        Issue(
            file_path=file,
            message="Missing related documents section",
            suggestion='Add a "Related Documents" section',
        )
        for file in _check_markers(docs_dir, files, options.patterns, options.include)
    ]


def check_heading_hierarchy(docs_dir: Path, files: list[str]) -> list[Issue]:
    """Flag headings that skip a level on the way down.

    The first heading of a document sets the baseline; going back up any
    number of levels is always allowed.
    """
    issues = []

    for file in files:
        document = read_document(docs_dir, file)
        last_level = 0
        for heading in document.headings:
            if last_level and heading.level > last_level + 1:
                issues.append(
                    Issue(
                        file_path=file,
                        line_number=heading.line_number,
                        message=f"Heading jumps from h{last_level} to h{heading.level}",
                        suggestion=f"Use h{last_level + 1} instead",
                    )
                )
            last_level = heading.level

    return issues


def check_code_block_language(docs_dir: Path, files: list[str]) -> list[Issue]:
    """Flag opening fences without a language whose block is not empty."""
    issues = []

    for file in files:
        document = read_document(docs_dir, file)
        for fence in document.fences:
            opening = document.lines[fence.start_line - 1]
            if opening.strip() != "```":
                continue
            if fence.start_line >= len(document.lines):
                continue
            if document.lines[fence.start_line].strip():
                issues.append(
                    Issue(
                        file_path=file,
                        line_number=fence.start_line,
                        message="Code block without language specifier",
                        suggestion="Add a language (e.g., ```python, ```bash)",
                    )
                )

    return issues


def _variant_pattern(mapping: TerminologyMapping, variant: str) -> re.Pattern[str]:
    escaped = re.escape(variant)
    if mapping.word_boundary:
        escaped = rf"\b{escaped}\b"
    return re.compile(escaped)


def check_terminology(
    docs_dir: Path, files: list[str], terminology: list[TerminologyMapping]
) -> list[Issue]:
    """Flag lines outside code that use a non-preferred term variant."""
    issues = []
    compiled = [
        (mapping, variant, _variant_pattern(mapping, variant))
        for mapping in terminology
        for variant in mapping.variants
    ]

    for file in files:
        document = read_document(docs_dir, file)
        for mapping, variant, pattern in compiled:
            for line_number, line in document.prose_lines():
                for exception in mapping.exceptions:
                    line = line.replace(exception, " " * len(exception))
                if pattern.search(line):
                    issues.append(
                        Issue(
                            file_path=file,
                            line_number=line_number,
                            message=f'"{variant}" should be "{mapping.preferred}"',
                            suggestion=f'Replace with "{mapping.preferred}"',
                        )
                    )

    return issues


def check_required_files(docs_dir: Path, required_files: list[str]) -> list[Issue]:
    return [
        Issue(
            file_path=file,
            message="Required file missing",
            suggestion=f"Create the file at {file}",
        )
        for file in required_files
        if not (docs_dir / file).exists()
    ]
