"""Translation folder structure and sync checks.

Expected layout::

    docs/
    ├── 01-plan/PROPOSAL.md           # Source (main location)
    └── translations/
        ├── ja/01-plan/PROPOSAL.md    # Source language copy
        └── en/01-plan/PROPOSAL.md    # Translation
"""

import re
from dataclasses import dataclass
from pathlib import Path

from ..models import Issue
from ..scanner import scan_text

LANGUAGE_FOLDER_PATTERN = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")
VERSION_PATTERN = re.compile(r"\*\*(?:バージョン|Version)\*\*:\s*(\d+(?:\.\d+)*)", re.IGNORECASE)


@dataclass(frozen=True)
class I18nConfig:
    source_language: str
    target_languages: tuple[str, ...] = ()
    translations_folder: str = "translations"
    check_sync: bool = False


def extract_version(content: str) -> str | None:
    """Extract the version number from a version marker, if any."""
    match = VERSION_PATTERN.search(content)
    return match.group(1) if match else None


def count_headings(content: str) -> tuple[int, int]:
    """Count H1 and H2 headings outside code fences."""
    document = scan_text(content)
    return document.count_headings(1), document.count_headings(2)


def _markdown_files(root: Path) -> list[str]:
    if not root.exists():
        return []
    return sorted(
        path.relative_to(root).as_posix()
        for path in root.rglob("*.md")
        if path.is_file()
        and not any(part.startswith(".") for part in path.relative_to(root).parts)
    )


def check_i18n_structure(docs_dir: Path, i18n: I18nConfig | None) -> list[Issue]:
    """Validate translation folders against the source language.

    Args:
        docs_dir: Documentation root
        i18n: Language configuration; without it the check is a no-op

    Returns:
        Issues for invalid folder names, a missing source copy, stale
        source copies and, when sync checking is on, missing, orphaned
        or diverging translations
    """
    issues: list[Issue] = []
    if i18n is None:
        return issues

    folder = i18n.translations_folder
    translations_dir = docs_dir / folder
    if not translations_dir.exists():
        return issues

    lang_folders = sorted(
        entry.name
        for entry in translations_dir.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    )

    for lang in lang_folders:
        if not LANGUAGE_FOLDER_PATTERN.match(lang):
            issues.append(
                Issue(
                    file_path=f"{folder}/{lang}",
                    message=f"Invalid language folder name: {lang}",
                    suggestion="Use an ISO language code (e.g., en, ja, vi, en-US)",
                )
            )

    source = i18n.source_language
    if source not in lang_folders:
        issues.append(
            Issue(
                file_path=folder,
                message=f"Source language folder missing: {source}",
                suggestion=f"Create {folder}/{source}/ and copy source files",
            )
        )
        return issues

    source_dir = translations_dir / source
    source_files = _markdown_files(source_dir)
    present_targets = [lang for lang in i18n.target_languages if lang in lang_folders]

    if i18n.check_sync:
        for lang in i18n.target_languages:
            if lang not in lang_folders:
                issues.append(
                    Issue(
                        file_path=folder,
                        message=f"Target language folder missing: {lang}",
                        suggestion=f"Create {folder}/{lang}/",
                    )
                )
                continue

            target_files = set(_markdown_files(translations_dir / lang))
            for file in source_files:
                if file not in target_files:
                    issues.append(
                        Issue(
                            file_path=f"{folder}/{source}/{file}",
                            message=f"Missing {lang} translation",
                            suggestion=f"Create {folder}/{lang}/{file}",
                        )
                    )
            for file in sorted(target_files - set(source_files)):
                issues.append(
                    Issue(
                        file_path=f"{folder}/{lang}/{file}",
                        message="Translation without source file",
                        suggestion=f"Add source file at {folder}/{source}/{file}",
                    )
                )

    # Source-language copy against the main docs (size is a cheap proxy)
    for file in source_files:
        main_file = docs_dir / file
        if main_file.exists() and main_file.stat().st_size != (source_dir / file).stat().st_size:
            issues.append(
                Issue(
                    file_path=f"{folder}/{source}/{file}",
                    message="Source language copy may be out of sync with main docs",
                    suggestion=f"Update from {file}",
                )
            )

    if i18n.check_sync:
        for lang in present_targets:
            target_dir = translations_dir / lang
            for file in source_files:
                target_path = target_dir / file
                if not target_path.exists():
                    continue
                issues.extend(
                    _compare_translation(source_dir / file, target_path, f"{folder}/{lang}/{file}")
                )

    return issues


def _compare_translation(source_path: Path, target_path: Path, label: str) -> list[Issue]:
    issues = []
    source_content = source_path.read_text(encoding="utf-8")
    target_content = target_path.read_text(encoding="utf-8")

    source_version = extract_version(source_content)
    target_version = extract_version(target_content)
    if source_version and target_version and source_version != target_version:
        issues.append(
            Issue(
                file_path=label,
                message=f"Version mismatch: source={source_version}, translation={target_version}",
                suggestion=f"Update translation to match source version {source_version}",
            )
        )

    source_h1, source_h2 = count_headings(source_content)
    target_h1, target_h2 = count_headings(target_content)
    if (source_h1, source_h2) != (target_h1, target_h2):
        issues.append(
            Issue(
                file_path=label,
                message=(
                    f"Structure mismatch: source has {source_h1}xH1/{source_h2}xH2, "
                    f"translation has {target_h1}xH1/{target_h2}xH2"
                ),
                suggestion="Review translation structure to match source",
            )
        )
    return issues
