"""Structure rules that inspect the directory tree and file names."""

import re
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from common.constants import DOCS_ROOT_LABEL, SPECIAL_FOLDERS

from ..models import FolderDefinition, Issue
from ..scanner import read_document
from .base import RuleOptions

NUMBERED_FOLDER_PATTERN = re.compile(r"^(\d{2})-(.+)$")
UPPER_CASE_FILE_PATTERN = re.compile(r"^[A-Z][A-Z0-9-]*\.md$")

DEFAULT_FILE_PATTERNS = (
    r"^[A-Z][A-Z0-9-]*\.md$",  # UPPER-CASE.md
    r"^README\.md$",
    r"^CHANGELOG\.md$",
    r"^[a-z][a-z0-9-]*\.md$",  # lower-case.md
)

STANDARD_FOLDERS: tuple[FolderDefinition, ...] = (
    FolderDefinition(
        "01-plan",
        required=True,
        description="Planning and proposals",
        files=("PROPOSAL.md",),
        optional_files=("MVP.md", "ROADMAP.md"),
    ),
    FolderDefinition("02-spec", required=True, description="Specifications"),
    FolderDefinition(
        "02-spec/01-requirements",
        required=True,
        description="Requirements",
        files=("REQUIREMENTS.md",),
    ),
    FolderDefinition(
        "02-spec/02-design",
        required=True,
        description="Design",
        files=("ARCHITECTURE.md",),
        optional_files=("CLASS.md", "ERROR-HANDLING.md", "API.md", "DATABASE.md", "SCREEN.md", "UML.md"),
    ),
    FolderDefinition(
        "02-spec/03-infrastructure",
        required=False,
        description="Infrastructure",
        optional_files=("INFRASTRUCTURE.md", "DEPLOYMENT.md", "SECURITY.md"),
    ),
    FolderDefinition(
        "02-spec/04-testing",
        required=True,
        description="Test specifications",
        files=("TEST-CASES.md",),
        optional_files=("TEST.md", "E2E.md"),
    ),
    FolderDefinition(
        "03-guide",
        required=True,
        description="Guides and operations manuals",
        optional_files=("OPERATION-GUIDE.md", "DEPLOYMENT-GUIDE.md"),
    ),
    FolderDefinition(
        "04-development",
        required=True,
        description="Development standards",
        files=("SETUP.md",),
        optional_files=("CODING-STANDARDS.md", "TESTING.md", "GIT-WORKFLOW.md", "CI-CD.md"),
    ),
    FolderDefinition("05-business", required=False, description="Business strategy"),
    FolderDefinition("06-reference", required=False, description="Research and references"),
)


@dataclass(frozen=True)
class FolderNumberingOptions(RuleOptions):
    strict_paths: tuple[str, ...] = ("", "02-spec")  # "" is the docs root
    check_sequence: bool = True


@dataclass(frozen=True)
class FileNamingOptions(RuleOptions):
    upper_case: bool = False
    allowed_patterns: tuple[str, ...] = ()  # Empty means DEFAULT_FILE_PATTERNS


@dataclass(frozen=True)
class FileConflict:
    """File names that serve the same role when placed in one folder."""

    files: tuple[str, ...]
    preferred: str
    message: str


DEFAULT_CONFLICTS = (
    FileConflict(
        files=("UI.md", "SCREEN.md"),
        preferred="SCREEN.md",
        message="UI.md and SCREEN.md both exist; merge them into SCREEN.md",
    ),
)


@dataclass(frozen=True)
class StandardFileNamesOptions(RuleOptions):
    warn_detail_files: bool = True
    warn_conflicts: bool = True
    conflicts: tuple[FileConflict, ...] = DEFAULT_CONFLICTS
    detail_patterns: tuple[str, ...] = ("-DETAIL.md", "-DETAILS.md")

    @classmethod
    def from_dict(cls, raw: dict[str, Any]):
        raw = dict(raw)
        if "conflicts" in raw:
            raw["conflicts"] = tuple(
                FileConflict(
                    files=tuple(item["files"]),
                    preferred=item["preferred"],
                    message=item.get("message", ""),
                )
                for item in raw["conflicts"]
            )
        return super().from_dict(raw)


def _child_folders(directory: Path) -> list[str]:
    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    )


def check_folder_structure(
    docs_dir: Path,
    folders: tuple[FolderDefinition, ...] | list[FolderDefinition] = (),
    check_unknown: bool = True,
) -> list[Issue]:
    """Validate folders and their required files against a layout.

    Args:
        docs_dir: Documentation root
        folders: Expected layout; empty means STANDARD_FOLDERS
        check_unknown: Also flag top-level folders the layout does not know

    Returns:
        Issues for missing required folders, missing expected files and
        unknown top-level folders
    """
    folders = tuple(folders) or STANDARD_FOLDERS
    issues = []

    for folder in folders:
        folder_path = docs_dir / folder.path
        if not folder_path.is_dir():
            if folder.required:
                issues.append(
                    Issue(
                        file_path=folder.path,
                        message=f"Required folder missing: {folder.path}",
                        suggestion=(
                            f"Create folder for: {folder.description}"
                            if folder.description
                            else "Create the folder"
                        ),
                    )
                )
            continue

        for name in folder.files:
            if not (folder_path / name).exists():
                issues.append(
                    Issue(
                        file_path=f"{folder.path}/{name}",
                        message="Expected file missing",
                        suggestion=f"Create {name} in {folder.path}",
                    )
                )

    if check_unknown:
        known = set()
        for folder in folders:
            parts = PurePosixPath(folder.path).parts
            if parts:  # "" and "." name the docs root
                known.add(parts[0])
        for name in _child_folders(docs_dir):
            if name in known or name in SPECIAL_FOLDERS or name.startswith("_"):
                continue
            issues.append(
                Issue(
                    file_path=name,
                    message=f"Unknown top-level folder: {name}",
                    suggestion="Move its contents into a standard folder or rename it",
                )
            )

    return issues


def check_standard_folder_structure(docs_dir: Path) -> list[Issue]:
    return check_folder_structure(docs_dir, STANDARD_FOLDERS)


def check_folder_numbering(
    docs_dir: Path, options: FolderNumberingOptions | None = None
) -> list[Issue]:
    """Check ``NN-name`` numbering under each strict path."""
    options = options or FolderNumberingOptions()
    issues = []

    for strict_path in options.strict_paths:
        target_dir = docs_dir / strict_path if strict_path else docs_dir
        if not target_dir.is_dir():
            continue
        issues.extend(_check_numbering_at(target_dir, strict_path, options.check_sequence))

    return issues


def _check_numbering_at(target_dir: Path, strict_path: str, check_sequence: bool) -> list[Issue]:
    label = strict_path or "(top-level)"
    folders = [
        name
        for name in _child_folders(target_dir)
        if name not in SPECIAL_FOLDERS and not name.startswith("_")
    ]
    numbered = [f for f in folders if NUMBERED_FOLDER_PATTERN.match(f)]
    unnumbered = [f for f in folders if not NUMBERED_FOLDER_PATTERN.match(f)]
    issues = []

    if numbered:
        for folder in unnumbered:
            issues.append(
                Issue(
                    file_path=f"{strict_path}/{folder}" if strict_path else folder,
                    message=f"Folder not numbered in {label}: {folder}",
                    suggestion=f"Rename to follow pattern: XX-{folder}",
                )
            )

    if check_sequence and numbered:
        numbers = sorted(int(NUMBERED_FOLDER_PATTERN.match(f).group(1)) for f in numbered)
        for offset, number in enumerate(numbers):
            expected = numbers[0] + offset
            if number != expected:
                issues.append(
                    Issue(
                        file_path=strict_path or DOCS_ROOT_LABEL,
                        message=f"Gap in folder numbering at {label}: missing {expected:02d}-*",
                        suggestion="Renumber folders to be sequential",
                    )
                )
                break

    return issues


def check_file_naming(
    docs_dir: Path, files: list[str], options: FileNamingOptions | None = None
) -> list[Issue]:
    """Check file names against the strict or pattern-list convention."""
    options = options or FileNamingOptions()
    patterns = [re.compile(p) for p in options.allowed_patterns or DEFAULT_FILE_PATTERNS]
    issues = []

    for file in files:
        name = PurePosixPath(file).name
        if options.upper_case:
            if not UPPER_CASE_FILE_PATTERN.match(name) and name != "README.md":
                issues.append(
                    Issue(
                        file_path=file,
                        message=f"File name should be UPPER-CASE: {name}",
                        suggestion=f"Rename to {PurePosixPath(name).stem.upper()}.md",
                    )
                )
        elif not any(p.match(name) for p in patterns):
            issues.append(
                Issue(
                    file_path=file,
                    message=f"File name doesn't match naming convention: {name}",
                    suggestion="Use UPPER-CASE.md or lower-case.md format",
                )
            )

    return issues


def check_duplicate_content(docs_dir: Path, files: list[str]) -> list[Issue]:
    """Flag every file whose first H1 title is shared with another file."""
    titles: dict[str, list[str]] = defaultdict(list)
    for file in files:
        heading = read_document(docs_dir, file).first_heading(1)
        if heading and heading.text:
            titles[heading.text].append(file)

    issues = []
    for title, owners in titles.items():
        if len(owners) < 2:
            continue
        for file in owners:
            issues.append(
                Issue(
                    file_path=file,
                    message=f'Duplicate title "{title}" found in {len(owners)} files',
                    suggestion=f"Consider consolidating or renaming: {', '.join(owners)}",
                )
            )
    return issues


def check_standard_file_names(
    docs_dir: Path, files: list[str], options: StandardFileNamesOptions | None = None
) -> list[Issue]:
    """Flag detail-suffixed files and conflicting file pairs.

    For a conflict the non-preferred files are reported, never the preferred one.
    """
    options = options or StandardFileNamesOptions()
    issues = []

    if options.warn_detail_files:
        for file in files:
            name = PurePosixPath(file).name
            suffix = next((p for p in options.detail_patterns if name.endswith(p)), None)
            if suffix:
                folder_name = name[: -len(suffix)].lower()
                issues.append(
                    Issue(
                        file_path=file,
                        message=f"Detail file should be split into a folder: {name}",
                        suggestion=f"Move its sections into a {folder_name}/ folder of smaller files",
                    )
                )

    if options.warn_conflicts:
        by_folder: dict[str, set[str]] = defaultdict(set)
        for file in files:
            path = PurePosixPath(file)
            by_folder[str(path.parent)].add(path.name)

        for folder, names in sorted(by_folder.items()):
            for conflict in options.conflicts:
                if not all(name in names for name in conflict.files):
                    continue
                for name in conflict.files:
                    if name == conflict.preferred:
                        continue
                    issues.append(
                        Issue(
                            file_path=name if folder == "." else f"{folder}/{name}",
                            message=conflict.message
                            or f"{name} conflicts with {conflict.preferred}",
                            suggestion=f"Merge {name} into {conflict.preferred}",
                        )
                    )

    return issues
