"""Requirement to test-case traceability."""

import re
from dataclasses import dataclass, field
from pathlib import Path

from common.constants import DOCS_ROOT_LABEL

from ..models import Issue, Requirement
from ..patterns import select_files
from ..scanner import read_document
from .base import RuleOptions


@dataclass(frozen=True)
class RequirementTestMappingOptions(RuleOptions):
    requirement_pattern: str = r"FR-([A-Z]+-)*\d{3}"
    test_case_pattern: str = r"TC-[UIEPSDX]\d{3}"
    requirement_files: tuple[str, ...] = (
        "**/REQUIREMENTS.md",
        "**/01-requirements/**/*.md",
    )
    test_case_files: tuple[str, ...] = (
        "**/TEST-CASES.md",
        "**/TEST.md",
        "**/05-testing/**/*.md",
        "**/*-TESTS.md",
        "**/DEFERRED-TESTS.md",
    )
    required_coverage: float = 100
    require_test_file: bool = True
    require_requirement_ids: bool = True
    require_test_case_ids: bool = True


@dataclass
class CoverageReport:
    """Requirements found, requirements covered and the resulting percentage."""

    requirements: dict[str, Requirement] = field(default_factory=dict)
    covered: set[str] = field(default_factory=set)
    requirement_files: list[str] = field(default_factory=list)
    test_case_files: list[str] = field(default_factory=list)

    @property
    def uncovered(self) -> list[str]:
        """Uncovered requirement IDs in first-sighting order."""
        return [rid for rid in self.requirements if rid not in self.covered]

    @property
    def coverage_percent(self) -> float:
        if not self.requirements:
            return 100.0
        covered = len(self.requirements) - len(self.uncovered)
        return covered / len(self.requirements) * 100


def compute_requirement_coverage(
    docs_dir: Path,
    files: list[str],
    options: RequirementTestMappingOptions | None = None,
) -> CoverageReport:
    """Extract requirement IDs and the set of IDs test-case files cover.

    A requirement counts as covered when it follows a test-case ID on the
    same line, or when its ID appears anywhere in a test-case file.

    Args:
        docs_dir: Documentation root
        files: Docs-relative files already discovered
        options: ID patterns and file globs

    Returns:
        CoverageReport with requirements keyed by ID, first sighting wins
    """
    options = options or RequirementTestMappingOptions()
    requirement_regex = re.compile(options.requirement_pattern)
    paired_regex = re.compile(
        rf"(?P<tc>{options.test_case_pattern}).*?\[?(?P<req>{options.requirement_pattern})\]?"
    )

    report = CoverageReport(
        requirement_files=select_files(files, options.requirement_files),
        test_case_files=select_files(files, options.test_case_files),
    )

    for file in report.requirement_files:
        for line_number, line in enumerate(read_document(docs_dir, file).lines, start=1):
            for match in requirement_regex.finditer(line):
                rid = match.group(0)
                if rid not in report.requirements:
                    report.requirements[rid] = Requirement(
                        requirement_id=rid,
                        file_path=file,
                        line_number=line_number,
                        description=line[:100],
                    )

    for file in report.test_case_files:
        for line in read_document(docs_dir, file).lines:
            for match in paired_regex.finditer(line):
                report.covered.add(match.group("req"))
            for match in requirement_regex.finditer(line):
                report.covered.add(match.group(0))

    return report


def _any_match(docs_dir: Path, files: list[str], pattern: str) -> bool:
    regex = re.compile(pattern)
    return any(regex.search((docs_dir / f).read_text(encoding="utf-8")) for f in files)


def check_requirement_test_mapping(
    docs_dir: Path,
    files: list[str],
    options: RequirementTestMappingOptions | None = None,
) -> list[Issue]:
    """Report requirements without test cases and a coverage rollup."""
    options = options or RequirementTestMappingOptions()
    report = compute_requirement_coverage(docs_dir, files, options)
    requirement_files = report.requirement_files
    test_case_files = report.test_case_files
    issues = []

    if options.require_test_file and not test_case_files and requirement_files:
        issues.append(
            Issue(
                file_path=DOCS_ROOT_LABEL,
                message="No test case files found",
                suggestion="Create TEST-CASES.md or add test cases under a 05-testing/ folder",
            )
        )

    if (
        options.require_requirement_ids
        and requirement_files
        and not _any_match(docs_dir, requirement_files, options.requirement_pattern)
    ):
        issues.append(
            Issue(
                file_path=requirement_files[0],
                message="No requirement IDs found",
                suggestion="Give each functional requirement an ID such as FR-001, FR-002",
            )
        )

    if (
        options.require_test_case_ids
        and test_case_files
        and not _any_match(docs_dir, test_case_files, options.test_case_pattern)
    ):
        issues.append(
            Issue(
                file_path=test_case_files[0],
                message="No test case IDs found",
                suggestion="Give each test case an ID such as TC-U001 (unit), TC-I001 (integration), TC-E001 (E2E)",
            )
        )

    for rid in report.uncovered:
        requirement = report.requirements[rid]
        issues.append(
            Issue(
                file_path=requirement.file_path,
                line_number=requirement.line_number,
                message=f"Requirement {rid} has no test case",
                suggestion=f"Add a test case covering {rid} to TEST-CASES.md",
            )
        )

    if report.requirements and report.coverage_percent < options.required_coverage:
        issues.append(
            Issue(
                file_path=DOCS_ROOT_LABEL,
                message=(
                    f"Requirement coverage is {report.coverage_percent:.1f}% "
                    f"(required: {options.required_coverage:g}%)"
                ),
                suggestion=f"Uncovered requirements: {', '.join(report.uncovered)}",
            )
        )

    return issues
