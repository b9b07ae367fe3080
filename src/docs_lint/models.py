"""Data models for lint findings, rule results and reports."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RuleSeverity(Enum):
    """Severity of a whole rule."""

    OFF = "off"  # Rule does not run at all
    WARN = "warn"  # Reported, never fails the run
    ERROR = "error"  # Reported, fails the run if any issue exists


class IssueSeverity(Enum):
    """Severity attached to a single finding."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class Issue:
    """A single finding produced by one rule."""

    file_path: str  # Relative to the docs root, "." for the root itself
    message: str
    line_number: int | None = None
    suggestion: str | None = None
    severity: IssueSeverity | None = None  # Only set by rules with mixed severities

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"file": self.file_path}
        if self.line_number is not None:
            data["line"] = self.line_number
        data["message"] = self.message
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        if self.severity is not None:
            data["severity"] = self.severity.value
        return data


@dataclass
class RuleResult:
    """Outcome of running one rule."""

    rule: str
    severity: RuleSeverity
    issues: list[Issue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """Check if the rule found nothing."""
        return len(self.issues) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "severity": self.severity.value,
            "issues": [issue.to_dict() for issue in self.issues],
            "passed": self.passed,
        }


@dataclass(frozen=True)
class LintSummary:
    """Issue and rule counts for a whole run."""

    errors: int
    warnings: int
    passed: int

    @classmethod
    def from_results(cls, rule_results: list[RuleResult]) -> "LintSummary":
        return cls(
            errors=sum(
                len(r.issues) for r in rule_results if r.severity == RuleSeverity.ERROR
            ),
            warnings=sum(
                len(r.issues) for r in rule_results if r.severity == RuleSeverity.WARN
            ),
            passed=sum(1 for r in rule_results if r.passed),
        )


@dataclass
class LintResult:
    """Aggregate report of one lint run."""

    files_checked: int
    rule_results: list[RuleResult]
    passed: bool
    summary: LintSummary

    @classmethod
    def from_results(cls, files_checked: int, rule_results: list[RuleResult]) -> "LintResult":
        """Build a report; only error-severity rules can fail the run."""
        return cls(
            files_checked=files_checked,
            rule_results=rule_results,
            passed=all(r.passed for r in rule_results if r.severity == RuleSeverity.ERROR),
            summary=LintSummary.from_results(rule_results),
        )

    def get_rule(self, name: str) -> RuleResult | None:
        """Find the result for a rule by name."""
        for result in self.rule_results:
            if result.rule == name:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON report contract."""
        return {
            "filesChecked": self.files_checked,
            "ruleResults": [r.to_dict() for r in self.rule_results],
            "passed": self.passed,
            "summary": {
                "errors": self.summary.errors,
                "warnings": self.summary.warnings,
                "passed": self.summary.passed,
            },
        }


@dataclass(frozen=True)
class FolderDefinition:
    """One expected folder in a documentation layout."""

    path: str
    required: bool
    description: str | None = None
    files: tuple[str, ...] = ()  # Must exist inside the folder
    optional_files: tuple[str, ...] = ()  # Known, never reported


@dataclass(frozen=True)
class FolderStructureConfig:
    """Input of the structure-only lint."""

    folders: tuple[FolderDefinition, ...] = ()  # Empty means the standard layout
    numbered_folders: bool = False
    upper_case_files: bool = False


@dataclass(frozen=True)
class Requirement:
    """First sighting of a requirement ID."""

    requirement_id: str
    file_path: str
    line_number: int
    description: str
