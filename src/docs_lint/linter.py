"""Lint orchestration: file discovery, rule registry and result aggregation."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from common.logger import get_logger

from .config import DocsLintConfig, default_config
from .errors import DocsDirectoryNotFoundError, NoMarkdownFilesError
from .models import FolderStructureConfig, Issue, LintResult, RuleResult, RuleSeverity
from .patterns import discover_files
from .rules import content_rules, i18n_rules, reference_rules, standards_rules
from .rules import structure_rules, todo_rules, traceability_rules
from .rules.structure_rules import FileNamingOptions

logger = get_logger(__name__)


@dataclass
class LinterOptions:
    """Per-run rule selection."""

    verbose: bool = False
    only: list[str] = field(default_factory=list)  # Empty means every rule
    skip: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RuleContext:
    """Inputs shared by every rule of one run."""

    docs_dir: Path
    files: list[str]
    config: DocsLintConfig

    def options(self, rule: str):
        return self.config.options(rule)


@dataclass(frozen=True)
class RuleSpec:
    """Registry entry: a rule name, when it applies and how to run it."""

    name: str
    run: Callable[[RuleContext], list[Issue]]
    precondition: Callable[[RuleContext], bool] | None = None


def _always(context: RuleContext) -> bool:
    return True


RULES: tuple[RuleSpec, ...] = (
    RuleSpec(
        "brokenLinks",
        lambda c: content_rules.check_broken_links(c.docs_dir, c.files, c.options("brokenLinks")),
    ),
    RuleSpec(
        "legacyFileNames",
        lambda c: content_rules.check_legacy_file_names(
            c.docs_dir, c.files, c.options("legacyFileNames")
        ),
    ),
    RuleSpec(
        "versionInfo",
        lambda c: content_rules.check_version_info(c.docs_dir, c.files, c.options("versionInfo")),
    ),
    RuleSpec(
        "relatedDocuments",
        lambda c: content_rules.check_related_documents(
            c.docs_dir, c.files, c.options("relatedDocuments")
        ),
    ),
    RuleSpec(
        "headingHierarchy",
        lambda c: content_rules.check_heading_hierarchy(c.docs_dir, c.files),
    ),
    RuleSpec(
        "todoComments",
        lambda c: todo_rules.check_todo_comments(c.docs_dir, c.files, c.options("todoComments")),
    ),
    RuleSpec(
        "codeBlockLanguage",
        lambda c: content_rules.check_code_block_language(c.docs_dir, c.files),
    ),
    RuleSpec(
        "orphanDocuments",
        lambda c: reference_rules.check_orphan_documents(
            c.docs_dir, c.files, c.options("orphanDocuments")
        ),
    ),
    RuleSpec(
        "terminology",
        lambda c: content_rules.check_terminology(c.docs_dir, c.files, c.config.terminology),
        precondition=lambda c: len(c.config.terminology) > 0,
    ),
    RuleSpec(
        "bidirectionalRefs",
        lambda c: reference_rules.check_bidirectional_refs(c.docs_dir, c.files),
    ),
    RuleSpec(
        "i18nStructure",
        lambda c: i18n_rules.check_i18n_structure(c.docs_dir, c.config.i18n),
    ),
    RuleSpec(
        "standardsDrift",
        lambda c: standards_rules.check_standards_drift(
            c.docs_dir, standards_rules.get_templates_dir(), c.options("standardsDrift")
        ),
        precondition=lambda c: standards_rules.get_templates_dir() is not None,
    ),
    RuleSpec(
        "requiredFiles",
        lambda c: content_rules.check_required_files(c.docs_dir, c.config.required_files),
        precondition=lambda c: len(c.config.required_files) > 0,
    ),
    RuleSpec(
        "standardFolderStructure",
        lambda c: structure_rules.check_standard_folder_structure(c.docs_dir),
    ),
    RuleSpec(
        "folderNumbering",
        lambda c: structure_rules.check_folder_numbering(c.docs_dir, c.options("folderNumbering")),
    ),
    RuleSpec(
        "fileNaming",
        lambda c: structure_rules.check_file_naming(c.docs_dir, c.files, c.options("fileNaming")),
    ),
    RuleSpec(
        "duplicateContent",
        lambda c: structure_rules.check_duplicate_content(c.docs_dir, c.files),
    ),
    RuleSpec(
        "standardFileNames",
        lambda c: structure_rules.check_standard_file_names(
            c.docs_dir, c.files, c.options("standardFileNames")
        ),
    ),
    RuleSpec(
        "requirementTestMapping",
        lambda c: traceability_rules.check_requirement_test_mapping(
            c.docs_dir, c.files, c.options("requirementTestMapping")
        ),
    ),
)


class DocsLinter:
    """Runs the enabled rules over a documentation tree."""

    def __init__(self, config: DocsLintConfig, options: LinterOptions | None = None):
        """Initialize the linter.

        Args:
            config: Resolved configuration
            options: Rule selection for this run
        """
        self.config = config
        self.options = options or LinterOptions()

    @property
    def docs_dir(self) -> Path:
        return Path(self.config.docs_dir).resolve()

    def lint(self) -> LintResult:
        """Run every enabled rule and aggregate the results.

        Returns:
            LintResult with one RuleResult per rule that ran, in registry order

        Raises:
            DocsDirectoryNotFoundError: If the docs directory does not exist
            NoMarkdownFilesError: If no file matches include minus exclude
        """
        docs_dir = self._require_docs_dir()
        files = self.get_files(docs_dir)
        if not files:
            raise NoMarkdownFilesError(f"No markdown files found in {docs_dir}")

        context = RuleContext(docs_dir=docs_dir, files=files, config=self.config)
        rule_results = []
        for spec in RULES:
            if not self.should_run(spec.name):
                continue
            if not (spec.precondition or _always)(context):
                logger.debug(f"Skipping {spec.name}: nothing to check")
                continue
            rule_results.append(self.run_rule(spec.name, lambda: spec.run(context)))

        return LintResult.from_results(len(files), rule_results)

    def lint_structure(self, structure_config: FolderStructureConfig) -> list[RuleResult]:
        """Run the structure-only rule subset.

        Args:
            structure_config: Expected folders and naming switches

        Returns:
            Results for folderStructure, folderNumbering (when numbered
            folders are requested), fileNaming and duplicateContent
        """
        docs_dir = self._require_docs_dir()
        files = self.get_files(docs_dir)
        naming = replace(
            self.config.options("fileNaming") or FileNamingOptions(),
            upper_case=structure_config.upper_case_files,
        )

        results = [
            self.run_rule(
                "folderStructure",
                lambda: structure_rules.check_folder_structure(docs_dir, structure_config.folders),
            )
        ]
        if structure_config.numbered_folders:
            results.append(
                self.run_rule(
                    "folderNumbering",
                    lambda: structure_rules.check_folder_numbering(
                        docs_dir, self.config.options("folderNumbering")
                    ),
                )
            )
        results.append(
            self.run_rule(
                "fileNaming", lambda: structure_rules.check_file_naming(docs_dir, files, naming)
            )
        )
        results.append(
            self.run_rule(
                "duplicateContent",
                lambda: structure_rules.check_duplicate_content(docs_dir, files),
            )
        )
        return results

    def get_files(self, docs_dir: Path) -> list[str]:
        files = discover_files(docs_dir, self.config.include, self.config.exclude)
        logger.debug(f"Discovered {len(files)} files in {docs_dir}")
        return files

    def should_run(self, rule: str) -> bool:
        """Check severity, skip and only for a rule."""
        if self.get_rule_severity(rule) == RuleSeverity.OFF:
            return False
        if rule in self.options.skip:
            return False
        if self.options.only and rule not in self.options.only:
            return False
        return True

    def get_rule_severity(self, rule: str) -> RuleSeverity:
        return self.config.rule(rule).severity

    def run_rule(self, rule: str, check: Callable[[], list[Issue]]) -> RuleResult:
        """Run one rule, turning any exception into a single issue."""
        severity = self.get_rule_severity(rule)
        logger.debug(f"Running {rule}")
        try:
            issues = check()
        except Exception as e:
            logger.debug(f"Rule {rule} failed: {e}")
            issues = [Issue(file_path="", message=f"Rule error: {e}")]
        return RuleResult(rule=rule, severity=severity, issues=issues)

    def _require_docs_dir(self) -> Path:
        docs_dir = self.docs_dir
        if not docs_dir.is_dir():
            raise DocsDirectoryNotFoundError(f"Documentation directory not found: {docs_dir}")
        return docs_dir


def create_linter(
    config: DocsLintConfig | None = None, options: LinterOptions | None = None
) -> DocsLinter:
    """Create a linter, using the built-in defaults when no config is given."""
    return DocsLinter(config or default_config(), options)
