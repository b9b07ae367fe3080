"""Lint documentation trees of Markdown files."""

from .config import DocsLintConfig, RuleSetting, load_config
from .errors import DocsDirectoryNotFoundError, DocsLintError, NoMarkdownFilesError
from .linter import DocsLinter, LinterOptions, create_linter
from .models import Issue, IssueSeverity, LintResult, RuleResult, RuleSeverity

__all__ = [
    "DocsLintConfig",
    "DocsDirectoryNotFoundError",
    "DocsLintError",
    "DocsLinter",
    "Issue",
    "IssueSeverity",
    "LintResult",
    "LinterOptions",
    "NoMarkdownFilesError",
    "RuleResult",
    "RuleSetting",
    "RuleSeverity",
    "create_linter",
    "load_config",
]
