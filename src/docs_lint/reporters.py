"""Lint result reporters."""

import json

from rich.markup import escape

from common.logger import get_logger

from .models import Issue, IssueSeverity, LintResult, RuleResult, RuleSeverity

logger = get_logger(__name__)

# Issues shown per rule without --verbose
PREVIEW_LIMIT = 3


class LintReporter:
    """Format and display lint results."""

    def __init__(self, verbose: bool = False):
        """Initialize the reporter.

        Args:
            verbose: Show every issue with its suggestion and passing rules too
        """
        self.verbose = verbose

    def report_console(self, result: LintResult, verbose: bool | None = None) -> int:
        """Print lint results to console.

        Args:
            result: Aggregate result of a lint run
            verbose: Overrides the reporter's verbosity for this call

        Returns:
            Exit code (0 if the run passed, 1 otherwise)
        """
        verbose = self.verbose if verbose is None else verbose

        logger.info("\n[bold]📄 Documentation Lint Results[/bold]\n")
        logger.info(f"Files checked: {result.files_checked}")
        status = "[green]PASSED[/green]" if result.passed else "[red]FAILED[/red]"
        logger.info(f"Status: {status}\n")

        logger.info("[bold]Summary:[/bold]")
        logger.info(f"  [red]Errors:[/red] {result.summary.errors}")
        logger.info(f"  [yellow]Warnings:[/yellow] {result.summary.warnings}")
        logger.info(f"  [green]Passed:[/green] {result.summary.passed}\n")

        for rule_result in result.rule_results:
            self._report_rule(rule_result, verbose)

        return 0 if result.passed else 1

    def report_rule_results(self, results: list[RuleResult]) -> int:
        """Print structure check results.

        Returns:
            Exit code (1 if any error-severity rule has issues)
        """
        logger.info("\n[bold]📁 Structure Check Results[/bold]\n")
        for rule_result in results:
            self._report_rule(rule_result, verbose=True)

        failed = [r for r in results if r.severity == RuleSeverity.ERROR and not r.passed]
        total = sum(len(r.issues) for r in results)
        logger.info("\n" + "=" * 60)
        logger.info(f"Total: [bold]{total}[/bold] issues in [bold]{len(results)}[/bold] checks")
        return 1 if failed else 0

    def report_json(self, result: LintResult) -> str:
        """Format results as JSON.

        Args:
            result: Aggregate result of a lint run

        Returns:
            JSON string of the report, camelCase keys
        """
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)

    def _report_rule(self, rule_result: RuleResult, verbose: bool) -> None:
        icon = _rule_icon(rule_result)
        label = _rule_label(rule_result)

        if rule_result.passed:
            if verbose:
                logger.info(f"{icon} {label}")
            return

        logger.info(f"{icon} {label} ({len(rule_result.issues)} issues)")
        shown = rule_result.issues if verbose else rule_result.issues[:PREVIEW_LIMIT]
        for issue in shown:
            location = escape(_location(issue))
            logger.info(f"    [dim]{location}[/dim] {_severity_tag(issue)}{escape(issue.message)}")
            if verbose and issue.suggestion:
                logger.info(f"      [blue]→[/blue] {escape(issue.suggestion)}")

        hidden = len(rule_result.issues) - len(shown)
        if hidden > 0:
            logger.info(f"    [dim]... and {hidden} more[/dim]")


def _rule_icon(rule_result: RuleResult) -> str:
    if rule_result.passed:
        return "[green]✓[/green]"
    if rule_result.severity == RuleSeverity.ERROR:
        return "[red]✗[/red]"
    return "[yellow]⚠[/yellow]"


def _rule_label(rule_result: RuleResult) -> str:
    if rule_result.severity == RuleSeverity.ERROR:
        return f"[red]{rule_result.rule}[/red]"
    if rule_result.severity == RuleSeverity.WARN:
        return f"[yellow]{rule_result.rule}[/yellow]"
    return rule_result.rule


def _location(issue: Issue) -> str:
    if issue.line_number is not None:
        return f"{issue.file_path}:{issue.line_number}"
    return issue.file_path


def _severity_tag(issue: Issue) -> str:
    if issue.severity is None:
        return ""
    color = {
        IssueSeverity.ERROR: "red",
        IssueSeverity.WARN: "yellow",
        IssueSeverity.INFO: "cyan",
    }[issue.severity]
    return f"[{color}]({issue.severity.value})[/{color}] "
