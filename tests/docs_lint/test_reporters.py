"""Tests for lint result reporters."""

import json
import logging

from docs_lint.models import Issue, IssueSeverity, LintResult, RuleResult, RuleSeverity
from docs_lint.reporters import LintReporter


def _result():
    return LintResult.from_results(
        files_checked=3,
        rule_results=[
            RuleResult(
                "brokenLinks",
                RuleSeverity.ERROR,
                [Issue("a.md", 'Broken link to "./b.md"', line_number=4, suggestion="Fix it")],
            ),
            RuleResult(
                "todoComments",
                RuleSeverity.WARN,
                [
                    Issue("a.md", f"TODO (Planned work): item {n}", line_number=n, severity=IssueSeverity.INFO)
                    for n in range(1, 6)
                ],
            ),
            RuleResult("headingHierarchy", RuleSeverity.WARN, []),
        ],
    )


class TestReportConsole:
    """Tests for report_console."""

    def test_summary_and_exit_code(self, caplog):
        with caplog.at_level(logging.INFO):
            exit_code = LintReporter().report_console(_result())

        assert exit_code == 1
        assert "Files checked: 3" in caplog.text
        assert "FAILED" in caplog.text
        assert "a.md:4" in caplog.text
        assert "... and 2 more" in caplog.text

    def test_passing_rules_hidden_unless_verbose(self, caplog):
        with caplog.at_level(logging.INFO):
            LintReporter().report_console(_result())
        assert "headingHierarchy" not in caplog.text

        caplog.clear()
        with caplog.at_level(logging.INFO):
            LintReporter(verbose=True).report_console(_result())
        assert "headingHierarchy" in caplog.text
        assert "Fix it" in caplog.text
        assert "item 5" in caplog.text

    def test_passed_run_returns_zero(self, caplog):
        result = LintResult.from_results(1, [RuleResult("brokenLinks", RuleSeverity.ERROR, [])])

        with caplog.at_level(logging.INFO):
            assert LintReporter().report_console(result) == 0
        assert "PASSED" in caplog.text


def test_report_rule_results(caplog):
    results = [
        RuleResult("folderStructure", RuleSeverity.WARN, [Issue("03-guide", "Required folder missing: 03-guide")]),
        RuleResult("fileNaming", RuleSeverity.WARN, []),
    ]

    with caplog.at_level(logging.INFO):
        exit_code = LintReporter().report_rule_results(results)

    assert exit_code == 0
    assert "Required folder missing: 03-guide" in caplog.text
    assert "Total: [bold]1[/bold] issues" in caplog.text


def test_report_json_contract():
    data = json.loads(LintReporter().report_json(_result()))

    assert data["filesChecked"] == 3
    assert data["passed"] is False
    assert data["summary"] == {"errors": 1, "warnings": 5, "passed": 1}
    first = data["ruleResults"][0]
    assert first["rule"] == "brokenLinks"
    assert first["severity"] == "error"
    assert first["issues"][0] == {
        "file": "a.md",
        "line": 4,
        "message": 'Broken link to "./b.md"',
        "suggestion": "Fix it",
    }
    assert data["ruleResults"][1]["issues"][0]["severity"] == "info"
