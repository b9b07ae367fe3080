"""Tests for the lint orchestrator."""

import pytest

from docs_lint.config import RuleSetting, default_config, rule_names
from docs_lint.errors import DocsDirectoryNotFoundError, NoMarkdownFilesError
from docs_lint.linter import RULES, DocsLinter, LinterOptions, create_linter
from docs_lint.models import FolderStructureConfig, RuleSeverity
from docs_lint.rules.content_rules import LegacyFileNamesOptions, TerminologyMapping


def make_linter(docs_dir, only=None, skip=None, **rule_severities):
    config = default_config()
    config.docs_dir = str(docs_dir)
    for name, severity in rule_severities.items():
        config.rules[name] = RuleSetting(RuleSeverity(severity), config.rule(name).options)
    return DocsLinter(config, LinterOptions(only=only or [], skip=skip or []))


def with_rule_inputs(linter):
    """Give the input-gated rules something to check."""
    linter.config.terminology = [TerminologyMapping("Markdown", ("markdown",))]
    linter.config.required_files = ["README.md"]
    return linter


def test_registry_order():
    assert [spec.name for spec in RULES] == [
        "brokenLinks",
        "legacyFileNames",
        "versionInfo",
        "relatedDocuments",
        "headingHierarchy",
        "todoComments",
        "codeBlockLanguage",
        "orphanDocuments",
        "terminology",
        "bidirectionalRefs",
        "i18nStructure",
        "standardsDrift",
        "requiredFiles",
        "standardFolderStructure",
        "folderNumbering",
        "fileNaming",
        "duplicateContent",
        "standardFileNames",
        "requirementTestMapping",
    ]


class TestFatalPreconditions:
    """Tests for the two errors that abort a run."""

    def test_missing_docs_dir(self, tmp_path):
        with pytest.raises(DocsDirectoryNotFoundError, match="Documentation directory not found"):
            make_linter(tmp_path / "missing").lint()

    def test_empty_tree(self, make_docs):
        docs = make_docs({"notes.txt": "x"})
        with pytest.raises(NoMarkdownFilesError, match="No markdown files found"):
            make_linter(docs).lint()

    def test_only_excluded_files(self, make_docs):
        docs = make_docs({"_archive/a.md": "# A\n", "_draft.md": "# D\n"})
        with pytest.raises(NoMarkdownFilesError):
            make_linter(docs).lint()


class TestRuleSelection:
    """Tests for severity gating and only/skip."""

    def test_off_rules_never_run(self, make_docs):
        docs = make_docs({"a.md": "# A\n"})

        result = make_linter(docs).lint()
        ran = [r.rule for r in result.rule_results]

        assert "bidirectionalRefs" not in ran
        assert "i18nStructure" not in ran

    def test_every_rule_off_gives_no_results(self, make_docs):
        docs = make_docs({"a.md": "# A\n"})
        linter = with_rule_inputs(make_linter(docs, **{name: "off" for name in rule_names()}))

        assert linter.lint().rule_results == []

    @pytest.mark.parametrize("rule", rule_names())
    def test_turning_one_rule_off_removes_it(self, make_docs, rule):
        docs = make_docs({"a.md": "# A\n"})

        enabled = with_rule_inputs(make_linter(docs, **{rule: "warn"})).lint()
        disabled = with_rule_inputs(make_linter(docs, **{rule: "off"})).lint()

        assert rule in [r.rule for r in enabled.rule_results]
        assert rule not in [r.rule for r in disabled.rule_results]
        assert len(disabled.rule_results) == len(enabled.rule_results) - 1

    def test_only_limits_rules(self, make_docs):
        docs = make_docs({"a.md": "# A\n"})

        result = make_linter(docs, only=["headingHierarchy", "brokenLinks"]).lint()

        assert [r.rule for r in result.rule_results] == ["brokenLinks", "headingHierarchy"]

    def test_skip_beats_only(self, make_docs):
        docs = make_docs({"a.md": "# A\n"})

        result = make_linter(docs, only=["brokenLinks"], skip=["brokenLinks"]).lint()

        assert result.rule_results == []

    def test_only_cannot_enable_off_rule(self, make_docs):
        docs = make_docs({"a.md": "# A\n"})

        result = make_linter(docs, only=["bidirectionalRefs"]).lint()

        assert result.rule_results == []

    def test_preconditions(self, make_docs):
        docs = make_docs({"a.md": "# A\n"})
        linter = make_linter(docs, only=["terminology", "requiredFiles"])

        assert linter.lint().rule_results == []

        linter.config.terminology = [TerminologyMapping("Markdown", ("markdown",))]
        linter.config.required_files = ["README.md"]
        assert [r.rule for r in linter.lint().rule_results] == ["terminology", "requiredFiles"]

    def test_standards_drift_runs_with_bundled_templates(self, make_docs):
        docs = make_docs({"a.md": "# A\n"})

        result = make_linter(docs, only=["standardsDrift"]).lint()

        drift = result.get_rule("standardsDrift")
        assert drift is not None
        assert any(i.file_path == "04-development/SETUP.md" for i in drift.issues)


class TestAggregation:
    """Tests for result wrapping, summary and pass/fail."""

    def test_broken_link_fails_run(self, make_docs):
        docs = make_docs({"a.md": "[B](./b.md)\n"})

        result = make_linter(docs, only=["brokenLinks"]).lint()

        assert result.files_checked == 1
        assert result.passed is False
        assert result.summary.errors == 1
        assert result.rule_results[0].issues[0].message == 'Broken link to "./b.md"'

    def test_link_round_trip(self, make_docs):
        docs = make_docs({"a.md": "[B](./b.md)\n", "b.md": "# B\n"})

        result = make_linter(docs, only=["brokenLinks"]).lint()

        assert result.passed is True
        assert result.summary.passed == 1

    def test_warnings_never_fail(self, make_docs):
        docs = make_docs({"a.md": "# A\n### C\n"})

        result = make_linter(docs, only=["headingHierarchy"]).lint()

        assert result.passed is True
        assert result.summary.warnings == 1
        assert result.summary.errors == 0

    def test_severity_override_makes_warning_fatal(self, make_docs):
        docs = make_docs({"a.md": "# A\n### C\n"})

        result = make_linter(docs, only=["headingHierarchy"], headingHierarchy="error").lint()

        assert result.passed is False
        assert result.summary.errors == 1

    def test_rule_exception_becomes_issue(self, make_docs):
        docs = make_docs({"a.md": "# A\n"})
        linter = make_linter(docs, only=["legacyFileNames", "headingHierarchy"])
        linter.config.rules["legacyFileNames"] = RuleSetting(
            RuleSeverity.ERROR, LegacyFileNamesOptions(pattern="(")
        )

        result = linter.lint()
        failed = result.get_rule("legacyFileNames")

        assert len(failed.issues) == 1
        assert failed.issues[0].file_path == ""
        assert failed.issues[0].message.startswith("Rule error:")
        assert failed.severity == RuleSeverity.ERROR
        assert result.get_rule("headingHierarchy").passed
        assert result.passed is False

    def test_todo_tag_severity_does_not_change_rule_severity(self, make_docs):
        docs = make_docs({"a.md": "BUG: crash on save\n"})

        result = make_linter(docs, only=["todoComments"]).lint()
        todo = result.get_rule("todoComments")

        assert todo.severity == RuleSeverity.WARN
        assert todo.issues[0].severity.value == "error"
        assert result.passed is True

    def test_orphan_symmetry(self, make_docs):
        docs = make_docs({"a.md": "[b](b.md)\n", "b.md": "[a](a.md)\n"})

        result = make_linter(docs, only=["orphanDocuments"]).lint()

        assert result.get_rule("orphanDocuments").passed

    def test_deterministic(self, make_docs):
        docs = make_docs(
            {
                "a.md": "# A\n### C\nTODO: x\n[B](missing.md)\n",
                "sub/b.md": "# A\n```\ncode\n```\n",
            }
        )
        linter = make_linter(docs)

        assert linter.lint().to_dict() == linter.lint().to_dict()


class TestLintStructure:
    """Tests for lint_structure."""

    def test_rule_subset(self, make_docs):
        docs = make_docs({"01-plan/": "", "guides/": ""})
        linter = make_linter(docs)

        plain = linter.lint_structure(FolderStructureConfig())
        numbered = linter.lint_structure(FolderStructureConfig(numbered_folders=True))

        assert [r.rule for r in plain] == ["folderStructure", "fileNaming", "duplicateContent"]
        assert [r.rule for r in numbered] == [
            "folderStructure",
            "folderNumbering",
            "fileNaming",
            "duplicateContent",
        ]
        assert numbered[1].issues[0].message == "Folder not numbered in (top-level): guides"

    def test_empty_tree_allowed(self, make_docs):
        results = make_linter(make_docs({})).lint_structure(FolderStructureConfig())
        assert results[1].passed and results[2].passed

    def test_upper_case_mode(self, make_docs):
        docs = make_docs({"readme-notes.md": "# R\n"})

        results = make_linter(docs).lint_structure(FolderStructureConfig(upper_case_files=True))

        assert results[1].issues[0].file_path == "readme-notes.md"

    def test_missing_docs_dir(self, tmp_path):
        with pytest.raises(DocsDirectoryNotFoundError):
            make_linter(tmp_path / "missing").lint_structure(FolderStructureConfig())


def test_create_linter_uses_defaults():
    linter = create_linter()
    assert linter.get_rule_severity("brokenLinks") == RuleSeverity.ERROR
    assert linter.options.only == []
