"""Tests for configuration loading."""

import json

import pytest

from docs_lint.config import default_config, load_config, parse_config, parse_rule_setting
from docs_lint.errors import ConfigError
from docs_lint.models import RuleSeverity
from docs_lint.rules.content_rules import BrokenLinksOptions
from docs_lint.rules.todo_rules import TodoCommentsOptions


@pytest.fixture
def in_tmp_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DOCS_LINT_CONFIG", raising=False)
    monkeypatch.delenv("DOCS_LINT_DOCS_DIR", raising=False)
    return tmp_path


class TestDefaultConfig:
    """Tests for default_config."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DOCS_LINT_DOCS_DIR", raising=False)
        config = default_config()

        assert config.docs_dir == "./docs"
        assert config.include == ["**/*.md"]
        assert config.exclude == ["**/_*/**", "**/_*.md"]
        assert config.terminology == []
        assert config.i18n is None

    def test_default_severities(self):
        config = default_config()

        assert config.rule("brokenLinks").severity == RuleSeverity.ERROR
        assert config.rule("requirementTestMapping").severity == RuleSeverity.ERROR
        assert config.rule("bidirectionalRefs").severity == RuleSeverity.OFF
        assert config.rule("i18nStructure").severity == RuleSeverity.OFF
        assert config.rule("headingHierarchy").severity == RuleSeverity.WARN

    def test_option_rules_get_default_options(self):
        config = default_config()

        assert config.options("brokenLinks") == BrokenLinksOptions()
        assert config.options("headingHierarchy") is None

    def test_docs_dir_from_environment(self, monkeypatch):
        monkeypatch.setenv("DOCS_LINT_DOCS_DIR", "documentation")
        assert default_config().docs_dir == "documentation"


class TestParseRuleSetting:
    """Tests for parse_rule_setting."""

    def test_severity_string(self):
        setting = parse_rule_setting("headingHierarchy", "error")
        assert setting.severity == RuleSeverity.ERROR
        assert setting.options is None

    def test_object_with_camel_case_options(self):
        setting = parse_rule_setting(
            "brokenLinks", {"severity": "warn", "excludePaths": ["drafts/**"]}
        )

        assert setting.severity == RuleSeverity.WARN
        assert setting.options == BrokenLinksOptions(exclude_paths=("drafts/**",))

    def test_todo_default_severity_follows_rule(self):
        setting = parse_rule_setting("todoComments", "error")

        assert isinstance(setting.options, TodoCommentsOptions)
        assert setting.options.default_severity == "error"

    def test_invalid_severity(self):
        with pytest.raises(ConfigError, match="Invalid severity"):
            parse_rule_setting("brokenLinks", "fatal")

    def test_unknown_option(self):
        with pytest.raises(ConfigError, match="Invalid options"):
            parse_rule_setting("brokenLinks", {"severity": "error", "colour": "red"})

    def test_options_on_severity_only_rule(self):
        with pytest.raises(ConfigError, match="does not take options"):
            parse_rule_setting("headingHierarchy", {"severity": "warn", "depth": 2})

    def test_wrong_type(self):
        with pytest.raises(ConfigError):
            parse_rule_setting("brokenLinks", 3)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_rule_setting("brokenLinks", "nope")


class TestParseConfig:
    """Tests for parse_config."""

    def test_rules_merged_per_rule(self):
        config = parse_config({"rules": {"brokenLinks": "off"}})

        assert config.rule("brokenLinks").severity == RuleSeverity.OFF
        assert config.rule("legacyFileNames").severity == RuleSeverity.ERROR

    def test_top_level_keys(self):
        config = parse_config(
            {
                "docsDir": "./documentation",
                "include": ["**/*.md"],
                "exclude": ["drafts/**"],
                "requiredFiles": ["README.md"],
                "terminology": [
                    {"preferred": "Markdown", "variants": ["markdown"], "wordBoundary": True}
                ],
                "i18n": {"sourceLanguage": "ja", "targetLanguages": ["en"], "checkSync": True},
            }
        )

        assert config.docs_dir == "./documentation"
        assert config.exclude == ["drafts/**"]
        assert config.required_files == ["README.md"]
        assert config.terminology[0].word_boundary is True
        assert config.terminology[0].variants == ("markdown",)
        assert config.i18n.source_language == "ja"
        assert config.i18n.target_languages == ("en",)
        assert config.i18n.check_sync is True

    def test_invalid_shapes(self):
        with pytest.raises(ConfigError):
            parse_config([])
        with pytest.raises(ConfigError):
            parse_config({"include": "**/*.md"})
        with pytest.raises(ConfigError):
            parse_config({"terminology": [{"preferred": "x"}]})
        with pytest.raises(ConfigError, match="'variants' must be a list"):
            parse_config({"terminology": [{"preferred": "Markdown", "variants": "md"}]})
        with pytest.raises(ConfigError, match="'exceptions' must be a list"):
            parse_config(
                {"terminology": [{"preferred": "x", "variants": ["y"], "exceptions": "z"}]}
            )
        with pytest.raises(ConfigError):
            parse_config({"i18n": {"targetLanguages": ["en"]}})


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, in_tmp_cwd):
        config = load_config()

        assert config.docs_dir == "./docs"
        assert config.rule("brokenLinks").severity == RuleSeverity.ERROR

    def test_loads_default_file_name(self, in_tmp_cwd):
        (in_tmp_cwd / "docs-lint.config.json").write_text(
            json.dumps({"docsDir": "./documentation", "rules": {"brokenLinks": "off"}}),
            encoding="utf-8",
        )

        config = load_config()

        assert config.docs_dir == "./documentation"
        assert config.rule("brokenLinks").severity == RuleSeverity.OFF
        assert config.rule("headingHierarchy").severity == RuleSeverity.WARN

    def test_loads_rc_file(self, in_tmp_cwd):
        (in_tmp_cwd / ".docs-lintrc.json").write_text(
            json.dumps({"rules": {"versionInfo": "error"}}), encoding="utf-8"
        )
        assert load_config().rule("versionInfo").severity == RuleSeverity.ERROR

    def test_docs_dir_argument_overrides_file(self, in_tmp_cwd):
        (in_tmp_cwd / "docs-lint.config.json").write_text(
            json.dumps({"docsDir": "./documentation"}), encoding="utf-8"
        )
        assert load_config(docs_dir="./custom-docs").docs_dir == "./custom-docs"

    def test_explicit_path_from_environment(self, in_tmp_cwd, monkeypatch):
        path = in_tmp_cwd / "custom.json"
        path.write_text(json.dumps({"docsDir": "./from-env"}), encoding="utf-8")
        monkeypatch.setenv("DOCS_LINT_CONFIG", str(path))

        assert load_config().docs_dir == "./from-env"

    def test_missing_explicit_path(self, in_tmp_cwd):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(in_tmp_cwd / "nope.json")

    def test_invalid_json(self, in_tmp_cwd):
        (in_tmp_cwd / "docs-lint.config.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config()
