"""Configuration loading for docs-lint.

Config files are JSON with the camelCase keys used by the docs-lint config
format::

    {
      "docsDir": "./docs",
      "rules": {
        "brokenLinks": "error",
        "todoComments": {"severity": "warn", "tags": {"NOTE": "info"}}
      },
      "terminology": [{"preferred": "Markdown", "variants": ["markdown"]}]
    }
"""

import json
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from common.constants import CONFIG_FILE_NAMES
from common.env import env
from common.logger import get_logger

from .errors import ConfigError
from .models import RuleSeverity
from .rules.base import RuleOptions
from .rules.content_rules import (
    BrokenLinksOptions,
    LegacyFileNamesOptions,
    RelatedDocumentsOptions,
    TerminologyMapping,
    VersionInfoOptions,
)
from .rules.i18n_rules import I18nConfig
from .rules.reference_rules import OrphanDocumentsOptions
from .rules.standards_rules import StandardsDriftOptions
from .rules.structure_rules import (
    FileNamingOptions,
    FolderNumberingOptions,
    StandardFileNamesOptions,
)
from .rules.todo_rules import TodoCommentsOptions
from .rules.traceability_rules import RequirementTestMappingOptions

logger = get_logger(__name__)

# Rules that accept an options object; all others take a severity only
RULE_OPTION_TYPES: dict[str, type[RuleOptions]] = {
    "brokenLinks": BrokenLinksOptions,
    "legacyFileNames": LegacyFileNamesOptions,
    "versionInfo": VersionInfoOptions,
    "relatedDocuments": RelatedDocumentsOptions,
    "todoComments": TodoCommentsOptions,
    "orphanDocuments": OrphanDocumentsOptions,
    "standardsDrift": StandardsDriftOptions,
    "folderNumbering": FolderNumberingOptions,
    "fileNaming": FileNamingOptions,
    "standardFileNames": StandardFileNamesOptions,
    "requirementTestMapping": RequirementTestMappingOptions,
}

DEFAULT_RULE_SEVERITIES: dict[str, RuleSeverity] = {
    "brokenLinks": RuleSeverity.ERROR,
    "legacyFileNames": RuleSeverity.ERROR,
    "versionInfo": RuleSeverity.WARN,
    "relatedDocuments": RuleSeverity.WARN,
    "headingHierarchy": RuleSeverity.WARN,
    "todoComments": RuleSeverity.WARN,
    "codeBlockLanguage": RuleSeverity.WARN,
    "orphanDocuments": RuleSeverity.WARN,
    "terminology": RuleSeverity.WARN,
    "bidirectionalRefs": RuleSeverity.OFF,
    "i18nStructure": RuleSeverity.OFF,
    "standardsDrift": RuleSeverity.WARN,
    "requiredFiles": RuleSeverity.WARN,
    "standardFolderStructure": RuleSeverity.ERROR,
    "folderNumbering": RuleSeverity.WARN,
    "fileNaming": RuleSeverity.WARN,
    "duplicateContent": RuleSeverity.WARN,
    "standardFileNames": RuleSeverity.WARN,
    "requirementTestMapping": RuleSeverity.ERROR,
}


@dataclass(frozen=True)
class RuleSetting:
    """Severity of one rule plus its options, if the rule takes any."""

    severity: RuleSeverity
    options: RuleOptions | None = None


@dataclass
class DocsLintConfig:
    """Fully resolved configuration of a lint run."""

    docs_dir: str = field(default_factory=env.docs_dir)
    include: list[str] = field(default_factory=lambda: ["**/*.md"])
    exclude: list[str] = field(default_factory=lambda: ["**/_*/**", "**/_*.md"])
    rules: dict[str, RuleSetting] = field(default_factory=dict)
    terminology: list[TerminologyMapping] = field(default_factory=list)
    required_files: list[str] = field(default_factory=list)
    i18n: I18nConfig | None = None

    def rule(self, name: str) -> RuleSetting:
        """Get the setting of a rule; unknown rules default to warn."""
        return self.rules.get(name, RuleSetting(RuleSeverity.WARN))

    def options(self, name: str) -> RuleOptions | None:
        """Get a rule's options, falling back to the option type's defaults."""
        setting = self.rule(name)
        if setting.options is not None:
            return setting.options
        option_type = RULE_OPTION_TYPES.get(name)
        return option_type() if option_type else None


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _snake_keys(raw: dict[str, Any]) -> dict[str, Any]:
    return {_snake_case(key): value for key, value in raw.items()}


def _parse_severity(value: Any, rule: str) -> RuleSeverity:
    try:
        return RuleSeverity(value)
    except ValueError:
        raise ConfigError(
            f"Invalid severity for rule '{rule}': {value!r} (expected off, warn or error)"
        ) from None


def parse_rule_setting(name: str, raw: Any) -> RuleSetting:
    """Convert one rule entry into a RuleSetting.

    Args:
        name: Rule identifier, e.g. "brokenLinks"
        raw: Severity string, or object with "severity" and rule options

    Returns:
        RuleSetting with typed options for rules that take them

    Raises:
        ConfigError: If the severity or any option is invalid
    """
    if isinstance(raw, str):
        raw = {"severity": raw}

    if not isinstance(raw, dict):
        raise ConfigError(f"Rule '{name}' must be a severity string or an object")

    raw = dict(raw)
    severity = _parse_severity(raw.pop("severity", "warn"), name)
    option_type = RULE_OPTION_TYPES.get(name)

    if option_type is None:
        if raw:
            raise ConfigError(f"Rule '{name}' does not take options: {', '.join(sorted(raw))}")
        return RuleSetting(severity)

    options_raw = _snake_keys(raw)
    if option_type is TodoCommentsOptions:
        # Tags without a severity of their own follow the rule severity
        options_raw.setdefault(
            "default_severity", "warn" if severity == RuleSeverity.OFF else severity.value
        )

    try:
        options = option_type.from_dict(options_raw)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid options for rule '{name}': {e}") from e

    return RuleSetting(severity, options)


def _parse_terminology(raw: Any) -> list[TerminologyMapping]:
    if not isinstance(raw, list):
        raise ConfigError("'terminology' must be a list")
    for item in raw:
        for key in ("variants", "exceptions"):
            if isinstance(item, dict) and not isinstance(item.get(key, []), list):
                raise ConfigError(f"Invalid terminology entry: '{key}' must be a list")
    try:
        return [
            TerminologyMapping(
                preferred=item["preferred"],
                variants=tuple(item["variants"]),
                exceptions=tuple(item.get("exceptions", ())),
                word_boundary=bool(item.get("wordBoundary", False)),
            )
            for item in raw
        ]
    except (KeyError, TypeError) as e:
        raise ConfigError(f"Invalid terminology entry: {e}") from e


def _parse_i18n(raw: Any) -> I18nConfig:
    if not isinstance(raw, dict) or "sourceLanguage" not in raw:
        raise ConfigError("'i18n' must be an object with a 'sourceLanguage'")
    return I18nConfig(
        source_language=raw["sourceLanguage"],
        target_languages=tuple(raw.get("targetLanguages", ())),
        translations_folder=raw.get("translationsFolder", "translations"),
        check_sync=bool(raw.get("checkSync", False)),
    )


def default_config() -> DocsLintConfig:
    """Built-in configuration used when no config file exists."""
    return DocsLintConfig(
        rules={
            name: parse_rule_setting(name, severity.value)
            for name, severity in DEFAULT_RULE_SEVERITIES.items()
        }
    )


def parse_config(raw: dict[str, Any]) -> DocsLintConfig:
    """Build a configuration from a camelCase mapping merged over the defaults.

    Rules are merged per rule: a rule missing from ``raw`` keeps its default.

    Raises:
        ConfigError: If any key or value is invalid
    """
    if not isinstance(raw, dict):
        raise ConfigError("Configuration must be a JSON object")

    config = default_config()
    known_keys = {"docsDir", "include", "exclude", "rules", "terminology", "requiredFiles", "i18n"}
    unknown = sorted(set(raw) - known_keys)
    if unknown:
        logger.debug(f"Ignoring unknown config keys: {', '.join(unknown)}")

    if "docsDir" in raw:
        config.docs_dir = str(raw["docsDir"])
    for key, attr in (("include", "include"), ("exclude", "exclude"), ("requiredFiles", "required_files")):
        if key in raw:
            if not isinstance(raw[key], list):
                raise ConfigError(f"'{key}' must be a list")
            setattr(config, attr, [str(item) for item in raw[key]])

    rules = raw.get("rules") or {}
    if not isinstance(rules, dict):
        raise ConfigError("'rules' must be an object")
    for name, value in rules.items():
        config.rules[name] = parse_rule_setting(name, value)

    if "terminology" in raw:
        config.terminology = _parse_terminology(raw["terminology"])
    if raw.get("i18n") is not None:
        config.i18n = _parse_i18n(raw["i18n"])

    return config


def find_config_file(config_path: str | Path | None = None) -> Path | None:
    """Resolve the config file to read.

    An explicit path (argument, then DOCS_LINT_CONFIG) must exist; otherwise
    the default file names are searched in the working directory.

    Raises:
        ConfigError: If an explicit path does not exist
    """
    explicit = Path(config_path) if config_path else env.config_path()
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return explicit

    for name in CONFIG_FILE_NAMES:
        candidate = Path.cwd() / name
        if candidate.is_file():
            return candidate
    return None


def load_config(
    config_path: str | Path | None = None, docs_dir: str | None = None
) -> DocsLintConfig:
    """Load configuration from a file, or defaults when none exists.

    Args:
        config_path: Explicit config file; searched for when omitted
        docs_dir: Documentation root overriding the file's value

    Returns:
        Resolved DocsLintConfig

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    path = find_config_file(config_path)
    if path is None:
        config = default_config()
    else:
        logger.debug(f"Loading config from {path}")
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e
        config = parse_config(raw)

    if docs_dir:
        config = replace(config, docs_dir=docs_dir)
    return config


def rule_names() -> list[str]:
    """Canonical rule identifiers accepted by only/skip and the config."""
    return list(DEFAULT_RULE_SEVERITIES)
