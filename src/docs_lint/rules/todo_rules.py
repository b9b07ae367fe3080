"""TODO/FIXME style tag detection."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..models import Issue, IssueSeverity
from ..patterns import matches_include
from ..scanner import is_table_line, read_document, strip_inline_code
from .base import RuleOptions

TAG_SEVERITIES = ("off", "info", "warn", "error")


@dataclass(frozen=True)
class TagSetting:
    """Severity and human-readable label of one tag."""

    severity: str  # off | info | warn | error
    label: str | None = None

    def __post_init__(self):
        if self.severity not in TAG_SEVERITIES:
            raise ValueError(f"invalid tag severity '{self.severity}'")

    @property
    def issue_severity(self) -> IssueSeverity | None:
        if self.severity == "off":
            return None
        return IssueSeverity(self.severity)


DEFAULT_TAGS: dict[str, TagSetting] = {
    "TODO": TagSetting("info", "Planned work"),
    "FIXME": TagSetting("warn", "Needs fix"),
    "XXX": TagSetting("warn", "Needs attention"),
    "HACK": TagSetting("warn", "Workaround"),
    "BUG": TagSetting("error", "Known bug"),
    "NOTE": TagSetting("off"),
    "REVIEW": TagSetting("info", "Needs review"),
    "OPTIMIZE": TagSetting("info", "Optimization candidate"),
    "WARNING": TagSetting("warn", "Warning"),
    "QUESTION": TagSetting("info", "Needs confirmation"),
}


@dataclass(frozen=True)
class TodoCommentsOptions(RuleOptions):
    tags: dict[str, TagSetting] = field(default_factory=lambda: dict(DEFAULT_TAGS))
    custom_tags: tuple[str, ...] = ()
    ignore_inline_code: bool = True
    ignore_code_blocks: bool = True
    ignore_in_tables: bool = False
    exclude_patterns: tuple[str, ...] = ()  # Regexes tested against the matched text
    exclude: tuple[str, ...] = ()  # File patterns to skip
    default_severity: str = "warn"  # Used by tags with no setting of their own

    @classmethod
    def from_dict(cls, raw: dict[str, Any]):
        """Build options, merging per-tag settings over the defaults."""
        raw = dict(raw)
        tags = dict(DEFAULT_TAGS)
        for name, setting in (raw.pop("tags", None) or {}).items():
            if isinstance(setting, str):
                tags[name.upper()] = TagSetting(setting)
            else:
                tags[name.upper()] = TagSetting(
                    setting.get("severity", raw.get("default_severity", "warn")),
                    setting.get("message"),
                )
        raw["tags"] = tags
        return super().from_dict(raw)

    def tag_setting(self, tag: str) -> TagSetting:
        return self.tags.get(tag.upper(), TagSetting(self.default_severity))

    def vocabulary(self) -> list[str]:
        names = list(self.tags) + [t.upper() for t in self.custom_tags]
        return list(dict.fromkeys(names))


def _tag_pattern(tags: list[str]) -> re.Pattern[str]:
    # Longest first so "WARNING" is not consumed as a shorter tag
    alternatives = "|".join(re.escape(t) for t in sorted(tags, key=len, reverse=True))
    return re.compile(rf"\b({alternatives})\b[:：]?\s*(.+)", re.IGNORECASE)


def check_todo_comments(
    docs_dir: Path, files: list[str], options: TodoCommentsOptions | None = None
) -> list[Issue]:
    """Report tag comments such as TODO or FIXME.

    Each match is reported with the severity of its own tag, which is
    independent of the rule severity used for gating and pass/fail.

    Args:
        docs_dir: Documentation root
        files: Docs-relative Markdown files
        options: Tag vocabulary and filters

    Returns:
        One issue per reported tag occurrence
    """
    options = options or TodoCommentsOptions()
    tag_pattern = _tag_pattern(options.vocabulary())
    exclude_patterns = [re.compile(p) for p in options.exclude_patterns]
    issues = []

    for file in files:
        if options.exclude and matches_include(file, options.exclude):
            continue
        document = read_document(docs_dir, file)

        for line_number, line in enumerate(document.lines, start=1):
            if options.ignore_code_blocks and document.in_code_block(line_number):
                continue
            if options.ignore_in_tables and is_table_line(line):
                continue
            if options.ignore_inline_code:
                line = strip_inline_code(line)

            for match in tag_pattern.finditer(line):
                tag = match.group(1).upper()
                setting = options.tag_setting(tag)
                if setting.issue_severity is None:
                    continue
                if any(p.search(match.group(0)) for p in exclude_patterns):
                    continue

                label = setting.label or tag
                text = match.group(2).strip()[:50]
                issues.append(
                    Issue(
                        file_path=file,
                        line_number=line_number,
                        message=f"{tag} ({label}): {text}",
                        suggestion=f"Resolve the {tag} or move it to the issue tracker",
                        severity=setting.issue_severity,
                    )
                )

    return issues
