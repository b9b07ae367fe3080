"""Drift between project standards documents and the bundled templates."""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import TemplateNotFoundError
from ..models import Issue
from .base import RuleOptions

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True)
class StandardsDriftOptions(RuleOptions):
    categories: tuple[str, ...] = ("04-development",)
    report_missing: bool = True
    report_different: bool = True


@dataclass
class SyncReport:
    """Outcome of copying one template category into a docs tree."""

    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    different: list[str] = field(default_factory=list)  # Missing or changed, check mode only


def get_templates_dir() -> Path | None:
    """Return the bundled templates directory, or None if not installed."""
    return TEMPLATES_DIR if TEMPLATES_DIR.is_dir() else None


def list_categories(templates_dir: Path) -> list[str]:
    return sorted(p.name for p in templates_dir.iterdir() if p.is_dir())


def _template_files(category_dir: Path) -> list[str]:
    return sorted(p.name for p in category_dir.iterdir() if p.is_file() and p.suffix == ".md")


def check_standards_drift(
    docs_dir: Path, templates_dir: Path, options: StandardsDriftOptions | None = None
) -> list[Issue]:
    """Compare each template file byte-for-byte with the project's copy.

    Categories without a template folder are skipped.
    """
    options = options or StandardsDriftOptions()
    issues = []

    for category in options.categories:
        template_category = templates_dir / category
        if not template_category.is_dir():
            continue

        for name in _template_files(template_category):
            docs_path = docs_dir / category / name
            relative = f"{category}/{name}"
            if not docs_path.exists():
                if options.report_missing:
                    issues.append(
                        Issue(
                            file_path=relative,
                            message="Missing standards file from template",
                            suggestion='Run "docs-lint sync" to add this file',
                        )
                    )
            elif options.report_different:
                if docs_path.read_bytes() != (template_category / name).read_bytes():
                    issues.append(
                        Issue(
                            file_path=relative,
                            message="File differs from template",
                            suggestion=(
                                'Run "docs-lint sync --check" to see differences '
                                'or "docs-lint sync --force" to update'
                            ),
                        )
                    )

    return issues


def sync_templates(
    docs_dir: Path,
    category: str,
    templates_dir: Path | None = None,
    force: bool = False,
    check_only: bool = False,
) -> SyncReport:
    """Copy one template category into the docs tree.

    Args:
        docs_dir: Documentation root
        category: Template category folder, e.g. "04-development"
        templates_dir: Override of the bundled templates directory
        force: Overwrite files that differ from the template
        check_only: Only report missing or different files, write nothing

    Returns:
        SyncReport listing what was created, updated, skipped or differs

    Raises:
        TemplateNotFoundError: If the category has no template folder
    """
    templates_dir = templates_dir or get_templates_dir()
    category_dir = templates_dir / category if templates_dir else None
    if category_dir is None or not category_dir.is_dir():
        raise TemplateNotFoundError(f"Template category not found: {category}")

    report = SyncReport()
    target_dir = docs_dir / category

    for name in _template_files(category_dir):
        source = category_dir / name
        target = target_dir / name

        if target.exists():
            is_different = target.read_bytes() != source.read_bytes()
            if check_only:
                if is_different:
                    report.different.append(name)
            elif force and is_different:
                shutil.copyfile(source, target)
                report.updated.append(name)
            else:
                report.skipped.append(name)
        elif check_only:
            report.different.append(name)
        else:
            target_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            report.created.append(name)

    return report
