#!/usr/bin/env python3
"""CLI interface for docs-lint."""

import argparse
from pathlib import Path

from common.logger import console, error, progress, set_level, setup_logging, success, warning

from .config import load_config, rule_names
from .errors import DocsLintError
from .fixer import MarkdownFixer
from .linter import DocsLinter, LinterOptions
from .models import FolderStructureConfig
from .patterns import discover_files
from .reporters import LintReporter
from .rules.standards_rules import sync_templates


def _split_rules(value: str | None) -> list[str]:
    if not value:
        return []
    names = [name.strip() for name in value.split(",") if name.strip()]
    unknown = sorted(set(names) - set(rule_names()))
    if unknown:
        raise argparse.ArgumentTypeError(f"Unknown rule(s): {', '.join(unknown)}")
    return names


def cmd_lint(args):
    """Run every enabled rule over the docs tree.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if the run passed, 1 on failures or errors)
    """
    if args.format == "json" and not args.output:
        # stdout carries only the JSON report
        set_level("ERROR")
    elif args.verbose:
        set_level("DEBUG")

    try:
        config = load_config(args.config, args.docs_dir)
        options = LinterOptions(
            verbose=args.verbose,
            only=_split_rules(args.only),
            skip=_split_rules(args.skip),
        )
        result = DocsLinter(config, options).lint()
    except (DocsLintError, argparse.ArgumentTypeError) as e:
        print(f"Error: {e}")
        return 1

    reporter = LintReporter(verbose=args.verbose)

    if args.format == "json":
        output = reporter.report_json(result)
        if args.output:
            output_path = Path(args.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Lint results written to {output_path}")
        else:
            print(output)
        return 0 if result.passed else 1

    if args.output:
        output_path = Path(args.output)
        with console.capture() as capture:
            exit_code = reporter.report_console(result)
        output = capture.get()
        output_path.write_text(output, encoding="utf-8")
        print(output, end="")
        print(f"\nLint results also written to {output_path}")
        return exit_code

    return reporter.report_console(result)


def cmd_check_structure(args):
    """Check folder layout, numbering, file naming and duplicate titles.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        config = load_config(args.config, args.docs_dir)
        structure = FolderStructureConfig(
            numbered_folders=args.numbered,
            upper_case_files=args.upper_case,
        )
        results = DocsLinter(config).lint_structure(structure)
    except DocsLintError as e:
        print(f"Error: {e}")
        return 1

    return LintReporter().report_rule_results(results)


def cmd_sync(args):
    """Copy bundled standards templates into the docs tree.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (1 if --check finds differences or the category is unknown)
    """
    try:
        docs_dir = Path(load_config(args.config, args.docs_dir).docs_dir)
        report = sync_templates(
            docs_dir, args.category, force=args.force, check_only=args.check
        )
    except DocsLintError as e:
        print(f"Error: {e}")
        return 1

    if args.check:
        if not report.different:
            success(f"{args.category} is in sync with the templates")
            return 0
        for name in report.different:
            warning(f"{args.category}/{name} is missing or differs from the template")
        progress('Run "docs-lint sync --force" to update')
        return 1

    for name in report.created:
        success(f"Created {args.category}/{name}")
    for name in report.updated:
        success(f"Updated {args.category}/{name}")
    if report.skipped:
        progress(f"Skipped {len(report.skipped)} existing file(s); use --force to overwrite")
    return 0


def cmd_fix(args):
    """Apply formatting fixes to every linted markdown file.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        config = load_config(args.config, args.docs_dir)
    except DocsLintError as e:
        print(f"Error: {e}")
        return 1

    docs_dir = Path(config.docs_dir)
    if not docs_dir.is_dir():
        error(f"Documentation directory not found: {docs_dir}")
        return 1

    files = discover_files(docs_dir, config.include, config.exclude)
    fixer = MarkdownFixer(dry_run=args.dry_run)
    count = fixer.fix_directory(docs_dir, files)

    verb = "Would fix" if args.dry_run else "Fixed"
    for path in sorted(fixer.get_modified_files()):
        progress(f"  {verb} {path.relative_to(docs_dir).as_posix()}")
    success(f"{verb} {count} of {len(files)} file(s)")
    return 0


def main(argv=None):
    """Main entry point for the CLI."""
    setup_logging()

    parser = argparse.ArgumentParser(description="Lint markdown documentation trees")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Lint command
    lint_parser = subparsers.add_parser("lint", help="Run documentation lint rules")
    lint_parser.add_argument(
        "--docs-dir",
        type=str,
        help="Documentation root (default: config file, DOCS_LINT_DOCS_DIR or ./docs)",
    )
    lint_parser.add_argument("--config", type=str, help="Path to config JSON file")
    lint_parser.add_argument("--only", type=str, help="Comma-separated rules to run")
    lint_parser.add_argument("--skip", type=str, help="Comma-separated rules to skip")
    lint_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show every issue with suggestions, and debug logging",
    )
    lint_parser.add_argument(
        "--format",
        choices=["console", "json"],
        default="console",
        help="Output format",
    )
    lint_parser.add_argument(
        "--output",
        type=str,
        help="Write lint results to file (in addition to console for console format)",
    )
    lint_parser.set_defaults(func=cmd_lint)

    # Check-structure command
    structure_parser = subparsers.add_parser(
        "check-structure", help="Check folder layout and file naming"
    )
    structure_parser.add_argument("--docs-dir", type=str, help="Documentation root")
    structure_parser.add_argument("--config", type=str, help="Path to config JSON file")
    structure_parser.add_argument(
        "--numbered", action="store_true", help="Require NN-name folder numbering"
    )
    structure_parser.add_argument(
        "--upper-case", action="store_true", help="Require UPPER-CASE.md file names"
    )
    structure_parser.set_defaults(func=cmd_check_structure)

    # Sync command
    sync_parser = subparsers.add_parser("sync", help="Copy standards templates into docs")
    sync_parser.add_argument("--docs-dir", type=str, help="Documentation root")
    sync_parser.add_argument("--config", type=str, help="Path to config JSON file")
    sync_parser.add_argument(
        "--category",
        type=str,
        default="04-development",
        help="Template category to sync (default: 04-development)",
    )
    sync_parser.add_argument(
        "--force", action="store_true", help="Overwrite files that differ from the template"
    )
    sync_parser.add_argument(
        "--check", action="store_true", help="Only report missing or different files"
    )
    sync_parser.set_defaults(func=cmd_sync)

    # Fix command
    fix_parser = subparsers.add_parser("fix", help="Apply formatting fixes to markdown files")
    fix_parser.add_argument("--docs-dir", type=str, help="Documentation root")
    fix_parser.add_argument("--config", type=str, help="Path to config JSON file")
    fix_parser.add_argument(
        "--dry-run", action="store_true", help="Report files that would change without writing"
    )
    fix_parser.set_defaults(func=cmd_fix)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    exit(main())
