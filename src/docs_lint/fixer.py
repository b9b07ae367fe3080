"""Apply mechanical formatting fixes to markdown files."""

import re
from pathlib import Path

from common.logger import get_logger

from .scanner import FENCE_MARKER, is_fence_line

logger = get_logger(__name__)

MISSING_HEADING_SPACE = re.compile(r"^(#{1,6})([^#\s])")
DEFAULT_FENCE_LANGUAGE = "text"
HARD_BREAK = "  "


def _is_hard_break(line: str, stripped: str) -> bool:
    """Check for two or more trailing spaces ending a prose line."""
    trailing = line[len(stripped) :]
    return (
        bool(stripped)
        and not stripped.lstrip().startswith("#")
        and not is_fence_line(stripped)
        and trailing.startswith(HARD_BREAK)
        and trailing.strip(" ") == ""
    )


def fix_text(text: str) -> str:
    """Return text with every known formatting fix applied.

    Fixes: trailing whitespace, ``#Heading`` without a space, bare opening
    code fences and trailing blank lines. Code block contents are left as
    they are, and a two-space hard line break before more text is kept.
    """
    lines = text.split("\n")
    fixed = []
    in_code_block = False

    for index, line in enumerate(lines):
        if in_code_block and not is_fence_line(line):
            fixed.append(line)
            continue

        stripped = line.rstrip()
        next_line = lines[index + 1] if index + 1 < len(lines) else ""
        if _is_hard_break(line, stripped) and next_line.strip():
            line = stripped + HARD_BREAK
        else:
            line = stripped

        if is_fence_line(line):
            if not in_code_block and line.strip() == FENCE_MARKER:
                indent = line[: len(line) - len(line.lstrip())]
                line = f"{indent}{FENCE_MARKER}{DEFAULT_FENCE_LANGUAGE}"
            in_code_block = not in_code_block
        elif not in_code_block:
            line = MISSING_HEADING_SPACE.sub(r"\1 \2", line)

        fixed.append(line)

    return "\n".join(fixed).rstrip("\n") + "\n"


class MarkdownFixer:
    """Applies formatting fixes to markdown files."""

    def __init__(self, dry_run: bool = False):
        """Initialize the fixer.

        Args:
            dry_run: If True, don't actually write changes to files
        """
        self.dry_run = dry_run
        self.files_modified: set[Path] = set()

    def fix_file(self, file_path: Path) -> bool:
        """Fix a single file.

        Args:
            file_path: Markdown file to rewrite in place

        Returns:
            True if the file needed changes
        """
        original = file_path.read_text(encoding="utf-8")
        fixed = fix_text(original)
        if fixed == original:
            return False

        if not self.dry_run:
            file_path.write_text(fixed, encoding="utf-8")
        self.files_modified.add(file_path)
        logger.debug(f"Fixed {file_path}")
        return True

    def fix_directory(self, docs_dir: Path, files: list[str]) -> int:
        """Fix docs-relative files under docs_dir.

        Returns:
            Number of files that needed changes
        """
        return sum(1 for file in files if self.fix_file(docs_dir / file))

    def get_modified_files(self) -> set[Path]:
        """Get the set of files that were modified.

        Returns:
            Set of file paths that were modified (or would be, in dry run)
        """
        return self.files_modified
