"""Line-oriented Markdown scanning shared by the rules.

This is not a Markdown parser. One pass over a document records the facts
the rules need: headings with their levels, fenced code spans and
``[text](path.md)`` links. Rules consume the resulting ``ScannedDocument``
instead of re-running their own fence and heading regexes.
"""

import posixpath
import re
from dataclasses import dataclass, field
from pathlib import Path

HEADING_PATTERN = re.compile(r"^(#{1,6})\s")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+\.md)\)")
INLINE_CODE_PATTERN = re.compile(r"(`+)(.+?)\1")
FENCE_MARKER = "```"


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    line_number: int


@dataclass(frozen=True)
class CodeFence:
    """A fenced code block; end_line is None when the fence never closes."""

    start_line: int
    end_line: int | None
    language: str


@dataclass(frozen=True)
class Link:
    text: str
    target: str
    line_number: int

    @property
    def is_external(self) -> bool:
        return self.target.startswith("http")

    def resolve(self, source_file: str) -> str:
        """Resolve the target against the source file's folder.

        Returns:
            Normalized posix path relative to the docs root
        """
        source_dir = posixpath.dirname(source_file)
        return posixpath.normpath(posixpath.join(source_dir, self.target))


@dataclass
class ScannedDocument:
    """Structural facts about one Markdown document."""

    file_path: str
    lines: list[str]
    headings: list[Heading] = field(default_factory=list)
    fences: list[CodeFence] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    code_lines: set[int] = field(default_factory=set)  # 1-based, fence markers included

    def in_code_block(self, line_number: int) -> bool:
        return line_number in self.code_lines

    def prose_lines(self):
        """Yield (line_number, line) for lines outside fenced code."""
        for line_number, line in enumerate(self.lines, start=1):
            if line_number not in self.code_lines:
                yield line_number, line

    @property
    def relative_links(self) -> list[Link]:
        return [link for link in self.links if not link.is_external]

    def first_heading(self, level: int) -> Heading | None:
        for heading in self.headings:
            if heading.level == level:
                return heading
        return None

    def count_headings(self, level: int) -> int:
        return sum(1 for h in self.headings if h.level == level)


def is_fence_line(line: str) -> bool:
    return line.strip().startswith(FENCE_MARKER)


def is_table_line(line: str) -> bool:
    """Check if a line is a Markdown table row."""
    stripped = line.strip()
    return stripped.startswith("|") and stripped.count("|") >= 2


def strip_inline_code(line: str) -> str:
    """Blank out inline code spans, keeping column positions."""
    return INLINE_CODE_PATTERN.sub(lambda m: " " * len(m.group(0)), line)


def scan_text(text: str, file_path: str = "") -> ScannedDocument:
    """Scan Markdown text.

    Args:
        text: Document content
        file_path: Docs-relative path recorded on the result

    Returns:
        ScannedDocument with headings, fences, links and code line numbers
    """
    lines = text.split("\n")
    document = ScannedDocument(file_path=file_path, lines=lines)

    open_fence: tuple[int, str] | None = None
    for line_number, line in enumerate(lines, start=1):
        for match in LINK_PATTERN.finditer(line):
            document.links.append(Link(match.group(1), match.group(2), line_number))

        if is_fence_line(line):
            document.code_lines.add(line_number)
            if open_fence is None:
                open_fence = (line_number, line.strip()[len(FENCE_MARKER) :].strip())
            else:
                document.fences.append(CodeFence(open_fence[0], line_number, open_fence[1]))
                open_fence = None
            continue

        if open_fence is not None:
            document.code_lines.add(line_number)
            continue

        heading_match = HEADING_PATTERN.match(line)
        if heading_match:
            level = len(heading_match.group(1))
            document.headings.append(Heading(level, line[level:].strip(), line_number))

    if open_fence is not None:
        document.fences.append(CodeFence(open_fence[0], None, open_fence[1]))

    return document


def read_document(docs_dir: Path, file_path: str) -> ScannedDocument:
    """Read and scan a docs-relative Markdown file."""
    text = (docs_dir / file_path).read_text(encoding="utf-8")
    return scan_text(text, file_path)
