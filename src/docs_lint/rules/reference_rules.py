"""Rules over the graph of links between documents."""

from dataclasses import dataclass
from pathlib import Path

from ..models import Issue
from ..patterns import matches_include
from ..scanner import read_document
from .base import RuleOptions


@dataclass(frozen=True)
class OrphanDocumentsOptions(RuleOptions):
    exclude: tuple[str, ...] = ()  # Substrings or wildcards of files never reported


def build_reference_graph(docs_dir: Path, files: list[str]) -> dict[str, set[str]]:
    """Map every file to the docs-relative targets of its relative links.

    Self-links are dropped. Targets are not filtered against ``files``.
    """
    graph: dict[str, set[str]] = {}
    for file in files:
        document = read_document(docs_dir, file)
        targets = {link.resolve(file) for link in document.relative_links}
        targets.discard(file)
        graph[file] = targets
    return graph


def check_orphan_documents(
    docs_dir: Path, files: list[str], options: OrphanDocumentsOptions | None = None
) -> list[Issue]:
    """Flag documents that no other document links to.

    README.md files are entry points and never orphans.
    """
    options = options or OrphanDocumentsOptions()
    graph = build_reference_graph(docs_dir, files)
    referenced = set().union(*graph.values()) if graph else set()

    issues = []
    for file in files:
        if Path(file).name == "README.md":
            continue
        if options.exclude and matches_include(file, options.exclude):
            continue
        if file not in referenced:
            issues.append(
                Issue(
                    file_path=file,
                    message="Document not referenced anywhere",
                    suggestion="Add a link from another document or README.md",
                )
            )
    return issues


def check_bidirectional_refs(docs_dir: Path, files: list[str]) -> list[Issue]:
    """Flag links A -> B inside the checked set where B does not link back."""
    graph = build_reference_graph(docs_dir, files)
    checked = set(files)
    issues = []

    for file in files:
        for target in sorted(graph[file] & checked):
            if file not in graph[target]:
                issues.append(
                    Issue(
                        file_path=file,
                        message=f'References "{target}" but no back-reference exists',
                        suggestion=f'Add a link back from "{target}"',
                    )
                )
    return issues
