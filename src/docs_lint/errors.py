"""Exceptions raised by docs-lint."""


class DocsLintError(Exception):
    """Base exception for docs-lint errors."""

    pass


class DocsDirectoryNotFoundError(DocsLintError):
    """Documentation root does not exist."""

    pass


class NoMarkdownFilesError(DocsLintError):
    """File discovery found nothing to lint."""

    pass


class ConfigError(DocsLintError, ValueError):
    """Configuration file or rule entry is invalid."""

    pass


class TemplateNotFoundError(DocsLintError):
    """Bundled standards template category is missing."""

    pass
