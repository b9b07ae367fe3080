"""Shared constants for docs-lint.

For environment-based configuration use the env module:
    from common.env import env
    docs_dir = env.docs_dir()
"""

DEFAULT_DOCS_DIR = "./docs"

# Configuration files searched in the working directory, in order
CONFIG_FILE_NAMES: tuple[str, ...] = (
    "docs-lint.config.json",
    ".docs-lintrc.json",
)

# Label used in issues that refer to the docs root itself
DOCS_ROOT_LABEL = "."

# Top-level folders tolerated beside the numbered layout
SPECIAL_FOLDERS: set[str] = {
    "translations",
    "drafts",
    "images",
    "assets",
}
