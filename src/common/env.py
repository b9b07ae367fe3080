"""Environment configuration interface for docs-lint.

This module centralizes all environment variable access in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from common.constants import DEFAULT_DOCS_DIR

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def config_path() -> Path | None:
        """Get an explicit configuration file path.

        Returns:
            Path from DOCS_LINT_CONFIG, or None to search the default locations
        """
        value = os.getenv("DOCS_LINT_CONFIG")
        return Path(value) if value else None

    @staticmethod
    def docs_dir() -> str:
        """Get the documentation root.

        Returns:
            Docs directory, defaults to './docs'
        """
        return os.getenv("DOCS_LINT_DOCS_DIR", DEFAULT_DOCS_DIR)

    @staticmethod
    def log_level(default: str = "INFO") -> str:
        """Get the logging level.

        Args:
            default: Level used when LOG_LEVEL is unset

        Returns:
            Upper-cased level name
        """
        return os.getenv("LOG_LEVEL", default).upper()


# Singleton instance for convenient access
env = Environment()
