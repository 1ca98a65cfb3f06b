"""Configuration management for Tailwind Hierarchy.

Loads environment variables (optionally from a .env file) and provides
centralized config access.
"""
import os
from pathlib import Path
from typing import Dict, Optional
from dotenv import load_dotenv

__version__ = "0.3.0"

DEFAULT_OUTPUT_PATH = "gen/tailwind-component-analysis.gen.md"


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, env_file: Optional[Path] = None):
        """Initialize config by loading a .env file.

        Args:
            env_file: Explicit .env path; defaults to ./.env in the working directory
        """
        load_dotenv(env_file or Path.cwd() / ".env")

    @property
    def source_dir(self) -> str:
        """Directory scanned for component files, relative to the project root.

        Returns:
            Directory name, 'src' unless HIERARCHY_SOURCE_DIR is set
        """
        return os.getenv("HIERARCHY_SOURCE_DIR", "src")

    @property
    def output_path(self) -> str:
        """Where the markdown report is written.

        Returns:
            Report path relative to the project root
        """
        return os.getenv("HIERARCHY_OUTPUT_PATH", DEFAULT_OUTPUT_PATH)

    @property
    def aliases(self) -> Dict[str, str]:
        """Import alias prefixes treated as first-party.

        HIERARCHY_ALIASES uses the form "@/=src/,~/=src/".

        Returns:
            Mapping of alias prefix -> directory relative to the project root
        """
        raw = os.getenv("HIERARCHY_ALIASES")
        if not raw:
            return {"@/": "src/"}
        return parse_aliases(raw)

    @property
    def log_level(self) -> str:
        """Log level for the analyzer loggers.

        Returns:
            Level name, WARNING by default
        """
        return os.getenv("HIERARCHY_LOG_LEVEL", "WARNING").upper()


def parse_aliases(raw: str) -> Dict[str, str]:
    """Parse "prefix=target,prefix=target" into a dict, ignoring malformed entries."""
    aliases = {}
    for entry in raw.split(","):
        prefix, sep, target = entry.strip().partition("=")
        if sep and prefix.strip() and target.strip():
            aliases[prefix.strip()] = target.strip()
    return aliases


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached Config so the next get_config() re-reads the environment."""
    global _config
    _config = None
