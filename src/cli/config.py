"""Configuration management for the muse-scan CLI."""

import codecs
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from src.muse_markup.processor import ScannerConfig
from src.muse_markup.syntax import DEFAULT_BLANK_CHARS, DEFAULT_URL_PROTOCOLS, MuseSyntax


class Config:
    """Configuration loaded from .env file."""

    def __init__(self, env_file: Optional[str] = None):
        """Load configuration from .env file."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Load from project root .env
            project_root = Path(__file__).parent.parent.parent
            env_path = project_root / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        # Source files
        self.source_dir = os.getenv("MUSE_SOURCE_DIR", ".")
        self.file_extensions = os.getenv("MUSE_FILE_EXTENSIONS", ".muse").split(",")
        self.skip_hidden_files = os.getenv("SKIP_HIDDEN_FILES", "true").lower() == "true"

        # Markup syntax; escapes such as \t are decoded
        blank_chars = os.getenv("MUSE_BLANK_CHARS")
        if blank_chars:
            # Non-ASCII characters pass through as their own escapes
            blank_chars = codecs.decode(blank_chars.encode("ascii", "backslashreplace"), "unicode_escape")
        self.blank_chars = blank_chars or DEFAULT_BLANK_CHARS
        url_protocols = os.getenv("MUSE_URL_PROTOCOLS")
        self.url_protocols = url_protocols.split(",") if url_protocols else list(DEFAULT_URL_PROTOCOLS)

    def syntax(self) -> MuseSyntax:
        return MuseSyntax(blank_chars=self.blank_chars, url_protocols=self.url_protocols)

    def scanner_config(self) -> ScannerConfig:
        return ScannerConfig(
            skip_hidden_files=self.skip_hidden_files,
            supported_extensions=[ext.strip() for ext in self.file_extensions if ext.strip()],
        )
