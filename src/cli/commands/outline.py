"""Outline command - prints the paragraph and list structure of one file."""

import json
import logging
import sys
from pathlib import Path

from src.cli.config import Config
from src.muse_markup.links import LinkResolver
from src.muse_markup.processor import MuseProcessor

logger = logging.getLogger(__name__)


def build_processor(config: Config) -> MuseProcessor:
    """Create a processor using the syntax and scanner settings from ``config``."""
    syntax = config.syntax()
    return MuseProcessor(
        syntax=syntax,
        resolver=LinkResolver(syntax),
        scanner_config=config.scanner_config(),
    )


def outline_command(config: Config, file_path: str):
    """Print the outline of ``file_path`` as JSON."""
    logger.info(f"📄 Outlining {file_path}")

    result = build_processor(config).process_file(Path(file_path))
    if result is None:
        logger.error(f"❌ Could not parse {file_path}")
        sys.exit(1)

    output = {
        "source_file": result["source_file"],
        "directives": result["directives"],
        "frontmatter": result["frontmatter"],
        "outline": result["outline"],
        "stats": result["stats"],
    }
    print(json.dumps(output, indent=2, default=str))
