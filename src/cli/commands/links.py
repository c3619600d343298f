"""Links command - prints the resolved links of one file."""

import json
import logging
import sys
from pathlib import Path

from src.cli.commands.outline import build_processor
from src.cli.config import Config

logger = logging.getLogger(__name__)


def links_command(config: Config, file_path: str, link_type: str = None):
    """Print the links found in ``file_path`` as JSON, optionally filtered by type."""
    logger.info(f"🔗 Scanning links in {file_path}")

    result = build_processor(config).process_file(Path(file_path))
    if result is None:
        logger.error(f"❌ Could not parse {file_path}")
        sys.exit(1)

    links = result["links"]
    if link_type:
        links = [link for link in links if link["link_type"] == link_type]

    logger.info(f"✅ Found {len(links)} links")
    print(json.dumps(links, indent=2))
