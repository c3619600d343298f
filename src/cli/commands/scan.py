"""Scan command - outlines every Muse file in a directory."""

import json
import logging
import sys

from src.cli.commands.outline import build_processor
from src.cli.config import Config

logger = logging.getLogger(__name__)


def scan_command(config: Config, source_dir: str = None, summary_only: bool = False):
    """Process a directory of Muse files and print results or totals as JSON."""
    source_dir = source_dir or config.source_dir
    logger.info(f"📁 Source directory: {source_dir}")

    processor = build_processor(config)
    try:
        results = processor.process_directory(source_dir)
    except (ValueError, NotADirectoryError) as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    if summary_only:
        print(json.dumps(processor.get_processing_stats(results), indent=2))
    else:
        print(json.dumps(results, indent=2, default=str))
