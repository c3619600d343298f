"""Main CLI entry point for muse-scan."""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.cli.commands.links import links_command
from src.cli.commands.outline import outline_command
from src.cli.commands.scan import scan_command
from src.cli.config import Config
from src.utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="muse-scan",
        description="Muse structure scanner - paragraphs, nested lists and links",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Outline command
    outline_parser = subparsers.add_parser("outline", help="Print paragraph and list structure of a Muse file")
    outline_parser.add_argument("file", help="Muse file to outline")
    outline_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    outline_parser.add_argument("-v", "--verbose", action="store_true", help="Show processing messages")

    # Links command
    links_parser = subparsers.add_parser("links", help="Print resolved links of a Muse file")
    links_parser.add_argument("file", help="Muse file to scan")
    links_parser.add_argument(
        "--type",
        dest="link_type",
        choices=["anchor", "cross_doc", "external"],
        help="Only show links of this type",
    )
    links_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    links_parser.add_argument("-v", "--verbose", action="store_true", help="Show processing messages")

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Outline every Muse file in a directory")
    scan_parser.add_argument(
        "directory", nargs="?", default=None, help="Directory to scan (default: MUSE_SOURCE_DIR)"
    )
    scan_parser.add_argument("--summary", action="store_true", help="Only print totals across files")
    scan_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    scan_parser.add_argument("-v", "--verbose", action="store_true", help="Show processing messages")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging(verbose=getattr(args, "verbose", False))

    # Load configuration
    config = Config(args.config)

    # Execute command
    if args.command == "outline":
        outline_command(config, args.file)
    elif args.command == "links":
        links_command(config, args.file, link_type=args.link_type)
    elif args.command == "scan":
        scan_command(config, source_dir=args.directory, summary_only=args.summary)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
