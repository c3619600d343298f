"""Main orchestration for the Muse structure scanner."""

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .document import Document
from .links import LinkResolver, default_resolver
from .outline import ListBlock, OutlineBuilder
from .parser import MuseParser
from .reference_scanner import ReferenceScanner
from .syntax import MuseSyntax

logger = logging.getLogger(__name__)


@dataclass
class ScannerConfig:
    """Which files under a directory count as Muse pages."""

    skip_hidden_files: bool = True
    supported_extensions: List[str] = None

    def __post_init__(self):
        if self.supported_extensions is None:
            self.supported_extensions = [".muse"]
        self.supported_extensions = [ext.lower() for ext in self.supported_extensions]


def find_muse_files(root_dir: Union[str, Path], config: ScannerConfig = None) -> List[str]:
    """
    List Muse pages below ``root_dir``.

    Returns:
        Paths relative to ``root_dir``, directories visited in name order
    """
    config = config or ScannerConfig()
    root_path = Path(root_dir)
    if not root_path.exists():
        raise FileNotFoundError(f"Directory not found: {root_dir}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {root_dir}")

    def log_unreadable(error: OSError):
        logger.warning(f"Skipping unreadable directory: {error.filename}")

    pages = []
    for dirpath, dirnames, filenames in os.walk(root_path, onerror=log_unreadable):
        if config.skip_hidden_files:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            filenames = [name for name in filenames if not name.startswith(".")]
        dirnames.sort()
        for name in sorted(filenames):
            if os.path.splitext(name)[1].lower() in config.supported_extensions:
                pages.append(os.path.relpath(os.path.join(dirpath, name), root_path))
    return pages


class MuseProcessor:
    """Runs parse, outline and link scanning over Muse files."""

    def __init__(
        self,
        syntax: MuseSyntax = None,
        resolver: LinkResolver = None,
        scanner_config: ScannerConfig = None,
    ):
        """
        Initialize the processor.

        Args:
            syntax: Character classes shared by all components
            resolver: Link resolver (the process-wide one if omitted)
            scanner_config: Directory scanning options
        """
        self.resolver = resolver or default_resolver()
        self.syntax = syntax or self.resolver.syntax
        self.scanner_config = scanner_config or ScannerConfig()
        self.parser = MuseParser()
        self.outline_builder = OutlineBuilder(self.syntax)
        self.reference_scanner = ReferenceScanner(
            self.resolver, page_extensions=self.scanner_config.supported_extensions
        )

    def process_directory(self, source_dir: Union[str, Path]) -> List[Dict[str, Any]]:
        """
        Process every Muse file below ``source_dir``.

        Args:
            source_dir: Directory containing Muse files

        Returns:
            One result dictionary per successfully processed file
        """
        source_dir = Path(source_dir)
        if not source_dir.exists():
            raise ValueError(f"Directory does not exist: {source_dir}")

        logger.info(f"Starting Muse processing for directory: {source_dir}")

        results = []
        failed_files = 0

        muse_files = find_muse_files(source_dir, self.scanner_config)
        logger.info(f"Found {len(muse_files)} Muse files to process")

        for file_path in muse_files:
            result = self.process_file(source_dir / file_path, file_path)
            if result is None:
                failed_files += 1
                continue
            results.append(result)

            if len(results) % 10 == 0:
                logger.info(f"Processed {len(results)} files...")

        logger.info(
            f"Processing complete: {len(results)} files processed, {failed_files} files failed"
        )
        return results

    def process_file(
        self, file_path: Union[str, Path], relative_path: str = None
    ) -> Optional[Dict[str, Any]]:
        """
        Process a single Muse file.

        Args:
            file_path: Full path to the Muse file
            relative_path: Name recorded as ``source_file`` (defaults to filename)

        Returns:
            Result dictionary, or None if the file could not be parsed
        """
        file_path = Path(file_path)
        if relative_path is None:
            relative_path = file_path.name

        logger.debug(f"Processing file: {file_path}")

        parse_result = self.parser.parse_file(file_path)
        if not parse_result.success:
            logger.warning(f"Failed to parse file {file_path}: {parse_result.error}")
            return None

        result = self.process_content(parse_result.content, str(relative_path))
        result["frontmatter"] = parse_result.frontmatter
        result["directives"] = parse_result.directives
        return result

    def process_content(self, content: str, filename: str = "content.muse") -> Dict[str, Any]:
        """
        Outline and link-scan content directly (without file I/O).

        Args:
            content: Muse content without front matter or directives
            filename: Name recorded as ``source_file``

        Returns:
            Result dictionary with ``outline``, ``links`` and ``stats``
        """
        outline = self.outline_builder.build(Document(content))
        references = self.reference_scanner.scan_references(content)

        links = [
            asdict(link) for link in references["explicit_links"] + references["implicit_links"]
        ]
        links.sort(key=lambda link: link["line_number"])

        result = {
            "source_file": filename,
            "frontmatter": {},
            "directives": {},
            "outline": outline.to_dict(),
            "links": links,
            "stats": {
                "paragraphs": len(outline.paragraphs),
                "lists": len(outline.lists),
                "list_items": sum(_count_items(block) for block in outline.lists),
                "explicit_links": len(references["explicit_links"]),
                "implicit_links": len(references["implicit_links"]),
                "cross_doc_refs": references["cross_doc_refs"],
            },
        }

        logger.debug(
            f"Outlined {filename}: {result['stats']['paragraphs']} paragraphs, "
            f"{result['stats']['list_items']} list items, {len(links)} links"
        )
        return result

    def get_processing_stats(self, results: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Get statistics about processed files.

        Args:
            results: Result dictionaries from process_directory

        Returns:
            Dictionary with totals across files
        """
        totals = {
            "total_files": len(results),
            "paragraphs": 0,
            "lists": 0,
            "list_items": 0,
            "explicit_links": 0,
            "implicit_links": 0,
        }
        for result in results:
            stats = result.get("stats", {})
            for key in ("paragraphs", "lists", "list_items", "explicit_links", "implicit_links"):
                totals[key] += stats.get(key, 0)

        totals["files_processed"] = sorted(result["source_file"] for result in results)
        return totals


def _count_items(block: ListBlock) -> int:
    count = 0
    for item in block.items:
        count += 1
        count += sum(_count_items(child) for child in item.children)
    return count
