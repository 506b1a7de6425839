"""Batch conversion of every transcript under a directory tree."""

import logging
import os
from typing import Dict, List

from .converter import TranscriptConverter
from .exceptions import FormatError, JsonParseError, WriteError
from .models import BatchSummary, ConversionResult, FileOutcome
from .reporter import ConsoleReporter

logger = logging.getLogger(__name__)

def find_transcripts(
    root_dir: str,
    suffix: str = ".json",
    include_hidden: bool = False
) -> Dict[str, List[str]]:
    """
    Finds every file ending in suffix below root_dir, grouped by directory.

    The suffix match is case-sensitive. Hidden (dot-prefixed) files and
    directories are skipped unless include_hidden is set. Symlinked
    directories are not followed.

    Args:
        root_dir: The directory to search.
        suffix: The file name suffix to match.
        include_hidden: Whether to descend into hidden directories/files.

    Returns:
        Mapping of directory (relative to root_dir, '.' for the root) to the
        matching file paths (relative to root_dir). Walk order is sorted so
        repeated runs visit files in the same order.
    """
    groups: Dict[str, List[str]] = {}
    for dirpath, dirnames, filenames in os.walk(root_dir):
        if not include_hidden:
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        dirnames.sort()

        rel_dir = os.path.relpath(dirpath, root_dir)
        for filename in sorted(filenames):
            if not filename.endswith(suffix):
                continue
            if not include_hidden and filename.startswith("."):
                continue
            rel_path = filename if rel_dir == "." else os.path.join(rel_dir, filename)
            groups.setdefault(rel_dir, []).append(rel_path)

    logger.debug(f"Found {sum(len(f) for f in groups.values())} candidate files in {len(groups)} directories.")
    return groups


class BatchConverter:
    """Walks a directory tree and converts each transcript in turn."""

    def __init__(
        self,
        converter: TranscriptConverter,
        reporter: ConsoleReporter = None,
        include_hidden: bool = False
    ):
        self.converter = converter
        self.reporter = reporter or ConsoleReporter()
        self.include_hidden = include_hidden

    def _convert_one(self, file_path: str) -> ConversionResult:
        """Per-file error boundary: nothing raised here stops the batch."""
        file_name = os.path.basename(file_path)
        try:
            return self.converter.convert_file(file_path)
        except JsonParseError as e:
            self.reporter.file_warning(file_name, str(e))
            return ConversionResult(file_path, FileOutcome.PARSE_ERROR, message=str(e))
        except FormatError as e:
            self.reporter.file_error(file_name, str(e))
            return ConversionResult(file_path, FileOutcome.FORMAT_ERROR, message=str(e))
        except WriteError as e:
            self.reporter.file_error(file_name, str(e))
            return ConversionResult(file_path, FileOutcome.WRITE_ERROR, message=str(e))
        except Exception as e:
            logger.error(f"Unexpected error processing {file_path}: {e}", exc_info=True)
            self.reporter.file_error(file_name, str(e))
            return ConversionResult(file_path, FileOutcome.FAILED, message=str(e))

    def run(self, root_dir: str) -> BatchSummary:
        """
        Converts every transcript under root_dir.

        Args:
            root_dir: An existing directory (checked by the caller).

        Returns:
            Counters for the run.
        """
        summary = BatchSummary()
        suffix = self.converter.input_suffix
        groups = find_transcripts(root_dir, suffix=suffix, include_hidden=self.include_hidden)

        if not groups:
            self.reporter.warning(
                f"No files found matching the glob pattern '**/*{suffix}' in directory '{root_dir}'."
            )
            return summary

        for rel_dir, rel_paths in groups.items():
            directory_printed = False
            for rel_path in rel_paths:
                summary.found += 1
                result = self._convert_one(os.path.join(root_dir, rel_path))
                summary.record(result)

                if result.outcome is not FileOutcome.CONVERTED:
                    continue
                if not directory_printed:
                    self.reporter.directory(rel_dir)
                    directory_printed = True
                self.reporter.converted(
                    os.path.basename(rel_path), os.path.basename(result.output_path)
                )

        if not summary.conversion_happened:
            self.reporter.warning("No transcript JSON files converted to subtitles.")
        else:
            self.reporter.success(f"All {summary.converted} conversions completed successfully")
        logger.info(
            f"Batch finished: found={summary.found} converted={summary.converted} "
            f"skipped={summary.skipped} failed={summary.failed}"
        )
        return summary
