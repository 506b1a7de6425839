"""Command-Line Interface handler for dg2srt."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .batch import BatchConverter
from .config_loader import ConfigLoader
from .converter import TranscriptConverter
from .log_setup import setup_logging
from .reporter import ConsoleReporter
from .subtitle_formatter import get_formatter
from .exceptions import ConfigurationError, UsageError

logger = logging.getLogger(__name__) # Get logger for this module

DEFAULT_CONFIG_FILE = "config.yaml"

class CLIHandler:
    """Parses arguments and drives a batch conversion."""

    def __init__(self, reporter: Optional[ConsoleReporter] = None):
        self.parser = self._create_parser()
        self.reporter = reporter or ConsoleReporter()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            prog="dg2srt",
            description="dg2srt: Convert transcription JSON files under a directory into subtitle files.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "directory",
            nargs="?",
            default=None,
            help="Root directory to scan recursively for transcript JSON files."
        )
        parser.add_argument(
            "-c", "--config",
            default=None,
            help=f"Path to a YAML configuration file. Uses ./{DEFAULT_CONFIG_FILE} if present."
        )
        parser.add_argument(
            "--format",
            dest="output_format",
            default=None, # Default taken from config
            choices=["srt", "vtt"],
            help="Override the subtitle format specified in config."
        )
        parser.add_argument(
            "--words-per-line",
            type=int,
            default=None, # Default taken from config
            help="Override the maximum number of words per caption."
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for the log file (and console with --verbose)."
        )
        parser.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Also print diagnostic log messages to stderr."
        )
        return parser

    def _resolve_directory(self, directory: Optional[str]) -> str:
        """
        Checks the target directory argument.

        Raises:
            UsageError: If it is missing, does not exist, or is not a directory.
        """
        if not directory:
            raise UsageError("Please specify a directory to process.")
        resolved_dir = os.path.abspath(directory)
        if not os.path.exists(resolved_dir):
            raise UsageError(f"Directory '{resolved_dir}' does not exist.")
        if not os.path.isdir(resolved_dir):
            raise UsageError(f"'{resolved_dir}' is not a directory.")
        return resolved_dir

    def _load_config(self, args: argparse.Namespace) -> dict:
        config_path = args.config
        if config_path is None and os.path.isfile(DEFAULT_CONFIG_FILE):
            config_path = DEFAULT_CONFIG_FILE

        try:
            config = ConfigLoader().load_config(config_path)
        except FileNotFoundError as e:
            raise ConfigurationError(str(e)) from e

        # --- Apply CLI Overrides ---
        if args.output_format:
            logger.info(f"Overriding output_format from config with CLI argument: {args.output_format}")
            config['output_format'] = args.output_format
        if args.words_per_line is not None:
            logger.info(f"Overriding words_per_line from config with CLI argument: {args.words_per_line}")
            config['words_per_line'] = args.words_per_line
        ConfigLoader.validate(config)
        return config

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Parses arguments, sets up logging, loads config, and runs the batch.

        Returns:
            The process exit status.
        """
        args = self.parser.parse_args(argv)
        log_level = getattr(logging, args.log_level.upper(), logging.INFO)

        try:
            # --- Validate Input Path before anything is touched ---
            target_dir = self._resolve_directory(args.directory)

            # --- Load Configuration ---
            config = self._load_config(args)

            # --- Setup Logging ---
            setup_logging(
                log_level=log_level,
                log_dir=config['log_dir'],
                log_file=config['log_file'],
                console=args.verbose,
                max_bytes=config['log_max_bytes'],
                backup_count=config['log_backup_count']
            )

            converter = TranscriptConverter(
                formatter=get_formatter(config['output_format']),
                words_per_line=config['words_per_line'],
                input_suffix=config['input_suffix']
            )
            batch = BatchConverter(
                converter,
                reporter=self.reporter,
                include_hidden=config['include_hidden']
            )
            logger.info(f"Converting transcripts under {target_dir} to {config['output_format'].upper()}")

            # --- Run Conversion ---
            batch.run(target_dir)
            return 0

        except (UsageError, ConfigurationError) as e:
            self.reporter.fatal(str(e))
            return 1
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            self.reporter.fatal("Interrupted.")
            return 1
        except Exception as e:
            # Anything escaping the per-file boundary ends up here
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            self.reporter.fatal(f"🚨 Critical error: {e}")
            return 2


def main(argv: Optional[List[str]] = None) -> None:
    """Console script entry point."""
    sys.exit(CLIHandler().run(argv))
