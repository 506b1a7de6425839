"""Converts a single transcript JSON file into a subtitle file."""

import json
import logging
from typing import Any

from .models import ConversionResult, FileOutcome
from .normalizer import patch_missing_start_times
from .schema import validate_transcript
from .subtitle_formatter import DEFAULT_WORDS_PER_LINE, SubtitleFormatter, SRTFormatter, build_captions
from .exceptions import JsonParseError
from .utils import replace_suffix, write_text_atomic

logger = logging.getLogger(__name__)

class TranscriptConverter:
    """
    Runs the parse, normalize, validate, format and write steps for one file.
    """

    def __init__(
        self,
        formatter: SubtitleFormatter = None,
        words_per_line: int = DEFAULT_WORDS_PER_LINE,
        input_suffix: str = ".json"
    ):
        """
        Initializes the TranscriptConverter.

        Args:
            formatter: The subtitle formatter; SRT when omitted.
            words_per_line: Maximum words per caption.
            input_suffix: Suffix replaced by the formatter's extension.
        """
        self.formatter = formatter or SRTFormatter()
        self.words_per_line = words_per_line
        self.input_suffix = input_suffix

    def output_path_for(self, json_path: str) -> str:
        return replace_suffix(json_path, self.input_suffix, self.formatter.extension)

    def _load_json(self, json_path: str) -> Any:
        with open(json_path, "rb") as f:
            raw = f.read()
        try:
            return json.loads(raw)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise JsonParseError(f"not valid JSON: {e}") from e

    def render(self, payload: Any) -> tuple:
        """
        Normalizes, validates and formats a parsed payload.

        Returns:
            (subtitle_text, caption_count), or (None, 0) if the payload is
            not a transcript.

        Raises:
            FormatError: If a validated transcript cannot be formatted.
        """
        patch_missing_start_times(payload)
        validation = validate_transcript(payload)
        if not validation.is_valid:
            logger.debug(f"Not a transcript: {validation.reason}")
            return None, 0
        captions = build_captions(payload, validation.shape, self.words_per_line)
        return self.formatter.format(captions), len(captions)

    def convert_file(self, json_path: str) -> ConversionResult:
        """
        Converts one file, writing the subtitle next to it.

        Schema mismatches come back as SKIPPED rather than raising.

        Args:
            json_path: Path to the input JSON file.

        Returns:
            A ConversionResult with outcome CONVERTED or SKIPPED.

        Raises:
            JsonParseError: If the file is not valid JSON.
            FormatError: If the transcript cannot be formatted.
            WriteError: If the output cannot be written.
            OSError: If the input cannot be read.
        """
        payload = self._load_json(json_path)
        content, caption_count = self.render(payload)
        if content is None:
            return ConversionResult(source_path=json_path, outcome=FileOutcome.SKIPPED)

        output_path = self.output_path_for(json_path)
        write_text_atomic(output_path, content)
        logger.info(f"Wrote {caption_count} captions to {output_path}")
        return ConversionResult(
            source_path=json_path,
            outcome=FileOutcome.CONVERTED,
            output_path=output_path,
            caption_count=caption_count,
        )
