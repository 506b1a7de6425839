"""Handles turning transcript words into subtitle text (SRT, WebVTT)."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from .models import Caption, TranscriptShape
from .exceptions import FormatError
from .utils import format_time_srt, format_time_vtt

logger = logging.getLogger(__name__)

DEFAULT_WORDS_PER_LINE = 8

def _word_groups(payload: dict, shape: TranscriptShape) -> Iterable[tuple]:
    """Yields (words, speaker) for every run of words that may share captions."""
    results = payload["results"]
    if shape is TranscriptShape.UTTERANCE:
        for utterance in results["utterances"]:
            yield utterance["words"], utterance.get("speaker")
        return

    channels = results["channels"]
    if not channels or not channels[0]["alternatives"]:
        return
    yield channels[0]["alternatives"][0]["words"], None

def _word_text(word: dict) -> str:
    text = word.get("punctuated_word")
    if text is None:
        text = word["word"]
    if not isinstance(text, str):
        raise FormatError(f"Word text is not a string: {text!r}")
    return text

def _chunk_words(words: list, words_per_line: int) -> List[list]:
    """Splits words into runs of at most words_per_line, breaking on speaker changes."""
    chunks: List[list] = []
    current: list = []
    for word in words:
        if current and (
            len(current) >= words_per_line
            or word.get("speaker") != current[-1].get("speaker")
        ):
            chunks.append(current)
            current = []
        current.append(word)
    if current:
        chunks.append(current)
    return chunks

def build_captions(
    payload: dict,
    shape: TranscriptShape,
    words_per_line: int = DEFAULT_WORDS_PER_LINE
) -> List[Caption]:
    """
    Groups the transcript's words into numbered captions.

    Channel transcripts use the first alternative of the first channel.
    Utterance transcripts are chunked utterance by utterance so a caption
    never spans two speakers.

    Args:
        payload: A validated (and normalized) transcript.
        shape: The shape reported by the schema validator.
        words_per_line: Maximum number of words in one caption.

    Returns:
        Captions numbered from 1.

    Raises:
        FormatError: If the nested data cannot be traversed.
    """
    if words_per_line < 1:
        raise FormatError(f"words_per_line must be positive, got {words_per_line}")

    captions: List[Caption] = []
    try:
        for words, utterance_speaker in _word_groups(payload, shape):
            for chunk in _chunk_words(words, words_per_line):
                first, last = chunk[0], chunk[-1]
                speaker = first.get("speaker", utterance_speaker)
                captions.append(Caption(
                    index=len(captions) + 1,
                    start_time=first["start"],
                    end_time=last["end"],
                    text=" ".join(_word_text(word) for word in chunk),
                    speaker=speaker,
                ))
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise FormatError(f"Transcript structure could not be traversed: {e!r}") from e

    logger.debug(f"Built {len(captions)} captions from {shape.value} transcript.")
    return captions


class SubtitleFormatter(ABC):
    """Abstract base class for subtitle formatters."""

    extension: str = ""

    @abstractmethod
    def format(self, captions: List[Caption]) -> str:
        """
        Renders captions as subtitle file text.

        Raises:
            FormatError: If a caption cannot be rendered (e.g. bad timestamps).
        """
        pass


class SRTFormatter(SubtitleFormatter):
    """Formats subtitles into the SRT (SubRip Text) format."""

    extension = ".srt"

    def format(self, captions: List[Caption]) -> str:
        blocks = []
        current_speaker: Optional[Any] = None
        for caption in captions:
            start_time_str = format_time_srt(caption.start_time)
            end_time_str = format_time_srt(caption.end_time)

            text = caption.text
            if caption.speaker is not None and caption.speaker != current_speaker:
                text = f"[speaker {caption.speaker}]\n{text}"
            current_speaker = caption.speaker

            blocks.append(f"{caption.index}\n{start_time_str} --> {end_time_str}\n{text}\n\n")
        return "".join(blocks)


class VTTFormatter(SubtitleFormatter):
    """Formats subtitles into the VTT (Web Video Text Tracks) format."""

    extension = ".vtt"

    def format(self, captions: List[Caption]) -> str:
        blocks = ["WEBVTT\n\n"]
        for caption in captions:
            text = caption.text
            if caption.speaker is not None:
                text = f"<v Speaker {caption.speaker}>{text}"
            blocks.append(
                f"{format_time_vtt(caption.start_time)} --> {format_time_vtt(caption.end_time)}\n"
                f"{text}\n\n"
            )
        return "".join(blocks)


FORMATTERS = {
    "srt": SRTFormatter,
    "vtt": VTTFormatter,
}

def get_formatter(output_format: str) -> SubtitleFormatter:
    """Returns a formatter instance for 'srt' or 'vtt'."""
    try:
        return FORMATTERS[output_format.lower()]()
    except KeyError:
        raise FormatError(f"Unsupported output format '{output_format}'.") from None
