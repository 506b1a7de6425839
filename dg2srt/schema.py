"""Recognises parsed JSON payloads that look like transcription results."""

import logging
from typing import Any

from .models import TranscriptShape, ValidationResult

logger = logging.getLogger(__name__)

def _is_number(value: Any) -> bool:
    # bool is an int subclass but true/false are not timestamps
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def _is_word(word: Any) -> bool:
    return (
        isinstance(word, dict)
        and isinstance(word.get("word"), str)
        and _is_number(word.get("start"))
        and _is_number(word.get("end"))
    )

def _has_valid_words(container: Any) -> bool:
    if not isinstance(container, dict):
        return False
    words = container.get("words")
    return isinstance(words, list) and all(_is_word(word) for word in words)

def _check_channels(channels: Any) -> str:
    """Returns an empty string when channels are well formed, else the reason."""
    if not isinstance(channels, list):
        return "results.channels is not an array"
    for c_idx, channel in enumerate(channels):
        alternatives = channel.get("alternatives") if isinstance(channel, dict) else None
        if not isinstance(alternatives, list):
            return f"results.channels[{c_idx}].alternatives is not an array"
        for a_idx, alternative in enumerate(alternatives):
            if not _has_valid_words(alternative):
                return f"results.channels[{c_idx}].alternatives[{a_idx}].words is malformed"
    return ""

def validate_transcript(payload: Any) -> ValidationResult:
    """
    Classifies a parsed JSON value as a transcript or not.

    A transcript needs a string ``metadata.created`` and a
    ``results.channels`` array whose alternatives all carry word arrays with
    a string ``word`` and numeric ``start``/``end``. Empty arrays pass.

    A well formed ``results.utterances`` array upgrades the shape to
    UTTERANCE. A malformed one is ignored and the channel data is used.

    Args:
        payload: Any value produced by json.loads.

    Returns:
        ValidationResult.valid(shape) or ValidationResult.invalid(reason).
    """
    if not isinstance(payload, dict):
        return ValidationResult.invalid("top-level value is not an object")

    metadata = payload.get("metadata")
    if not isinstance(metadata, dict) or not isinstance(metadata.get("created"), str):
        return ValidationResult.invalid("metadata.created is missing or not a string")

    results = payload.get("results")
    if not isinstance(results, dict):
        return ValidationResult.invalid("results is missing or not an object")

    reason = _check_channels(results.get("channels"))
    if reason:
        return ValidationResult.invalid(reason)

    if "utterances" in results:
        utterances = results["utterances"]
        if isinstance(utterances, list) and all(_has_valid_words(u) for u in utterances):
            return ValidationResult.valid(TranscriptShape.UTTERANCE)
        logger.debug("Ignoring malformed results.utterances; falling back to channel words.")

    return ValidationResult.valid(TranscriptShape.CHANNEL)
