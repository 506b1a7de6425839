"""Patches for known defects in transcription results."""

import logging
from typing import Any, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

# The upstream API sometimes drops the start time of the very first word.
# Only these two positions are patched.
FIRST_WORD_PATHS = (
    ("results", "utterances", 0, "words", 0),
    ("results", "channels", 0, "alternatives", 0, "words", 0),
)

def _resolve(payload: Any, path: Sequence[Union[str, int]]) -> Optional[dict]:
    node = payload
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or len(node) <= key:
                return None
        elif not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node if isinstance(node, dict) else None

def _dotted(path: Sequence[Union[str, int]]) -> str:
    out = ""
    for key in path:
        out += f"[{key}]" if isinstance(key, int) else (f".{key}" if out else key)
    return out + ".start"

def patch_missing_start_times(payload: Any) -> List[str]:
    """
    Sets a missing (or null) first-word start time to 0.0, in place.

    Args:
        payload: Parsed JSON. Anything that does not reach the patched
                 positions is left untouched.

    Returns:
        The dotted paths that were patched.
    """
    patched = []
    for path in FIRST_WORD_PATHS:
        word = _resolve(payload, path)
        if word is None or word.get("start") is not None:
            continue
        word["start"] = 0.0
        location = _dotted(path)
        logger.info(f"Missing start time at {location}; defaulted to 0.0")
        patched.append(location)
    return patched
