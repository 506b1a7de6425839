"""Utility functions for dg2srt."""

import logging
import math
import os
import stat
import tempfile
from decimal import Decimal, ROUND_HALF_UP

from .exceptions import FormatError, WriteError

logger = logging.getLogger(__name__)

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        WriteError: If the directory cannot be created due to permissions
                    or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise WriteError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise WriteError(f"Could not create or access directory {dir_path}: {e}") from e

def to_milliseconds(seconds: float) -> int:
    """
    Converts a time in seconds to whole milliseconds, rounding half up.

    The float's shortest decimal representation is used so that values such
    as 1.0005 round to 1001 rather than falling victim to binary error.

    Raises:
        FormatError: If the value is not a finite, non-negative number.
    """
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise FormatError(f"Timestamp is not a number: {seconds!r}")
    if math.isnan(seconds) or math.isinf(seconds):
        raise FormatError(f"Timestamp is not finite: {seconds!r}")
    if seconds < 0:
        raise FormatError(f"Timestamp is negative: {seconds!r}")
    return int((Decimal(repr(seconds)) * 1000).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def _split_milliseconds(seconds: float):
    milliseconds = to_milliseconds(seconds)
    hrs = milliseconds // 3600000
    milliseconds %= 3600000
    mins = milliseconds // 60000
    milliseconds %= 60000
    secs = milliseconds // 1000
    milliseconds %= 1000
    return hrs, mins, secs, milliseconds

def format_time_srt(seconds: float) -> str:
    """
    Formats seconds into SRT time format HH:MM:SS,mmm.

    Args:
        seconds: Time in seconds.

    Returns:
        Formatted time string.
    """
    hrs, mins, secs, milliseconds = _split_milliseconds(seconds)
    return f"{hrs:02d}:{mins:02d}:{secs:02d},{milliseconds:03d}"

def format_time_vtt(seconds: float) -> str:
    """Formats seconds into WebVTT time format HH:MM:SS.mmm."""
    hrs, mins, secs, milliseconds = _split_milliseconds(seconds)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}.{milliseconds:03d}"

def replace_suffix(path: str, old_suffix: str, new_suffix: str) -> str:
    """Swaps a trailing suffix (e.g. '.json' -> '.srt'), appending if absent."""
    if old_suffix and path.endswith(old_suffix):
        path = path[:-len(old_suffix)]
    return path + new_suffix

def _output_mode(path: str) -> int:
    """Mode of the existing file at path, else 0o666 masked by the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

def write_text_atomic(path: str, content: str) -> None:
    """
    Writes UTF-8 text to path, replacing any existing file.

    Content goes to a temporary file in the same directory first and is
    moved into place with os.replace, so a failed write never leaves a
    partial file at path.

    Raises:
        WriteError: If the file cannot be written.
    """
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=directory
        )
        with os.fdopen(fd, "wb") as f:
            f.write(content.encode("utf-8"))
        # mkstemp creates 0600; give the output the mode a plain open() would
        os.chmod(tmp_path, _output_mode(path))
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise WriteError(f"Could not write {path}: {e}") from e
    finally:
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {tmp_path}: {e}")
