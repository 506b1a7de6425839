"""Data models for dg2srt."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

class TranscriptShape(Enum):
    """The transcript result layouts the converter understands."""
    CHANNEL = "channel"
    UTTERANCE = "utterance"

@dataclass(frozen=True)
class ValidationResult:
    """Outcome of schema validation: either a shape or the reason it was rejected."""
    shape: Optional[TranscriptShape] = None
    reason: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.shape is not None

    @classmethod
    def valid(cls, shape: TranscriptShape) -> "ValidationResult":
        return cls(shape=shape)

    @classmethod
    def invalid(cls, reason: str) -> "ValidationResult":
        return cls(reason=reason)

@dataclass
class Caption:
    """Represents a single numbered subtitle block."""
    index: int
    start_time: float
    end_time: float
    text: str
    speaker: Optional[int] = None

class FileOutcome(Enum):
    """What happened to a single input file."""
    CONVERTED = "converted"
    SKIPPED = "skipped"
    PARSE_ERROR = "parse_error"
    FORMAT_ERROR = "format_error"
    WRITE_ERROR = "write_error"
    FAILED = "failed"

@dataclass
class ConversionResult:
    """Holds the result of converting one transcript file."""
    source_path: str
    outcome: FileOutcome
    output_path: Optional[str] = None
    caption_count: int = 0
    message: Optional[str] = None

@dataclass
class BatchSummary:
    """Running counters for a batch run."""
    found: int = 0
    converted: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def conversion_happened(self) -> bool:
        return self.converted > 0

    def record(self, result: ConversionResult) -> None:
        if result.outcome is FileOutcome.CONVERTED:
            self.converted += 1
        elif result.outcome is FileOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
