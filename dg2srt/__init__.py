"""dg2srt: convert speech-to-text transcription JSON into subtitle files."""

__version__ = "0.1.0"
