"""Custom Exceptions for the dg2srt application."""

class Dg2SrtError(Exception):
    """Base class for exceptions in this module."""
    pass

class UsageError(Dg2SrtError):
    """Exception raised when the command line arguments are unusable."""
    pass

class ConfigurationError(Dg2SrtError):
    """Exception raised for errors in configuration loading."""
    pass

class JsonParseError(Dg2SrtError):
    """Exception raised when an input file is not valid JSON."""
    pass

class FormatError(Dg2SrtError):
    """Exception raised when transcript data cannot be turned into subtitle text."""
    pass

class WriteError(Dg2SrtError):
    """Exception raised when a subtitle file cannot be written (permissions, disk full etc)."""
    pass
