"""Exceptions raised by the application layer (the engines themselves do not raise)"""


class DiedricoError(Exception):
    """Base class for diedrico errors"""


class ProgressCodeError(DiedricoError, ValueError):
    """A progress code could not be decoded"""


class ExportError(DiedricoError):
    """A drawing or surface could not be written"""
