"""Errors raised while collecting and parsing git output."""


class GitContribError(Exception):
    """Base class for every failure that aborts a report."""


class ParseFailure(GitContribError, ValueError):
    """git produced text that does not have the expected shape."""


class ProcessFailure(GitContribError, RuntimeError):
    """git could not be run, exited non-zero, or printed nothing useful."""
