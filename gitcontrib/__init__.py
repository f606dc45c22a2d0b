"""Per-author contribution statistics for git repositories."""

__version__ = "0.2.0"
