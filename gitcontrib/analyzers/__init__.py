"""Analyzer functions: each turns captured git output into plain mappings."""

# Lazy re-exports: import only when the package itself is imported (not when
# individual modules are run via `python -m`), which prevents a harmless but
# noisy RuntimeWarning from runpy.
from importlib import import_module as _im


def __getattr__(name: str):  # noqa: N807
    _map = {
        "extract_checked_out_branch": ("branch", "extract_checked_out_branch"),
        "get_checked_out_branch": ("branch", "get_checked_out_branch"),
        "map_author_commits": ("commits", "map_author_commits"),
        "get_author_commits": ("commits", "get_author_commits"),
        "parse_line_changes": ("changes", "parse_line_changes"),
        "get_line_changes": ("changes", "get_line_changes"),
    }
    if name in _map:
        mod_name, attr = _map[name]
        mod = _im(f"gitcontrib.analyzers.{mod_name}")
        return getattr(mod, attr)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "extract_checked_out_branch",
    "get_checked_out_branch",
    "map_author_commits",
    "get_author_commits",
    "parse_line_changes",
    "get_line_changes",
]
