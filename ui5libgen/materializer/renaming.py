"""Output path renaming rules.

Template paths are POSIX strings relative to the template root.  Each rule is
a plain ``str -> str`` function; :func:`build_rename_rules` returns them in
the order they must run.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial

#: Marker in template file and directory names standing for the library path.
LIBRARY_TOKEN = "_library_"

RenameRule = Callable[[str], str]


def strip_filename_underscore(path: str) -> str:
    """Drop one leading ``_`` from the file name: ``a/_.gitignore`` -> ``a/.gitignore``."""
    head, sep, name = path.rpartition("/")
    if name.startswith("_"):
        name = name[1:]
    return f"{head}{sep}{name}"


def replace_library_token(path: str, lib_uri: str) -> str:
    """Replace every ``_library_`` marker with the library path (``demo/components``)."""
    return path.replace(LIBRARY_TOKEN, lib_uri)


def strip_segment_underscore(path: str) -> str:
    """Remove every underscore directly after a separator: ``src/_x`` -> ``src/x``."""
    return path.replace("/_", "/")


def build_rename_rules(lib_uri: str) -> list[RenameRule]:
    return [
        strip_filename_underscore,
        partial(replace_library_token, lib_uri=lib_uri),
        strip_segment_underscore,
    ]


def rename(path: str, rules: Sequence[RenameRule]) -> str:
    """Apply *rules* to *path* in order."""
    for rule in rules:
        path = rule(path)
    return path
