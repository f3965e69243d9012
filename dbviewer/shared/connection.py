"""Connection descriptor parsing.

A descriptor is either a bare filesystem path or one of the URI-like forms
``sqlite:path``, ``sqlite://path`` and ``sqlite:///abs/path``. Only local files
are ever produced; there is no host component.
"""

from __future__ import annotations

import os
from pathlib import Path

SQLITE_PREFIX = "sqlite:"
SQLITE_URL_PREFIX = "sqlite://"


def resolve_descriptor(descriptor: str) -> Path:
    """Return the absolute database path a descriptor refers to.

    ``sqlite://`` is stripped first, so ``sqlite:///tmp/a.db`` keeps its leading
    slash and maps to ``/tmp/a.db``. Relative remainders are anchored at the
    current working directory. Existence is not checked.
    """
    if descriptor.startswith(SQLITE_URL_PREFIX):
        remainder = descriptor[len(SQLITE_URL_PREFIX):]
    elif descriptor.startswith(SQLITE_PREFIX):
        remainder = descriptor[len(SQLITE_PREFIX):]
    else:
        remainder = descriptor
    return Path(os.path.abspath(remainder))


def format_connection_string(path: str | Path) -> str:
    """Render a path back into the ``sqlite://`` descriptor form."""
    return f"{SQLITE_URL_PREFIX}{path}"
