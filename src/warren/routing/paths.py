"""File-name to URL-path conventions.

Route files map to URL paths by name::

    index.py          -> /
    about.py          -> /about
    [slug].py         -> /{slug}
    [...rest].py      -> /{rest:path}

Directories follow the same bracket convention, so ``users/[id]/``
becomes the mount prefix ``/users/{id}``.
"""

import re

_CATCH_ALL_RE = re.compile(r"\[\.\.\.(\w+)\]")
_PARAM_RE = re.compile(r"\[(\w+)\]")


def _convert_segment(segment: str) -> str:
    segment = _CATCH_ALL_RE.sub(r"{\1:path}", segment)
    return _PARAM_RE.sub(r"{\1}", segment)


def file_path_to_path(filename: str) -> str:
    """Map a route file name (or relative file path) to a URL path."""
    path = filename.replace("\\", "/").lstrip("/")
    stem, dot, _suffix = path.rpartition(".")
    if dot and "/" not in _suffix:
        path = stem

    segments = [_convert_segment(s) for s in path.split("/") if s]
    if segments and segments[-1] == "index":
        segments.pop()
    return "/" + "/".join(segments)


def directory_to_prefix(directory: str, root: str) -> str:
    """Mount prefix for a route directory: *directory* with *root* stripped.

    The root directory itself mounts at ``/``.
    """
    root = root.rstrip("/")
    if directory == root:
        relative = ""
    elif directory.startswith(root + "/"):
        relative = directory[len(root) :]
    else:
        relative = directory

    segments = [_convert_segment(s) for s in relative.split("/") if s]
    return "/" + "/".join(segments)
