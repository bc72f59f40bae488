"""Filesystem sandbox utilities for safe path resolution."""

import urllib.parse
from pathlib import Path, PurePosixPath


class ForbiddenPath(Exception):
    """Raised when a requested path escapes the serving directory."""


def _has_parent_reference(user_path: str) -> bool:
    decoded = urllib.parse.unquote(user_path)
    return any(
        ".." in PurePosixPath(candidate.replace("\\", "/")).parts
        for candidate in (user_path, decoded)
    )


def resolve_sandbox_path(directory: str, user_path: str) -> Path:
    """Join ``user_path`` onto ``directory`` and keep the result inside it.

    The filename itself is not percent-decoded; the decoded form is only
    inspected so that encoded ``..`` segments are rejected as well.
    """
    if "\x00" in user_path or _has_parent_reference(user_path):
        raise ForbiddenPath

    directory_root = Path(directory).resolve()
    target = (directory_root / user_path.lstrip("/")).resolve()
    if not (target == directory_root or directory_root in target.parents):
        raise ForbiddenPath
    return target
