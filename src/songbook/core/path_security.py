"""
Path security validation utilities for Songbook.

Provides pure functions to reduce client-supplied names to safe filenames and
to validate that file paths stay inside the library directory, preventing
directory traversal attacks and symlink escapes.
"""

from pathlib import Path, PureWindowsPath
from typing import Optional


def safe_basename(name: str) -> Optional[str]:
    """Pure function - strips path components from a client-supplied name.

    PureWindowsPath splits on both "/" and "\\", so names from either kind of
    client lose their directory part.

    Args:
        name: Filename or title as sent by the client

    Returns:
        The bare filename, or None if nothing usable remains. Hidden names
        (leading dot) are rejected since the store keeps its own bookkeeping
        directories that way.
    """
    if not name:
        return None

    base = PureWindowsPath(name.strip()).name.strip()
    if not base or base in {".", ".."} or base.startswith("."):
        return None
    if "\x00" in base:
        return None

    return base


def is_path_within_root(file_path: Path, root: Path) -> bool:
    """Pure function - validates path is within the given directory.

    Uses Path.resolve() to handle symlinks and relative paths, then checks if
    the resolved path is a child of the resolved root.

    Args:
        file_path: The file path to validate
        root: Allowed root directory

    Returns:
        True if path is within root, False otherwise
    """
    try:
        resolved_path = file_path.resolve()
        resolved_root = root.resolve()
        resolved_path.relative_to(resolved_root)
        return resolved_path != resolved_root
    except ValueError:
        # relative_to raises ValueError if path is not a subpath
        return False
    except (OSError, RuntimeError):
        # Path.resolve() can raise OSError for invalid paths or RuntimeError for recursion
        return False


def resolve_in_root(root: Path, name: str) -> Optional[Path]:
    """Pure function - returns root/name if name is a safe filename inside root.

    Unlike safe_basename this does not neutralise directory parts: a name that
    is not already a bare filename is refused outright.

    Args:
        root: Directory the name must live in
        name: Filename to resolve

    Returns:
        The joined path, or None if the name is unsafe
    """
    base = safe_basename(name)
    if base is None or base != name:
        return None

    candidate = root / base
    if not is_path_within_root(candidate, root):
        return None

    return candidate
