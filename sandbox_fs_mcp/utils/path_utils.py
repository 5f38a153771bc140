import logging
import os
from pathlib import Path
from typing import Iterable

from sandbox_fs_mcp.models.session import NavigationContext
from sandbox_fs_mcp.tools.base import ToolError

logger = logging.getLogger(__name__)

# Requests that always mean "go to the sandbox root".
ROOT_ALIASES = ("~", "/")


class SecurityViolation(ToolError):
    """Raised when a path resolves outside of the sandbox root."""

    def __init__(self, root: Path, attempted: Path | str):
        self.root = root
        self.attempted = attempted
        super().__init__(
            "Security Error: Cannot access a path outside the project root.\n"
            f"  Root: {root}\n"
            f"  Attempted: {attempted}"
        )


class ProtectedPathError(ToolError):
    """Raised when a path names a protected directory or a sensitive file."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Security Error: Access to protected {kind} '{name}' is not allowed.")


def is_within_root(root: Path, candidate: Path) -> bool:
    """
    Checks that `candidate` is `root` itself or lies below it.

    The comparison is done on whole path components, so `/a/bc` is not
    considered to be inside `/a/b`.
    """
    return candidate == root or candidate.is_relative_to(root)


def real_path(path: Path) -> Path:
    """Follows every symlink in `path`. A dangling final link resolves to where it points."""
    try:
        return path.resolve(strict=True)
    except FileNotFoundError:
        return path.resolve()


def resolve_path(state: NavigationContext, path_str: str) -> Path:
    """
    Resolves a user-provided path against the session state, ensuring it's within the sandbox.

    The path is joined to the current directory and normalized lexically: `..` and `.`
    segments are collapsed without consulting the filesystem. Existence is not checked.
    If the normalized path exists, the real path behind any symlinks must be inside the
    root as well.

    Args:
        state: The NavigationContext for the session.
        path_str: The path string provided by the user.

    Returns:
        An absolute, normalized Path inside the sandbox root.

    Raises:
        SecurityViolation: If the path escapes the sandbox root.
        FileNotFoundError: If an existing symlink on the path cannot be resolved.
    """
    root = state.root
    clean = path_str.replace("\0", "")

    if clean in ROOT_ALIASES:
        return root

    resolved = Path(os.path.normpath(os.path.join(state.cwd, clean)))

    if not is_within_root(root, resolved):
        logger.warning("Blocked path outside of sandbox: %s (root: %s)", resolved, root)
        raise SecurityViolation(root, resolved)

    if os.path.lexists(resolved):
        try:
            real = real_path(resolved)
        except (OSError, RuntimeError) as e:
            # Symlink loops raise RuntimeError on 3.12 and OSError (ELOOP) on later releases.
            logger.warning("Unresolvable symlink: %s (%s)", resolved, e)
            raise FileNotFoundError(
                f"Path cannot be resolved (symlink loop): {path_str}\n  Resolved to: {resolved}"
            ) from e
        if not is_within_root(root, real):
            logger.warning("Blocked symlink escape: %s -> %s (root: %s)", resolved, real, root)
            raise SecurityViolation(root, real)

    return resolved


def check_protected(
    state: NavigationContext,
    target: Path,
    protected_directories: Iterable[str],
    protected_files: Iterable[str],
) -> None:
    """
    Rejects targets that are, or lie inside, a protected directory, and sensitive files.

    Only the components below the sandbox root are inspected, so a root that itself
    sits under e.g. `~/.aws` stays usable. File names are compared case-insensitively.

    Raises:
        ProtectedPathError: If the target is protected.
    """
    parts = target.relative_to(state.root).parts
    directories = set(protected_directories)
    for part in parts:
        if part in directories:
            logger.warning("Blocked protected directory: %s (target: %s)", part, target)
            raise ProtectedPathError("directory", part)

    if parts and parts[-1].lower() in {name.lower() for name in protected_files}:
        logger.warning("Blocked sensitive file: %s", target)
        raise ProtectedPathError("file", parts[-1])


def change_directory(state: NavigationContext, path_str: str) -> tuple[Path, Path]:
    """
    Moves the session's current directory to `path_str`.

    Either the change succeeds completely or `state.cwd` is left untouched.

    Returns:
        A tuple of (previous directory, new directory).

    Raises:
        ValueError: If the path is empty.
        SecurityViolation: If the path escapes the sandbox root.
        FileNotFoundError: If the target does not exist.
        NotADirectoryError: If the target is not a directory.
    """
    if not isinstance(path_str, str) or not path_str:
        raise ValueError("'path' parameter is required and must be a non-empty string.")

    with state.lock:
        target = resolve_path(state, path_str)

        if not target.exists():
            raise FileNotFoundError(
                f"Directory does not exist: {path_str}\n  Resolved to: {target}"
            )
        if not target.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {path_str}")

        previous = state.cwd
        state.cwd = target

    logger.info("Changed directory: %s -> %s", previous, target)
    return previous, target
