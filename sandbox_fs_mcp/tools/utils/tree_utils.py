import logging
import os
import pathlib
from collections import deque
from dataclasses import dataclass
from typing import Iterable

from sandbox_fs_mcp.models.listing import EntryKind, ListingResult

from .constants import (
    BRANCH,
    DENIED_MARKER,
    DIR_ICON,
    FILE_ICON,
    INACCESSIBLE_MARKER,
    LAST_BRANCH,
    LINK_ICON,
    MAX_DEPTH_MARKER,
    OTHER_ICON,
    PIPE,
    SPACE,
    WARN_ICON,
)
from .file_utils import describe_file, format_size, is_directory_entry, read_entry
from .pattern_utils import Matcher, compile_pattern

logger = logging.getLogger(__name__)


@dataclass
class _Expand:
    """A directory waiting on the work-list to have its children rendered."""

    path: pathlib.Path
    depth: int
    prefix: str


def sort_key(entry: os.DirEntry) -> tuple[int, str, str]:
    """
    Directories first, then everything else; by name, ignoring case.

    Names that differ only by case put the lowercase spelling first.
    """
    return (0 if is_directory_entry(entry) else 1, entry.name.casefold(), entry.name.swapcase())


def walk_tree(
    dir_path: pathlib.Path,
    recursive: bool = False,
    max_depth: int = 3,
    show_hidden: bool = False,
    matcher: Matcher | None = None,
    ignored_directories: Iterable[str] = (),
) -> ListingResult:
    """
    Walk a directory depth-first and render it as a tree.

    The walk uses an explicit work-list instead of recursion. Each pending item is
    either an already rendered line or a directory whose children still have to be
    read; items are pushed in reverse so they come back out in display order.

    The start directory is depth 0. Subdirectories are only expanded when
    `recursive` is set; a subdirectory that would sit deeper than `max_depth` gets a
    single depth-limit marker instead of its children.

    Unreadable entries and directories are reported inline and counted in
    `inaccessible_count`; they never abort the walk.

    Args:
        dir_path: An existing directory, already validated by the caller.
        recursive: Whether to descend into subdirectories.
        max_depth: Deepest level whose contents are listed.
        show_hidden: Whether to include names starting with '.'.
        matcher: Optional name filter applied to files and directories alike.
        ignored_directories: Directory names that are skipped entirely.

    Returns:
        A ListingResult with the rendered lines and aggregates. The summary is
        not included; see `render_listing`.
    """
    ignored = frozenset(ignored_directories)
    max_depth = max(max_depth, 0)
    result = ListingResult(lines=[f"{DIR_ICON} {dir_path.name or dir_path}/"])

    def keep(entry: os.DirEntry) -> bool:
        if not show_hidden and entry.name.startswith("."):
            return False
        if entry.name in ignored and is_directory_entry(entry):
            return False
        if matcher is not None and not matcher(entry.name):
            return False
        return True

    work: deque[str | _Expand] = deque([_Expand(dir_path, 0, "")])

    while work:
        item = work.pop()
        if isinstance(item, str):
            result.lines.append(item)
            continue

        if item.depth > max_depth:
            result.lines.append(f"{item.prefix}{MAX_DEPTH_MARKER}")
            continue

        try:
            with os.scandir(item.path) as it:
                children = sorted((e for e in it if keep(e)), key=sort_key)
        except OSError as e:
            logger.debug("Cannot read directory %s: %s", item.path, e)
            result.lines.append(f"{item.prefix}{DENIED_MARKER}")
            result.inaccessible_count += 1
            continue

        pending: list[str | _Expand] = []
        for index, child in enumerate(children):
            is_last = index == len(children) - 1
            line_prefix = item.prefix + (LAST_BRANCH if is_last else BRANCH)
            child_prefix = item.prefix + (SPACE if is_last else PIPE)

            try:
                info = read_entry(child)
            except OSError as e:
                logger.debug("Cannot read entry %s: %s", child.path, e)
                pending.append(f"{line_prefix}{WARN_ICON} {child.name} {INACCESSIBLE_MARKER}")
                result.inaccessible_count += 1
                continue

            match info.kind:
                case EntryKind.DIRECTORY:
                    result.dir_count += 1
                    pending.append(f"{line_prefix}{DIR_ICON} {info.name}/")
                    if recursive:
                        pending.append(_Expand(pathlib.Path(child.path), item.depth + 1, child_prefix))
                case EntryKind.FILE:
                    result.file_count += 1
                    result.total_size += info.size
                    pending.append(f"{line_prefix}{FILE_ICON} {info.name} ({format_size(info.size)})")
                case EntryKind.SYMLINK:
                    pending.append(f"{line_prefix}{LINK_ICON} {info.name} -> {info.link_target}")
                case _:
                    pending.append(f"{line_prefix}{OTHER_ICON} {info.name} [other]")

        work.extend(reversed(pending))

    return result


def render_listing(result: ListingResult, recursive: bool) -> str:
    """Join the tree lines and append the summary."""
    lines = list(result.lines)
    lines.append("")

    summary = (
        f"Summary: {result.file_count} files, {result.dir_count} directories "
        f"({format_size(result.total_size)} total)"
    )
    if result.had_partial_failures:
        summary += f", {result.inaccessible_count} inaccessible"
    lines.append(summary)

    if not recursive and result.dir_count > 0:
        lines.append("[Tip: Use recursive=true to see subdirectory contents]")

    return "\n".join(lines)


def list_path(
    target: pathlib.Path,
    display_path: str,
    recursive: bool = False,
    max_depth: int = 3,
    show_hidden: bool = False,
    pattern: str | None = None,
    ignored_directories: Iterable[str] = (),
) -> str:
    """
    List a validated path: a tree for directories, a metadata block for files.

    Raises:
        FileNotFoundError: If `target` does not exist.
        InvalidPatternError: If `pattern` cannot be compiled.
    """
    if not target.exists():
        raise FileNotFoundError(f"Error: Path '{display_path}' does not exist.")

    if not target.is_dir():
        return describe_file(target, display_path)

    matcher = compile_pattern(pattern) if pattern is not None else None

    result = walk_tree(
        target,
        recursive=recursive,
        max_depth=max_depth,
        show_hidden=show_hidden,
        matcher=matcher,
        ignored_directories=ignored_directories,
    )
    logger.debug(
        "Listed %s: %d files, %d directories, %d inaccessible",
        target,
        result.file_count,
        result.dir_count,
        result.inaccessible_count,
    )
    return render_listing(result, recursive)
