import os
import stat
from datetime import datetime
from pathlib import Path

from sandbox_fs_mcp.models.listing import DirectoryEntry, EntryKind


def format_size(size: int) -> str:
    """Format a byte count for humans."""
    if size < 1024:
        return f"{size} B"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    elif size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    else:
        return f"{size / (1024 * 1024 * 1024):.1f} GB"


def is_directory_entry(entry: os.DirEntry) -> bool:
    """True for real directories; symlinks to directories do not count."""
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def read_entry(entry: os.DirEntry) -> DirectoryEntry:
    """
    Read the metadata of a directory entry.

    Symlinks are reported as such, but their target must be reachable: a broken
    link raises like any other unreadable entry.

    Raises:
        OSError: If the entry's metadata cannot be read.
    """
    if entry.is_symlink():
        target_stat = entry.stat()
        return DirectoryEntry(
            name=entry.name,
            kind=EntryKind.SYMLINK,
            modified=datetime.fromtimestamp(target_stat.st_mtime),
            link_target=os.readlink(entry.path),
        )

    stat_info = entry.stat(follow_symlinks=False)
    mode = stat_info.st_mode
    if stat.S_ISDIR(mode):
        kind = EntryKind.DIRECTORY
    elif stat.S_ISREG(mode):
        kind = EntryKind.FILE
    else:
        kind = EntryKind.OTHER

    return DirectoryEntry(
        name=entry.name,
        kind=kind,
        size=stat_info.st_size if kind is EntryKind.FILE else 0,
        modified=datetime.fromtimestamp(stat_info.st_mtime),
    )


def describe_file(file_path: Path, display_path: str) -> str:
    """Short metadata block returned when a listing target is a regular file."""
    stat_info = file_path.stat()
    modified = datetime.fromtimestamp(stat_info.st_mtime).isoformat(timespec="seconds")
    extension = file_path.suffix or "no extension"
    return (
        f"File: {display_path}\n"
        f"  Size: {format_size(stat_info.st_size)}\n"
        f"  Modified: {modified}\n"
        f"  Type: {extension}"
    )
