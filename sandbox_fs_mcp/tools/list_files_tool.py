from typing import Iterable, override

from sandbox_fs_mcp.models.session import NavigationContext
from sandbox_fs_mcp.utils.path_utils import check_protected, resolve_path

from .base import Tool, ToolCallArguments, ToolError, ToolExecResult, ToolParameter
from .utils.constants import (
    DEFAULT_IGNORE_DIRECTORIES,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PROTECTED_DIRECTORIES,
    DEFAULT_PROTECTED_FILES,
)
from .utils.tree_utils import list_path


class ListFilesTool(Tool):
    """
    Tool for listing directory contents as a tree inside the project root.

    The target path is resolved against the session's current directory and
    checked against the sandbox root before anything is read. Directories are
    rendered depth-first with directories before files, each level sorted by
    name. Listing a regular file returns its metadata instead of a tree.

    Filtering:
    - Hidden entries (names starting with '.') unless `show_hidden` is set
    - Configured ignored directories (node_modules, __pycache__, ...), always
    - An optional glob-like `pattern` (`*`, `?`, case-insensitive)

    Entries that cannot be read are marked inline and never abort the listing.

    Targets inside protected directories (.git, .ssh, ...) and sensitive files
    (.env, id_rsa, ...) are refused outright.
    """

    def __init__(
        self,
        ignored_directories: Iterable[str] | None = None,
        default_max_depth: int = DEFAULT_MAX_DEPTH,
        protected_directories: Iterable[str] | None = None,
        protected_files: Iterable[str] | None = None,
    ) -> None:
        """
        Initialize the ListFilesTool.

        Args:
            ignored_directories: Directory names excluded from every listing.
                Defaults to DEFAULT_IGNORE_DIRECTORIES.
            default_max_depth: Depth limit used when a call does not pass `max_depth`.
            protected_directories: Directory names a target may not be in or under.
                Defaults to DEFAULT_PROTECTED_DIRECTORIES.
            protected_files: File names (any case) a target may not be.
                Defaults to DEFAULT_PROTECTED_FILES.
        """
        if ignored_directories is None:
            ignored_directories = DEFAULT_IGNORE_DIRECTORIES
        self._ignored_directories = frozenset(ignored_directories)
        self._default_max_depth = default_max_depth
        self._protected_directories = frozenset(
            DEFAULT_PROTECTED_DIRECTORIES if protected_directories is None else protected_directories
        )
        self._protected_files = frozenset(
            DEFAULT_PROTECTED_FILES if protected_files is None else protected_files
        )

    @property
    def ignored_directories(self) -> frozenset[str]:
        return self._ignored_directories

    @property
    def protected_directories(self) -> frozenset[str]:
        return self._protected_directories

    @property
    def protected_files(self) -> frozenset[str]:
        return self._protected_files

    @override
    def get_name(self) -> str:
        return "list_files"

    @override
    def get_description(self) -> str:
        return """List files and directories at a given path.
Supports recursive listing with depth control and pattern filtering.
Directories are listed before files; hidden entries and common build/dependency
directories are skipped. A summary with file/directory counts and total size is appended."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="path",
                type="string",
                description="Relative or absolute path to list. Defaults to the current directory.",
                required=False,
            ),
            ToolParameter(
                name="recursive",
                type="boolean",
                description="Whether to descend into subdirectories. Default: false.",
                required=False,
            ),
            ToolParameter(
                name="max_depth",
                type="integer",
                description=f"Maximum depth for recursive listing. Default: {self._default_max_depth}.",
                required=False,
            ),
            ToolParameter(
                name="show_hidden",
                type="boolean",
                description="Whether to include hidden entries (names starting with '.'). Default: false.",
                required=False,
            ),
            ToolParameter(
                name="pattern",
                type="string",
                description="Name filter, e.g. '*.py' or 'test_?.ts'. Case-insensitive.",
                required=False,
            ),
        ]

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        """
        List the requested path.

        Args:
            arguments: ToolCallArguments with the session's NavigationContext under
                '_nav_context' and optionally 'path', 'recursive', 'max_depth',
                'show_hidden' and 'pattern'.

        Returns:
            ToolExecResult with the rendered listing, or the error text for
            security violations, missing paths and invalid patterns.
        """
        state = arguments.get("_nav_context")
        if not isinstance(state, NavigationContext):
            return ToolExecResult(
                error="NavigationContext not found in arguments. This is an internal server error.",
                error_code=-1,
            )

        try:
            return self._list_handler(state, arguments)
        except (ToolError, ValueError, NotADirectoryError, FileNotFoundError) as e:
            return ToolExecResult(error=str(e), error_code=-1)

    def _list_handler(self, state: NavigationContext, args: ToolCallArguments) -> ToolExecResult:
        path_str = args.get("path") or "."
        if not isinstance(path_str, str):
            raise ValueError("Path must be a string.")

        recursive = args.get("recursive", False)
        if not isinstance(recursive, bool):
            recursive = False

        show_hidden = args.get("show_hidden", False)
        if not isinstance(show_hidden, bool):
            show_hidden = False

        max_depth = args.get("max_depth", self._default_max_depth)
        if max_depth is None:
            max_depth = self._default_max_depth
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ValueError("max_depth must be a non-negative integer.")

        pattern = args.get("pattern")
        if pattern == "":
            pattern = None
        if pattern is not None and not isinstance(pattern, str):
            raise ValueError("Pattern must be a string.")

        target = resolve_path(state, path_str)
        check_protected(state, target, self._protected_directories, self._protected_files)

        output = list_path(
            target,
            path_str,
            recursive=recursive,
            max_depth=max_depth,
            show_hidden=show_hidden,
            pattern=pattern,
            ignored_directories=self._ignored_directories,
        )
        return ToolExecResult(output=output)
