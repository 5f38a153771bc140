from typing import override

from sandbox_fs_mcp.models.session import NavigationContext
from sandbox_fs_mcp.utils.path_utils import change_directory

from .base import Tool, ToolCallArguments, ToolError, ToolExecResult, ToolParameter


class ChangeDirectoryTool(Tool):
    """
    Tool for moving the session's current directory inside the project root.
    This is the only tool that changes navigation state; every other tool
    resolves relative paths against the directory chosen here.
    """

    @override
    def get_name(self) -> str:
        return "change_directory"

    @override
    def get_description(self) -> str:
        return """Change the current working directory.
Can only navigate within the project root directory.
Use ".." to go up, "~" or "/" to return to the project root, or specify a relative/absolute path."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="path",
                type="string",
                description="Relative or absolute path of the directory to change to.",
                required=True,
            ),
        ]

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        state = arguments.get("_nav_context")
        if not isinstance(state, NavigationContext):
            return ToolExecResult(
                error="NavigationContext not found in arguments. This is an internal server error.",
                error_code=-1,
            )

        path = arguments.get("path")
        try:
            previous, current = change_directory(state, path)
        except (ToolError, ValueError, NotADirectoryError, FileNotFoundError) as e:
            return ToolExecResult(error=str(e), error_code=-1)

        if current == state.root and path in ("~", "/"):
            return ToolExecResult(output=f"Changed directory to: {current} (project root)")

        return ToolExecResult(
            output=f"Changed directory: {state.relative(previous)} -> {state.relative(current)}\n"
            f"  Full path: {current}"
        )
