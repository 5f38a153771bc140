from typing import override

from sandbox_fs_mcp.models.session import NavigationContext

from .base import Tool, ToolCallArguments, ToolExecResult, ToolParameter


class CurrentDirectoryTool(Tool):
    """Reports the session's current directory and the sandbox root."""

    @override
    def get_name(self) -> str:
        return "current_directory"

    @override
    def get_description(self) -> str:
        return "Show the current working directory and the project root it is confined to."

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return []

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        state = arguments.get("_nav_context")
        if not isinstance(state, NavigationContext):
            return ToolExecResult(
                error="NavigationContext not found in arguments. This is an internal server error.",
                error_code=-1,
            )

        return ToolExecResult(
            output=f"Current directory: {state.relative(state.cwd)}\n"
            f"  Full path: {state.cwd}\n"
            f"  Root: {state.root}"
        )
