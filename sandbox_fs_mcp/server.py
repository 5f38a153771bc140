"""
MCP server definition for the Sandbox FS MCP.
"""

import logging
from typing import Any, Optional

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from sandbox_fs_mcp.prompts import get_all_prompts
from sandbox_fs_mcp.tools.base import Tool, ToolCallArguments
from sandbox_fs_mcp.utils.config import ServiceConfig
from sandbox_fs_mcp.utils.dependencies import (
    get_base_config,
    get_change_directory_tool_provider,
    get_current_directory_tool_provider,
    get_list_files_tool_provider,
    get_session_manager,
)


# Get a module-level logger
logger = logging.getLogger(__name__)


class CustomFastMCP(FastMCP):
    """Custom FastMCP server with CORS middleware."""

    def _add_cors_middleware(self, app: Starlette) -> Starlette:
        """A helper to add CORS middleware to a Starlette app."""
        app.user_middleware.insert(
            0,
            Middleware(
                CORSMiddleware,
                allow_origin_regex=".*",  # Allow any origin
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        )
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        """Overrides the default sse_app to inject CORS middleware."""
        app = super().sse_app(mount_path)
        return self._add_cors_middleware(app)

    def streamable_http_app(self) -> Starlette:
        """Overrides the default streamable_http_app to inject CORS middleware."""
        app = super().streamable_http_app()
        return self._add_cors_middleware(app)


def build_server(config: ServiceConfig) -> CustomFastMCP:
    """Build and configure the FastMCP server instance.

    Args:
        config: The server's service configuration.

    Returns:
        A configured CustomFastMCP instance.
    """
    logger.info(
        "Initializing FastMCP server",
        extra={"host": config.MCP_HOST, "port": config.MCP_PORT},
    )
    return CustomFastMCP(
        "sandbox-fs-mcp",
        host=config.MCP_HOST,
        port=config.MCP_PORT,
    )


async def run_tool(tool: Tool, args: ToolCallArguments) -> dict[str, Any]:
    """Runs a tool against the shared navigation context and shapes its result."""
    args = {k: v for k, v in args.items() if v is not None}
    args["_nav_context"] = get_session_manager().get_context()

    result = await tool.execute(args)
    if result.error:
        return {"status": "error", "error": result.error, "exit_code": result.error_code}
    return {"status": "success", "result": result.output, "exit_code": result.error_code}


# Get the base configuration for server initialization.
# This is also imported by main.py to run the server.
server_config = get_base_config()
mcp_app = build_server(server_config)


# --- Prompt Handlers ---
@mcp_app.prompt(title="Agent System Prompt for Sandbox Navigation")
def get_system_prompt() -> str:
    """Provides the main system prompt for the agent."""
    prompts = get_all_prompts()
    return prompts["base"] + prompts["navigation-instructions"]


# --- Tool Definitions ---

@mcp_app.tool()
async def change_directory(
    context: Context,
    path: str,
) -> dict[str, Any]:
    """
    Change the current working directory within the project root.

    Args:
        path: Relative or absolute directory path. Use ".." to go up, "~" or "/" for the project root.

    Returns:
        A dictionary containing the previous and new directory, or an error message.
    """
    logger.info(f"Executing change_directory on path '{path}'")
    try:
        return await run_tool(get_change_directory_tool_provider(), {"path": path})
    except Exception as e:
        logger.error(f"Error executing change_directory: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool()
async def list_files(
    context: Context,
    path: str = ".",
    recursive: bool = False,
    max_depth: Optional[int] = None,
    show_hidden: bool = False,
    pattern: Optional[str] = None,
) -> dict[str, Any]:
    """
    List files and directories at a given path as a tree.

    Args:
        path: Relative or absolute path to list. Defaults to the current directory.
        recursive: Whether to descend into subdirectories.
        max_depth: Maximum depth for recursive listing. Defaults to 3.
        show_hidden: Whether to include entries whose names start with '.'.
        pattern: Optional name filter such as '*.py' ('*' any run, '?' one character, case-insensitive).

    Returns:
        A dictionary containing the rendered listing with a summary, or an error message.
    """
    logger.info(f"Executing list_files on path '{path}' (recursive={recursive})")
    try:
        args = {
            "path": path,
            "recursive": recursive,
            "max_depth": max_depth,
            "show_hidden": show_hidden,
            "pattern": pattern,
        }
        return await run_tool(get_list_files_tool_provider(), args)
    except Exception as e:
        logger.error(f"Error executing list_files: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool()
async def current_directory(
    context: Context,
) -> dict[str, Any]:
    """
    Show the current working directory and the project root.

    Returns:
        A dictionary containing the current directory, its full path and the root.
    """
    logger.info("Executing current_directory.")
    try:
        return await run_tool(get_current_directory_tool_provider(), {})
    except Exception as e:
        logger.error(f"Error executing current_directory: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}
