"""Service configuration definition."""

from pydantic_settings import BaseSettings

from sandbox_fs_mcp.tools.utils.constants import (
    DEFAULT_IGNORE_DIRECTORIES,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PROTECTED_DIRECTORIES,
    DEFAULT_PROTECTED_FILES,
)


class ServiceConfig(BaseSettings):
    """
    Defines the configuration for the MCP server, loaded from environment
    variables or a .env file.
    """

    # MCP Server transport mechanism (e.g., "stdio", "sse", "streamable-http")
    MCP_TRANSPORT: str = "stdio"
    # Host for the MCP server to bind to. Defaults to 0.0.0.0 for accessibility.
    MCP_HOST: str = "0.0.0.0"
    # Port for the MCP server to listen on.
    MCP_PORT: int = 8660
    # Logging level name for the stderr log (DEBUG, INFO, WARNING, ...).
    LOG_LEVEL: str = "INFO"

    # Sandbox root. When unset, the working directory at first use becomes the root.
    SANDBOX_ROOT: str | None = None
    # Directory names that are never listed or traversed (JSON list in the environment).
    IGNORED_DIRECTORIES: list[str] = sorted(DEFAULT_IGNORE_DIRECTORIES)
    # Depth limit used by list_files when the caller does not pass one.
    DEFAULT_MAX_DEPTH: int = DEFAULT_MAX_DEPTH
    # list_files refuses targets in or under these directories (JSON list in the environment).
    PROTECTED_DIRECTORIES: list[str] = sorted(DEFAULT_PROTECTED_DIRECTORIES)
    # list_files refuses these file names, compared case-insensitively.
    PROTECTED_FILES: list[str] = sorted(DEFAULT_PROTECTED_FILES)

    class Config:
        """Pydantic configuration settings."""

        # We do not specify env_file here.
        # Environment loading is handled explicitly in main.py via load_dotenv
        # to ensure the correct .env file is used.
        extra = "ignore"
