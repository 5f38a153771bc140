"""
Configuration and dependency management for the Sandbox FS MCP server.
"""

import logging
from functools import lru_cache
from pathlib import Path

from sandbox_fs_mcp.utils.config import ServiceConfig
from sandbox_fs_mcp.utils.session_manager import SessionManager

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    This function is cached to avoid repeatedly reading and parsing environment
    variables and .env files.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


@lru_cache
def initialize_root() -> Path:
    """
    Captures the sandbox root on first use.

    The root is SANDBOX_ROOT when configured, otherwise the process working
    directory at the time of the first call. Later calls return the same value
    even if the process changes directory afterwards.
    """
    configured = get_base_config().SANDBOX_ROOT
    root = (Path(configured) if configured else Path.cwd()).resolve()
    logger.info("Sandbox root locked at %s", root)
    return root


@lru_cache
def get_session_manager() -> SessionManager:
    """Returns a singleton SessionManager bound to the sandbox root."""
    logger.info("Initializing SessionManager singleton.")
    return SessionManager(initialize_root())


# --- Tool Providers ---

from ..tools.change_directory_tool import ChangeDirectoryTool
from ..tools.current_directory_tool import CurrentDirectoryTool
from ..tools.list_files_tool import ListFilesTool


@lru_cache
def get_change_directory_tool_provider() -> ChangeDirectoryTool:
    """Returns a cached instance of the ChangeDirectoryTool."""
    logger.info("Initializing ChangeDirectoryTool singleton.")
    return ChangeDirectoryTool()


@lru_cache
def get_current_directory_tool_provider() -> CurrentDirectoryTool:
    """Returns a cached instance of the CurrentDirectoryTool."""
    logger.info("Initializing CurrentDirectoryTool singleton.")
    return CurrentDirectoryTool()


@lru_cache
def get_list_files_tool_provider() -> ListFilesTool:
    """Returns a cached instance of the ListFilesTool, configured from ServiceConfig."""
    config = get_base_config()
    logger.info(
        "Initializing ListFilesTool singleton (ignored directories: %s).",
        ", ".join(config.IGNORED_DIRECTORIES),
    )
    return ListFilesTool(
        ignored_directories=config.IGNORED_DIRECTORIES,
        default_max_depth=config.DEFAULT_MAX_DEPTH,
        protected_directories=config.PROTECTED_DIRECTORIES,
        protected_files=config.PROTECTED_FILES,
    )
