"""
Console entry point for the Sandbox FS MCP server.

Order matters here: the .env file is loaded before the first (cached) read of
ServiceConfig, logging is configured from that config, and the sandbox root is
locked before the transport accepts the first tool call.
"""

import logging
import sys

from dotenv import load_dotenv

from sandbox_fs_mcp.utils.config import ServiceConfig
from sandbox_fs_mcp.utils.dependencies import get_base_config, initialize_root

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> int:
    """
    Routes all records to stderr at the requested level.

    stdout is reserved for the stdio transport, so nothing may log there.
    Unknown level names fall back to INFO.

    Returns:
        The numeric level that was applied.
    """
    level = logging.getLevelName(level_name.strip().upper())
    unknown = not isinstance(level, int)
    if unknown:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    if unknown:
        logger.warning("Unknown LOG_LEVEL %r, using INFO.", level_name)
    return level


def load_config() -> ServiceConfig:
    """Loads .env into the process environment and returns the cached ServiceConfig."""
    load_dotenv()
    return get_base_config()


def run_server() -> None:
    config = load_config()
    configure_logging(config.LOG_LEVEL)

    # The FastMCP app is built at import time from the cached config.
    from sandbox_fs_mcp.server import mcp_app

    root = initialize_root()
    logger.info("Sandbox FS MCP server: root=%s transport=%s", root, config.MCP_TRANSPORT)
    if config.MCP_TRANSPORT != "stdio":
        logger.info("Listening on %s:%s", config.MCP_HOST, config.MCP_PORT)

    mcp_app.run(transport=config.MCP_TRANSPORT)


if __name__ == "__main__":
    run_server()
