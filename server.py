"""
Android Toolbox Manager - MCP Server
Entry point for the MCP server.
"""
from mcp.server.fastmcp import FastMCP

from api import register_tools
from core.config import app_base_dir
from core.manager import ToolboxManager
from utils.log import configure_logging, get_logger

# Create MCP server instance
mcp = FastMCP("AndroidToolbox")


def main():
    """Main entry point for script execution."""
    configure_logging()
    base_dir = app_base_dir()
    get_logger(__name__).info(f"looking for bundled tools under {base_dir}")
    register_tools(mcp, ToolboxManager(base_dir=base_dir))
    mcp.run()


if __name__ == "__main__":
    main()
