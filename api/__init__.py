"""
MCP tool layer for Android Toolbox Manager.
"""
from .handlers import register_tools

__all__ = ["register_tools"]
