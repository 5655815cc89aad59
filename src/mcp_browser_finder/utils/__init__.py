"""
Utility modules for mcp-browser-finder.
"""

from .exec import exec_command, ExecutionError, CommandTimeoutError
from .fs import path_exists, StatError
from .platform import get_platform

__all__ = [
    "exec_command",
    "ExecutionError",
    "CommandTimeoutError",
    "path_exists",
    "StatError",
    "get_platform",
]
