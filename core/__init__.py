"""
Core module for Android Toolbox Manager.
Contains models, configuration, tool resolution, process running,
command builders, output parsers and the manager facade.
"""
from .models import (
    ShellType, DeviceMode, DeviceInfo, DeviceProperties, Invocation,
    CommandResult, PackageInfo, Partition, PartitionListing,
)
from .config import (
    ADB_TOOL, FASTBOOT_TOOL, SCRCPY_TOOL, AAPT_TOOL,
    PAYLOAD_DUMPER_TOOL, PYTHON_TOOL,
    UNSAFE_SHELL_PATTERNS, PRIVILEGED_SHELL_PREFIX,
    PLACEHOLDER_PARTITIONS, app_base_dir,
)
from .resolver import ToolResolver
from .runner import ProcessRunner
from .validation import validate_shell_command, classify_shell_command
from .manager import ToolboxManager

__all__ = [
    # Models
    "ShellType",
    "DeviceMode",
    "DeviceInfo",
    "DeviceProperties",
    "Invocation",
    "CommandResult",
    "PackageInfo",
    "Partition",
    "PartitionListing",
    # Config
    "ADB_TOOL",
    "FASTBOOT_TOOL",
    "SCRCPY_TOOL",
    "AAPT_TOOL",
    "PAYLOAD_DUMPER_TOOL",
    "PYTHON_TOOL",
    "UNSAFE_SHELL_PATTERNS",
    "PRIVILEGED_SHELL_PREFIX",
    "PLACEHOLDER_PARTITIONS",
    "app_base_dir",
    # Classes / functions
    "ToolResolver",
    "ProcessRunner",
    "validate_shell_command",
    "classify_shell_command",
    "ToolboxManager",
]
