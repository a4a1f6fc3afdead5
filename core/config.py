"""
Configuration and constants for Android Toolbox Manager.
"""
import os
import sys
from pathlib import Path

# Logical tool names, resolved to concrete paths by ToolResolver
ADB_TOOL = "adb"
FASTBOOT_TOOL = "fastboot"
SCRCPY_TOOL = "scrcpy"
AAPT_TOOL = "aapt"
PAYLOAD_DUMPER_TOOL = "payload-dumper-go"
PYTHON_TOOL = "python"
PAYLOAD_DUMPER_MODULE = "payload_dumper"

# Folder (relative to the app dir and the cwd) where bundled tools live
TOOLS_SUBDIR = "tools"
SCRCPY_SUBDIR = os.path.join("tools", "scrcpy")

# Substrings that could turn one remote shell command into several
UNSAFE_SHELL_PATTERNS = [";", "&&", "||", "`", "$(", "${", "\n", "\r"]

# Privilege escalation wrapper allowed to carry a full sub-shell command line
PRIVILEGED_SHELL_PREFIX = "su -c"

# Composite operation scratch locations
DEVICE_SCREENSHOT_PATH = "/sdcard/screenshot.png"
LOGCAT_TAIL_LINES = 100

# Demonstration listing returned when no payload dumper is installed.
# NOT real data, always tagged as placeholder.
PLACEHOLDER_PARTITIONS = [
    ("boot", "67.2 MB"),
    ("init_boot", "8.0 MB"),
    ("vendor_boot", "67.1 MB"),
    ("recovery", "104.9 MB"),
    ("vbmeta", "4.0 KB"),
    ("vbmeta_system", "4.0 KB"),
    ("vbmeta_vendor", "4.0 KB"),
    ("dtbo", "8.0 MB"),
    ("super", "9.5 GB"),
    ("modem", "200.0 MB"),
]

# Output folders created under the data directory
DATA_DIR_NAME = "data"
DATA_SUBDIRS = {
    "apk": "apk",
    "backup": "backup",
    "screenshot": "screenshot",
    "record": "record",
    "rom": "rom",
    "module": "module",
    "log": "log",
}

# Device properties shown by device_info
DEVICE_PROPERTIES = {
    "model": "ro.product.model",
    "brand": "ro.product.brand",
    "android_version": "ro.build.version.release",
}

# Environment overrides
HOME_ENV = "ANDROID_TOOLBOX_HOME"
LOG_LEVEL_ENV = "ANDROID_TOOLBOX_LOG_LEVEL"

# Analytics storage
ANALYTICS_DIR = Path.home() / ".android-toolbox-mcp"
ANALYTICS_FILE = ANALYTICS_DIR / "analytics.jsonl"


def app_base_dir() -> str:
    """
    Directory the application runs from; bundled tools are looked up here.

    Order: $ANDROID_TOOLBOX_HOME, the frozen executable's folder, the project root.
    """
    override = os.environ.get(HOME_ENV)
    if override:
        return os.path.abspath(override)
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
