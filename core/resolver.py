"""
Executable lookup for the bundled Android platform tools.

Tools shipped next to the application always win over ones installed on the
system, because adb/fastboot/scrcpy are often pinned to a specific version.
"""
import os
from typing import Callable, List, Optional

from utils.log import get_logger
from .config import TOOLS_SUBDIR

logger = get_logger(__name__)


class ToolResolver:
    """
    Maps a logical tool name ("adb") to the path that should be executed.

    The application directory is injected once; nothing here queries the
    running executable, so tests can stub `exists` and pass any base_dir.
    """

    def __init__(
        self,
        base_dir: str,
        is_windows: Optional[bool] = None,
        exists: Callable[[str], bool] = os.path.isfile,
        cwd: str = ".",
    ):
        self.base_dir = base_dir
        self.is_windows = (os.name == "nt") if is_windows is None else is_windows
        self.exists = exists
        self.cwd = cwd

    @property
    def extension(self) -> str:
        return ".exe" if self.is_windows else ""

    def candidates(self, tool_name: str, subdir: str = TOOLS_SUBDIR) -> List[str]:
        """Ordered search list, most specific location first, bare name last."""
        exe_name = tool_name + self.extension
        ordered = [
            os.path.join(self.base_dir, subdir, exe_name),
            os.path.join(self.base_dir, subdir, tool_name),
            os.path.join(self.base_dir, exe_name),
            os.path.join(self.cwd, subdir, exe_name),
            os.path.join(self.cwd, exe_name),
            tool_name,
        ]
        # Without an extension the first two entries collapse into one
        seen = set()
        unique = []
        for path in ordered:
            if path not in seen:
                seen.add(path)
                unique.append(path)
        return unique

    def resolve(self, tool_name: str, subdir: str = TOOLS_SUBDIR) -> str:
        """
        Return the first existing candidate, or the bare name so the OS
        search path gets the last try. Never fails.
        """
        for path in self.candidates(tool_name, subdir):
            if self.exists(path):
                logger.debug(f"resolved {tool_name} -> {path}")
                return path
        logger.debug(f"{tool_name} not bundled, deferring to PATH")
        return tool_name
