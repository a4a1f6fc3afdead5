"""
Process spawning for external tools.
"""
import os
import subprocess
from typing import List, Optional

from utils.log import get_logger
from .models import CommandResult

logger = get_logger(__name__)


def _platform_spawn_kwargs(is_windows: bool) -> dict:
    """Keyword arguments that keep a console window from flashing up on Windows."""
    if not is_windows:
        return {}
    startupinfo = subprocess.STARTUPINFO()
    startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW
    return {
        "creationflags": subprocess.CREATE_NO_WINDOW,
        "startupinfo": startupinfo,
    }


class ProcessRunner:
    """
    Runs a resolved executable and collapses its outcome into a CommandResult.

    Calls block until the tool exits; there is deliberately no timeout.
    """

    def __init__(self, is_windows: Optional[bool] = None):
        is_windows = (os.name == "nt") if is_windows is None else is_windows
        self._spawn_kwargs = _platform_spawn_kwargs(is_windows)

    def run(self, path: str, args: List[str]) -> CommandResult:
        """Run to completion, capturing stdout and stderr as text."""
        cmd = [path] + list(args)
        logger.debug(f"run: {cmd}")
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                shell=False,
                **self._spawn_kwargs,
            )
        except OSError as e:
            logger.warning(f"spawn failed: {path}: {e}")
            return CommandResult.failure(f"Failed to execute {path}: {e}")

        result = CommandResult.from_process(proc.returncode, proc.stdout or "", proc.stderr or "")
        if not result.ok:
            logger.warning(f"{path} exited with {proc.returncode}: {result.error.strip()[:200]}")
        return result

    def spawn(self, path: str, args: List[str]) -> CommandResult:
        """
        Start a long-running tool and return immediately.

        No handle is kept. The child's streams go to the null device so it
        cannot write into the server's own stdout.
        """
        cmd = [path] + list(args)
        logger.debug(f"spawn: {cmd}")
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                shell=False,
                **self._spawn_kwargs,
            )
        except OSError as e:
            logger.warning(f"spawn failed: {path}: {e}")
            return CommandResult.failure(f"Failed to start {path}: {e}")
        return CommandResult.success()
