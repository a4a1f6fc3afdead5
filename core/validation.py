"""
Guard for free-form text passed to `adb shell` as its command argument.
"""
from typing import Optional

from utils.log import get_logger
from .config import UNSAFE_SHELL_PATTERNS, PRIVILEGED_SHELL_PREFIX
from .models import ShellType

logger = get_logger(__name__)


def classify_shell_command(command: str) -> ShellType:
    """ROOT when the command begins with the literal `su -c` prefix."""
    if command.startswith(PRIVILEGED_SHELL_PREFIX):
        return ShellType.ROOT
    return ShellType.NON_ROOT


def find_unsafe_pattern(command: str) -> Optional[str]:
    """First metacharacter sequence found in command, if any."""
    for pattern in UNSAFE_SHELL_PATTERNS:
        if pattern in command:
            return pattern
    return None


def _allow_privileged(command: str) -> None:
    # su -c wraps a whole sub-shell line, separators included
    pattern = find_unsafe_pattern(command)
    if pattern is not None:
        logger.info(f"privileged shell command bypasses metacharacter filter ({pattern!r}): {command!r}")


def validate_shell_command(command: str) -> Optional[str]:
    """
    Check a remote shell command before it is spawned.

    Returns None if the command may run, or an error message naming the
    offending substring.
    """
    if classify_shell_command(command) == ShellType.ROOT:
        _allow_privileged(command)
        return None

    pattern = find_unsafe_pattern(command)
    if pattern is not None:
        return f"Command contains unsafe sequence: {pattern!r}"
    return None
