"""
Tests for the adb shell argument guard.
"""
import pytest

from core.models import ShellType
from core.validation import classify_shell_command, validate_shell_command

UNSAFE = [
    "ls; rm -rf /sdcard",
    "true && reboot",
    "false || reboot",
    "echo `id`",
    "echo $(id)",
    "echo ${PATH}",
    "ls\nreboot",
    "ls\rreboot",
]


# ============= TESTS =============

@pytest.mark.parametrize("command", UNSAFE)
def test_metacharacters_rejected(command):
    """Each separator/substitution form is refused."""
    assert validate_shell_command(command) is not None


@pytest.mark.parametrize("command", UNSAFE)
def test_su_c_wrapper_allows_metacharacters(command):
    """The explicit root wrapper may carry a full command line."""
    assert validate_shell_command("su -c " + command) is None


def test_error_names_offending_substring():
    assert "&&" in validate_shell_command("a && b")


def test_plain_commands_pass():
    """Pipes and redirects inside one remote command are fine."""
    assert validate_shell_command("getprop ro.product.model") is None
    assert validate_shell_command("pm list packages | grep google") is None
    assert validate_shell_command("su -c id") is None


@pytest.mark.parametrize("command", UNSAFE + [";reboot", "`id`", "$(id)", "&&reboot"])
def test_su_c_prefix_without_space_is_privileged(command):
    """Any text starting with the literal `su -c` skips the filter."""
    assert classify_shell_command("su -c" + command) == ShellType.ROOT
    assert validate_shell_command("su -c" + command) is None


def test_classification():
    assert classify_shell_command("su -c 'id; whoami'") == ShellType.ROOT
    assert classify_shell_command("su -c\"id\"") == ShellType.ROOT
    assert classify_shell_command("su -c") == ShellType.ROOT
    assert classify_shell_command("su id") == ShellType.NON_ROOT
    assert classify_shell_command("ls") == ShellType.NON_ROOT
    assert classify_shell_command(" su -c id") == ShellType.NON_ROOT
