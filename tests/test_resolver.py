"""
Tests for executable resolution.
"""
import os

from core.resolver import ToolResolver


BASE = os.path.join("opt", "toolbox")


def _resolver(existing, is_windows=False):
    return ToolResolver(BASE, is_windows=is_windows, exists=lambda p: p in existing)


# ============= TESTS =============

def test_candidate_order_windows():
    """Windows: tools dir with .exe, tools dir bare, app dir, cwd tools, cwd, bare name."""
    resolver = _resolver(set(), is_windows=True)
    assert resolver.candidates("adb") == [
        os.path.join(BASE, "tools", "adb.exe"),
        os.path.join(BASE, "tools", "adb"),
        os.path.join(BASE, "adb.exe"),
        os.path.join(".", "tools", "adb.exe"),
        os.path.join(".", "adb.exe"),
        "adb",
    ]


def test_candidate_order_posix_collapses_duplicates():
    """Without an extension the two tools-dir entries are the same path."""
    resolver = _resolver(set())
    candidates = resolver.candidates("adb")
    assert candidates == [
        os.path.join(BASE, "tools", "adb"),
        os.path.join(BASE, "adb"),
        os.path.join(".", "tools", "adb"),
        os.path.join(".", "adb"),
        "adb",
    ]
    assert len(candidates) == len(set(candidates))


def test_missing_everywhere_falls_back_to_bare_name():
    """Nothing on disk: let the OS search PATH."""
    assert _resolver(set()).resolve("fastboot") == "fastboot"


def test_single_existing_candidate_is_chosen_at_any_position():
    """Whichever one candidate exists is returned."""
    for candidate in _resolver(set(), is_windows=True).candidates("adb"):
        resolver = _resolver({candidate}, is_windows=True)
        assert resolver.resolve("adb") == candidate


def test_earliest_existing_candidate_wins():
    """A bundled tool beats one in the working directory."""
    cwd_copy = os.path.join(".", "adb")
    bundled = os.path.join(BASE, "tools", "adb")
    resolver = _resolver({cwd_copy, bundled})
    assert resolver.resolve("adb") == bundled


def test_resolution_is_idempotent():
    """Same name, unchanged filesystem, same answer."""
    resolver = _resolver({os.path.join(BASE, "adb")})
    assert resolver.resolve("adb") == resolver.resolve("adb")


def test_custom_subdir_for_scrcpy_bundle():
    """scrcpy ships in its own folder under tools."""
    nested = os.path.join(BASE, "tools", "scrcpy", "scrcpy")
    resolver = _resolver({nested})
    assert resolver.resolve("scrcpy", os.path.join("tools", "scrcpy")) == nested


def test_directory_with_tool_name_is_not_an_executable(tmp_path):
    """The default existence check only accepts files."""
    (tmp_path / "tools" / "scrcpy").mkdir(parents=True)
    resolver = ToolResolver(str(tmp_path), is_windows=False, cwd=str(tmp_path / "elsewhere"))
    assert resolver.resolve("scrcpy") == "scrcpy"

    tool = tmp_path / "tools" / "adb"
    tool.write_text("#!/bin/sh\n")
    assert resolver.resolve("adb") == str(tool)
