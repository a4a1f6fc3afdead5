"""
Argument builders, one per tool operation.

Each builder is pure and mirrors the tool's own CLI grammar. A target device
is never placed here: Invocation.argv puts the `-s <serial>` pair first.
"""
from typing import List, Optional

from .config import (
    ADB_TOOL, FASTBOOT_TOOL, SCRCPY_TOOL, AAPT_TOOL,
    PAYLOAD_DUMPER_TOOL, PYTHON_TOOL, PAYLOAD_DUMPER_MODULE,
    LOGCAT_TAIL_LINES,
)
from .models import Invocation


def _adb(*args: str, device: Optional[str] = None) -> Invocation:
    return Invocation(ADB_TOOL, tuple(args), device)


def _fastboot(*args: str, device: Optional[str] = None) -> Invocation:
    return Invocation(FASTBOOT_TOOL, tuple(args), device)


def _require_partitions(partitions: List[str]) -> List[str]:
    parts = [p.strip() for p in partitions if p and p.strip()]
    if not parts:
        raise ValueError("at least one partition name is required")
    return parts


# ==================== adb ====================

def list_devices() -> Invocation:
    return _adb("devices")


def shell(command: str, device: Optional[str] = None) -> Invocation:
    """The whole command travels as one argument; see validate_shell_command."""
    return _adb("shell", command, device=device)


def getprop(name: str, device: Optional[str] = None) -> Invocation:
    return _adb("shell", "getprop", name, device=device)


def install(apk_path: str, device: Optional[str] = None) -> Invocation:
    return _adb("install", "-r", apk_path, device=device)


def uninstall(package: str, device: Optional[str] = None) -> Invocation:
    return _adb("uninstall", package, device=device)


def push(local: str, remote: str, device: Optional[str] = None) -> Invocation:
    return _adb("push", local, remote, device=device)


def pull(remote: str, local: str, device: Optional[str] = None) -> Invocation:
    return _adb("pull", remote, local, device=device)


def reboot(mode: Optional[str] = None, device: Optional[str] = None) -> Invocation:
    if mode:
        return _adb("reboot", mode, device=device)
    return _adb("reboot", device=device)


def connect(address: str) -> Invocation:
    return _adb("connect", address)


def disconnect(address: Optional[str] = None) -> Invocation:
    if address:
        return _adb("disconnect", address)
    return _adb("disconnect")


def sideload(ota_path: str, device: Optional[str] = None) -> Invocation:
    return _adb("sideload", ota_path, device=device)


def logcat_dump(device: Optional[str] = None, lines: int = LOGCAT_TAIL_LINES) -> Invocation:
    return _adb("logcat", "-d", "-v", "time", "-t", str(lines), device=device)


def logcat_clear(device: Optional[str] = None) -> Invocation:
    return _adb("logcat", "-c", device=device)


def screencap(remote_path: str, device: Optional[str] = None) -> Invocation:
    return _adb("shell", "screencap", "-p", remote_path, device=device)


def remove_remote(remote_path: str, device: Optional[str] = None) -> Invocation:
    return _adb("shell", "rm", remote_path, device=device)


def package_path(package: str, device: Optional[str] = None) -> Invocation:
    return _adb("shell", "pm", "path", package, device=device)


# ==================== fastboot ====================

def fastboot_devices() -> Invocation:
    return _fastboot("devices")


def fastboot_flash(partition: str, image_path: str, device: Optional[str] = None) -> Invocation:
    return _fastboot("flash", partition, image_path, device=device)


def fastboot_reboot(mode: Optional[str] = None, device: Optional[str] = None) -> Invocation:
    if mode:
        return _fastboot("reboot", mode, device=device)
    return _fastboot("reboot", device=device)


def fastboot_unlock(device: Optional[str] = None) -> Invocation:
    return _fastboot("flashing", "unlock", device=device)


def fastboot_getvar(name: str, device: Optional[str] = None) -> Invocation:
    return _fastboot("getvar", name, device=device)


def fastboot_set_active(slot: str, device: Optional[str] = None) -> Invocation:
    return _fastboot("set_active", slot, device=device)


def fastboot_erase(partition: str, device: Optional[str] = None) -> Invocation:
    return _fastboot("erase", partition, device=device)


# ==================== scrcpy ====================

def mirror(extra_args: Optional[List[str]] = None, device: Optional[str] = None) -> Invocation:
    return Invocation(SCRCPY_TOOL, tuple(extra_args or ()), device)


def record(output_path: str, device: Optional[str] = None) -> Invocation:
    return Invocation(SCRCPY_TOOL, ("--record", output_path), device)


# ==================== payload dumpers ====================

def payload_list_native(payload_path: str) -> Invocation:
    return Invocation(PAYLOAD_DUMPER_TOOL, ("-l", payload_path))


def payload_list_python(payload_path: str) -> Invocation:
    return Invocation(PYTHON_TOOL, ("-m", PAYLOAD_DUMPER_MODULE, "--list", payload_path))


def payload_extract_native(payload_path: str, output_dir: str, partitions: List[str]) -> Invocation:
    parts = _require_partitions(partitions)
    return Invocation(PAYLOAD_DUMPER_TOOL, ("-o", output_dir, "-p", ",".join(parts), payload_path))


def payload_extract_python(payload_path: str, output_dir: str, partitions: List[str]) -> Invocation:
    args = ["-m", PAYLOAD_DUMPER_MODULE, "-o", output_dir]
    for part in _require_partitions(partitions):
        args.extend(["-p", part])
    args.append(payload_path)
    return Invocation(PYTHON_TOOL, tuple(args))


# ==================== aapt ====================

def badging(apk_path: str) -> Invocation:
    return Invocation(AAPT_TOOL, ("dump", "badging", apk_path))
