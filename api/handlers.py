"""
MCP tool definitions for Android Toolbox Manager.
CONSOLIDATED VERSION: 13 tools

Related operations share one tool with an `action` argument. Every tool
returns a display string:

    STATUS: SUCCESS | ERROR | PLACEHOLDER
    Reason: <why>          (errors only)
    OUTPUT:
    <text>
"""
import os
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from core.config import DATA_SUBDIRS
from core.manager import ToolboxManager
from core.models import CommandResult, DeviceInfo, DeviceMode
from utils import analytics
from utils.log import get_logger

logger = get_logger(__name__)


def _format_result(result: CommandResult) -> str:
    if result.ok:
        return f"STATUS: SUCCESS\nOUTPUT:\n{result.output}"
    return f"STATUS: ERROR\nReason: {result.error}"


def _error(reason: str) -> str:
    return f"STATUS: ERROR\nReason: {reason}"


def _unknown_action(action: str, valid: List[str]) -> str:
    return _error(f"Unknown action '{action}'. Use: {', '.join(valid)}")


def _format_devices(result: CommandResult, devices: List[DeviceInfo]) -> str:
    if not result.ok:
        return _format_result(result)
    if not devices:
        return "STATUS: NO_DEVICES\nNo devices found."

    lines = [f"STATUS: FOUND_{len(devices)}_DEVICE(S)", ""]
    for d in devices:
        line = f"  {d.serial}: {d.status}"
        if d.mode == DeviceMode.UNAUTHORIZED:
            line += " - Accept USB debugging prompt on device"
        elif d.mode == DeviceMode.OFFLINE:
            line += " - Reconnect device"
        lines.append(line)
    return '\n'.join(lines)


def _default_dir(manager: ToolboxManager, kind: str) -> str:
    """Standard data subfolder for an output kind, created on demand."""
    path = os.path.join(manager.get_data_dir(), DATA_SUBDIRS[kind])
    result = manager.ensure_dir(path)
    if not result.ok:
        # Creation failed: write into the working directory instead
        logger.warning(result.error)
        return "."
    return path


def _tracked(tool: str, action: Optional[str], result: CommandResult) -> str:
    analytics.log_event(tool, ok=result.ok, action=action)
    return _format_result(result)


def register_tools(mcp: FastMCP, manager: Optional[ToolboxManager] = None):
    """Register all MCP tools with the server."""
    _manager = manager or ToolboxManager()

    # ==================== TOOL 1: list_devices ====================
    @mcp.tool()
    def list_devices() -> str:
        """
        List devices visible to adb, with their state.

        Returns one line per device: serial and state
        (device/unauthorized/offline/recovery/sideload).
        Use fastboot(action="devices") for devices in bootloader mode.
        """
        result, devices = _manager.get_devices()
        analytics.log_event("list_devices", ok=result.ok)
        return _format_devices(result, devices)

    # ==================== TOOL 2: device_info ====================
    @mcp.tool()
    def device_info(device_serial: str = None) -> str:
        """
        Read model, brand and Android version of a device.

        Args:
            device_serial: Device serial (optional if only one device is connected)
        """
        props = _manager.device_info(device_serial)
        analytics.log_event("device_info", ok=True)
        return (
            f"STATUS: SUCCESS\n"
            f"Device: {props.serial or '(default)'}\n"
            f"Model: {props.model}\n"
            f"Brand: {props.brand}\n"
            f"Android: {props.android_version}"
        )

    # ==================== TOOL 3: adb_shell ====================
    @mcp.tool()
    def adb_shell(command: str, device_serial: str = None) -> str:
        """
        Run one command with `adb shell` and return its output.

        Command separators (; && || backticks $( ${ newlines) are rejected,
        except inside an explicit root wrapper: su -c "cmd1; cmd2".

        Args:
            command: Remote shell command, e.g. "getprop ro.product.model"
            device_serial: Target device (optional)
        """
        return _tracked("adb_shell", None, _manager.shell(command, device_serial))

    # ==================== TOOL 4: package ====================
    @mcp.tool()
    def package(
        action: str,
        apk_path: str = None,
        package_name: str = None,
        output_dir: str = None,
        device_serial: str = None,
    ) -> str:
        """
        Manage app packages: install, uninstall, extract or analyze.

        Args:
            action: "install", "uninstall", "extract" or "analyze"
            apk_path: Local APK for install/analyze
            package_name: Package id for uninstall/extract (e.g. "com.example.app")
            output_dir: Where extract writes <package>.apk (default: data/apk)
            device_serial: Target device (optional)

        Examples:
            package("install", apk_path="/tmp/app.apk")
            package("extract", package_name="com.example.app")
            package("analyze", apk_path="/tmp/app.apk")
        """
        action = action.lower()
        if action in ("install", "analyze") and not apk_path:
            return _error(f"'{action}' requires apk_path")
        if action in ("uninstall", "extract") and not package_name:
            return _error(f"'{action}' requires package_name")

        if action == "install":
            result = _manager.install(apk_path, device_serial)
        elif action == "uninstall":
            result = _manager.uninstall(package_name, device_serial)
        elif action == "extract":
            target = output_dir or _default_dir(_manager, "apk")
            result = _manager.extract_apk(package_name, target, device_serial)
        elif action == "analyze":
            result = _manager.analyze_apk(apk_path)
        else:
            return _unknown_action(action, ["install", "uninstall", "extract", "analyze"])
        return _tracked("package", action, result)

    # ==================== TOOL 5: file_transfer ====================
    @mcp.tool()
    def file_transfer(action: str, local_path: str, remote_path: str, device_serial: str = None) -> str:
        """
        Copy files between this machine and the device.

        Args:
            action: "push" (local -> device) or "pull" (device -> local)
            local_path: Path on this machine
            remote_path: Path on the device (e.g. "/sdcard/Download/file.txt")
            device_serial: Target device (optional)
        """
        action = action.lower()
        if action == "push":
            result = _manager.push(local_path, remote_path, device_serial)
        elif action == "pull":
            result = _manager.pull(remote_path, local_path, device_serial)
        else:
            return _unknown_action(action, ["push", "pull"])
        return _tracked("file_transfer", action, result)

    # ==================== TOOL 6: reboot ====================
    @mcp.tool()
    def reboot(mode: str = None, device_serial: str = None) -> str:
        """
        Reboot a device through adb.

        Args:
            mode: None for a normal reboot, or "bootloader", "recovery", "sideload", "fastboot"
            device_serial: Target device (optional)
        """
        return _tracked("reboot", mode, _manager.reboot(mode, device_serial))

    # ==================== TOOL 7: network ====================
    @mcp.tool()
    def network(action: str, address: str = None) -> str:
        """
        Connect or disconnect a device over TCP/IP.

        Args:
            action: "connect" or "disconnect"
            address: host[:port]; required for connect, omit on disconnect to drop all
        """
        action = action.lower()
        if action == "connect":
            if not address:
                return _error("'connect' requires address")
            result = _manager.connect(address)
        elif action == "disconnect":
            result = _manager.disconnect(address)
        else:
            return _unknown_action(action, ["connect", "disconnect"])
        return _tracked("network", action, result)

    # ==================== TOOL 8: sideload ====================
    @mcp.tool()
    def sideload(ota_path: str, device_serial: str = None) -> str:
        """
        Sideload an OTA zip to a device waiting in recovery sideload mode.

        Args:
            ota_path: Local OTA zip
            device_serial: Target device (optional)
        """
        return _tracked("sideload", None, _manager.sideload(ota_path, device_serial))

    # ==================== TOOL 9: fastboot ====================
    @mcp.tool()
    def fastboot(
        action: str,
        partition: str = None,
        image_path: str = None,
        mode: str = None,
        variable: str = None,
        slot: str = None,
        device_serial: str = None,
    ) -> str:
        """
        Bootloader operations through fastboot.

        Args:
            action: "devices", "flash", "reboot", "unlock", "getvar", "set_active" or "erase"
            partition: For flash/erase (e.g. "boot")
            image_path: For flash - local image file
            mode: For reboot - None or "bootloader", "recovery", "fastboot"
            variable: For getvar (e.g. "current-slot", "all")
            slot: For set_active ("a" or "b")
            device_serial: Target device (optional)

        ⚠️  flash, erase and unlock modify the device and cannot be undone.
        """
        action = action.lower()
        if action == "devices":
            result, devices = _manager.fastboot_devices()
            analytics.log_event("fastboot", ok=result.ok, action=action)
            return _format_devices(result, devices)

        if action == "flash":
            if not partition or not image_path:
                return _error("'flash' requires partition and image_path")
            result = _manager.fastboot_flash(partition, image_path, device_serial)
        elif action == "reboot":
            result = _manager.fastboot_reboot(mode, device_serial)
        elif action == "unlock":
            result = _manager.fastboot_unlock(device_serial)
        elif action == "getvar":
            if not variable:
                return _error("'getvar' requires variable")
            result = _manager.fastboot_getvar(variable, device_serial)
        elif action == "set_active":
            if not slot:
                return _error("'set_active' requires slot")
            result = _manager.fastboot_set_active(slot, device_serial)
        elif action == "erase":
            if not partition:
                return _error("'erase' requires partition")
            result = _manager.fastboot_erase(partition, device_serial)
        else:
            return _unknown_action(action, ["devices", "flash", "reboot", "unlock", "getvar", "set_active", "erase"])
        return _tracked("fastboot", action, result)

    # ==================== TOOL 10: logcat ====================
    @mcp.tool()
    def logcat(action: str = "dump", device_serial: str = None) -> str:
        """
        Read or clear the device log.

        Args:
            action: "dump" (last 100 lines, timestamped) or "clear"
            device_serial: Target device (optional)
        """
        action = action.lower()
        if action == "dump":
            result = _manager.logcat(device_serial)
        elif action == "clear":
            result = _manager.clear_logcat(device_serial)
        else:
            return _unknown_action(action, ["dump", "clear"])
        return _tracked("logcat", action, result)

    # ==================== TOOL 11: screen ====================
    @mcp.tool()
    def screen(action: str, output_dir: str = None, extra_args: list = None, device_serial: str = None) -> str:
        """
        Screen mirroring, recording and screenshots.

        Args:
            action: "mirror", "record" or "screenshot"
            output_dir: For record/screenshot (default: data/record, data/screenshot)
            extra_args: For mirror - extra scrcpy flags, e.g. ["--max-size", "1024"]
            device_serial: Target device (optional)

        mirror and record open a scrcpy window and return immediately;
        recording stops when that window is closed. record returns the
        path the video will be written to.
        """
        action = action.lower()
        if action == "mirror":
            result = _manager.start_mirror([str(a) for a in extra_args or []], device_serial)
        elif action == "record":
            target = output_dir or _default_dir(_manager, "record")
            result = _manager.start_record(device_serial, target)
        elif action == "screenshot":
            target = output_dir or _default_dir(_manager, "screenshot")
            result = _manager.take_screenshot(device_serial, target)
        else:
            return _unknown_action(action, ["mirror", "record", "screenshot"])
        return _tracked("screen", action, result)

    # ==================== TOOL 12: payload ====================
    @mcp.tool()
    def payload(action: str, payload_path: str, output_dir: str = None, partitions: list = None) -> str:
        """
        Inspect or unpack an OTA payload.bin.

        Args:
            action: "list" or "extract"
            payload_path: Local payload.bin
            output_dir: For extract (default: data/rom)
            partitions: For extract - partition names, e.g. ["boot", "init_boot"]

        Uses payload-dumper-go, falling back to `python -m payload_dumper`.
        If neither is installed, "list" answers with STATUS: PLACEHOLDER and
        a fixed demonstration table that does NOT describe the given file.
        """
        action = action.lower()
        if action == "list":
            result, listing = _manager.parse_payload(payload_path)
            analytics.log_event("payload", ok=result.ok, action=action, placeholder=listing.is_placeholder)
            lines = [f"{p.name}: {p.size}" for p in listing.partitions]
            if listing.is_placeholder:
                return (
                    "STATUS: PLACEHOLDER\n"
                    "Reason: No payload dumper available; sample data, not read from the file.\n"
                    "OUTPUT:\n" + "\n".join(lines)
                )
            body = "\n".join(lines) if lines else listing.raw
            return f"STATUS: SUCCESS\nSource: {listing.source}\nOUTPUT:\n{body}"

        if action == "extract":
            if not partitions:
                return _error("'extract' requires partitions")
            target = output_dir or _default_dir(_manager, "rom")
            try:
                result = _manager.extract_payload(payload_path, target, [str(p) for p in partitions])
            except ValueError as e:
                return _error(str(e))
            return _tracked("payload", action, result)

        return _unknown_action(action, ["list", "extract"])

    # ==================== TOOL 13: workspace ====================
    @mcp.tool()
    def workspace(action: str, path: str = None) -> str:
        """
        Local folders used for screenshots, recordings and extracted files.

        Args:
            action: "data_dir", "prepare", "ensure_dir" or "open_folder"
            path: Folder for ensure_dir/open_folder (open_folder defaults to the data dir)
        """
        action = action.lower()
        if action == "data_dir":
            result = CommandResult.success(_manager.get_data_dir())
        elif action == "prepare":
            result, created = _manager.prepare_data_dirs()
            if result.ok:
                result = CommandResult.success("\n".join(f"{k}: {v}" for k, v in created.items()))
        elif action == "ensure_dir":
            if not path:
                return _error("'ensure_dir' requires path")
            result = _manager.ensure_dir(path)
        elif action == "open_folder":
            result = _manager.open_folder(path or _manager.get_data_dir())
        else:
            return _unknown_action(action, ["data_dir", "prepare", "ensure_dir", "open_folder"])
        return _tracked("workspace", action, result)

    logger.debug("registered toolbox MCP tools")
