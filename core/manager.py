"""
ToolboxManager: every operation the front end can ask for, built from
command builders, the resolver, the runner and the parsers.
"""
import os
import sys
import time
from typing import Dict, List, Optional, Tuple

from utils.log import get_logger
from . import commands
from .config import (
    AAPT_TOOL, SCRCPY_SUBDIR, SCRCPY_TOOL, TOOLS_SUBDIR,
    DEVICE_SCREENSHOT_PATH, PLACEHOLDER_PARTITIONS,
    DATA_DIR_NAME, DATA_SUBDIRS, DEVICE_PROPERTIES,
    app_base_dir,
)
from .models import (
    CommandResult, DeviceInfo, DeviceProperties, Invocation,
    Partition, PartitionListing,
)
from .parsers import parse_devices, parse_badging, parse_package_path, parse_partitions
from .resolver import ToolResolver
from .runner import ProcessRunner
from .validation import validate_shell_command

logger = get_logger(__name__)


def _join_output_path(output_dir: Optional[str], filename: str) -> str:
    return os.path.join(output_dir, filename) if output_dir else filename


class ToolboxManager:
    """
    Stateless facade over the external tools.

    Holds only the resolver and runner it was built with; every call builds
    its own invocation, so concurrent calls do not share anything.
    """

    def __init__(
        self,
        resolver: Optional[ToolResolver] = None,
        runner: Optional[ProcessRunner] = None,
        base_dir: Optional[str] = None,
    ):
        if base_dir is None:
            base_dir = resolver.base_dir if resolver else app_base_dir()
        self.base_dir = base_dir
        self.resolver = resolver or ToolResolver(base_dir)
        self.runner = runner or ProcessRunner()

    # ==================== plumbing ====================

    def _subdir_for(self, tool: str) -> str:
        return SCRCPY_SUBDIR if tool == SCRCPY_TOOL else TOOLS_SUBDIR

    def execute(self, invocation: Invocation) -> CommandResult:
        path = self.resolver.resolve(invocation.tool, self._subdir_for(invocation.tool))
        return self.runner.run(path, invocation.argv)

    def launch(self, invocation: Invocation) -> CommandResult:
        path = self.resolver.resolve(invocation.tool, self._subdir_for(invocation.tool))
        return self.runner.spawn(path, invocation.argv)

    # ==================== devices ====================

    def get_devices(self) -> Tuple[CommandResult, List[DeviceInfo]]:
        result = self.execute(commands.list_devices())
        if not result.ok:
            return result, []
        return result, parse_devices(result.output)

    def fastboot_devices(self) -> Tuple[CommandResult, List[DeviceInfo]]:
        result = self.execute(commands.fastboot_devices())
        if not result.ok:
            return result, []
        return result, parse_devices(result.output, skip_header=False)

    def device_info(self, device: Optional[str] = None) -> DeviceProperties:
        """Model, brand and Android release; unreadable properties become 'unknown'."""
        values: Dict[str, str] = {}
        for field_name, prop in DEVICE_PROPERTIES.items():
            result = self.execute(commands.getprop(prop, device))
            value = result.output.strip() if result.ok else ""
            values[field_name] = value or "unknown"
        return DeviceProperties(serial=device or "", **values)

    # ==================== adb ====================

    def shell(self, command: str, device: Optional[str] = None) -> CommandResult:
        error = validate_shell_command(command)
        if error:
            logger.warning(f"rejected shell command {command!r}: {error}")
            return CommandResult.failure(error)
        return self.execute(commands.shell(command, device))

    def install(self, apk_path: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.install(apk_path, device))

    def uninstall(self, package: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.uninstall(package, device))

    def push(self, local: str, remote: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.push(local, remote, device))

    def pull(self, remote: str, local: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.pull(remote, local, device))

    def reboot(self, mode: Optional[str] = None, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.reboot(mode, device))

    def connect(self, address: str) -> CommandResult:
        """adb connect; one attempt, the caller decides whether to try again."""
        return self.execute(commands.connect(address))

    def disconnect(self, address: Optional[str] = None) -> CommandResult:
        return self.execute(commands.disconnect(address))

    def sideload(self, ota_path: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.sideload(ota_path, device))

    def logcat(self, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.logcat_dump(device))

    def clear_logcat(self, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.logcat_clear(device))

    # ==================== fastboot ====================

    def fastboot_flash(self, partition: str, image_path: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.fastboot_flash(partition, image_path, device))

    def fastboot_reboot(self, mode: Optional[str] = None, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.fastboot_reboot(mode, device))

    def fastboot_unlock(self, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.fastboot_unlock(device))

    def fastboot_getvar(self, name: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.fastboot_getvar(name, device))

    def fastboot_set_active(self, slot: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.fastboot_set_active(slot, device))

    def fastboot_erase(self, partition: str, device: Optional[str] = None) -> CommandResult:
        return self.execute(commands.fastboot_erase(partition, device))

    # ==================== screen ====================

    def start_mirror(self, extra_args: Optional[List[str]] = None, device: Optional[str] = None) -> CommandResult:
        return self.launch(commands.mirror(extra_args, device))

    def start_record(self, device: Optional[str] = None, output_dir: Optional[str] = None) -> CommandResult:
        """Launch scrcpy recording and return the target file path right away."""
        output_path = _join_output_path(output_dir, f"record_{int(time.time())}.mp4")
        launched = self.launch(commands.record(output_path, device))
        if not launched.ok:
            return launched
        return CommandResult.success(output_path)

    def take_screenshot(self, device: Optional[str] = None, output_dir: Optional[str] = None) -> CommandResult:
        """screencap on the device, pull it, then try to delete the device copy."""
        output_path = _join_output_path(output_dir, f"screenshot_{int(time.time())}.png")

        captured = self.execute(commands.screencap(DEVICE_SCREENSHOT_PATH, device))
        if not captured.ok:
            return captured

        pulled = self.execute(commands.pull(DEVICE_SCREENSHOT_PATH, output_path, device))
        if not pulled.ok:
            return pulled

        cleanup = self.execute(commands.remove_remote(DEVICE_SCREENSHOT_PATH, device))
        if not cleanup.ok:
            logger.warning(f"could not remove {DEVICE_SCREENSHOT_PATH} from device: {cleanup.error.strip()}")

        return CommandResult.success(output_path)

    # ==================== packages ====================

    def extract_apk(self, package: str, output_dir: str, device: Optional[str] = None) -> CommandResult:
        located = self.execute(commands.package_path(package, device))
        if not located.ok:
            return located

        apk_path = parse_package_path(located.output)
        if apk_path is None:
            return CommandResult.failure(f"APK path not found for {package}")

        output_file = os.path.join(output_dir, f"{package}.apk")
        pulled = self.execute(commands.pull(apk_path, output_file, device))
        if not pulled.ok:
            return pulled
        return CommandResult.success(output_file)

    def analyze_apk(self, apk_path: str) -> CommandResult:
        """
        Badging report from the first aapt candidate that runs successfully.

        Without a working aapt the report falls back to name and size only.
        """
        invocation = commands.badging(apk_path)
        for candidate in self.resolver.candidates(AAPT_TOOL):
            result = self.runner.run(candidate, invocation.argv)
            if result.ok:
                return CommandResult.success(parse_badging(result.output).render())
            logger.debug(f"aapt candidate {candidate} failed")

        try:
            size = os.path.getsize(apk_path)
        except OSError as e:
            return CommandResult.failure(f"Cannot read {apk_path}: {e}")

        file_name = os.path.basename(apk_path) or apk_path
        size_mb = size / 1024.0 / 1024.0
        return CommandResult.success(
            f"File: {file_name}\n"
            f"Size: {size_mb:.2f} MB\n"
            f"\n"
            f"Full analysis needs the aapt tool.\n"
            f"Place aapt in the tools folder."
        )

    # ==================== OTA payload ====================

    def parse_payload(self, payload_path: str) -> Tuple[CommandResult, PartitionListing]:
        """
        List payload partitions: payload-dumper-go, then python -m payload_dumper.

        If neither tool works the fixed placeholder table is returned, tagged
        source="placeholder" so callers can tell it is not real data.
        """
        attempts = (
            ("payload-dumper-go", commands.payload_list_native(payload_path)),
            ("payload_dumper", commands.payload_list_python(payload_path)),
        )
        for source, invocation in attempts:
            result = self.execute(invocation)
            if result.ok:
                partitions = tuple(parse_partitions(result.output))
                return result, PartitionListing(partitions, source, result.output)
            logger.info(f"{source} could not list {payload_path}")

        logger.warning("no payload dumper available, returning placeholder partition list")
        raw = "".join(f"{name}:{size}\n" for name, size in PLACEHOLDER_PARTITIONS)
        partitions = tuple(Partition(name, size) for name, size in PLACEHOLDER_PARTITIONS)
        return CommandResult.success(raw), PartitionListing(partitions, "placeholder", raw)

    def extract_payload(self, payload_path: str, output_dir: str, partitions: List[str]) -> CommandResult:
        native = self.execute(commands.payload_extract_native(payload_path, output_dir, partitions))
        if native.ok:
            return native

        python = self.execute(commands.payload_extract_python(payload_path, output_dir, partitions))
        if python.ok:
            return python

        return CommandResult.failure(
            "Extraction failed. Install payload-dumper-go or the payload_dumper Python module.\n"
            f"{python.error}"
        )

    # ==================== workspace ====================

    def get_data_dir(self) -> str:
        return os.path.join(self.base_dir, DATA_DIR_NAME)

    def ensure_dir(self, path: str) -> CommandResult:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            return CommandResult.failure(f"Failed to create directory {path}: {e}")
        return CommandResult.success(path)

    def prepare_data_dirs(self) -> Tuple[CommandResult, Dict[str, str]]:
        """Create the data directory and its standard output subfolders."""
        data_dir = self.get_data_dir()
        created = {}
        targets = {"data": data_dir}
        targets.update({key: os.path.join(data_dir, name) for key, name in DATA_SUBDIRS.items()})
        for key, path in targets.items():
            result = self.ensure_dir(path)
            if not result.ok:
                return result, created
            created[key] = path
        return CommandResult.success(data_dir), created

    def open_folder(self, path: str) -> CommandResult:
        if sys.platform.startswith("win"):
            opener = "explorer"
        elif sys.platform == "darwin":
            opener = "open"
        else:
            opener = "xdg-open"
        return self.runner.spawn(opener, [path])
