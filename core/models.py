"""
Data models and enums for Android Toolbox Manager.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Tuple


class ShellType(Enum):
    NON_ROOT = "non_root"
    ROOT = "root"


class DeviceMode(Enum):
    ADB = "adb"
    FASTBOOT = "fastboot"
    RECOVERY = "recovery"
    SIDELOAD = "sideload"
    OFFLINE = "offline"
    UNAUTHORIZED = "unauthorized"
    UNKNOWN = "unknown"


_STATUS_MODES = {
    "device": DeviceMode.ADB,
    "fastboot": DeviceMode.FASTBOOT,
    "recovery": DeviceMode.RECOVERY,
    "sideload": DeviceMode.SIDELOAD,
    "offline": DeviceMode.OFFLINE,
    "unauthorized": DeviceMode.UNAUTHORIZED,
}


@dataclass(frozen=True)
class DeviceInfo:
    """One line of a device listing."""
    serial: str
    status: str

    @property
    def mode(self) -> DeviceMode:
        return _STATUS_MODES.get(self.status, DeviceMode.UNKNOWN)


@dataclass(frozen=True)
class DeviceProperties:
    """Identity properties read from a device with getprop."""
    serial: str
    model: str
    brand: str
    android_version: str


@dataclass(frozen=True)
class Invocation:
    """A single tool call: which tool, which arguments, which device."""
    tool: str
    args: Tuple[str, ...]
    device: Optional[str] = None

    @property
    def argv(self) -> List[str]:
        """Argument vector with the device selector pair first."""
        if self.device:
            return ["-s", self.device, *self.args]
        return list(self.args)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a tool call, collapsed to either output or an error text."""
    ok: bool
    output: str = ""
    error: str = ""

    @classmethod
    def success(cls, output: str = "") -> "CommandResult":
        return cls(ok=True, output=output)

    @classmethod
    def failure(cls, error: str) -> "CommandResult":
        return cls(ok=False, error=error)

    @classmethod
    def from_process(cls, returncode: int, stdout: str, stderr: str) -> "CommandResult":
        # Some tools report errors on stdout, so fall back to it
        if returncode == 0:
            return cls.success(stdout)
        return cls.failure(stderr if stderr else stdout)


@dataclass
class PackageInfo:
    """Metadata extracted from an aapt badging dump."""
    name: Optional[str] = None
    version_name: Optional[str] = None
    version_code: Optional[str] = None
    label: Optional[str] = None
    min_sdk: Optional[str] = None
    target_sdk: Optional[str] = None
    has_package_line: bool = False
    permissions: List[str] = field(default_factory=list)

    def add_permission(self, short_name: str):
        if short_name not in self.permissions:
            self.permissions.append(short_name)

    def render(self) -> str:
        """Human readable report, only sections that were found."""
        lines = []
        if self.has_package_line:
            lines.append("Package:")
            if self.name is not None:
                lines.append(f"  Name: {self.name}")
            if self.version_name is not None:
                lines.append(f"  Version: {self.version_name}")
            if self.version_code is not None:
                lines.append(f"  Version code: {self.version_code}")
        if self.label is not None:
            lines.append(f"Label: {self.label}")
        if self.min_sdk is not None:
            lines.append(f"Min SDK: {self.min_sdk}")
        if self.target_sdk is not None:
            lines.append(f"Target SDK: {self.target_sdk}")
        if self.permissions:
            lines.append("")
            lines.append("Permissions:")
            for perm in self.permissions:
                lines.append(f"  - {perm}")
        return "\n".join(lines) + "\n" if lines else ""


@dataclass(frozen=True)
class Partition:
    name: str
    size: str


@dataclass(frozen=True)
class PartitionListing:
    """Partitions of an OTA payload and the tool that listed them."""
    partitions: Tuple[Partition, ...]
    source: str
    raw: str = ""

    @property
    def is_placeholder(self) -> bool:
        return self.source == "placeholder"
