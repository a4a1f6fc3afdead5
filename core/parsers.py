"""
Parsers for the text the Android tools print.
"""
import re
from typing import List, Optional

from .models import DeviceInfo, PackageInfo, Partition

# payload-dumper-go: "boot (100 MB), system (3.2 GB), ..."
_PAREN_PARTITION = re.compile(r'([A-Za-z0-9_\-]+)\s*\(([^)]+)\)')
# placeholder / python payload_dumper: "boot:67.2 MB"
_COLON_PARTITION = re.compile(r'^([A-Za-z0-9_\-]+)\s*:\s*(\S.*)$')
# only a colon value shaped like a size counts, so "Version: 2" is skipped
_PARTITION_SIZE = re.compile(r'^\d+(\.\d+)?\s*[KMGT]?i?B$', re.IGNORECASE)


def parse_devices(output: str, skip_header: bool = True) -> List[DeviceInfo]:
    """
    Parse `adb devices` (header line first) or `fastboot devices` output.

    Lines with fewer than two tokens are skipped.
    """
    lines = output.splitlines()
    if skip_header:
        lines = lines[1:]

    devices = []
    for line in lines:
        parts = line.split()
        if len(parts) >= 2:
            devices.append(DeviceInfo(serial=parts[0], status=parts[1]))
    return devices


def extract_value(text: str, start: str, end: str) -> Optional[str]:
    """Text between the `start` marker and the next `end` after it."""
    start_idx = text.find(start)
    if start_idx < 0:
        return None
    remaining = text[start_idx + len(start):]
    end_idx = remaining.find(end)
    if end_idx < 0:
        return None
    return remaining[:end_idx]


def _line_value(line: str, prefix: str) -> str:
    return line.replace(prefix, "", 1).replace("'", "").strip()


def parse_badging(output: str) -> PackageInfo:
    """Collect the interesting fields of `aapt dump badging`."""
    info = PackageInfo()
    for line in output.splitlines():
        if line.startswith("package:"):
            info.has_package_line = True
            info.name = extract_value(line, "name='", "'")
            info.version_name = extract_value(line, "versionName='", "'")
            info.version_code = extract_value(line, "versionCode='", "'")
        elif line.startswith("application-label:"):
            info.label = _line_value(line, "application-label:")
        elif line.startswith("sdkVersion:"):
            info.min_sdk = _line_value(line, "sdkVersion:")
        elif line.startswith("targetSdkVersion:"):
            info.target_sdk = _line_value(line, "targetSdkVersion:")
        elif line.startswith("uses-permission:"):
            perm = extract_value(line, "name='", "'")
            if perm:
                info.add_permission(perm.split(".")[-1])
    return info


def parse_package_path(output: str) -> Optional[str]:
    """APK path from `pm path <package>`, e.g. `package:/data/app/.../base.apk`."""
    for line in output.splitlines():
        if line.startswith("package:"):
            return line[len("package:"):].strip()
    return None


def parse_partitions(output: str) -> List[Partition]:
    partitions = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        matches = _PAREN_PARTITION.findall(line)
        if matches:
            partitions.extend(Partition(name, size.strip()) for name, size in matches)
            continue
        match = _COLON_PARTITION.match(line)
        if match and _PARTITION_SIZE.match(match.group(2).strip()):
            partitions.append(Partition(match.group(1), match.group(2).strip()))
    return partitions
