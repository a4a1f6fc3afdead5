"""
Tests for argument builders.
"""
import pytest

from core import commands


# ============= TESTS =============

def test_device_selector_comes_first():
    inv = commands.install("/tmp/app.apk", "emulator-5554")
    assert inv.tool == "adb"
    assert inv.argv == ["-s", "emulator-5554", "install", "-r", "/tmp/app.apk"]


def test_no_device_no_selector():
    assert commands.install("/tmp/app.apk").argv == ["install", "-r", "/tmp/app.apk"]


def test_shell_command_is_one_argument():
    inv = commands.shell("pm list packages | grep google", "ABC")
    assert inv.argv == ["-s", "ABC", "shell", "pm list packages | grep google"]


@pytest.mark.parametrize("invocation, expected", [
    (commands.list_devices(), ["devices"]),
    (commands.uninstall("com.x"), ["uninstall", "com.x"]),
    (commands.push("a.txt", "/sdcard/a.txt"), ["push", "a.txt", "/sdcard/a.txt"]),
    (commands.pull("/sdcard/a.txt", "a.txt"), ["pull", "/sdcard/a.txt", "a.txt"]),
    (commands.reboot(), ["reboot"]),
    (commands.reboot("recovery"), ["reboot", "recovery"]),
    (commands.connect("10.0.0.2:5555"), ["connect", "10.0.0.2:5555"]),
    (commands.disconnect(), ["disconnect"]),
    (commands.disconnect("10.0.0.2:5555"), ["disconnect", "10.0.0.2:5555"]),
    (commands.sideload("ota.zip"), ["sideload", "ota.zip"]),
    (commands.logcat_dump(), ["logcat", "-d", "-v", "time", "-t", "100"]),
    (commands.logcat_clear(), ["logcat", "-c"]),
    (commands.screencap("/sdcard/s.png"), ["shell", "screencap", "-p", "/sdcard/s.png"]),
    (commands.remove_remote("/sdcard/s.png"), ["shell", "rm", "/sdcard/s.png"]),
    (commands.package_path("com.x"), ["shell", "pm", "path", "com.x"]),
    (commands.getprop("ro.product.model"), ["shell", "getprop", "ro.product.model"]),
])
def test_adb_grammar(invocation, expected):
    assert invocation.tool == "adb"
    assert invocation.argv == expected


@pytest.mark.parametrize("invocation, expected", [
    (commands.fastboot_devices(), ["devices"]),
    (commands.fastboot_flash("boot", "boot.img"), ["flash", "boot", "boot.img"]),
    (commands.fastboot_reboot(), ["reboot"]),
    (commands.fastboot_reboot("bootloader"), ["reboot", "bootloader"]),
    (commands.fastboot_unlock(), ["flashing", "unlock"]),
    (commands.fastboot_getvar("current-slot"), ["getvar", "current-slot"]),
    (commands.fastboot_set_active("b"), ["set_active", "b"]),
    (commands.fastboot_erase("userdata"), ["erase", "userdata"]),
    (commands.fastboot_flash("boot", "boot.img", "SER"), ["-s", "SER", "flash", "boot", "boot.img"]),
])
def test_fastboot_grammar(invocation, expected):
    assert invocation.tool == "fastboot"
    assert invocation.argv == expected


def test_scrcpy_record_with_device():
    inv = commands.record("out/record_1.mp4", "SER")
    assert inv.tool == "scrcpy"
    assert inv.argv == ["-s", "SER", "--record", "out/record_1.mp4"]


def test_payload_builders():
    assert commands.payload_list_native("p.bin").argv == ["-l", "p.bin"]
    assert commands.payload_list_python("p.bin").argv == ["-m", "payload_dumper", "--list", "p.bin"]
    assert commands.payload_extract_native("p.bin", "out", ["boot", "dtbo"]).argv == [
        "-o", "out", "-p", "boot,dtbo", "p.bin",
    ]
    assert commands.payload_extract_python("p.bin", "out", ["boot", "dtbo"]).argv == [
        "-m", "payload_dumper", "-o", "out", "-p", "boot", "-p", "dtbo", "p.bin",
    ]


def test_payload_extract_needs_partitions():
    with pytest.raises(ValueError):
        commands.payload_extract_native("p.bin", "out", ["", "  "])


def test_invocations_are_immutable():
    inv = commands.list_devices()
    argv = inv.argv
    argv.append("-l")
    assert inv.argv == ["devices"]
