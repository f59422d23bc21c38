"""Tests for build_command_line."""

from __future__ import annotations

from nodegate.gate.command_line import build_command_line
from nodegate.models import Platform


class TestBuildCommandLine:
    def test_posix_uses_bash(self) -> None:
        assert build_command_line("/tmp/x.sh", Platform.POSIX) == ["bash", "/tmp/x.sh"]

    def test_windows_uses_cmd_call(self) -> None:
        assert build_command_line(r"C:\tmp\x.bat", Platform.WINDOWS) == [
            "cmd",
            "/c",
            "call",
            r"C:\tmp\x.bat",
        ]

    def test_path_with_spaces_stays_one_argument(self) -> None:
        """Paths are never split or quoted."""
        argv = build_command_line("/srv/my agent/x y.sh", Platform.POSIX)

        assert argv == ["bash", "/srv/my agent/x y.sh"]
