"""
Shared fixtures for rawr-core tests.

exiv2 and exiftool are never really run: tests point ToolConfig at small
executable stub files (so readiness checks pass) and patch subprocess.run
with FakeExiv2, which answers the commands the way exiv2 does.
"""

import subprocess
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from PIL import Image

from rawr_core import ToolConfig

SUBPROCESS_RUN = "rawr_core.tools.subprocess.run"

CANON_PREVIEW_LINES = [
    "Preview 1: image/jpeg, 160x120 pixels, 10067 bytes",
    "Preview 2: image/jpeg, 668x432 pixels, 46534 bytes",
    "Preview 3: image/jpeg, 1936x1288 pixels, 349879 bytes",
]


def make_jpeg_bytes(width: int = 64, height: int = 48, color: tuple = (70, 130, 180)) -> bytes:
    """Create a small real JPEG"""
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="JPEG", quality=85)
    return buffer.getvalue()


def make_stub_executable(path: Path) -> Path:
    """Create an executable placeholder standing in for an external tool"""
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(0o755)
    return path


class FakeExiv2:
    """
    Stand-in for subprocess.run that behaves like exiv2/exiftool.

    Attributes:
        preview_lines: Output of ``exiv2 -pp``
        tag_lines: Output of ``exiv2 -Pkv`` / ``-Pkt``
        write_preview: Whether ``-ep`` writes the preview file
        preview_bytes: Content written for extracted previews
        returncode: Exit status for every command
        stderr: stderr for every command
        calls: Argument vectors of all commands run
    """

    EXTENSIONS = {"image/jpeg": "jpg", "image/jpg": "jpg", "image/tiff": "tif"}

    def __init__(
        self,
        preview_lines: Optional[List[str]] = None,
        tag_lines: Optional[List[str]] = None,
        write_preview: bool = True,
        preview_bytes: Optional[bytes] = None,
        returncode: int = 0,
        stderr: str = "",
    ):
        self.preview_lines = CANON_PREVIEW_LINES if preview_lines is None else preview_lines
        self.tag_lines = tag_lines or []
        self.write_preview = write_preview
        self.preview_bytes = preview_bytes if preview_bytes is not None else make_jpeg_bytes()
        self.returncode = returncode
        self.stderr = stderr
        self.calls: List[List[str]] = []

    def commands(self, flag: str) -> List[List[str]]:
        """Commands whose arguments start with ``flag``"""
        return [cmd for cmd in self.calls if any(arg.startswith(flag) for arg in cmd[1:])]

    def _preview_extension(self, ordinal: int) -> str:
        line = self.preview_lines[ordinal - 1]
        mime_type = line.split(": ", 1)[1].split(",", 1)[0]
        return self.EXTENSIONS.get(mime_type, "jpg")

    def __call__(self, cmd, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        stdout = ""

        if "-pp" in cmd:
            stdout = "".join(f"{line}\n" for line in self.preview_lines)
        elif "-Pkv" in cmd or "-Pkt" in cmd:
            stdout = "".join(f"{line}\n" for line in self.tag_lines)
        elif any(arg.startswith("-ep") for arg in cmd):
            ordinal = int(next(arg for arg in cmd if arg.startswith("-ep"))[3:])
            scratch_dir = Path(cmd[cmd.index("-l") + 1])
            raw_path = Path(cmd[-1])
            if self.write_preview:
                output = scratch_dir / f"{raw_path.stem}-preview{ordinal}.{self._preview_extension(ordinal)}"
                output.write_bytes(self.preview_bytes)

        return subprocess.CompletedProcess(cmd, self.returncode, stdout=stdout, stderr=self.stderr)


@pytest.fixture
def tools_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "bin"
    directory.mkdir()
    return directory


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "scratch"
    directory.mkdir()
    return directory


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "previews"
    directory.mkdir()
    return directory


@pytest.fixture
def tool_config(tools_dir: Path, scratch_dir: Path) -> ToolConfig:
    """Configuration with both tools available"""
    return ToolConfig(
        exiv2_path=make_stub_executable(tools_dir / "exiv2"),
        exiftool_path=make_stub_executable(tools_dir / "exiftool"),
        scratch_dir=scratch_dir,
        timeout=30,
    )


@pytest.fixture
def raw_file(tmp_path: Path) -> Path:
    """A file named like a Canon RAW (contents are never parsed)"""
    path = tmp_path / "shoot" / "shot.cr2"
    path.parent.mkdir()
    path.write_bytes(b"II*\x00\x10\x00\x00\x00CR\x02\x00" + b"\x00" * 64)
    return path


@pytest.fixture
def fake_exiv2() -> FakeExiv2:
    return FakeExiv2()


@pytest.fixture
def env_for(tool_config: ToolConfig):
    """Environment variables describing tool_config"""
    def build() -> Dict[str, str]:
        return {
            "RAWR_EXIV2_PATH": str(tool_config.exiv2_path),
            "RAWR_EXIFTOOL_PATH": str(tool_config.exiftool_path),
            "RAWR_SCRATCH_DIR": str(tool_config.scratch_dir),
        }
    return build
