"""
External Tool Invocation

Builds argument vectors for exiv2 and exiftool and runs them.
"""

import logging
import subprocess  # nosec B404 - subprocess is required for exiv2/exiftool invocation
from pathlib import Path
from typing import List

from .exceptions import ToolExecutionError

logger = logging.getLogger(__name__)


def build_list_previews_command(exiv2: Path, raw_path: Path) -> List[str]:
    """exiv2 -pp pr <raw>"""
    return [str(exiv2), "-pp", "pr", str(raw_path)]


def build_extract_preview_command(
    exiv2: Path,
    raw_path: Path,
    ordinal: int,
    scratch_dir: Path,
    force: bool = False
) -> List[str]:
    """
    exiv2 -ep<ordinal> -l <scratch_dir> ex <raw>

    exiv2 asks before replacing an existing file; ``force`` adds -f so it
    overwrites without prompting.
    """
    cmd = [str(exiv2), f"-ep{ordinal}", "-l", str(scratch_dir)]
    if force:
        cmd.append("-f")
    cmd.extend(["ex", str(raw_path)])
    return cmd


def build_list_tags_command(exiv2: Path, raw_path: Path, flag: str) -> List[str]:
    """exiv2 -Pkv|-Pkt pr <raw>"""
    return [str(exiv2), flag, "pr", str(raw_path)]


def build_transfer_tags_command(exiftool: Path, source: Path, destination: Path) -> List[str]:
    """exiftool -overwrite_original -tagsFromFile <source> <destination>"""
    return [
        str(exiftool),
        "-overwrite_original",
        "-tagsFromFile",
        str(source),
        str(destination),
    ]


def run_tool(cmd: List[str], timeout: float) -> subprocess.CompletedProcess:
    """
    Run an external command and capture its output.

    The exit status is not checked here; exiv2 returns non-zero for
    partial successes, so callers decide what a failure is.

    Args:
        cmd: Argument vector, executable first
        timeout: Seconds to wait before giving up

    Returns:
        CompletedProcess with text stdout/stderr

    Raises:
        ToolExecutionError: If the command cannot be started or times out
    """
    logger.debug("Running: %s", " ".join(cmd))
    try:
        return subprocess.run(  # nosec B603 - tool paths come from ToolConfig
            cmd,
            capture_output=True,
            text=True,
            errors="replace",  # Tag values may hold non-UTF8 bytes
            stdin=subprocess.DEVNULL,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ToolExecutionError(
            f"{Path(cmd[0]).name} timed out after {timeout:g} seconds"
        ) from e
    except OSError as e:
        raise ToolExecutionError(f"Could not run {cmd[0]}: {e}") from e


def output_lines(stdout: str) -> List[str]:
    """Split tool output into lines, dropping blank ones."""
    return [line for line in stdout.splitlines() if line.strip()]
