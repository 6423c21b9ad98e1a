"""
External Tool Configuration

Resolves the exiv2/exiftool executables and the scratch directory that
exiv2 writes extracted previews into.

Configuration comes from environment variables, falling back to the system
PATH and the platform temp directory:

- RAWR_EXIV2_PATH: path to exiv2
- RAWR_EXIFTOOL_PATH: path to exiftool
- RAWR_SCRATCH_DIR: staging directory for extracted previews
- RAWR_TOOL_TIMEOUT: seconds before an external command is abandoned
"""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)

ENV_EXIV2_PATH = "RAWR_EXIV2_PATH"
ENV_EXIFTOOL_PATH = "RAWR_EXIFTOOL_PATH"
ENV_SCRATCH_DIR = "RAWR_SCRATCH_DIR"
ENV_TOOL_TIMEOUT = "RAWR_TOOL_TIMEOUT"

DEFAULT_TIMEOUT = 300.0  # 5 minutes


def _is_executable(path: Optional[Path]) -> bool:
    return path is not None and path.is_file() and os.access(path, os.X_OK)


def _which(name: str) -> Optional[Path]:
    found = shutil.which(name)
    return Path(found) if found else None


@dataclass
class ToolConfig:
    """
    Locations of the external tools and the scratch directory.

    Attributes:
        exiv2_path: exiv2 executable (previews and tag listing)
        exiftool_path: exiftool executable (tag transfer, optional)
        scratch_dir: Writable directory exiv2 extracts previews into
        timeout: Seconds to wait for any external command
    """
    exiv2_path: Optional[Path] = None
    exiftool_path: Optional[Path] = None
    scratch_dir: Path = Path(tempfile.gettempdir())
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ToolConfig":
        """
        Build configuration from environment variables.

        Unset tool paths are looked up on the system PATH.

        Args:
            env: Mapping to read instead of os.environ (useful for testing)

        Returns:
            ToolConfig with resolved paths
        """
        env = env if env is not None else os.environ

        exiv2 = env.get(ENV_EXIV2_PATH)
        exiftool = env.get(ENV_EXIFTOOL_PATH)
        scratch = env.get(ENV_SCRATCH_DIR)

        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get(ENV_TOOL_TIMEOUT)
        if raw_timeout is not None:
            try:
                timeout = float(raw_timeout)
                if timeout <= 0:
                    raise ValueError(raw_timeout)
            except ValueError:
                logger.warning("Invalid timeout value for %s: %s", ENV_TOOL_TIMEOUT, raw_timeout)
                timeout = DEFAULT_TIMEOUT

        return cls(
            exiv2_path=Path(exiv2) if exiv2 else _which("exiv2"),
            exiftool_path=Path(exiftool) if exiftool else _which("exiftool"),
            scratch_dir=Path(scratch) if scratch else Path(tempfile.gettempdir()),
            timeout=timeout,
        )

    def has_exiv2(self) -> bool:
        """Check that exiv2 is configured and executable."""
        return _is_executable(self.exiv2_path)

    def has_exiftool(self) -> bool:
        """Check that exiftool is configured and executable."""
        return _is_executable(self.exiftool_path)

    def scratch_is_writable(self) -> bool:
        """Check that the scratch directory exists and is writable."""
        return self.scratch_dir.is_dir() and os.access(self.scratch_dir, os.W_OK)

    def is_ready(self) -> bool:
        """
        Check whether previews and tags can be read.

        Requires a writable scratch directory and an executable exiv2.
        exiftool is optional, but when a path is configured it must be
        executable.

        Returns:
            True if all checks pass
        """
        if not self.scratch_is_writable():
            return False
        if not self.has_exiv2():
            return False
        if self.exiftool_path is not None and not self.has_exiftool():
            return False
        return True

    def missing_tools(self) -> List[str]:
        """
        List the external tools that are not usable.

        Returns:
            Tool names (exiv2 first), empty if everything is available
        """
        missing = []
        if not self.has_exiv2():
            missing.append("exiv2")
        if not self.has_exiftool():
            missing.append("exiftool")
        return missing
