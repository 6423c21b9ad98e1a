"""
RAW File Validation

Validates RAW files before handing them to exiv2.
"""

from pathlib import Path
from typing import Optional, Tuple

from ..image.formats import FormatDetector


class RawFileValidator:
    """Validate RAW files before processing"""

    MAX_FILE_SIZE = 500 * 1024 * 1024  # 500 MB

    @staticmethod
    def validate_file(file_path: Path) -> Tuple[bool, Optional[str]]:
        """
        Validate RAW file.

        Checks:
        - File exists
        - File size within limits
        - Extension is a RAW extension

        Args:
            file_path: Path to RAW file

        Returns:
            (is_valid, error_message) tuple
        """
        if not file_path.exists():
            return False, f"File not found: {file_path}"

        if not file_path.is_file():
            return False, f"Not a file: {file_path}"

        try:
            size = file_path.stat().st_size
        except OSError as e:
            return False, f"Cannot access file: {e}"

        if size > RawFileValidator.MAX_FILE_SIZE:
            size_mb = size / 1024 / 1024
            max_mb = RawFileValidator.MAX_FILE_SIZE / 1024 / 1024
            return False, f"File too large: {size_mb:.1f} MB (max {max_mb:.0f} MB)"

        if size == 0:
            return False, "File is empty"

        if not FormatDetector.is_raw_file(file_path):
            return False, f"Not a RAW file: {file_path.suffix or file_path.name}"

        return True, None

    @staticmethod
    def is_valid(file_path: Path) -> bool:
        """
        Quick check if file is valid.

        Args:
            file_path: Path to RAW file

        Returns:
            True if file is valid
        """
        valid, _ = RawFileValidator.validate_file(file_path)
        return valid
