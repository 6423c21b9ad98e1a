"""
Extraction Result Model

Represents the outcome of extracting the preview of a single RAW file
during batch processing.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class ExtractionResult:
    """
    Result from extracting one preview.

    A skipped result means a previous extraction was still in the scratch
    directory and nothing was done. error_type holds the class name of the
    exception that failed the extraction.
    """
    raw_path: Path
    success: bool
    preview_path: Optional[Path] = None
    skipped: bool = False
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Check if extraction failed"""
        return not self.success

    @property
    def already_exists(self) -> bool:
        """Check if extraction failed because the destination was taken"""
        return self.failed and self.error_type == "PreviewAlreadyExistsError"
