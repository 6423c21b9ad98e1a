"""
rawr-core - Embedded preview and metadata extraction for camera RAW files

This library provides:
- Listing of the preview images embedded in RAW files (via exiv2)
- Extraction of a preview by number, defaulting to the largest one
- Metadata tag listing (via exiv2)
- Metadata transfer between files (via exiftool, optional)

Example:
    >>> from rawr_core import Rawr
    >>>
    >>> rawr = Rawr()
    >>> if rawr.is_ready():
    ...     for preview in rawr.list_previews("shot.cr2"):
    ...         print(preview.index, preview.mime_type, preview.dimensions)
    ...     rawr.extract_preview("shot.cr2", "./previews")
"""

from .version import __version__

# Configuration
from .config import ToolConfig

# Errors
from .exceptions import (
    ExtractionFailedError,
    MissingFileError,
    NotRawFileError,
    NotReadyError,
    PreviewAlreadyExistsError,
    PreviewNotFoundError,
    PreviewParseError,
    RawrError,
    ToolExecutionError,
)

# Formats
from .image import FormatDetector, PreviewFormat

# Metadata
from .metadata import ExifKind

# Models
from .models import ExtractionResult, PreviewDescriptor

# Validation
from .validation import RawFileValidator

# High-level API
from .api import (
    EXIF_RAW,
    Rawr,
    batch_extract,
    extract_preview,
    get_extension_from_type,
    is_raw_file,
    is_ready,
    list_exif_data,
    list_previews,
    transfer_exif_data,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "ToolConfig",
    # Errors
    "RawrError",
    "NotReadyError",
    "MissingFileError",
    "NotRawFileError",
    "PreviewNotFoundError",
    "PreviewParseError",
    "ExtractionFailedError",
    "PreviewAlreadyExistsError",
    "ToolExecutionError",
    # Formats
    "FormatDetector",
    "PreviewFormat",
    # Metadata
    "ExifKind",
    "EXIF_RAW",
    # Models
    "PreviewDescriptor",
    "ExtractionResult",
    # Validation
    "RawFileValidator",
    # High-level API
    "Rawr",
    "is_raw_file",
    "is_ready",
    "get_extension_from_type",
    "list_previews",
    "extract_preview",
    "list_exif_data",
    "transfer_exif_data",
    "batch_extract",
]
