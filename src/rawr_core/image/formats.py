"""
RAW and Preview Format Detection
"""

from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Union

from PIL import Image


class PreviewFormat(Enum):
    """File formats an extracted preview is written as"""
    JPEG = "jpg"
    TIFF = "tif"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def media_type(self) -> str:
        return "image/tiff" if self is PreviewFormat.TIFF else "image/jpeg"


class FormatDetector:
    """Detect RAW files and map preview MIME types to file extensions"""

    RAW_EXTENSIONS: FrozenSet[str] = frozenset({
        '.ari',  # Arri
        '.arw', '.srf', '.sr2',  # Sony
        '.bay',  # Casio
        '.crw', '.cr2', '.cr3',  # Canon
        '.cap', '.iiq', '.eip',  # Phase One
        '.dcs', '.dcr', '.drf', '.k25', '.kdc',  # Kodak
        '.dng',  # Adobe/Universal
        '.erf',  # Epson
        '.fff', '.3fr',  # Imacon/Hasselblad
        '.mdc', '.mrw',  # Minolta
        '.mef',  # Mamiya
        '.mos',  # Leaf
        '.nef', '.nrw',  # Nikon
        '.obm',  # Olympus
        '.orf',  # Olympus/OM System
        '.pef', '.ptx',  # Pentax
        '.pxn',  # Logitech
        '.r3d',  # RED
        '.raf',  # Fujifilm
        '.raw', '.rw2',  # Panasonic
        '.rwl',  # Leica
        '.rwz',  # Rawzor
        '.srw',  # Samsung
        '.x3f',  # Sigma
    })

    # Anything not listed falls back to JPEG
    MIME_TYPE_FORMATS: Dict[str, PreviewFormat] = {
        'image/jpg': PreviewFormat.JPEG,
        'image/jpeg': PreviewFormat.JPEG,
        'image/tiff': PreviewFormat.TIFF,
        'image/tif': PreviewFormat.TIFF,  # not a registered type, seen in the wild
    }

    @staticmethod
    def is_raw_file(file_path: Union[str, Path]) -> bool:
        """
        Check if file extension indicates RAW format.

        This is a name-based check only; file contents are not inspected.

        Args:
            file_path: Path or filename with extension

        Returns:
            True if the extension (case-insensitive) is a RAW extension
        """
        return Path(file_path).suffix.lower() in FormatDetector.RAW_EXTENSIONS

    @staticmethod
    def format_for_mime_type(mime_type: str) -> PreviewFormat:
        """
        Map a preview MIME type to the format exiv2 writes it as.

        Args:
            mime_type: MIME type reported by exiv2 (e.g. "image/jpeg")

        Returns:
            PreviewFormat, JPEG for unrecognized types
        """
        return FormatDetector.MIME_TYPE_FORMATS.get(mime_type.lower(), PreviewFormat.JPEG)

    @staticmethod
    def extension_for_mime_type(mime_type: str) -> str:
        """
        Map a preview MIME type to a file extension (without dot).

        Examples:
            >>> FormatDetector.extension_for_mime_type("image/jpeg")
            'jpg'
            >>> FormatDetector.extension_for_mime_type("image/TIFF")
            'tif'
            >>> FormatDetector.extension_for_mime_type("image/png")
            'jpg'
        """
        return FormatDetector.format_for_mime_type(mime_type).extension

    @staticmethod
    def can_open_with_pil(file_path: Path) -> bool:
        """
        Check if file can be opened with PIL.

        Args:
            file_path: Path to image file

        Returns:
            True if PIL can open the file
        """
        try:
            with Image.open(file_path) as img:
                img.verify()
            return True
        except Exception:
            return False
