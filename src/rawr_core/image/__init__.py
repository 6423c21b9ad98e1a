"""RAW and preview format detection"""

from .formats import FormatDetector, PreviewFormat

__all__ = ["FormatDetector", "PreviewFormat"]
