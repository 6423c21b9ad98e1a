"""Data models for rawr-core"""

from .extraction_result import ExtractionResult
from .preview import PreviewDescriptor

__all__ = ["PreviewDescriptor", "ExtractionResult"]
