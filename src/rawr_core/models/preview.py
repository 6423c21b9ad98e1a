"""
Preview Model

Describes one preview image embedded in a RAW file, as reported by exiv2.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class PreviewDescriptor:
    """
    One embedded preview.

    Attributes:
        index: Preview number reported by exiv2
        mime_type: MIME type of the encoded preview (e.g. "image/jpeg")
        width: Width in pixels
        height: Height in pixels
        size_bytes: Encoded size inside the RAW file
    """
    index: int
    mime_type: str
    width: int
    height: int
    size_bytes: int

    @property
    def pixels(self) -> int:
        return self.width * self.height

    @property
    def dimensions(self) -> str:
        """Get formatted dimensions, e.g. '1600x1200'"""
        return f"{self.width}x{self.height}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PreviewDescriptor':
        """Create from dictionary (e.g., API response)"""
        return cls(
            index=int(data['index']),
            mime_type=str(data['mime_type']),
            width=int(data['width']),
            height=int(data['height']),
            size_bytes=int(data['size_bytes']),
        )
