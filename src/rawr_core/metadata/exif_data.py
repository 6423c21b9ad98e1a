"""
Tag Listing Parser

Parses ``exiv2 -Pkv`` / ``exiv2 -Pkt`` output into an ordered mapping.

Each line holds a tag key, a space and the value:

    Exif.Image.Make Canon
    Exif.Image.Model Canon EOS R5
    Exif.Photo.ISOSpeedRatings
"""

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple, Union


class ExifKind(Enum):
    """Which form of tag values exiv2 prints"""
    RAW = "raw"    # plain values (-Pkv)
    TEXT = "text"  # interpreted, human readable values (-Pkt)

    @classmethod
    def coerce(cls, kind: Union["ExifKind", str]) -> "ExifKind":
        """Anything other than RAW is treated as TEXT."""
        if isinstance(kind, cls):
            return kind
        return cls.RAW if str(kind).lower() == cls.RAW.value else cls.TEXT

    @property
    def exiv2_flag(self) -> str:
        return "-Pkv" if self is ExifKind.RAW else "-Pkt"


def parse_exif_line(line: str) -> Tuple[str, Optional[str]]:
    """
    Split a tag line on the first space.

    Args:
        line: One output line

    Returns:
        (key, value) tuple; value is None when the line holds only a key
    """
    parts = line.split(" ", 1)
    key = parts[0]
    value = parts[1].strip() if len(parts) > 1 else None
    return key, value


def parse_exif_lines(lines: Iterable[str]) -> Dict[str, Optional[str]]:
    """
    Fold tag lines into a mapping.

    Keys keep the position of their first occurrence; a repeated key
    replaces the earlier value (last write wins).

    Args:
        lines: Output lines (without trailing newlines)

    Returns:
        Ordered dict of tag key to value
    """
    data: Dict[str, Optional[str]] = {}
    for line in lines:
        key, value = parse_exif_line(line)
        data[key] = value
    return data
