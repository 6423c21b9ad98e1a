"""Metadata tag listing"""

from .exif_data import ExifKind, parse_exif_line, parse_exif_lines

__all__ = ["ExifKind", "parse_exif_line", "parse_exif_lines"]
