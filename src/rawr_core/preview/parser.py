"""
Preview Listing Parser

Parses the output of ``exiv2 -pp`` into PreviewDescriptor records.

exiv2 prints one line per embedded preview:

    Preview 1: image/jpeg, 160x120 pixels, 10067 bytes
    Preview 2: image/jpeg, 1616x1080 pixels, 362359 bytes
"""

import re
from typing import Iterable, List

from ..exceptions import PreviewParseError
from ..models.preview import PreviewDescriptor

PREVIEW_LINE_PATTERN = re.compile(
    r"Preview (?P<index>[0-9]+): (?P<mime_type>image/[a-z]+), "
    r"(?P<width>[0-9]+)x(?P<height>[0-9]+) pixels, (?P<size>[0-9]+) bytes"
)


def parse_preview_line(line: str) -> PreviewDescriptor:
    """
    Parse one line of exiv2 preview listing.

    Args:
        line: A single output line

    Returns:
        PreviewDescriptor with integer fields

    Raises:
        PreviewParseError: If the line does not describe a preview
    """
    match = PREVIEW_LINE_PATTERN.search(line)
    if match is None:
        raise PreviewParseError(line)

    return PreviewDescriptor(
        index=int(match.group("index")),
        mime_type=match.group("mime_type"),
        width=int(match.group("width")),
        height=int(match.group("height")),
        size_bytes=int(match.group("size")),
    )


def parse_preview_output(lines: Iterable[str]) -> List[PreviewDescriptor]:
    """
    Parse every line of exiv2 preview listing, keeping output order.

    A single malformed line fails the whole listing so the catalog always
    mirrors what exiv2 reported.

    Args:
        lines: Output lines (without trailing newlines)

    Returns:
        List of PreviewDescriptor in the same order as the lines

    Raises:
        PreviewParseError: On the first line that does not describe a preview
    """
    return [parse_preview_line(line) for line in lines]
