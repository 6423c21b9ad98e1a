"""Preview selection by 1-based ordinal"""

from typing import List, Optional

from ..exceptions import PreviewNotFoundError
from ..models.preview import PreviewDescriptor


def resolve_ordinal(catalog_length: int, ordinal: Optional[int] = None) -> int:
    """Return the ordinal to extract; defaults to the last preview."""
    return catalog_length if ordinal is None else int(ordinal)


def resolve_position(catalog_length: int, ordinal: Optional[int] = None) -> int:
    """
    Translate a 1-based ordinal into a 0-based catalog position.

    Args:
        catalog_length: Number of previews in the catalog
        ordinal: 1-based preview number, None for the last preview

    Returns:
        Position in range(catalog_length)

    Raises:
        PreviewNotFoundError: If the ordinal is out of range
    """
    position = resolve_ordinal(catalog_length, ordinal) - 1
    if position < 0 or position >= catalog_length:
        raise PreviewNotFoundError(f"Preview {position} does not exist")
    return position


def select_preview(
    catalog: List[PreviewDescriptor],
    ordinal: Optional[int] = None
) -> PreviewDescriptor:
    """
    Pick a preview from the catalog.

    Args:
        catalog: Previews in exiv2 order
        ordinal: 1-based preview number, None for the last (largest) preview

    Returns:
        The selected PreviewDescriptor

    Raises:
        PreviewNotFoundError: If there is no usable preview at that ordinal
    """
    position = resolve_position(len(catalog), ordinal)
    preview = catalog[position]
    if not preview.mime_type:
        raise PreviewNotFoundError(f"Preview {position} does not exist")
    return preview
