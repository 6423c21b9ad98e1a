"""
Simple example of using rawr-core to extract the preview of a RAW file
"""

import sys
from pathlib import Path

from rawr_core import Rawr, RawrError


def main():
    # Replace with actual RAW file path
    raw_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("example.CR2")
    output_dir = Path("./previews")

    if not raw_path.exists():
        print(f"Error: {raw_path} not found")
        print("Please provide a valid RAW file path")
        return

    rawr = Rawr()
    if not rawr.is_ready():
        print("Error: exiv2 not found or scratch directory not writable")
        print(f"Missing tools: {', '.join(rawr.config.missing_tools()) or 'none'}")
        return

    print(f"Inspecting {raw_path}...")
    print("-" * 60)

    try:
        previews = rawr.list_previews(raw_path)
    except RawrError as e:
        print(f"✗ Failed: {e}")
        return

    for number, preview in enumerate(previews, 1):
        print(f"Preview {number}:      {preview.mime_type}, {preview.dimensions}px, {preview.size_bytes} bytes")

    output_dir.mkdir(exist_ok=True)

    # Extract the largest preview (default: last one)
    # Or pick one: rawr.extract_preview(raw_path, output_dir, ordinal=1)
    try:
        preview_path = rawr.extract_preview(raw_path, output_dir)
    except RawrError as e:
        print(f"✗ Failed: {e}")
        return

    if preview_path is False:
        print("\nAlready extracted, nothing to do")
    else:
        print(f"\n✓ Saved:        {preview_path}")

    # Metadata
    tags = rawr.list_exif_data(raw_path, kind="text")
    for key in ("Exif.Image.Make", "Exif.Image.Model", "Exif.Photo.DateTimeOriginal"):
        if tags.get(key):
            print(f"{key:30} {tags[key]}")


if __name__ == "__main__":
    main()
