"""
Example of extracting previews from a directory of RAW files
"""

from pathlib import Path

from rawr_core import FormatDetector, batch_extract


def main():
    # Find all RAW files in a directory
    raw_dir = Path("./raws")
    output_dir = Path("./previews")

    if not raw_dir.exists():
        print(f"Error: Directory {raw_dir} not found")
        print("Please create a 'raws' directory with some RAW files")
        return

    raw_files = sorted(p for p in raw_dir.iterdir() if FormatDetector.is_raw_file(p))

    if not raw_files:
        print(f"No RAW files found in {raw_dir}")
        return

    print(f"Found {len(raw_files)} RAW files")
    print("=" * 60)

    output_dir.mkdir(exist_ok=True)

    # Progress callback
    def on_progress(current, total, result):
        if result.skipped:
            print(f"[{current}/{total}] - {result.raw_path.name} (already extracted)")
        elif result.success:
            print(f"[{current}/{total}] ✓ {result.raw_path.name} -> {result.preview_path.name}")
        else:
            print(f"[{current}/{total}] ✗ {result.error}")

    # Extract all previews
    results = batch_extract(raw_files, output_dir, progress_callback=on_progress)

    # Summary
    extracted = [r for r in results if r.success and not r.skipped]
    print("=" * 60)
    print(f"Extracted {len(extracted)}/{len(results)} previews")


if __name__ == "__main__":
    main()
