"""
High-level API for rawr-core

The Rawr class wraps exiv2 and exiftool; the module-level functions are
conveniences that configure it from the environment.
"""

import logging
import shutil
from pathlib import Path
from typing import Callable, Dict, List, Literal, Optional, Union

from .config import ToolConfig
from .exceptions import (
    ExtractionFailedError,
    MissingFileError,
    NotRawFileError,
    NotReadyError,
    PreviewAlreadyExistsError,
    RawrError,
)
from .image.formats import FormatDetector
from .metadata.exif_data import ExifKind, parse_exif_lines
from .models.extraction_result import ExtractionResult
from .models.preview import PreviewDescriptor
from .preview.parser import parse_preview_output
from .preview.selector import resolve_ordinal, select_preview
from .tools import (
    build_extract_preview_command,
    build_list_previews_command,
    build_list_tags_command,
    build_transfer_tags_command,
    output_lines,
    run_tool,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

EXIF_RAW = ExifKind.RAW.value


class Rawr:
    """
    Extract embedded previews and metadata from RAW files.

    Example:
        >>> from rawr_core import Rawr
        >>> rawr = Rawr()
        >>> rawr.list_previews("shot.cr2")
        [PreviewDescriptor(index=1, mime_type='image/jpeg', width=160, ...), ...]
        >>> rawr.extract_preview("shot.cr2", "/tmp/previews")
        PosixPath('/tmp/previews/shot.jpg')
    """

    def __init__(self, config: Optional[ToolConfig] = None) -> None:
        """
        Args:
            config: Tool locations; read from the environment when omitted
        """
        self.config = config if config is not None else ToolConfig.from_env()

    @staticmethod
    def is_raw_file(file_path: PathLike) -> bool:
        """Check if the file extension is a RAW extension."""
        return FormatDetector.is_raw_file(file_path)

    @staticmethod
    def get_extension_from_type(mime_type: str) -> str:
        """Map a preview MIME type to a file extension (jpg or tif)."""
        return FormatDetector.extension_for_mime_type(mime_type)

    def is_ready(self) -> bool:
        """Check scratch directory and external tools."""
        return self.config.is_ready()

    def _require_ready(self, action: str) -> None:
        if not self.is_ready():
            missing = ", ".join(self.config.missing_tools()) or "none"
            raise NotReadyError(
                f"Not ready to {action} (scratch dir: {self.config.scratch_dir}, "
                f"missing tools: {missing})"
            )

    @staticmethod
    def _require_file(file_path: Path, label: str = "File") -> None:
        if not file_path.exists():
            raise MissingFileError(f"{label} does not exist: {file_path}")

    def list_previews(self, raw_path: PathLike) -> List[PreviewDescriptor]:
        """
        List the previews embedded in a RAW file.

        Args:
            raw_path: Path to the RAW file

        Returns:
            Previews in the order exiv2 reports them (usually smallest first)

        Raises:
            NotReadyError: If exiv2 or the scratch directory is unusable
            MissingFileError: If the file does not exist
            PreviewParseError: If exiv2 printed a line that is not a preview
        """
        raw_path = Path(raw_path)
        self._require_ready("list previews")
        self._require_file(raw_path)

        result = run_tool(
            build_list_previews_command(self.config.exiv2_path, raw_path),
            timeout=self.config.timeout,
        )
        previews = parse_preview_output(output_lines(result.stdout))
        logger.debug("Found %d previews in %s", len(previews), raw_path)
        return previews

    def extract_preview(
        self,
        raw_path: PathLike,
        destination_dir: PathLike,
        destination_name: Optional[str] = None,
        ordinal: Optional[int] = None,
        overwrite: bool = False
    ) -> Union[Path, Literal[False]]:
        """
        Extract one embedded preview into a directory.

        exiv2 writes the preview into the scratch directory first; it is then
        copied to ``<destination_dir>/<destination_name>.<ext>``.

        Args:
            raw_path: Path to the RAW file
            destination_dir: Directory to place the preview in
            destination_name: File name without extension (default: RAW file stem)
            ordinal: 1-based preview number (default: last, usually the largest)
            overwrite: Replace existing scratch and destination files

        Returns:
            Path of the extracted preview, or False if a previous extraction
            is still waiting in the scratch directory and overwrite is off

        Raises:
            NotReadyError: If exiv2 or the scratch directory is unusable
            MissingFileError: If the RAW file or destination directory is missing
            NotRawFileError: If the file does not have a RAW extension
            PreviewNotFoundError: If there is no preview at that ordinal
            ExtractionFailedError: If exiv2 did not produce the preview or it
                could not be copied to the destination
            PreviewAlreadyExistsError: If the destination exists and overwrite is off
        """
        raw_path = Path(raw_path)
        destination_dir = Path(destination_dir)

        self._require_ready("extract previews")
        self._require_file(raw_path)
        if not self.is_raw_file(raw_path):
            raise NotRawFileError(f"Not raw file: {raw_path}")
        if not destination_dir.is_dir():
            raise MissingFileError(f"Destination directory does not exist: {destination_dir}")

        previews = self.list_previews(raw_path)
        ordinal = resolve_ordinal(len(previews), ordinal)
        preview = select_preview(previews, ordinal)
        extension = self.get_extension_from_type(preview.mime_type)

        stem = raw_path.stem
        preview_path = destination_dir / f"{destination_name or stem}.{extension}"
        output_file = self.config.scratch_dir / f"{stem}-preview{ordinal}.{extension}"

        # exiv2 has no quick-fail mode, only force; leave existing output alone
        if output_file.exists() and not overwrite:
            logger.debug("Preview already extracted, skipping: %s", output_file)
            return False

        result = run_tool(
            build_extract_preview_command(
                self.config.exiv2_path,
                raw_path,
                ordinal,
                self.config.scratch_dir,
                force=overwrite,
            ),
            timeout=self.config.timeout,
        )

        if not output_file.exists():
            detail = f" (exit status {result.returncode}: {result.stderr.strip()})" if result.returncode else ""
            raise ExtractionFailedError(f"Extraction failed for {raw_path}{detail}")

        if result.returncode != 0:
            logger.warning(
                "exiv2 exited with status %d but wrote %s: %s",
                result.returncode, output_file, result.stderr.strip(),
            )
            if not FormatDetector.can_open_with_pil(output_file):
                output_file.unlink(missing_ok=True)
                raise ExtractionFailedError(
                    f"Extraction failed for {raw_path}: exiv2 wrote an unreadable preview"
                )

        if preview_path.exists() and not overwrite:
            output_file.unlink()
            raise PreviewAlreadyExistsError(f"Preview already exists: {preview_path}")

        # copy + unlink instead of rename: destination may be on another device
        try:
            shutil.copyfile(output_file, preview_path)
        except OSError as e:
            raise ExtractionFailedError(
                f"Extraction failed for {raw_path}: could not copy preview to {preview_path}: {e}"
            ) from e
        finally:
            output_file.unlink(missing_ok=True)

        logger.debug("Extracted preview %d (%s) to %s", ordinal, preview.dimensions, preview_path)
        return preview_path

    def list_exif_data(
        self,
        raw_path: PathLike,
        kind: Union[ExifKind, str] = ExifKind.RAW
    ) -> Dict[str, Optional[str]]:
        """
        List all metadata tags of a file.

        Args:
            raw_path: Path to the file
            kind: ExifKind.RAW ("raw") for plain values, anything else for
                  interpreted values

        Returns:
            Tag key to value, in exiv2 order; a repeated key keeps the last value

        Raises:
            NotReadyError: If exiv2 or the scratch directory is unusable
            MissingFileError: If the file does not exist
        """
        raw_path = Path(raw_path)
        self._require_ready("list metadata")
        self._require_file(raw_path)

        kind = ExifKind.coerce(kind)
        result = run_tool(
            build_list_tags_command(self.config.exiv2_path, raw_path, kind.exiv2_flag),
            timeout=self.config.timeout,
        )
        return parse_exif_lines(output_lines(result.stdout))

    def transfer_exif_data(self, source: PathLike, destination: PathLike) -> None:
        """
        Copy all metadata tags from one file to another with exiftool.

        The destination is modified in place. Does nothing when exiftool is
        not available.

        Args:
            source: File to read tags from
            destination: File to write tags into

        Raises:
            NotReadyError: If exiv2 or the scratch directory is unusable
            MissingFileError: If either file does not exist
        """
        if not self.config.has_exiftool():
            logger.debug("exiftool not available, skipping metadata transfer")
            return

        source = Path(source)
        destination = Path(destination)
        self._require_ready("transfer metadata")
        self._require_file(source, "Source file")
        self._require_file(destination, "Destination file")

        result = run_tool(
            build_transfer_tags_command(self.config.exiftool_path, source, destination),
            timeout=self.config.timeout,
        )
        if result.returncode != 0:
            logger.warning(
                "exiftool failed to copy tags from %s to %s: %s",
                source, destination, (result.stderr or result.stdout).strip(),
            )


def is_raw_file(file_path: PathLike) -> bool:
    """Check if the file extension is a RAW extension."""
    return Rawr.is_raw_file(file_path)


def get_extension_from_type(mime_type: str) -> str:
    """Map a preview MIME type to a file extension (jpg or tif)."""
    return Rawr.get_extension_from_type(mime_type)


def is_ready(config: Optional[ToolConfig] = None) -> bool:
    """Check tools using environment configuration."""
    return Rawr(config).is_ready()


def list_previews(raw_path: PathLike, config: Optional[ToolConfig] = None) -> List[PreviewDescriptor]:
    """List embedded previews using environment configuration."""
    return Rawr(config).list_previews(raw_path)


def extract_preview(
    raw_path: PathLike,
    destination_dir: PathLike,
    destination_name: Optional[str] = None,
    ordinal: Optional[int] = None,
    overwrite: bool = False,
    config: Optional[ToolConfig] = None
) -> Union[Path, Literal[False]]:
    """
    Extract one embedded preview using environment configuration.

    See Rawr.extract_preview for arguments and errors.

    Example:
        >>> from rawr_core import extract_preview
        >>> extract_preview("shot.cr2", "./previews")
        PosixPath('previews/shot.jpg')
    """
    return Rawr(config).extract_preview(
        raw_path,
        destination_dir,
        destination_name=destination_name,
        ordinal=ordinal,
        overwrite=overwrite,
    )


def list_exif_data(
    raw_path: PathLike,
    kind: Union[ExifKind, str] = ExifKind.RAW,
    config: Optional[ToolConfig] = None
) -> Dict[str, Optional[str]]:
    """List metadata tags using environment configuration."""
    return Rawr(config).list_exif_data(raw_path, kind)


def transfer_exif_data(source: PathLike, destination: PathLike, config: Optional[ToolConfig] = None) -> None:
    """Copy metadata tags using environment configuration."""
    Rawr(config).transfer_exif_data(source, destination)


def batch_extract(
    raw_paths: List[Path],
    destination_dir: PathLike,
    ordinal: Optional[int] = None,
    overwrite: bool = False,
    progress_callback: Optional[Callable[[int, int, ExtractionResult], None]] = None,
    config: Optional[ToolConfig] = None
) -> List[ExtractionResult]:
    """
    Extract previews from several RAW files, one at a time.

    A failure for one file is recorded in its result and does not stop
    the batch. Configuration problems (NotReadyError) are recorded the
    same way for every file.

    Args:
        raw_paths: RAW files to process
        destination_dir: Directory to place the previews in
        ordinal: 1-based preview number (default: last preview of each file)
        overwrite: Replace existing files
        progress_callback: Optional callback(current, total, result)
        config: Tool locations; read from the environment when omitted

    Returns:
        List of ExtractionResult objects, in input order

    Example:
        >>> from pathlib import Path
        >>> from rawr_core import batch_extract
        >>>
        >>> raws = sorted(Path("./shoot").glob("*.NEF"))
        >>>
        >>> def on_progress(current, total, result):
        ...     status = "ok" if result.success else result.error
        ...     print(f"[{current}/{total}] {result.raw_path.name}: {status}")
        >>>
        >>> results = batch_extract(raws, "./previews", progress_callback=on_progress)
    """
    rawr = Rawr(config)
    results = []
    total = len(raw_paths)

    for i, raw_path in enumerate(raw_paths, 1):
        raw_path = Path(raw_path)
        try:
            preview_path = rawr.extract_preview(
                raw_path,
                destination_dir,
                ordinal=ordinal,
                overwrite=overwrite,
            )
        except RawrError as e:
            result = ExtractionResult(
                raw_path=raw_path,
                success=False,
                error=str(e),
                error_type=type(e).__name__,
            )
        else:
            if preview_path is False:
                result = ExtractionResult(raw_path=raw_path, success=True, skipped=True)
            else:
                result = ExtractionResult(raw_path=raw_path, success=True, preview_path=preview_path)

        results.append(result)

        if progress_callback:
            progress_callback(i, total, result)

    return results
