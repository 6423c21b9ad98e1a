"""
FastAPI service for rawr-core

Exposes RAW preview and metadata extraction as HTTP API for language-agnostic access.
"""

import logging
import shutil
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from rawr_core import (
    ExifKind,
    ExtractionFailedError,
    NotRawFileError,
    NotReadyError,
    PreviewNotFoundError,
    PreviewFormat,
    PreviewParseError,
    RawFileValidator,
    Rawr,
    RawrError,
    ToolExecutionError,
    ToolConfig,
    __version__,
)

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="rawr-core API",
    description="RAW preview service - lists and extracts embedded previews and metadata",
    version=__version__,
)

# CORS - allow other services to call this one
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure based on deployment
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ErrorResponse(BaseModel):
    """Error response"""
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Service and tool status"""
    status: str
    ready: bool
    missing_tools: List[str]


class PreviewSchema(BaseModel):
    """One embedded preview"""
    index: int
    mime_type: str
    width: int
    height: int
    size_bytes: int


class PreviewListResponse(BaseModel):
    """Previews embedded in an uploaded RAW file"""
    filename: str
    previews: List[PreviewSchema]


class ExifResponse(BaseModel):
    """Metadata tags of an uploaded file"""
    filename: str
    kind: str
    tags: Dict[str, Optional[str]]


def get_config() -> ToolConfig:
    """Tool configuration, overridable in tests"""
    return ToolConfig.from_env()


# Exception type -> HTTP status; first match wins
ERROR_STATUS = (
    (NotReadyError, 503),
    (NotRawFileError, 400),
    (PreviewParseError, 400),
    (PreviewNotFoundError, 404),
    (ExtractionFailedError, 500),
    (ToolExecutionError, 500),
)


def _http_error(e: RawrError) -> HTTPException:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(e, error_type):
            return HTTPException(status_code=status_code, detail=str(e))
    return HTTPException(status_code=400, detail=f"Processing failed: {str(e)}")


def _save_upload(file: UploadFile, work_dir: Path) -> Path:
    """Write upload to work_dir, keeping only the base name of the client filename"""
    filename = Path(file.filename or "upload.raw").name
    upload_path = work_dir / filename
    with open(upload_path, "wb") as out:
        shutil.copyfileobj(file.file, out)
    return upload_path


def _request_rawr(config: ToolConfig, work_dir: Path) -> Rawr:
    """Rawr with a scratch directory private to this request"""
    scratch_dir = work_dir / "scratch"
    scratch_dir.mkdir()
    return Rawr(replace(config, scratch_dir=scratch_dir))


# API Endpoints
# Endpoints that run exiv2 are plain def so FastAPI runs them in its threadpool
@app.get("/")
def root():
    """API root - health check"""
    return {
        "service": "rawr-core API",
        "version": __version__,
        "status": "healthy"
    }


@app.get("/health", response_model=HealthResponse)
def health_check(config: ToolConfig = Depends(get_config)):
    """Health check endpoint for monitoring"""
    ready = config.is_ready()
    return HealthResponse(
        status="healthy" if ready else "degraded",
        ready=ready,
        missing_tools=config.missing_tools(),
    )


@app.post("/v1/previews", response_model=PreviewListResponse, responses={400: {"model": ErrorResponse}})
def list_previews_endpoint(
    file: UploadFile = File(..., description="RAW file to inspect"),
    config: ToolConfig = Depends(get_config),
):
    """
    List the previews embedded in an uploaded RAW file.

    Example:
        curl -X POST http://localhost:8766/v1/previews -F "file=@shot.CR2"
    """
    with tempfile.TemporaryDirectory(prefix="rawr-") as tmp:
        work_dir = Path(tmp)
        upload_path = _save_upload(file, work_dir)
        is_valid, error = RawFileValidator.validate_file(upload_path)
        if not is_valid:
            raise HTTPException(status_code=400, detail=error)

        try:
            previews = _request_rawr(config, work_dir).list_previews(upload_path)
        except RawrError as e:
            raise _http_error(e)

    return PreviewListResponse(
        filename=upload_path.name,
        previews=[PreviewSchema(**preview.to_dict()) for preview in previews],
    )


@app.post("/v1/extract", responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
def extract_preview_endpoint(
    file: UploadFile = File(..., description="RAW file to extract from"),
    ordinal: Optional[int] = Form(None, description="1-based preview number. None = largest (last) preview."),
    config: ToolConfig = Depends(get_config),
):
    """
    Extract one embedded preview and return the image bytes.

    Example:
        curl -X POST http://localhost:8766/v1/extract \\
          -F "file=@shot.CR2" \\
          -F "ordinal=2" -o preview.jpg
    """
    with tempfile.TemporaryDirectory(prefix="rawr-") as tmp:
        work_dir = Path(tmp)
        upload_path = _save_upload(file, work_dir)
        is_valid, error = RawFileValidator.validate_file(upload_path)
        if not is_valid:
            raise HTTPException(status_code=400, detail=error)

        output_dir = work_dir / "out"
        output_dir.mkdir()

        try:
            preview_path = _request_rawr(config, work_dir).extract_preview(
                upload_path,
                output_dir,
                ordinal=ordinal,
            )
        except RawrError as e:
            raise _http_error(e)

        # Fresh scratch directory, so the "already extracted" case cannot happen
        if preview_path is False:
            raise HTTPException(status_code=500, detail="Preview was not extracted")

        content = preview_path.read_bytes()
        media_type = PreviewFormat(preview_path.suffix.lstrip(".")).media_type
        filename = preview_path.name

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/v1/exif", response_model=ExifResponse, responses={400: {"model": ErrorResponse}})
def list_exif_endpoint(
    file: UploadFile = File(..., description="File to read tags from"),
    kind: str = Form(ExifKind.RAW.value, description="'raw' for plain values, 'text' for interpreted values"),
    config: ToolConfig = Depends(get_config),
):
    """
    List all metadata tags of an uploaded file.

    Example:
        curl -X POST http://localhost:8766/v1/exif -F "file=@shot.NEF" -F "kind=text"
    """
    exif_kind = ExifKind.coerce(kind)
    with tempfile.TemporaryDirectory(prefix="rawr-") as tmp:
        work_dir = Path(tmp)
        upload_path = _save_upload(file, work_dir)

        try:
            tags = _request_rawr(config, work_dir).list_exif_data(upload_path, exif_kind)
        except RawrError as e:
            raise _http_error(e)

    return ExifResponse(filename=upload_path.name, kind=exif_kind.value, tags=tags)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host="0.0.0.0", port=8766)
