"""
Scan Router - Medication Label Endpoints

1. OCR the label photo
2. Extract the medication name (local model first, cloud fallback)
3. Fetch the openFDA label and summarize it for an elderly reader
4. Optionally read the summary aloud
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from ..dependencies import get_scan_service
from ..schemas import (
    ExtractNameRequest,
    ExtractNameResponse,
    LookupRequest,
    ScanBase64Request,
    ScanResponse,
)
from ...application.services.scan_service import ScanService
from ...cross_cutting.validation import SUPPORTED_FORMATS
from ...domain.messages import is_sentinel


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scan", tags=["Scan"])

# Same formats the image validator accepts
VALID_IMAGE_TYPES = {f"image/{fmt}" for fmt in SUPPORTED_FORMATS}


@router.post("/upload", response_model=ScanResponse)
async def scan_upload(
    file: UploadFile = File(...),
    speak: bool = Form(False),
    service: ScanService = Depends(get_scan_service)
):
    """Scan a label photo sent as a file upload."""
    if file.content_type not in VALID_IMAGE_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type: {file.content_type}"
        )

    image_bytes = await file.read()
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Empty file")

    result = await run_in_threadpool(
        service.scan_bytes, image_bytes, source=file.filename, speak=speak
    )
    return ScanResponse(**result.to_response())


@router.post("/analyze", response_model=ScanResponse)
async def scan_base64(
    request: ScanBase64Request,
    service: ScanService = Depends(get_scan_service)
):
    """Scan a label photo sent as a base64 string."""
    result = await run_in_threadpool(
        service.scan_base64, request.image_base64, format=request.format, speak=request.speak
    )
    return ScanResponse(**result.to_response())


@router.post("/lookup", response_model=ScanResponse)
async def lookup(
    request: LookupRequest,
    service: ScanService = Depends(get_scan_service)
):
    """Label summary for a medication name typed by the user."""
    result = await run_in_threadpool(service.lookup, request.name, speak=request.speak)
    return ScanResponse(**result.to_response())


@router.post("/extract-name", response_model=ExtractNameResponse)
async def extract_name(
    request: ExtractNameRequest,
    service: ScanService = Depends(get_scan_service)
):
    name = await run_in_threadpool(service.extract_name, request.text)
    return ExtractNameResponse(success=not is_sentinel(name), medication_name=name)


@router.get("/health")
async def scan_health(service: ScanService = Depends(get_scan_service)):
    """Check which scan backends are ready."""
    components = await run_in_threadpool(service.health)
    ready = components["ocr"]["available"] and components["language_model"]["available"]
    return {
        "status": "healthy" if ready else "degraded",
        **components,
    }
