"""
Speech Router

Read text aloud on the device running the service.
"""

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from ..dependencies import get_scan_service
from ..schemas import SpeakRequest
from ...application.services.scan_service import ScanService


router = APIRouter(prefix="/speech", tags=["Speech"])


@router.post("/speak")
async def speak(request: SpeakRequest, service: ScanService = Depends(get_scan_service)):
    await run_in_threadpool(service.speak, request.text)
    return {"success": True}


@router.post("/stop")
def stop(service: ScanService = Depends(get_scan_service)):
    service.stop_speaking()
    return {"success": True}
