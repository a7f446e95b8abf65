"""
API request and response models.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..domain.messages import DISCLAIMER


# =============================================================================
# Scan
# =============================================================================

class ScanBase64Request(BaseModel):
    """Label photo sent as base64 (plain or data URL)."""
    image_base64: str
    format: Optional[str] = "jpeg"
    speak: bool = False


class LookupRequest(BaseModel):
    """Known medication name, looked up without a photo."""
    name: str = Field(..., min_length=1, max_length=200)
    speak: bool = False


class ExtractNameRequest(BaseModel):
    text: str = Field(..., min_length=1)


class ExtractNameResponse(BaseModel):
    success: bool
    medication_name: str


class ScanResponse(BaseModel):
    success: bool
    request_id: Optional[str] = None
    recognized_text: str = ""
    medication_name: str = ""
    label_text: str = ""
    brand_name: Optional[str] = None
    generic_name: Optional[str] = None
    manufacturer: Optional[str] = None
    summary: str = ""
    spoken: bool = False
    status: str = ""
    warnings: List[str] = Field(default_factory=list)
    errors: List[Dict[str, Any]] = Field(default_factory=list)
    stages: Dict[str, str] = Field(default_factory=dict)
    disclaimer: str = DISCLAIMER
    processing_time_ms: Optional[float] = None


# =============================================================================
# Profile
# =============================================================================

class ProfileCreate(BaseModel):
    name: str
    surname: str
    date_of_birth: date
    location: str


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    date_of_birth: Optional[date] = None
    location: Optional[str] = None


class ProfileResponse(BaseModel):
    id: int
    name: str
    surname: str
    date_of_birth: date
    age: int
    location: str
    has_photo: bool = False


# =============================================================================
# Drugs
# =============================================================================

class DayScheduleModel(BaseModel):
    day: str
    times: List[str]


class DrugCreate(BaseModel):
    name: str
    dose: str = ""
    administered: Dict[str, List[str]] = Field(
        default_factory=dict,
        examples=[{"Monday": ["8:00 AM", "8:00 PM"]}]
    )


class DrugFromScan(BaseModel):
    """Save a scanned medication, using the name the scan returned."""
    medication_name: str
    dose: str = ""
    administered: Dict[str, List[str]] = Field(default_factory=dict)


class DrugUpdate(BaseModel):
    name: Optional[str] = None
    dose: Optional[str] = None
    administered: Optional[Dict[str, List[str]]] = None


class DrugResponse(BaseModel):
    id: int
    name: str
    dose: str
    administered: Dict[str, List[str]]
    schedule: List[DayScheduleModel] = Field(default_factory=list)


# =============================================================================
# Speech and locations
# =============================================================================

class SpeakRequest(BaseModel):
    text: str = Field(..., min_length=1)


class PlaceResponse(BaseModel):
    name: str
    title: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
    is_recoverable: bool = False
