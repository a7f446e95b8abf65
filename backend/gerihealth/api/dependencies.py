"""
FastAPI dependencies.

Services are created once in create_app and kept on app.state.
"""

from fastapi import Request

from ..application.services.drug_service import DrugService
from ..application.services.profile_service import ProfileService
from ..application.services.scan_service import ScanService
from ..domain.ports.geocoder import GeocoderPort


def get_scan_service(request: Request) -> ScanService:
    return request.app.state.scan_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_drug_service(request: Request) -> DrugService:
    return request.app.state.drug_service


def get_geocoder(request: Request) -> GeocoderPort:
    return request.app.state.geocoder
