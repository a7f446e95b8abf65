"""
GeriHealth - FastAPI Application

Medication label scanning, drug schedules and the user profile.
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers import drugs, locations, profile, scan, speech
from .. import __version__
from ..application.services.drug_service import DrugService
from ..application.services.profile_service import ProfileService
from ..application.services.scan_service import ScanService
from ..config.settings import AppConfig
from ..cross_cutting.error_handling import error_payload, safe_call
from ..cross_cutting.logging import setup_logging
from ..domain.exceptions import (
    DomainException,
    GeocodingError,
    PipelineConfigurationError,
    RecordNotFoundError,
    SpeechError,
    ValidationError,
)
from ..domain.ports.geocoder import GeocoderPort
from ..infrastructure.geocoding.google_maps import GoogleMapsGeocoder
from ..infrastructure.storage.database import Database


logger = logging.getLogger(__name__)

# Most specific first; the first matching class wins
ERROR_STATUS = (
    (RecordNotFoundError, 404),
    (ValidationError, 422),
    (GeocodingError, 502),
    (SpeechError, 503),
    (PipelineConfigurationError, 500),
)


def status_for(exc: DomainException) -> int:
    for exc_type, status_code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status_code
    return 500


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=status_code, content=error_payload(exc))


def create_app(
    config: Optional[AppConfig] = None,
    scan_service: Optional[ScanService] = None,
    database: Optional[Database] = None,
    geocoder: Optional[GeocoderPort] = None
) -> FastAPI:
    """
    Build the API with its services.

    Anything not passed in is created from config (or the environment).
    """
    config = config or AppConfig.from_env()
    setup_logging(config.logging.level, config.logging.log_file, config.logging.format)

    database = database or Database(config.storage.url, echo=config.storage.echo)
    scan_service = scan_service or ScanService.from_config(config)
    geocoder = geocoder or GoogleMapsGeocoder(
        api_key=config.geocoding.api_key,
        base_url=config.geocoding.base_url,
        timeout=config.geocoding.timeout
    )
    drug_service = DrugService(database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.storage.seed_sample_data:
            seeded = drug_service.seed_samples()
            logger.info(f"Seeded {seeded} sample drugs")
        yield
        safe_call(scan_service.stop_speaking, logger=logger)
        safe_call(database.dispose, logger=logger)

    app = FastAPI(
        title="GeriHealth API",
        description="Medication label reader for older adults - OCR + LLM + openFDA",
        version=__version__,
        lifespan=lifespan
    )

    app.state.config = config
    app.state.database = database
    app.state.scan_service = scan_service
    app.state.profile_service = ProfileService(database)
    app.state.drug_service = drug_service
    app.state.geocoder = geocoder

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainException, domain_exception_handler)

    app.include_router(scan.router)
    app.include_router(profile.router)
    app.include_router(drugs.router)
    app.include_router(speech.router)
    app.include_router(locations.router)

    @app.get("/")
    async def root():
        return {"name": "GeriHealth API", "version": __version__, "docs": "/docs"}

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": __version__}

    return app
