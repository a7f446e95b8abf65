"""
Shared fixtures.

Everything runs offline: OCR, models, openFDA and speech are replaced
by in-process fakes and the record store is in-memory SQLite.
"""

from io import BytesIO
from typing import Optional, Tuple

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from gerihealth.api.app import create_app
from gerihealth.application.services.drug_service import DrugService
from gerihealth.application.services.name_extraction import MedicationNameExtractor
from gerihealth.application.services.profile_service import ProfileService
from gerihealth.application.services.scan_service import ScanService
from gerihealth.application.services.summarization import LabelSummarizer
from gerihealth.config.settings import AppConfig
from gerihealth.domain.entities.drug_label import APIResponse, DrugLabel
from gerihealth.domain.entities.schedule import Place
from gerihealth.domain.exceptions import LabelNotFoundError
from gerihealth.domain.messages import FETCH_ERROR, NO_LABEL_DATA
from gerihealth.domain.ports.geocoder import GeocoderPort
from gerihealth.domain.ports.label_source import LabelSourcePort
from gerihealth.domain.value_objects.image_data import ImageData
from gerihealth.infrastructure.llm.dummy_llm import DummyLanguageModel
from gerihealth.infrastructure.llm.fallback import FallbackLanguageModel
from gerihealth.infrastructure.ocr.dummy_ocr import DummyOCRExtractor
from gerihealth.infrastructure.speech.silent_speaker import SilentSpeaker
from gerihealth.infrastructure.storage.database import Database


IBUPROFEN_PHARMACOLOGY = (
    "Ibuprofen is a nonsteroidal anti-inflammatory drug that reduces "
    "pain, fever and inflammation."
)

IBUPROFEN_SUMMARY = (
    "This medicine eases pain and lowers fever. "
    "Take it with food and do not take more than the label says."
)


def make_label(**sections) -> DrugLabel:
    data = {
        "id": "label-1",
        "openfda": {
            "brand_name": ["Advil"],
            "generic_name": ["IBUPROFEN"],
            "manufacturer_name": ["Pfizer Consumer Healthcare"],
        },
    }
    data.update(sections)
    return DrugLabel.model_validate(data)


class FakeLabelSource(LabelSourcePort):
    """Label source answering from a fixed (text, label) pair."""

    def __init__(self, text: str = IBUPROFEN_PHARMACOLOGY, label: Optional[DrugLabel] = None):
        self.text = text
        self.label = label if label is not None else make_label(
            clinical_pharmacology=[IBUPROFEN_PHARMACOLOGY]
        )
        self.requested = []

    def search_labels(self, name: str) -> APIResponse:
        if self.text == FETCH_ERROR:
            raise LabelNotFoundError(name)
        return APIResponse(results=[self.label])

    def fetch_label(self, name: str) -> Tuple[str, Optional[DrugLabel]]:
        self.requested.append(name)
        if self.text == FETCH_ERROR:
            return FETCH_ERROR, None
        return self.text, self.label


class FakeGeocoder(GeocoderPort):

    def __init__(self):
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        if not query.strip():
            return []
        return [Place(name="Springfield", title=f"{query}, IL, USA", latitude=39.78, longitude=-89.65)]


def image_bytes(fmt: str = "PNG", size=(60, 30)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, "white").save(buffer, format=fmt)
    return buffer.getvalue()


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def png_bytes() -> bytes:
    return image_bytes()


@pytest.fixture
def label_image(png_bytes) -> ImageData:
    return ImageData.from_bytes(png_bytes, format="png", source="label.png")


@pytest.fixture
def database():
    db = Database("sqlite:///:memory:")
    yield db
    db.dispose()


@pytest.fixture
def profile_service(database) -> ProfileService:
    return ProfileService(database)


@pytest.fixture
def drug_service(database) -> DrugService:
    return DrugService(database)


@pytest.fixture
def name_model() -> DummyLanguageModel:
    return DummyLanguageModel(default_response="Ibuprofen")


@pytest.fixture
def summary_model() -> DummyLanguageModel:
    return DummyLanguageModel(default_response=IBUPROFEN_SUMMARY)


@pytest.fixture
def label_source() -> FakeLabelSource:
    return FakeLabelSource()


@pytest.fixture
def speaker() -> SilentSpeaker:
    return SilentSpeaker()


@pytest.fixture
def scan_service(name_model, summary_model, label_source, speaker) -> ScanService:
    return ScanService(
        text_extractor=DummyOCRExtractor(),
        name_extractor=MedicationNameExtractor(FallbackLanguageModel(name_model, None)),
        label_source=label_source,
        summarizer=LabelSummarizer(FallbackLanguageModel(None, summary_model)),
        speaker=speaker,
    )


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def app_config() -> AppConfig:
    config = AppConfig()
    config.logging.level = "WARNING"
    return config


@pytest.fixture
def client(app_config, scan_service, database, geocoder):
    app = create_app(
        config=app_config,
        scan_service=scan_service,
        database=database,
        geocoder=geocoder
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def no_label_source() -> FakeLabelSource:
    return FakeLabelSource(text=NO_LABEL_DATA, label=make_label())
