"""
HTTP API end to end, with offline backends.
"""

import base64
from datetime import date

import pytest

from gerihealth.api.app import create_app
from gerihealth.domain.messages import DISCLAIMER, FETCH_ERROR

from .conftest import IBUPROFEN_SUMMARY, image_bytes


# =============================================================================
# Scan
# =============================================================================

def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"

    scan_health = client.get("/scan/health").json()
    assert scan_health["status"] == "healthy"
    assert scan_health["ocr"]["engine"] == "DummyOCR"


def test_scan_upload(client, png_bytes):
    response = client.post(
        "/scan/upload",
        files={"file": ("label.png", png_bytes, "image/png")},
        data={"speak": "true"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["medication_name"] == "Ibuprofen"
    assert body["summary"] == IBUPROFEN_SUMMARY
    assert body["brand_name"] == "Advil"
    assert body["spoken"] is True
    assert body["disclaimer"] == DISCLAIMER


@pytest.mark.parametrize("fmt, content_type", [("GIF", "image/gif"), ("BMP", "image/bmp"), ("JPEG", "image/jpeg")])
def test_scan_upload_accepts_every_validated_format(client, fmt, content_type):
    response = client.post(
        "/scan/upload",
        files={"file": (f"label.{fmt.lower()}", image_bytes(fmt), content_type)}
    )

    assert response.status_code == 200
    assert response.json()["medication_name"] == "Ibuprofen"


def test_scan_upload_rejects_wrong_type(client):
    response = client.post("/scan/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400


def test_scan_upload_rejects_empty_file(client):
    response = client.post("/scan/upload", files={"file": ("label.png", b"", "image/png")})
    assert response.status_code == 400


def test_scan_upload_rejects_corrupt_image(client):
    response = client.post("/scan/upload", files={"file": ("label.png", b"not a png", "image/png")})

    assert response.status_code == 422
    assert response.json()["error"] == "InvalidImageError"
    assert response.json()["message"] == "Could not process the image."


def test_scan_base64(client, png_bytes):
    response = client.post("/scan/analyze", json={
        "image_base64": base64.b64encode(png_bytes).decode(),
        "format": "png"
    })
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["spoken"] is False


def test_lookup_sentinel_is_a_normal_response(client, label_source):
    label_source.text = FETCH_ERROR
    response = client.post("/scan/lookup", json={"name": "Ibuprofen"})

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["summary"] == FETCH_ERROR


def test_lookup_validates_name(client):
    assert client.post("/scan/lookup", json={"name": ""}).status_code == 422


def test_extract_name(client):
    response = client.post("/scan/extract-name", json={"text": "IBUPROFEN 200 MG TABLET"})
    assert response.json() == {"success": True, "medication_name": "Ibuprofen"}


# =============================================================================
# Profile
# =============================================================================

PROFILE = {
    "name": "Ada",
    "surname": "Lovelace",
    "date_of_birth": "1950-06-15",
    "location": "London, UK",
}


def test_profile_flow(client, png_bytes):
    assert client.get("/profile/current").status_code == 404

    created = client.post("/profile", json=PROFILE)
    assert created.status_code == 201
    profile = created.json()
    assert profile["age"] >= 74
    assert profile["has_photo"] is False

    assert client.get("/profile/current").json()["id"] == profile["id"]

    updated = client.patch(f"/profile/{profile['id']}", json={"location": "Paris, France"})
    assert updated.json()["location"] == "Paris, France"
    assert updated.json()["name"] == "Ada"

    photo = client.put(
        f"/profile/{profile['id']}/photo",
        files={"file": ("me.png", png_bytes, "image/png")}
    )
    assert photo.json()["has_photo"] is True

    fetched = client.get(f"/profile/{profile['id']}/photo")
    assert fetched.status_code == 200
    assert fetched.headers["content-type"] == "image/png"
    assert fetched.content == png_bytes

    assert client.delete(f"/profile/{profile['id']}").status_code == 204
    assert client.get(f"/profile/{profile['id']}").status_code == 404


def test_profile_validation_errors(client):
    response = client.post("/profile", json=dict(PROFILE, surname="   "))
    assert response.status_code == 422
    assert response.json()["details"]["field"] == "surname"

    future = dict(PROFILE, date_of_birth=date.today().isoformat())
    assert client.post("/profile", json=future).status_code == 422


def test_missing_photo_is_404(client):
    profile = client.post("/profile", json=PROFILE).json()
    response = client.get(f"/profile/{profile['id']}/photo")

    assert response.status_code == 404
    assert response.json()["error"] == "RecordNotFoundError"


# =============================================================================
# Drugs
# =============================================================================

def test_drug_flow(client):
    created = client.post("/drugs", json={
        "name": "Lisinopril",
        "dose": "20mg",
        "administered": {"Wensday": ["8 pm", "8:00 AM"], "Mon": ["8:00 AM"]}
    })
    assert created.status_code == 201
    drug = created.json()
    assert drug["administered"] == {
        "Monday": ["8:00 AM"],
        "Wednesday": ["8:00 AM", "8:00 PM"],
    }
    assert [d["day"] for d in drug["schedule"]] == ["Monday", "Wednesday"]

    schedule = client.get(f"/drugs/{drug['id']}/schedule").json()
    assert schedule[1] == {"day": "Wednesday", "times": ["8:00 AM", "8:00 PM"]}

    updated = client.patch(f"/drugs/{drug['id']}", json={"dose": "10mg"})
    assert updated.json()["dose"] == "10mg"
    assert updated.json()["administered"] == drug["administered"]

    assert [d["name"] for d in client.get("/drugs").json()] == ["Lisinopril"]
    assert client.delete(f"/drugs/{drug['id']}").status_code == 204
    assert client.get(f"/drugs/{drug['id']}").status_code == 404


def test_drug_schedule_errors(client):
    response = client.post("/drugs", json={"name": "Aspirin", "administered": {"Monday": ["whenever"]}})
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidScheduleError"


def test_drug_from_scan(client):
    response = client.post("/drugs/from-scan", json={"medication_name": "Ibuprofen", "dose": "200mg"})
    assert response.status_code == 201
    assert response.json()["name"] == "Ibuprofen"

    rejected = client.post("/drugs/from-scan", json={"medication_name": "GEMINI ERROR"})
    assert rejected.status_code == 422


def test_sample_data_seeded_on_startup(app_config, scan_service, database, geocoder):
    from fastapi.testclient import TestClient

    app_config.storage.seed_sample_data = True
    app = create_app(app_config, scan_service=scan_service, database=database, geocoder=geocoder)
    with TestClient(app) as test_client:
        names = [d["name"] for d in test_client.get("/drugs").json()]

    assert names == ["Ibuprofen", "Prozac"]


# =============================================================================
# Speech and locations
# =============================================================================

def test_speak_and_stop(client, speaker):
    assert client.post("/speech/speak", json={"text": "Take with food."}).json() == {"success": True}
    assert speaker.spoken == ["Take with food."]

    client.post("/speech/stop")
    assert speaker.stopped >= 1


def test_speak_without_speaker_is_503(client, scan_service):
    scan_service.speaker = None
    response = client.post("/speech/speak", json={"text": "Take with food."})
    assert response.status_code == 503


def test_location_search(client, geocoder):
    response = client.get("/locations/search", params={"q": "Springfield"})

    assert response.status_code == 200
    assert response.json()[0]["title"] == "Springfield, IL, USA"
    assert geocoder.queries == ["Springfield"]


def test_location_search_failure_is_502(client, geocoder):
    from gerihealth.domain.exceptions import GeocodingError

    def fail(query):
        raise GeocodingError("Geocoding failed: OVER_QUERY_LIMIT", status="OVER_QUERY_LIMIT")

    geocoder.search = fail
    response = client.get("/locations/search", params={"q": "Springfield"})

    assert response.status_code == 502
    assert response.json()["details"]["status"] == "OVER_QUERY_LIMIT"
