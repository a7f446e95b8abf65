"""
openFDA label client, with the HTTP session mocked.
"""

from unittest.mock import MagicMock

import pytest
import requests

from gerihealth.domain.exceptions import (
    InvalidInputError,
    LabelNotFoundError,
    LabelResponseError,
)
from gerihealth.domain.messages import FETCH_ERROR, NO_LABEL_DATA
from gerihealth.infrastructure.fda.openfda_client import OpenFDAClient, label_overview


LABEL_RESPONSE = {
    "meta": {
        "disclaimer": "Do not rely on openFDA to make decisions regarding medical care.",
        "terms": "https://open.fda.gov/terms/",
        "license": "https://open.fda.gov/license/",
        "last_updated": "2025-09-05",
        "results": {"skip": 0, "limit": 1, "total": 3},
    },
    "results": [
        {
            "id": "a1b2",
            "set_id": "s1",
            "version": "4",
            "effective_time": "20240115",
            "openfda": {
                "brand_name": ["Zestril"],
                "generic_name": ["LISINOPRIL"],
                "manufacturer_name": ["Almatica Pharma LLC"],
                "route": ["ORAL"],
            },
            "description": ["Lisinopril is an oral long-acting angiotensin converting enzyme inhibitor."],
            "clinical_pharmacology": ["Lisinopril inhibits angiotensin-converting enzyme (ACE)."],
            "indications_and_usage": ["Lisinopril is indicated for the treatment of hypertension."],
            "some_new_section": ["ignored"],
        }
    ],
}


def make_client(status=200, payload=None, error=None):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        response = MagicMock()
        response.status_code = status
        if isinstance(payload, Exception):
            response.json.side_effect = payload
        else:
            response.json.return_value = payload
        session.get.return_value = response
    return OpenFDAClient(session=session), session


def test_search_uses_generic_name_query():
    client, session = make_client(payload=LABEL_RESPONSE)
    client.search_labels("Lisinopril")

    args, kwargs = session.get.call_args
    assert args[0] == "https://api.fda.gov/drug/label.json"
    assert kwargs["params"] == {"search": 'openfda.generic_name:"Lisinopril"'}
    assert kwargs["timeout"] == 20


def test_fetch_returns_clinical_pharmacology():
    client, _ = make_client(payload=LABEL_RESPONSE)
    text, label = client.fetch_label("Lisinopril")

    assert text == "Lisinopril inhibits angiotensin-converting enzyme (ACE)."
    assert label_overview(label) == {
        "brand_name": "Zestril",
        "generic_name": "LISINOPRIL",
        "manufacturer": "Almatica Pharma LLC",
    }


def test_falls_back_to_indications():
    payload = {"results": [dict(LABEL_RESPONSE["results"][0], clinical_pharmacology=None)]}
    client, _ = make_client(payload=payload)

    assert client.fetch_drug_data("Lisinopril") == (
        "Lisinopril is indicated for the treatment of hypertension."
    )


def test_no_label_sections():
    payload = {"results": [{"id": "x", "openfda": {}}]}
    client, _ = make_client(payload=payload)
    text, label = client.fetch_label("Mystery")

    assert text == NO_LABEL_DATA
    assert label.brand_name == "N/A"
    assert label.manufacturer == "N/A"


@pytest.mark.parametrize("status,payload,error", [
    (500, None, None),
    (429, None, None),
    (200, ValueError("not json"), None),
    (200, {"results": [{"openfda": {}}]}, None),
    (200, None, requests.ConnectionError("offline")),
    (200, None, requests.Timeout("slow")),
])
def test_failures_return_fetch_sentinel(status, payload, error):
    client, _ = make_client(status=status, payload=payload, error=error)
    assert client.fetch_label("Lisinopril") == (FETCH_ERROR, None)


def test_not_found():
    client, _ = make_client(status=404, payload={"error": {"code": "NOT_FOUND"}})
    with pytest.raises(LabelNotFoundError):
        client.search_labels("Notadrug")
    assert client.fetch_drug_data("Notadrug") == FETCH_ERROR


def test_empty_results_are_not_found():
    client, _ = make_client(payload={"meta": {}, "results": []})
    with pytest.raises(LabelNotFoundError):
        client.search_labels("Lisinopril")


def test_non_200_carries_status():
    client, _ = make_client(status=503)
    with pytest.raises(LabelResponseError) as exc_info:
        client.search_labels("Lisinopril")
    assert exc_info.value.details["status_code"] == 503


def test_blank_name_is_rejected_without_request():
    client, session = make_client(payload=LABEL_RESPONSE)
    with pytest.raises(InvalidInputError):
        client.search_labels("  ")
    assert client.fetch_drug_data("") == FETCH_ERROR
    session.get.assert_not_called()


def test_custom_limit_is_sent():
    session = MagicMock()
    session.get.return_value = MagicMock(status_code=200, json=MagicMock(return_value=LABEL_RESPONSE))
    client = OpenFDAClient(limit=5, session=session)
    client.search_labels("Lisinopril")

    assert session.get.call_args.kwargs["params"]["limit"] == 5
