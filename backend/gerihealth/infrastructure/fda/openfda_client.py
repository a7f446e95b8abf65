"""
openFDA Drug Label Client

One unauthenticated GET against https://api.fda.gov/drug/label.json,
searching by generic name. No retries and no caching.
"""

from typing import Dict, Optional, Tuple
import logging

import requests
from pydantic import ValidationError as SchemaError

from ...domain.ports.label_source import LabelSourcePort
from ...domain.entities.drug_label import APIResponse, DrugLabel
from ...domain.exceptions import (
    InvalidInputError,
    LabelFetchError,
    LabelNotFoundError,
    LabelResponseError,
)
from ...domain.messages import FETCH_ERROR, NO_LABEL_DATA


logger = logging.getLogger(__name__)


def label_overview(label: DrugLabel) -> Dict[str, str]:
    """Brand, generic and manufacturer of a label, "N/A" when missing."""
    return {
        "brand_name": label.brand_name,
        "generic_name": label.generic_name,
        "manufacturer": label.manufacturer,
    }


class OpenFDAClient(LabelSourcePort):
    """
    Drug label lookups against openFDA.

    Attributes:
        base_url: Label endpoint
        search_field: Field matched against the medication name
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str = "https://api.fda.gov/drug/label.json",
        search_field: str = "openfda.generic_name",
        timeout: int = 20,
        limit: int = 1,
        session: Optional[requests.Session] = None
    ):
        self._base_url = base_url
        self._search_field = search_field
        self._timeout = timeout
        self._limit = limit
        self._session = session or requests.Session()

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def build_search(self, name: str) -> str:
        return f'{self._search_field}:"{name}"'

    def search_labels(self, name: str) -> APIResponse:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("name", "medication name is empty")

        params = {"search": self.build_search(name)}
        if self._limit != 1:
            params["limit"] = self._limit

        try:
            response = self._session.get(self._base_url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise LabelResponseError(f"openFDA request failed: {e}")

        # openFDA answers 404 when the search matches nothing
        if response.status_code == 404:
            raise LabelNotFoundError(name)
        if response.status_code != 200:
            raise LabelResponseError(
                f"openFDA returned HTTP {response.status_code}",
                status_code=response.status_code
            )

        try:
            decoded = APIResponse.model_validate(response.json())
        except (ValueError, SchemaError) as e:
            raise LabelResponseError(f"Could not decode openFDA response: {e}", status_code=200)

        if not decoded.results:
            raise LabelNotFoundError(name)

        return decoded

    def _log_labels(self, decoded: APIResponse) -> None:
        for label in decoded.results:
            self.logger.info(f"Brand Name: {label.brand_name}")
            self.logger.info(f"Generic Name: {label.generic_name}")
            self.logger.info(f"Manufacturer: {label.manufacturer}")
            self.logger.info(f"Description: {label.description_preview(150)}...")

    def fetch_label(self, name: str) -> Tuple[str, Optional[DrugLabel]]:
        try:
            decoded = self.search_labels(name)
        except (LabelFetchError, InvalidInputError) as e:
            self.logger.warning(f"Label fetch for '{name}' failed: {e.message}")
            return FETCH_ERROR, None

        self._log_labels(decoded)
        label = decoded.results[0]
        return label.primary_text or NO_LABEL_DATA, label
