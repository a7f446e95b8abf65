"""
openFDA Drug Label Schemas

Pydantic models for the https://api.fda.gov/drug/label.json response.

Response structure (simplified):
{
    "meta": {"disclaimer": "...", "terms": "...", "license": "...",
             "last_updated": "2025-09-05",
             "results": {"skip": 0, "limit": 1, "total": 12}},
    "results": [
        {
            "id": "...", "set_id": "...", "version": "3",
            "effective_time": "20240101",
            "openfda": {"brand_name": ["Advil"], "generic_name": ["IBUPROFEN"], ...},
            "clinical_pharmacology": ["..."],
            "indications_and_usage": ["..."],
            ...
        }
    ]
}
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


NOT_AVAILABLE = "N/A"


class MetaResults(BaseModel):
    skip: int = 0
    limit: int = 0
    total: int = 0


class Meta(BaseModel):
    """Response metadata block."""

    model_config = ConfigDict(extra="ignore")

    disclaimer: str = ""
    terms: str = ""
    license: str = ""
    last_updated: str = ""
    results: MetaResults = Field(default_factory=MetaResults)


class OpenFDA(BaseModel):
    """
    Harmonized `openfda` section of a label.

    Every field is an array in the API; missing arrays decode as empty.
    """

    model_config = ConfigDict(extra="ignore")

    application_number: List[str] = Field(default_factory=list)
    brand_name: List[str] = Field(default_factory=list)
    generic_name: List[str] = Field(default_factory=list)
    manufacturer_name: List[str] = Field(default_factory=list)
    product_ndc: List[str] = Field(default_factory=list)
    product_type: List[str] = Field(default_factory=list)
    route: List[str] = Field(default_factory=list)
    substance_name: List[str] = Field(default_factory=list)
    rxcui: List[str] = Field(default_factory=list)
    spl_id: List[str] = Field(default_factory=list)
    spl_set_id: List[str] = Field(default_factory=list)
    package_ndc: List[str] = Field(default_factory=list)
    is_original_packager: Optional[List[bool]] = None
    upc: Optional[List[str]] = None
    unii: Optional[List[str]] = None


class DrugLabel(BaseModel):
    """
    One structured product label.

    Section fields are optional because labels vary in which sections
    they carry.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    set_id: str = ""
    version: str = ""
    effective_time: str = ""
    openfda: OpenFDA = Field(default_factory=OpenFDA)

    description: Optional[List[str]] = None
    clinical_pharmacology: Optional[List[str]] = None
    indications_and_usage: Optional[List[str]] = None
    contraindications: Optional[List[str]] = None
    warnings: Optional[List[str]] = None
    precautions: Optional[List[str]] = None
    adverse_reactions: Optional[List[str]] = None
    overdosage: Optional[List[str]] = None
    dosage_and_administration: Optional[List[str]] = None
    how_supplied: Optional[List[str]] = None
    spl_product_data_elements: Optional[List[str]] = None
    package_label_principal_display_panel: Optional[List[str]] = None

    @staticmethod
    def _first(values: Optional[List[str]]) -> Optional[str]:
        return values[0] if values else None

    @property
    def brand_name(self) -> str:
        return self._first(self.openfda.brand_name) or NOT_AVAILABLE

    @property
    def generic_name(self) -> str:
        return self._first(self.openfda.generic_name) or NOT_AVAILABLE

    @property
    def manufacturer(self) -> str:
        return self._first(self.openfda.manufacturer_name) or NOT_AVAILABLE

    @property
    def primary_text(self) -> Optional[str]:
        """
        The paragraph handed to the summarizer.

        Clinical pharmacology when present, else indications and usage.
        """
        return (
            self._first(self.clinical_pharmacology)
            or self._first(self.indications_and_usage)
        )

    def description_preview(self, length: int = 150) -> str:
        return (self._first(self.description) or NOT_AVAILABLE)[:length]


class APIResponse(BaseModel):
    """Top-level drug label search response."""

    meta: Meta = Field(default_factory=Meta)
    results: List[DrugLabel] = Field(default_factory=list)
