"""
Label Source Port

Abstract interface for drug label lookups.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..entities.drug_label import APIResponse, DrugLabel


class LabelSourcePort(ABC):
    """Port (interface) for authoritative drug label sources."""

    @abstractmethod
    def search_labels(self, name: str) -> APIResponse:
        """
        Search labels by generic drug name.

        Raises:
            LabelResponseError: On transport, status or decoding failure
            LabelNotFoundError: If nothing matches
        """
        pass

    @abstractmethod
    def fetch_label(self, name: str) -> Tuple[str, Optional[DrugLabel]]:
        """
        Get the label paragraph to summarize and the label it came from.

        Never raises; on failure the text is the fetch error sentinel and
        the label is None.
        """
        pass

    def fetch_drug_data(self, name: str) -> str:
        """Label paragraph only. Never raises."""
        text, _ = self.fetch_label(name)
        return text
