"""
Drug Label Source Adapters
"""

from .openfda_client import OpenFDAClient, label_overview

__all__ = [
    "OpenFDAClient",
    "label_overview",
]
