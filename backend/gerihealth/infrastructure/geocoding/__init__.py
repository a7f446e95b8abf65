"""
Address Lookup Adapters
"""

from .google_maps import GoogleMapsGeocoder

__all__ = ["GoogleMapsGeocoder"]
