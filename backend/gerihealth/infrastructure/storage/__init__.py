"""
Record Storage
"""

from .models import Base, UserProfile, Drug
from .database import Database
from .sample_data import SAMPLE_DRUGS, seed_sample_drugs

__all__ = [
    "Base",
    "UserProfile",
    "Drug",
    "Database",
    "SAMPLE_DRUGS",
    "seed_sample_drugs",
]
