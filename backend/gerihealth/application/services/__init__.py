"""
Application Services
"""

from .name_extraction import MedicationNameExtractor, clean_medication_name
from .summarization import LabelSummarizer
from .schedule import normalize_day, parse_time, format_time, normalize_schedule, sorted_days
from .profile_service import ProfileService, compute_age, validate_profile
from .drug_service import DrugService
from .scan_service import ScanService

__all__ = [
    "MedicationNameExtractor",
    "clean_medication_name",
    "LabelSummarizer",
    "normalize_day",
    "parse_time",
    "format_time",
    "normalize_schedule",
    "sorted_days",
    "ProfileService",
    "compute_age",
    "validate_profile",
    "DrugService",
    "ScanService",
]
