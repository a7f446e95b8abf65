"""
GeriHealth Medication Assistant

Backend for an elderly-friendly medication aid.
Pipeline: OCR → NAME → openFDA LABEL → SUMMARY → SPEECH
"""

__version__ = "1.0.0"
__author__ = "GeriHealth Team"
