"""
User-facing status strings.

The sentinels are shown verbatim to the user in place of a result when a
backend call fails, so clients compare against these exact values.
"""

# Language model failure (name extraction or summary)
GEMINI_ERROR = "GEMINI ERROR"

# openFDA request, status or decoding failure
FETCH_ERROR = "Error fetching data. Check the URL."

# Label found but it has neither clinical pharmacology nor indications
NO_LABEL_DATA = "No clinical pharmacology data available."

SENTINELS = frozenset({GEMINI_ERROR, FETCH_ERROR})

# Progress messages shown while a scan runs
STATUS_READY = "Tap 'Take Picture' to begin."
STATUS_RECOGNIZING = "1. Recognizing text..."
STATUS_EXTRACTING_NAME = "2. Finding medication name..."
STATUS_FETCHING_LABEL = "3. Fetching drug information..."
STATUS_SUMMARIZING = "4. Summarizing..."
STATUS_SPEAKING = "5. Reading aloud..."
STATUS_DONE = "Done."

DISCLAIMER = (
    "This summary comes from the FDA drug label and is for general "
    "information only. Ask your doctor or pharmacist before changing "
    "how you take any medication."
)


def is_sentinel(text: str) -> bool:
    return (text or "").strip() in SENTINELS
