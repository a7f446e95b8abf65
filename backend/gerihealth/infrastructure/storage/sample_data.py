"""
Sample schedule used for demos and first launch.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Drug


logger = logging.getLogger(__name__)


SAMPLE_DRUGS = [
    {
        "name": "Ibuprofen",
        "dose": "20mg",
        "administered": {
            "Monday": ["8:00 AM", "8:00 PM"],
            "Wensday": ["8:00 AM", "7:00 PM"],
            "Thursday": ["8:00 AM", "7:00 PM"],
        },
    },
    {
        "name": "Prozac",
        "dose": "20mg",
        "administered": {
            "Monday": ["12:00 AM", "6:00 PM"],
        },
    },
]


def seed_sample_drugs(session: Session, normalize=None) -> int:
    """
    Insert the sample drugs unless the table already has rows.

    Args:
        session: Open session; the caller commits
        normalize: Optional callable applied to each schedule

    Returns:
        Number of drugs inserted
    """
    if session.scalars(select(Drug).limit(1)).first() is not None:
        return 0

    for item in SAMPLE_DRUGS:
        administered = item["administered"]
        if normalize is not None:
            administered = normalize(administered)
        session.add(Drug(name=item["name"], dose=item["dose"], administered=administered))

    logger.info(f"Seeded {len(SAMPLE_DRUGS)} sample drugs")
    return len(SAMPLE_DRUGS)
