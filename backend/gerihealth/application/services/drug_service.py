"""
Drug Service

The user's drugs with their weekly dose schedule.
"""

from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlalchemy import select

from ...domain.entities.scan_result import ScanResult
from ...domain.entities.schedule import DaySchedule
from ...domain.exceptions import InvalidInputError, RecordNotFoundError
from ...domain.messages import is_sentinel
from ...infrastructure.storage.database import Database
from ...infrastructure.storage.models import Drug
from ...infrastructure.storage.sample_data import seed_sample_drugs
from .schedule import normalize_schedule, sorted_days


logger = logging.getLogger(__name__)

Schedule = Dict[str, Iterable[str]]


class DrugService:
    """CRUD for drugs and their schedules."""

    def __init__(self, database: Database):
        self._db = database
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("name", "must not be empty")
        return name

    def add(self, name: str, dose: str = "", administered: Optional[Schedule] = None) -> Drug:
        drug = Drug(
            name=self._clean_name(name),
            dose=(dose or "").strip(),
            administered=normalize_schedule(administered or {}),
        )
        with self._db.session_scope() as session:
            session.add(drug)
            session.flush()
            self.logger.info(f"Added drug {drug.id}: {drug.name}")
            return drug

    def get(self, drug_id: int) -> Drug:
        with self._db.session_scope() as session:
            drug = session.get(Drug, drug_id)
            if drug is None:
                raise RecordNotFoundError("Drug", drug_id)
            return drug

    def list(self) -> List[Drug]:
        with self._db.session_scope() as session:
            return list(session.scalars(select(Drug).order_by(Drug.name, Drug.id)))

    def update(
        self,
        drug_id: int,
        name: Optional[str] = None,
        dose: Optional[str] = None,
        administered: Optional[Schedule] = None
    ) -> Drug:
        with self._db.session_scope() as session:
            drug = session.get(Drug, drug_id)
            if drug is None:
                raise RecordNotFoundError("Drug", drug_id)
            if name is not None:
                drug.name = self._clean_name(name)
            if dose is not None:
                drug.dose = dose.strip()
            if administered is not None:
                # Assign a new dict so the JSON column is marked dirty
                drug.administered = normalize_schedule(administered)
            return drug

    def delete(self, drug_id: int) -> None:
        with self._db.session_scope() as session:
            drug = session.get(Drug, drug_id)
            if drug is None:
                raise RecordNotFoundError("Drug", drug_id)
            session.delete(drug)
            self.logger.info(f"Deleted drug {drug_id}")

    def schedule_for(self, drug_id: int) -> List[DaySchedule]:
        """Dose days for a drug, Monday first."""
        return sorted_days(self.get(drug_id).administered or {})

    def add_from_scan(
        self,
        result: ScanResult,
        dose: str = "",
        administered: Optional[Schedule] = None
    ) -> Drug:
        """
        Save a scanned medication to the list.

        Raises:
            InvalidInputError: If the scan did not produce a usable name
        """
        name = (result.medication_name or "").strip()
        if not name or is_sentinel(name):
            raise InvalidInputError("medication_name", "scan did not identify a medication")
        return self.add(name=name, dose=dose, administered=administered)

    def seed_samples(self) -> int:
        with self._db.session_scope() as session:
            return seed_sample_drugs(session, normalize=normalize_schedule)

    @staticmethod
    def to_dict(drug: Drug) -> Dict[str, Any]:
        data = drug.to_dict()
        data["schedule"] = [d.to_dict() for d in sorted_days(drug.administered or {})]
        return data
