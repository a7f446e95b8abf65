"""
Drugs Router

The user's drug list and weekly dose schedules.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from ..dependencies import get_drug_service
from ..schemas import DayScheduleModel, DrugCreate, DrugFromScan, DrugResponse, DrugUpdate
from ...application.services.drug_service import DrugService
from ...domain.entities.scan_result import ScanResult


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/drugs", tags=["Drugs"])


@router.get("", response_model=List[DrugResponse])
def list_drugs(service: DrugService = Depends(get_drug_service)):
    """All drugs, by name."""
    return [DrugResponse(**service.to_dict(d)) for d in service.list()]


@router.post("", response_model=DrugResponse, status_code=201)
def add_drug(request: DrugCreate, service: DrugService = Depends(get_drug_service)):
    drug = service.add(name=request.name, dose=request.dose, administered=request.administered)
    return DrugResponse(**service.to_dict(drug))


@router.post("/from-scan", response_model=DrugResponse, status_code=201)
def add_scanned_drug(request: DrugFromScan, service: DrugService = Depends(get_drug_service)):
    """Save the medication a scan identified."""
    drug = service.add_from_scan(
        ScanResult(medication_name=request.medication_name),
        dose=request.dose,
        administered=request.administered
    )
    return DrugResponse(**service.to_dict(drug))


@router.get("/{drug_id}", response_model=DrugResponse)
def get_drug(drug_id: int, service: DrugService = Depends(get_drug_service)):
    return DrugResponse(**service.to_dict(service.get(drug_id)))


@router.patch("/{drug_id}", response_model=DrugResponse)
def update_drug(
    drug_id: int,
    request: DrugUpdate,
    service: DrugService = Depends(get_drug_service)
):
    drug = service.update(
        drug_id,
        name=request.name,
        dose=request.dose,
        administered=request.administered
    )
    return DrugResponse(**service.to_dict(drug))


@router.delete("/{drug_id}", status_code=204)
def delete_drug(drug_id: int, service: DrugService = Depends(get_drug_service)):
    service.delete(drug_id)
    return Response(status_code=204)


@router.get("/{drug_id}/schedule", response_model=List[DayScheduleModel])
def drug_schedule(drug_id: int, service: DrugService = Depends(get_drug_service)):
    """Dose days for one drug, Monday first."""
    return [DayScheduleModel(**d.to_dict()) for d in service.schedule_for(drug_id)]
