"""Consumer-rights calculator endpoints.

Each endpoint validates the form, evaluates it against the rule tables and
returns the structured result. An ``InputValidationError`` is turned into a
422 ``{error, field}`` body by the handler registered in ``api.main``.
"""

from fastapi import APIRouter

from rights import service
from rights.schemas import (
    EnergyComplaintForm,
    InputErrorResponse,
    ParkingAppealForm,
    RightsResultResponse,
    VehicleRightsForm,
    WarrantyCheckForm,
)

router = APIRouter(responses={422: {"model": InputErrorResponse}})


@router.post("/vehicle-rights", response_model=RightsResultResponse)
async def vehicle_rights(form: VehicleRightsForm):
    """Car purchase rights: short-term reject, repair-first, burden of proof."""
    return RightsResultResponse.from_result(service.vehicle_rights(form))


@router.post("/warranty-check", response_model=RightsResultResponse)
async def warranty_check(form: WarrantyCheckForm):
    """Which protection is still active and the best route to claim."""
    return RightsResultResponse.from_result(service.warranty_check(form))


@router.post("/parking-appeal", response_model=RightsResultResponse)
async def parking_appeal(form: ParkingAppealForm):
    return RightsResultResponse.from_result(service.parking_appeal(form))


@router.post("/energy-complaint", response_model=RightsResultResponse)
async def energy_complaint(form: EnergyComplaintForm):
    return RightsResultResponse.from_result(service.energy_complaint(form))
