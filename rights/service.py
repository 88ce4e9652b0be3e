"""Calculator entry points: form -> validate -> evaluate.

Each function is a pure function of the form and ``today``; nothing is
stored. Validation errors propagate as ``InputValidationError``.
"""

import logging
from datetime import date
from typing import Optional

from rights.calculators.energy import check_energy_complaint
from rights.calculators.parking import check_parking_appeal
from rights.calculators.vehicle import check_vehicle_rights
from rights.calculators.warranty import check_warranty
from rights.models import ResultRecord
from rights.schemas import (
    EnergyComplaintForm,
    ParkingAppealForm,
    VehicleRightsForm,
    WarrantyCheckForm,
)
from rights.validation import (
    validate_energy_form,
    validate_parking_form,
    validate_vehicle_form,
    validate_warranty_form,
)

logger = logging.getLogger(__name__)


def vehicle_rights(form: VehicleRightsForm, today: Optional[date] = None) -> ResultRecord:
    today = today or date.today()
    record = validate_vehicle_form(form, today)
    result = check_vehicle_rights(record, as_of=today)
    logger.info(
        "vehicle check %s/%s: tier=%s eligible=%s",
        record.jurisdiction.value, record.category, result.tier, result.eligible,
    )
    return result


def warranty_check(form: WarrantyCheckForm, today: Optional[date] = None) -> ResultRecord:
    today = today or date.today()
    record = validate_warranty_form(form, today)
    result = check_warranty(record, as_of=today)
    logger.info(
        "warranty check %s/%s: claim_type=%s eligible=%s",
        record.jurisdiction.value, record.category, result.claim_type, result.eligible,
    )
    return result


def parking_appeal(form: ParkingAppealForm, today: Optional[date] = None) -> ResultRecord:
    today = today or date.today()
    record = validate_parking_form(form, today)
    result = check_parking_appeal(record, as_of=today)
    logger.info("parking appeal %s/%s: tier=%s", record.category, record.subcategory, result.tier)
    return result


def energy_complaint(form: EnergyComplaintForm, today: Optional[date] = None) -> ResultRecord:
    today = today or date.today()
    record = validate_energy_form(form, today)
    result = check_energy_complaint(record, as_of=today)
    logger.info("energy complaint %s/%s: tier=%s", record.category, record.subcategory, result.tier)
    return result
