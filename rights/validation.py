"""Form validation: request schema -> ``InputRecord``.

Runs before any evaluation. Every failure raises ``InputValidationError``
naming the offending field, with the message the form shows inline.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Type, TypeVar

from rights.calculators.energy import EnergyType, IssueType
from rights.calculators.parking import AppealGround, TicketType
from rights.calculators.vehicle import VEHICLE_RULES, CarCondition, SellerType
from rights.calculators.warranty import WARRANTY_RULES, ProductCategory
from rights.errors import InputValidationError
from rights.models import EvidenceFlag, InputRecord, Jurisdiction
from rights.schemas import (
    EnergyComplaintForm,
    ParkingAppealForm,
    VehicleRightsForm,
    WarrantyCheckForm,
)

E = TypeVar("E", bound=Enum)

UNSUPPORTED_COUNTRY = "We don't cover that country for this check yet"
MAX_WARRANTY_MONTHS = 600


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _choice(enum_cls: Type[E], value: Optional[str], field: str, missing: str) -> E:
    if not value:
        raise InputValidationError(field, missing)
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        raise InputValidationError(field, f"{value!r} is not a valid option") from None


def _country(value: Optional[str], supported: tuple[Jurisdiction, ...]) -> Jurisdiction:
    jurisdiction = _choice(Jurisdiction, value, "country", "Please select your country")
    if jurisdiction not in supported:
        raise InputValidationError("country", UNSUPPORTED_COUNTRY)
    return jurisdiction


def _start_date(value: Optional[date], field: str, missing: str, today: date, future: str) -> date:
    if value is None:
        raise InputValidationError(field, missing)
    if value > today:
        raise InputValidationError(field, future)
    return value


def _event_date(value: Optional[date], start: date, today: date, field: str) -> Optional[date]:
    if value is None:
        return None
    if value < start:
        raise InputValidationError(field, "This date cannot be before the purchase date")
    if value > today:
        raise InputValidationError(field, "This date cannot be in the future")
    return value


def _amount(value: Optional[Decimal], field: str) -> Optional[Decimal]:
    if value is None:
        return None
    if not value.is_finite() or value < 0:
        raise InputValidationError(field, "Please enter a valid amount")
    return value


def _months(value: Optional[int], field: str) -> str:
    if value is None:
        return "0"
    if value < 0 or value > MAX_WARRANTY_MONTHS:
        raise InputValidationError(field, "Please enter a valid number of months")
    return str(value)


def _text(value: str) -> str:
    return (value or "").strip()


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------

def validate_vehicle_form(form: VehicleRightsForm, today: date) -> InputRecord:
    jurisdiction = _country(form.country, VEHICLE_RULES.jurisdictions)
    seller = _choice(SellerType, form.seller_type, "seller_type", "Please select where you bought the car")
    condition = CarCondition.USED
    if form.car_condition:
        condition = _choice(CarCondition, form.car_condition, "car_condition", "")
    purchase = _start_date(
        form.purchase_date, "purchase_date", "Please enter the purchase date", today,
        "Purchase date cannot be in the future",
    )

    evidence = set(form.evidence)
    if form.had_repairs:
        evidence.add(EvidenceFlag.REPAIR_ATTEMPTED)
    if form.paid_by_credit_card:
        evidence.add(EvidenceFlag.PAID_BY_CREDIT_CARD)

    return InputRecord(
        jurisdiction=jurisdiction,
        category=seller.value,
        subcategory=condition.value,
        purchase_date=purchase,
        event_date=_event_date(form.fault_date, purchase, today, "fault_date"),
        amount=_amount(form.purchase_price, "purchase_price"),
        evidence=frozenset(evidence),
        details=form.fault_description,
        counterparty=_text(form.dealer_name),
    )


def validate_warranty_form(form: WarrantyCheckForm, today: date) -> InputRecord:
    jurisdiction = _country(form.country, WARRANTY_RULES.jurisdictions)
    category = _choice(
        ProductCategory, form.product_category, "product_category", "Please select a product category"
    )
    purchase = _start_date(
        form.purchase_date, "purchase_date", "Please enter the purchase date", today,
        "Purchase date cannot be in the future",
    )
    evidence = {EvidenceFlag.PAID_BY_CREDIT_CARD} if form.paid_by_credit_card else set()

    return InputRecord(
        jurisdiction=jurisdiction,
        category=category.value,
        purchase_date=purchase,
        event_date=_event_date(form.fault_date, purchase, today, "fault_date"),
        amount=_amount(form.product_price, "product_price"),
        evidence=frozenset(evidence),
        counterparty=_text(form.retailer_name),
        attributes={
            "warranty_months": _months(form.warranty_months, "warranty_months"),
            "extended_months": _months(form.extended_months, "extended_months"),
            "product_name": _text(form.product_name),
        },
    )


def validate_parking_form(form: ParkingAppealForm, today: date) -> InputRecord:
    ticket_type = _choice(TicketType, form.ticket_type, "ticket_type", "Please select the type of ticket")
    ground = _choice(AppealGround, form.appeal_ground, "appeal_ground", "Please select your grounds for appeal")
    issued = _start_date(
        form.ticket_date, "ticket_date", "Please enter the date on the ticket", today,
        "Ticket date cannot be in the future",
    )

    return InputRecord(
        jurisdiction=Jurisdiction.UK,
        category=ticket_type.value,
        subcategory=ground.value,
        purchase_date=issued,
        details=form.details,
        attributes={
            "ticket_number": _text(form.ticket_number),
            "vehicle_reg": _text(form.vehicle_reg).upper(),
            "location": _text(form.location),
            "your_name": _text(form.your_name),
        },
    )


def validate_energy_form(form: EnergyComplaintForm, today: date) -> InputRecord:
    supplier = _text(form.supplier or "")
    if not supplier:
        raise InputValidationError("supplier", "Please select your energy supplier")
    issue = _choice(IssueType, form.issue_type, "issue_type", "Please select the type of issue")
    energy_type = _choice(EnergyType, form.energy_type, "energy_type", "Please select gas, electricity, or both")
    raised = form.complaint_date or today
    if raised > today:
        raise InputValidationError("complaint_date", "Complaint date cannot be in the future")

    return InputRecord(
        jurisdiction=Jurisdiction.UK,
        category=issue.value,
        subcategory=energy_type.value,
        purchase_date=raised,
        amount=_amount(form.amount_disputed, "amount_disputed"),
        details=form.details,
        counterparty=supplier,
        attributes={
            "account_number": _text(form.account_number),
            "your_name": _text(form.your_name),
            "your_address": _text(form.your_address),
        },
    )
