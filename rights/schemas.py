"""Pydantic schemas for the calculator endpoints.

Enum-like fields are plain optional strings so that an empty or unknown
selection reaches ``rights.validation`` and produces the same inline message
the form shows, instead of a generic schema error.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from rights.models import EvidenceFlag, Protection, ResultRecord


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class VehicleRightsForm(BaseModel):
    country: Optional[str] = None
    seller_type: Optional[str] = None
    car_condition: Optional[str] = None
    purchase_date: Optional[date] = None
    fault_date: Optional[date] = None
    purchase_price: Optional[Decimal] = None
    dealer_name: str = ""
    fault_description: str = ""
    had_repairs: bool = False
    paid_by_credit_card: bool = False
    evidence: list[EvidenceFlag] = Field(default_factory=list)


class WarrantyCheckForm(BaseModel):
    country: Optional[str] = None
    product_category: Optional[str] = None
    product_name: str = ""
    retailer_name: str = ""
    purchase_date: Optional[date] = None
    fault_date: Optional[date] = None
    warranty_months: Optional[int] = None
    extended_months: Optional[int] = None
    product_price: Optional[Decimal] = None
    paid_by_credit_card: bool = False


class ParkingAppealForm(BaseModel):
    ticket_type: Optional[str] = None
    appeal_ground: Optional[str] = None
    ticket_number: str = ""
    vehicle_reg: str = ""
    ticket_date: Optional[date] = None
    location: str = ""
    your_name: str = ""
    details: str = ""


class EnergyComplaintForm(BaseModel):
    supplier: Optional[str] = None
    issue_type: Optional[str] = None
    energy_type: Optional[str] = None
    complaint_date: Optional[date] = None
    account_number: str = ""
    your_name: str = ""
    your_address: str = ""
    amount_disputed: Optional[Decimal] = None
    details: str = ""


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class ProtectionResponse(BaseModel):
    name: str
    expires: date
    active: bool

    @classmethod
    def from_protection(cls, protection: Protection) -> "ProtectionResponse":
        return cls(name=protection.name, expires=protection.expires, active=protection.active)


class RightsResultResponse(BaseModel):
    eligible: bool
    rights: list[str]
    remedies: list[str]
    warnings: list[str]
    next_steps: list[str]
    window_label: str
    tier: str
    elapsed_days: int
    citations: list[str] = Field(default_factory=list)
    protections: list[ProtectionResponse] = Field(default_factory=list)
    claim_type: Optional[str] = None
    letter: Optional[str] = None
    escalation_path: Optional[str] = None
    deadline: Optional[str] = None

    @classmethod
    def from_result(cls, result: ResultRecord) -> "RightsResultResponse":
        return cls(
            eligible=result.eligible,
            rights=list(result.rights),
            remedies=list(result.remedies),
            warnings=list(result.warnings),
            next_steps=list(result.next_steps),
            window_label=result.window_label,
            tier=result.tier,
            elapsed_days=result.elapsed_days,
            citations=list(result.citations),
            protections=[ProtectionResponse.from_protection(p) for p in result.protections],
            claim_type=result.claim_type,
            letter=result.letter,
            escalation_path=result.escalation_path,
            deadline=result.deadline,
        )


class InputErrorResponse(BaseModel):
    error: str
    field: str
