"""Pydantic schemas for the letter-generation endpoint.

The browser client posts camelCase JSON; fields are snake_case here and
aliased with ``to_camel``. Either spelling is accepted on input.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class LetterType(str, Enum):
    INITIAL = "initial"
    FOLLOW_UP = "follow-up"
    LETTER_BEFORE_ACTION = "letter-before-action"
    ESCALATION = "escalation"
    CHARGEBACK = "chargeback"
    RESPONSE_COUNTER = "response-counter"


class Tone(str, Enum):
    FORMAL = "formal"
    ASSERTIVE = "assertive"
    FRIENDLY = "friendly"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class LegalBasis(CamelModel):
    law: str
    section: Optional[str] = None
    summary: Optional[str] = None
    strength: Optional[str] = None


class EvidenceAnalysis(CamelModel):
    file_name: str
    type: str = "document"
    description: str = ""
    relevant_details: list[str] = Field(default_factory=list)
    suggested_use: str = ""
    strength: str = "moderate"
    user_context: Optional[str] = None
    indexed_for_letter: bool = False


class UserProfile(CamelModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class GenerateLetterTypeRequest(CamelModel):
    letter_type: LetterType
    complaint: str
    company_name: str
    incident_date: Optional[str] = None
    purchase_amount: str = ""
    currency: str = "GBP"
    desired_outcome: str = ""
    tone: Tone = Tone.FORMAL
    issues: list[str] = Field(default_factory=list)
    legal_basis: list[LegalBasis] = Field(default_factory=list)
    evidence: Optional[list[EvidenceAnalysis]] = None
    previous_letter_date: Optional[str] = None
    previous_letter_summary: Optional[str] = None
    company_response: Optional[str] = None
    company_offer: Optional[str] = None
    ombudsman_name: Optional[str] = None
    regulatory_body: Optional[str] = None
    card_issuer: Optional[str] = None
    card_type: Optional[str] = None
    payment_method: Optional[str] = None
    small_claims_deadline: Optional[str] = None
    incident_country: Optional[str] = None
    user_country: Optional[str] = None
    case_reference: Optional[str] = None
    user_profile: Optional[UserProfile] = None

    @property
    def is_section_75(self) -> bool:
        """Credit-card payments are claimed under Section 75, anything else by chargeback."""
        return "credit" in (self.card_type or "").lower() or "credit" in (self.payment_method or "").lower()


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class GenerateLetterTypeResponse(CamelModel):
    letter: str
    subject: str
    letter_type: Optional[LetterType] = None
    mock: bool


class LetterErrorResponse(BaseModel):
    error: str
    letter: str = ""
    subject: str = ""
    mock: bool = True
