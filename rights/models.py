"""Input and result records for the rights calculators.

Both are plain frozen dataclasses: an ``InputRecord`` is created on form
submission, consumed once by the evaluator, and discarded. A ``ResultRecord``
is never persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Jurisdiction(str, Enum):
    UK = "uk"
    US = "us"
    EU = "eu"
    AU = "au"
    CA = "ca"


class EvidenceFlag(str, Enum):
    """Documentation the user holds."""

    REPAIR_ATTEMPTED = "repair_attempted"
    INSPECTION_REPORT = "inspection_report"
    PHOTOS = "photos"
    PROOF_OF_PURCHASE = "proof_of_purchase"
    WRITTEN_COMPLAINT = "written_complaint"
    PAID_BY_CREDIT_CARD = "paid_by_credit_card"


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InputRecord:
    """User-supplied facts for one calculator run.

    ``category`` is the calculator's primary enum (seller type, product
    category, ticket type, issue type). ``subcategory`` is the secondary one
    where a calculator has it (vehicle condition, appeal ground, energy type).
    ``details`` is carried through verbatim and never parsed.
    """

    jurisdiction: Jurisdiction
    category: str
    purchase_date: date
    subcategory: Optional[str] = None
    event_date: Optional[date] = None
    amount: Optional[Decimal] = None
    evidence: frozenset[EvidenceFlag] = frozenset()
    details: str = ""
    counterparty: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)

    def has(self, flag: EvidenceFlag) -> bool:
        return flag in self.evidence

    def attribute(self, name: str, default: str = "") -> str:
        return self.attributes.get(name) or default


# ---------------------------------------------------------------------------
# Rule-table vocabulary
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Provision:
    """One right or remedy line.

    ``trader_only`` marks statutory-quality protections that only exist when
    buying from a business; a private sale removes them.
    """

    text: str
    trader_only: bool = True


@dataclass(frozen=True)
class Citation:
    law: str
    section: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.law} ({self.section})" if self.section else self.law


def trader(*texts: str) -> tuple[Provision, ...]:
    """Provisions that apply only to trader sales."""
    return tuple(Provision(t, trader_only=True) for t in texts)


def general(*texts: str) -> tuple[Provision, ...]:
    """Provisions that apply whoever the seller is."""
    return tuple(Provision(t, trader_only=False) for t in texts)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Protection:
    """One row of a protection timeline (warranty checker)."""

    name: str
    expires: date
    active: bool


@dataclass(frozen=True)
class ResultRecord:
    """Structured advice produced by the evaluator."""

    eligible: bool
    rights: tuple[str, ...]
    remedies: tuple[str, ...]
    warnings: tuple[str, ...]
    next_steps: tuple[str, ...]
    window_label: str
    tier: str = ""
    elapsed_days: int = 0
    citations: tuple[str, ...] = ()
    protections: tuple[Protection, ...] = ()
    claim_type: Optional[str] = None
    letter: Optional[str] = None
    escalation_path: Optional[str] = None
    deadline: Optional[str] = None
