"""Product warranty checker.

Each protection (manufacturer warranty, extended warranty, statutory rights)
is a time window from the purchase date. The breakpoints where protections
end become the tiers: in each bracket the still-active protections decide the
best claim route. Because the active set only shrinks as time passes,
eligibility never improves with age.

Entries are keyed by ``(country, product category)``. The static table uses
the category's default manufacturer warranty; a user-supplied warranty length
builds an equivalent entry on the fly with ``build_warranty_entry``.
"""

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Optional

from rights.evaluator import Assessment, card_protection, evaluate
from rights.models import (
    Citation,
    InputRecord,
    Jurisdiction,
    Protection,
    ResultRecord,
    general,
    trader,
)
from rights.rule_tables import RuleTable, RuleTableEntry, Tier
from rights.time_arithmetic import TimeWindow


class ProductCategory(str, Enum):
    ELECTRONICS = "electronics"
    APPLIANCES = "appliances"
    FURNITURE = "furniture"
    CAR = "car"
    CLOTHING = "clothing"
    JEWELRY = "jewelry"
    OTHER = "other"


DEFAULT_WARRANTY_MONTHS: dict[ProductCategory, int] = {
    ProductCategory.ELECTRONICS: 12,
    ProductCategory.APPLIANCES: 24,
    ProductCategory.FURNITURE: 12,
    ProductCategory.CAR: 36,
    ProductCategory.CLOTHING: 12,
    ProductCategory.JEWELRY: 24,
    ProductCategory.OTHER: 12,
}


@dataclass(frozen=True)
class StatutoryPeriod:
    window: TimeWindow
    name: str


STATUTORY_PERIODS: dict[Jurisdiction, StatutoryPeriod] = {
    Jurisdiction.UK: StatutoryPeriod(TimeWindow.years(6), "Consumer Rights Act 2015"),
    Jurisdiction.US: StatutoryPeriod(TimeWindow.years(4), "UCC Implied Warranty (varies by state)"),
    Jurisdiction.EU: StatutoryPeriod(TimeWindow.years(2), "EU Consumer Sales Directive"),
    Jurisdiction.AU: StatutoryPeriod(TimeWindow.years(6), "Australian Consumer Law"),
    Jurisdiction.CA: StatutoryPeriod(TimeWindow.years(6), "Provincial Consumer Protection"),
}

# Period during which the retailer must prove the fault was not present at sale.
BURDEN_OF_PROOF_WINDOWS: dict[Jurisdiction, TimeWindow] = {
    Jurisdiction.UK: TimeWindow.months(6),
    Jurisdiction.EU: TimeWindow.months(6),
}

MANUFACTURER = "manufacturer"
EXTENDED = "extended"
STATUTORY = "statutory"
EXPIRED = "expired"

CLAIM_TYPES: dict[str, str] = {
    MANUFACTURER: "Manufacturer Warranty",
    EXTENDED: "Extended Warranty",
    STATUTORY: "Statutory Rights",
    EXPIRED: "No active protection",
}

_NEXT_STEPS = (
    "Gather proof of purchase (receipt, bank statement or order confirmation)",
    "Photograph the fault and note when it first appeared",
    "Contact {counterparty} in writing and describe the fault",
    "Ask for a repair, replacement or refund and give them 14 days to respond",
    "If they refuse, escalate to the relevant ombudsman or the small claims court",
)


# ---------------------------------------------------------------------------
# Entry construction
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coverage:
    key: str
    name: str
    window: TimeWindow


@dataclass(frozen=True)
class WarrantyEntry(RuleTableEntry):
    """Rule table entry that also remembers each protection's window."""

    coverage: tuple[Coverage, ...] = ()


def _bundle(active: list[Coverage]) -> tuple[str, tuple, tuple]:
    keys = {c.key for c in active}
    if MANUFACTURER in keys:
        claim = MANUFACTURER
        rights = general(
            "Your manufacturer warranty is still active - contact the manufacturer or retailer first",
            "You don't need a receipt, but proof of purchase (bank statement, email confirmation) helps",
        )
    elif EXTENDED in keys:
        claim = EXTENDED
        rights = general(
            "Your manufacturer warranty has expired, but your extended warranty is still active",
            "Claim under the extended warranty's terms - check any excess or exclusions",
        )
    elif STATUTORY in keys:
        claim = STATUTORY
        rights = trader(
            "Your manufacturer warranty has expired, but you still have statutory rights",
            "Under statutory rights, products must be of satisfactory quality and last a reasonable time",
            "For expensive items, 'reasonable time' may be several years",
        )
    else:
        claim = EXPIRED
        rights = general(
            "Your statutory rights period has expired",
            "However, if the product was expensive and failed prematurely, you may still have a claim",
        )

    if active:
        remedies = general(*(f"Claim under {c.name}" for c in active))
    else:
        remedies = general("Goodwill claim with the retailer or manufacturer")
    return claim, rights, remedies


def build_warranty_entry(
    jurisdiction: Jurisdiction,
    category: ProductCategory,
    warranty_months: Optional[int] = None,
    extended_months: int = 0,
) -> WarrantyEntry:
    """Build the tiers for one country, category and warranty length."""
    statutory = STATUTORY_PERIODS[jurisdiction]
    months = warranty_months or DEFAULT_WARRANTY_MONTHS[category]

    coverage = [Coverage(MANUFACTURER, CLAIM_TYPES[MANUFACTURER], TimeWindow.months(months))]
    if extended_months > 0:
        coverage.append(
            Coverage(EXTENDED, CLAIM_TYPES[EXTENDED], TimeWindow.months(months + extended_months))
        )
    coverage.append(Coverage(STATUTORY, statutory.name, statutory.window))

    breakpoints: dict[int, TimeWindow] = {}
    for c in sorted(coverage, key=lambda c: c.window.approx_days):
        breakpoints.setdefault(c.window.approx_days, c.window)

    tiers = []
    for days, window in breakpoints.items():
        active = [c for c in coverage if c.window.approx_days >= days]
        claim, rights, remedies = _bundle(active)
        tiers.append(
            Tier(
                name=claim,
                window=window,
                eligible=True,
                rights=rights,
                remedies=remedies,
                label=f"Best claim route: {CLAIM_TYPES[claim]} - next protection ends in {{remaining}} days",
            )
        )

    claim, rights, remedies = _bundle([])
    tiers.append(
        Tier(
            name=claim,
            window=None,
            eligible=False,
            rights=rights,
            remedies=remedies,
            label="Protection may have expired",
        )
    )

    return WarrantyEntry(
        jurisdiction=jurisdiction,
        category=category.value,
        tiers=tuple(tiers),
        citations=(Citation(statutory.name),),
        next_steps=_NEXT_STEPS,
        counterparty_default="the retailer",
        coverage=tuple(coverage),
    )


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------

def protection_timeline(record: InputRecord, entry: RuleTableEntry, assessment: Assessment) -> None:
    """One row per protection, in priority order."""
    for c in getattr(entry, "coverage", ()):
        assessment.protections.append(
            Protection(
                name=c.name,
                expires=c.window.ends_on(record.purchase_date),
                active=c.window.contains(assessment.elapsed),
            )
        )


def burden_of_proof(record: InputRecord, entry: RuleTableEntry, assessment: Assessment) -> None:
    window = BURDEN_OF_PROOF_WINDOWS.get(record.jurisdiction)
    if window is None or assessment.tier.name != STATUTORY:
        return
    if window.contains(assessment.elapsed):
        text = "Within 6 months, the retailer must prove the fault wasn't present at purchase"
    else:
        text = "After 6 months, you may need to prove the fault was inherent (not caused by misuse)"
    assessment.add_right(trader(text)[0])


def card_advice(record: InputRecord, entry: RuleTableEntry, assessment: Assessment) -> None:
    if not any(p.name in ("Section 75 Protection", "Credit Card Dispute") for p in assessment.protections):
        return
    route = "Section 75" if record.jurisdiction == Jurisdiction.UK else "your credit card's dispute process"
    assessment.add_right(general(f"Paid by credit card? You may be able to claim under {route}")[0])


def any_protection_active(record: InputRecord, entry: RuleTableEntry, assessment: Assessment) -> None:
    assessment.eligible = any(p.active for p in assessment.protections)


WARRANTY_RULES = RuleTable.build(
    "warranty",
    entries=(
        build_warranty_entry(jurisdiction, category)
        for jurisdiction in STATUTORY_PERIODS
        for category in ProductCategory
    ),
    keyed_by={jurisdiction: "category" for jurisdiction in STATUTORY_PERIODS},
    modifiers=(protection_timeline, burden_of_proof, card_protection, card_advice, any_protection_active),
)


def check_warranty(record: InputRecord, as_of: Optional[date] = None) -> ResultRecord:
    """Evaluate warranty and statutory protection for a purchase.

    ``record.attributes`` may carry ``warranty_months`` and
    ``extended_months`` overrides.
    """
    entry = WARRANTY_RULES.entry_for(record)
    warranty_months = int(record.attribute("warranty_months", "0"))
    extended_months = int(record.attribute("extended_months", "0"))
    if warranty_months or extended_months:
        entry = build_warranty_entry(
            record.jurisdiction,
            ProductCategory(record.category),
            warranty_months=warranty_months or None,
            extended_months=extended_months,
        )

    result = evaluate(record, entry, WARRANTY_RULES.modifiers, as_of=as_of)
    return replace(result, claim_type=CLAIM_TYPES[result.tier])
