"""Vehicle purchase dispute ("car lemon law") rules.

UK entries are keyed by seller type, US entries by vehicle condition, and the
EU has one jurisdiction-wide entry. Private-seller and card-protection rules
are cross-cutting modifiers, applied after the tier is chosen.
"""

from datetime import date
from enum import Enum
from typing import Optional

from rights.evaluator import card_protection, evaluate, private_seller
from rights.models import (
    Citation,
    EvidenceFlag,
    InputRecord,
    Jurisdiction,
    ResultRecord,
    general,
    trader,
)
from rights.rule_tables import RuleTable, RuleTableEntry, Tier, TierOutcome
from rights.time_arithmetic import TimeWindow


class SellerType(str, Enum):
    DEALER = "dealer"
    PRIVATE = "private"
    AUCTION = "auction"


class CarCondition(str, Enum):
    NEW = "new"
    USED = "used"


_DEALER_STEPS = (
    "Document the fault with photos, videos, and written description",
    "Get an independent inspection report from a qualified mechanic",
    "Write to {counterparty} formally in writing",
    "State the fault, when it appeared, and what remedy you want",
    "Give them 14 days to respond",
    "If no response, escalate to Motor Ombudsman or court",
)

_SELLER_STEPS = _DEALER_STEPS[:-1] + ("If no response, consider small claims court",)

_CRA = Citation("Consumer Rights Act 2015")


# ---------------------------------------------------------------------------
# United Kingdom
# ---------------------------------------------------------------------------

UK_DEALER = RuleTableEntry(
    jurisdiction=Jurisdiction.UK,
    category=SellerType.DEALER.value,
    citations=(
        Citation("Consumer Rights Act 2015", "s.22 short-term right to reject"),
        Citation("Consumer Rights Act 2015", "s.19(14) burden of proof"),
    ),
    next_steps=_DEALER_STEPS,
    counterparty_default="the dealer",
    escalation="The Motor Ombudsman",
    tiers=(
        Tier(
            name="short_term_reject",
            window=TimeWindow.days(30),
            eligible=True,
            rights=trader(
                "Short-term right to reject - full refund available",
                "No need to allow repair attempts first",
                "Dealer must prove fault wasn't present at purchase",
            ),
            remedies=trader(
                "Full refund",
                "Keep the car and negotiate partial refund",
                "Replacement vehicle",
            ),
            label="{remaining} days left in {limit} window to reject for full refund",
        ),
        Tier(
            name="repair_first",
            window=TimeWindow.months(6),
            eligible=False,
            rights=trader(
                "Must allow one repair attempt before rejection",
                "Dealer must prove fault wasn't present at purchase (burden of proof on them)",
                "Right to repair, replacement, or price reduction",
            ),
            remedies=trader(
                "Request repair/replacement first",
                "If repair fails, can then reject",
            ),
            label="Within 6 months - dealer must prove fault wasn't present",
            variants=(
                (
                    EvidenceFlag.REPAIR_ATTEMPTED,
                    TierOutcome(
                        eligible=True,
                        remedies=trader(
                            "Final right to reject (refund minus usage deduction)",
                            "Price reduction",
                            "Further repair",
                        ),
                    ),
                ),
            ),
        ),
        Tier(
            name="burden_on_buyer",
            window=TimeWindow.years(6),
            eligible=False,
            rights=trader(
                "You must prove the fault was present at purchase (burden of proof is now on you)",
                "Products must last a reasonable time (up to 6 years to claim)",
                "Right to repair, partial refund, or price reduction",
            ),
            remedies=trader(
                "Request repair at the dealer's cost first",
                "Partial refund",
                "Price reduction",
            ),
            warnings=(
                "After 6 months, you need to prove the fault was inherent - "
                "consider getting an independent inspection",
            ),
            label="Up to 6 years to claim, but burden of proof is on you",
        ),
        Tier(
            name="time_barred",
            window=None,
            eligible=False,
            rights=general("The 6-year limit for court claims has passed"),
            remedies=general(
                "Ask the dealer for a goodwill gesture",
                "Check whether a manufacturer or extended warranty still applies",
            ),
            warnings=("Claims are normally time-barred 6 years after purchase",),
            label="More than 6 years since purchase - statutory claims are time-barred",
        ),
    ),
)

UK_PRIVATE = RuleTableEntry(
    jurisdiction=Jurisdiction.UK,
    category=SellerType.PRIVATE.value,
    citations=(Citation("Misrepresentation Act 1967"), _CRA),
    next_steps=_SELLER_STEPS,
    tiers=(
        Tier(
            name="misrepresentation",
            window=TimeWindow.years(6),
            eligible=False,
            rights=general(
                "Car must match description given by seller",
                "No statutory quality protection from private sellers",
            ),
            remedies=general("Small claims court for damages"),
            label="6 years to claim for misrepresentation",
        ),
        Tier(
            name="time_barred",
            window=None,
            eligible=False,
            rights=general("The 6-year limit for misrepresentation claims has passed"),
            remedies=general("Ask the seller for a voluntary settlement"),
            label="More than 6 years since purchase - claims are time-barred",
        ),
    ),
)

UK_AUCTION = RuleTableEntry(
    jurisdiction=Jurisdiction.UK,
    category=SellerType.AUCTION.value,
    citations=(_CRA,),
    next_steps=_SELLER_STEPS,
    counterparty_default="the auction house",
    tiers=(
        Tier(
            name="auction_terms",
            window=None,
            eligible=False,
            rights=(
                *general("Auction 'sold as seen' may limit rights"),
                *general("Still protected against misrepresentation"),
            ),
            remedies=general("Check auction terms", "May have limited recourse"),
            warnings=("Auction sales often have limited buyer protection - check the terms",),
            label="Varies - check auction terms",
        ),
    ),
)


# ---------------------------------------------------------------------------
# United States
# ---------------------------------------------------------------------------

US_NEW = RuleTableEntry(
    jurisdiction=Jurisdiction.US,
    category=CarCondition.NEW.value,
    citations=(Citation("Magnuson-Moss Warranty Act"), Citation("State lemon laws")),
    next_steps=_SELLER_STEPS,
    tiers=(
        Tier(
            name="lemon_law_window",
            window=TimeWindow.months(24),
            eligible=False,
            rights=trader(
                "State lemon law may apply (varies by state)",
                "Federal Magnuson-Moss Warranty Act protection",
                "Typically covers substantial defects not fixed in 3-4 attempts",
            ),
            remedies=trader(
                "Refund or replacement under lemon law",
                "Warranty repairs",
                "Legal action",
            ),
            warnings=(
                "Lemon laws vary significantly by state - check your specific state's requirements",
            ),
            label="Usually within first 12-24 months or 12,000-24,000 miles (varies by state)",
        ),
        Tier(
            name="warranty_only",
            window=None,
            eligible=False,
            rights=trader(
                "Most state lemon-law windows have closed",
                "Federal Magnuson-Moss Warranty Act protection",
            ),
            remedies=trader("Warranty repairs", "Legal action"),
            warnings=(
                "Lemon laws vary significantly by state - check your specific state's requirements",
            ),
            label="Beyond the usual lemon-law window - warranty claims only",
        ),
    ),
)

US_USED = RuleTableEntry(
    jurisdiction=Jurisdiction.US,
    category=CarCondition.USED.value,
    citations=(Citation("FTC Used Car Rule"), Citation("Uniform Commercial Code", "implied warranty")),
    next_steps=_SELLER_STEPS,
    tiers=(
        Tier(
            name="state_law",
            window=None,
            eligible=False,
            rights=(
                *trader(
                    "Used car lemon laws exist in some states",
                    "Implied warranty of merchantability may apply",
                ),
                *general("'As-is' sales may waive protections"),
            ),
            remedies=(
                *trader("Depends on state law and whether sold 'as-is'"),
                *general("FTC Used Car Rule requires disclosure"),
            ),
            warnings=("Used car protections vary widely by state",),
            label="Varies by state",
        ),
    ),
)


# ---------------------------------------------------------------------------
# European Union
# ---------------------------------------------------------------------------

_EU_RIGHTS = trader(
    "2-year legal guarantee on all consumer goods",
    "First 6 months: seller must prove fault wasn't present",
    "After 6 months: buyer must prove fault was inherent",
)
_EU_REMEDIES = trader(
    "Repair or replacement",
    "Price reduction",
    "Full refund if repair/replacement impossible",
)

EU_ANY = RuleTableEntry(
    jurisdiction=Jurisdiction.EU,
    category=None,
    citations=(Citation("Directive (EU) 2019/771", "Sale of Goods Directive"),),
    next_steps=_SELLER_STEPS,
    tiers=(
        Tier(
            name="seller_must_prove",
            window=TimeWindow.months(6),
            eligible=True,
            rights=_EU_RIGHTS,
            remedies=_EU_REMEDIES,
            label="2-year legal guarantee",
        ),
        Tier(
            name="legal_guarantee",
            window=TimeWindow.months(24),
            eligible=False,
            rights=_EU_RIGHTS,
            remedies=_EU_REMEDIES,
            label="2-year legal guarantee",
        ),
        Tier(
            name="guarantee_expired",
            window=None,
            eligible=False,
            rights=general(
                "2-year guarantee has expired",
                "Check if manufacturer warranty still applies",
            ),
            remedies=general("Manufacturer warranty if applicable", "Goodwill claim"),
            label="Guarantee expired",
        ),
    ),
)


VEHICLE_RULES = RuleTable.build(
    "vehicle",
    entries=(UK_DEALER, UK_PRIVATE, UK_AUCTION, US_NEW, US_USED, EU_ANY),
    keyed_by={
        Jurisdiction.UK: "category",
        Jurisdiction.US: "subcategory",
        Jurisdiction.EU: None,
    },
    modifiers=(private_seller, card_protection),
)


def check_vehicle_rights(record: InputRecord, as_of: Optional[date] = None) -> ResultRecord:
    """Evaluate a vehicle purchase dispute."""
    entry = VEHICLE_RULES.entry_for(record)
    return evaluate(record, entry, VEHICLE_RULES.modifiers, as_of=as_of)
