"""Eligibility evaluator: (InputRecord, RuleTableEntry) -> ResultRecord.

Pure function, no database, no side effects:

1. Elapsed time between purchase and event date (event defaults to ``as_of``).
2. First tier, in ascending order, whose window contains the elapsed time.
3. The tier's bundle, with evidence-dependent overrides.
4. Cross-cutting modifiers, independent of tier.
5. Next steps from the entry's template list.

The evaluator is total over validated input. Negative elapsed time is clamped
to day zero; validation rejects it before we get here.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from rights.card_protection import card_protection_for
from rights.models import (
    Citation,
    EvidenceFlag,
    InputRecord,
    Protection,
    Provision,
    ResultRecord,
)
from rights.rule_tables import Modifier, RuleTableEntry, Tier
from rights.time_arithmetic import ElapsedTime, elapsed_between


# ---------------------------------------------------------------------------
# Draft assessment
# ---------------------------------------------------------------------------

@dataclass
class Assessment:
    """Mutable draft that modifiers work on before it is frozen."""

    tier: Tier
    elapsed: ElapsedTime
    eligible: bool
    rights: list[Provision]
    remedies: list[Provision]
    warnings: list[str]
    window_label: str
    citations: list[Citation] = field(default_factory=list)
    protections: list[Protection] = field(default_factory=list)

    def add_right(self, provision: Provision) -> None:
        if provision not in self.rights:
            self.rights.append(provision)

    def add_remedy(self, provision: Provision) -> None:
        if provision not in self.remedies:
            self.remedies.append(provision)

    def add_warning(self, warning: str) -> None:
        if warning not in self.warnings:
            self.warnings.append(warning)

    def freeze(self, next_steps: Iterable[str]) -> ResultRecord:
        return ResultRecord(
            eligible=self.eligible,
            rights=tuple(p.text for p in self.rights),
            remedies=tuple(p.text for p in self.remedies),
            warnings=tuple(self.warnings),
            next_steps=tuple(next_steps),
            window_label=self.window_label,
            tier=self.tier.name,
            elapsed_days=self.elapsed.days,
            citations=tuple(str(c) for c in self.citations),
            protections=tuple(self.protections),
        )


# ---------------------------------------------------------------------------
# Core steps
# ---------------------------------------------------------------------------

def select_tier(tiers: tuple[Tier, ...], elapsed: ElapsedTime) -> Tier:
    """First tier whose window contains ``elapsed``.

    Entries always end with an open-ended tier, so this always returns.
    """
    for tier in tiers:
        if tier.contains(elapsed):
            return tier
    return tiers[-1]


def render_next_steps(entry: RuleTableEntry, record: InputRecord) -> list[str]:
    counterparty = record.counterparty.strip() or entry.counterparty_default
    return [step.format(counterparty=counterparty) for step in entry.next_steps]


def evaluate(
    record: InputRecord,
    entry: RuleTableEntry,
    modifiers: Iterable[Modifier] = (),
    as_of: Optional[date] = None,
) -> ResultRecord:
    """Evaluate one input record against one rule table entry."""
    end = record.event_date or as_of or date.today()
    elapsed = elapsed_between(record.purchase_date, end).clamped()

    tier = select_tier(entry.tiers, elapsed)
    outcome = tier.outcome_for(record.evidence)

    assessment = Assessment(
        tier=tier,
        elapsed=elapsed,
        eligible=outcome.eligible,
        rights=list(tier.rights),
        remedies=list(outcome.remedies),
        warnings=list(tier.warnings),
        window_label=tier.describe_window(elapsed),
        citations=list(entry.citations),
    )

    for modifier in modifiers:
        modifier(record, entry, assessment)

    return assessment.freeze(render_next_steps(entry, record))


# ---------------------------------------------------------------------------
# Built-in modifiers
# ---------------------------------------------------------------------------

PRIVATE_SELLER = "private"

MISREPRESENTATION_RIGHT = Provision(
    "May have a claim for misrepresentation if the seller lied", trader_only=False
)
MISREPRESENTATION_REMEDY = Provision(
    "Claim for misrepresentation if the seller lied", trader_only=False
)
PRIVATE_SALE_WARNING = "Private sales have much weaker protection than dealer sales"


def private_seller(record: InputRecord, entry: RuleTableEntry, assessment: Assessment) -> None:
    """A private seller owes no statutory-quality duties, whatever the tier."""
    if record.category != PRIVATE_SELLER:
        return

    assessment.rights = [p for p in assessment.rights if not p.trader_only]
    assessment.remedies = [p for p in assessment.remedies if not p.trader_only]
    assessment.eligible = False
    assessment.add_right(MISREPRESENTATION_RIGHT)
    assessment.add_remedy(MISREPRESENTATION_REMEDY)
    assessment.add_warning(PRIVATE_SALE_WARNING)


def card_protection(record: InputRecord, entry: RuleTableEntry, assessment: Assessment) -> None:
    """Unlock the card-issuer remedy when the amount is in range, whatever the tier."""
    protection = card_protection_for(record.jurisdiction, record.amount)
    if protection is None:
        return

    active = protection.window.contains(assessment.elapsed)
    assessment.protections.append(
        Protection(
            name=protection.name,
            expires=protection.window.ends_on(record.purchase_date),
            active=active,
        )
    )
    if not active:
        return

    if record.has(EvidenceFlag.PAID_BY_CREDIT_CARD):
        remedy = protection.remedy
    else:
        remedy = f"If you paid by credit card: {protection.remedy[0].lower()}{protection.remedy[1:]}"
    assessment.add_remedy(Provision(remedy, trader_only=False))
    if protection.citation not in assessment.citations:
        assessment.citations.append(protection.citation)
