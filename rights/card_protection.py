"""Card-payment protections that apply regardless of tier.

UK: Section 75 of the Consumer Credit Act 1974 makes the card issuer jointly
liable for purchases over £100 and up to £30,000. US: a credit card dispute
(Fair Credit Billing Act) from $100. Both are treated as claimable for six
years from purchase.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from rights.models import Citation, Jurisdiction
from rights.time_arithmetic import TimeWindow


@dataclass(frozen=True)
class CardProtection:
    name: str
    remedy: str
    min_amount: Decimal
    max_amount: Optional[Decimal]
    window: TimeWindow
    citation: Citation

    def covers(self, amount: Optional[Decimal]) -> bool:
        if amount is None or amount < self.min_amount:
            return False
        return self.max_amount is None or amount <= self.max_amount


CARD_PROTECTION: dict[Jurisdiction, CardProtection] = {
    Jurisdiction.UK: CardProtection(
        name="Section 75 Protection",
        remedy="Section 75 claim against your credit card provider",
        min_amount=Decimal("100"),
        max_amount=Decimal("30000"),
        window=TimeWindow.years(6),
        citation=Citation("Consumer Credit Act 1974", "Section 75"),
    ),
    Jurisdiction.US: CardProtection(
        name="Credit Card Dispute",
        remedy="Dispute the charge through your credit card issuer",
        min_amount=Decimal("100"),
        max_amount=None,
        window=TimeWindow.years(6),
        citation=Citation("Fair Credit Billing Act"),
    ),
}


def card_protection_for(
    jurisdiction: Jurisdiction, amount: Optional[Decimal]
) -> Optional[CardProtection]:
    """Return the card protection covering ``amount``, if any."""
    protection = CARD_PROTECTION.get(jurisdiction)
    if protection is None or not protection.covers(amount):
        return None
    return protection
