"""Parking fine appeal generator (UK).

Tiers run from the date on the ticket: council and TfL penalty charge
notices have a 14-day discount period inside a 28-day window for
representations; private parking charges have a 28-day appeal window.
"""

from dataclasses import replace
from datetime import date
from enum import Enum
from typing import Optional

from core.formatting import fmt_long_date, letter_footer
from rights.evaluator import Assessment, evaluate
from rights.models import Citation, InputRecord, Jurisdiction, ResultRecord, general
from rights.rule_tables import RuleTable, RuleTableEntry, Tier
from rights.time_arithmetic import TimeWindow


class TicketType(str, Enum):
    COUNCIL = "council"
    PRIVATE = "private"
    TFL = "tfl"


class AppealGround(str, Enum):
    SIGNAGE = "signage"
    PAYMENT = "payment"
    GRACE = "grace"
    CIRCUMSTANCES = "circumstances"
    INCORRECT = "incorrect"
    PAID = "paid"
    OTHER = "other"


_PCN_RIGHTS = general(
    "You can make formal representations to the issuing authority",
    "The authority must consider your appeal and give reasons if it rejects it",
    "If rejected, you can appeal to the independent Traffic Penalty Tribunal for free",
)

_PCN_LATE = Tier(
    name="representations_closed",
    window=None,
    eligible=False,
    rights=general("The 28-day window for representations has passed"),
    remedies=general("Ask for a late appeal to be accepted, explaining the reason for the delay"),
    warnings=("A Charge Certificate may be issued, increasing the charge by 50%",),
    label="More than 28 days since the ticket - the appeal window has closed",
)


def _pcn_tiers() -> tuple[Tier, ...]:
    return (
        Tier(
            name="discount_period",
            window=TimeWindow.days(14),
            eligible=True,
            rights=_PCN_RIGHTS,
            remedies=general(
                "Cancellation of the penalty charge",
                "Pay at the 50% discount rate if your appeal might fail",
            ),
            label="{remaining} days left in {limit} discount window",
        ),
        Tier(
            name="representations",
            window=TimeWindow.days(28),
            eligible=True,
            rights=_PCN_RIGHTS,
            remedies=general("Cancellation of the penalty charge"),
            warnings=("The 50% discount period has ended",),
            label="{remaining} days left in {limit} appeal window",
        ),
        _PCN_LATE,
    )


_PCN_STEPS = (
    "Send this letter by email or recorded delivery post",
    "Keep a copy and note the date you sent it",
    "Gather any supporting evidence (photos, receipts, etc.)",
    "Wait for their response (usually within 28 days)",
    "If rejected, appeal to the Traffic Penalty Tribunal",
)

_TRIBUNAL = (
    "You can appeal to the Traffic Penalty Tribunal for free. They are independent "
    "and can cancel the ticket if your appeal has merit."
)

COUNCIL = RuleTableEntry(
    jurisdiction=Jurisdiction.UK,
    category=TicketType.COUNCIL.value,
    tiers=_pcn_tiers(),
    citations=(Citation("Traffic Management Act 2004"),),
    next_steps=_PCN_STEPS,
    counterparty_default="the council",
    escalation=_TRIBUNAL,
    deadline="28 days from ticket (14 days for discount)",
)

TFL = RuleTableEntry(
    jurisdiction=Jurisdiction.UK,
    category=TicketType.TFL.value,
    tiers=_pcn_tiers(),
    citations=(Citation("Traffic Management Act 2004"),),
    next_steps=_PCN_STEPS,
    counterparty_default="Transport for London",
    escalation=_TRIBUNAL,
    deadline="Usually 28 days from ticket",
)

PRIVATE = RuleTableEntry(
    jurisdiction=Jurisdiction.UK,
    category=TicketType.PRIVATE.value,
    citations=(Citation("Protection of Freedoms Act 2012", "Schedule 4"),),
    next_steps=_PCN_STEPS[:-1] + ("If rejected, appeal to POPLA within 28 days",),
    counterparty_default="the parking operator",
    escalation=(
        "You can appeal to POPLA (Parking on Private Land Appeals) for free. They are "
        "independent and their decision is binding on the parking company."
    ),
    deadline="Usually 28 days from ticket",
    tiers=(
        Tier(
            name="appeal_window",
            window=TimeWindow.days(28),
            eligible=True,
            rights=general(
                "A private parking charge is an invoice for alleged breach of contract, not a fine",
                "The operator must show adequate signage and that you agreed to its terms",
                "If rejected, you can appeal to POPLA for free",
            ),
            remedies=general("Cancellation of the parking charge"),
            label="{remaining} days left in {limit} appeal window",
        ),
        Tier(
            name="appeal_window_closed",
            window=None,
            eligible=False,
            rights=general("The 28-day appeal window has passed"),
            remedies=general(
                "Ask the operator to consider a late appeal",
                "Defend any court claim if the operator sues",
            ),
            warnings=("Ignoring a private parking charge can lead to a county court claim",),
            label="More than 28 days since the ticket - the appeal window has closed",
        ),
    ),
)


def ticket_warnings(record: InputRecord, entry: RuleTableEntry, assessment: Assessment) -> None:
    if record.category == TicketType.COUNCIL.value and assessment.tier.name == "discount_period":
        assessment.add_warning("Pay within 14 days to get 50% discount if your appeal might fail")
    if record.subcategory == AppealGround.GRACE.value:
        assessment.add_warning("Grace period arguments work better for private tickets than council ones")


PARKING_RULES = RuleTable.build(
    "parking",
    entries=(COUNCIL, TFL, PRIVATE),
    keyed_by={Jurisdiction.UK: "category"},
    modifiers=(ticket_warnings,),
)


# ---------------------------------------------------------------------------
# Appeal letter
# ---------------------------------------------------------------------------

def _ground_explanation(ticket_type: TicketType, ground: AppealGround, details: str) -> str:
    if ground == AppealGround.SIGNAGE:
        if ticket_type == TicketType.PRIVATE:
            rule = ("Under the BPA Code of Practice, signage must be prominent, clear, "
                    "and visible at the point of entry.")
        else:
            rule = "Proper signage is a legal requirement for parking restrictions to be enforceable."
        return f"The signage at the location was inadequate, unclear, or contradictory. {rule}"
    if ground == AppealGround.PAYMENT:
        return ("I attempted to pay for parking but was unable to do so. The payment machine was "
                "not working / the app failed to process my payment / there was no way to pay by "
                "the method advertised.")
    if ground == AppealGround.GRACE:
        return ("I was only marginally over the permitted time. Industry best practice, including "
                "the BPA Code of Practice, requires a reasonable grace period of at least 10 "
                "minutes to be given.")
    if ground == AppealGround.CIRCUMSTANCES:
        circumstances = details or "I experienced an emergency situation that was beyond my control."
        return ("There were mitigating circumstances that prevented me from returning to my "
                f"vehicle on time. {circumstances}")
    if ground == AppealGround.INCORRECT:
        return ("The Penalty Charge Notice contains incorrect information. The details recorded "
                "do not accurately reflect the situation at the time.")
    if ground == AppealGround.PAID:
        return ("I had a valid parking ticket displayed in my vehicle / I had paid for parking at "
                "the time the ticket was issued. I have evidence to support this.")
    return details or "I am contesting this charge for the reasons outlined below."


def generate_appeal_letter(record: InputRecord, today: date) -> str:
    ticket_type = TicketType(record.category)
    ground = AppealGround(record.subcategory)
    details = record.details.strip()
    sent = fmt_long_date(today)

    if ticket_type == TicketType.COUNCIL:
        recipient = "[Council Name]\nParking Services\n[Address]"
    elif ticket_type == TicketType.TFL:
        recipient = "Transport for London\nParking Operations\nPO Box 123\nLondon"
    else:
        recipient = "[Parking Company Name]\n[Company Address]"
    reference = "Parking Charge Notice" if ticket_type == TicketType.PRIVATE else "Penalty Charge Notice"

    sections = [
        sent,
        recipient,
        "Dear Sir/Madam,",
        f"Re: Formal Appeal Against {reference}",
        "\n".join([
            f"PCN/Reference Number: {record.attribute('ticket_number', '[Insert Number]')}",
            f"Vehicle Registration: {record.attribute('vehicle_reg', '[Insert Registration]')}",
            f"Date of Alleged Contravention: {fmt_long_date(record.purchase_date)}",
            f"Location: {record.attribute('location', '[Insert Location]')}",
        ]),
        f"I am writing to formally appeal against the above {reference.lower()} and request that it be cancelled.",
        "GROUNDS FOR APPEAL",
        _ground_explanation(ticket_type, ground, details),
    ]
    if details and ground not in (AppealGround.CIRCUMSTANCES, AppealGround.OTHER):
        sections += ["ADDITIONAL DETAILS", details]
    if ticket_type == TicketType.PRIVATE:
        sections += [
            "LEGAL POSITION",
            "I note that this is an invoice for an alleged breach of contract, not a fine. Under the "
            "Protection of Freedoms Act 2012, you are required to prove:\n"
            "1. That adequate signage was in place\n"
            "2. That I agreed to your terms and conditions\n"
            "3. That any charge represents a genuine pre-estimate of loss\n"
            "I do not accept that these requirements have been met.",
        ]

    if ticket_type == TicketType.COUNCIL:
        rejection = ("If you reject this appeal, please provide your full reasons in writing. I am aware "
                     "of my right to appeal to the Traffic Penalty Tribunal if necessary.")
    elif ticket_type == TicketType.PRIVATE:
        rejection = ("If you reject this appeal, I am aware of my right to appeal to POPLA (Parking on "
                     "Private Land Appeals) and will exercise this right if necessary.")
    else:
        rejection = ("If you reject this appeal, please provide your full reasons and information about "
                     "further appeal rights.")

    sections += [
        "REQUEST",
        f"I respectfully request that this {reference.lower()} be cancelled with immediate effect.",
        rejection,
        "Please respond to this appeal within 28 days.",
        f"Yours faithfully,\n\n{record.attribute('your_name', '[Your Name]')}",
        letter_footer(today),
    ]
    return "\n\n".join(sections)


def check_parking_appeal(record: InputRecord, as_of: Optional[date] = None) -> ResultRecord:
    """Evaluate appeal options for a parking ticket and draft the appeal letter."""
    today = as_of or date.today()
    entry = PARKING_RULES.entry_for(record)
    result = evaluate(record, entry, PARKING_RULES.modifiers, as_of=today)
    return replace(
        result,
        letter=generate_appeal_letter(record, today),
        escalation_path=entry.escalation,
        deadline=entry.deadline,
    )
