"""Energy bill complaint generator (UK).

Time runs from the date the complaint was first raised with the supplier:
the supplier has 8 weeks to resolve it, after which the Energy Ombudsman
will take the case. The ombudsman only accepts complaints brought within 12
months of that point.
"""

from dataclasses import replace
from datetime import date
from enum import Enum
from typing import Optional

from core.formatting import fmt_long_date, fmt_plain_money, letter_footer
from rights.evaluator import Assessment, evaluate
from rights.models import Citation, InputRecord, Jurisdiction, Provision, ResultRecord, general
from rights.rule_tables import RuleTable, RuleTableEntry, Tier
from rights.time_arithmetic import TimeWindow


class IssueType(str, Enum):
    OVERCHARGE = "overcharge"
    ESTIMATE = "estimate"
    BACKBILL = "backbill"
    SWITCHING = "switching"
    SMARTMETER = "smartmeter"
    DIRECTDEBIT = "directdebit"
    OTHER = "other"


class EnergyType(str, Enum):
    GAS = "gas"
    ELECTRICITY = "electricity"
    BOTH = "both"


BACKBILL_RIGHT = Provision(
    "Ofgem's back-billing rules prevent charging for energy used over 12 months ago",
    trader_only=False,
)
DIRECT_DEBIT_WARNING = (
    "Don't cancel your direct debit without agreement - this could affect your credit and tariff"
)

_RIGHTS = general(
    "Suppliers must resolve complaints within 8 weeks",
    "You cannot be disconnected while a complaint is being investigated",
    "Back-billing is limited to 12 months for accurate bills",
    "You have the right to actual meter readings, not estimates",
    "After 8 weeks, you can escalate to the Energy Ombudsman for free",
)

_NEXT_STEPS = (
    "Send this complaint letter to {counterparty} by email or post",
    "Keep a copy and note the date you sent it",
    "Allow 8 weeks for them to resolve the issue",
    "If unresolved, escalate to the Energy Ombudsman",
    "Continue paying undisputed amounts to protect your supply",
)

_TIERS = (
    Tier(
        name="supplier_resolution",
        window=TimeWindow.weeks(8),
        eligible=True,
        rights=_RIGHTS,
        remedies=general(
            "Ask the supplier to investigate and resolve your complaint",
            "Bill correction and refund of any overcharge",
        ),
        label="{remaining} days left of the supplier's {limit} resolution period",
    ),
    Tier(
        name="ombudsman",
        window=TimeWindow.months(14),
        eligible=True,
        rights=_RIGHTS,
        remedies=general(
            "Escalate to the Energy Ombudsman for free",
            "Bill correction and refund of any overcharge",
            "Compensation for poor service",
        ),
        label="{remaining} days left to take the complaint to the Energy Ombudsman",
    ),
    Tier(
        name="ombudsman_time_limit_passed",
        window=None,
        eligible=False,
        rights=_RIGHTS,
        remedies=general(
            "Raise a fresh complaint with the supplier",
            "Consider the small claims court for any money owed",
        ),
        warnings=("The Energy Ombudsman may not accept complaints raised more than 12 months after deadlock",),
        label="The Energy Ombudsman's time limit has probably passed",
    ),
)

_CITATIONS = (
    Citation("Gas and Electricity (Consumer Complaints Handling Standards) Regulations 2008"),
    Citation("Ofgem Standards of Conduct"),
)


def issue_rules(record: InputRecord, entry: RuleTableEntry, assessment: Assessment) -> None:
    if record.category == IssueType.BACKBILL.value:
        assessment.rights.insert(0, BACKBILL_RIGHT)
        assessment.citations.append(Citation("Ofgem Standard Licence Condition 21BA", "back-billing"))
    if record.category == IssueType.DIRECTDEBIT.value:
        assessment.add_warning(DIRECT_DEBIT_WARNING)


ENERGY_RULES = RuleTable.build(
    "energy",
    entries=(
        RuleTableEntry(
            jurisdiction=Jurisdiction.UK,
            category=issue.value,
            tiers=_TIERS,
            citations=_CITATIONS,
            next_steps=_NEXT_STEPS,
            counterparty_default="your supplier",
            escalation=(
                "If your supplier doesn't resolve your complaint within 8 weeks, you can "
                "escalate to the Energy Ombudsman for free."
            ),
            deadline="8 weeks for resolution, or you can escalate to the Ombudsman",
        )
        for issue in IssueType
    ),
    keyed_by={Jurisdiction.UK: "category"},
    modifiers=(issue_rules,),
)


# ---------------------------------------------------------------------------
# Complaint letter
# ---------------------------------------------------------------------------

def _service(energy_type: EnergyType) -> str:
    return "gas and electricity" if energy_type == EnergyType.BOTH else energy_type.value


def _issue_description(record: InputRecord, issue: IssueType, energy_type: EnergyType) -> str:
    details = record.details.strip()
    if issue == IssueType.OVERCHARGE:
        disputed = ""
        if record.amount:
            disputed = f" The amount in dispute is approximately {fmt_plain_money(record.amount)}."
        return (
            f"I have been overcharged on my {_service(energy_type)} bill.{disputed} The charges do not "
            "reflect my actual usage and appear to be significantly higher than expected."
        )
    if issue == IssueType.ESTIMATE:
        return (
            "My bill is based on estimated readings that do not accurately reflect my actual usage. "
            "I have provided/am providing actual meter readings which show that the estimated "
            "consumption is incorrect. I request that my bill be recalculated based on actual meter "
            "readings."
        )
    if issue == IssueType.BACKBILL:
        return (
            "I have received a bill for energy usage from more than 12 months ago. Under Ofgem's "
            "back-billing rules, suppliers cannot charge for unbilled energy that is more than 12 "
            "months old where the customer is not at fault. I did not prevent you from obtaining "
            "accurate readings, therefore I dispute any charges relating to periods more than 12 "
            "months ago."
        )
    if issue == IssueType.SWITCHING:
        what = "suppliers" if energy_type == EnergyType.BOTH else f"my {energy_type.value} supplier"
        return f"I experienced problems when switching {what}. " + (
            details or "The switch was not completed correctly, resulting in billing errors and inconvenience."
        )
    if issue == IssueType.SMARTMETER:
        return "I am experiencing issues with my smart meter which is providing incorrect readings. " + (
            details
            or "The meter appears to be faulty and is recording usage that does not match my actual consumption."
        )
    if issue == IssueType.DIRECTDEBIT:
        return "There are problems with my direct debit payments. " + (
            details
            or "The amount being taken does not match what was agreed, or refunds owed have not been processed."
        )
    return details or "I am writing to make a formal complaint about my account."


def generate_complaint_letter(record: InputRecord, today: date) -> str:
    issue = IssueType(record.category)
    energy_type = EnergyType(record.subcategory)
    service = _service(energy_type)
    details = record.details.strip()

    legal = [
        "- The Gas and Electricity (Consumer Complaints Handling Standards) Regulations",
        "- Ofgem's Standards of Conduct requiring fair treatment",
        "- The Energy Supply Licence Conditions",
    ]
    if issue == IssueType.BACKBILL:
        legal.append("- Ofgem's back-billing rules limiting charges to 12 months")

    if issue in (IssueType.OVERCHARGE, IssueType.ESTIMATE):
        fix = "Recalculate my bill based on accurate information"
    elif issue == IssueType.BACKBILL:
        fix = "Remove all charges relating to periods more than 12 months ago"
    else:
        fix = "Resolve this issue promptly"
    if record.amount:
        refund = f"Refund the amount I have been overcharged (approximately {fmt_plain_money(record.amount)})"
    else:
        refund = "Correct any billing errors and process appropriate refunds"

    sections = [
        fmt_long_date(today),
        f"{record.counterparty or '[Supplier]'}\nCustomer Services\n[Supplier Address]",
        "Dear Sir/Madam,",
        "\n".join([
            f"Re: Formal Complaint - {service[0].upper()}{service[1:]} Account",
            f"Account Number: {record.attribute('account_number', '[Your Account Number]')}",
            f"Property Address: {record.attribute('your_address', '[Your Address]')}",
        ]),
        f"I am writing to make a formal complaint regarding my {service} account.",
        "THE ISSUE",
        _issue_description(record, issue, energy_type),
    ]
    if details and issue not in (IssueType.OTHER, IssueType.SWITCHING, IssueType.SMARTMETER, IssueType.DIRECTDEBIT):
        sections += ["ADDITIONAL DETAILS", details]
    sections += [
        "MY RIGHTS",
        "I am aware of my rights under:\n" + "\n".join(legal),
        "WHAT I WANT",
        "I request that you:\n"
        "1. Investigate this complaint fully\n"
        f"2. {fix}\n"
        f"3. {refund}\n"
        "4. Provide a written response to this complaint",
        "NEXT STEPS",
        "I expect a response within 14 days. If I do not receive a satisfactory response, or if the "
        "matter is not resolved within 8 weeks, I will escalate this complaint to the Energy Ombudsman.",
        "Please confirm receipt of this complaint.",
        f"Yours faithfully,\n\n{record.attribute('your_name', '[Your Name]')}",
        letter_footer(today),
    ]
    return "\n\n".join(sections)


def check_energy_complaint(record: InputRecord, as_of: Optional[date] = None) -> ResultRecord:
    """Evaluate an energy billing complaint and draft the complaint letter."""
    today = as_of or date.today()
    entry = ENERGY_RULES.entry_for(record)
    result = evaluate(record, entry, ENERGY_RULES.modifiers, as_of=today)
    return replace(
        result,
        letter=generate_complaint_letter(record, today),
        escalation_path=entry.escalation,
        deadline=entry.deadline,
    )
