"""Deterministic letters used when no completion service is available.

One template per letter type. They are plain string templates over the
request, so the endpoint can always return a usable letter.
"""

from datetime import date
from typing import Callable

from core.formatting import fmt_long_date, fmt_plain_money, parse_amount, parse_iso_date
from letters.schemas import GenerateLetterTypeRequest, LetterType

SIGNATURE = "Yours faithfully,\n\n[Your Full Name]\n[Your Address]\n[Your Email]"


def incident_date_text(request: GenerateLetterTypeRequest) -> str:
    """en-GB long date of the incident, or "recently" when unknown."""
    incident = parse_iso_date(request.incident_date)
    return fmt_long_date(incident) if incident else "recently"


def _money(request: GenerateLetterTypeRequest) -> str:
    return fmt_plain_money(parse_amount(request.purchase_amount), request.currency)


def _legal_lines(request: GenerateLetterTypeRequest) -> str:
    lines = [f"- {l.law}{f' ({l.section})' if l.section else ''}" for l in request.legal_basis]
    return "\n".join(lines) or "- Consumer Rights Act 2015"


def _outcome(request: GenerateLetterTypeRequest) -> str:
    return request.desired_outcome or "a full resolution of this matter"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

def _initial(request: GenerateLetterTypeRequest, today: date) -> str:
    return f"""Dear {request.company_name} Customer Relations,

I am writing to formally complain about an issue that occurred on {incident_date_text(request)}.

{request.complaint}

Under consumer protection law, I am entitled to {_outcome(request)}.

I expect a response within 14 days. If this matter is not resolved satisfactorily, I will escalate to the relevant ombudsman service and consider legal action.

{SIGNATURE}"""


def _follow_up(request: GenerateLetterTypeRequest, today: date) -> str:
    previous = request.previous_letter_date or "[date of original complaint]"
    return f"""Dear {request.company_name} Customer Relations,

I am writing further to my formal complaint dated {previous}, to which I have not received a response.

As set out in my original letter, on {incident_date_text(request)}: {request.complaint}

I remain entitled to {_outcome(request)}. I am disappointed that you have not responded within the 14 days I allowed.

Please respond within 7 days of the date of this letter. If I do not hear from you, I will escalate this complaint to the relevant ombudsman service and Trading Standards, and consider a claim in the small claims court.

{SIGNATURE}"""


def _letter_before_action(request: GenerateLetterTypeRequest, today: date) -> str:
    money = _money(request)
    reference = f"\nReference: {request.case_reference}" if request.case_reference else ""
    return f"""LETTER BEFORE ACTION
WITHOUT PREJUDICE SAVE AS TO COSTS

Date: {fmt_long_date(today)}

To: {request.company_name}
Legal Department / Registered Office

Dear Sir/Madam,

RE: LETTER BEFORE ACTION - PRE-ACTION PROTOCOL FOR DEBT CLAIMS{reference}

I am writing to notify you that I intend to issue legal proceedings against you in the County Court unless the matter detailed below is resolved within 14 days of the date of this letter.

THE CLAIM

On {incident_date_text(request)}, I purchased goods/services from your company. {request.complaint}

Despite my previous correspondence dated {request.previous_letter_date or "[date of original complaint]"}, this matter remains unresolved.

AMOUNT CLAIMED

Principal sum: {money}
Interest (s.69 County Courts Act 1984): To be calculated
Court fees: To be added if proceedings issued

Total claim: {money} plus interest and costs

LEGAL BASIS

{_legal_lines(request)}

YOUR RESPONSE

You have 14 days from the date of this letter to:

1. Pay the sum of {money} in full; OR
2. Provide a written proposal for settlement

If I do not receive a satisfactory response within this timeframe, I will issue a claim through Money Claims Online (MCOL) without further notice. You will then be liable for:
- The principal sum claimed
- Interest continuing to accrue
- Court issue fee
- Any other costs incurred

Please also provide your full legal name and registered address for service of proceedings.

This letter is sent in compliance with the Pre-Action Protocol for Debt Claims and may be shown to the court.

Yours faithfully,

[Your Full Name]
[Your Address]
[Your Email]
[Your Phone Number]"""


def _escalation(request: GenerateLetterTypeRequest, today: date) -> str:
    target = request.ombudsman_name or request.regulatory_body
    greeting = target or "Sir/Madam"
    response = request.company_response or "Their response did not resolve the matter."
    return f"""Dear {greeting},

Complaint against {request.company_name}

I am writing to make a formal complaint about {request.company_name}. I have exhausted their complaints process: I first complained on {request.previous_letter_date or "[date of original complaint]"} and more than 8 weeks have passed without a satisfactory resolution.

What happened: on {incident_date_text(request)}, {request.complaint}

{request.company_name}'s response: {response}

I am seeking {_outcome(request)}. I ask that you investigate this complaint and intervene on my behalf.

Copies of all previous correspondence are enclosed.

{SIGNATURE}

Enclosures: previous correspondence with {request.company_name}"""


def _chargeback(request: GenerateLetterTypeRequest, today: date) -> str:
    issuer = request.card_issuer or "Card Services Team"
    if request.is_section_75:
        heading = f"Section 75 Claim - {request.company_name}"
        basis = (
            "I am making a claim under Section 75 of the Consumer Credit Act 1974, which makes you "
            "jointly and severally liable with the merchant for any breach of contract or "
            "misrepresentation. I paid by credit card and the purchase was over £100 and under £30,000."
        )
        closing = (
            "I understand you have 8 weeks to respond. If my claim is rejected, I will refer it to "
            "the Financial Ombudsman Service."
        )
    else:
        heading = f"Chargeback Request - {request.company_name}"
        basis = (
            "I am requesting a chargeback under the card scheme rules for goods or services not "
            "provided as described."
        )
        closing = "I am raising this within the card scheme's time limits."

    return f"""Dear {issuer},

{heading}
Card number: XXXX XXXX XXXX [last 4 digits]

On {incident_date_text(request)}, I paid {_money(request)} to {request.company_name}. {request.complaint}

I have tried to resolve this directly with the merchant without success.

{basis}

I request a full refund of {_money(request)}. I can provide receipts and correspondence on request.

{closing}

{SIGNATURE}"""


def _response_counter(request: GenerateLetterTypeRequest, today: date) -> str:
    offer = request.company_offer or "a goodwill gesture"
    return f"""Dear {request.company_name} Customer Relations,

Thank you for your response. I have considered your offer of {offer}, but I do not accept it.

Your offer does not meet my entitlement under consumer protection law. The issue I raised was: {request.complaint}

I require {_outcome(request)}. This is fair and reasonable given the problem and my statutory rights.

Please confirm within 7 days that you will provide this. If not, I will escalate this complaint to the relevant ombudsman service and consider legal action.

{SIGNATURE}"""


FALLBACK_TEMPLATES: dict[LetterType, Callable[[GenerateLetterTypeRequest, date], str]] = {
    LetterType.INITIAL: _initial,
    LetterType.FOLLOW_UP: _follow_up,
    LetterType.LETTER_BEFORE_ACTION: _letter_before_action,
    LetterType.ESCALATION: _escalation,
    LetterType.CHARGEBACK: _chargeback,
    LetterType.RESPONSE_COUNTER: _response_counter,
}


def fallback_letter(request: GenerateLetterTypeRequest, today: date) -> str:
    return FALLBACK_TEMPLATES[request.letter_type](request, today)
