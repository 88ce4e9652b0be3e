"""Prompt construction for the six letter types.

``build_prompt`` is pure: the same request always yields the same prompt.
Every prompt shares one case-context block (sender, case details, complaint,
issues, legal basis, evidence) followed by instructions for the letter type.
"""

from typing import Callable

from core.formatting import fmt_plain_money, parse_amount
from letters.schemas import EvidenceAnalysis, GenerateLetterTypeRequest, LetterType, Tone

DEFAULT_LEGAL_BASIS = "Consumer Rights Act 2015"

TONE_GUIDANCE: dict[Tone, str] = {
    Tone.FORMAL: (
        "Write in a formal, measured tone that is polite but leaves no doubt about the "
        "seriousness of the complaint."
    ),
    Tone.ASSERTIVE: (
        "Write in an assertive, firm tone that clearly communicates dissatisfaction while "
        "remaining professional. Emphasize consumer rights and consequences of non-compliance."
    ),
    Tone.FRIENDLY: (
        "Write in a courteous, constructive tone that assumes good faith but is clear about "
        "what you expect."
    ),
}


def format_amount(amount: str, currency: str) -> str:
    """``"120" + GBP`` -> ``"£120.00"``; empty when the amount is missing or not positive."""
    value = parse_amount(amount)
    if value <= 0:
        return ""
    return fmt_plain_money(value, currency)


# ---------------------------------------------------------------------------
# Shared context
# ---------------------------------------------------------------------------

def _lines(*lines: str) -> str:
    """Join lines, dropping the empty ones."""
    return "\n".join(line for line in lines if line)


def _sender_block(request: GenerateLetterTypeRequest) -> str:
    profile = request.user_profile
    if profile is None:
        return ""
    return _lines(
        "SENDER INFORMATION:",
        f"- Name: {profile.full_name}" if profile.full_name else "- Name: [Not provided - use placeholder]",
        f"- Email: {profile.email}" if profile.email else "",
        f"- Phone: {profile.phone}" if profile.phone else "",
        f"- Address:\n{profile.address}" if profile.address else "",
    )


def _legal_block(request: GenerateLetterTypeRequest) -> str:
    lines = [
        f"- {law.law}{f' ({law.section})' if law.section else ''}: {law.summary or ''}"
        for law in request.legal_basis
    ]
    return "\n".join(lines) or DEFAULT_LEGAL_BASIS


def _key_evidence(index: int, item: EvidenceAnalysis) -> str:
    return _lines(
        f"{index}. {item.file_name} ({item.type}, {item.strength} evidence)",
        f"   - What it shows: {item.description}",
        f"   - Key details: {'; '.join(item.relevant_details)}",
        f"   - Suggested use: {item.suggested_use}",
        f"   - User notes: {item.user_context}" if item.user_context else "",
    )


def _evidence_block(request: GenerateLetterTypeRequest) -> str:
    evidence = request.evidence or []
    indexed = [e for e in evidence if e.indexed_for_letter]
    other = [e for e in evidence if not e.indexed_for_letter]
    if not evidence:
        return ""

    parts = ["SUPPORTING EVIDENCE:"]
    if indexed:
        parts.append("Key Evidence (reference in letter):")
        parts.extend(_key_evidence(i, e) for i, e in enumerate(indexed, 1))
    if other:
        parts.append("Additional Evidence Available:")
        parts.extend(f"{i}. {e.file_name} ({e.type}): {e.description}" for i, e in enumerate(other, 1))
    parts.append(
        "IMPORTANT: When writing the letter, naturally reference the key evidence to strengthen "
        "your case. Mention specific documents, receipts, or communications that support your claims."
    )
    return "\n".join(parts)


def case_context(request: GenerateLetterTypeRequest) -> str:
    """Context block shared by every letter type."""
    amount = format_amount(request.purchase_amount, request.currency)
    issues = "\n".join(f"{i}. {issue}" for i, issue in enumerate(request.issues, 1))

    blocks = [
        _sender_block(request),
        _lines(
            "CASE DETAILS:",
            f"- Company: {request.company_name}",
            f"- Incident Date: {request.incident_date or 'Not specified'}",
            f"- Amount: {amount}",
            f"- Desired Outcome: {request.desired_outcome}",
            f"- Reference: {request.case_reference}" if request.case_reference else "",
            f"- Location: {request.incident_country}" if request.incident_country else "",
        ),
        f"COMPLAINT SUMMARY:\n{request.complaint}",
        f"IDENTIFIED ISSUES:\n{issues}",
        f"RELEVANT CONSUMER RIGHTS:\n{_legal_block(request)}",
        _evidence_block(request),
    ]
    return "\n\n".join(b for b in blocks if b)


# ---------------------------------------------------------------------------
# Per-type instructions
# ---------------------------------------------------------------------------

def _initial(request: GenerateLetterTypeRequest, context: str) -> str:
    return f"""You are a UK consumer rights expert writing a formal complaint letter.

{context}

Write a professional complaint letter that:
1. Clearly states this is a formal complaint
2. Explains what happened (rewrite professionally, don't copy verbatim)
3. References relevant consumer rights naturally
4. States the desired resolution: {request.desired_outcome}
5. Sets a 14-day deadline
6. Warns of escalation if not resolved

Tone: {TONE_GUIDANCE[request.tone]}
Format: Proper business letter, no section headers, flowing paragraphs.
- Open: "Dear {request.company_name} Customer Relations,"
- Close: "Yours faithfully,"

Generate the letter now:"""


def _follow_up(request: GenerateLetterTypeRequest, context: str) -> str:
    return f"""You are a UK consumer rights expert writing a follow-up complaint letter.

{context}

PREVIOUS CORRESPONDENCE:
- Original complaint sent: {request.previous_letter_date or "14+ days ago"}
- Summary: {request.previous_letter_summary or "Initial formal complaint"}
- Company response: None received

INSTRUCTIONS:
Write a firm but professional follow-up letter. This is the second attempt to resolve the matter.

Structure:
1. Reference the original complaint and date sent
2. Express disappointment at lack of response
3. Reiterate the key issues briefly
4. Restate the desired resolution
5. Set a NEW 7-day deadline
6. Warn that failure to respond will result in escalation to:
   - The relevant ombudsman service
   - Trading Standards
   - Small claims court if necessary
7. Mention you will also share your experience publicly on review platforms

Tone: More assertive than the original letter, but still professional.

Format:
- Open: "Dear {request.company_name} Customer Relations,"
- Close: "Yours faithfully,"
- Include signature block placeholders
- Reference previous complaint reference if provided

Generate the follow-up letter now:"""


def _letter_before_action(request: GenerateLetterTypeRequest, context: str) -> str:
    amount = format_amount(request.purchase_amount, request.currency)
    offer = f"\n- Company's offer (rejected): {request.company_offer}" if request.company_offer else ""
    deadline = (
        f"\n- Small claims limitation deadline: {request.small_claims_deadline}"
        if request.small_claims_deadline else ""
    )
    return f"""You are a UK consumer rights expert writing a formal Letter Before Action (LBA).

{context}

PREVIOUS CORRESPONDENCE:
- Original complaint sent: {request.previous_letter_date or "Over 14 days ago"}
- Follow-up attempts made: At least one
- Company response: {request.company_response or "Inadequate or none"}{offer}{deadline}

CRITICAL: This is a LEGAL document - the final step before court proceedings.

STRUCTURE (must include ALL elements):
1. TITLE: "LETTER BEFORE ACTION" at the top (this IS a heading exception)
2. State this is a formal Letter Before Action under the Pre-Action Protocol for Debt Claims
3. Reference all previous correspondence
4. State the legal basis for your claim (cite specific laws)
5. State the EXACT amount claimed: {amount}
6. Include any additional costs/interest you're entitled to
7. Give a FINAL 14-day deadline
8. State that if payment/resolution is not received, you WILL issue a claim through the County Court (Money Claims Online)
9. Mention the defendant will be liable for court fees and any additional costs
10. Request they provide their full legal name and address for service of proceedings

LEGAL REQUIREMENTS TO INCLUDE:
- Under Civil Procedure Rules, this letter serves as formal notice of intended legal action
- The claim will be for: [original amount] + [interest under s.69 County Courts Act 1984] + [court fees]
- Reference Pre-Action Protocol compliance

Tone: Extremely formal and legally precise. This is a legal document.

Format:
- Title: "LETTER BEFORE ACTION" (centered, bold implied)
- Open: "Dear Sir/Madam," or "To: {request.company_name} Legal Department"
- Close: "Yours faithfully,"
- Date prominently displayed
- "WITHOUT PREJUDICE SAVE AS TO COSTS" header
- Signature block with full address

Generate the Letter Before Action now:"""


def _escalation(request: GenerateLetterTypeRequest, context: str) -> str:
    target = request.ombudsman_name or request.regulatory_body or "Relevant Ombudsman Service"
    offer = f"\n- Company's final offer: {request.company_offer}" if request.company_offer else ""
    return f"""You are a UK consumer rights expert writing an escalation letter to a regulatory body or ombudsman.

{context}

ESCALATION TARGET: {target}

PREVIOUS CORRESPONDENCE:
- Original complaint to company: {request.previous_letter_date or "Over 8 weeks ago"}
- Company response: {request.company_response or "Unsatisfactory"}{offer}

STRUCTURE:
1. Introduce yourself and state you're making a formal complaint
2. Identify the company you're complaining about
3. Explain you've exhausted the company's complaint process (8-week rule)
4. Provide a clear, chronological summary of events
5. List the issues and how the company failed to resolve them
6. State what resolution you're seeking
7. Attach/reference all previous correspondence
8. Request the ombudsman's intervention

Important: Ombudsmen expect:
- Clear, factual presentation
- Evidence of attempting to resolve directly first
- Specific desired outcome
- All relevant dates and references

Tone: Factual, measured, and professional. Ombudsmen respond better to calm, clear complaints.

Format:
- Open: "Dear {request.ombudsman_name or "Sir/Madam"},"
- Close: "Yours faithfully,"
- Include list of attached documents at the end
- Reference: "Complaint against {request.company_name}"

Generate the escalation letter now:"""


_SECTION_75_BASIS = """SECTION 75 CLAIM:
Under Section 75 of the Consumer Credit Act 1974, the card issuer is jointly and severally liable with the merchant for any breach of contract or misrepresentation, provided:
- The item/service cost over £100 and under £30,000
- Payment was made by credit card (not debit)"""

_CHARGEBACK_BASIS = """CHARGEBACK REQUEST:
This is a request for chargeback under the card scheme rules (Visa/Mastercard dispute resolution)."""

_SECTION_75_POINTS = """- Section 75 Consumer Credit Act 1974 creates joint liability
- The card issuer has 8 weeks to respond
- If rejected, you can escalate to the Financial Ombudsman Service"""

_CHARGEBACK_POINTS = """- Chargeback is a card scheme rule, not a legal right
- Time limits apply (usually 120 days from transaction or discovery)
- Request the bank processes under "goods/services not as described" or "non-delivery\""""


def _chargeback(request: GenerateLetterTypeRequest, context: str) -> str:
    amount = format_amount(request.purchase_amount, request.currency)
    s75 = request.is_section_75
    claim = "Section 75" if s75 else "Chargeback"
    return f"""You are a UK consumer rights expert writing a Section 75 claim or chargeback request letter.

{context}

PAYMENT DETAILS:
- Card issuer: {request.card_issuer or "Credit card provider"}
- Card type: {request.card_type or "Credit card"}
- Payment method: {request.payment_method or "Credit card"}
- Amount paid: {amount}

{_SECTION_75_BASIS if s75 else _CHARGEBACK_BASIS}

STRUCTURE:
1. State this is a {"Section 75 claim" if s75 else "chargeback request"}
2. Provide your card details (last 4 digits only)
3. Identify the transaction: merchant, date, amount
4. Explain what you purchased and what went wrong
5. Explain attempts to resolve with the merchant
6. State the legal basis (Section 75 or chargeback scheme rules)
7. Request a full refund of {amount}
8. Offer to provide any additional documentation

LEGAL POINTS TO INCLUDE:
{_SECTION_75_POINTS if s75 else _CHARGEBACK_POINTS}

Tone: Professional and factual. Banks respond to clear documentation.

Format:
- Open: "Dear {request.card_issuer or "Card Services Team"},"
- Close: "Yours faithfully,"
- Subject: "{claim} Claim - Transaction on [date] - {request.company_name}"
- Include card number (last 4 digits only: XXXX XXXX XXXX 1234)

Generate the {"Section 75" if s75 else "chargeback"} letter now:"""


def _response_counter(request: GenerateLetterTypeRequest, context: str) -> str:
    return f"""You are a UK consumer rights expert writing a response to a company's inadequate offer.

{context}

COMPANY'S RESPONSE/OFFER:
{request.company_response or "The company has responded but their offer is inadequate."}

Their offer: {request.company_offer or "Partial resolution/goodwill gesture"}

STRUCTURE:
1. Acknowledge receipt of their response
2. Explain why their offer is inadequate
3. Reference your legal rights (the offer doesn't meet legal requirements)
4. Counter with what you actually require
5. Give reasons why your counter is fair and reasonable
6. Set a deadline (7 days)
7. State next steps if not resolved (escalation, legal action)

IMPORTANT POINTS:
- Don't accept "goodwill gestures" if you're legally entitled to more
- Point out if their offer doesn't meet Consumer Rights Act standards
- Be specific about the gap between their offer and your entitlement
- Make clear this is your final attempt before escalation

Tone: Firm and assertive - make clear you know your rights. {TONE_GUIDANCE[Tone.ASSERTIVE]}

Format:
- Open: "Dear {request.company_name} Customer Relations,"
- Close: "Yours faithfully,"
- Reference their response date and any reference numbers

Generate the counter-response letter now:"""


PROMPT_BUILDERS: dict[LetterType, Callable[[GenerateLetterTypeRequest, str], str]] = {
    LetterType.INITIAL: _initial,
    LetterType.FOLLOW_UP: _follow_up,
    LetterType.LETTER_BEFORE_ACTION: _letter_before_action,
    LetterType.ESCALATION: _escalation,
    LetterType.CHARGEBACK: _chargeback,
    LetterType.RESPONSE_COUNTER: _response_counter,
}


def build_prompt(request: GenerateLetterTypeRequest) -> str:
    """Full prompt for the request's letter type.

    Usage::

        prompt = build_prompt(GenerateLetterTypeRequest(letter_type="follow-up", ...))
    """
    return PROMPT_BUILDERS[request.letter_type](request, case_context(request))


# ---------------------------------------------------------------------------
# Subject line
# ---------------------------------------------------------------------------

SUBJECT_LABELS: dict[LetterType, str] = {
    LetterType.INITIAL: "Formal Complaint",
    LetterType.FOLLOW_UP: "Follow-Up - Formal Complaint",
    LetterType.LETTER_BEFORE_ACTION: "LETTER BEFORE ACTION",
    LetterType.ESCALATION: "Formal Complaint",
    LetterType.RESPONSE_COUNTER: "Response to Your Offer",
}


def subject_line(request: GenerateLetterTypeRequest) -> str:
    if request.letter_type == LetterType.CHARGEBACK:
        prefix = "Section 75 Claim" if request.is_section_75 else "Chargeback Request"
    else:
        prefix = SUBJECT_LABELS[request.letter_type]
    ref = f" - Ref: {request.case_reference}" if request.case_reference else ""
    return f"{prefix} - {request.company_name}{ref}"
