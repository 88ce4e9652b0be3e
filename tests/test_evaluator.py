"""Test the eligibility evaluator and its built-in modifiers."""
from datetime import date, timedelta
from decimal import Decimal

import pytest

from rights.calculators.energy import ENERGY_RULES
from rights.calculators.parking import PARKING_RULES
from rights.calculators.vehicle import UK_DEALER, VEHICLE_RULES
from rights.calculators.warranty import WARRANTY_RULES
from rights.evaluator import (
    MISREPRESENTATION_REMEDY,
    MISREPRESENTATION_RIGHT,
    PRIVATE_SALE_WARNING,
    evaluate,
    select_tier,
)
from rights.models import EvidenceFlag, InputRecord, Jurisdiction
from rights.time_arithmetic import ElapsedTime

PURCHASE = date(2020, 1, 1)

TABLES = [VEHICLE_RULES, WARRANTY_RULES, PARKING_RULES, ENERGY_RULES]


def _record(jurisdiction=Jurisdiction.UK, category="dealer", days=0, **kwargs):
    return InputRecord(
        jurisdiction=jurisdiction,
        category=category,
        purchase_date=PURCHASE,
        event_date=PURCHASE + timedelta(days=days),
        **kwargs,
    )


def _record_for(key, days):
    jurisdiction, category = key
    return _record(jurisdiction, category or "dealer", days, subcategory="used")


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("table", TABLES, ids=lambda t: t.name)
def test_eligibility_never_improves_with_time(table):
    for key, entry in table.entries.items():
        seen_ineligible = False
        for days in range(0, 2600, 5):
            result = evaluate(_record_for(key, days), entry, table.modifiers)
            if seen_ineligible:
                assert not result.eligible, f"{table.name} {key} became eligible again at {days} days"
            seen_ineligible = seen_ineligible or not result.eligible


@pytest.mark.parametrize(
    "days,tier",
    [
        (0, "short_term_reject"),
        (30, "short_term_reject"),
        (31, "repair_first"),
        (180, "repair_first"),
        (181, "burden_on_buyer"),
        (2190, "burden_on_buyer"),
        (2191, "time_barred"),
    ],
)
def test_boundaries_belong_to_the_lower_tier(days, tier):
    assert evaluate(_record(days=days), UK_DEALER).tier == tier


@pytest.mark.parametrize("table", TABLES, ids=lambda t: t.name)
def test_evaluation_is_idempotent(table):
    for key, entry in table.entries.items():
        record = _record_for(key, 200)
        assert evaluate(record, entry, table.modifiers) == evaluate(record, entry, table.modifiers)


def test_negative_elapsed_is_clamped_to_day_zero():
    record = InputRecord(
        jurisdiction=Jurisdiction.UK,
        category="dealer",
        purchase_date=PURCHASE,
        event_date=PURCHASE - timedelta(days=5),
    )
    result = evaluate(record, UK_DEALER)
    assert result.elapsed_days == 0
    assert result.tier == "short_term_reject"


def test_as_of_used_when_no_event_date():
    record = InputRecord(jurisdiction=Jurisdiction.UK, category="dealer", purchase_date=PURCHASE)
    result = evaluate(record, UK_DEALER, as_of=PURCHASE + timedelta(days=45))
    assert result.elapsed_days == 45
    assert result.tier == "repair_first"


def test_select_tier_falls_through_to_open_tier():
    assert select_tier(UK_DEALER.tiers, ElapsedTime(10_000)).name == "time_barred"


# ---------------------------------------------------------------------------
# Bundle rendering
# ---------------------------------------------------------------------------

def test_window_label_counts_down():
    result = evaluate(_record(days=10), UK_DEALER)
    assert result.window_label == "20 days left in 30-day window to reject for full refund"


def test_evidence_variant_overrides_eligibility():
    plain = evaluate(_record(days=60), UK_DEALER)
    repaired = evaluate(_record(days=60, evidence=frozenset({EvidenceFlag.REPAIR_ATTEMPTED})), UK_DEALER)
    assert not plain.eligible
    assert repaired.eligible
    assert repaired.remedies[0] == "Final right to reject (refund minus usage deduction)"


def test_next_steps_use_counterparty_name():
    named = evaluate(_record(days=5, counterparty="Arnold Clark"), UK_DEALER)
    unnamed = evaluate(_record(days=5), UK_DEALER)
    assert "Write to Arnold Clark formally in writing" in named.next_steps
    assert "Write to the dealer formally in writing" in unnamed.next_steps


def test_citations_are_rendered_as_text():
    result = evaluate(_record(days=5), UK_DEALER)
    assert "Consumer Rights Act 2015 (s.22 short-term right to reject)" in result.citations


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("days", [5, 100, 1000, 3000])
def test_private_seller_has_misrepresentation_and_no_trader_rights(days):
    entry = VEHICLE_RULES.lookup(Jurisdiction.UK, "private")
    result = evaluate(_record(category="private", days=days), entry, VEHICLE_RULES.modifiers)
    assert not result.eligible
    assert MISREPRESENTATION_RIGHT.text in result.rights
    assert MISREPRESENTATION_REMEDY.text in result.remedies
    assert PRIVATE_SALE_WARNING in result.warnings


def test_private_seller_strips_trader_only_provisions():
    # A private sale evaluated against the dealer entry keeps only general provisions.
    result = evaluate(_record(category="private", days=10), UK_DEALER, VEHICLE_RULES.modifiers)
    assert "Full refund" not in result.remedies
    assert "Short-term right to reject - full refund available" not in result.rights
    assert not result.eligible


def test_card_protection_added_regardless_of_tier():
    for days in (10, 500, 2000):
        result = evaluate(_record(days=days, amount=Decimal("500")), UK_DEALER, VEHICLE_RULES.modifiers)
        assert (
            "If you paid by credit card: section 75 claim against your credit card provider"
            in result.remedies
        )
        assert "Consumer Credit Act 1974 (Section 75)" in result.citations


def test_card_protection_wording_when_paid_by_card():
    record = _record(
        days=10,
        amount=Decimal("500"),
        evidence=frozenset({EvidenceFlag.PAID_BY_CREDIT_CARD}),
    )
    result = evaluate(record, UK_DEALER, VEHICLE_RULES.modifiers)
    assert "Section 75 claim against your credit card provider" in result.remedies


@pytest.mark.parametrize("amount", [None, Decimal("99.99"), Decimal("30000.01")])
def test_card_protection_outside_range(amount):
    result = evaluate(_record(days=10, amount=amount), UK_DEALER, VEHICLE_RULES.modifiers)
    assert not any("credit card" in r for r in result.remedies)
    assert result.protections == ()


def test_card_protection_inclusive_range():
    for amount in (Decimal("100"), Decimal("30000")):
        result = evaluate(_record(days=10, amount=amount), UK_DEALER, VEHICLE_RULES.modifiers)
        assert result.protections[0].name == "Section 75 Protection"
