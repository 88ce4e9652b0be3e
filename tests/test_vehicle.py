"""Test the vehicle purchase calculator end to end (form -> result)."""
from datetime import date, timedelta
from decimal import Decimal

from rights.schemas import VehicleRightsForm
from rights.service import vehicle_rights

TODAY = date(2026, 3, 3)


def _form(days_ago, **kwargs):
    defaults = dict(country="uk", seller_type="dealer", purchase_date=TODAY - timedelta(days=days_ago))
    defaults.update(kwargs)
    return VehicleRightsForm(**defaults)


def test_uk_dealer_within_thirty_days_can_reject():
    result = vehicle_rights(_form(10), today=TODAY)
    assert result.eligible
    assert result.remedies[0] == "Full refund"
    assert result.window_label == "20 days left in 30-day window to reject for full refund"


def test_uk_dealer_after_six_months_puts_burden_on_buyer():
    result = vehicle_rights(_form(200), today=TODAY)
    assert not result.eligible
    assert result.tier == "burden_on_buyer"
    assert result.remedies[0] == "Request repair at the dealer's cost first"
    assert any("burden of proof" in right for right in result.rights)
    assert any("independent inspection" in warning for warning in result.warnings)


def test_uk_dealer_repair_first_window():
    result = vehicle_rights(_form(90), today=TODAY)
    assert not result.eligible
    assert result.remedies == ("Request repair/replacement first", "If repair fails, can then reject")

    repaired = vehicle_rights(_form(90, had_repairs=True), today=TODAY)
    assert repaired.eligible


def test_uk_private_seller_only_misrepresentation():
    result = vehicle_rights(_form(10, seller_type="private"), today=TODAY)
    assert not result.eligible
    assert "May have a claim for misrepresentation if the seller lied" in result.rights
    assert "Claim for misrepresentation if the seller lied" in result.remedies
    assert "Private sales have much weaker protection than dealer sales" in result.warnings
    assert result.next_steps[-1] == "If no response, consider small claims court"


def test_uk_dealer_next_steps_escalate_to_motor_ombudsman():
    result = vehicle_rights(_form(10, dealer_name="Arnold Clark"), today=TODAY)
    assert result.next_steps[2] == "Write to Arnold Clark formally in writing"
    assert result.next_steps[-1] == "If no response, escalate to Motor Ombudsman or court"


def test_fault_date_measures_elapsed_time():
    result = vehicle_rights(
        _form(300, fault_date=TODAY - timedelta(days=290)),
        today=TODAY,
    )
    assert result.elapsed_days == 10
    assert result.eligible


def test_uk_auction():
    result = vehicle_rights(_form(10, seller_type="auction"), today=TODAY)
    assert result.window_label == "Varies - check auction terms"
    assert not result.eligible


def test_us_new_car_lemon_law():
    result = vehicle_rights(_form(100, country="us", car_condition="new"), today=TODAY)
    assert result.tier == "lemon_law_window"
    assert "State lemon law may apply (varies by state)" in result.rights
    assert any("Lemon laws vary significantly by state" in w for w in result.warnings)


def test_us_defaults_to_used_car_rules():
    result = vehicle_rights(_form(100, country="us"), today=TODAY)
    assert result.tier == "state_law"
    assert result.window_label == "Varies by state"


def test_eu_legal_guarantee_tiers():
    assert vehicle_rights(_form(100, country="eu"), today=TODAY).eligible
    later = vehicle_rights(_form(400, country="eu"), today=TODAY)
    assert not later.eligible
    assert later.window_label == "2-year legal guarantee"
    expired = vehicle_rights(_form(800, country="eu"), today=TODAY)
    assert expired.window_label == "Guarantee expired"


def test_section_75_remedy_for_card_purchase():
    result = vehicle_rights(
        _form(200, purchase_price=Decimal("8000"), paid_by_credit_card=True),
        today=TODAY,
    )
    assert "Section 75 claim against your credit card provider" in result.remedies
    assert result.protections[0].name == "Section 75 Protection"
    assert result.protections[0].active
