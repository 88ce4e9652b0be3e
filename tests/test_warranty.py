"""Test the warranty checker."""
from datetime import date, timedelta
from decimal import Decimal

from rights.schemas import WarrantyCheckForm
from rights.service import warranty_check

TODAY = date(2026, 3, 3)


def _form(days_ago, **kwargs):
    defaults = dict(
        country="uk",
        product_category="electronics",
        purchase_date=TODAY - timedelta(days=days_ago),
    )
    defaults.update(kwargs)
    return WarrantyCheckForm(**defaults)


def test_manufacturer_warranty_first():
    purchase = TODAY - timedelta(days=100)
    result = warranty_check(_form(100), today=TODAY)
    assert result.eligible
    assert result.claim_type == "Manufacturer Warranty"
    assert [p.name for p in result.protections] == ["Manufacturer Warranty", "Consumer Rights Act 2015"]
    assert all(p.active for p in result.protections)
    assert result.protections[0].expires == purchase + timedelta(days=360)


def test_statutory_rights_after_manufacturer_warranty():
    result = warranty_check(_form(400), today=TODAY)
    assert result.eligible
    assert result.claim_type == "Statutory Rights"
    assert result.protections[0].active is False
    assert "After 6 months, you may need to prove the fault was inherent (not caused by misuse)" in result.rights


def test_burden_on_retailer_within_six_months():
    result = warranty_check(_form(100, warranty_months=3), today=TODAY)
    assert result.claim_type == "Statutory Rights"
    assert "Within 6 months, the retailer must prove the fault wasn't present at purchase" in result.rights


def test_extended_warranty_between_manufacturer_and_statutory():
    result = warranty_check(_form(500, warranty_months=12, extended_months=24), today=TODAY)
    assert result.claim_type == "Extended Warranty"
    assert [p.name for p in result.protections][:2] == ["Manufacturer Warranty", "Extended Warranty"]


def test_everything_expired():
    result = warranty_check(_form(800, country="eu"), today=TODAY)
    assert not result.eligible
    assert result.claim_type == "No active protection"
    assert result.window_label == "Protection may have expired"
    assert "Goodwill claim with the retailer or manufacturer" in result.remedies


def test_category_default_warranty_length():
    # Appliances default to a 24-month manufacturer warranty.
    result = warranty_check(_form(500, product_category="appliances"), today=TODAY)
    assert result.claim_type == "Manufacturer Warranty"


def test_card_protection_row_and_advice():
    result = warranty_check(_form(400, product_price=Decimal("500")), today=TODAY)
    names = [p.name for p in result.protections]
    assert "Section 75 Protection" in names
    assert "Paid by credit card? You may be able to claim under Section 75" in result.rights
    assert "If you paid by credit card: section 75 claim against your credit card provider" in result.remedies


def test_us_card_advice_mentions_dispute_process():
    result = warranty_check(_form(400, country="us", product_price=Decimal("500")), today=TODAY)
    assert "Paid by credit card? You may be able to claim under your credit card's dispute process" in result.rights


def test_window_label_names_best_route():
    result = warranty_check(_form(100), today=TODAY)
    assert result.window_label == "Best claim route: Manufacturer Warranty - next protection ends in 260 days"


def test_retailer_named_in_next_steps():
    result = warranty_check(_form(100, retailer_name="Currys"), today=TODAY)
    assert "Contact Currys in writing and describe the fault" in result.next_steps
