"""Test form validation messages and rejected inputs."""
from datetime import date, timedelta
from decimal import Decimal

import pytest

from rights.errors import InputValidationError
from rights.models import EvidenceFlag, Jurisdiction
from rights.schemas import (
    EnergyComplaintForm,
    ParkingAppealForm,
    VehicleRightsForm,
    WarrantyCheckForm,
)
from rights.validation import (
    validate_energy_form,
    validate_parking_form,
    validate_vehicle_form,
    validate_warranty_form,
)

TODAY = date(2026, 3, 3)
LAST_MONTH = TODAY - timedelta(days=30)


def _raises(fn, form, field, message=None):
    with pytest.raises(InputValidationError) as exc_info:
        fn(form, TODAY)
    assert exc_info.value.field == field
    if message is not None:
        assert exc_info.value.message == message


# ---------------------------------------------------------------------------
# Vehicle
# ---------------------------------------------------------------------------

def test_vehicle_required_fields_in_order():
    _raises(validate_vehicle_form, VehicleRightsForm(), "country", "Please select your country")
    _raises(
        validate_vehicle_form,
        VehicleRightsForm(country="uk"),
        "seller_type",
        "Please select where you bought the car",
    )
    _raises(
        validate_vehicle_form,
        VehicleRightsForm(country="uk", seller_type="dealer"),
        "purchase_date",
        "Please enter the purchase date",
    )


def test_vehicle_rejects_future_purchase():
    form = VehicleRightsForm(country="uk", seller_type="dealer", purchase_date=TODAY + timedelta(days=1))
    _raises(validate_vehicle_form, form, "purchase_date", "Purchase date cannot be in the future")


def test_vehicle_rejects_fault_before_purchase():
    form = VehicleRightsForm(
        country="uk",
        seller_type="dealer",
        purchase_date=LAST_MONTH,
        fault_date=LAST_MONTH - timedelta(days=1),
    )
    _raises(validate_vehicle_form, form, "fault_date")


def test_vehicle_rejects_negative_price():
    form = VehicleRightsForm(
        country="uk", seller_type="dealer", purchase_date=LAST_MONTH, purchase_price=Decimal("-1")
    )
    _raises(validate_vehicle_form, form, "purchase_price")


def test_vehicle_rejects_unsupported_country_and_values():
    _raises(
        validate_vehicle_form,
        VehicleRightsForm(country="au", seller_type="dealer", purchase_date=LAST_MONTH),
        "country",
    )
    _raises(
        validate_vehicle_form,
        VehicleRightsForm(country="mars", seller_type="dealer", purchase_date=LAST_MONTH),
        "country",
    )
    _raises(
        validate_vehicle_form,
        VehicleRightsForm(country="uk", seller_type="leasing", purchase_date=LAST_MONTH),
        "seller_type",
    )


def test_vehicle_record_carries_evidence_and_counterparty():
    form = VehicleRightsForm(
        country="UK",
        seller_type="dealer",
        purchase_date=LAST_MONTH,
        dealer_name="  Arnold Clark ",
        had_repairs=True,
        paid_by_credit_card=True,
        evidence=[EvidenceFlag.PHOTOS],
    )
    record = validate_vehicle_form(form, TODAY)
    assert record.jurisdiction == Jurisdiction.UK
    assert record.counterparty == "Arnold Clark"
    assert record.evidence == frozenset(
        {EvidenceFlag.PHOTOS, EvidenceFlag.REPAIR_ATTEMPTED, EvidenceFlag.PAID_BY_CREDIT_CARD}
    )
    assert record.subcategory == "used"


# ---------------------------------------------------------------------------
# Warranty
# ---------------------------------------------------------------------------

def test_warranty_required_fields():
    _raises(validate_warranty_form, WarrantyCheckForm(), "country", "Please select your country")
    _raises(
        validate_warranty_form,
        WarrantyCheckForm(country="uk"),
        "product_category",
        "Please select a product category",
    )
    _raises(
        validate_warranty_form,
        WarrantyCheckForm(country="uk", product_category="electronics"),
        "purchase_date",
        "Please enter the purchase date",
    )


def test_warranty_rejects_negative_months():
    form = WarrantyCheckForm(
        country="uk", product_category="electronics", purchase_date=LAST_MONTH, warranty_months=-3
    )
    _raises(validate_warranty_form, form, "warranty_months")


@pytest.mark.parametrize("field", ["warranty_months", "extended_months"])
def test_warranty_caps_months(field):
    base = dict(country="uk", product_category="electronics", purchase_date=LAST_MONTH)
    _raises(validate_warranty_form, WarrantyCheckForm(**base, **{field: 400000}), field)

    record = validate_warranty_form(WarrantyCheckForm(**base, **{field: 600}), TODAY)
    assert record.attribute(field) == "600"


def test_warranty_accepts_every_supported_country():
    for country in ("uk", "us", "eu", "au", "ca"):
        record = validate_warranty_form(
            WarrantyCheckForm(country=country, product_category="other", purchase_date=LAST_MONTH),
            TODAY,
        )
        assert record.jurisdiction.value == country
        assert record.attribute("warranty_months") == "0"


# ---------------------------------------------------------------------------
# Parking & energy
# ---------------------------------------------------------------------------

def test_parking_required_fields():
    _raises(validate_parking_form, ParkingAppealForm(), "ticket_type", "Please select the type of ticket")
    _raises(
        validate_parking_form,
        ParkingAppealForm(ticket_type="council"),
        "appeal_ground",
        "Please select your grounds for appeal",
    )
    _raises(
        validate_parking_form,
        ParkingAppealForm(ticket_type="council", appeal_ground="signage"),
        "ticket_date",
    )


def test_energy_required_fields():
    _raises(validate_energy_form, EnergyComplaintForm(), "supplier", "Please select your energy supplier")
    _raises(
        validate_energy_form,
        EnergyComplaintForm(supplier="SSE"),
        "issue_type",
        "Please select the type of issue",
    )
    _raises(
        validate_energy_form,
        EnergyComplaintForm(supplier="SSE", issue_type="estimate"),
        "energy_type",
        "Please select gas, electricity, or both",
    )


def test_energy_rejects_negative_amount():
    form = EnergyComplaintForm(
        supplier="SSE", issue_type="overcharge", energy_type="gas", amount_disputed=Decimal("-5")
    )
    _raises(validate_energy_form, form, "amount_disputed")
