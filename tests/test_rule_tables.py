"""Test rule table construction, lookup and coverage."""
from datetime import date

import pytest

from rights.calculators.energy import ENERGY_RULES, IssueType
from rights.calculators.parking import PARKING_RULES, TicketType
from rights.calculators.vehicle import VEHICLE_RULES, CarCondition, SellerType
from rights.calculators.warranty import STATUTORY_PERIODS, WARRANTY_RULES, ProductCategory
from rights.errors import ConfigurationError
from rights.models import InputRecord, Jurisdiction, general
from rights.rule_tables import RuleTable, RuleTableEntry, Tier
from rights.time_arithmetic import TimeWindow


def _tier(name, window):
    return Tier(name=name, window=window, eligible=False, rights=general("r"), remedies=general("m"))


def _entry(*tiers, jurisdiction=Jurisdiction.UK, category="dealer"):
    return RuleTableEntry(jurisdiction=jurisdiction, category=category, tiers=tiers)


# ---------------------------------------------------------------------------
# Entry validation
# ---------------------------------------------------------------------------

def test_entry_requires_tiers():
    with pytest.raises(ConfigurationError, match="no tiers"):
        _entry()


def test_entry_requires_open_ended_last_tier():
    with pytest.raises(ConfigurationError, match="open-ended"):
        _entry(_tier("a", TimeWindow.days(30)))


def test_entry_rejects_open_tier_before_last():
    with pytest.raises(ConfigurationError, match="must be last"):
        _entry(_tier("a", None), _tier("b", TimeWindow.days(30)), _tier("c", None))


def test_entry_rejects_overlapping_windows():
    with pytest.raises(ConfigurationError, match="strictly ascending"):
        _entry(_tier("a", TimeWindow.months(6)), _tier("b", TimeWindow.days(30)), _tier("c", None))


def test_entry_rejects_equal_windows_in_different_units():
    with pytest.raises(ConfigurationError, match="strictly ascending"):
        _entry(_tier("a", TimeWindow.days(30)), _tier("b", TimeWindow.months(1)), _tier("c", None))


# ---------------------------------------------------------------------------
# Table construction
# ---------------------------------------------------------------------------

def test_build_rejects_duplicate_entries():
    entry = _entry(_tier("a", None))
    with pytest.raises(ConfigurationError, match="duplicate"):
        RuleTable.build("t", [entry, entry], keyed_by={Jurisdiction.UK: "category"})


def test_build_rejects_unkeyed_jurisdiction():
    entry = _entry(_tier("a", None), jurisdiction=Jurisdiction.AU)
    with pytest.raises(ConfigurationError, match="not keyed"):
        RuleTable.build("t", [entry], keyed_by={Jurisdiction.UK: "category"})


def test_build_rejects_category_on_jurisdiction_wide_key():
    entry = _entry(_tier("a", None))
    with pytest.raises(ConfigurationError, match="does not match"):
        RuleTable.build("t", [entry], keyed_by={Jurisdiction.UK: None})


def test_lookup_unmapped_pair_is_configuration_error():
    with pytest.raises(ConfigurationError, match="no rule table entry"):
        VEHICLE_RULES.lookup(Jurisdiction.UK, "leasing")


def test_entry_for_unsupported_jurisdiction():
    record = InputRecord(jurisdiction=Jurisdiction.AU, category="dealer", purchase_date=date(2026, 1, 1))
    with pytest.raises(ConfigurationError, match="not supported"):
        VEHICLE_RULES.entry_for(record)


def test_entries_are_read_only():
    with pytest.raises(TypeError):
        VEHICLE_RULES.entries[(Jurisdiction.UK, "lease")] = None


# ---------------------------------------------------------------------------
# Total coverage
# ---------------------------------------------------------------------------

def test_vehicle_table_covers_every_supported_pair():
    for seller in SellerType:
        assert VEHICLE_RULES.lookup(Jurisdiction.UK, seller.value)
    for condition in CarCondition:
        assert VEHICLE_RULES.lookup(Jurisdiction.US, condition.value)
    assert VEHICLE_RULES.lookup(Jurisdiction.EU, None)
    assert len(VEHICLE_RULES.supported_pairs()) == 6


def test_vehicle_entry_for_uses_each_jurisdictions_key():
    uk = InputRecord(Jurisdiction.UK, "dealer", date(2026, 1, 1), subcategory="used")
    us = InputRecord(Jurisdiction.US, "dealer", date(2026, 1, 1), subcategory="new")
    eu = InputRecord(Jurisdiction.EU, "private", date(2026, 1, 1), subcategory="used")
    assert VEHICLE_RULES.entry_for(uk).category == "dealer"
    assert VEHICLE_RULES.entry_for(us).category == "new"
    assert VEHICLE_RULES.entry_for(eu).category is None


def test_warranty_table_covers_every_country_and_category():
    for jurisdiction in STATUTORY_PERIODS:
        for category in ProductCategory:
            assert WARRANTY_RULES.lookup(jurisdiction, category.value)
    assert len(WARRANTY_RULES.supported_pairs()) == len(STATUTORY_PERIODS) * len(ProductCategory)


def test_parking_and_energy_tables_cover_their_enums():
    for ticket in TicketType:
        assert PARKING_RULES.lookup(Jurisdiction.UK, ticket.value)
    for issue in IssueType:
        assert ENERGY_RULES.lookup(Jurisdiction.UK, issue.value)
