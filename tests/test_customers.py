"""Tests for models/customers.py: snapshot parsing, loading, caching."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from wasteops_pricing.errors import ConfigurationError
from wasteops_pricing.models.customers import (
    CustomerCache,
    CustomerRecord,
    load_customers,
    map_customer_type,
    map_service_status,
    map_unit_type,
    parse_address,
    parse_monetary_value,
)

SAMPLE_DATA = Path(__file__).parent.parent / "data" / "geocoded_customers.json"


# ═══════════════════════════════════════════════════════════════════════════
# Normalisation helpers
# ═══════════════════════════════════════════════════════════════════════════

class TestHelpers:

    @pytest.mark.parametrize("raw, expected", [
        ("$1,234.50", 1234.5),
        ("32", 32.0),
        (45, 45.0),
        ("", 0.0),
        (None, 0.0),
        ("n/a", 0.0),
    ])
    def test_monetary(self, raw, expected):
        assert parse_monetary_value(raw) == expected

    def test_address(self):
        assert parse_address("4100 Willow Creek Dr Fairfax VA 22030") == ("Fairfax", "VA", "22030")
        assert parse_address("1 Main St Vienna VA 22182-1234") == ("Vienna", "VA", "22182-1234")

    @pytest.mark.parametrize("raw", ["", "no state or zip here", "Fairfax va 22030"])
    def test_address_no_match(self, raw):
        assert parse_address(raw) == (None, None, None)

    def test_customer_type(self):
        assert map_customer_type("subscription") == "SUBSCRIPTION"
        assert map_customer_type("Commercial") == "COMMERCIAL"
        assert map_customer_type("something else") == "HOA"
        assert map_customer_type(None) == "HOA"

    @pytest.mark.parametrize("raw, expected", [
        ("Townhome", "TOWNHOMES"),
        ("single-family", "SINGLE_FAMILY_HOMES"),
        ("Condos", "CONDOS"),
        ("Apartments", "MIXED_RESIDENTIAL"),
        ("Gas Station", "COMMERCIAL"),
        ("", "SINGLE_FAMILY_HOMES"),
    ])
    def test_unit_type(self, raw, expected):
        assert map_unit_type(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("Active", "SERVICED"),
        ("pending", "PENDING"),
        ("Cancelled", "CANCELLED"),
        ("inactive", "CANCELLED"),
        (None, "SERVICED"),
    ])
    def test_service_status(self, raw, expected):
        assert map_service_status(raw) == expected


# ═══════════════════════════════════════════════════════════════════════════
# Record model
# ═══════════════════════════════════════════════════════════════════════════

class TestCustomerRecord:

    def test_export_format(self):
        record = CustomerRecord.model_validate({
            "HOA Name": "Willow Creek HOA",
            "Full Address": "4100 Willow Creek Dr Fairfax VA 22030",
            "latitude": "38.8462",
            "longitude": "-77.3064",
            "Type": "HOA",
            "Monthly Revenue": "$4,812.00",
            "Number of Units": "130",
            "Average Completion Time in Minutes": "95",
            "Service Status": "Serviced",
            "Unit Type": "Single Family",
        })
        assert record.latitude == pytest.approx(38.8462)
        assert record.monthly_revenue == 4812.0
        assert record.number_of_units == 130
        assert record.avg_completion_minutes == 95
        assert record.unit_type == "SINGLE_FAMILY_HOMES"
        assert record.is_active
        assert record.has_coordinates
        assert record.city_state_zip == ("Fairfax", "VA", "22030")

    def test_blank_values(self):
        record = CustomerRecord.model_validate({
            "HOA Name": "",
            "latitude": "",
            "longitude": "not a number",
            "Number of Units": "",
        })
        assert record.hoa_name == "Unknown"
        assert record.latitude is None
        assert record.longitude is None
        assert record.number_of_units is None
        assert not record.has_coordinates

    @pytest.mark.parametrize("raw_type", [None, ""])
    def test_missing_type_defaults_to_hoa(self, raw_type):
        record = CustomerRecord.model_validate({"HOA Name": "X", "Type": raw_type})
        assert record.type == "HOA"
        assert record.customer_type == "HOA"

    def test_customer_type_normalised(self):
        record = CustomerRecord.model_validate({"HOA Name": "X", "Type": "Subscription"})
        assert record.type == "Subscription"
        assert record.customer_type == "SUBSCRIPTION"

    def test_inactive_status(self):
        record = CustomerRecord.model_validate({"HOA Name": "X", "Service Status": "Cancelled"})
        assert not record.is_active

    def test_frozen(self):
        record = CustomerRecord.model_validate({"HOA Name": "X"})
        with pytest.raises(ValueError):
            record.hoa_name = "Y"


# ═══════════════════════════════════════════════════════════════════════════
# Loading
# ═══════════════════════════════════════════════════════════════════════════

class TestLoadCustomers:

    def test_loads_fixture_file(self, customers_file):
        customers = load_customers(customers_file)
        assert [c.hoa_name for c in customers] == ["Willow Creek HOA", "R. Chen"]
        assert customers[0].has_coordinates
        assert not customers[1].has_coordinates

    def test_sample_data_ships_with_repo(self):
        customers = load_customers(SAMPLE_DATA)
        assert len(customers) == 10
        assert sum(c.has_coordinates for c in customers) == 9

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_customers(tmp_path / "missing.json")
        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_null_type_does_not_reject_file(self, tmp_path):
        path = tmp_path / "null_type.json"
        path.write_text(json.dumps([
            {"HOA Name": "Typed", "latitude": 1, "longitude": 2, "Type": "Commercial"},
            {"HOA Name": "Untyped", "latitude": 1, "longitude": 2, "Type": None},
        ]))
        customers = load_customers(path)
        assert [c.customer_type for c in customers] == ["COMMERCIAL", "HOA"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")
        with pytest.raises(ConfigurationError):
            load_customers(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text(json.dumps({"HOA Name": "X"}))
        with pytest.raises(ConfigurationError):
            load_customers(path)


class TestCustomerCache:

    def test_reuses_snapshot(self, customers_file):
        cache = CustomerCache(customers_file)
        assert cache.get() is cache.get()

    def test_reloads_when_file_changes(self, customers_file):
        cache = CustomerCache(customers_file)
        assert len(cache.get()) == 2

        customers_file.write_text(json.dumps([{"HOA Name": "Only One", "latitude": 1, "longitude": 2}]))
        stat = customers_file.stat()
        os.utime(customers_file, (stat.st_atime, stat.st_mtime + 10))
        assert [c.hoa_name for c in cache.get()] == ["Only One"]

    def test_clear(self, customers_file):
        cache = CustomerCache(customers_file)
        first = cache.get()
        cache.clear()
        assert cache.get() is not first

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            CustomerCache(tmp_path / "missing.json").get()
