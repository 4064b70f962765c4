#!/usr/bin/env python3
"""Tests for driver, vehicle and document record classes."""

from fleet import Credential, Document, Driver, TrainingRecord, Vehicle


class TestDriver:
    """Tests for Driver class."""

    def test_name_joins_first_and_last(self):
        assert Driver("d1", "Ana", "Ruiz").name == "Ana Ruiz"

    def test_name_falls_back_to_id(self):
        assert Driver("d1").name == "d1"
        assert Driver("d1", first_name="Ana").name == "Ana"

    def test_defaults(self):
        driver = Driver("d1")
        assert isinstance(driver.credential, Credential)
        assert driver.credential.license_number is None
        assert driver.training == []
        assert driver.documents == []

    def test_profile_complete(self):
        assert Driver("d1", "Ana", "Ruiz", "ana@example.com").profile_complete
        assert not Driver("d1", "Ana", "Ruiz").profile_complete

    def test_get_training_case_insensitive(self):
        record = TrainingRecord("Defensive Driving", "2023-01-01", "2024-01-01")
        driver = Driver("d1", training=[record])
        assert driver.get_training("defensive driving") is record
        assert driver.get_training("Hazmat") is None


class TestVehicle:
    """Tests for Vehicle class."""

    def test_explicit_name(self):
        assert Vehicle("v1", "Ford", "F-550", 2019, name="Truck 1").name == "Truck 1"

    def test_name_from_year_make_model(self):
        assert Vehicle("v1", "Ford", "F-550", 2019).name == "2019 Ford F-550"
        assert Vehicle("v1", make="Ford").name == "Ford"

    def test_name_falls_back_to_id(self):
        assert Vehicle("v1").name == "v1"

    def test_readings_default_to_none(self):
        vehicle = Vehicle("v1")
        assert vehicle.current_mileage is None
        assert vehicle.current_engine_hours is None
        assert vehicle.documents == []


class TestDocument:
    def test_fields(self):
        doc = Document("Registration", "2024-06-30", "files/reg.pdf")
        assert doc.document_type == "Registration"
        assert doc.expiry_date == "2024-06-30"
        assert doc.file_ref == "files/reg.pdf"
        assert doc.notes is None
