#!/usr/bin/env python3
"""Tests for the expiry classifier."""
from datetime import date, datetime, timedelta

import pytest

from fleet import ExpirationTier, ExpiryStatus, ValidationError, classify, days_until
from fleet.expiry import expiration_tier

NOW = date(2024, 1, 20)


class TestClassify:
    """Tests for classify."""

    def test_missing(self):
        """No date on file is MISSING, not an error."""
        assert classify(None, NOW) == ExpiryStatus.MISSING
        assert classify("", NOW) == ExpiryStatus.MISSING

    def test_expired(self):
        """Any date strictly before now is EXPIRED."""
        assert classify(NOW - timedelta(days=1), NOW) == ExpiryStatus.EXPIRED
        assert classify("2020-01-01", NOW) == ExpiryStatus.EXPIRED

    def test_valid_beyond_window(self):
        """More than window days ahead is VALID."""
        for days in (31, 60, 365):
            assert classify(NOW + timedelta(days=days), NOW) == ExpiryStatus.VALID

    def test_expiring_today_is_expiring_soon(self):
        """A record expiring today is still usable today."""
        assert classify(NOW, NOW) == ExpiryStatus.EXPIRING_SOON

    def test_window_boundary_is_expiring_soon(self):
        """Exactly window days ahead is inside the window."""
        assert classify(NOW + timedelta(days=30), NOW) == ExpiryStatus.EXPIRING_SOON
        assert classify(NOW + timedelta(days=31), NOW) == ExpiryStatus.VALID

    def test_license_scenario(self):
        """License expiring 2024-02-15 seen on 2024-01-20: 26 days out."""
        assert classify("2024-02-15", "2024-01-20") == ExpiryStatus.EXPIRING_SOON

    def test_malformed_timestamp_raises(self):
        with pytest.raises(ValidationError):
            classify("2024-02-15Tjunk", "2024-01-20")

    def test_custom_window(self):
        """The 90-day upcoming tier uses the same function."""
        target = NOW + timedelta(days=75)
        assert classify(target, NOW) == ExpiryStatus.VALID
        assert classify(target, NOW, warning_window_days=90) == ExpiryStatus.EXPIRING_SOON

    def test_zero_window(self):
        """With no window, only today counts as expiring soon."""
        assert classify(NOW, NOW, 0) == ExpiryStatus.EXPIRING_SOON
        assert classify(NOW + timedelta(days=1), NOW, 0) == ExpiryStatus.VALID

    def test_now_as_datetime(self):
        """A datetime 'now' compares by day."""
        assert classify(NOW, datetime(2024, 1, 20, 23, 59)) == ExpiryStatus.EXPIRING_SOON

    def test_deterministic(self):
        assert classify("2024-02-15", NOW) == classify("2024-02-15", NOW)

    def test_malformed_target_raises(self):
        with pytest.raises(ValidationError):
            classify("15/02/2024", NOW)

    def test_malformed_now_raises(self):
        with pytest.raises(ValidationError):
            classify("2024-02-15", "yesterday")

    def test_negative_window_raises(self):
        with pytest.raises(ValidationError):
            classify("2024-02-15", NOW, -1)

    def test_non_integer_window_raises(self):
        with pytest.raises(ValidationError):
            classify("2024-02-15", NOW, 7.5)


class TestDaysUntil:
    def test_future_and_past(self):
        assert days_until("2024-02-15", NOW) == 26
        assert days_until("2024-01-13", NOW) == -7
        assert days_until(NOW, NOW) == 0


class TestExpirationTier:
    """Tests for dashboard tiers."""

    def test_overdue(self):
        assert expiration_tier(-1) == ExpirationTier.OVERDUE

    def test_tier_boundaries(self):
        assert expiration_tier(0) == ExpirationTier.EXPIRING_30
        assert expiration_tier(30) == ExpirationTier.EXPIRING_30
        assert expiration_tier(31) == ExpirationTier.EXPIRING_60
        assert expiration_tier(60) == ExpirationTier.EXPIRING_60
        assert expiration_tier(61) == ExpirationTier.EXPIRING_90
        assert expiration_tier(90) == ExpirationTier.EXPIRING_90
