"""Tests for the Car4way provider selection."""

from __future__ import annotations

import pytest

from conftest import make_trip
from zakolik.models import CarCategory, PricingTier
from zakolik.pricing.calculator import calculate
from zakolik.pricing.provider import Car4way


def test_defaults():
    provider = Car4way()
    assert provider.name == 'car4way'
    assert provider.tier is PricingTier.BASIC
    assert provider.car_categories == tuple(CarCategory)


def test_categories_are_kept_in_canonical_order():
    provider = Car4way(car_categories=(CarCategory.BOSS, CarCategory.LEGEND))
    assert provider.car_categories == (CarCategory.LEGEND, CarCategory.BOSS)


def test_toggle():
    provider = Car4way()
    provider.toggle(CarCategory.FANCY, False)
    assert provider.car_categories == (CarCategory.LEGEND, CarCategory.BOSS)
    provider.toggle(CarCategory.FANCY, True)
    assert provider.car_categories == tuple(CarCategory)


def test_calculate_uses_tier(catalog):
    trip = make_trip(35, '2025-06-06T17:10', '2025-06-06T21:40')
    provider = Car4way(tier=PricingTier.BUSINESS, car_categories=(CarCategory.BOSS,))
    result = provider.calculate(trip, catalog)
    expected = calculate(catalog[PricingTier.BUSINESS], [CarCategory.BOSS], trip)
    assert result.price == expected.price
    assert result.breakdown == expected.breakdown


def test_calculate_with_process_catalog():
    trip = make_trip(0, '2025-06-03T09:00', '2025-06-03T09:30')
    assert Car4way(car_categories=(CarCategory.LEGEND,)).calculate(trip).price == pytest.approx(207.0)


def test_nothing_selected():
    provider = Car4way()
    for category in CarCategory:
        provider.toggle(category, False)
    with pytest.raises(ValueError):
        provider.calculate(make_trip(0, '2025-06-03T09:00', '2025-06-03T09:30'))
