"""Fixtures for tariff and calculator tests."""
from __future__ import annotations

from datetime import datetime, time, timedelta

import pytest

from zakolik.models import (
    CarCategory,
    Package,
    PerCarTariff,
    PerMinuteRate,
    PricingTier,
    Tariff,
    TripRequest,
)
from zakolik.tariffs.parser import CATEGORY_COLUMNS, LABEL_COLUMN

HEADER = '\t'.join([LABEL_COLUMN, *CATEGORY_COLUMNS])

VALID_ROWS = [
    'Denní: 6:00 - 20:00 Po-Ne\t6,90\t7,90\t9,90',
    'Noční: 20:00 - 6:00 Po-Ne\t3,90\t4,90\t5,90',
    'Výhodné balíčky\t\t\t',
    '3 hodiny + 50 km\t590\t690\t890',
    '2 dny + 300 km\t2 290\t2 790\t3 490',
    'Víkend + 200 km\t1 990\t2 390\t2 990',
    'Km nad rámec balíčků\t5,90\t\t',
    'Letiště Praha - příjezd\t150\t\t',
    'Letiště Praha - výjezd\t\t\t120',
]


def make_table(rows: list[str]) -> str:
    """Build a tab separated tariff table with the standard header."""
    return '\n'.join([HEADER, *rows]) + '\n'


def make_tariff(
    day: float = 2.0,
    night: float = 1.0,
    per_km: float = 5.0,
    packages: tuple[Package, ...] = (),
) -> Tariff:
    """Tariff with identical prices for every car category."""
    per_car = PerCarTariff(
        per_minute=(
            PerMinuteRate(start=time(6, 0), end=time(20, 0), per_minute_price=day),
            PerMinuteRate(start=time(20, 0), end=time(6, 0), per_minute_price=night),
        ),
        packages=packages,
    )
    return Tariff(
        tier=PricingTier.BASIC,
        per_category={category: per_car for category in CarCategory},
        per_km_price=per_km,
        airport_entry_price=150.0,
        airport_exit_price=150.0,
    )


def make_trip(km: float, begin: str, end: str) -> TripRequest:
    return TripRequest(
        km=km,
        begin=datetime.fromisoformat(begin),
        end=datetime.fromisoformat(end),
    )


@pytest.fixture
def valid_table() -> str:
    return make_table(VALID_ROWS)


@pytest.fixture
def fixture_tariff() -> Tariff:
    """Day 2.00/min 06:00-20:00, night 1.00/min 20:00-06:00, 5.00 per km, no packages."""
    return make_tariff()


@pytest.fixture
def hour_package() -> Package:
    return Package(name='1 hodina + 20 km', duration=timedelta(hours=1), kilometers=20.0, price=300.0)


@pytest.fixture(scope='session')
def catalog():
    from zakolik.tariffs.catalog import TariffCatalog

    return TariffCatalog.load()


@pytest.fixture
def basic_tariff(catalog) -> Tariff:
    return catalog[PricingTier.BASIC]
