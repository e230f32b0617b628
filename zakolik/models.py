from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class PricingTier(Enum):
    """Car4way rate plans, each with its own tariff table."""
    BASIC = 'Basic'
    ACTIVE = 'Active'
    BUSINESS = 'Business'

    def __str__(self) -> str:
        return self.value


class CarCategory(Enum):
    """Vehicle classes in canonical (declaration) order.

    The order is used for deterministic iteration and tie-breaking between equal prices.
    """
    LEGEND = ('Legend', 'Legend (Fabia)')
    FANCY = ('Fancy', 'Fancy (Scala, Karoq, Octavia, Caddy Van)')
    BOSS = ('Boss', 'Boss (Superb / Kodiaq)')

    def __init__(self, machine_name: str, display_name: str):
        self.machine_name = machine_name
        self.display_name = display_name

    @classmethod
    def from_name(cls, name: str) -> 'CarCategory':
        for category in cls:
            if category.machine_name.lower() == name.lower():
                return category
        raise ValueError(f"Unknown car category: {name}")

    @classmethod
    def ordered(cls, categories) -> tuple['CarCategory', ...]:
        selected = set(categories)
        for item in selected:
            if not isinstance(item, cls):
                raise TypeError(f"Expected CarCategory, got {item!r}")
        return tuple(c for c in cls if c in selected)

    def __str__(self) -> str:
        return self.machine_name


@dataclass(frozen=True, slots=True)
class PerMinuteRate:
    """Price per minute within the half-open time-of-day window [start, end).

    A window with start >= end wraps over midnight.
    """
    start: time
    end: time
    per_minute_price: float

    def contains(self, moment: time) -> bool:
        if self.start < self.end:
            return self.start <= moment < self.end
        return moment >= self.start or moment < self.end

    def window_end_after(self, cursor: datetime) -> datetime:
        """First moment after ``cursor`` at which this window closes."""
        boundary = datetime.combine(cursor.date(), self.end)
        if cursor.time() >= self.end:
            boundary += timedelta(days=1)
        return boundary

    def label(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


@dataclass(frozen=True, slots=True)
class WeekdayTime:
    """weekday uses Python numbering (Mon=0, Sun=6)."""
    weekday: int
    time: time


@dataclass(frozen=True, slots=True)
class TimeRestriction:
    start: WeekdayTime
    end: WeekdayTime


@dataclass(frozen=True, slots=True)
class Package:
    name: str
    duration: timedelta
    kilometers: float
    price: float
    time_restriction: TimeRestriction | None = None


@dataclass(frozen=True, slots=True)
class PerCarTariff:
    per_minute: tuple[PerMinuteRate, ...]
    packages: tuple[Package, ...]


@dataclass(frozen=True, slots=True)
class Tariff:
    tier: PricingTier
    per_category: Mapping[CarCategory, PerCarTariff] = field(hash=False)
    per_km_price: float
    airport_entry_price: float
    airport_exit_price: float

    def __post_init__(self):
        ordered = {c: self.per_category[c] for c in CarCategory if c in self.per_category}
        object.__setattr__(self, 'per_category', MappingProxyType(ordered))

    def for_category(self, category: CarCategory) -> PerCarTariff:
        return self.per_category[category]


@dataclass(frozen=True, slots=True)
class TripRequest:
    """Distance and naive local start/end of a trip to be priced."""
    km: float
    begin: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.begin


@dataclass(frozen=True, slots=True, order=True)
class CalculationResult:
    """Total price in CZK with the ordered list of price components applied.

    Ordering and equality look at the price only.
    """
    price: float
    breakdown: tuple[str, ...] = field(default=(), compare=False)

    @property
    def breakdown_text(self) -> str:
        return ', '.join(self.breakdown)

    def __str__(self) -> str:
        return f"{self.price:.2f} CZK ({self.breakdown_text})"
