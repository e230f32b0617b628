"""Cheapest way to cover a trip with a Car4way tariff.

For every eligible car category and every package option (each package, then no package)
the trip is simulated: the package, if any, consumes its duration and distance first, the
rest of the time is charged per minute window by window and the remaining distance is
charged per km. The cheapest option wins; ties keep the first one in enumeration order.
"""

import logging
from datetime import datetime
from typing import Iterable

from ..exceptions import RateCoverageError
from ..models import (
    CalculationResult,
    CarCategory,
    Package,
    PerMinuteRate,
    Tariff,
    TripRequest,
)

logger = logging.getLogger(__name__)


def _rate_at(rates: Iterable[PerMinuteRate], cursor: datetime) -> PerMinuteRate:
    matching = [rate for rate in rates if rate.contains(cursor.time())]
    if len(matching) != 1:
        raise RateCoverageError(f"{len(matching)} per-minute rates match {cursor.time():%H:%M:%S}")
    return matching[0]


def calculate_for_package(tariff: Tariff, category: CarCategory, package: Package | None,
                          trip: TripRequest) -> CalculationResult:
    cursor = trip.begin
    remaining_km = trip.km
    price = 0.0
    breakdown = [category.display_name]

    # TODO: apply package.time_restriction once the weekend package validity window is enforced.
    if package is not None:
        cursor += package.duration
        remaining_km = max(remaining_km - package.kilometers, 0.0)
        price += package.price
        breakdown.append(package.name)

    rates = tariff.for_category(category).per_minute
    while cursor < trip.end:
        rate = _rate_at(rates, cursor)
        segment_end = min(rate.window_end_after(cursor), trip.end)
        minutes = (segment_end - cursor).total_seconds() / 60
        price += minutes * rate.per_minute_price
        breakdown.append(f"per-minute {rate.label()} ({minutes:.10g} min)")
        cursor = segment_end

    # Degenerate trips (end <= begin) consume nothing beyond the package.
    if remaining_km > 0 and trip.end > trip.begin:
        price += remaining_km * tariff.per_km_price
        breakdown.append(f"extra distance {remaining_km:.10g} km")

    # TODO: add tariff.airport_entry_price / airport_exit_price once trips carry airport stops.
    return CalculationResult(price=price, breakdown=tuple(breakdown))


def calculate_for_car(tariff: Tariff, category: CarCategory, trip: TripRequest) -> CalculationResult:
    options: list[Package | None] = [*tariff.for_category(category).packages, None]
    best = None
    for option in options:
        result = calculate_for_package(tariff, category, option, trip)
        logger.debug('%s / %s: %.2f', category, option.name if option else 'no package', result.price)
        if best is None or result < best:
            best = result
    return best


def calculate(tariff: Tariff, eligible_categories: Iterable[CarCategory], trip: TripRequest) -> CalculationResult:
    """Cheapest result over the eligible categories, iterated in canonical order."""
    categories = CarCategory.ordered(eligible_categories)
    if not categories:
        raise ValueError("At least one car category has to be selected")
    best = None
    for category in categories:
        result = calculate_for_car(tariff, category, trip)
        if best is None or result < best:
            best = result
    return best
