"""Command line quote for a single trip.

Usage patterns:

1. Price a trip with all car categories of the default tier:
   zakolik --km 25 --begin "2025-06-06 16:30" --end "2025-06-06 19:00"

2. Restrict categories, pick a tier and write an HTML report:
   zakolik --tier Business --category Legend --category Fancy --km 120 --html
"""
import argparse
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Sequence

from zakolik.config import settings
from zakolik.exceptions import ZakolikError
from zakolik.logging_config import setup_logging
from zakolik.models import CarCategory, PricingTier, TripRequest
from zakolik.pricing.provider import Car4way
from zakolik.report import format_html, format_text

DATETIME_FORMATS = ["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%d.%m.%Y %H:%M"]


def parse_datetime(value: str, formats: list[str] | None = None) -> datetime:
    if formats is None:
        formats = DATETIME_FORMATS
    for datetime_format in formats:
        try:
            return datetime.strptime(value.strip(), datetime_format)
        except ValueError:
            continue
    raise ValueError(f"Date string '{value}' not in formats {formats}")


def default_trip_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Start in the next five minutes (rounded up), end one hour later."""
    now = now or datetime.now()
    rounded = now.replace(second=0, microsecond=0)
    if rounded < now:
        rounded += timedelta(minutes=1)
    rounded += timedelta(minutes=-rounded.minute % 5)
    return rounded, rounded + timedelta(hours=1)


def run_quote(
        tier: PricingTier,
        categories: Sequence[CarCategory],
        trip: TripRequest,
        html: bool = False,
        output_html: Path | None = None,
) -> str:
    provider = Car4way(tier=tier, car_categories=tuple(categories))
    logging.info(f"Pricing {trip.km:g} km from {trip.begin} to {trip.end} with {provider.name} {tier}")
    result = provider.calculate(trip)
    summary = format_text(provider, trip, result)

    if html:
        output_html = output_html or settings.output_html
        output_html.write_text(format_html(provider, trip, result), encoding="utf-8")
        logging.info(f"Output written to {output_html}")

    return summary


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Car4way trip price calculator")
    p.add_argument("--tier", choices=[t.value for t in PricingTier], default=settings.default_tier)
    p.add_argument("--category", action="append", choices=[c.machine_name for c in CarCategory],
                   help="Allowed car category, repeatable (default: all)")
    p.add_argument("--km", type=float, default=settings.default_km, help="Trip distance in km")
    p.add_argument("--begin", help="Trip start, e.g. 2025-06-06T16:30 or 06.06.2025 16:30")
    p.add_argument("--end", help="Trip end, same formats as --begin")
    p.add_argument("--html", action="store_true", help=f"Also write an HTML report to {settings.output_html}")
    p.add_argument("--log-level", default=settings.log_level)
    return p


def main_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        if args.km < 0:
            raise ValueError("Distance has to be non-negative")
        begin, end = default_trip_window()
        if args.begin:
            begin = parse_datetime(args.begin)
            end = begin + timedelta(hours=1)
        if args.end:
            end = parse_datetime(args.end)
        categories = [CarCategory.from_name(c) for c in args.category] if args.category else list(CarCategory)
        summary = run_quote(
            tier=PricingTier(args.tier),
            categories=categories,
            trip=TripRequest(km=args.km, begin=begin, end=end),
            html=args.html,
        )
    except (ZakolikError, ValueError):
        logging.exception("Quote failed")
        return 1
    print(summary)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main_cli())
