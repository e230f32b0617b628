"""Rendering of a price quote as plain text or HTML."""

from datetime import datetime
from pathlib import Path

from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import CalculationResult, TripRequest
from .pricing.provider import Car4way

TEMPLATES_DIR = Path(__file__).resolve().parent / 'templates'


def format_duration(trip: TripRequest) -> str:
    total_minutes = max(int(trip.duration.total_seconds() // 60), 0)
    days, rest = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(rest, 60)
    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes or not parts:
        parts.append(f"{minutes}m")
    return ' '.join(parts)


def format_text(provider: Car4way, trip: TripRequest, result: CalculationResult) -> str:
    categories = ', '.join(str(c) for c in provider.car_categories)
    return '\n'.join([
        f"Provider: {provider.name} ({provider.tier}; {categories})",
        f"Trip: {trip.km:g} km, {trip.begin:%Y-%m-%d %H:%M} -> {trip.end:%Y-%m-%d %H:%M} ({format_duration(trip)})",
        f"Result: {result}",
    ])


def format_html(provider: Car4way, trip: TripRequest, result: CalculationResult) -> str:
    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=select_autoescape(['html', 'xml']))
    tpl = env.get_template('quote.html.j2')
    rendered = tpl.render(
        provider=provider.name,
        tier=str(provider.tier),
        categories=[c.display_name for c in provider.car_categories],
        km=f"{trip.km:g}",
        begin=trip.begin.strftime("%d.%m.%Y %H:%M"),
        end=trip.end.strftime("%d.%m.%Y %H:%M"),
        total_time=format_duration(trip),
        price=f"{result.price:.2f}",
        breakdown=list(result.breakdown),
        generated_at=datetime.now().strftime("%d.%m.%Y %H:%M"),
    )
    soup = BeautifulSoup(rendered, 'lxml')
    return soup.prettify()
