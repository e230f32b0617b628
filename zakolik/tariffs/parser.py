"""Parser for the tab separated Car4way tariff tables.

Each table row is classified by its label through ``ROW_MATCHERS``, an ordered list of
(pattern, handler) pairs. The first pattern that matches the whole label wins and a label
matching nothing is an error. Labels are matched with ``fullmatch`` against the trimmed
cell, so a label carrying extra text (e.g. a promo suffix) is rejected rather than
silently treated as the row it starts with.
"""

import csv
import io
import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from datetime import time, timedelta
from typing import Callable, TypeAlias

import dacite

from ..exceptions import (
    AmbiguousPriceRow,
    IncompletePriceRow,
    MalformedNumber,
    MalformedTable,
    MissingTariffField,
    UnknownTariffColumn,
    UnrecognizedTariffRow,
)
from ..models import (
    CarCategory,
    Package,
    PerCarTariff,
    PerMinuteRate,
    PricingTier,
    Tariff,
    TimeRestriction,
    WeekdayTime,
)

logger = logging.getLogger(__name__)

# Keep the times in sync with the row labels below.
DAY_START = time(6, 0)
NIGHT_START = time(20, 0)
WEEKEND_START = WeekdayTime(weekday=4, time=time(16, 0))  # Fri
WEEKEND_END = WeekdayTime(weekday=0, time=time(10, 0))  # Mon
WEEKEND_DURATION = timedelta(hours=8 + 24 + 24 + 10)
WEEKEND_KM = 200.0

LABEL_COLUMN = 'Minutový tarif  (km v ceně)'
CATEGORY_COLUMNS: dict[str, CarCategory] = {
    'Legend Fabia': CarCategory.LEGEND,
    'Fancy  Scala, Karoq, Octavia, Caddy Van': CarCategory.FANCY,
    'Boss Superb / Kodiaq': CarCategory.BOSS,
}


@dataclass(frozen=True, slots=True)
class TariffRow:
    label: str
    prices: dict[CarCategory, float | None]

    def all_prices(self) -> dict[CarCategory, float]:
        if any(self.prices.get(c) is None for c in CarCategory):
            raise IncompletePriceRow(self.label)
        return {c: self.prices[c] for c in CarCategory}

    def only(self) -> float:
        """Return the single filled value of the row."""
        values = [v for v in self.prices.values() if v is not None]
        if len(values) != 1:
            raise AmbiguousPriceRow(self.label)
        return values[0]


class _TariffBuilder:
    """Accumulates values of one table; turned into a Tariff once all rows are consumed."""

    def __init__(self, tier: PricingTier):
        self.tier = tier
        self.day_rate: dict[CarCategory, PerMinuteRate] = {}
        self.night_rate: dict[CarCategory, PerMinuteRate] = {}
        self.packages: dict[CarCategory, list[Package]] = defaultdict(list)
        self.per_km_price: float | None = None
        self.airport_entry_price: float | None = None
        self.airport_exit_price: float | None = None

    def add_minute_rate(self, target: dict[CarCategory, PerMinuteRate], row: TariffRow,
                        start: time, end: time) -> None:
        for category, price in row.all_prices().items():
            target[category] = PerMinuteRate(start=start, end=end, per_minute_price=price)

    def add_package(self, row: TariffRow, duration: timedelta, kilometers: float,
                    time_restriction: TimeRestriction | None = None) -> None:
        for category, price in row.all_prices().items():
            self.packages[category].append(Package(
                name=row.label,
                duration=duration,
                kilometers=kilometers,
                price=price,
                time_restriction=time_restriction,
            ))

    def build(self) -> Tariff:
        per_category = {}
        for category in CarCategory:
            if category not in self.day_rate:
                raise MissingTariffField(self.tier, f"day minute tariff price for {category}")
            if category not in self.night_rate:
                raise MissingTariffField(self.tier, f"night minute tariff price for {category}")
            per_category[category] = PerCarTariff(
                per_minute=(self.day_rate[category], self.night_rate[category]),
                packages=tuple(self.packages[category]),
            )
        scalars = [
            (self.per_km_price, 'per km price'),
            (self.airport_entry_price, 'airport entry price'),
            (self.airport_exit_price, 'airport exit price'),
        ]
        for value, name in scalars:
            if value is None:
                raise MissingTariffField(self.tier, name)
        return Tariff(
            tier=self.tier,
            per_category=per_category,
            per_km_price=self.per_km_price,
            airport_entry_price=self.airport_entry_price,
            airport_exit_price=self.airport_exit_price,
        )


# ---------------- Row handlers -----------------
def _day_rate(builder: _TariffBuilder, row: TariffRow, match: re.Match) -> None:
    builder.add_minute_rate(builder.day_rate, row, DAY_START, NIGHT_START)


def _night_rate(builder: _TariffBuilder, row: TariffRow, match: re.Match) -> None:
    builder.add_minute_rate(builder.night_rate, row, NIGHT_START, DAY_START)


def _section_header(builder: _TariffBuilder, row: TariffRow, match: re.Match) -> None:
    pass


def _package(unit: timedelta) -> Callable[[_TariffBuilder, TariffRow, re.Match], None]:
    def handler(builder: _TariffBuilder, row: TariffRow, match: re.Match) -> None:
        builder.add_package(row, unit * int(match['count']), float(match['km']))
    return handler


def _weekend_package(builder: _TariffBuilder, row: TariffRow, match: re.Match) -> None:
    restriction = TimeRestriction(start=WEEKEND_START, end=WEEKEND_END)
    builder.add_package(row, WEEKEND_DURATION, WEEKEND_KM, restriction)


def _per_km(builder: _TariffBuilder, row: TariffRow, match: re.Match) -> None:
    builder.per_km_price = row.only()


def _airport_entry(builder: _TariffBuilder, row: TariffRow, match: re.Match) -> None:
    builder.airport_entry_price = row.only()


def _airport_exit(builder: _TariffBuilder, row: TariffRow, match: re.Match) -> None:
    builder.airport_exit_price = row.only()


RowHandler: TypeAlias = Callable[[_TariffBuilder, TariffRow, re.Match], None]

ROW_MATCHERS: list[tuple[re.Pattern, RowHandler]] = [
    (re.compile(re.escape('Denní: 6:00 - 20:00 Po-Ne')), _day_rate),
    (re.compile(re.escape('Noční: 20:00 - 6:00 Po-Ne')), _night_rate),
    (re.compile(re.escape('Výhodné balíčky')), _section_header),
    (re.compile(r'(?P<count>\d+) hodiny? \+ (?P<km>\d+) km'), _package(timedelta(hours=1))),
    (re.compile(r'(?P<count>\d+) dn[yí] \+ (?P<km>\d+) km'), _package(timedelta(days=1))),
    (re.compile(re.escape('Víkend + 200 km')), _weekend_package),
    (re.compile(re.escape('Km nad rámec balíčků')), _per_km),
    (re.compile(re.escape('Letiště Praha - příjezd')), _airport_entry),
    (re.compile(re.escape('Letiště Praha - výjezd')), _airport_exit),
]


# ---------------- Parsing helpers -----------------
def parse_decimal_comma(raw: str) -> float | None:
    """Parse a Czech formatted number such as ``'1 290,50'``; empty cell means no value."""
    if not raw:
        return None
    normalized = raw.replace(',', '.').replace(' ', '').replace('\xa0', '')
    try:
        return float(normalized)
    except ValueError:
        raise MalformedNumber(raw) from None


def match_row(label: str) -> tuple[RowHandler, re.Match]:
    for pattern, handler in ROW_MATCHERS:
        if match := pattern.fullmatch(label):
            return handler, match
    raise UnrecognizedTariffRow(label)


def _read_rows(text: str) -> list[TariffRow]:
    reader = csv.reader(io.StringIO(text), delimiter='\t', quoting=csv.QUOTE_NONE)
    header = [cell.strip() for cell in next(reader, [])]
    if not header or header[0] != LABEL_COLUMN:
        raise UnknownTariffColumn(header[0] if header else '')
    columns: list[CarCategory] = []
    for name in header[1:]:
        if name not in CATEGORY_COLUMNS:
            raise UnknownTariffColumn(name)
        columns.append(CATEGORY_COLUMNS[name])
    for name, category in CATEGORY_COLUMNS.items():
        if category not in columns:
            raise UnknownTariffColumn(name)

    rows = []
    for record in reader:
        cells = [cell.strip() for cell in record]
        if not any(cells):
            continue
        prices = {category: None for category in CarCategory}
        for category, raw in zip(columns, cells[1:]):
            prices[category] = parse_decimal_comma(raw)
        rows.append(dacite.from_dict(data_class=TariffRow, data=dict(label=cells[0], prices=prices)))
    return rows


def parse_tariff(tier: PricingTier, data: bytes | str) -> Tariff:
    """Parse one tariff table into a fully populated Tariff or raise a TariffParseError."""
    try:
        text = data.decode('utf-8-sig') if isinstance(data, bytes) else data
        rows = _read_rows(text)
    except (UnicodeDecodeError, csv.Error) as e:
        raise MalformedTable(str(e)) from e
    builder = _TariffBuilder(tier)
    for row in rows:
        logger.debug('%s', row)
        handler, match = match_row(row.label)
        handler(builder, row, match)
    return builder.build()
