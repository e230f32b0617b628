"""Exception hierarchy for tariff loading and price calculation."""


class ZakolikError(Exception):
    """Base exception for all errors raised by this package."""


class TariffParseError(ZakolikError):
    """A tariff table could not be turned into a Tariff."""


class UnrecognizedTariffRow(TariffParseError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"The item {label!r} doesn't match any pattern")


class IncompletePriceRow(TariffParseError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"All columns should have a valid price for item {label!r}")


class AmbiguousPriceRow(TariffParseError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Expected exactly one value for item {label!r}")


class MissingTariffField(TariffParseError):
    def __init__(self, tier, field: str):
        self.tier = tier
        self.field = field
        super().__init__(f"{field} not parsed for {tier} tariff")


class MalformedNumber(TariffParseError):
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Cannot parse {raw!r} as a decimal number")


class UnknownTariffColumn(TariffParseError):
    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Unexpected tariff table column {column!r}")


class TariffLoadError(ZakolikError):
    """Building the tariff of a tier failed."""

    def __init__(self, tier, cause: Exception | None = None):
        self.tier = tier
        self.cause = cause
        msg = f"loading {tier} Car4way tariff"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class RateCoverageError(ZakolikError):
    """Per-minute rates of a tariff do not cover a time of day exactly once."""


class MalformedTable(TariffParseError):
    """The table is not valid UTF-8 tab separated text."""
