from dataclasses import dataclass, field

from ..models import CalculationResult, CarCategory, PricingTier, TripRequest
from ..tariffs.catalog import TariffCatalog, get_catalog
from .calculator import calculate


@dataclass(slots=True)
class Car4way:
    """User selection for the Car4way provider: a pricing tier and the allowed car categories.

    Categories are kept in canonical order so results are reproducible.
    """
    tier: PricingTier = PricingTier.BASIC
    car_categories: tuple[CarCategory, ...] = field(default_factory=lambda: tuple(CarCategory))

    def __post_init__(self):
        self.car_categories = CarCategory.ordered(self.car_categories)

    @property
    def name(self) -> str:
        return 'car4way'

    def toggle(self, category: CarCategory, enabled: bool) -> None:
        selected = set(self.car_categories)
        if enabled:
            selected.add(category)
        else:
            selected.discard(category)
        self.car_categories = CarCategory.ordered(selected)

    def calculate(self, trip: TripRequest, catalog: TariffCatalog | None = None) -> CalculationResult:
        if catalog is None:
            catalog = get_catalog()
        return calculate(catalog[self.tier], self.car_categories, trip)
