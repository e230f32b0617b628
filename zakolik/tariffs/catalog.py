"""Tariff catalog: one parsed Tariff per pricing tier, built once and shared read-only."""

import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ..exceptions import TariffLoadError, TariffParseError
from ..models import PricingTier, Tariff
from .parser import parse_tariff

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / 'data'  # shipped as package data


def embedded_table(tier: PricingTier) -> bytes:
    return (DATA_DIR / f'{tier.value.lower()}.tsv').read_bytes()


class TariffCatalog:
    """Immutable mapping from PricingTier to its Tariff."""

    def __init__(self, tariffs: Mapping[PricingTier, Tariff]):
        missing = [tier for tier in PricingTier if tier not in tariffs]
        if missing:
            raise TariffLoadError(missing[0])
        self._tariffs = MappingProxyType({tier: tariffs[tier] for tier in PricingTier})

    @classmethod
    def from_tables(cls, tables: Mapping[PricingTier, bytes | str]) -> 'TariffCatalog':
        tariffs = {}
        for tier in PricingTier:
            if tier not in tables:
                raise TariffLoadError(tier)
            logger.debug('Loading %s...', tier)
            try:
                tariffs[tier] = parse_tariff(tier, tables[tier])
            except TariffParseError as e:
                raise TariffLoadError(tier, e) from e
        return cls(tariffs)

    @classmethod
    def load(cls) -> 'TariffCatalog':
        """Parse the embedded tables of all tiers."""
        catalog = cls.from_tables({tier: embedded_table(tier) for tier in PricingTier})
        logger.info('Loaded Car4way tariffs: %s', ', '.join(str(t) for t in PricingTier))
        return catalog

    def __getitem__(self, tier: PricingTier) -> Tariff:
        return self._tariffs[tier]

    def __iter__(self):
        return iter(self._tariffs)

    def __len__(self) -> int:
        return len(self._tariffs)

    @property
    def tariffs(self) -> Mapping[PricingTier, Tariff]:
        return self._tariffs


_catalog: TariffCatalog | None = None
_catalog_lock = threading.Lock()


def get_catalog() -> TariffCatalog:
    """Process-wide catalog, built on first access."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = TariffCatalog.load()
    return _catalog
