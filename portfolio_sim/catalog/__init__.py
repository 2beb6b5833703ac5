"""Instrument Catalog Layer.

Holds the tradable instruments and their shared current prices.

Components:
- Instrument: Symbol with price and static metadata
- Quote: Price snapshot of one instrument
- Sector: Market sector enum
- InstrumentCatalog: Process-wide lookup and price store
"""

from portfolio_sim.catalog.base import Instrument, Quote, Sector
from portfolio_sim.catalog.default_instruments import DEFAULT_INSTRUMENTS
from portfolio_sim.catalog.instrument_catalog import InstrumentCatalog

__all__ = [
    "Instrument",
    "Quote",
    "Sector",
    "InstrumentCatalog",
    "DEFAULT_INSTRUMENTS",
]
