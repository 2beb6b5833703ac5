"""Process-wide instrument catalog.

The catalog is the single owner of current prices. Readers get copies or
Quote snapshots; only the price simulator moves prices, through
``apply_price_moves``. All access goes through one re-entrant lock so a
snapshot never mixes prices from before and after a refresh.
"""

import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from portfolio_sim.catalog.base import Instrument, Quote, Sector
from portfolio_sim.catalog.default_instruments import DEFAULT_INSTRUMENTS
from portfolio_sim.utils.exceptions import ConfigurationError, InstrumentNotFoundError
from portfolio_sim.utils.logging import get_logger
from portfolio_sim.utils.money import round_money

logger = get_logger(__name__)


class InstrumentCatalog:
    """Lookup table of tradable instruments with shared mutable prices.

    Example:
        >>> catalog = InstrumentCatalog.default()
        >>> catalog.lookup("AAPL").price
        178.5
        >>> len(catalog.all())
        18
    """

    def __init__(self, instruments: Iterable[Instrument]):
        """Initialize catalog.

        Args:
            instruments: Instruments in catalog order

        Raises:
            ConfigurationError: If the table is empty or has duplicate symbols
        """
        self._lock = threading.RLock()
        self._instruments: Dict[str, Instrument] = {}

        for instrument in instruments:
            if instrument.symbol in self._instruments:
                raise ConfigurationError(
                    f"Duplicate symbol in instrument catalog: {instrument.symbol}"
                )
            self._instruments[instrument.symbol] = instrument

        if not self._instruments:
            raise ConfigurationError("Instrument catalog must not be empty")

        logger.debug("InstrumentCatalog initialized with %d instruments", len(self))

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "InstrumentCatalog":
        """Build a catalog from plain dicts (e.g. a YAML list).

        Prices are rounded to cents on the way in.

        Raises:
            ConfigurationError: If a record is missing fields or has invalid values
        """
        instruments = []
        for record in records:
            try:
                instruments.append(
                    Instrument(
                        symbol=str(record["symbol"]),
                        name=str(record.get("name", record["symbol"])),
                        price=round_money(float(record["price"])),
                        change=float(record.get("change", 0.0)),
                        sector=Sector(record["sector"]),
                        volatility=float(record.get("volatility", 0.0)),
                        dividend_yield=float(record.get("dividend_yield", 0.0)),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid instrument record {record!r}: {e}") from e
        return cls(instruments)

    @classmethod
    def default(cls) -> "InstrumentCatalog":
        """Build a fresh catalog from the built-in instrument table."""
        return cls.from_records(DEFAULT_INSTRUMENTS)

    def __len__(self) -> int:
        return len(self._instruments)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._instruments

    def get(self, symbol: str) -> Optional[Instrument]:
        """Return a copy of the instrument, or None if unknown."""
        with self._lock:
            instrument = self._instruments.get(symbol)
            return replace(instrument) if instrument is not None else None

    def lookup(self, symbol: str) -> Instrument:
        """Return a copy of the instrument.

        Raises:
            InstrumentNotFoundError: If the symbol is not in the catalog
        """
        instrument = self.get(symbol)
        if instrument is None:
            raise InstrumentNotFoundError(f"Stock {symbol} not found")
        return instrument

    def all(self) -> List[Instrument]:
        """Return copies of all instruments in catalog order."""
        with self._lock:
            return [replace(i) for i in self._instruments.values()]

    def by_sector(self, sector: Sector) -> List[Instrument]:
        """Return copies of the instruments in ``sector``, in catalog order."""
        return [i for i in self.all() if i.sector == sector]

    def quotes(self) -> Dict[str, Quote]:
        """Return a consistent price snapshot of every instrument."""
        with self._lock:
            return {
                symbol: Quote(symbol, i.price, i.change)
                for symbol, i in self._instruments.items()
            }

    def apply_price_moves(self, moves: Dict[str, float]) -> Dict[str, Quote]:
        """Move prices by fractional amounts in one atomic step.

        For each symbol, ``price *= 1 + move`` (rounded to cents) and
        ``change = move * 100`` (percent, two decimals). Symbols not in
        ``moves`` keep their price.

        Args:
            moves: Fractional price change per symbol, e.g. 0.01 for +1%

        Returns:
            Snapshot of all quotes after the moves

        Raises:
            InstrumentNotFoundError: If a symbol in ``moves`` is unknown
        """
        with self._lock:
            unknown = [s for s in moves if s not in self._instruments]
            if unknown:
                raise InstrumentNotFoundError(f"Stock {unknown[0]} not found")

            for symbol, move in moves.items():
                instrument = self._instruments[symbol]
                new_price = round_money(instrument.price * (1 + move))
                # A move can never take a price to zero
                instrument.price = max(new_price, 0.01)
                instrument.change = round_money(move * 100)

            return self.quotes()

    def validate_sectors(self, sectors: Iterable[Sector]) -> None:
        """Check that every sector has at least one instrument.

        Raises:
            ConfigurationError: If a sector has no instruments
        """
        with self._lock:
            present = {i.sector for i in self._instruments.values()}
        missing = [s.value for s in sectors if s not in present]
        if missing:
            raise ConfigurationError(
                f"Instrument catalog has no instruments in sector(s): {', '.join(missing)}"
            )
