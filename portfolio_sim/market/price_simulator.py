"""Volatility-weighted random walk over catalog prices.

Each refresh moves every instrument in the catalog, so all sessions see
the new prices. Only the ledger passed to ``refresh`` is revalued; other
ledgers pick the new prices up on their own next trade or refresh.
"""

from typing import Any, Dict, Optional

import numpy as np

from portfolio_sim.catalog.base import Quote
from portfolio_sim.catalog.instrument_catalog import InstrumentCatalog
from portfolio_sim.portfolio.base import Ledger
from portfolio_sim.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


class PriceSimulator:
    """Simulates market movement on the instrument catalog.

    A refresh moves each price by ``(U - 0.5) * step_scale * volatility * 2``
    where U is uniform on [0, 1). With the default step_scale of 0.04 an
    instrument of volatility 1.0 moves at most +/-4%. The walk is not
    mean-reverting.

    Configuration Parameters:
        step_scale: Scale of a single move (default 0.04)
        seed: Seed for the default random generator (default None)

    Example:
        >>> simulator = PriceSimulator(catalog, {"seed": 42})
        >>> quotes = simulator.refresh(ledger)
        >>> ledger.positions["AAPL"].current_price == quotes["AAPL"].price
        True
    """

    def __init__(
        self,
        catalog: InstrumentCatalog,
        config: Optional[Dict] = None,
        rng: Optional[Any] = None,
    ):
        """Initialize price simulator.

        Args:
            catalog: Catalog whose prices are moved
            config: Configuration dictionary
            rng: Random source with a ``random()`` method returning [0, 1).
                 Defaults to ``numpy.random.default_rng(seed)``.
        """
        config = config or {}

        self.catalog = catalog
        self.step_scale = config.get("step_scale", 0.04)
        self.rng = rng if rng is not None else np.random.default_rng(config.get("seed"))

        self._validate_config()

    def _validate_config(self) -> None:
        """Validate configuration parameters."""
        if not 0 <= self.step_scale < 1:
            raise ValueError(f"step_scale must be in [0, 1), got {self.step_scale}")

    def draw_moves(self) -> Dict[str, float]:
        """Draw one fractional move per catalog instrument."""
        return {
            instrument.symbol: (float(self.rng.random()) - 0.5)
            * self.step_scale
            * instrument.volatility
            * 2
            for instrument in self.catalog.all()
        }

    def step(self) -> Dict[str, Quote]:
        """Move all catalog prices once without revaluing any ledger.

        Returns:
            Quote snapshot after the move
        """
        moves = self.draw_moves()
        quotes = self.catalog.apply_price_moves(moves)
        logger.debug("Applied price moves to %d instruments", len(moves))
        return quotes

    def refresh(self, ledger: Ledger) -> Dict[str, Quote]:
        """Move all catalog prices and revalue ``ledger`` against them.

        Args:
            ledger: Portfolio to revalue (mutated in place)

        Returns:
            Quote snapshot the ledger was revalued with
        """
        previous_value = ledger.total_value
        quotes = self.step()
        ledger.revalue(quotes)

        log_with_context(
            logger,
            "info",
            "Prices refreshed",
            portfolio_id=ledger.id,
            total_value=ledger.total_value,
            value_change=f"{ledger.total_value - previous_value:+.2f}",
        )
        return quotes
