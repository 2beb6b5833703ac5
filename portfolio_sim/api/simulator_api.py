"""User-friendly API for the portfolio simulator.

This module wires the catalog, planner, executor and price simulator
together behind the four session operations: create, get, trade and
refresh. Every operation returns plain dicts; domain errors are reported
as ``{"success": False, "message": ..., "error": ...}`` instead of being
raised, so callers branch on ``success`` and never parse ``message``.
"""

import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from portfolio_sim.catalog.instrument_catalog import InstrumentCatalog
from portfolio_sim.execution.trade_executor import TradeExecutor
from portfolio_sim.market.price_simulator import PriceSimulator
from portfolio_sim.portfolio.allocation_planner import (
    AllocationPlanner,
    PortfolioFocus,
    RiskTolerance,
)
from portfolio_sim.portfolio.base import Ledger
from portfolio_sim.portfolio.store import InMemoryLedgerStore, LedgerStore
from portfolio_sim.utils.config import Config, load_config
from portfolio_sim.utils.enums import parse_enum
from portfolio_sim.utils.exceptions import LedgerNotFoundError, PortfolioSimError
from portfolio_sim.utils.logging import get_logger

logger = get_logger(__name__)

POSITION_COLUMNS = [
    "symbol",
    "name",
    "shares",
    "avg_cost",
    "current_price",
    "change",
    "market_value",
    "unrealized_pnl",
]


class SimulatorAPI:
    """High-level API for simulated portfolios.

    Example:
        >>> api = SimulatorAPI()
        >>> created = api.create_portfolio(10000, "moderate", "diversified")
        >>> pid = created["portfolio"]["id"]
        >>> result = api.execute_trade(pid, "KO", "buy", 10)
        >>> result["success"]
        True
        >>> refreshed = api.refresh_prices(pid)
        >>> print(api.format_positions(refreshed["portfolio"]))
    """

    def __init__(
        self,
        catalog: Optional[InstrumentCatalog] = None,
        store: Optional[LedgerStore] = None,
        planner: Optional[AllocationPlanner] = None,
        executor: Optional[TradeExecutor] = None,
        simulator: Optional[PriceSimulator] = None,
        config: Optional[Config] = None,
        rng: Optional[Any] = None,
    ):
        """Initialize SimulatorAPI.

        Args:
            catalog: Instrument catalog (default: built-in table, or
                     ``catalog.instruments`` from config)
            store: Ledger storage (default: in-memory)
            planner: AllocationPlanner (defaults to one built from config)
            executor: TradeExecutor (defaults to new instance)
            simulator: PriceSimulator (defaults to one built from config)
            config: Configuration (default: empty, all component defaults)
            rng: Random source shared by the default planner and simulator
        """
        config = config or Config({})

        if catalog is None:
            records = config.get("catalog.instruments")
            catalog = (
                InstrumentCatalog.from_records(records)
                if records
                else InstrumentCatalog.default()
            )
        if rng is None:
            rng = np.random.default_rng(config.get("engine.seed"))

        self.catalog = catalog
        if store is None:
            store = InMemoryLedgerStore()
        if planner is None:
            planner = AllocationPlanner(
                catalog, config.section("allocation"), rng=rng, store=store
            )
        if executor is None:
            executor = TradeExecutor(catalog)
        if simulator is None:
            simulator = PriceSimulator(catalog, config.section("market"), rng=rng)

        self.store = store
        self.planner = planner
        self.executor = executor
        self.simulator = simulator

        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

        logger.debug(
            "SimulatorAPI initialized with %d instruments and %s",
            len(self.catalog),
            type(self.store).__name__,
        )

    @classmethod
    def from_config(cls, filepath: str | Path = None, **kwargs) -> "SimulatorAPI":
        """Build an API from a YAML configuration file.

        Args:
            filepath: Path to YAML file (default: config/default.yaml)
            **kwargs: Component overrides passed to the constructor
        """
        return cls(config=load_config(filepath), **kwargs)

    def create_portfolio(
        self,
        initial_balance: float,
        risk_tolerance: str,
        focus: str,
    ) -> Dict[str, Any]:
        """Create and store a new portfolio.

        Args:
            initial_balance: Starting capital, must be positive
            risk_tolerance: conservative, moderate or aggressive
            focus: tech, healthcare, diversified, growth or dividend

        Returns:
            Dict with:
                - success: True if the portfolio was created
                - message: Human-readable summary
                - portfolio: The new portfolio
                - available_instruments: Instruments not held

        Example:
            >>> result = api.create_portfolio(10000, "aggressive", "tech")
            >>> result["portfolio"]["cash"]
            2000.0
        """
        try:
            result = self.planner.plan(initial_balance, risk_tolerance, focus)
        except PortfolioSimError as e:
            return self._failure(e)

        ledger = result.ledger
        if self.planner.store is not self.store:
            self.store.put(ledger.id, ledger)
        with self._lock_for(ledger.id):
            portfolio = ledger.to_dict()

        return {
            "success": True,
            "message": (
                f"Created {parse_enum(PortfolioFocus, focus, 'focus').value} portfolio "
                f"(${float(initial_balance):,.2f}, "
                f"{parse_enum(RiskTolerance, risk_tolerance, 'risk_tolerance').value} risk)"
            ),
            "portfolio": portfolio,
            "available_instruments": [i.to_dict() for i in result.available],
        }

    def get_portfolio(self, portfolio_id: str) -> Optional[Dict[str, Any]]:
        """Get a stored portfolio as last valued.

        No revaluation happens here, so repeated calls without a trade or
        refresh in between return identical figures.

        Returns:
            Portfolio dict, or None if no portfolio has that id
        """
        ledger = self.store.get(portfolio_id)
        if ledger is None:
            return None
        with self._lock_for(portfolio_id):
            return ledger.to_dict()

    def execute_trade(
        self,
        portfolio_id: str,
        symbol: str,
        action: str,
        quantity: int,
    ) -> Dict[str, Any]:
        """Buy or sell shares in a portfolio.

        Args:
            portfolio_id: Portfolio id
            symbol: Ticker symbol
            action: buy or sell
            quantity: Whole number of shares

        Returns:
            Dict with success, message and, on success, the trade, the
            updated portfolio and the instruments not held. On failure,
            ``error`` holds a code such as ``insufficient_funds``.

        Example:
            >>> result = api.execute_trade(pid, "AAPL", "sell", 1000)
            >>> result["success"], result["error"]
            (False, 'insufficient_shares')
        """
        ledger = self.store.get(portfolio_id)
        if ledger is None:
            return self._failure(LedgerNotFoundError("Portfolio not found"))

        with self._lock_for(portfolio_id):
            try:
                trade = self.executor.execute(ledger, symbol, action, quantity)
            except PortfolioSimError as e:
                return self._failure(e)
            self.store.put(portfolio_id, ledger)

            return {
                "success": True,
                "message": trade.description,
                "portfolio": ledger.to_dict(),
                "trade": trade.to_dict(),
                "available_instruments": self._available(ledger),
            }

    def refresh_prices(self, portfolio_id: str) -> Dict[str, Any]:
        """Simulate market movement and revalue a portfolio.

        Prices move for every instrument in the shared catalog; only this
        portfolio is revalued.

        Returns:
            Dict with success, message, portfolio and available_instruments,
            or a failure dict with ``error == "not_found"``
        """
        ledger = self.store.get(portfolio_id)
        if ledger is None:
            return self._failure(LedgerNotFoundError("Portfolio not found"))

        with self._lock_for(portfolio_id):
            self.simulator.refresh(ledger)
            self.store.put(portfolio_id, ledger)

            return {
                "success": True,
                "message": (
                    f"Prices refreshed. Portfolio: ${ledger.total_value:,.2f} "
                    f"({ledger.total_profit_loss:+,.2f})"
                ),
                "portfolio": ledger.to_dict(),
                "available_instruments": self._available(ledger),
            }

    def list_instruments(self) -> List[Dict[str, Any]]:
        """Get every instrument in the catalog."""
        return [i.to_dict() for i in self.catalog.all()]

    def get_instrument(self, symbol: str) -> Optional[Dict[str, Any]]:
        """Get one instrument, or None if the symbol is unknown."""
        instrument = self.catalog.get(symbol)
        return instrument.to_dict() if instrument is not None else None

    def format_positions(self, portfolio: Dict[str, Any]) -> pd.DataFrame:
        """Format a portfolio's positions as a DataFrame for display.

        Args:
            portfolio: Portfolio dict from any API call

        Returns:
            DataFrame sorted by market value descending, with a
            ``weight_pct`` column relative to total portfolio value
        """
        positions = portfolio.get("positions", [])
        if not positions:
            return pd.DataFrame(columns=POSITION_COLUMNS + ["weight_pct"])

        df = pd.DataFrame(positions)[POSITION_COLUMNS]
        total_value = portfolio.get("total_value") or 0.0
        if total_value > 0:
            df["weight_pct"] = (df["market_value"] / total_value * 100).round(2)
        else:
            df["weight_pct"] = 0.0
        return df.sort_values("market_value", ascending=False).reset_index(drop=True)

    def format_performance(self, portfolio: Dict[str, Any]) -> pd.DataFrame:
        """Format a portfolio's performance history as a DataFrame.

        Returns:
            DataFrame indexed by date with ``value`` and ``daily_return``
            (fractional change from the previous point) columns
        """
        points = portfolio.get("performance", [])
        if not points:
            return pd.DataFrame(columns=["value", "daily_return"])

        df = pd.DataFrame(points)
        df["date"] = pd.to_datetime(df["date"])
        df = df.set_index("date")
        df["daily_return"] = df["value"].pct_change()
        return df

    def _available(self, ledger: Ledger) -> List[Dict[str, Any]]:
        return [i.to_dict() for i in self.catalog.all() if not ledger.holds(i.symbol)]

    def _lock_for(self, portfolio_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(portfolio_id, threading.Lock())

    def _failure(self, error: PortfolioSimError) -> Dict[str, Any]:
        logger.info("Request rejected (%s): %s", error.error_code, error)
        return {
            "success": False,
            "message": str(error),
            "error": error.error_code,
        }
