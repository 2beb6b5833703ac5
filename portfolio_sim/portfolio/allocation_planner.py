"""Rule-based allocation planner for new portfolios.

This module turns a starting balance and a strategy profile into an
initial portfolio.

Algorithm:
1. Map risk tolerance to the fraction of capital put into stocks
2. Select instruments by focus (sector, yield or volatility rules)
3. Split the stock budget equally and buy whole shares only
4. Give each position a synthetic cost basis near the current price
5. Revalue and generate a short trailing performance history
"""

import math
import numbers
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np

from portfolio_sim.catalog.base import Instrument, Quote, Sector
from portfolio_sim.catalog.instrument_catalog import InstrumentCatalog
from portfolio_sim.portfolio.base import Ledger, PerformancePoint, Position
from portfolio_sim.portfolio.store import LedgerStore
from portfolio_sim.utils.enums import parse_enum
from portfolio_sim.utils.exceptions import AllocationError, InvalidInputError
from portfolio_sim.utils.logging import get_logger, log_with_context
from portfolio_sim.utils.money import round_money

logger = get_logger(__name__)


class RiskTolerance(Enum):
    """How much of the starting balance goes into stocks."""

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class PortfolioFocus(Enum):
    """Which instruments a new portfolio is built from."""

    TECH = "tech"
    HEALTHCARE = "healthcare"
    DIVERSIFIED = "diversified"
    GROWTH = "growth"
    DIVIDEND = "dividend"


# One representative from each of these sectors for a diversified portfolio
DIVERSIFIED_SECTORS = [
    Sector.TECHNOLOGY,
    Sector.HEALTHCARE,
    Sector.FINANCE,
    Sector.ENERGY,
    Sector.CONSUMER,
]

TECH_MAX_POSITIONS = 4
DIVIDEND_MIN_YIELD = 2.0
DIVIDEND_MAX_POSITIONS = 5
GROWTH_MIN_VOLATILITY = 0.3
GROWTH_MAX_YIELD = 1.0
GROWTH_MAX_POSITIONS = 4

DEFAULT_STOCK_FRACTION = {
    "conservative": 0.4,
    "moderate": 0.6,
    "aggressive": 0.8,
}


@dataclass
class PlanResult:
    """Result of planning a new portfolio.

    Attributes:
        ledger: The newly created portfolio
        available: Catalog instruments the portfolio does not hold
        metrics: Planning figures (invested amount, uninvested remainder, ...)
    """

    ledger: Ledger
    available: List[Instrument]
    metrics: Dict[str, float] = field(default_factory=dict)


class AllocationPlanner:
    """Builds the initial portfolio for a balance and strategy profile.

    Configuration Parameters:
        stock_fraction: Stock share of capital per risk tolerance
                        (default conservative 0.4, moderate 0.6, aggressive 0.8)
        cost_basis_variance: Max relative distance of the synthetic cost
                             basis from current price (default 0.05)
        history_days: Number of performance points (default 7)
        history_variance: Max relative distance of earlier history points
                          from today's value (default 0.03)
        fold_remainder_to_cash: Add capital left over from whole-share
                                rounding back to cash (default False)
        seed: Seed for the default random generator (default None)

    Example:
        >>> planner = AllocationPlanner(InstrumentCatalog.default())
        >>> result = planner.plan(10000, "aggressive", "tech")
        >>> result.ledger.cash
        2000.0
        >>> sorted(result.ledger.positions)
        ['AAPL', 'GOOGL', 'MSFT', 'NVDA']
    """

    def __init__(
        self,
        catalog: InstrumentCatalog,
        config: Optional[Dict] = None,
        rng: Optional[Any] = None,
        store: Optional[LedgerStore] = None,
    ):
        """Initialize planner with configuration.

        Args:
            catalog: Instrument catalog to allocate from
            config: Configuration dictionary with allocation parameters.
                   Uses sensible defaults if not provided.
            rng: Random source with a ``random()`` method returning [0, 1).
                 Defaults to ``numpy.random.default_rng(seed)``.
            store: If given, every new ledger is stored in it

        Raises:
            ValueError: If configuration values are out of range
            ConfigurationError: If the catalog lacks a diversified sector
        """
        config = config or {}

        self.catalog = catalog
        self.store = store
        self.stock_fraction = {
            **DEFAULT_STOCK_FRACTION,
            **(config.get("stock_fraction") or {}),
        }
        self.cost_basis_variance = config.get("cost_basis_variance", 0.05)
        self.history_days = config.get("history_days", 7)
        self.history_variance = config.get("history_variance", 0.03)
        self.fold_remainder_to_cash = config.get("fold_remainder_to_cash", False)
        self.rng = rng if rng is not None else np.random.default_rng(config.get("seed"))

        self._validate_config()
        self.catalog.validate_sectors(DIVERSIFIED_SECTORS)

    def _validate_config(self) -> None:
        """Validate configuration parameters."""
        for risk in RiskTolerance:
            fraction = self.stock_fraction.get(risk.value)
            if fraction is None or not 0 <= fraction <= 1:
                raise ValueError(
                    f"stock_fraction.{risk.value} must be in [0, 1], got {fraction}"
                )
        if not 0 <= self.cost_basis_variance < 1:
            raise ValueError(
                f"cost_basis_variance must be in [0, 1), got {self.cost_basis_variance}"
            )
        if self.history_days < 1:
            raise ValueError(f"history_days must be >= 1, got {self.history_days}")
        if not 0 <= self.history_variance < 1:
            raise ValueError(
                f"history_variance must be in [0, 1), got {self.history_variance}"
            )

    def plan(
        self,
        initial_balance: float,
        risk_tolerance: RiskTolerance | str,
        focus: PortfolioFocus | str,
        as_of: Optional[date] = None,
    ) -> PlanResult:
        """Create a new portfolio.

        Args:
            initial_balance: Starting capital, must be positive
            risk_tolerance: conservative, moderate or aggressive
            focus: tech, healthcare, diversified, growth or dividend
            as_of: Date of today's performance point (default: today)

        Returns:
            PlanResult with the new ledger and the instruments it does not hold

        Raises:
            InvalidInputError: If the balance, risk tolerance or focus is invalid
            AllocationError: If the focus selects no instruments
        """
        if (
            isinstance(initial_balance, bool)
            or not isinstance(initial_balance, numbers.Real)
            or not math.isfinite(initial_balance)
            or initial_balance <= 0
        ):
            raise InvalidInputError(
                f"initial_balance must be positive, got {initial_balance!r}"
            )
        risk = parse_enum(RiskTolerance, risk_tolerance, "risk_tolerance")
        focus = parse_enum(PortfolioFocus, focus, "focus")

        # Step 1: Split capital between stocks and cash
        investment = initial_balance * self.stock_fraction[risk.value]
        cash = initial_balance - investment

        # Step 2: Select instruments from one catalog snapshot
        instruments = self.catalog.all()
        quotes = {i.symbol: Quote(i.symbol, i.price, i.change) for i in instruments}
        selected = self.select_instruments(focus, instruments)
        if not selected:
            raise AllocationError(f"No instruments match focus '{focus.value}'")

        # Step 3: Equal budget per instrument, whole shares only
        per_instrument = investment / len(selected)
        positions: Dict[str, Position] = {}
        remainder = 0.0
        for instrument in selected:
            shares = math.floor(per_instrument / instrument.price)
            if shares == 0:
                logger.debug(
                    "Skipping %s: $%.2f buys no shares at $%.2f",
                    instrument.symbol,
                    per_instrument,
                    instrument.price,
                )
                remainder += per_instrument
                continue
            remainder += per_instrument - shares * instrument.price
            # Step 4: Synthetic cost basis near current price
            positions[instrument.symbol] = Position(
                symbol=instrument.symbol,
                name=instrument.name,
                shares=shares,
                avg_cost=self._synthetic_cost(instrument.price),
            )

        if self.fold_remainder_to_cash:
            cash += remainder

        # Step 5: Revalue and build history
        ledger = Ledger(id=Ledger.new_id(), cash=round_money(cash), positions=positions)
        ledger.revalue(quotes)
        ledger.performance = self._generate_history(ledger.total_value, as_of)

        if self.store is not None:
            self.store.put(ledger.id, ledger)

        available = [i for i in instruments if not ledger.holds(i.symbol)]

        log_with_context(
            logger,
            "info",
            "Portfolio created",
            portfolio_id=ledger.id,
            balance=float(initial_balance),
            risk=risk,
            focus=focus,
            positions=len(positions),
            total_value=ledger.total_value,
        )

        return PlanResult(
            ledger=ledger,
            available=available,
            metrics={
                "initial_balance": float(initial_balance),
                "investment_amount": round_money(investment),
                "uninvested_remainder": round_money(remainder),
                "position_count": float(len(positions)),
                "selected_count": float(len(selected)),
            },
        )

    def select_instruments(
        self,
        focus: PortfolioFocus | str,
        instruments: Optional[List[Instrument]] = None,
    ) -> List[Instrument]:
        """Pick the instruments for a focus, in catalog order.

        Args:
            focus: Portfolio focus
            instruments: Catalog snapshot (default: ``catalog.all()``)

        Returns:
            Selected instruments (may be empty)
        """
        focus = parse_enum(PortfolioFocus, focus, "focus")
        if instruments is None:
            instruments = self.catalog.all()

        if focus == PortfolioFocus.TECH:
            tech = [i for i in instruments if i.sector == Sector.TECHNOLOGY]
            return tech[:TECH_MAX_POSITIONS]

        if focus == PortfolioFocus.HEALTHCARE:
            return [i for i in instruments if i.sector == Sector.HEALTHCARE]

        if focus == PortfolioFocus.DIVIDEND:
            payers = [i for i in instruments if i.dividend_yield >= DIVIDEND_MIN_YIELD]
            return payers[:DIVIDEND_MAX_POSITIONS]

        if focus == PortfolioFocus.GROWTH:
            growth = [
                i
                for i in instruments
                if i.volatility >= GROWTH_MIN_VOLATILITY
                and i.dividend_yield < GROWTH_MAX_YIELD
            ]
            return growth[:GROWTH_MAX_POSITIONS]

        # Diversified: first instrument of each sector
        selected = []
        for sector in DIVERSIFIED_SECTORS:
            match = next((i for i in instruments if i.sector == sector), None)
            if match is not None:
                selected.append(match)
        return selected

    def _synthetic_cost(self, price: float) -> float:
        """Cost basis within +/- cost_basis_variance of ``price``."""
        if self.cost_basis_variance == 0:
            return price
        variance = (float(self.rng.random()) - 0.5) * 2 * self.cost_basis_variance
        return max(round_money(price * (1 + variance)), 0.01)

    def _generate_history(
        self, current_value: float, as_of: Optional[date] = None
    ) -> List[PerformancePoint]:
        """Trailing daily history ending at exactly ``current_value`` today."""
        today = as_of or date.today()
        points = []
        for days_ago in range(self.history_days - 1, -1, -1):
            if days_ago == 0:
                value = current_value
            else:
                variance = (float(self.rng.random()) - 0.5) * 2 * self.history_variance
                value = round_money(current_value * (1 - variance))
            day = today - timedelta(days=days_ago)
            points.append(PerformancePoint(date=day.isoformat(), value=value))
        return points
