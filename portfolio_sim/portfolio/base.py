"""Portfolio ledger data structures.

A Ledger is one simulated account: cash, positions keyed by symbol, and
aggregates derived from them. ``shares`` and ``avg_cost`` are the source
of truth for a position; everything else is recomputed by ``revalue``
from a catalog price snapshot, never adjusted incrementally.

Invariants after every mutation:
- cash is never negative
- every position holds at least one share
- total_value == cash + sum of position market values
- allocation.stocks + allocation.cash is 100 (+/- 1 from rounding)
"""

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from portfolio_sim.catalog.base import Quote
from portfolio_sim.utils.money import percent_of, round_money


@dataclass
class Position:
    """Holding of one instrument.

    Attributes:
        symbol: Ticker symbol
        name: Instrument display name
        shares: Number of shares held
        avg_cost: Weighted-average cost per share
        current_price: Price at last revaluation
        change: Instrument % change at last revaluation
        market_value: shares * current_price
        unrealized_pnl: market_value - shares * avg_cost
    """

    symbol: str
    name: str
    shares: int
    avg_cost: float
    current_price: float = 0.0
    change: float = 0.0
    market_value: float = 0.0
    unrealized_pnl: float = 0.0

    def __post_init__(self):
        """Validate position fields."""
        if self.shares <= 0:
            raise ValueError(f"shares must be positive, got {self.shares}")
        if self.avg_cost <= 0:
            raise ValueError(f"avg_cost must be positive, got {self.avg_cost}")

    @property
    def cost_basis(self) -> float:
        """Calculate total cost basis."""
        return round_money(self.shares * self.avg_cost)

    def revalue(self, price: float, change: float) -> None:
        """Recompute derived fields at ``price``."""
        self.current_price = price
        self.change = change
        self.market_value = round_money(self.shares * price)
        self.unrealized_pnl = round_money(self.market_value - self.shares * self.avg_cost)


@dataclass
class Allocation:
    """Integer percentage split of total value between stocks and cash."""

    stocks: int = 0
    cash: int = 0


@dataclass
class PerformancePoint:
    """Portfolio value on one date (ISO format)."""

    date: str
    value: float


@dataclass
class Ledger:
    """One simulated investment account.

    Attributes:
        id: Unique portfolio id
        cash: Cash balance
        positions: Holdings keyed by symbol
        total_value: cash + market value of all positions
        total_profit_loss: Sum of unrealized P&L
        allocation: Stocks/cash percentage split
        performance: Daily value history; the last point is today
        created_at: Creation time
    """

    id: str
    cash: float
    positions: Dict[str, Position] = field(default_factory=dict)
    total_value: float = 0.0
    total_profit_loss: float = 0.0
    allocation: Allocation = field(default_factory=Allocation)
    performance: List[PerformancePoint] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate ledger state."""
        if self.cash < 0:
            raise ValueError(f"cash must be non-negative, got {self.cash}")

    @staticmethod
    def new_id() -> str:
        """Generate a unique portfolio id like ``pf-1718000000000-3fa2c1``."""
        millis = int(datetime.now().timestamp() * 1000)
        return f"pf-{millis}-{uuid.uuid4().hex[:6]}"

    @property
    def stock_value(self) -> float:
        """Total market value of all positions."""
        return round_money(sum(p.market_value for p in self.positions.values()))

    def get_position(self, symbol: str) -> Optional[Position]:
        return self.positions.get(symbol)

    def holds(self, symbol: str) -> bool:
        return symbol in self.positions

    def revalue(self, quotes: Mapping[str, Quote]) -> None:
        """Recompute every derived figure from a price snapshot.

        Positions are repriced from ``quotes``; totals and allocation are
        rebuilt from scratch, and today's performance point is overwritten
        with the new total value. Earlier points are left as they are.

        Args:
            quotes: Snapshot from ``InstrumentCatalog.quotes()``
        """
        for symbol, position in self.positions.items():
            quote = quotes.get(symbol)
            if quote is not None:
                position.revalue(quote.price, quote.change)
            else:
                position.revalue(position.current_price, position.change)

        stock_value = self.stock_value
        self.total_value = round_money(stock_value + self.cash)
        self.total_profit_loss = round_money(
            sum(p.unrealized_pnl for p in self.positions.values())
        )
        self.allocation = Allocation(
            stocks=percent_of(stock_value, self.total_value),
            cash=percent_of(self.cash, self.total_value),
        )

        if self.performance:
            self.performance[-1].value = self.total_value

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view of the ledger for API results."""
        return {
            "id": self.id,
            "cash": self.cash,
            "positions": [asdict(p) for p in self.positions.values()],
            "total_value": self.total_value,
            "total_profit_loss": self.total_profit_loss,
            "allocation": asdict(self.allocation),
            "performance": [asdict(p) for p in self.performance],
            "created_at": self.created_at.isoformat(),
        }
