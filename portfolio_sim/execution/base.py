"""Trade data structures."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict


class TradeAction(Enum):
    """Trade action types."""

    BUY = "buy"
    SELL = "sell"


@dataclass
class Trade:
    """Record of one executed trade.

    Attributes:
        action: BUY or SELL
        symbol: Ticker symbol
        shares: Number of shares traded
        price: Execution price per share
        total: Cash moved by the trade (shares * price)
        timestamp: When the trade was executed
    """

    action: TradeAction
    symbol: str
    shares: int
    price: float
    total: float
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate trade fields."""
        if self.shares <= 0:
            raise ValueError(f"shares must be positive, got {self.shares}")
        if self.price <= 0:
            raise ValueError(f"price must be positive, got {self.price}")

    @property
    def description(self) -> str:
        verb = "Bought" if self.action == TradeAction.BUY else "Sold"
        return f"{verb} {self.shares} shares of {self.symbol} at ${self.price:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "symbol": self.symbol,
            "shares": self.shares,
            "price": self.price,
            "total": self.total,
            "timestamp": self.timestamp.isoformat(),
        }
