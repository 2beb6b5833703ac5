"""Instrument data structures.

An Instrument is a tradable symbol with a current price and static
metadata. A Quote is the price/change pair of one instrument taken from
a single consistent catalog snapshot.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict


class Sector(Enum):
    """Market sectors instruments are grouped by."""

    TECHNOLOGY = "technology"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    ENERGY = "energy"
    CONSUMER = "consumer"
    INDUSTRIAL = "industrial"


@dataclass
class Instrument:
    """A tradable instrument.

    Attributes:
        symbol: Ticker symbol (unique within a catalog)
        name: Display name
        price: Current price per share
        change: Percentage change from the last price move
        sector: Market sector
        volatility: Relative volatility in [0, 1]
        dividend_yield: Annual dividend yield in percent
    """

    symbol: str
    name: str
    price: float
    change: float
    sector: Sector
    volatility: float
    dividend_yield: float

    def __post_init__(self):
        """Validate instrument fields."""
        if isinstance(self.sector, str):
            self.sector = Sector(self.sector)
        if self.price <= 0:
            raise ValueError(f"price must be positive, got {self.price}")
        if not 0 <= self.volatility <= 1:
            raise ValueError(f"volatility must be in [0, 1], got {self.volatility}")
        if self.dividend_yield < 0:
            raise ValueError(
                f"dividend_yield must be non-negative, got {self.dividend_yield}"
            )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["sector"] = self.sector.value
        return data


@dataclass(frozen=True)
class Quote:
    """Price snapshot of one instrument."""

    symbol: str
    price: float
    change: float
