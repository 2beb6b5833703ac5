"""Portfolio Layer.

Holds simulated accounts and builds new ones from a strategy profile.

Components:
- Ledger: One account's cash, positions and derived aggregates
- Position: Holding of one instrument with weighted-average cost
- LedgerStore: Abstract get/put storage for ledgers
- AllocationPlanner: Creates a new ledger from balance, risk and focus
"""

from portfolio_sim.portfolio.allocation_planner import (
    AllocationPlanner,
    PlanResult,
    PortfolioFocus,
    RiskTolerance,
)
from portfolio_sim.portfolio.base import Allocation, Ledger, PerformancePoint, Position
from portfolio_sim.portfolio.store import InMemoryLedgerStore, LedgerStore

__all__ = [
    "AllocationPlanner",
    "PlanResult",
    "PortfolioFocus",
    "RiskTolerance",
    "Allocation",
    "Ledger",
    "PerformancePoint",
    "Position",
    "LedgerStore",
    "InMemoryLedgerStore",
]
