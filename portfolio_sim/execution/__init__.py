"""Execution Layer - Trade execution against portfolio ledgers."""

from portfolio_sim.execution.base import Trade, TradeAction
from portfolio_sim.execution.trade_executor import TradeExecutor

__all__ = [
    "TradeExecutor",
    "Trade",
    "TradeAction",
]
