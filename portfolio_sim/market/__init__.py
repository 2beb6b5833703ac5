"""Market Layer - Simulated price movement."""

from portfolio_sim.market.price_simulator import PriceSimulator

__all__ = ["PriceSimulator"]
