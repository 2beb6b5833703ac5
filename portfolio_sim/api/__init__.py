"""User-friendly APIs for the portfolio simulator.

Components:
- SimulatorAPI: Create, inspect, trade and refresh simulated portfolios
"""

from portfolio_sim.api.simulator_api import SimulatorAPI

__all__ = ["SimulatorAPI"]
