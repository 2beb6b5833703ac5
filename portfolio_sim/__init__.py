"""Portfolio simulation and trading engine.

Creates simulated investment accounts, allocates mock capital across a
catalog of instruments, executes market orders and simulates price moves.
"""

__version__ = "0.1.0"
