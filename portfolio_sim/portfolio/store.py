"""Ledger storage.

The engine only needs ``get`` and ``put``; swap ``InMemoryLedgerStore``
for another ``LedgerStore`` to back portfolios with real storage.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from portfolio_sim.portfolio.base import Ledger


class LedgerStore(ABC):
    """Abstract interface for portfolio storage."""

    @abstractmethod
    def get(self, ledger_id: str) -> Optional[Ledger]:
        """Return the ledger stored under ``ledger_id``, or None."""
        pass

    @abstractmethod
    def put(self, ledger_id: str, ledger: Ledger) -> None:
        """Store ``ledger`` under ``ledger_id``, replacing any previous one."""
        pass


class InMemoryLedgerStore(LedgerStore):
    """Process-local dict of ledgers; contents are lost on restart."""

    def __init__(self):
        self._lock = threading.Lock()
        self._ledgers: Dict[str, Ledger] = {}

    def get(self, ledger_id: str) -> Optional[Ledger]:
        with self._lock:
            return self._ledgers.get(ledger_id)

    def put(self, ledger_id: str, ledger: Ledger) -> None:
        with self._lock:
            self._ledgers[ledger_id] = ledger
