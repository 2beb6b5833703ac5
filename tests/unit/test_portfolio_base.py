"""Unit tests for Portfolio base data structures."""

from datetime import datetime

import pytest

from portfolio_sim.catalog.base import Quote
from portfolio_sim.portfolio.base import (
    Allocation,
    Ledger,
    PerformancePoint,
    Position,
)


class TestPosition:
    """Test cases for Position dataclass."""

    def test_position_creation(self) -> None:
        """Test creating a position."""
        position = Position(symbol="AAPL", name="Apple Inc.", shares=10, avg_cost=150.0)

        assert position.shares == 10
        assert position.avg_cost == 150.0
        assert position.market_value == 0.0
        assert position.cost_basis == 1500.0

    def test_position_invalid_shares_zero(self) -> None:
        """Test position rejects zero shares."""
        with pytest.raises(ValueError, match="shares must be positive"):
            Position(symbol="AAPL", name="Apple Inc.", shares=0, avg_cost=150.0)

    def test_position_invalid_avg_cost(self) -> None:
        """Test position rejects non-positive cost basis."""
        with pytest.raises(ValueError, match="avg_cost must be positive"):
            Position(symbol="AAPL", name="Apple Inc.", shares=1, avg_cost=0.0)

    def test_revalue_gain(self) -> None:
        """Test revaluation above cost basis."""
        position = Position(symbol="ACME", name="Acme", shares=10, avg_cost=100.0)
        position.revalue(110.0, 2.5)

        assert position.current_price == 110.0
        assert position.change == 2.5
        assert position.market_value == 1100.0
        assert position.unrealized_pnl == 100.0

    def test_revalue_loss(self) -> None:
        """Test revaluation below cost basis."""
        position = Position(symbol="ACME", name="Acme", shares=4, avg_cost=25.0)
        position.revalue(20.0, -1.0)

        assert position.market_value == 80.0
        assert position.unrealized_pnl == -20.0


class TestLedger:
    """Test cases for Ledger dataclass."""

    @pytest.fixture
    def ledger(self) -> Ledger:
        """Create ledger with one position and a short history."""
        return Ledger(
            id="pf-test",
            cash=1000.0,
            positions={
                "AAPL": Position(symbol="AAPL", name="Apple Inc.", shares=10, avg_cost=150.0)
            },
            performance=[
                PerformancePoint(date="2026-01-01", value=2900.0),
                PerformancePoint(date="2026-01-02", value=2950.0),
            ],
        )

    def test_ledger_invalid_cash(self) -> None:
        """Test ledger rejects negative cash."""
        with pytest.raises(ValueError, match="cash must be non-negative"):
            Ledger(id="pf-test", cash=-1.0)

    def test_ledger_defaults(self) -> None:
        """Test empty ledger defaults."""
        ledger = Ledger(id="pf-test", cash=500.0)

        assert ledger.positions == {}
        assert ledger.performance == []
        assert ledger.allocation == Allocation(stocks=0, cash=0)
        assert isinstance(ledger.created_at, datetime)

    def test_revalue_totals(self, ledger: Ledger) -> None:
        """Test revaluation rebuilds totals from scratch."""
        ledger.revalue({"AAPL": Quote("AAPL", 200.0, 1.0)})

        assert ledger.positions["AAPL"].market_value == 2000.0
        assert ledger.stock_value == 2000.0
        assert ledger.total_value == 3000.0
        assert ledger.total_profit_loss == 500.0
        assert ledger.allocation == Allocation(stocks=67, cash=33)

    def test_revalue_conservation(self, ledger: Ledger) -> None:
        """Test total value equals cash plus position values."""
        ledger.revalue({"AAPL": Quote("AAPL", 187.33, 0.4)})

        expected = round(ledger.cash + sum(p.market_value for p in ledger.positions.values()), 2)
        assert ledger.total_value == expected

    def test_revalue_overwrites_only_today(self, ledger: Ledger) -> None:
        """Test only the last performance point tracks the live value."""
        ledger.revalue({"AAPL": Quote("AAPL", 200.0, 1.0)})

        assert ledger.performance[0].value == 2900.0
        assert ledger.performance[-1].value == 3000.0

    def test_revalue_missing_quote_keeps_price(self, ledger: Ledger) -> None:
        """Test a position without a quote keeps its last price."""
        ledger.revalue({"AAPL": Quote("AAPL", 200.0, 1.0)})
        ledger.revalue({})

        assert ledger.positions["AAPL"].current_price == 200.0
        assert ledger.total_value == 3000.0

    def test_revalue_zero_total(self) -> None:
        """Test allocation is 0/0 when the ledger is worth nothing."""
        ledger = Ledger(id="pf-test", cash=0.0)
        ledger.revalue({})

        assert ledger.total_value == 0.0
        assert ledger.allocation == Allocation(stocks=0, cash=0)

    def test_revalue_all_cash(self) -> None:
        """Test an all-cash ledger is 100% cash."""
        ledger = Ledger(id="pf-test", cash=250.0)
        ledger.revalue({})

        assert ledger.total_value == 250.0
        assert ledger.allocation == Allocation(stocks=0, cash=100)

    def test_holds_and_get_position(self, ledger: Ledger) -> None:
        """Test position lookups."""
        assert ledger.holds("AAPL")
        assert not ledger.holds("MSFT")
        assert ledger.get_position("AAPL").shares == 10
        assert ledger.get_position("MSFT") is None

    def test_new_id_format(self) -> None:
        """Test generated ids are prefixed and unique."""
        first = Ledger.new_id()
        second = Ledger.new_id()

        assert first.startswith("pf-")
        assert len(first.split("-")) == 3
        assert first != second

    def test_to_dict(self, ledger: Ledger) -> None:
        """Test plain-data view of a ledger."""
        ledger.revalue({"AAPL": Quote("AAPL", 200.0, 1.0)})
        data = ledger.to_dict()

        assert data["id"] == "pf-test"
        assert data["cash"] == 1000.0
        assert data["allocation"] == {"stocks": 67, "cash": 33}
        assert data["positions"][0]["symbol"] == "AAPL"
        assert data["positions"][0]["market_value"] == 2000.0
        assert data["performance"][-1] == {"date": "2026-01-02", "value": 3000.0}
        assert isinstance(data["created_at"], str)
