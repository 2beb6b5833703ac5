"""Market-order execution against a portfolio ledger.

Trades fill instantly at the catalog's current price with no market
impact: executing a trade reads prices but never moves them. Each trade
runs validate -> apply -> revalue; a trade that fails validation raises
before anything is touched, so the ledger is left exactly as it was.
"""

import numbers

from portfolio_sim.catalog.instrument_catalog import InstrumentCatalog
from portfolio_sim.execution.base import Trade, TradeAction
from portfolio_sim.portfolio.base import Ledger, Position
from portfolio_sim.utils.enums import parse_enum
from portfolio_sim.utils.exceptions import (
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidInputError,
    NoPositionError,
    TradeRejectedError,
)
from portfolio_sim.utils.logging import get_logger, log_with_context
from portfolio_sim.utils.money import round_money

logger = get_logger(__name__)


class TradeExecutor:
    """Executes buy and sell orders on a ledger.

    Example:
        >>> executor = TradeExecutor(catalog)
        >>> trade = executor.execute(ledger, "AAPL", "buy", 10)
        >>> trade.description
        'Bought 10 shares of AAPL at $178.50'
    """

    def __init__(self, catalog: InstrumentCatalog):
        """Initialize executor.

        Args:
            catalog: Source of execution prices
        """
        self.catalog = catalog

    def execute(
        self,
        ledger: Ledger,
        symbol: str,
        action: TradeAction | str,
        quantity: int,
    ) -> Trade:
        """Validate and apply one trade, then revalue the ledger.

        Validation order (first failure wins): symbol, quantity, action,
        then cash for buys or holdings for sells.

        Args:
            ledger: Portfolio to trade in (mutated in place)
            symbol: Ticker symbol
            action: buy or sell
            quantity: Whole number of shares, at least 1

        Returns:
            The executed Trade

        Raises:
            InstrumentNotFoundError: Unknown symbol
            InvalidInputError: Bad quantity or action
            InsufficientFundsError: Buy costs more than available cash
            NoPositionError: Selling a symbol that is not held
            InsufficientSharesError: Selling more shares than held
        """
        # Validate
        instrument = self.catalog.lookup(symbol)
        if (
            isinstance(quantity, bool)
            or not isinstance(quantity, numbers.Integral)
            or quantity <= 0
        ):
            raise InvalidInputError(
                f"quantity must be a positive whole number, got {quantity!r}"
            )
        quantity = int(quantity)
        action = parse_enum(TradeAction, action, "action")

        # Fill price and revaluation come from the same snapshot
        quotes = self.catalog.quotes()
        price = quotes[instrument.symbol].price
        total = round_money(price * quantity)

        try:
            if action == TradeAction.BUY:
                self._validate_buy(ledger, total)
            else:
                self._validate_sell(ledger, symbol, quantity)
        except TradeRejectedError as e:
            log_with_context(
                logger,
                "warning",
                "Trade rejected",
                portfolio_id=ledger.id,
                action=action,
                symbol=symbol,
                shares=quantity,
                reason=e.error_code,
            )
            raise

        # Apply
        if action == TradeAction.BUY:
            self._apply_buy(ledger, instrument.symbol, instrument.name, quantity, price)
            ledger.cash = round_money(ledger.cash - total)
        else:
            self._apply_sell(ledger, symbol, quantity)
            ledger.cash = round_money(ledger.cash + total)

        # Revalue
        ledger.revalue(quotes)

        trade = Trade(
            action=action,
            symbol=symbol,
            shares=quantity,
            price=price,
            total=total,
        )
        log_with_context(
            logger,
            "info",
            "Trade executed",
            portfolio_id=ledger.id,
            action=action,
            symbol=symbol,
            shares=quantity,
            price=price,
            cash=ledger.cash,
            total_value=ledger.total_value,
        )
        return trade

    def _validate_buy(self, ledger: Ledger, total: float) -> None:
        if total > ledger.cash:
            raise InsufficientFundsError(
                f"Insufficient funds. Need ${total:.2f}, have ${ledger.cash:.2f}"
            )

    def _validate_sell(self, ledger: Ledger, symbol: str, quantity: int) -> None:
        position = ledger.get_position(symbol)
        if position is None:
            raise NoPositionError(f"You don't own any {symbol}")
        if quantity > position.shares:
            raise InsufficientSharesError(
                f"Can't sell {quantity} shares. You only own {position.shares}"
            )

    def _apply_buy(
        self, ledger: Ledger, symbol: str, name: str, quantity: int, price: float
    ) -> None:
        """Add shares, averaging the cost basis by share count."""
        position = ledger.get_position(symbol)
        if position is not None:
            total_shares = position.shares + quantity
            total_cost = position.shares * position.avg_cost + quantity * price
            position.avg_cost = round_money(total_cost / total_shares)
            position.shares = total_shares
        else:
            ledger.positions[symbol] = Position(
                symbol=symbol,
                name=name,
                shares=quantity,
                avg_cost=price,
            )

    def _apply_sell(self, ledger: Ledger, symbol: str, quantity: int) -> None:
        """Remove shares; cost basis is unchanged, empty positions are dropped."""
        position = ledger.positions[symbol]
        position.shares -= quantity

        # Remove position if fully closed
        if position.shares == 0:
            del ledger.positions[symbol]
