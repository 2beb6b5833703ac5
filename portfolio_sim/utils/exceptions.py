"""Custom exceptions for the portfolio simulator.

This module defines the exception hierarchy for the application.
Every exception carries an ``error_code`` that the API layer reports
back to callers in place of raising.
"""


class PortfolioSimError(Exception):
    """Base exception for all portfolio simulator errors.

    All custom exceptions in the application should inherit from this class.
    """

    error_code = "error"


class ConfigurationError(PortfolioSimError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Configuration file not found
        - Instrument catalog missing a required sector
        - Duplicate symbols in the instrument table
    """

    error_code = "configuration"


class InvalidInputError(PortfolioSimError):
    """Raised when a caller passes an unusable value.

    Examples:
        - Non-positive initial balance
        - Zero, negative or fractional trade quantity
        - Unknown risk tolerance, focus or trade action
    """

    error_code = "invalid_input"


class NotFoundError(PortfolioSimError):
    """Base exception for lookups that find nothing."""

    error_code = "not_found"


class LedgerNotFoundError(NotFoundError):
    """Raised when no portfolio is stored under the requested id."""

    pass


class InstrumentNotFoundError(NotFoundError):
    """Raised when a symbol is not in the instrument catalog."""

    pass


class PortfolioError(PortfolioSimError):
    """Base exception for portfolio layer errors.

    Parent class for all portfolio-related exceptions.
    """

    error_code = "portfolio"


class AllocationError(PortfolioError):
    """Raised when portfolio allocation fails.

    Examples:
        - Focus selects no instruments from the catalog
        - Investment amount too small to buy a single share
    """

    error_code = "allocation"


class TradeRejectedError(PortfolioSimError):
    """Base exception for trades that fail validation.

    A rejected trade never changes the portfolio.
    """

    error_code = "trade_rejected"


class InsufficientFundsError(TradeRejectedError):
    """Raised when a buy costs more than the available cash."""

    error_code = "insufficient_funds"


class InsufficientSharesError(TradeRejectedError):
    """Raised when a sell asks for more shares than are held."""

    error_code = "insufficient_shares"


class NoPositionError(TradeRejectedError):
    """Raised when selling a symbol the portfolio does not hold."""

    error_code = "no_position"
