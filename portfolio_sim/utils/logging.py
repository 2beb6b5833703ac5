"""Logging for the portfolio simulator.

Every package logger lives under the ``portfolio_sim`` namespace. The
console handler is attached to that namespace only, so an application
embedding the simulator keeps control of the root logger.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, TextIO

from portfolio_sim.utils.config import Config

LOGGER_NAMESPACE = "portfolio_sim"
CONSOLE_HANDLER_NAME = "portfolio_sim.console"
DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(str(level).upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def setup_logging(
    level: str | int = DEFAULT_LEVEL,
    log_format: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a console handler to the package logger.

    Calling again replaces the handler installed by the previous call.
    Unknown level names fall back to INFO.

    Args:
        level: Level name or number for the ``portfolio_sim`` logger
        log_format: Format string (default: ``DEFAULT_FORMAT``)
        stream: Output stream (default: stdout)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.set_name(CONSOLE_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(log_format or DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_parse_level(level))
    return logger


def setup_logging_from_config(config: Config) -> logging.Logger:
    """Configure logging from the ``logging`` config section.

    ``load_config`` has already folded ``PORTFOLIO_SIM_LOG_LEVEL`` into
    ``logging.level``.
    """
    return setup_logging(
        level=config.get("logging.level", DEFAULT_LEVEL),
        log_format=config.get("logging.format"),
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace.

    Module names inside the package are used as is; any other name is
    nested under ``portfolio_sim`` so it shares the console handler.
    """
    if name != LOGGER_NAMESPACE and not name.startswith(LOGGER_NAMESPACE + "."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


def _format_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float):
        return f"{value:.2f}"
    return value


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: Any,
) -> None:
    """Log a message followed by ``key=value`` context fields.

    Floats are written with two decimals (all amounts are dollars) and
    enum members as their value.

    Example:
        >>> log_with_context(
        ...     logger, "info", "Trade executed",
        ...     symbol="KO", action=TradeAction.BUY, price=60.85
        ... )
        # Logs: "Trade executed | symbol=KO action=buy price=60.85"
    """
    if context:
        fields = " ".join(f"{k}={_format_value(v)}" for k, v in context.items())
        message = f"{message} | {fields}"
    getattr(logger, level.lower())(message)
