"""Shared utilities: configuration, logging, exceptions and rounding."""

from portfolio_sim.utils.config import Config, apply_env_overrides, load_config
from portfolio_sim.utils.enums import parse_enum
from portfolio_sim.utils.logging import (
    get_logger,
    log_with_context,
    setup_logging,
    setup_logging_from_config,
)
from portfolio_sim.utils.money import percent_of, round_money

__all__ = [
    "Config",
    "apply_env_overrides",
    "load_config",
    "parse_enum",
    "get_logger",
    "log_with_context",
    "setup_logging",
    "setup_logging_from_config",
    "percent_of",
    "round_money",
]
