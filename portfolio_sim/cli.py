"""Command line front end for the portfolio simulator.

Examples:
    # List the instrument catalog
    portfolio-sim instruments

    # Build an aggressive tech portfolio, trade, and simulate three refreshes
    portfolio-sim simulate --balance 10000 --risk aggressive --focus tech \\
        --buy KO:10 --sell AAPL:2 --refreshes 3 --seed 42
"""

from typing import Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from portfolio_sim.api.simulator_api import SimulatorAPI
from portfolio_sim.portfolio.allocation_planner import PortfolioFocus, RiskTolerance
from portfolio_sim.utils.config import load_config
from portfolio_sim.utils.logging import setup_logging_from_config

console = Console()


def parse_trade(value: str) -> Tuple[str, int]:
    """Parse a ``SYMBOL:QTY`` string.

    Raises:
        click.BadParameter: If the string is malformed
    """
    if ":" not in value:
        raise click.BadParameter(f"expected SYMBOL:QTY, got '{value}'")
    symbol, qty = value.split(":", 1)
    try:
        return symbol.strip().upper(), int(qty)
    except ValueError:
        raise click.BadParameter(f"quantity must be an integer in '{value}'") from None


def build_api(config_path: Optional[str], seed: Optional[int]) -> SimulatorAPI:
    """Load configuration, set up logging and build the API."""
    config = load_config(config_path)
    if seed is not None:
        config.set("engine.seed", seed)
    setup_logging_from_config(config)
    return SimulatorAPI(config=config)


def print_portfolio(api: SimulatorAPI, portfolio: Dict) -> None:
    """Print positions, totals and performance history."""
    positions = api.format_positions(portfolio)

    table = Table(title=f"Portfolio {portfolio['id']}")
    table.add_column("Symbol", style="cyan")
    table.add_column("Shares", justify="right")
    table.add_column("Avg Cost", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("P/L", justify="right")
    table.add_column("Weight", justify="right")

    for _, row in positions.iterrows():
        pnl_style = "green" if row["unrealized_pnl"] >= 0 else "red"
        table.add_row(
            row["symbol"],
            str(row["shares"]),
            f"${row['avg_cost']:,.2f}",
            f"${row['current_price']:,.2f}",
            f"${row['market_value']:,.2f}",
            f"[{pnl_style}]{row['unrealized_pnl']:+,.2f}[/{pnl_style}]",
            f"{row['weight_pct']:.1f}%",
        )
    console.print(table)

    allocation = portfolio["allocation"]
    console.print(
        f"Cash: ${portfolio['cash']:,.2f}  "
        f"Total: ${portfolio['total_value']:,.2f}  "
        f"P/L: {portfolio['total_profit_loss']:+,.2f}  "
        f"Allocation: {allocation['stocks']}% stocks / {allocation['cash']}% cash"
    )

    history = api.format_performance(portfolio)
    history_table = Table(title="Performance")
    history_table.add_column("Date")
    history_table.add_column("Value", justify="right")
    for day, row in history.iterrows():
        history_table.add_row(day.strftime("%Y-%m-%d"), f"${row['value']:,.2f}")
    console.print(history_table)


@click.group()
def cli():
    """Portfolio Simulator"""
    pass


@cli.command()
@click.option("--config", "config_path", type=click.Path(exists=True), help="YAML config file")
def instruments(config_path: Optional[str]) -> None:
    """List tradable instruments."""
    api = build_api(config_path, seed=None)

    table = Table(title="Instruments")
    table.add_column("Symbol", style="cyan")
    table.add_column("Name")
    table.add_column("Sector")
    table.add_column("Price", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Volatility", justify="right")
    table.add_column("Yield", justify="right")

    for item in api.list_instruments():
        table.add_row(
            item["symbol"],
            item["name"],
            item["sector"],
            f"${item['price']:,.2f}",
            f"{item['change']:+.2f}%",
            f"{item['volatility']:.2f}",
            f"{item['dividend_yield']:.2f}%",
        )
    console.print(table)


@cli.command()
@click.option("--balance", type=float, default=10000.0, help="Initial balance")
@click.option(
    "--risk",
    type=click.Choice([r.value for r in RiskTolerance]),
    default="moderate",
    help="Risk tolerance",
)
@click.option(
    "--focus",
    type=click.Choice([f.value for f in PortfolioFocus]),
    default="diversified",
    help="Portfolio focus",
)
@click.option("--buy", multiple=True, help="Buy order SYMBOL:QTY (repeatable)")
@click.option("--sell", multiple=True, help="Sell order SYMBOL:QTY (repeatable)")
@click.option("--refreshes", type=int, default=0, help="Number of price refreshes")
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option("--config", "config_path", type=click.Path(exists=True), help="YAML config file")
def simulate(
    balance: float,
    risk: str,
    focus: str,
    buy: tuple,
    sell: tuple,
    refreshes: int,
    seed: Optional[int],
    config_path: Optional[str],
) -> None:
    """Create a portfolio, apply trades and simulate price moves."""
    orders: List[Tuple[str, str, int]] = [("sell", *parse_trade(s)) for s in sell]
    orders += [("buy", *parse_trade(b)) for b in buy]

    api = build_api(config_path, seed)

    created = api.create_portfolio(balance, risk, focus)
    if not created["success"]:
        raise click.ClickException(created["message"])
    console.print(f"[bold]{created['message']}[/bold]")
    portfolio_id = created["portfolio"]["id"]

    # Sells first to free up cash
    for action, symbol, quantity in orders:
        result = api.execute_trade(portfolio_id, symbol, action, quantity)
        style = "green" if result["success"] else "red"
        console.print(f"[{style}]{result['message']}[/{style}]")

    for _ in range(refreshes):
        result = api.refresh_prices(portfolio_id)
        console.print(result["message"])

    print_portfolio(api, api.get_portfolio(portfolio_id))


if __name__ == "__main__":
    cli()
