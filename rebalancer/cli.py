"""Rebalance command-line tool.

Examples:
    # Orders for the bundled demo fixtures
    rebalancer orders

    # Custom inputs, fractional shares, larger spend
    rebalancer orders --model my-model.json --portfolio snapshot.yaml \\
        --market quotes.yaml --limit 10000 --fractional

    # Check a model definition
    rebalancer validate-model my-model.json
"""

import sys
from pathlib import Path
from typing import Optional

import click

from rebalancer.api.rebalance_api import RebalanceAPI
from rebalancer.market.static_market import StaticMarket
from rebalancer.model.loader import load_model_from_file
from rebalancer.portfolio.base import load_portfolio_from_file
from rebalancer.utils.config import DATA_DIR, load_calculator_config
from rebalancer.utils.exceptions import RebalancerError
from rebalancer.utils.logging import setup_logging, setup_logging_from_config


def resolve_path(value: Optional[str], fallback: Optional[str]) -> Path:
    """Resolve a CLI path, falling back to a config path relative to the bundled data."""
    if value:
        return Path(value)
    if not fallback:
        raise click.UsageError("no input path given and none configured")
    path = Path(fallback)
    return path if path.is_absolute() else DATA_DIR / path


@click.group()
def cli():
    """Portfolio Rebalancer"""
    pass


@cli.command()
@click.option("--config", "config_path", type=click.Path(exists=True), help="YAML config file")
@click.option("--model", "model_path", type=str, help="Model definition (.json/.yaml)")
@click.option("--market", "market_path", type=str, help="Market quotes (.json/.yaml)")
@click.option("--portfolio", "portfolio_path", type=str, help="Portfolio snapshot (.json/.yaml)")
@click.option("--limit", type=float, help="Maximum cash to spend")
@click.option("--fractional/--no-fractional", default=None, help="Allow fractional shares")
@click.option("--log-level", type=str, help="Logging level")
def orders(
    config_path: Optional[str],
    model_path: Optional[str],
    market_path: Optional[str],
    portfolio_path: Optional[str],
    limit: Optional[float],
    fractional: Optional[bool],
    log_level: Optional[str],
):
    """Calculate rebalancing orders.

    Inputs default to the fixtures named in the configuration.
    """
    try:
        config = load_calculator_config(config_path)
        if fractional is not None:
            config = config.with_overrides({"calculator.support_fractional_share": fractional})

        if log_level:
            setup_logging(level=log_level)
        else:
            setup_logging_from_config(config)

        model = load_model_from_file(resolve_path(model_path, config.get("fixtures.model")))
        market = StaticMarket.from_file(resolve_path(market_path, config.get("fixtures.market")))
        portfolio = load_portfolio_from_file(
            resolve_path(portfolio_path, config.get("fixtures.portfolio"))
        )

        if limit is None:
            limit = config.get_float("rebalance.limit", portfolio.cash_amount())

        api = RebalanceAPI(config=config)
        result = api.rebalance(market, model, portfolio, limit)
    except (RebalancerError, FileNotFoundError) as e:
        raise click.ClickException(str(e)) from e

    click.echo("=" * 70)
    click.echo("PORTFOLIO REBALANCE")
    click.echo("=" * 70)
    click.echo(f"Model symbols: {len(model.symbols())}")
    click.echo(f"Cash:          ${portfolio.cash_amount():,.2f}")
    click.echo(f"Limit:         ${limit:,.2f}")
    click.echo()

    if not result.orders:
        click.echo("No orders needed.")
        return

    click.echo(api.format_orders(result.orders).to_string(index=False))
    click.echo()
    click.echo(f"Total buy:     ${result.total_buy_value:,.2f}")
    click.echo(f"Total sell:    ${result.total_sell_value:,.2f}")
    click.echo(f"Cash after:    ${result.estimated_cash_after:,.2f}")


@cli.command("validate-model")
@click.argument("model_path", type=click.Path(exists=True))
def validate_model(model_path: str):
    """Validate a model definition file.

    MODEL_PATH: Model definition (.json/.yaml)
    """
    try:
        model = load_model_from_file(model_path)
    except RebalancerError as e:
        click.echo(f"Invalid model: {type(e).__name__}: {e}", err=True)
        sys.exit(1)

    click.echo(f"Model OK: {len(model.symbols())} assets, {len(model.equivalent_symbols())} equivalents")


if __name__ == "__main__":
    cli()
