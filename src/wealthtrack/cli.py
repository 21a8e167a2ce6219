"""Command-line adapter over JSON portfolio snapshots."""

from __future__ import annotations

import json
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import click
from pydantic import ValidationError

from .config import BaseConfig
from .domain.accounts import Portfolio
from .logging_config import setup_logging
from .models import dump_portfolio, load_portfolio
from .services.debts import PayoffResult, PayoffStrategy, simulate
from .services.engine import catch_up, run
from .services.reminders import upcoming_reminders

_DATE = click.DateTime(formats=["%Y-%m-%d"])
_BUDGET = click.FloatRange(min=0)


def _read_snapshot(path: Path) -> dict[str, Any]:
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise click.ClickException(f"{path} must contain a JSON object.")
    return document


def _load(document: dict[str, Any], today: date) -> Portfolio:
    try:
        return load_portfolio(document, today=today)
    except ValidationError as exc:
        raise click.ClickException(f"Snapshot rejected: {exc}") from exc


def _day(value: Optional[datetime]) -> date:
    return value.date() if value else date.today()


def _finite(ctx: click.Context, param: click.Parameter, value: float) -> float:
    # FloatRange lets NaN through because every comparison with it is false.
    if not math.isfinite(value):
        raise click.BadParameter("must be a finite number.", ctx=ctx, param=param)
    return value


def _current(document: dict[str, Any], today: date) -> Portfolio:
    """Load the snapshot and apply recurring occurrences due up to ``today``."""

    return catch_up(_load(document, today), now=today).portfolio


def _describe(result: PayoffResult) -> str:
    label = result.strategy.value.capitalize()
    if not result.ok:
        return f"{label}: {result.error}"
    payoff = result.payoff_date.isoformat() if result.payoff_date else "-"
    return (
        f"{label}: {result.months} months, interest {result.total_interest_paid:,.2f}, "
        f"debt-free {payoff}"
    )


@click.group()
@click.option("--log", "enable_log", is_flag=True, default=False, help="Write JSON logs to DATA_DIR/logs")
@click.pass_context
def main(ctx: click.Context, enable_log: bool) -> None:
    """Financial projection engine for WealthTrack snapshots."""

    config = BaseConfig()
    ctx.obj = config
    if enable_log:
        setup_logging(config)


@main.command("catch-up")
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--now", "now", type=_DATE, default=None, help="Treat this date as today")
@click.option("--write", is_flag=True, default=False, help="Write the updated snapshot back")
def catch_up_command(snapshot: Path, now: Optional[datetime], write: bool) -> None:
    """Apply every recurring payment and contribution that has fallen due."""

    today = _day(now)
    document = _read_snapshot(snapshot)
    result = catch_up(_load(document, today), now=today)

    if not result.changed:
        click.echo("Nothing due.")
        return
    for occurrence in result.occurrences:
        click.echo(f"{occurrence.due_on.isoformat()}  {occurrence.account_id}  {occurrence.amount:,.2f}")
    click.echo(f"Applied {len(result.occurrences)} occurrence(s).")

    if write:
        updated = dump_portfolio(result.portfolio, into=document)
        snapshot.write_text(json.dumps(updated, indent=2), encoding="utf-8")
        click.echo(f"Snapshot updated: {snapshot}")


@main.command("simulate")
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--budget",
    type=_BUDGET,
    required=True,
    callback=_finite,
    help="Monthly amount available for debts",
)
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in PayoffStrategy]),
    default=None,
    help="Defaults to WEALTHTRACK_DEFAULT_STRATEGY",
)
@click.option("--show-months", is_flag=True, default=False, help="Print the monthly balance trajectory")
@click.option("--today", "today", type=_DATE, default=None, help="Treat this date as today")
@click.pass_obj
def simulate_command(
    config: BaseConfig,
    snapshot: Path,
    budget: float,
    strategy: Optional[str],
    show_months: bool,
    today: Optional[datetime],
) -> None:
    """Project the payoff of every debt under one strategy.

    Recurring payments already due are applied first, so the projection
    starts from the current balances.
    """

    day = _day(today)
    portfolio = _current(_read_snapshot(snapshot), day)
    result = simulate(portfolio.debts, budget, strategy or config.DEFAULT_STRATEGY, today=day)
    click.echo(_describe(result))
    if show_months:
        for snap in result.snapshots:
            click.echo(f"M{snap.month}  {snap.total_balance:,.2f}")
    if not result.ok:
        click.get_current_context().exit(1)


@main.command("compare")
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--budget",
    type=_BUDGET,
    required=True,
    callback=_finite,
    help="Monthly amount available for debts",
)
@click.option("--today", "today", type=_DATE, default=None, help="Treat this date as today")
def compare_command(snapshot: Path, budget: float, today: Optional[datetime]) -> None:
    """Show snowball and avalanche side by side, after recurring catch-up."""

    day = _day(today)
    report = run(_load(_read_snapshot(snapshot), day), now=day, monthly_budget=budget)
    comparison = report.comparison
    click.echo(_describe(comparison.snowball))
    click.echo(_describe(comparison.avalanche))
    saved = comparison.interest_difference
    if saved is not None:
        click.echo(f"Avalanche saves {saved:,.2f} in interest.")


@main.command("upcoming")
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--days", type=int, default=None, help="Look-ahead window (default from config)")
@click.option("--today", "today", type=_DATE, default=None)
@click.pass_obj
def upcoming_command(
    config: BaseConfig, snapshot: Path, days: Optional[int], today: Optional[datetime]
) -> None:
    """List scheduled payments and contributions due soon, after recurring catch-up."""

    day = _day(today)
    portfolio = _current(_read_snapshot(snapshot), day)
    window = days if days is not None else config.REMINDER_WINDOW_DAYS
    reminders = upcoming_reminders(portfolio, today=day, window_days=window)
    if not reminders:
        click.echo("No scheduled items.")
        return
    for item in reminders:
        click.echo(f"{item.due_on.isoformat()}  {item.kind.value:<8} {item.name}  {item.amount:,.2f}")


if __name__ == "__main__":
    main()
