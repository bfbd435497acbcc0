"""Mini README: Entry point CLI for the FyNov finance tracker.

This script exposes a Typer CLI. ``run`` starts the FastAPI application under
uvicorn with configurable host, port and production flags, ``summary`` prints
the current month's figures straight from the configured store and ``reset``
wipes the stored records. Settings come from ``FYNOV_*`` environment variables.
"""

from __future__ import annotations

import typer
import uvicorn

from fynov.configuration import get_settings
from fynov.finance.records import Collection
from fynov.logging_utils import configure_root_logger
from fynov.presentation.formatting import CurrencyFormatter
from fynov.presentation.views import dashboard_summary, month_comparison
from fynov.storage import ProfileStore, RecordStore, create_backend

cli = typer.Typer(help="Launch and inspect the FyNov finance tracker.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses, point at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        "Starting FyNov on "
        f"{effective_host}:{effective_port}.\n"
        "Open your browser at "
        f"http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "fynov.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary() -> None:
    """Print this month's balance, totals and variations."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    store = RecordStore(create_backend(settings))
    formatter = CurrencyFormatter.from_settings(settings)

    income = store.list(Collection.INCOME)
    expenses = store.list(Collection.EXPENSES)
    goals = store.list(Collection.GOALS)
    figures = dashboard_summary(income, expenses, goals, formatter)  # type: ignore[arg-type]

    typer.echo(f"Balance:  {figures.balance_text}")
    for collection, records in ((Collection.INCOME, income), (Collection.EXPENSES, expenses)):
        comparison = month_comparison(collection, records, formatter)  # type: ignore[arg-type]
        typer.echo(
            f"{collection.value.capitalize():<9} {comparison.current_text} "
            f"(last month {comparison.previous_text}, {comparison.variation_text})"
        )
    for card in figures.top_goals:
        typer.echo(f"Goal '{card.title}': {card.percent}% of {card.target_text} - {card.tier.message}")


@cli.command()
def reset(
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt."),
    keep_profile: bool = typer.Option(False, help="Leave the saved profile in place."),
) -> None:
    """Delete every stored income, expense and goal record."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    if not yes:
        typer.confirm("Delete all FyNov records?", abort=True)
    backend = create_backend(settings)
    removed = RecordStore(backend).clear()
    if not keep_profile:
        ProfileStore(backend).reset()
    typer.echo(f"Removed collections: {', '.join(removed) or 'none'}")


if __name__ == "__main__":
    cli()
