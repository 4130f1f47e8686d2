from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer

from storefront.config import Settings, get_settings
from storefront.infrastructure.api_client import ApiClient
from storefront.reporter import (
    format_countdown,
    print_dashboard,
    print_error,
    print_home,
    print_product,
    print_products,
)
from storefront.services.countdown import CountdownClock
from storefront.utils.logging import configure_logging
from storefront.views.catalog import HomeView, ProductDetailView, ProductListView
from storefront.views.dashboard import DashboardView
from storefront.views.state import LoadState

app = typer.Typer(help="Storefront and admin dashboard client.")


def build_client(settings: Settings) -> ApiClient:
    return ApiClient.from_settings(settings)


def _exit_on_error(state: LoadState) -> None:
    if state.is_error:
        raise typer.Exit(code=1)


@app.callback()
def setup(
    json_logs: Optional[bool] = typer.Option(
        None, "--json-logs/--plain-logs", help="Emit logs as JSON (default from settings)."
    ),
) -> None:
    """
    Configure logging for every command.
    """
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_logs=settings.log_json if json_logs is None else json_logs,
    )


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"API={settings.api_base_url} | users={','.join(settings.user_endpoints)} | "
        f"page_size={settings.items_per_page} window={settings.page_window_size} "
        f"recent_days={settings.recent_window_days}"
    )


async def _dashboard(settings: Settings, search: str, page: int) -> DashboardView:
    async with build_client(settings) as client:
        view = DashboardView.from_settings(client, settings)
        await view.load()
    view.set_search(search)
    view.go_to_page(page)
    return view


@app.command()
def dashboard(
    search: str = typer.Option("", "--search", "-q", help="Filter by name, email or phone."),
    page: int = typer.Option(1, "--page", "-p", help="Listing page (clamped into range)."),
) -> None:
    """
    Show account counts and a page of the account listing.
    """
    settings = get_settings()
    view = asyncio.run(_dashboard(settings, search, page))
    print_dashboard(view)
    _exit_on_error(view.state)


async def _products(settings: Settings) -> ProductListView:
    async with build_client(settings) as client:
        view = ProductListView.from_settings(client, settings)
        await view.load()
    return view


@app.command()
def products() -> None:
    """
    List the catalog.
    """
    view = asyncio.run(_products(get_settings()))
    if view.state.is_error:
        print_error(view.state)
    else:
        print_products(view.products)
    _exit_on_error(view.state)


async def _product(settings: Settings, product_id: str) -> ProductDetailView:
    async with build_client(settings) as client:
        view = ProductDetailView.from_settings(client, settings)
        await view.load(product_id)
    return view


@app.command()
def product(product_id: str = typer.Argument(..., help="Product identifier.")) -> None:
    """
    Show one product.
    """
    view = asyncio.run(_product(get_settings(), product_id))
    if view.product is not None:
        print_product(view.product)
    else:
        print_error(view.state)
    _exit_on_error(view.state)


async def _home(settings: Settings) -> HomeView:
    async with build_client(settings) as client:
        view = HomeView.from_settings(client, settings)
        try:
            await view.mount()
        finally:
            await view.unmount()
    return view


@app.command()
def home() -> None:
    """
    Show the landing page: categories, featured products and best sellers.
    """
    view = asyncio.run(_home(get_settings()))
    print_home(view)
    _exit_on_error(view.state)


async def _countdown(settings: Settings, ticks: int, interval: Optional[float]) -> None:
    done = asyncio.Event()
    seen = 0

    def on_tick(remaining) -> None:
        nonlocal seen
        seen += 1
        typer.echo(format_countdown(remaining))
        if seen >= ticks:
            done.set()

    clock = CountdownClock.from_settings(settings, on_tick=on_tick)
    if interval is not None:
        clock.interval_seconds = interval
    typer.echo(format_countdown(clock.remaining))
    if ticks <= 0:
        return
    async with clock:
        await done.wait()


@app.command()
def countdown(
    ticks: int = typer.Option(5, "--ticks", "-n", help="Number of ticks to show."),
    interval: Optional[float] = typer.Option(
        None, "--interval", help="Seconds between ticks (default from settings)."
    ),
) -> None:
    """
    Run the flash-sale countdown for a few ticks.
    """
    asyncio.run(_countdown(get_settings(), ticks, interval))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
