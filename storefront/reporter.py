from __future__ import annotations

from typing import Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from storefront.domain.models import CategoryRecord, ProductRecord, TimeRemaining
from storefront.services.pricing import (
    discount_badge,
    display_price,
    format_currency,
    format_short_date,
    parse_rating,
    struck_price,
)
from storefront.views.catalog import HomeView
from storefront.views.dashboard import DashboardView
from storefront.views.state import LoadState


def _price_cell(product: ProductRecord) -> str:
    price = format_currency(display_price(product))
    struck = struck_price(product)
    if struck is not None:
        price = f"{price} [dim strike]{format_currency(struck)}[/dim strike]"
    return price


def _badges(product: ProductRecord) -> str:
    parts: List[str] = []
    if not product.in_stock:
        parts.append("[red]Out of Stock[/red]")
    badge = discount_badge(product)
    if badge:
        parts.append(f"[green]{badge}[/green]")
    if product.featured:
        parts.append("[yellow]Featured[/yellow]")
    return " ".join(parts)


def _rating_cell(product: ProductRecord) -> str:
    return product.rating if parse_rating(product.rating) > 0 else ""


def format_countdown(remaining: TimeRemaining) -> str:
    return (
        f"{remaining.days:02d}d {remaining.hours:02d}h "
        f"{remaining.minutes:02d}m {remaining.seconds:02d}s"
    )


def print_error(state: LoadState, console: Optional[Console] = None) -> None:
    """Render a blocking error with its retry hint."""
    console = console or Console()
    console.print(
        Panel(
            f"{escape(state.message or 'Something went wrong')}\n\n[dim]Run the command again to retry.[/dim]",
            title="Something went wrong",
            border_style="red",
        )
    )


def print_dashboard(view: DashboardView, console: Optional[Console] = None) -> None:
    """
    Render dashboard counts, the advisory (if any) and the current listing page.
    """
    console = console or Console()

    if view.state.is_error:
        print_error(view.state, console)
        return

    stats = view.stats
    cards = Table(title="Dashboard", box=box.ROUNDED)
    cards.add_column("Total Users", justify="right", style="cyan")
    cards.add_column("Active Users", justify="right", style="green")
    cards.add_column("New (30 days)", justify="right", style="magenta")
    cards.add_column("With Email", justify="right", style="yellow")
    cards.add_row(
        str(stats.total_users),
        str(stats.active_users),
        str(stats.recent_users),
        str(stats.users_with_email),
    )
    console.print(cards)

    if view.state.is_advisory:
        console.print(
            Panel(
                "The user management features are currently unavailable.\n"
                "Please check your API configuration.",
                title=view.state.message,
                border_style="yellow",
            )
        )
        return

    if not view.users:
        console.print("[yellow]No users found.[/yellow]")
        return

    caption = view.page_summary
    table = Table(
        title=f"Users (source: {view.source})",
        box=box.ROUNDED,
        caption=caption,
    )
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Email")
    table.add_column("Phone")
    table.add_column("Status", style="green")
    table.add_column("Joined", justify="right")

    for user in view.page_items:
        table.add_row(
            escape(user.name or ""),
            escape(user.email or ""),
            escape(user.phone or ""),
            user.status_label,
            format_short_date(user.created_at),
        )
    console.print(table)

    pages = view.pagination.total_pages
    if pages > 1:
        buttons = " ".join(
            f"[bold reverse] {page} [/bold reverse]" if page == view.current_page else f" {page} "
            for page in view.page_window
        )
        console.print(f"Pages: {buttons}  ({view.current_page}/{pages})")


def print_products(
    products: Iterable[ProductRecord],
    title: str = "Products",
    console: Optional[Console] = None,
) -> None:
    console = console or Console()
    products = list(products)
    if not products:
        console.print("[yellow]No products available.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Product", style="cyan")
    table.add_column("Brand")
    table.add_column("Price", justify="right", style="bold green")
    table.add_column("Rating", justify="right", style="yellow")
    table.add_column("Availability")
    table.add_column("Badges")

    for product in products:
        table.add_row(
            product.product_id,
            escape(product.name),
            escape(product.brand.name) if product.brand else "",
            _price_cell(product),
            _rating_cell(product),
            escape(product.availability),
            _badges(product),
        )
    console.print(table)


def print_product(product: ProductRecord, console: Optional[Console] = None) -> None:
    console = console or Console()
    lines = [f"[bold green]{_price_cell(product)}[/bold green]"]
    badges = _badges(product)
    if badges:
        lines.append(badges)
    if product.description:
        lines.append("")
        lines.append(escape(product.description))
    console.print(Panel("\n".join(lines), title=product.name or product.product_id))


def print_categories(categories: Iterable[CategoryRecord], console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title="Shop by Category", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Category", style="cyan")
    for category in categories:
        table.add_row(category.category_id, escape(category.name))
    console.print(table)


def print_home(view: HomeView, console: Optional[Console] = None) -> None:
    console = console or Console()
    if view.state.is_error:
        print_error(view.state, console)
        return

    if view.shown_categories:
        print_categories(view.shown_categories, console)
    print_products(view.shown_products, title="Featured Products", console=console)
    console.print(
        Panel(format_countdown(view.clock.remaining), title="Flash Sale ends in", border_style="red")
    )
    if view.best_sellers:
        print_products(view.best_sellers, title="Best Sellers", console=console)
