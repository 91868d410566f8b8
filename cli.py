# cli.py
"""Interactive terminal viewer for the product catalog."""
import argparse
import logging
import sys
from datetime import datetime
from typing import Optional

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.status import Status
from rich.table import Table

from catalog_sdk.client import CatalogClient
from catalog_sdk.config import ViewSettings
from catalog_sdk.render import render_catalog, render_state
from catalog_sdk.view import CatalogView, ViewState, ViewStatus

console = Console()

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})

MENU_KEYS = ["r", "t", "h", "q", "refresh", "retry", "health", "quit", "exit"]


class ConsoleRenderer:
    """View listener: spinner while loading, full render once settled."""

    def __init__(self, console: Console):
        self.console = console
        self._status: Optional[Status] = None

    def __call__(self, state: ViewState) -> None:
        if state.status is ViewStatus.LOADING:
            if self._status is None:
                self._status = self.console.status("Loading products...")
                self._status.start()
            return
        if self._status is not None:
            self._status.stop()
            self._status = None
        self.console.print(render_state(state))


def create_header(base_url: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=24)
    header.add_column("center", width=40)
    header.add_column("right", width=24)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row("🛍️ Catalog Viewer", f"[bold blue]{base_url}[/bold blue]", f"[dim]{now}[/dim]")
    return Panel(header, style="bold blue")


def show_menu():
    menu_table = Table.grid(padding=(0, 2))
    menu_table.add_column("Key", style="bold cyan", width=4)
    menu_table.add_column("Option", width=30)
    menu_table.add_row("r", "🔄 Refresh (uses local cache)")
    menu_table.add_row("t", "🔁 Retry (always fetches)")
    menu_table.add_row("h", "❤️ Service health")
    menu_table.add_row("q", "👋 Quit")
    console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))


def show_health(client: CatalogClient):
    try:
        health = client.health()
    except Exception as e:
        console.print(Panel.fit(f"[red]Health check failed: {escape(str(e))}[/red]", title="Status"))
        return
    console.print(Panel.fit(
        f"[green]{escape(str(health.get('status', 'unknown')))}[/green] at {escape(str(health.get('timestamp', '?')))}",
        title="❤️ Health",
    ))


def menu(view: CatalogView, client: CatalogClient):
    console.clear()
    console.print(create_header(client.base_url))
    view.subscribe(ConsoleRenderer(console))
    view.ensure_fresh()

    while True:
        show_menu()
        choice = prompt(
            "Choose an option ",
            completer=WordCompleter(MENU_KEYS, ignore_case=True),
            style=custom_style,
        ).strip().lower()

        if choice in ("r", "refresh"):
            if not view.ensure_fresh() and view.state.status is ViewStatus.LOADED:
                console.print("[dim]Showing cached catalog.[/dim]")
                console.print(render_catalog(view.state.envelope))
        elif choice in ("t", "retry"):
            view.retry()
        elif choice in ("h", "health"):
            show_health(client)
        elif choice in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye 👋[/bold green]"))
                return
        else:
            console.print(f"[yellow]Unknown option: {choice}[/yellow]")

        console.print()
        console.rule(style="dim")


def main(argv=None):
    defaults = ViewSettings()
    parser = argparse.ArgumentParser(description="Catalog viewer")
    parser.add_argument("--base-url", default=defaults.base_url, help="Catalog service URL")
    parser.add_argument("--timeout", type=float, default=defaults.timeout, help="Request timeout in seconds")
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    settings = ViewSettings(base_url=args.base_url, timeout=args.timeout)
    client = CatalogClient(base_url=settings.base_url, timeout=settings.timeout)
    view = CatalogView(client, freshness_window=settings.freshness_window)

    try:
        menu(view, client)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
