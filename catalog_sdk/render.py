# catalog_sdk/render.py
import enum
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from rich import box
from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from catalog_service.models import CatalogEnvelope, Product

from .view import ViewState, ViewStatus

LOW_STOCK_LIMIT = 10
EMPTY_MESSAGE = "No products available right now."
RETRY_HINT = "Press t to retry."


class StockTier(enum.Enum):
    PLENTY = "plenty"
    LOW = "low"
    NONE = "none"


_TIER_STYLE = {
    StockTier.PLENTY: ("green", "In stock"),
    StockTier.LOW: ("yellow", "Low stock"),
    StockTier.NONE: ("red", "Out of stock"),
}


def stock_tier(stock: int) -> StockTier:
    if stock > LOW_STOCK_LIMIT:
        return StockTier.PLENTY
    if stock > 0:
        return StockTier.LOW
    return StockTier.NONE


def _as_utc(when: datetime) -> datetime:
    # naive timestamps are taken to be UTC already
    if when.tzinfo is None:
        return when
    return when.astimezone(timezone.utc)


def format_price(price) -> str:
    return str(Decimal(str(price)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


# ---------------------------
# Display helpers
# ---------------------------
def product_card(product: Product) -> Panel:
    style, label = _TIER_STYLE[stock_tier(product.stock)]
    body = Table.grid(padding=(0, 1))
    body.add_column(style="dim")
    body.add_column()
    body.add_row("Price", f"${format_price(product.price)}")
    body.add_row("Stock", Text(f"{label} ({product.stock})", style=style))
    body.add_row("Category", Text(product.category.name))
    return Panel(
        Group(Text(product.description, style="italic"), body),
        title=f"[bold]{escape(product.name)}[/bold]",
        box=box.ROUNDED,
        border_style=style,
        width=40,
    )


def render_catalog(envelope: CatalogEnvelope) -> RenderableType:
    if not envelope.products:
        return Panel(Text(EMPTY_MESSAGE, style="italic yellow"), title="📦 Products Catalog", border_style="yellow")

    header = Text.assemble(
        ("📦 Products Catalog", "bold magenta"),
        f"  {envelope.total_count} products, updated {_as_utc(envelope.timestamp):%Y-%m-%d %H:%M:%S} UTC",
    )
    grid = Table.grid(padding=1)
    for _ in range(min(3, len(envelope.products))):
        grid.add_column()
    row = []
    for product in envelope.products:
        row.append(product_card(product))
        if len(row) == 3:
            grid.add_row(*row)
            row = []
    if row:
        grid.add_row(*row)
    return Group(header, grid)


def render_state(state: ViewState) -> RenderableType:
    if state.status is ViewStatus.LOADING:
        return Spinner("dots", text="Loading products...")
    if state.status is ViewStatus.FAILED:
        message = Text.assemble((state.message, "red"), "\n", (RETRY_HINT, "bold"))
        return Panel.fit(message, title="❌ Error", border_style="red")
    return render_catalog(state.envelope)
