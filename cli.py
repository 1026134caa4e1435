# interactive catalog manager
import asyncio
import logging
import sys
from datetime import datetime
from typing import Awaitable, Optional, TypeVar

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from shopmanage.client import CatalogClient
from shopmanage.config import get_settings
from shopmanage.errors import StoreError, ValidationError
from shopmanage.forms import FIELDS, ProductForm
from shopmanage.models import Product
from shopmanage.render import ProductGridView, render_card, render_products
from shopmanage.store import DELETE_PROMPT, ProductStore, StoreEvent

T = TypeVar("T")

console = Console()
_session: Optional[PromptSession] = None

STOCK_STYLES = {"out-of-stock": "red", "low-stock": "yellow", "in-stock": "green"}

FIELD_LABELS = {
    "title": "🏷️ Title",
    "price": "💰 Price",
    "category": "📂 Category",
    "description": "📝 Description",
    "thumbnail": "🖼️ Image URL",
    "stock": "📦 Stock",
}

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


# ---------------------------
# Display helpers
# ---------------------------
def show_products(view: ProductGridView):
    if view.empty:
        console.print(Panel("[italic yellow]No products found[/italic yellow]", title="📦 Products Catalog"))
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Title", style="bold", width=28)
    table.add_column("Category", width=14)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=14)

    for card in view.cards:
        style = STOCK_STYLES[card.stock_class]
        table.add_row(
            str(card.id),
            card.title,
            f"[blue]{card.category}[/blue]" if card.category else "",
            card.price_label,
            f"[{style}]{card.stock_label}[/{style}]",
        )
    console.print(table)


def show_product(product: Product):
    card = render_card(product)
    style = STOCK_STYLES[card.stock_class]
    lines = [
        f"[bold]{card.title}[/bold]",
        f"Category: [blue]{card.category or '-'}[/blue]",
        f"Price: [bold green]{card.price_label}[/bold green]",
        f"Stock: [{style}]{card.stock_label}[/{style}]",
    ]
    if card.description:
        lines.append(f"\n{card.description}")
    if card.thumbnail:
        lines.append(f"\n[dim]{card.thumbnail}[/dim]")
    console.print(Panel.fit("\n".join(lines), title=f"ℹ️ Product {card.id}", border_style="cyan"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def on_store_event(event: StoreEvent):
    console.print(show_status(event.message, event.ok))


# ---------------------------
# API wrapper
# ---------------------------
async def try_api(op: Awaitable[T]) -> Optional[T]:
    """
    Awaits a store operation with a spinner running.
    Store failures were already reported through on_store_event; they come back as None.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            return await op
    except StoreError:
        return None


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def get_session() -> PromptSession:
    global _session
    if _session is None:
        _session = PromptSession()
    return _session


async def prompt_with_autocomplete(message: str, completer=None, default: str = "") -> str:
    return await get_session().prompt_async(f"{message} ", completer=completer, style=custom_style, default=default)


def get_product_completer(store: ProductStore):
    return WordCompleter([str(p.id) for p in store.products], ignore_case=True)


async def ask_product_id(store: ProductStore) -> Optional[int]:
    raw = (await prompt_with_autocomplete("Enter product ID", completer=get_product_completer(store))).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Please enter a numeric product ID.[/red]")
        return None


async def fill_form(form: ProductForm) -> dict:
    console.print(Panel.fit(f"[bold]{form.title}[/bold]", border_style="blue"))
    fields = {}
    for name in FIELDS:
        fields[name] = await prompt_with_autocomplete(f"{FIELD_LABELS[name]}:", default=form.values[name])
    return fields


async def submit_form(store: ProductStore, form: ProductForm):
    fields = await fill_form(form)
    try:
        form.payload(fields)
    except ValidationError as exc:
        # parse failures never reach the store, so no event is emitted for them
        console.print(show_status(str(exc), False))
        return
    await try_api(form.submit(store, fields))


async def delete_product(store: ProductStore, pid: int, ask=None) -> Optional[bool]:
    # ask before the spinner starts so it cannot redraw over the prompt
    ask = ask or (lambda message: Confirm.ask(f"[red]{message}[/red]"))
    answer = ask(DELETE_PROMPT)
    return await try_api(store.delete(pid, confirm=lambda message: answer))


def create_header(settings):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ ShopManage",
        f"[bold blue]Catalog at {settings.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
async def menu(store: ProductStore, settings):
    form = ProductForm()

    console.clear()
    console.print(create_header(settings))

    store.on_event(on_store_event)
    store.subscribe(lambda products: show_products(render_products(products)))

    if await try_api(store.load()) is None:
        show_products(render_products([]))

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 Reload products", "4", "🗑️ Delete product"),
            ("2", "➕ Add product", "5", "ℹ️ View product"),
            ("3", "✏️ Edit product", "q", "👋 Quit"),
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = (await prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 6)] + ["q", "quit", "exit"])
        )).strip()

        if choice == "1":
            if await try_api(store.load()) is None:
                show_products(render_products([]))

        elif choice == "2":
            form.open_add()
            await submit_form(store, form)

        elif choice == "3":
            pid = await ask_product_id(store)
            if pid is not None and await try_api(form.open_edit(store, pid)) is not None:
                await submit_form(store, form)

        elif choice == "4":
            pid = await ask_product_id(store)
            if pid is not None:
                await delete_product(store, pid)

        elif choice == "5":
            pid = await ask_product_id(store)
            if pid is not None:
                product = await try_api(store.fetch_one(pid))
                if product is not None:
                    show_product(product)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for using ShopManage! 👋[/bold green]", title="Goodbye"))
                return

        # Add a separator before next iteration
        console.print()
        console.rule(style="dim")


async def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    async with CatalogClient(settings.base_url, settings.timeout) as client:
        await menu(ProductStore(client), settings)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
