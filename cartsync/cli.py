"""
Interactive terminal shell for the cart app.

    $ python -m cartsync --base-url https://my-db.firebaseio.com

Each command is applied to the store, the app is rendered right away
(showing the pending notification when the cart changed), then rendered
again once the synchronization has settled.
"""

import argparse
import asyncio
import logging
from typing import List, Optional

from rich.console import Console

from .app import CartApp
from .client import CartClient
from .config import Settings, load_settings, parse_log_level
from .slices import add_item_to_cart, remove_item_from_cart, toggle_cart
from .store import CartStore

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Commands:
  products         list the products
  add <id>         add one unit of a product to the cart
  remove <id>      remove one unit of a product from the cart
  toggle           show or hide the cart panel
  help             show this help
  quit             leave the shell"""


class CommandError(ValueError):
    """The user typed a command the shell cannot run."""


def handle_command(app: CartApp, line: str) -> bool:
    """
    Apply one shell command to the app's store.

    Returns False when the shell should exit. Raises `CommandError` for
    unknown commands, missing arguments and unknown product ids.
    """
    parts = line.split()
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit", "q"):
        return False
    if command in ("help", "products", "show"):
        return True
    if command == "toggle":
        app.store.dispatch(toggle_cart())
        return True
    if command in ("add", "remove"):
        if len(args) != 1:
            raise CommandError(f"usage: {command} <product-id>")
        product = app.find_product(args[0])
        if product is None:
            raise CommandError(f"unknown product: {args[0]}")
        if command == "add":
            app.store.dispatch(add_item_to_cart(product))
        else:
            app.store.dispatch(remove_item_from_cart(product.id))
        return True
    raise CommandError(f"unknown command: {command} (type 'help')")


async def run_shell(settings: Settings, console: Optional[Console] = None) -> None:
    console = console or Console()
    store = CartStore()

    async with CartClient(settings.base_url, timeout=settings.timeout) as client:
        app = CartApp(store, client).mount()
        console.print(app)
        console.print(HELP_TEXT, style="dim")

        while True:
            try:
                line = await asyncio.to_thread(console.input, "[bold]> [/bold]")
            except EOFError:
                break

            try:
                keep_running = handle_command(app, line)
            except CommandError as exc:
                console.print(f"[red]{exc}[/red]")
                continue
            if not keep_running:
                break
            if line.strip().lower() == "help":
                console.print(HELP_TEXT, style="dim")
                continue

            console.print(app)
            if app.in_flight:
                await app.wait_idle()
                console.print(app)

        app.unmount()
        await app.wait_idle()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cartsync",
        description="Shopping cart shell that syncs the cart to a remote JSON datastore.",
    )
    parser.add_argument("--base-url", help="datastore base URL (overrides CARTSYNC_BASE_URL)")
    parser.add_argument("--log-level", help="logging level (overrides CARTSYNC_LOG_LEVEL)")
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command-line overrides applied. Raises ValueError."""
    settings = load_settings()
    if args.base_url or args.log_level:
        settings = Settings(
            base_url=(args.base_url or settings.base_url).rstrip("/"),
            timeout=settings.timeout,
            log_level=parse_log_level(args.log_level, "--log-level")
            if args.log_level
            else settings.log_level,
        )
    return settings


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger.debug("Using datastore %s", settings.base_url)

    try:
        asyncio.run(run_shell(settings))
    except KeyboardInterrupt:
        pass
