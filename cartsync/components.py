"""
Presentational components for the cart UI.

Components are pure functions: props in, Rich renderable out. They hold no
state of their own and never touch the store; the root component reads the
store and passes plain values down as props.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import CartState, Notification as NotificationValue, NotificationStatus, Product


class Component(ABC):
    """
    Base component with props.
    """

    def __init__(self, **props):
        self.props = props

    @abstractmethod
    def render(self) -> RenderableType:
        """Transform props into Rich renderables"""
        pass

    def __rich_console__(self, console, options):
        """Rich console protocol - delegate to render()"""
        yield from console.render(self.render(), options)

    def __call__(self, **new_props) -> "Component":
        """Create new instance with updated props (immutable pattern)"""
        return self.__class__(**{**self.props, **new_props})

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(sorted(self.props))})"


def _render_children(children: Iterable) -> List[RenderableType]:
    renderables = []
    for child in children:
        if isinstance(child, Component):
            renderables.append(child.render())
        else:
            renderables.append(child)
    return renderables


STATUS_STYLES = {
    NotificationStatus.PENDING: "white on blue",
    NotificationStatus.SUCCESS: "white on green",
    NotificationStatus.ERROR: "white on red",
}


class Notification(Component):
    """Status banner: title on the left, message on the right."""

    def render(self) -> RenderableType:
        status = self.props["status"]
        style = STATUS_STYLES.get(status, "white on blue")

        banner = Table.grid(expand=True)
        banner.add_column(justify="left")
        banner.add_column(justify="right")
        banner.add_row(
            Text(self.props.get("title", ""), style="bold"),
            Text(self.props.get("message", "")),
        )
        return Panel(banner, style=style, box=box.SQUARE, padding=(0, 1))

    @classmethod
    def from_value(cls, notification: NotificationValue) -> "Notification":
        return cls(
            status=notification.status,
            title=notification.title,
            message=notification.message,
        )


class CartButton(Component):
    """Header button showing how many units are in the cart."""

    def render(self) -> RenderableType:
        text = Text("My Cart ", style="bold")
        text.append(f" {self.props.get('quantity', 0)} ", style="white on magenta")
        return text


class Layout(Component):
    """Page frame: header with the cart button, then the children."""

    def render(self) -> RenderableType:
        header = Table.grid(expand=True)
        header.add_column(justify="left")
        header.add_column(justify="right")
        header.add_row(
            Text("ReduxCart", style="bold cyan"),
            CartButton(quantity=self.props.get("cart_quantity", 0)).render(),
        )

        return Panel(
            Group(header, *_render_children(self.props.get("children", []))),
            border_style="cyan",
            box=box.ROUNDED,
            expand=True,
        )


class Cart(Component):
    """The cart panel: one row per line item."""

    def render(self) -> RenderableType:
        cart: CartState = self.props.get("cart", CartState())

        table = Table(box=box.SIMPLE, expand=True, show_edge=False)
        table.add_column("Item")
        table.add_column("Qty", justify="right")
        table.add_column("Price", justify="right")
        table.add_column("Total", justify="right")
        for item in cart.items:
            table.add_row(
                item.name,
                f"x{item.quantity}",
                f"${item.price:.2f}",
                f"${item.total_price:.2f}",
            )
        if not cart.items:
            table.add_row(Text("Your cart is empty", style="dim"), "", "", "")

        return Panel(
            table,
            title="Your Shopping Cart",
            subtitle=f"Total ${cart.total_amount:.2f}",
            border_style="magenta",
            box=box.ROUNDED,
        )


class Products(Component):
    """The shop's product list."""

    def render(self) -> RenderableType:
        products: Iterable[Product] = self.props.get("products", ())

        table = Table(box=box.SIMPLE, expand=True, show_edge=False)
        table.add_column("Id", style="dim")
        table.add_column("Product", style="bold")
        table.add_column("Price", justify="right")
        table.add_column("Description")
        for product in products:
            table.add_row(product.id, product.title, f"${product.price:.2f}", product.description)

        return Panel(
            table,
            title="Buy your favorite products",
            border_style="green",
            box=box.ROUNDED,
        )
