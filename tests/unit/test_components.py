"""Unit tests for the presentational components."""

import pytest
from rich.console import Console

from cartsync import DUMMY_PRODUCTS, SENDING_NOTIFICATION, CartItem, CartState
from cartsync.components import Cart, Layout, Notification, Products


def render_text(component) -> str:
    console = Console(record=True, width=100, color_system=None)
    console.print(component)
    return console.export_text()


@pytest.mark.unit
@pytest.mark.ui
def test_notification_renders_title_and_message():
    text = render_text(Notification.from_value(SENDING_NOTIFICATION))

    assert "Sending..." in text
    assert "Sending cart data" in text


@pytest.mark.unit
@pytest.mark.ui
def test_cart_renders_lines_and_total():
    cart = CartState(
        items=(
            CartItem.from_product(DUMMY_PRODUCTS[0]).with_quantity(2),
            CartItem.from_product(DUMMY_PRODUCTS[1]),
        )
    )

    text = render_text(Cart(cart=cart))

    assert "My First Book" in text
    assert "x2" in text
    assert "$12.00" in text
    assert "Total $17.00" in text


@pytest.mark.unit
@pytest.mark.ui
def test_empty_cart_says_so():
    assert "Your cart is empty" in render_text(Cart(cart=CartState()))


@pytest.mark.unit
@pytest.mark.ui
def test_products_lists_catalog():
    text = render_text(Products(products=DUMMY_PRODUCTS))

    for product in DUMMY_PRODUCTS:
        assert product.title in text
        assert product.id in text


@pytest.mark.unit
@pytest.mark.ui
def test_layout_shows_cart_quantity_and_children():
    text = render_text(Layout(cart_quantity=3, children=[Products(products=DUMMY_PRODUCTS)]))

    assert "ReduxCart" in text
    assert "My Cart" in text
    assert " 3 " in text
    assert "My Second Book" in text


@pytest.mark.unit
@pytest.mark.ui
def test_component_call_returns_copy_with_new_props():
    original = Layout(cart_quantity=1, children=[])

    updated = original(cart_quantity=2)

    assert updated is not original
    assert updated.props == {"cart_quantity": 2, "children": []}
    assert original.props["cart_quantity"] == 1
