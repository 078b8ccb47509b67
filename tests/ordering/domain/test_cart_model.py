"""Tests for the Cart aggregate."""

from datetime import UTC, datetime

import pytest
from catalogue.product.product import MAX_QUANTITY
from ordering.cart.cart import Cart, CartItem
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.exceptions import InsufficientStockError

OLD = datetime(2000, 1, 1, tzinfo=UTC)
MOUSE_ID = "product-mouse"


def _cart():
    cart = Cart.create(user_id="user-1")
    cart.updated_at = OLD
    return cart


def _add_mouse(cart, quantity=1, available_stock=None):
    return cart.add_item(
        product_id=MOUSE_ID,
        product_name="Wireless Mouse",
        unit_price=24.99,
        quantity=quantity,
        available_stock=available_stock,
    )


class TestCartCreation:
    def test_new_cart_is_empty(self):
        cart = Cart.create(user_id="user-1")
        assert cart.user_id == "user-1"
        assert len(cart.items) == 0
        assert cart.total == 0
        assert cart.item_count == 0

    def test_user_id_is_required(self):
        with pytest.raises(ValidationError):
            Cart(user_id=None)


class TestAddItem:
    def test_add_new_item(self):
        cart = _cart()
        item = _add_mouse(cart, quantity=2)

        assert item.product_name == "Wireless Mouse"
        assert item.unit_price == 24.99
        assert item.item_total == 49.98
        assert cart.updated_at > OLD

    def test_adding_same_product_increments_quantity(self):
        cart = _cart()
        _add_mouse(cart, quantity=2)
        _add_mouse(cart, quantity=3)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_resulting_quantity_cannot_exceed_stock(self):
        cart = _cart()
        _add_mouse(cart, quantity=2, available_stock=3)

        with pytest.raises(InsufficientStockError) as exc:
            _add_mouse(cart, quantity=2, available_stock=3)

        assert cart.items[0].quantity == 2
        assert exc.value.messages == {
            "quantity": ["Not enough stock for product Wireless Mouse. Requested: 4, Available: 3"]
        }

    def test_quantity_must_be_positive(self):
        cart = _cart()
        with pytest.raises(ValidationError):
            _add_mouse(cart, quantity=0)

    def test_merged_quantity_cannot_leave_integer_range(self):
        cart = _cart()
        _add_mouse(cart, quantity=MAX_QUANTITY)
        with pytest.raises(ValidationError):
            _add_mouse(cart, quantity=1)

    def test_total_is_sum_of_item_totals(self):
        cart = _cart()
        _add_mouse(cart, quantity=2)
        cart.add_item(product_id="product-keyboard", product_name="Keyboard", unit_price=10.0, quantity=3)

        assert cart.total == 79.98
        assert cart.total == pytest.approx(sum(item.item_total for item in cart.items))
        assert cart.item_count == 5


class TestUpdateItemQuantity:
    def test_set_quantity(self):
        cart = _cart()
        _add_mouse(cart, quantity=2)
        cart.update_item_quantity(MOUSE_ID, 7)
        assert cart.items[0].quantity == 7

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_removes_line(self, quantity):
        cart = _cart()
        _add_mouse(cart, quantity=2)
        assert cart.update_item_quantity(MOUSE_ID, quantity) is None
        assert len(cart.items) == 0

    def test_unknown_line(self):
        cart = _cart()
        with pytest.raises(ObjectNotFoundError):
            cart.update_item_quantity("product-unknown", 1)

    def test_stock_limit_applies(self):
        cart = _cart()
        _add_mouse(cart, quantity=1)
        with pytest.raises(InsufficientStockError):
            cart.update_item_quantity(MOUSE_ID, 5, available_stock=4)


class TestRemoveAndClear:
    def test_remove_item(self):
        cart = _cart()
        _add_mouse(cart)
        cart.remove_item(MOUSE_ID)
        assert len(cart.items) == 0
        assert cart.updated_at > OLD

    def test_remove_unknown_item(self):
        cart = _cart()
        with pytest.raises(ObjectNotFoundError):
            cart.remove_item(MOUSE_ID)

    def test_clear(self):
        cart = _cart()
        _add_mouse(cart)
        cart.add_item(product_id="product-keyboard", product_name="Keyboard", unit_price=10.0, quantity=1)
        cart.clear()
        assert len(cart.items) == 0
        assert cart.total == 0


class TestCartItemInvariants:
    def test_negative_unit_price_rejected(self):
        with pytest.raises(ValidationError):
            CartItem(product_id="p-1", product_name="Mouse", quantity=1, unit_price=-1.0)

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            CartItem(product_id="p-1", product_name="Mouse", quantity=0, unit_price=1.0)

    def test_free_item_allowed(self):
        item = CartItem(product_id="p-1", product_name="Sticker", quantity=3, unit_price=0.0)
        assert item.item_total == 0
