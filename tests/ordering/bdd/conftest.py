"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from catalogue.product.product import Product
from ordering.cart.items import AddToCart
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Products created by the scenario, keyed by name."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered customer", target_fixture="customer")
def registered_customer(make_user):
    return make_user()


@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_catalogue(make_product, products, name, price, stock):
    products[name] = make_product(name=name, price=price, stock_quantity=stock)


@given(parsers.cfparse('the customer has {qty:d} of "{name}" in the cart'))
def product_in_cart(customer, products, name, qty):
    current_domain.process(
        AddToCart(user_id=customer.id, product_id=products[name].id, quantity=qty),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock_is(products, name, stock):
    assert current_domain.repository_for(Product).get_product(products[name].id).stock_quantity == stock


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None
    assert isinstance(error["exc"], ValidationError)


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None
    assert isinstance(error["exc"], ValidationError)
