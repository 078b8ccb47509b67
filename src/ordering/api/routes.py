"""FastAPI routes for the Ordering domain: carts and orders."""

import json
from uuid import UUID

from fastapi import APIRouter
from protean.utils.globals import current_domain

from identity.api.dependencies import CurrentUser, ensure_owner_or_admin
from ordering.api.schemas import (
    AddToCartRequest,
    CartItemResponse,
    CartResponse,
    CreateOrderRequest,
    OrderCreatedResponse,
    OrderItemResponse,
    OrderResponse,
    OrderSummaryResponse,
    UpdateCartQuantityRequest,
)
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import ClearCart, get_cart
from ordering.order.lookup import get_order, list_customer_orders
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from shared.api import ResourceId

cart_router = APIRouter(prefix="/api/cart", tags=["cart"])
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


def _cart_response(user_id: str, cart: Cart | None) -> CartResponse:
    if cart is None:
        return CartResponse(user_id=user_id)
    return CartResponse(
        user_id=user_id,
        cart_id=str(cart.id),
        items=[
            CartItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                item_total=item.item_total,
            )
            for item in cart.items
        ],
        total=cart.total,
        item_count=cart.item_count,
        updated_at=cart.updated_at,
    )


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        order_guid=order.order_guid,
        customer_id=str(order.customer_id),
        username=order.username,
        description=order.description,
        order_date=order.order_date,
        status=order.status,
        total_amount=order.total_amount,
        items=[
            OrderItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                line_total=item.line_total,
            )
            for item in order.items
        ],
    )


# ---------------------------------------------------------------------------
# Cart endpoints
# ---------------------------------------------------------------------------
@cart_router.get("/{user_id}", response_model=CartResponse)
async def get_user_cart(user_id: ResourceId, claims: CurrentUser) -> CartResponse:
    ensure_owner_or_admin(claims, user_id)
    return _cart_response(user_id, get_cart(user_id))


@cart_router.post("/add", response_model=CartResponse)
async def add_item_to_cart(body: AddToCartRequest, claims: CurrentUser) -> CartResponse:
    ensure_owner_or_admin(claims, body.user_id)
    command = AddToCart(
        user_id=body.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(body.user_id, get_cart(body.user_id))


@cart_router.put("/update", response_model=CartResponse)
async def update_cart_item(body: UpdateCartQuantityRequest, claims: CurrentUser) -> CartResponse:
    ensure_owner_or_admin(claims, body.user_id)
    command = UpdateCartQuantity(
        user_id=body.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(body.user_id, get_cart(body.user_id))


@cart_router.delete("/{user_id}/item/{product_id}", response_model=CartResponse)
async def remove_cart_item(user_id: ResourceId, product_id: ResourceId, claims: CurrentUser) -> CartResponse:
    ensure_owner_or_admin(claims, user_id)
    current_domain.process(RemoveFromCart(user_id=user_id, product_id=product_id), asynchronous=False)
    return _cart_response(user_id, get_cart(user_id))


@cart_router.delete("/{user_id}", response_model=CartResponse)
async def clear_user_cart(user_id: ResourceId, claims: CurrentUser) -> CartResponse:
    ensure_owner_or_admin(claims, user_id)
    current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return _cart_response(user_id, get_cart(user_id))


# ---------------------------------------------------------------------------
# Order endpoints
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderCreatedResponse)
async def create_order(body: CreateOrderRequest, claims: CurrentUser) -> OrderCreatedResponse:
    if body.customer_id:
        ensure_owner_or_admin(claims, body.customer_id)

    command = PlaceOrder(
        username=body.username,
        customer_id=body.customer_id or None,
        description=body.description,
        items=json.dumps([line.model_dump() for line in body.items]),
    )
    order = get_order(current_domain.process(command, asynchronous=False))
    return OrderCreatedResponse(
        order_guid=order.order_guid,
        customer_id=str(order.customer_id),
        total_amount=order.total_amount,
        status=order.status,
        item_count=len(order.items),
    )


@order_router.get("/customer/{customer_id}", response_model=list[OrderSummaryResponse])
async def get_customer_orders(customer_id: ResourceId, claims: CurrentUser) -> list[OrderSummaryResponse]:
    ensure_owner_or_admin(claims, customer_id)
    return [
        OrderSummaryResponse(
            id=str(order.id),
            order_guid=order.order_guid,
            order_date=order.order_date,
            status=order.status,
            total_amount=order.total_amount,
            item_count=len(order.items),
        )
        for order in list_customer_orders(customer_id)
    ]


@order_router.get("/{order_guid}", response_model=OrderResponse)
async def get_order_by_guid(order_guid: UUID, claims: CurrentUser) -> OrderResponse:
    order = get_order(order_guid)
    ensure_owner_or_admin(claims, order.customer_id)
    return _order_response(order)
