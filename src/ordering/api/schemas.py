"""Pydantic request/response schemas for the Ordering API.

These are the external contracts; handlers take their own command models.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from catalogue.product.product import MAX_QUANTITY

# Identifiers are UUID strings
IdentifierStr = Annotated[str, Field(min_length=1, max_length=36)]


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    user_id: IdentifierStr
    product_id: IdentifierStr
    quantity: int = Field(ge=1, le=MAX_QUANTITY, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "3f0b8c9e-2a41-4d7e-9a55-0c1f6b2d8e17",
                    "product_id": "9d2c7a10-5be4-4f63-8c1e-7a4f0e93b2d5",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    """A quantity of zero or less removes the line."""

    user_id: IdentifierStr
    product_id: IdentifierStr
    quantity: int = Field(ge=-MAX_QUANTITY, le=MAX_QUANTITY)


# ---------------------------------------------------------------------------
# Cart Response Schemas
# ---------------------------------------------------------------------------
class CartItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    item_total: float


class CartResponse(BaseModel):
    user_id: str
    cart_id: str | None = None
    items: list[CartItemResponse] = []
    total: float = 0.0
    item_count: int = 0
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class OrderLineSchema(BaseModel):
    product_id: IdentifierStr
    quantity: int = Field(ge=1, le=MAX_QUANTITY)


class CreateOrderRequest(BaseModel):
    username: str = ""
    customer_id: str = Field("", max_length=36)
    description: str | None = Field(None, max_length=500)
    items: list[OrderLineSchema] = []

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "jane.doe",
                    "customer_id": "3f0b8c9e-2a41-4d7e-9a55-0c1f6b2d8e17",
                    "description": "Leave at the front desk",
                    "items": [
                        {"product_id": "9d2c7a10-5be4-4f63-8c1e-7a4f0e93b2d5", "quantity": 2},
                        {"product_id": "5e81d3b4-0c7f-4a29-b6d8-21f9a4c7e063", "quantity": 1},
                    ],
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Order Response Schemas
# ---------------------------------------------------------------------------
class OrderCreatedResponse(BaseModel):
    order_guid: str
    customer_id: str
    total_amount: float
    status: str
    item_count: int


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    line_total: float


class OrderResponse(BaseModel):
    id: str
    order_guid: str
    customer_id: str
    username: str
    description: str
    order_date: datetime
    status: str
    total_amount: float
    items: list[OrderItemResponse]


class OrderSummaryResponse(BaseModel):
    id: str
    order_guid: str
    order_date: datetime
    status: str
    total_amount: float
    item_count: int
