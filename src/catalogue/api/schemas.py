"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from catalogue.product.product import MAX_QUANTITY

# --- Product Request Schemas ---


class ProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Mouse",
                    "description": "Ergonomic 2.4 GHz mouse with USB receiver.",
                    "price": 24.99,
                    "stock_quantity": 150,
                    "category": "Peripherals",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=300)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(..., ge=0, le=MAX_QUANTITY)
    category: str = Field(..., min_length=1, max_length=50)


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    id: str
    product_guid: str


class ProductResponse(BaseModel):
    id: str
    product_guid: str
    name: str
    description: str
    price: float
    stock_quantity: int
    category: str
    created_at: datetime
    updated_at: datetime
