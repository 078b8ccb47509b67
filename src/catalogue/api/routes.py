"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from catalogue.api.schemas import ProductIdResponse, ProductRequest, ProductResponse
from catalogue.product.creation import AddProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.product import Product
from identity.api.dependencies import AdminUser, CurrentUser
from shared.api import ResourceId

product_router = APIRouter(prefix="/api/products", tags=["products"])


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        product_guid=product.product_guid,
        name=product.name,
        description=product.description or "",
        price=product.price,
        stock_quantity=product.stock_quantity,
        category=product.category,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


@product_router.get("", response_model=list[ProductResponse])
async def list_products(claims: CurrentUser) -> list[ProductResponse]:
    return [_product_response(product) for product in current_domain.repository_for(Product).list_products()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: ResourceId, claims: CurrentUser) -> ProductResponse:
    return _product_response(current_domain.repository_for(Product).get_product(product_id))


@product_router.post("/add", status_code=201, response_model=ProductIdResponse)
async def create_product(body: ProductRequest, claims: AdminUser) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=float(body.price),
        stock_quantity=body.stock_quantity,
        category=body.category,
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get_product(product_id)
    return ProductIdResponse(id=str(product.id), product_guid=product.product_guid)


@product_router.put("/update/{product_id}", response_model=ProductResponse)
async def modify_product(product_id: ResourceId, body: ProductRequest, claims: AdminUser) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=float(body.price),
        stock_quantity=body.stock_quantity,
        category=body.category,
    )
    current_domain.process(command, asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get_product(product_id))
