"""FastAPI routes for the Catalogue domain.

Handlers touch the product store, so they are plain functions that FastAPI
runs in its threadpool.
"""

from fastapi import APIRouter, Depends, Header, Query
from protean.utils.globals import current_domain

from catalogue.api.schemas import CreateProductRequest, ProductCreatedResponse, ProductResponse
from catalogue.product.creation import CreateProduct
from catalogue.product.queries import get_product as fetch_product
from catalogue.product.queries import list_products as fetch_products
from identity.api.dependencies import require_identity
from identity.verifier.port import Identity
from services import Services, get_services

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductCreatedResponse)
def create_product(
    body: CreateProductRequest,
    identity: Identity = Depends(require_identity),
) -> ProductCreatedResponse:
    """List a new product. The caller becomes the manager unless one is given."""
    command = CreateProduct(
        name=body.name,
        description=body.description,
        category=body.category,
        image=body.image,
        price=body.price,
        quantity=body.quantity,
        manager_name=body.manager.name if body.manager else (identity.name or ""),
        manager_email=body.manager.email if body.manager else identity.email,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductCreatedResponse(inserted_id=product_id)


@product_router.get("", response_model=list[ProductResponse])
def list_products(
    manager_email: str | None = Query(default=None, alias="managerEmail"),
    authorization: str | None = Header(default=None),
    services: Services = Depends(get_services),
) -> list[ProductResponse]:
    """List every product, or a manager's own listings (authenticated)."""
    if manager_email is not None:
        require_identity(authorization=authorization, services=services)
    return [ProductResponse.from_domain(product) for product in fetch_products(manager_email=manager_email)]


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_domain(fetch_product(product_id))
