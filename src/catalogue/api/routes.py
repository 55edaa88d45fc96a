"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    AddProductRequest,
    CategoryResponse,
    MarkTodayAvailableRequest,
    ProductIdResponse,
    ProductResponse,
    StatusResponse,
    UpdateProductPriceRequest,
)
from catalogue.product.creation import AddProduct
from catalogue.product.lifecycle import DeactivateProduct, MarkTodayAvailable
from catalogue.product.pricing import UpdateProductPrice
from catalogue.product.product import CATEGORIES
from catalogue.product.reader import CatalogueUnavailable, fetch_active_products, fetch_today_available

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        category=product.category,
        unit=product.unit,
        price_per_kg=product.price_per_kg,
        price_per_piece=product.price_per_piece,
        image_url=product.image_url,
        today_available=bool(product.today_available),
    )


def _process(command):
    try:
        return current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found") from None


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(category: str | None = None) -> list[ProductResponse]:
    try:
        products = fetch_active_products(category=category)
    except CatalogueUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from None
    return [_product_response(product) for product in products]


@product_router.get("/today", response_model=list[ProductResponse])
async def list_today_available() -> list[ProductResponse]:
    return [_product_response(product) for product in fetch_today_available()]


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        category=body.category,
        unit=body.unit,
        price=body.price,
        description=body.description,
        image_url=body.image_url,
        is_active=body.is_active,
    )
    result = _process(command)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def update_product_price(product_id: str, body: UpdateProductPriceRequest) -> StatusResponse:
    _process(UpdateProductPrice(product_id=product_id, unit=body.unit, price=body.price))
    return StatusResponse()


@product_router.put("/{product_id}/deactivate", response_model=StatusResponse)
async def deactivate_product(product_id: str) -> StatusResponse:
    _process(DeactivateProduct(product_id=product_id))
    return StatusResponse()


@product_router.put("/{product_id}/today-available", response_model=StatusResponse)
async def mark_today_available(product_id: str, body: MarkTodayAvailableRequest) -> StatusResponse:
    _process(MarkTodayAvailable(product_id=product_id, available=body.available))
    return StatusResponse()


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [CategoryResponse(**category) for category in CATEGORIES]
