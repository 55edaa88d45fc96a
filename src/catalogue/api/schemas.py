"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Chicken Curry Cut",
                    "category": "chicken",
                    "unit": "kg",
                    "price": 220.0,
                    "description": "Fresh chicken cut into curry-sized pieces with bone.",
                    "image_url": "/assets/images/chicken/curry-cut.png",
                }
            ]
        }
    }

    name: str = Field(..., max_length=150)
    category: str = Field(..., max_length=50)
    unit: Literal["kg", "piece"]
    price: float
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    is_active: bool = True


class UpdateProductPriceRequest(BaseModel):
    unit: Literal["kg", "piece"]
    price: float


class MarkTodayAvailableRequest(BaseModel):
    available: bool = True


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    category: str
    unit: str
    price_per_kg: float | None = None
    price_per_piece: float | None = None
    image_url: str | None = None
    today_available: bool = False


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str
