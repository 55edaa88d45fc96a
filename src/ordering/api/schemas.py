"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Request schemas stay permissive about business
rules so the domain can answer with its own field-keyed messages.
"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ordering.pricing.rules import PricingUnit


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    product_id: str
    name: str
    unit: Literal["kg", "piece"]
    quantity: float = Field(gt=0)
    unit_price: float = Field(ge=0)
    image_url: str = ""
    cutting_preference: str | None = None

    @model_validator(mode="after")
    def cutting_preference_only_for_pieces(self):
        if self.cutting_preference and self.unit != PricingUnit.PIECE.value:
            raise ValueError("Cutting preference applies to piece-priced products only")
        return self

    def to_line_dict(self) -> dict:
        if self.unit == PricingUnit.KG.value:
            return {
                "unit": self.unit,
                "product_id": self.product_id,
                "name": self.name,
                "kg": self.quantity,
                "price_per_kg": self.unit_price,
                "image_url": self.image_url,
            }
        return {
            "unit": self.unit,
            "product_id": self.product_id,
            "name": self.name,
            "pieces": self.quantity,
            "price_per_piece": self.unit_price,
            "image_url": self.image_url,
            "cutting_preference": self.cutting_preference,
        }


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    idempotency_token: str = Field(min_length=1, max_length=64)
    customer_name: str = ""
    mobile: str = ""
    delivery_type: str
    address: str | None = None
    delivery_slot: str | None = None
    items: list[CartLineSchema] = Field(default_factory=list)
    subtotal: float | None = None
    delivery_charge: float | None = None
    total_amount: float | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "idempotency_token": "6f1c2b9e-6f4e-4a8e-9a53-2d4cbe0f3a11",
                    "customer_name": "Asha",
                    "mobile": "9876543210",
                    "delivery_type": "delivery",
                    "address": "12 Market Road",
                    "delivery_slot": "Morning (7AM – 10AM)",
                    "items": [
                        {
                            "product_id": "prod-001",
                            "name": "Chicken Curry Cut",
                            "unit": "kg",
                            "quantity": 1.5,
                            "unit_price": 280.0,
                        }
                    ],
                    "subtotal": 420.0,
                    "delivery_charge": 0.0,
                    "total_amount": 420.0,
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(min_length=1)


class SignInRequest(BaseModel):
    email: str
    password: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class PlaceOrderResponse(BaseModel):
    order_id: str
    created: bool


class SessionResponse(BaseModel):
    token: str


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit: str
    quantity: float
    unit_price: float
    subtotal: float
    cutting_preference: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    customer_name: str
    mobile: str
    delivery_type: str
    address: str | None = None
    delivery_slot: str | None = None
    items: list[OrderItemResponse]
    subtotal: float
    delivery_charge: float
    total_amount: float
    status: str
    status_label: str
    created_at: str | None = None
    updated_at: str | None = None


class OrderConfirmationResponse(OrderResponse):
    whatsapp_url: str


class OrderDetailResponse(OrderResponse):
    allowed_statuses: list[str]


class TrackingStepResponse(BaseModel):
    status: str
    label: str
    reached: bool
    current: bool


class TrackingResponse(BaseModel):
    order: OrderResponse
    cancelled: bool
    steps: list[TrackingStepResponse]


class OrderSummaryResponse(BaseModel):
    order_id: str
    customer_name: str
    mobile: str
    delivery_type: str
    item_count: int
    total_amount: float
    status: str
    status_label: str
    created_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderSummaryResponse]
    next_cursor: str | None = None


class DashboardResponse(BaseModel):
    day: str
    total: int
    by_status: dict[str, int]
